"""
PPTX Package Loader
===================

Reads a PowerPoint .pptx package into a light model: presentation slide
order and size, slide masters, slide layouts, slides with their
relationships and text, themes and media part names.

Slide order follows ``p:sldIdLst`` in ``ppt/presentation.xml``. When that
list is missing, slides are ordered by the number in ``slideN.xml``.

Text is read from DrawingML paragraphs (``a:p``): ``a:t`` of runs and
fields are concatenated, ``a:br`` becomes a vertical tab.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional
from xml.etree import ElementTree as ET

from oox.exceptions import PackageFileEncryptedError
from oox.shared.docprops import AppInfo, Core, parse_app_info, parse_core
from oox.shared.relationships import (
    SLIDE_LAYOUT_RELATION_TYPE,
    SLIDE_MASTER_RELATION_TYPE,
    THEME_RELATION_TYPE,
    Relationship,
    find_by_type,
    parse_relationships,
    rels_part_name,
    resolve_target,
)
from oox.shared.theme import Theme, parse_theme
from oox.shared.xml import A_NS, P_NS, R_NS, local_name, parse_int
from oox.util.encryption import is_ooxml_encrypted
from oox.util.zip_bomb import DEFAULT_ZIP_BOMB_LIMITS, ZipBombLimits
from oox.util.zip_context import ZipContext

logger = logging.getLogger(__name__)

PRESENTATION_PART = "ppt/presentation.xml"
SLIDE_PREFIX = "ppt/slides/"
SLIDE_LAYOUT_PREFIX = "ppt/slideLayouts/"
SLIDE_MASTER_PREFIX = "ppt/slideMasters/"
THEME_PREFIX = "ppt/theme/"
MEDIA_PREFIX = "ppt/media/"

_SLIDE_NUMBER = re.compile(r"slide(\d+)\.xml$")


@dataclass(frozen=True)
class Presentation:
    # slide part names in p:sldIdLst order
    slide_part_names: tuple[str, ...] = ()
    slide_master_part_names: tuple[str, ...] = ()
    # EMU
    slide_width: Optional[int] = None
    slide_height: Optional[int] = None
    slide_size_type: Optional[str] = None


@dataclass(frozen=True)
class SlideMaster:
    part_name: str
    relationships: tuple[Relationship, ...] = ()
    theme_part_name: Optional[str] = None
    layout_part_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class SlideLayout:
    part_name: str
    name: Optional[str] = None
    layout_type: Optional[str] = None
    relationships: tuple[Relationship, ...] = ()
    master_part_name: Optional[str] = None


@dataclass(frozen=True)
class Slide:
    part_name: str
    relationships: tuple[Relationship, ...] = ()
    layout_part_name: Optional[str] = None
    paragraphs: tuple[str, ...] = ()
    hidden: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.paragraphs)


def _paragraph_text(paragraph: ET.Element) -> str:
    texts = []
    for child in paragraph:
        tag = local_name(child.tag)
        if tag in ("r", "fld"):
            t = child.find(f"{A_NS}t")
            if t is not None and t.text:
                texts.append(t.text)
        elif tag == "br":
            texts.append("\x0b")
    return "".join(texts)


def extract_paragraphs(root: ET.Element) -> tuple[str, ...]:
    """Text of every ``a:p`` below ``root`` in document order."""
    return tuple(_paragraph_text(p) for p in root.iter(f"{A_NS}p"))


def _target_of(
    source_part: str, relationships: tuple[Relationship, ...], rel_type: str
) -> Optional[str]:
    relationship = find_by_type(relationships, rel_type)
    if relationship is None or relationship.is_external:
        return None
    return resolve_target(source_part, relationship.target)


def parse_presentation(root: ET.Element, relationships: tuple[Relationship, ...]) -> Presentation:
    targets = {
        relationship.id: resolve_target(PRESENTATION_PART, relationship.target)
        for relationship in relationships
        if not relationship.is_external
    }

    def ordered(list_tag: str, item_tag: str) -> tuple[str, ...]:
        part_names = []
        id_list = root.find(f"{P_NS}{list_tag}")
        if id_list is None:
            return ()
        for item in id_list.findall(f"{P_NS}{item_tag}"):
            target = targets.get(item.get(f"{R_NS}id"))
            if target is None:
                logger.warning(f"{item_tag} without a matching relationship ignored")
                continue
            part_names.append(target)
        return tuple(part_names)

    slide_width = slide_height = slide_size_type = None
    slide_size = root.find(f"{P_NS}sldSz")
    if slide_size is not None:
        slide_width = parse_int(slide_size.get("cx"))
        slide_height = parse_int(slide_size.get("cy"))
        slide_size_type = slide_size.get("type")

    return Presentation(
        slide_part_names=ordered("sldIdLst", "sldId"),
        slide_master_part_names=ordered("sldMasterIdLst", "sldMasterId"),
        slide_width=slide_width,
        slide_height=slide_height,
        slide_size_type=slide_size_type,
    )


def _slide_sort_key(part_name: str) -> tuple[int, str]:
    match = _SLIDE_NUMBER.search(part_name)
    return (int(match.group(1)) if match else 0, part_name)


class PptxPackage:
    def __init__(
        self,
        *,
        file_path: Optional[str] = None,
        app_info: Optional[AppInfo] = None,
        core: Optional[Core] = None,
        presentation: Optional[Presentation] = None,
        themes: Optional[dict[str, Theme]] = None,
        slide_masters: Optional[dict[str, SlideMaster]] = None,
        slide_layouts: Optional[dict[str, SlideLayout]] = None,
        slide_map: Optional[dict[str, Slide]] = None,
        medias: tuple[str, ...] = (),
    ):
        self.file_path = file_path
        self.app_info = app_info
        self.core = core
        self.presentation = presentation
        self.themes = themes or {}
        self.slide_masters = slide_masters or {}
        self.slide_layouts = slide_layouts or {}
        self.slide_map = slide_map or {}
        self.medias = medias

    def __repr__(self) -> str:
        return f"PptxPackage(file_path={self.file_path!r}, slides={len(self.slide_map)})"

    @classmethod
    def from_file(
        cls, path: str | Path, *, limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS
    ) -> "PptxPackage":
        path = Path(path)
        with open(path, "rb") as f:
            return cls.from_bytes(io.BytesIO(f.read()), str(path), limits=limits)

    @classmethod
    def from_bytes(
        cls,
        file_like: io.BytesIO,
        path: Optional[str] = None,
        *,
        limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    ) -> "PptxPackage":
        """Load a .pptx package held in memory; raises like ``DocxPackage.from_bytes``."""
        file_like.seek(0)
        if is_ooxml_encrypted(file_like):
            raise PackageFileEncryptedError("PPTX is encrypted or password-protected")

        with ZipContext(file_like, limits=limits, source=path) as ctx:

            def relationships_of(part_name: str) -> tuple[Relationship, ...]:
                root = ctx.read_optional_xml_root(rels_part_name(part_name))
                return parse_relationships(root) if root is not None else ()

            def xml_parts(prefix: str) -> list[str]:
                # direct children only; skips _rels/ and nested folders
                return [
                    name
                    for name in ctx.names_under(prefix)
                    if name.endswith(".xml") and "/" not in name[len(prefix):]
                ]

            app_root = ctx.read_optional_xml_root("docProps/app.xml")
            core_root = ctx.read_optional_xml_root("docProps/core.xml")

            presentation = None
            presentation_root = ctx.read_optional_xml_root(PRESENTATION_PART)
            if presentation_root is not None:
                presentation = parse_presentation(
                    presentation_root, relationships_of(PRESENTATION_PART)
                )

            themes = {
                name: parse_theme(ctx.read_xml_root(name)) for name in xml_parts(THEME_PREFIX)
            }

            slide_masters = {}
            for name in xml_parts(SLIDE_MASTER_PREFIX):
                relationships = relationships_of(name)
                slide_masters[name] = SlideMaster(
                    part_name=name,
                    relationships=relationships,
                    theme_part_name=_target_of(name, relationships, THEME_RELATION_TYPE),
                    layout_part_names=tuple(
                        resolve_target(name, relationship.target)
                        for relationship in relationships
                        if relationship.rel_type == SLIDE_LAYOUT_RELATION_TYPE
                    ),
                )

            slide_layouts = {}
            for name in xml_parts(SLIDE_LAYOUT_PREFIX):
                root = ctx.read_xml_root(name)
                relationships = relationships_of(name)
                common_slide_data = root.find(f"{P_NS}cSld")
                slide_layouts[name] = SlideLayout(
                    part_name=name,
                    name=common_slide_data.get("name") if common_slide_data is not None else None,
                    layout_type=root.get("type"),
                    relationships=relationships,
                    master_part_name=_target_of(name, relationships, SLIDE_MASTER_RELATION_TYPE),
                )

            slide_map = {}
            for name in xml_parts(SLIDE_PREFIX):
                root = ctx.read_xml_root(name)
                relationships = relationships_of(name)
                slide_map[name] = Slide(
                    part_name=name,
                    relationships=relationships,
                    layout_part_name=_target_of(name, relationships, SLIDE_LAYOUT_RELATION_TYPE),
                    paragraphs=extract_paragraphs(root),
                    hidden=root.get("show") in ("0", "false"),
                )

            medias = tuple(ctx.names_under(MEDIA_PREFIX))

        package = cls(
            file_path=path,
            app_info=parse_app_info(app_root) if app_root is not None else None,
            core=parse_core(core_root) if core_root is not None else None,
            presentation=presentation,
            themes=themes,
            slide_masters=slide_masters,
            slide_layouts=slide_layouts,
            slide_map=slide_map,
            medias=medias,
        )
        logger.info(
            f"Loaded PPTX: {len(slide_map)} slides, {len(slide_layouts)} layouts, {len(slide_masters)} masters"
        )
        return package

    def slide_order(self) -> list[str]:
        if self.presentation is not None and self.presentation.slide_part_names:
            return [name for name in self.presentation.slide_part_names if name in self.slide_map]
        return sorted(self.slide_map, key=_slide_sort_key)

    def slides(self) -> Iterator[Slide]:
        """Slides in presentation order."""
        for name in self.slide_order():
            yield self.slide_map[name]

    def layout_of(self, slide: Slide) -> Optional[SlideLayout]:
        if slide.layout_part_name is None:
            return None
        return self.slide_layouts.get(slide.layout_part_name)

    def master_of(self, slide: Slide) -> Optional[SlideMaster]:
        layout = self.layout_of(slide)
        if layout is None or layout.master_part_name is None:
            return None
        return self.slide_masters.get(layout.master_part_name)

    def theme_of(self, slide: Slide) -> Optional[Theme]:
        master = self.master_of(slide)
        if master is None or master.theme_part_name is None:
            return None
        return self.themes.get(master.theme_part_name)
