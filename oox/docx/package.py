"""
DOCX Package Loader
===================

Reads a Word .docx package into the typed model and exposes the style
resolution queries on top of it.

Parts read
----------
    docProps/app.xml                  -> AppInfo
    docProps/core.xml                 -> Core
    word/document.xml                 -> Document
    word/_rels/document.xml.rels      -> relationships of the main document
    word/styles.xml                   -> StyleGraph
    word/settings.xml                 -> Settings
    word/footnotes.xml                -> FootnoteTable
    word/endnotes.xml                 -> FootnoteTable
    word/numbering.xml                -> NumberingTable
    word/media/*                      -> part names only
    word/theme/*                      -> Theme, keyed by file stem

Every part is optional. A part that is present but not well-formed XML
raises ``PackageXmlError``; values inside a well-formed part that cannot be
understood are logged and skipped.

Usage
-----
    >>> from oox.docx.package import DocxPackage
    >>> package = DocxPackage.from_file("report.docx")
    >>> paragraph = next(package.main_document.body.paragraphs())
    >>> style = package.resolve_style_inheritance(paragraph, paragraph.first_run())
    >>> style.run_properties.bold
"""

from __future__ import annotations

import io
import logging
import posixpath
from pathlib import Path
from typing import Optional

from oox.docx import wml
from oox.docx.document import (
    DirectParagraphProperties,
    DirectRunProperties,
    Document,
    Paragraph,
    Run,
    SectionProperties,
)
from oox.docx.footnotes import Footnote, FootnoteTable, FootnoteType
from oox.docx.numbering import Level, NumberingTable
from oox.docx.resolvedstyle import ResolvedStyle
from oox.docx.resolver import StyleResolver, level_style
from oox.docx.settings import Settings
from oox.docx.styles import StyleGraph, StyleType
from oox.exceptions import PackageFileEncryptedError
from oox.shared.docprops import AppInfo, Core, parse_app_info, parse_core
from oox.shared.relationships import (
    THEME_RELATION_TYPE,
    Relationship,
    find_by_type,
    parse_relationships,
)
from oox.shared.theme import Theme, parse_theme
from oox.util.encryption import is_ooxml_encrypted
from oox.util.zip_bomb import DEFAULT_ZIP_BOMB_LIMITS, ZipBombLimits
from oox.util.zip_context import ZipContext

logger = logging.getLogger(__name__)

MAIN_DOCUMENT_PART = "word/document.xml"
MAIN_DOCUMENT_RELS_PART = "word/_rels/document.xml.rels"
MEDIA_PREFIX = "word/media/"
THEME_PREFIX = "word/theme/"


def _stem(part_name: str) -> str:
    return posixpath.splitext(posixpath.basename(part_name))[0]


class DocxPackage:
    def __init__(
        self,
        *,
        file_path: Optional[str] = None,
        app_info: Optional[AppInfo] = None,
        core: Optional[Core] = None,
        main_document: Optional[Document] = None,
        main_document_relationships: tuple[Relationship, ...] = (),
        styles: Optional[StyleGraph] = None,
        settings: Optional[Settings] = None,
        footnotes: Optional[FootnoteTable] = None,
        endnotes: Optional[FootnoteTable] = None,
        numbering: Optional[NumberingTable] = None,
        medias: tuple[str, ...] = (),
        themes: Optional[dict[str, Theme]] = None,
    ):
        self.file_path = file_path
        self.app_info = app_info
        self.core = core
        self.main_document = main_document
        self.main_document_relationships = main_document_relationships
        self.styles = styles
        self.settings = settings
        self.footnotes = footnotes
        self.endnotes = endnotes
        self.numbering = numbering
        self.medias = medias
        self.themes = themes or {}
        self.resolver = StyleResolver(
            styles=styles, numbering=numbering, footnotes=footnotes, endnotes=endnotes
        )

    def __repr__(self) -> str:
        return f"DocxPackage(file_path={self.file_path!r}, styles={self.styles!r})"

    ##########
    # Loading
    ##########

    @classmethod
    def from_file(
        cls, path: str | Path, *, limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS
    ) -> "DocxPackage":
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
    ) -> "DocxPackage":
        """
        Load a .docx package held in memory.

        Args:
            file_like: the complete package; read from the start.
            path: optional source path, only used for messages and ``file_path``.
            limits: ZIP bomb thresholds applied before any part is read.

        Raises:
            PackageFileEncryptedError: the package is password protected.
            PackageFormatNotSupportedError: the data is not a ZIP container.
            PackageZipBombError: the container exceeds ``limits``.
            PackageXmlError: a part is not well-formed XML.
        """
        file_like.seek(0)
        if is_ooxml_encrypted(file_like):
            raise PackageFileEncryptedError("DOCX is encrypted or password-protected")

        with ZipContext(file_like, limits=limits, source=path) as ctx:
            app_root = ctx.read_optional_xml_root("docProps/app.xml")
            core_root = ctx.read_optional_xml_root("docProps/core.xml")
            document_root = ctx.read_optional_xml_root(MAIN_DOCUMENT_PART)
            rels_root = ctx.read_optional_xml_root(MAIN_DOCUMENT_RELS_PART)
            styles_root = ctx.read_optional_xml_root("word/styles.xml")
            settings_root = ctx.read_optional_xml_root("word/settings.xml")
            footnotes_root = ctx.read_optional_xml_root("word/footnotes.xml")
            endnotes_root = ctx.read_optional_xml_root("word/endnotes.xml")
            numbering_root = ctx.read_optional_xml_root("word/numbering.xml")

            themes = {}
            for part_name in ctx.names_under(THEME_PREFIX):
                if not part_name.endswith(".xml") or "/_rels/" in part_name:
                    continue
                themes[_stem(part_name)] = parse_theme(ctx.read_xml_root(part_name))

            medias = tuple(ctx.names_under(MEDIA_PREFIX))

        if document_root is None:
            logger.warning(f"Package has no {MAIN_DOCUMENT_PART} [{path}]")

        package = cls(
            file_path=path,
            app_info=parse_app_info(app_root) if app_root is not None else None,
            core=parse_core(core_root) if core_root is not None else None,
            main_document=wml.parse_document(document_root) if document_root is not None else None,
            main_document_relationships=parse_relationships(rels_root) if rels_root is not None else (),
            styles=wml.parse_styles(styles_root) if styles_root is not None else None,
            settings=wml.parse_settings(settings_root) if settings_root is not None else None,
            footnotes=wml.parse_notes(footnotes_root) if footnotes_root is not None else None,
            endnotes=wml.parse_notes(endnotes_root) if endnotes_root is not None else None,
            numbering=wml.parse_numbering(numbering_root) if numbering_root is not None else None,
            medias=medias,
            themes=themes,
        )

        style_count = len(package.styles) if package.styles is not None else 0
        logger.info(f"Loaded DOCX: {style_count} styles, {len(medias)} media parts, {len(themes)} themes")
        return package

    ####################
    # Style resolution
    ####################

    def resolve_document_default_style(self) -> Optional[ResolvedStyle]:
        return self.resolver.document_defaults()

    def resolve_default_style(self, style_type: StyleType) -> Optional[ResolvedStyle]:
        return self.resolver.default_for(style_type)

    def resolve_paragraph_style(
        self, paragraph_properties: DirectParagraphProperties
    ) -> Optional[ResolvedStyle]:
        return self.resolver.paragraph_style(paragraph_properties)

    def resolve_run_style(self, run_properties: DirectRunProperties) -> Optional[ResolvedStyle]:
        return self.resolver.run_style(run_properties)

    def resolve_style_with_id(self, style_id: str) -> Optional[ResolvedStyle]:
        return self.resolver.by_id(style_id)

    def resolve_style_inheritance(self, paragraph: Paragraph, run: Run) -> Optional[ResolvedStyle]:
        return self.resolver.resolve_run(paragraph, run)

    def resolve_footnote_style(self, footnote_type: FootnoteType) -> Optional[ResolvedStyle]:
        return self.resolver.footnote_style(footnote_type)

    def resolve_endnote_style(self, footnote_type: FootnoteType) -> Optional[ResolvedStyle]:
        return self.resolver.endnote_style(footnote_type)

    def find_numbering_level(self, numbering_id: int, level: int) -> Optional[Level]:
        return self.resolver.find_numbering_level(numbering_id, level)

    @staticmethod
    def resolve_numbering_level_style(numbering_level: Level) -> ResolvedStyle:
        return level_style(numbering_level)

    ##########
    # Lookups
    ##########

    def find_footnote_with_id(self, footnote_id: int) -> Optional[Footnote]:
        if self.footnotes is None:
            return None
        return self.footnotes.find(footnote_id)

    def find_endnote_with_id(self, endnote_id: int) -> Optional[Footnote]:
        if self.endnotes is None:
            return None
        return self.endnotes.find(endnote_id)

    def get_main_document_theme(self) -> Optional[Theme]:
        relationship = find_by_type(self.main_document_relationships, THEME_RELATION_TYPE)
        if relationship is None:
            return None
        return self.themes.get(_stem(relationship.target))

    def get_main_document_section_properties(self) -> Optional[SectionProperties]:
        if self.main_document is None or self.main_document.body is None:
            return None
        return self.main_document.body.section_properties
