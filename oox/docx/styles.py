import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional

from oox.docx.properties import ParagraphProperties, RunProperty

logger = logging.getLogger(__name__)


class StyleType(Enum):
    PARAGRAPH = "paragraph"
    CHARACTER = "character"
    TABLE = "table"
    NUMBERING = "numbering"


@dataclass(frozen=True)
class Style:
    """
    One ``w:style`` definition.

    ``based_on``, ``next_style`` and ``link`` are style ids, looked up through
    the owning ``StyleGraph``; a style never holds another style directly.
    Table properties are not modelled, ``has_table_properties`` only records
    their presence.
    """

    style_id: str
    style_type: Optional[StyleType] = None
    name: Optional[str] = None
    is_default: bool = False
    based_on: Optional[str] = None
    next_style: Optional[str] = None
    link: Optional[str] = None
    aliases: Optional[str] = None
    ui_priority: Optional[int] = None
    hidden: Optional[bool] = None
    semi_hidden: Optional[bool] = None
    unhide_when_used: Optional[bool] = None
    primary_style: Optional[bool] = None
    locked: Optional[bool] = None
    custom_style: Optional[bool] = None
    paragraph_properties: Optional[ParagraphProperties] = None
    run_properties: Optional[tuple[RunProperty, ...]] = None
    has_table_properties: bool = False


@dataclass(frozen=True)
class DocumentDefaults:
    """Content of ``w:docDefaults``; either record may be absent."""

    paragraph_properties: Optional[ParagraphProperties] = None
    run_properties: Optional[tuple[RunProperty, ...]] = None


@dataclass(frozen=True)
class LatentStyleException:
    name: str
    locked: Optional[bool] = None
    ui_priority: Optional[int] = None
    semi_hidden: Optional[bool] = None
    unhide_when_used: Optional[bool] = None
    primary_style: Optional[bool] = None


@dataclass(frozen=True)
class LatentStyles:
    exceptions: tuple[LatentStyleException, ...] = field(default_factory=tuple)
    default_locked_state: Optional[bool] = None
    default_ui_priority: Optional[int] = None
    default_semi_hidden: Optional[bool] = None
    default_unhide_when_used: Optional[bool] = None
    default_primary_style: Optional[bool] = None
    count: Optional[int] = None


class StyleGraph:
    """
    All styles of a document keyed by id, plus the document defaults.

    The graph is read-only once built. Style ids are unique: when the source
    repeats an id the first definition is kept. At most one style per type is
    the default; later ``w:default`` claims of the same type are ignored.
    """

    def __init__(
        self,
        styles: Iterable[Style] = (),
        document_defaults: Optional[DocumentDefaults] = None,
        latent_styles: Optional[LatentStyles] = None,
    ):
        self._styles: dict[str, Style] = {}
        self._defaults: dict[StyleType, Style] = {}
        for style in styles:
            if style.style_id in self._styles:
                logger.warning(f"Duplicate style id [{style.style_id}] ignored")
                continue
            self._styles[style.style_id] = style
            if style.is_default and style.style_type is not None:
                if style.style_type in self._defaults:
                    logger.warning(
                        f"Style [{style.style_id}] ignored as default for type "
                        f"[{style.style_type.value}], "
                        f"[{self._defaults[style.style_type].style_id}] came first"
                    )
                else:
                    self._defaults[style.style_type] = style
        self.document_defaults = document_defaults
        self.latent_styles = latent_styles

    def __len__(self) -> int:
        return len(self._styles)

    def __iter__(self) -> Iterator[Style]:
        return iter(self._styles.values())

    def __contains__(self, style_id: object) -> bool:
        return style_id in self._styles

    def __repr__(self) -> str:
        return f"StyleGraph(styles={len(self._styles)}, document_defaults={self.document_defaults is not None})"

    def get(self, style_id: Optional[str]) -> Optional[Style]:
        if style_id is None:
            return None
        return self._styles.get(style_id)

    def default_style(self, style_type: StyleType) -> Optional[Style]:
        return self._defaults.get(style_type)

    def based_on_chain(self, style_id: str) -> list[Style]:
        """
        Return ``[style, parent, grandparent, ...]`` following ``based_on``.

        The walk stops at a style without ``based_on``, at a dangling id, or
        right before an id would repeat. Unknown ``style_id`` gives ``[]``.
        """
        chain: list[Style] = []
        visited: set[str] = set()
        current = self.get(style_id)
        while current is not None:
            chain.append(current)
            visited.add(current.style_id)
            parent_id = current.based_on
            if parent_id is None:
                break
            if parent_id in visited:
                logger.debug(
                    f"basedOn cycle detected at [{current.style_id}] -> [{parent_id}], chain truncated"
                )
                break
            current = self.get(parent_id)
        return chain
