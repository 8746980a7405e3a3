"""
Block-level WordprocessingML AST.

Only the parts needed to answer style questions and to read text are
modelled: paragraphs, runs, hyperlinks, tables and section properties.
Everything is immutable; the deserializer in ``oox.docx.wml`` builds it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

from oox.docx.properties import ParagraphProperties, RunProperty, RunPropertyKind


@dataclass(frozen=True)
class SectionProperties:
    # twips
    page_width: Optional[int] = None
    page_height: Optional[int] = None
    orientation: Optional[str] = None
    margin_top: Optional[int] = None
    margin_bottom: Optional[int] = None
    margin_left: Optional[int] = None
    margin_right: Optional[int] = None
    margin_header: Optional[int] = None
    margin_footer: Optional[int] = None
    margin_gutter: Optional[int] = None
    column_count: Optional[int] = None


@dataclass(frozen=True)
class DirectParagraphProperties:
    """
    A ``w:pPr`` element.

    ``base.style`` is the paragraph style reference. ``mark_run_properties``
    is the paragraph mark's ``w:rPr``; it formats the pilcrow only and never
    takes part in run resolution.
    """

    base: ParagraphProperties = field(default_factory=ParagraphProperties)
    mark_run_properties: tuple[RunProperty, ...] = ()
    section_properties: Optional[SectionProperties] = None

    @property
    def style(self) -> Optional[str]:
        return self.base.style


@dataclass(frozen=True)
class DirectRunProperties:
    """A ``w:rPr`` element as an ordered list of tagged entries."""

    entries: tuple[RunProperty, ...] = ()

    @property
    def style(self) -> Optional[str]:
        for entry in self.entries:
            if entry.kind is RunPropertyKind.RUN_STYLE:
                return entry.value
        return None


class RunContentKind(Enum):
    TEXT = "t"
    DELETED_TEXT = "delText"
    FIELD_CODE = "instrText"
    TAB = "tab"
    BREAK = "br"
    CARRIAGE_RETURN = "cr"
    NO_BREAK_HYPHEN = "noBreakHyphen"
    SOFT_HYPHEN = "softHyphen"
    SYMBOL = "sym"
    SEPARATOR = "separator"
    CONTINUATION_SEPARATOR = "continuationSeparator"
    FOOTNOTE_REFERENCE = "footnoteReference"
    ENDNOTE_REFERENCE = "endnoteReference"
    FOOTNOTE_REF = "footnoteRef"
    ENDNOTE_REF = "endnoteRef"
    DRAWING = "drawing"
    PICTURE = "pict"
    LAST_RENDERED_PAGE_BREAK = "lastRenderedPageBreak"


@dataclass(frozen=True)
class RunContent:
    kind: RunContentKind
    text: Optional[str] = None
    # note id for footnote/endnote references
    reference_id: Optional[int] = None


@dataclass(frozen=True)
class Run:
    properties: Optional[DirectRunProperties] = None
    contents: tuple[RunContent, ...] = ()

    @property
    def text(self) -> str:
        parts = []
        for content in self.contents:
            if content.kind is RunContentKind.TEXT:
                parts.append(content.text or "")
            elif content.kind is RunContentKind.TAB:
                parts.append("\t")
            elif content.kind in (RunContentKind.BREAK, RunContentKind.CARRIAGE_RETURN):
                parts.append("\n")
            elif content.kind is RunContentKind.NO_BREAK_HYPHEN:
                parts.append("-")
        return "".join(parts)


@dataclass(frozen=True)
class Hyperlink:
    relationship_id: Optional[str] = None
    anchor: Optional[str] = None
    runs: tuple[Run, ...] = ()


ParagraphContent = Union[Run, Hyperlink]


@dataclass(frozen=True)
class Paragraph:
    properties: Optional[DirectParagraphProperties] = None
    contents: tuple[ParagraphContent, ...] = ()

    def first_run(self) -> Optional[Run]:
        """First run placed directly in the paragraph (hyperlinks skipped)."""
        for content in self.contents:
            if isinstance(content, Run):
                return content
        return None

    def runs(self) -> Iterator[Run]:
        for content in self.contents:
            if isinstance(content, Run):
                yield content
            else:
                yield from content.runs

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs())


@dataclass(frozen=True)
class TableCell:
    blocks: tuple["Block", ...] = ()


@dataclass(frozen=True)
class TableRow:
    cells: tuple[TableCell, ...] = ()


@dataclass(frozen=True)
class Table:
    style: Optional[str] = None
    rows: tuple[TableRow, ...] = ()


Block = Union[Paragraph, Table]


def iter_paragraphs(blocks: tuple[Block, ...]) -> Iterator[Paragraph]:
    """Yield paragraphs in document order, descending into table cells."""
    for block in blocks:
        if isinstance(block, Paragraph):
            yield block
        else:
            for row in block.rows:
                for cell in row.cells:
                    yield from iter_paragraphs(cell.blocks)


@dataclass(frozen=True)
class Body:
    blocks: tuple[Block, ...] = ()
    section_properties: Optional[SectionProperties] = None

    def paragraphs(self) -> Iterator[Paragraph]:
        return iter_paragraphs(self.blocks)


@dataclass(frozen=True)
class Document:
    body: Optional[Body] = None
