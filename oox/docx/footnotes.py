from dataclasses import dataclass
from enum import Enum
from typing import Optional

from oox.docx.document import Block, Paragraph


class FootnoteType(Enum):
    NORMAL = "normal"
    SEPARATOR = "separator"
    CONTINUATION_SEPARATOR = "continuationSeparator"
    CONTINUATION_NOTICE = "continuationNotice"


@dataclass(frozen=True)
class Footnote:
    """A ``w:footnote`` or ``w:endnote``; ``note_type`` is ``None`` for plain notes without ``w:type``."""

    id: int
    note_type: Optional[FootnoteType] = None
    blocks: tuple[Block, ...] = ()

    def first_paragraph(self) -> Optional[Paragraph]:
        for block in self.blocks:
            if isinstance(block, Paragraph):
                return block
        return None


@dataclass(frozen=True)
class FootnoteTable:
    """Footnotes (or endnotes) of a document in source order."""

    notes: tuple[Footnote, ...] = ()

    def __len__(self) -> int:
        return len(self.notes)

    def find(self, note_id: int) -> Optional[Footnote]:
        for note in self.notes:
            if note.id == note_id:
                return note
        return None

    def first_of_type(self, note_type: FootnoteType) -> Optional[Footnote]:
        for note in self.notes:
            if note.note_type is note_type:
                return note
        return None
