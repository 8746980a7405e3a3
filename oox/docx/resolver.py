"""
Style Inheritance Resolver
==========================

Pure functions over a ``StyleGraph``, a ``NumberingTable`` and footnote /
endnote tables that answer "which formatting applies here?".

Precedence for a run inside a paragraph, strongest first:

    direct run properties
    direct paragraph properties
    character style (w:rStyle, else the default character style)
    paragraph style (w:pStyle, else the default paragraph style)
    document defaults (w:docDefaults)

Paragraph and character styles are combined with ``toggle_merge``, so a
toggle property (bold, italic, caps, ...) asserted by both cancels out. All
other combinations use plain override ``merge``.

Nothing here raises: unknown ids, broken ``basedOn`` links, ``basedOn``
cycles and missing tables all resolve to ``None`` or to a no-op merge.
"""

import logging
from typing import Optional

from oox.docx.document import DirectParagraphProperties, DirectRunProperties, Paragraph, Run
from oox.docx.footnotes import FootnoteTable, FootnoteType
from oox.docx.numbering import Level, NumberingTable
from oox.docx.properties import RunProperties
from oox.docx.resolvedstyle import ResolvedStyle
from oox.docx.styles import StyleGraph, StyleType

logger = logging.getLogger(__name__)


class StyleResolver:
    def __init__(
        self,
        styles: Optional[StyleGraph] = None,
        numbering: Optional[NumberingTable] = None,
        footnotes: Optional[FootnoteTable] = None,
        endnotes: Optional[FootnoteTable] = None,
    ):
        self.styles = styles
        self.numbering = numbering
        self.footnotes = footnotes
        self.endnotes = endnotes

    #########
    # Styles
    #########

    def document_defaults(self) -> Optional[ResolvedStyle]:
        if self.styles is None or self.styles.document_defaults is None:
            return None
        defaults = self.styles.document_defaults
        return ResolvedStyle.from_records(defaults.paragraph_properties, defaults.run_properties)

    def default_for(self, style_type: StyleType) -> Optional[ResolvedStyle]:
        if self.styles is None:
            return None
        style = self.styles.default_style(style_type)
        if style is None:
            return None
        return ResolvedStyle.from_style(style)

    def by_id(self, style_id: str) -> Optional[ResolvedStyle]:
        """Flatten the ``basedOn`` chain of ``style_id``; ancestors first, the style itself last."""
        if self.styles is None:
            return None
        chain = self.styles.based_on_chain(style_id)
        if not chain:
            return None

        resolved = ResolvedStyle()
        for style in reversed(chain):
            if style.paragraph_properties is not None:
                resolved = resolved.merge_paragraph(style.paragraph_properties)
            if style.run_properties is not None:
                resolved = resolved.merge_run(RunProperties.from_entries(style.run_properties))
        return resolved

    def paragraph_style(self, paragraph_properties: DirectParagraphProperties) -> Optional[ResolvedStyle]:
        style_id = paragraph_properties.style
        if style_id is None:
            return None
        return self.by_id(style_id)

    def run_style(self, run_properties: DirectRunProperties) -> Optional[ResolvedStyle]:
        style_id = run_properties.style
        if style_id is None:
            return None
        return self.by_id(style_id)

    def resolve(
        self,
        paragraph_properties: Optional[DirectParagraphProperties] = None,
        run_properties: Optional[DirectRunProperties] = None,
    ) -> Optional[ResolvedStyle]:
        """Effective formatting of a run with ``run_properties`` in a paragraph with ``paragraph_properties``."""
        paragraph_style = None
        if paragraph_properties is not None:
            paragraph_style = self.paragraph_style(paragraph_properties)
        if paragraph_style is None:
            paragraph_style = self.default_for(StyleType.PARAGRAPH)

        run_style = None
        if run_properties is not None:
            run_style = self.run_style(run_properties)
        if run_style is None:
            run_style = self.default_for(StyleType.CHARACTER)

        if paragraph_style is not None and run_style is not None:
            calculated = paragraph_style.toggle_merge(run_style)
        else:
            calculated = paragraph_style or run_style

        defaults = self.document_defaults()
        if defaults is not None and calculated is not None:
            calculated = defaults.merge(calculated)
        else:
            calculated = defaults or calculated

        if calculated is None:
            return None

        if paragraph_properties is not None:
            calculated = calculated.merge_paragraph(paragraph_properties.base)
        if run_properties is not None:
            calculated = calculated.merge_run(RunProperties.from_entries(run_properties.entries))
        return calculated

    def resolve_run(self, paragraph: Paragraph, run: Run) -> Optional[ResolvedStyle]:
        return self.resolve(paragraph.properties, run.properties)

    ############
    # Numbering
    ############

    def find_numbering_level(self, numbering_id: int, level: int) -> Optional[Level]:
        if self.numbering is None:
            return None
        return self.numbering.find_level(numbering_id, level)

    def numbering_level(self, numbering_id: int, level: int) -> Optional[ResolvedStyle]:
        """
        Standalone formatting of a numbering level.

        No inheritance is applied; callers layer the result on top of the
        paragraph's resolved style.
        """
        found = self.find_numbering_level(numbering_id, level)
        if found is None:
            return None
        return level_style(found)

    def effective_numbering_level(self, numbering_id: int, level: int) -> Optional[ResolvedStyle]:
        if self.numbering is None:
            return None
        found = self.numbering.effective_level(numbering_id, level)
        if found is None:
            return None
        return level_style(found)

    #######################
    # Footnotes / endnotes
    #######################

    def footnote_style(self, footnote_type: FootnoteType) -> Optional[ResolvedStyle]:
        return self._note_style(self.footnotes, footnote_type)

    def endnote_style(self, footnote_type: FootnoteType) -> Optional[ResolvedStyle]:
        return self._note_style(self.endnotes, footnote_type)

    def _note_style(
        self, notes: Optional[FootnoteTable], footnote_type: FootnoteType
    ) -> Optional[ResolvedStyle]:
        if notes is None:
            return None
        note = notes.first_of_type(footnote_type)
        if note is None:
            return None
        paragraph = note.first_paragraph()
        if paragraph is None:
            return None

        first_run = paragraph.first_run()
        if first_run is not None and first_run.properties is not None:
            run_properties = RunProperties.from_entries(first_run.properties.entries)
        else:
            run_properties = RunProperties()

        if paragraph.properties is None:
            return ResolvedStyle(run_properties=run_properties)

        base = self.paragraph_style(paragraph.properties) or ResolvedStyle()
        return base.merge_run(run_properties).merge_paragraph(paragraph.properties.base)


def level_style(level: Level) -> ResolvedStyle:
    return ResolvedStyle.from_records(level.paragraph_properties, level.run_properties)
