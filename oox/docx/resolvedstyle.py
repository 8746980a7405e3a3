from dataclasses import dataclass, field
from typing import Iterable, Optional

from oox.docx.properties import ParagraphProperties, RunProperties, RunProperty
from oox.docx.styles import Style


@dataclass(frozen=True)
class ResolvedStyle:
    """Effective paragraph and run formatting produced by the resolver."""

    paragraph_properties: ParagraphProperties = field(default_factory=ParagraphProperties)
    run_properties: RunProperties = field(default_factory=RunProperties)

    @classmethod
    def from_records(
        cls,
        paragraph_properties: Optional[ParagraphProperties] = None,
        run_properties: Optional[Iterable[RunProperty]] = None,
    ) -> "ResolvedStyle":
        """Build from a paragraph record and an ordered run-property list."""
        return cls(
            paragraph_properties=paragraph_properties or ParagraphProperties(),
            run_properties=RunProperties.from_entries(run_properties or ()),
        )

    @classmethod
    def from_style(cls, style: Style) -> "ResolvedStyle":
        """The style's own records, without following ``based_on``."""
        return cls.from_records(style.paragraph_properties, style.run_properties)

    def merge(self, other: "ResolvedStyle") -> "ResolvedStyle":
        return ResolvedStyle(
            paragraph_properties=self.paragraph_properties.merge(other.paragraph_properties),
            run_properties=self.run_properties.merge(other.run_properties),
        )

    def toggle_merge(self, other: "ResolvedStyle") -> "ResolvedStyle":
        """Merge a style from another level on top; run toggles XOR."""
        return ResolvedStyle(
            paragraph_properties=self.paragraph_properties.toggle_merge(other.paragraph_properties),
            run_properties=self.run_properties.toggle_merge(other.run_properties),
        )

    def merge_paragraph(self, paragraph_properties: ParagraphProperties) -> "ResolvedStyle":
        return ResolvedStyle(
            paragraph_properties=self.paragraph_properties.merge(paragraph_properties),
            run_properties=self.run_properties,
        )

    def merge_run(self, run_properties: RunProperties) -> "ResolvedStyle":
        return ResolvedStyle(
            paragraph_properties=self.paragraph_properties,
            run_properties=self.run_properties.merge(run_properties),
        )
