from dataclasses import dataclass
from typing import Optional

from oox.docx.properties import ParagraphProperties, RunProperty

MIN_LEVEL = 0
MAX_LEVEL = 8


@dataclass(frozen=True)
class Level:
    """A ``w:lvl`` entry; ``level`` is its index within the abstract numbering."""

    level: int
    start: Optional[int] = None
    number_format: Optional[str] = None
    level_restart: Optional[int] = None
    paragraph_style: Optional[str] = None
    is_legal: Optional[bool] = None
    suffix: Optional[str] = None
    level_text: Optional[str] = None
    picture_bullet_id: Optional[int] = None
    alignment: Optional[str] = None
    template_code: Optional[int] = None
    tentative: Optional[bool] = None
    paragraph_properties: Optional[ParagraphProperties] = None
    run_properties: Optional[tuple[RunProperty, ...]] = None


@dataclass(frozen=True)
class AbstractNumbering:
    abstract_numbering_id: int
    levels: tuple[Level, ...] = ()
    name: Optional[str] = None
    multi_level_type: Optional[str] = None
    style_link: Optional[str] = None
    numbering_style_link: Optional[str] = None

    def find_level(self, level: int) -> Optional[Level]:
        for candidate in self.levels:
            if candidate.level == level:
                return candidate
        return None


@dataclass(frozen=True)
class LevelOverride:
    level: int
    start_override: Optional[int] = None
    # a complete replacement level, when w:lvlOverride carries its own w:lvl
    override_level: Optional[Level] = None


@dataclass(frozen=True)
class NumberingInstance:
    numbering_id: int
    abstract_numbering_id: int
    level_overrides: tuple[LevelOverride, ...] = ()

    def find_override(self, level: int) -> Optional[LevelOverride]:
        for override in self.level_overrides:
            if override.level == level:
                return override
        return None


@dataclass(frozen=True)
class NumberingTable:
    instances: tuple[NumberingInstance, ...] = ()
    abstract_numberings: tuple[AbstractNumbering, ...] = ()
    picture_bullet_ids: tuple[int, ...] = ()

    def find_instance(self, numbering_id: int) -> Optional[NumberingInstance]:
        for instance in self.instances:
            if instance.numbering_id == numbering_id:
                return instance
        return None

    def find_abstract(self, abstract_numbering_id: int) -> Optional[AbstractNumbering]:
        for abstract in self.abstract_numberings:
            if abstract.abstract_numbering_id == abstract_numbering_id:
                return abstract
        return None

    def find_level(self, numbering_id: int, level: int) -> Optional[Level]:
        """
        Return level ``level`` of the abstract numbering behind ``numbering_id``.

        Levels outside 0..8 and any broken link (unknown numbering id, unknown
        abstract numbering, missing level) give ``None``.
        """
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            return None
        instance = self.find_instance(numbering_id)
        if instance is None:
            return None
        abstract = self.find_abstract(instance.abstract_numbering_id)
        if abstract is None:
            return None
        return abstract.find_level(level)

    def effective_level(self, numbering_id: int, level: int) -> Optional[Level]:
        """Like ``find_level`` but a ``w:lvlOverride`` holding its own ``w:lvl`` wins."""
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            return None
        instance = self.find_instance(numbering_id)
        if instance is None:
            return None
        override = instance.find_override(level)
        if override is not None and override.override_level is not None:
            return override.override_level
        return self.find_level(numbering_id, level)
