from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """The few ``word/settings.xml`` values that matter for formatting."""

    # twips
    default_tab_stop: Optional[int] = None
    even_and_odd_headers: Optional[bool] = None
    mirror_margins: Optional[bool] = None
    # ids of the footnotes/endnotes used as separators
    footnote_separator_ids: tuple[int, ...] = ()
    endnote_separator_ids: tuple[int, ...] = ()
    compatibility_mode: Optional[int] = None
