"""
Paragraph and Run Property Records
==================================

Flat, immutable records for WordprocessingML paragraph (``w:pPr``) and run
(``w:rPr``) formatting. Every field is optional: ``None`` means "not specified
at this level" and lets a lower level show through when records are merged.

Two merge operators are defined:

merge(base, overlay)
    Override semantics. A field set on the overlay wins. Fields holding a
    ``PropertyRecord`` (fonts, color, underline, borders, shading, spacing,
    indentation, ...) are merged field by field so that an overlay which only
    sets ``fonts.complex_script`` keeps ``fonts.ascii`` from the base.

toggle_merge(base, overlay)
    Used between style levels (paragraph style -> character style). Identical
    to ``merge`` except for the toggle family of run properties listed in
    ``TOGGLE_PROPERTIES``: when both sides specify a toggle the result is
    ``base XOR overlay``, so bold applied by both styles cancels out.

``strikethrough`` and ``double_strikethrough`` are mutually exclusive: the one
specified later (the overlay, or the later entry of an ordered list) clears
the other.

Usage
-----
    >>> base = RunProperties(bold=True, italic=True)
    >>> base.merge(RunProperties(italic=False))
    RunProperties(..., bold=True, ..., italic=False, ...)
    >>> base.toggle_merge(RunProperties(bold=True)).bold
    False
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Iterable, Optional


class PropertyRecord:
    """Base for records whose fields merge individually instead of wholesale."""

    __slots__ = ()

    def merge(self, other):
        return _merge_records(self, other)

    def is_empty(self) -> bool:
        return all(getattr(self, item.name) is None for item in fields(self))


def _merge_value(base: Any, overlay: Any) -> Any:
    if overlay is None:
        return base
    if (
        base is not None
        and isinstance(overlay, PropertyRecord)
        and type(base) is type(overlay)
    ):
        return base.merge(overlay)
    return overlay


def _merge_records(base, overlay):
    values = {
        item.name: _merge_value(getattr(base, item.name), getattr(overlay, item.name))
        for item in fields(base)
    }
    return type(base)(**values)


def _toggle(lhs: Optional[bool], rhs: Optional[bool]) -> Optional[bool]:
    if lhs is not None and rhs is not None:
        return lhs != rhs
    return rhs if rhs is not None else lhs


###############
# Enumerations
###############


class Justification(Enum):
    START = "start"
    CENTER = "center"
    END = "end"
    BOTH = "both"
    MEDIUM_KASHIDA = "mediumKashida"
    DISTRIBUTE = "distribute"
    NUM_TAB = "numTab"
    HIGH_KASHIDA = "highKashida"
    LOW_KASHIDA = "lowKashida"
    THAI_DISTRIBUTE = "thaiDistribute"
    LEFT = "left"
    RIGHT = "right"


class TextAlignment(Enum):
    """Vertical alignment of characters on a line (``w:textAlignment``)."""

    TOP = "top"
    CENTER = "center"
    BASELINE = "baseline"
    BOTTOM = "bottom"
    AUTO = "auto"


class LineSpacingRule(Enum):
    AUTO = "auto"
    EXACT = "exact"
    AT_LEAST = "atLeast"


class UnderlineType(Enum):
    SINGLE = "single"
    WORDS = "words"
    DOUBLE = "double"
    THICK = "thick"
    DOTTED = "dotted"
    DOTTED_HEAVY = "dottedHeavy"
    DASH = "dash"
    DASHED_HEAVY = "dashedHeavy"
    DASH_LONG = "dashLong"
    DASH_LONG_HEAVY = "dashLongHeavy"
    DOT_DASH = "dotDash"
    DASH_DOT_HEAVY = "dashDotHeavy"
    DOT_DOT_DASH = "dotDotDash"
    DASH_DOT_DOT_HEAVY = "dashDotDotHeavy"
    WAVE = "wave"
    WAVY_HEAVY = "wavyHeavy"
    WAVY_DOUBLE = "wavyDouble"
    NONE = "none"


class VerticalAlignRun(Enum):
    BASELINE = "baseline"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"


class HighlightColor(Enum):
    BLACK = "black"
    BLUE = "blue"
    CYAN = "cyan"
    GREEN = "green"
    MAGENTA = "magenta"
    RED = "red"
    YELLOW = "yellow"
    WHITE = "white"
    DARK_BLUE = "darkBlue"
    DARK_CYAN = "darkCyan"
    DARK_GREEN = "darkGreen"
    DARK_MAGENTA = "darkMagenta"
    DARK_RED = "darkRed"
    DARK_YELLOW = "darkYellow"
    DARK_GRAY = "darkGray"
    LIGHT_GRAY = "lightGray"
    NONE = "none"


class EmphasisMark(Enum):
    NONE = "none"
    DOT = "dot"
    COMMA = "comma"
    CIRCLE = "circle"
    UNDER_DOT = "underDot"


class TextEffect(Enum):
    BLINK_BACKGROUND = "blinkBackground"
    LIGHTS = "lights"
    ANTS_BLACK = "antsBlack"
    ANTS_RED = "antsRed"
    SHIMMER = "shimmer"
    SPARKLE = "sparkle"
    NONE = "none"


class TabJustification(Enum):
    CLEAR = "clear"
    START = "start"
    CENTER = "center"
    END = "end"
    DECIMAL = "decimal"
    BAR = "bar"
    NUM = "num"
    LEFT = "left"
    RIGHT = "right"


class TabLeader(Enum):
    NONE = "none"
    DOT = "dot"
    HYPHEN = "hyphen"
    UNDERSCORE = "underscore"
    HEAVY = "heavy"
    MIDDLE_DOT = "middleDot"


class TextDirection(Enum):
    LEFT_TO_RIGHT_TOP_TO_BOTTOM = "lrTb"
    TOP_TO_BOTTOM_RIGHT_TO_LEFT = "tbRl"
    BOTTOM_TO_TOP_LEFT_TO_RIGHT = "btLr"
    LEFT_TO_RIGHT_TOP_TO_BOTTOM_ROTATED = "lrTbV"
    TOP_TO_BOTTOM_RIGHT_TO_LEFT_ROTATED = "tbRlV"
    TOP_TO_BOTTOM_LEFT_TO_RIGHT_ROTATED = "tbLrV"
    TOP_TO_BOTTOM = "tb"
    RIGHT_TO_LEFT = "rl"
    LEFT_TO_RIGHT = "lr"


#####################
# Shared sub-records
#####################


@dataclass(frozen=True)
class Fonts(PropertyRecord):
    hint: Optional[str] = None
    ascii: Optional[str] = None
    high_ansi: Optional[str] = None
    east_asian: Optional[str] = None
    complex_script: Optional[str] = None
    ascii_theme: Optional[str] = None
    high_ansi_theme: Optional[str] = None
    east_asian_theme: Optional[str] = None
    complex_script_theme: Optional[str] = None


@dataclass(frozen=True)
class Color(PropertyRecord):
    # "auto" or a RRGGBB hex string
    value: Optional[str] = None
    theme_color: Optional[str] = None
    theme_tint: Optional[str] = None
    theme_shade: Optional[str] = None


@dataclass(frozen=True)
class Underline(PropertyRecord):
    value: Optional[UnderlineType] = None
    color: Optional[str] = None
    theme_color: Optional[str] = None
    theme_tint: Optional[str] = None
    theme_shade: Optional[str] = None


@dataclass(frozen=True)
class Border(PropertyRecord):
    # ST_Border token, e.g. "single", "double", "nil"
    value: Optional[str] = None
    color: Optional[str] = None
    theme_color: Optional[str] = None
    theme_tint: Optional[str] = None
    theme_shade: Optional[str] = None
    # eighths of a point
    size: Optional[int] = None
    # points
    spacing: Optional[int] = None
    shadow: Optional[bool] = None
    frame: Optional[bool] = None


@dataclass(frozen=True)
class Shading(PropertyRecord):
    # ST_Shd pattern token, e.g. "clear", "solid", "pct25"
    value: Optional[str] = None
    color: Optional[str] = None
    theme_color: Optional[str] = None
    theme_tint: Optional[str] = None
    theme_shade: Optional[str] = None
    fill: Optional[str] = None
    theme_fill: Optional[str] = None
    theme_fill_tint: Optional[str] = None
    theme_fill_shade: Optional[str] = None


@dataclass(frozen=True)
class Language(PropertyRecord):
    value: Optional[str] = None
    east_asian: Optional[str] = None
    bidirectional: Optional[str] = None


@dataclass(frozen=True)
class EastAsianLayout(PropertyRecord):
    id: Optional[int] = None
    combine: Optional[bool] = None
    combine_brackets: Optional[str] = None
    vertical: Optional[bool] = None
    vertical_compress: Optional[bool] = None


@dataclass(frozen=True)
class FitText:
    # twips
    value: int
    id: Optional[int] = None


#################################
# Paragraph specific sub-records
#################################


@dataclass(frozen=True)
class Spacing(PropertyRecord):
    """Paragraph spacing, all distances in twips."""

    before: Optional[int] = None
    before_lines: Optional[int] = None
    before_autospacing: Optional[bool] = None
    after: Optional[int] = None
    after_lines: Optional[int] = None
    after_autospacing: Optional[bool] = None
    line: Optional[int] = None
    line_rule: Optional[LineSpacingRule] = None


@dataclass(frozen=True)
class Indentation(PropertyRecord):
    """Paragraph indentation in twips (``*_chars`` in hundredths of a character)."""

    start: Optional[int] = None
    start_chars: Optional[int] = None
    end: Optional[int] = None
    end_chars: Optional[int] = None
    hanging: Optional[int] = None
    hanging_chars: Optional[int] = None
    first_line: Optional[int] = None
    first_line_chars: Optional[int] = None


@dataclass(frozen=True)
class ParagraphBorders(PropertyRecord):
    top: Optional[Border] = None
    start: Optional[Border] = None
    bottom: Optional[Border] = None
    end: Optional[Border] = None
    between: Optional[Border] = None
    bar: Optional[Border] = None


@dataclass(frozen=True)
class NumberingProperty(PropertyRecord):
    level: Optional[int] = None
    numbering_id: Optional[int] = None


@dataclass(frozen=True)
class FrameProperties(PropertyRecord):
    drop_cap: Optional[str] = None
    lines: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    vertical_space: Optional[int] = None
    horizontal_space: Optional[int] = None
    wrap: Optional[str] = None
    horizontal_anchor: Optional[str] = None
    vertical_anchor: Optional[str] = None
    x: Optional[int] = None
    x_align: Optional[str] = None
    y: Optional[int] = None
    y_align: Optional[str] = None
    height_rule: Optional[str] = None
    anchor_lock: Optional[bool] = None


@dataclass(frozen=True)
class TabStop:
    value: TabJustification
    position: int
    leader: Optional[TabLeader] = None


########################
# Paragraph properties
########################


@dataclass(frozen=True)
class ParagraphProperties(PropertyRecord):
    style: Optional[str] = None
    keep_with_next: Optional[bool] = None
    keep_lines_on_one_page: Optional[bool] = None
    start_on_next_page: Optional[bool] = None
    frame_properties: Optional[FrameProperties] = None
    widow_control: Optional[bool] = None
    numbering_properties: Optional[NumberingProperty] = None
    suppress_line_numbers: Optional[bool] = None
    borders: Optional[ParagraphBorders] = None
    shading: Optional[Shading] = None
    tabs: Optional[tuple[TabStop, ...]] = None
    suppress_auto_hyphens: Optional[bool] = None
    kinsoku: Optional[bool] = None
    word_wrapping: Optional[bool] = None
    overflow_punctuations: Optional[bool] = None
    top_line_punctuations: Optional[bool] = None
    auto_space_latin_and_east_asian: Optional[bool] = None
    auto_space_east_asian_and_numbers: Optional[bool] = None
    bidirectional: Optional[bool] = None
    adjust_right_indent: Optional[bool] = None
    snap_to_grid: Optional[bool] = None
    spacing: Optional[Spacing] = None
    indent: Optional[Indentation] = None
    contextual_spacing: Optional[bool] = None
    mirror_indents: Optional[bool] = None
    suppress_overlapping: Optional[bool] = None
    alignment: Optional[Justification] = None
    text_direction: Optional[TextDirection] = None
    text_alignment: Optional[TextAlignment] = None
    textbox_tight_wrap: Optional[str] = None
    outline_level: Optional[int] = None
    div_id: Optional[int] = None
    conditional_formatting: Optional[str] = None

    def toggle_merge(self, other: "ParagraphProperties") -> "ParagraphProperties":
        # paragraph properties have no toggle fields
        return self.merge(other)


##################
# Run properties
##################


TOGGLE_PROPERTIES = frozenset(
    {
        "bold",
        "complex_script_bold",
        "italic",
        "complex_script_italic",
        "all_capitals",
        "all_small_capitals",
        "strikethrough",
        "double_strikethrough",
        "outline",
        "shadow",
        "emboss",
        "imprint",
        "no_proofing",
        "snap_to_grid",
        "vanish",
        "web_hidden",
        "rtl",
        "complex_script",
        "special_vanish",
        "o_math",
    }
)


class RunPropertyKind(Enum):
    """Tag of a direct run-property entry; the value names the target field."""

    RUN_STYLE = "style"
    RUN_FONTS = "fonts"
    BOLD = "bold"
    COMPLEX_SCRIPT_BOLD = "complex_script_bold"
    ITALIC = "italic"
    COMPLEX_SCRIPT_ITALIC = "complex_script_italic"
    CAPITALS = "all_capitals"
    SMALL_CAPITALS = "all_small_capitals"
    STRIKETHROUGH = "strikethrough"
    DOUBLE_STRIKETHROUGH = "double_strikethrough"
    OUTLINE = "outline"
    SHADOW = "shadow"
    EMBOSS = "emboss"
    IMPRINT = "imprint"
    NO_PROOFING = "no_proofing"
    SNAP_TO_GRID = "snap_to_grid"
    VANISH = "vanish"
    WEB_HIDDEN = "web_hidden"
    COLOR = "color"
    SPACING = "spacing"
    WIDTH = "width"
    KERNING = "kerning"
    POSITION = "position"
    FONT_SIZE = "font_size"
    COMPLEX_SCRIPT_FONT_SIZE = "complex_script_font_size"
    HIGHLIGHT = "highlight"
    UNDERLINE = "underline"
    EFFECT = "effect"
    BORDER = "border"
    SHADING = "shading"
    FIT_TEXT = "fit_text"
    VERTICAL_ALIGNMENT = "vertical_alignment"
    RTL = "rtl"
    COMPLEX_SCRIPT = "complex_script"
    EMPHASIS_MARK = "emphasis_mark"
    LANGUAGE = "language"
    EAST_ASIAN_LAYOUT = "east_asian_layout"
    SPECIAL_VANISH = "special_vanish"
    O_MATH = "o_math"


@dataclass(frozen=True)
class RunProperty:
    """One entry of an ordered ``w:rPr`` list, e.g. ``RunProperty(RunPropertyKind.BOLD, True)``."""

    kind: RunPropertyKind
    value: Any


_STRIKE_PAIR = {
    "strikethrough": "double_strikethrough",
    "double_strikethrough": "strikethrough",
}


@dataclass(frozen=True)
class RunProperties(PropertyRecord):
    style: Optional[str] = None
    fonts: Optional[Fonts] = None
    bold: Optional[bool] = None
    complex_script_bold: Optional[bool] = None
    italic: Optional[bool] = None
    complex_script_italic: Optional[bool] = None
    all_capitals: Optional[bool] = None
    all_small_capitals: Optional[bool] = None
    strikethrough: Optional[bool] = None
    double_strikethrough: Optional[bool] = None
    outline: Optional[bool] = None
    shadow: Optional[bool] = None
    emboss: Optional[bool] = None
    imprint: Optional[bool] = None
    no_proofing: Optional[bool] = None
    snap_to_grid: Optional[bool] = None
    vanish: Optional[bool] = None
    web_hidden: Optional[bool] = None
    color: Optional[Color] = None
    # twips
    spacing: Optional[int] = None
    # percent
    width: Optional[float] = None
    # half-points
    kerning: Optional[int] = None
    position: Optional[int] = None
    font_size: Optional[int] = None
    complex_script_font_size: Optional[int] = None
    highlight: Optional[HighlightColor] = None
    underline: Optional[Underline] = None
    effect: Optional[TextEffect] = None
    border: Optional[Border] = None
    shading: Optional[Shading] = None
    fit_text: Optional[FitText] = None
    vertical_alignment: Optional[VerticalAlignRun] = None
    rtl: Optional[bool] = None
    complex_script: Optional[bool] = None
    emphasis_mark: Optional[EmphasisMark] = None
    language: Optional[Language] = None
    east_asian_layout: Optional[EastAsianLayout] = None
    special_vanish: Optional[bool] = None
    o_math: Optional[bool] = None

    @classmethod
    def from_entries(cls, entries: Iterable[RunProperty]) -> "RunProperties":
        """Fold an ordered list of run-property entries; later entries win."""
        values: dict[str, Any] = {}
        for entry in entries:
            name = entry.kind.value
            values[name] = entry.value
            if name in _STRIKE_PAIR:
                values.pop(_STRIKE_PAIR[name], None)
        return cls(**values)

    def merge(self, other: "RunProperties") -> "RunProperties":
        return _exclude_strike_pair(_merge_records(self, other), other)

    def toggle_merge(self, other: "RunProperties") -> "RunProperties":
        merged = _merge_records(self, other)
        toggled = {
            name: _toggle(getattr(self, name), getattr(other, name))
            for name in TOGGLE_PROPERTIES
        }
        return _exclude_strike_pair(replace(merged, **toggled), other)


def _exclude_strike_pair(result: RunProperties, overlay: RunProperties) -> RunProperties:
    if overlay.strikethrough is not None and overlay.double_strikethrough is not None:
        # an overlay carrying both keeps the double strike
        return replace(result, strikethrough=None)
    if overlay.strikethrough is not None and overlay.double_strikethrough is None:
        return replace(result, double_strikethrough=None)
    if overlay.double_strikethrough is not None and overlay.strikethrough is None:
        return replace(result, strikethrough=None)
    return result
