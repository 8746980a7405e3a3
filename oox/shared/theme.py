"""
DrawingML theme parts (``word/theme/theme1.xml``, ``ppt/theme/theme1.xml``).

Only the colour scheme and the major/minor font collections are read; these
are what ``w:themeColor`` and ``w:asciiTheme`` style attributes point at.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional
from xml.etree import ElementTree as ET

from oox.shared.xml import A_NS, local_name

logger = logging.getLogger(__name__)

# order used by a:clrScheme
COLOR_SCHEME_SLOTS = (
    "dk1",
    "lt1",
    "dk2",
    "lt2",
    "accent1",
    "accent2",
    "accent3",
    "accent4",
    "accent5",
    "accent6",
    "hlink",
    "folHlink",
)


@dataclass(frozen=True)
class ThemeColor:
    """``a:srgbClr`` or ``a:sysClr``; ``value`` is the RGB hex string."""

    kind: str
    value: Optional[str] = None
    # system colour name for a:sysClr, e.g. "windowText"
    system_name: Optional[str] = None


@dataclass(frozen=True)
class FontCollection:
    latin: Optional[str] = None
    east_asian: Optional[str] = None
    complex_script: Optional[str] = None
    # script tag -> typeface, from a:font children
    supplemental: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Theme:
    name: Optional[str] = None
    color_scheme_name: Optional[str] = None
    colors: dict[str, ThemeColor] = field(default_factory=dict)
    font_scheme_name: Optional[str] = None
    major_fonts: Optional[FontCollection] = None
    minor_fonts: Optional[FontCollection] = None

    def color(self, slot: str) -> Optional[ThemeColor]:
        return self.colors.get(slot)


def _parse_color(element: ET.Element) -> Optional[ThemeColor]:
    for child in element:
        name = local_name(child.tag)
        if name == "srgbClr":
            return ThemeColor(kind=name, value=child.get("val"))
        if name == "sysClr":
            return ThemeColor(kind=name, value=child.get("lastClr"), system_name=child.get("val"))
        if name in ("schemeClr", "prstClr", "scrgbClr", "hslClr"):
            return ThemeColor(kind=name, value=child.get("val"))
    logger.warning(f"Theme colour [{local_name(element.tag)}] without a colour definition ignored")
    return None


def _parse_font_collection(element: Optional[ET.Element]) -> Optional[FontCollection]:
    if element is None:
        return None

    def typeface(tag: str) -> Optional[str]:
        child = element.find(f"{A_NS}{tag}")
        if child is None:
            return None
        return child.get("typeface") or None

    supplemental = {}
    for font in element.findall(f"{A_NS}font"):
        script = font.get("script")
        if script:
            supplemental[script] = font.get("typeface") or ""

    return FontCollection(
        latin=typeface("latin"),
        east_asian=typeface("ea"),
        complex_script=typeface("cs"),
        supplemental=supplemental,
    )


def parse_theme(root: ET.Element) -> Theme:
    elements = root.find(f"{A_NS}themeElements")
    if elements is None:
        return Theme(name=root.get("name"))

    color_scheme_name = None
    colors = {}
    color_scheme = elements.find(f"{A_NS}clrScheme")
    if color_scheme is not None:
        color_scheme_name = color_scheme.get("name")
        for child in color_scheme:
            slot = local_name(child.tag)
            if slot not in COLOR_SCHEME_SLOTS:
                continue
            color = _parse_color(child)
            if color is not None:
                colors[slot] = color

    font_scheme_name = None
    major_fonts = None
    minor_fonts = None
    font_scheme = elements.find(f"{A_NS}fontScheme")
    if font_scheme is not None:
        font_scheme_name = font_scheme.get("name")
        major_fonts = _parse_font_collection(font_scheme.find(f"{A_NS}majorFont"))
        minor_fonts = _parse_font_collection(font_scheme.find(f"{A_NS}minorFont"))

    return Theme(
        name=root.get("name"),
        color_scheme_name=color_scheme_name,
        colors=colors,
        font_scheme_name=font_scheme_name,
        major_fonts=major_fonts,
        minor_fonts=minor_fonts,
    )
