"""
XML helpers shared by the WordprocessingML, PresentationML and DrawingML readers.

All parsing uses ``xml.etree.ElementTree``; elements carry Clark-notation tags
(``{namespace}local``). The helpers here convert OOXML simple types (on/off,
decimal numbers, measures, enumeration tokens) and never raise on bad
values: they log and return ``None`` so that a partially broken part still
loads.
"""

import logging
import re
from enum import Enum
from typing import Optional, TypeVar
from xml.etree import ElementTree as ET

logger = logging.getLogger(__name__)

NAMESPACES = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "p": "http://schemas.openxmlformats.org/presentationml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "cp": "http://schemas.openxmlformats.org/package/2006/metadata/core-properties",
    "dc": "http://purl.org/dc/elements/1.1/",
    "dcterms": "http://purl.org/dc/terms/",
    "ep": "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties",
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}

W_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"
A_NS = "{http://schemas.openxmlformats.org/drawingml/2006/main}"
P_NS = "{http://schemas.openxmlformats.org/presentationml/2006/main}"
R_NS = "{http://schemas.openxmlformats.org/officeDocument/2006/relationships}"
REL_NS = "{http://schemas.openxmlformats.org/package/2006/relationships}"

# Twips conversion: 1440 twips = 1 inch
TWIPS_PER_INCH = 1440
TWIPS_PER_UNIT = {
    "in": TWIPS_PER_INCH,
    "pt": 20,
    "pc": 240,
    "pi": 240,
    "cm": TWIPS_PER_INCH / 2.54,
    "mm": TWIPS_PER_INCH / 25.4,
}

_UNIVERSAL_MEASURE = re.compile(r"^(-?[0-9]+(?:\.[0-9]+)?)(mm|cm|in|pt|pc|pi)$")
_PERCENTAGE = re.compile(r"^(-?[0-9]+(?:\.[0-9]+)?)%$")

E = TypeVar("E", bound=Enum)


def local_name(tag: str) -> str:
    """``{ns}name`` -> ``name``."""
    return tag.split("}")[-1]


def w_attr(element: ET.Element, name: str) -> Optional[str]:
    """Read a ``w:``-qualified attribute, tolerating unqualified ones."""
    value = element.get(f"{W_NS}{name}")
    if value is None:
        value = element.get(name)
    return value


def get_val(element: ET.Element) -> Optional[str]:
    return w_attr(element, "val")


def parse_xml_bool(value: str) -> Optional[bool]:
    if value in ("true", "1", "on"):
        return True
    if value in ("false", "0", "off"):
        return False
    logger.warning(f"Invalid on/off value [{value}] ignored")
    return None


def parse_on_off_element(element: ET.Element) -> Optional[bool]:
    """ST_OnOff element: a missing ``w:val`` means on."""
    value = get_val(element)
    if value is None:
        return True
    return parse_xml_bool(value)


def parse_optional_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    return parse_xml_bool(value)


def parse_int(value: Optional[str], *, base: int = 10) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value, base)
    except ValueError:
        logger.warning(f"Invalid integer value [{value}] ignored")
        return None


def parse_twips(value: Optional[str]) -> Optional[int]:
    """Decimal twips or a universal measure such as ``12pt`` / ``2.5cm``, in twips."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        pass
    match = _UNIVERSAL_MEASURE.match(value)
    if match is None:
        logger.warning(f"Invalid measure [{value}] ignored")
        return None
    return round(float(match.group(1)) * TWIPS_PER_UNIT[match.group(2)])


def parse_percentage(value: Optional[str]) -> Optional[float]:
    """``"150%"`` -> ``150.0``; a bare number is taken as percent too."""
    if value is None:
        return None
    match = _PERCENTAGE.match(value)
    if match is not None:
        return float(match.group(1))
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid percentage [{value}] ignored")
        return None


def parse_enum(enum_type: type[E], value: Optional[str]) -> Optional[E]:
    if value is None:
        return None
    try:
        return enum_type(value)
    except ValueError:
        logger.warning(f"Unknown {enum_type.__name__} token [{value}] ignored")
        return None
