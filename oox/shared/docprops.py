"""
Package metadata from ``docProps/app.xml`` and ``docProps/core.xml``.

Both parts are shared by every OOXML document type.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from xml.etree import ElementTree as ET

from oox.shared.xml import local_name, parse_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppInfo:
    app_name: Optional[str] = None
    app_version: Optional[str] = None


@dataclass(frozen=True)
class Core:
    title: Optional[str] = None
    creator: Optional[str] = None
    last_modified_by: Optional[str] = None
    revision: Optional[int] = None
    # W3CDTF strings, kept verbatim
    created_time: Optional[str] = None
    modified_time: Optional[str] = None


def parse_app_info(root: ET.Element) -> AppInfo:
    values = {}
    for child in root:
        name = local_name(child.tag)
        if name == "Application":
            values["app_name"] = child.text
        elif name == "AppVersion":
            values["app_version"] = child.text
    return AppInfo(**values)


_CORE_FIELDS = {
    "title": "title",
    "creator": "creator",
    "lastModifiedBy": "last_modified_by",
    "created": "created_time",
    "modified": "modified_time",
}


def parse_core(root: ET.Element) -> Core:
    values = {}
    for child in root:
        name = local_name(child.tag)
        if name == "revision":
            values["revision"] = parse_int(child.text.strip() if child.text else None)
        elif name in _CORE_FIELDS and child.text:
            values[_CORE_FIELDS[name]] = child.text
    return Core(**values)
