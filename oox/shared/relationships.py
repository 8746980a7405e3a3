import posixpath
from dataclasses import dataclass
from typing import Optional
from xml.etree import ElementTree as ET

from oox.shared.xml import REL_NS

_OFFICE_RELATIONSHIPS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

THEME_RELATION_TYPE = f"{_OFFICE_RELATIONSHIPS}/theme"
SLIDE_LAYOUT_RELATION_TYPE = f"{_OFFICE_RELATIONSHIPS}/slideLayout"
SLIDE_MASTER_RELATION_TYPE = f"{_OFFICE_RELATIONSHIPS}/slideMaster"


@dataclass(frozen=True)
class Relationship:
    id: str
    rel_type: str
    target: str
    target_mode: Optional[str] = None

    @property
    def is_external(self) -> bool:
        return self.target_mode == "External"


def parse_relationships(root: ET.Element) -> tuple[Relationship, ...]:
    relationships = []
    for rel in root.findall(f"{REL_NS}Relationship"):
        relationships.append(
            Relationship(
                id=rel.get("Id") or "",
                rel_type=rel.get("Type") or "",
                target=rel.get("Target") or "",
                target_mode=rel.get("TargetMode"),
            )
        )
    return tuple(relationships)


def rels_part_name(part_name: str) -> str:
    """``ppt/slides/slide1.xml`` -> ``ppt/slides/_rels/slide1.xml.rels``."""
    directory, file_name = posixpath.split(part_name)
    return posixpath.join(directory, "_rels", f"{file_name}.rels")


def resolve_target(source_part: str, target: str) -> str:
    """Absolute part name of a relationship target relative to ``source_part``."""
    if target.startswith("/"):
        return target.lstrip("/")
    return posixpath.normpath(posixpath.join(posixpath.dirname(source_part), target))


def find_by_type(
    relationships: tuple[Relationship, ...], rel_type: str
) -> Optional[Relationship]:
    for relationship in relationships:
        if relationship.rel_type == rel_type:
            return relationship
    return None
