import io
import logging
import unittest
import zipfile
from xml.etree import ElementTree as ET

import pytest

from oox.exceptions import PackageFormatNotSupportedError
from oox.pptx.package import PptxPackage, extract_paragraphs
from oox.shared.relationships import rels_part_name, resolve_target

logger = logging.getLogger(__name__)

tc = unittest.TestCase()

NS = (
    'xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main" '
    'xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships"'
)
REL_BASE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"


def _rels(*relationships: tuple[str, str, str]) -> str:
    items = "".join(
        f'<Relationship Id="{rel_id}" Type="{REL_BASE}/{rel_type}" Target="{target}"/>'
        for rel_id, rel_type, target in relationships
    )
    return (
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        f"{items}</Relationships>"
    )


def _slide(*paragraphs: str, show: str = None) -> str:
    body = "".join(f"<a:p>{paragraph}</a:p>" for paragraph in paragraphs)
    show_attr = f' show="{show}"' if show is not None else ""
    return (
        f"<p:sld {NS}{show_attr}><p:cSld><p:spTree><p:sp><p:txBody>"
        f"{body}</p:txBody></p:sp></p:spTree></p:cSld></p:sld>"
    )


THEME_XML = (
    '<a:theme xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" name="Deck Theme">'
    '<a:themeElements><a:clrScheme name="Deck"><a:accent1><a:srgbClr val="ED7D31"/></a:accent1>'
    "</a:clrScheme></a:themeElements></a:theme>"
)


def _make_pptx(files: dict[str, str | bytes]) -> io.BytesIO:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    buffer.seek(0)
    return buffer


def _deck(with_slide_list: bool = True) -> dict[str, str]:
    slide_list = (
        '<p:sldIdLst><p:sldId id="256" r:id="rId3"/><p:sldId id="257" r:id="rId2"/></p:sldIdLst>'
        if with_slide_list
        else ""
    )
    return {
        "ppt/presentation.xml": (
            f'<p:presentation {NS}><p:sldMasterIdLst><p:sldMasterId id="2147483648" r:id="rId1"/>'
            f'</p:sldMasterIdLst>{slide_list}<p:sldSz cx="12192000" cy="6858000" type="custom"/>'
            "</p:presentation>"
        ),
        "ppt/_rels/presentation.xml.rels": _rels(
            ("rId1", "slideMaster", "slideMasters/slideMaster1.xml"),
            ("rId2", "slide", "slides/slide1.xml"),
            ("rId3", "slide", "slides/slide2.xml"),
        ),
        "ppt/slideMasters/slideMaster1.xml": f"<p:sldMaster {NS}><p:cSld/></p:sldMaster>",
        "ppt/slideMasters/_rels/slideMaster1.xml.rels": _rels(
            ("rId1", "slideLayout", "../slideLayouts/slideLayout1.xml"),
            ("rId2", "theme", "../theme/theme1.xml"),
        ),
        "ppt/slideLayouts/slideLayout1.xml": (
            f'<p:sldLayout {NS} type="title"><p:cSld name="Title Slide"/></p:sldLayout>'
        ),
        "ppt/slideLayouts/_rels/slideLayout1.xml.rels": _rels(
            ("rId1", "slideMaster", "../slideMasters/slideMaster1.xml"),
        ),
        "ppt/theme/theme1.xml": THEME_XML,
        "ppt/slides/slide1.xml": _slide("<a:r><a:t>First part</a:t></a:r>"),
        "ppt/slides/_rels/slide1.xml.rels": _rels(
            ("rId1", "slideLayout", "../slideLayouts/slideLayout1.xml"),
        ),
        "ppt/slides/slide2.xml": _slide(
            "<a:r><a:t>Hello</a:t></a:r><a:br/><a:r><a:t>World</a:t></a:r>",
            '<a:fld id="{1}" type="slidenum"><a:t>2</a:t></a:fld>',
            show="0",
        ),
        "ppt/media/image1.png": b"\x89PNG\r\n\x1a\n",
    }


def test_slides_follow_presentation_order() -> None:
    package = PptxPackage.from_bytes(_make_pptx(_deck()), "deck.pptx")

    tc.assertEqual(["ppt/slides/slide2.xml", "ppt/slides/slide1.xml"], package.slide_order())
    slides = list(package.slides())
    tc.assertEqual("Hello\x0bWorld\n2", slides[0].text)
    tc.assertTrue(slides[0].hidden)
    tc.assertEqual("First part", slides[1].text)
    tc.assertFalse(slides[1].hidden)


def test_slides_fall_back_to_numeric_order() -> None:
    files = _deck(with_slide_list=False)
    files["ppt/slides/slide10.xml"] = _slide("<a:r><a:t>Tenth</a:t></a:r>")

    package = PptxPackage.from_bytes(_make_pptx(files))

    tc.assertEqual(
        ["ppt/slides/slide1.xml", "ppt/slides/slide2.xml", "ppt/slides/slide10.xml"],
        package.slide_order(),
    )


def test_presentation_properties() -> None:
    package = PptxPackage.from_bytes(_make_pptx(_deck()))

    presentation = package.presentation
    tc.assertEqual(("ppt/slideMasters/slideMaster1.xml",), presentation.slide_master_part_names)
    tc.assertEqual(12192000, presentation.slide_width)
    tc.assertEqual(6858000, presentation.slide_height)
    tc.assertEqual("custom", presentation.slide_size_type)
    tc.assertEqual(("ppt/media/image1.png",), package.medias)


def test_layout_master_and_theme_links() -> None:
    package = PptxPackage.from_bytes(_make_pptx(_deck()))
    slide = package.slide_map["ppt/slides/slide1.xml"]

    layout = package.layout_of(slide)
    tc.assertEqual("ppt/slideLayouts/slideLayout1.xml", layout.part_name)
    tc.assertEqual("Title Slide", layout.name)
    tc.assertEqual("title", layout.layout_type)

    master = package.master_of(slide)
    tc.assertEqual("ppt/slideMasters/slideMaster1.xml", master.part_name)
    tc.assertEqual(("ppt/slideLayouts/slideLayout1.xml",), master.layout_part_names)
    tc.assertEqual("ppt/theme/theme1.xml", master.theme_part_name)

    theme = package.theme_of(slide)
    tc.assertEqual("Deck Theme", theme.name)
    tc.assertEqual("ED7D31", theme.color("accent1").value)


def test_slide_without_relationships_has_no_layout() -> None:
    package = PptxPackage.from_bytes(_make_pptx(_deck()))
    slide = package.slide_map["ppt/slides/slide2.xml"]

    tc.assertIsNone(slide.layout_part_name)
    tc.assertIsNone(package.layout_of(slide))
    tc.assertIsNone(package.master_of(slide))
    tc.assertIsNone(package.theme_of(slide))


def test_extract_paragraphs_skips_properties() -> None:
    root = ET.fromstring(
        f"<p:txBody {NS}><a:bodyPr/><a:p><a:pPr/><a:r><a:rPr b=\"1\"/><a:t>Bold</a:t></a:r>"
        "<a:endParaRPr/></a:p><a:p/></p:txBody>"
    )
    tc.assertEqual(("Bold", ""), extract_paragraphs(root))


def test_relationship_paths() -> None:
    tc.assertEqual("ppt/slides/_rels/slide1.xml.rels", rels_part_name("ppt/slides/slide1.xml"))
    tc.assertEqual(
        "ppt/slideLayouts/slideLayout1.xml",
        resolve_target("ppt/slides/slide1.xml", "../slideLayouts/slideLayout1.xml"),
    )
    tc.assertEqual("ppt/media/image1.png", resolve_target("ppt/slides/slide1.xml", "/ppt/media/image1.png"))


def test_from_file(tmp_path) -> None:
    path = tmp_path / "deck.pptx"
    path.write_bytes(_make_pptx(_deck()).getvalue())

    package = PptxPackage.from_file(path)

    tc.assertEqual(str(path), package.file_path)
    tc.assertEqual(2, len(package.slide_map))


def test_not_a_zip_raises() -> None:
    with pytest.raises(PackageFormatNotSupportedError):
        PptxPackage.from_bytes(io.BytesIO(b"plain text"), "deck.pptx")
