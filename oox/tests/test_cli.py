import io
import json
import zipfile
from pathlib import Path

from oox.cli import main

W = 'xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main"'

STYLES_XML = f"""<w:styles {W}>
  <w:docDefaults><w:rPrDefault><w:rPr><w:sz w:val="22"/></w:rPr></w:rPrDefault></w:docDefaults>
  <w:style w:type="paragraph" w:default="1" w:styleId="Normal"><w:name w:val="Normal"/></w:style>
  <w:style w:type="paragraph" w:styleId="Heading1">
    <w:basedOn w:val="Normal"/><w:pPr><w:keepNext/></w:pPr><w:rPr><w:b/></w:rPr>
  </w:style>
</w:styles>"""

DOCUMENT_XML = f"""<w:document {W}><w:body>
  <w:p><w:pPr><w:pStyle w:val="Heading1"/></w:pPr><w:r><w:t>Title</w:t></w:r></w:p>
</w:body></w:document>"""

NUMBERING_XML = f"""<w:numbering {W}>
  <w:abstractNum w:abstractNumId="0"><w:lvl w:ilvl="0"><w:rPr><w:i/></w:rPr></w:lvl></w:abstractNum>
  <w:num w:numId="1"><w:abstractNumId w:val="0"/></w:num>
</w:numbering>"""

SLIDE_XML = (
    '<p:sld xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main">'
    "<p:cSld><p:spTree><p:sp><p:txBody><a:p><a:r><a:t>Agenda</a:t></a:r></a:p>"
    "</p:txBody></p:sp></p:spTree></p:cSld></p:sld>"
)


def _write_package(path: Path, files: dict[str, str]) -> Path:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    path.write_bytes(buffer.getvalue())
    return path


def _docx(tmp_path: Path) -> Path:
    return _write_package(
        tmp_path / "report.docx",
        {
            "word/document.xml": DOCUMENT_XML,
            "word/styles.xml": STYLES_XML,
            "word/numbering.xml": NUMBERING_XML,
        },
    )


def test_cli_outputs_docx_summary(tmp_path, capsys) -> None:
    path = _docx(tmp_path)

    exit_code = main([str(path)])
    captured = capsys.readouterr()

    assert exit_code == 0
    payload = json.loads(captured.out.strip())
    assert payload["file_path"] == str(path)
    assert sorted(payload["styles"]) == ["Heading1", "Normal"]
    assert payload["styles"]["Heading1"]["run_properties"]["bold"] is True
    assert payload["document_defaults"]["run_properties"]["font_size"] == 22
    assert payload["footnotes"] == 0
    assert payload["medias"] == []


def test_cli_outputs_single_style(tmp_path, capsys) -> None:
    path = _docx(tmp_path)

    exit_code = main([str(path), "--style", "Heading1"])
    captured = capsys.readouterr()

    assert exit_code == 0
    payload = json.loads(captured.out.strip())
    assert payload["_type"] == "ResolvedStyle"
    assert payload["paragraph_properties"]["keep_with_next"] is True
    assert payload["run_properties"] == {"_type": "RunProperties", "bold": True}


def test_cli_outputs_defaults_and_numbering(tmp_path, capsys) -> None:
    path = _docx(tmp_path)

    assert main([str(path), "--defaults"]) == 0
    payload = json.loads(capsys.readouterr().out.strip())
    assert payload["run_properties"]["font_size"] == 22

    assert main([str(path), "--numbering", "1", "0"]) == 0
    payload = json.loads(capsys.readouterr().out.strip())
    assert payload["run_properties"]["italic"] is True


def test_cli_unknown_style_fails(tmp_path, capsys) -> None:
    path = _docx(tmp_path)

    exit_code = main([str(path), "--style", "Missing"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "No style with id Missing" in captured.err
    assert captured.out == ""


def test_cli_outputs_pptx_slides(tmp_path, capsys) -> None:
    path = _write_package(tmp_path / "deck.pptx", {"ppt/slides/slide1.xml": SLIDE_XML})

    exit_code = main([str(path)])
    captured = capsys.readouterr()

    assert exit_code == 0
    payload = json.loads(captured.out.strip())
    assert payload["slides"] == [{"part_name": "ppt/slides/slide1.xml", "layout": None, "text": ["Agenda"]}]


def test_cli_style_query_on_pptx_fails(tmp_path, capsys) -> None:
    path = _write_package(tmp_path / "deck.pptx", {"ppt/slides/slide1.xml": SLIDE_XML})

    exit_code = main([str(path), "--defaults"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "require a .docx package" in captured.err


def test_cli_unsupported_file_fails(tmp_path, capsys) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("hello")

    exit_code = main([str(path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Package format not supported" in captured.err


def test_cli_rejects_unknown_arguments(tmp_path, capsys) -> None:
    path = _docx(tmp_path)

    exit_code = main([str(path), "--json"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "unsupported arguments: --json" in captured.err
