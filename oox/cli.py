from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

import oox
from oox.docx.footnotes import FootnoteType
from oox.docx.package import DocxPackage
from oox.pptx.package import PptxPackage
from oox.shared.serialization import serialize_model


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oox",
        description="Load a .docx/.pptx package and print resolved styles (docx) or slide text (pptx) as JSON.",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the package.",
    )
    parser.add_argument(
        "--style",
        metavar="ID",
        help="Only print the resolved style with this id (docx).",
    )
    parser.add_argument(
        "--defaults",
        action="store_true",
        help="Only print the document default style (docx).",
    )
    parser.add_argument(
        "--numbering",
        nargs=2,
        type=int,
        metavar=("NUM_ID", "LEVEL"),
        help="Only print the style of a numbering level (docx).",
    )
    parser.add_argument(
        "--footnote",
        choices=[footnote_type.value for footnote_type in FootnoteType],
        help="Only print the style of the first footnote of this type (docx).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log parsing progress to stderr.",
    )
    return parser


def _serialize(value: Any) -> Any:
    return serialize_model(value, drop_none=True)


def _docx_summary(package: DocxPackage) -> dict:
    styles = {}
    if package.styles is not None:
        for style in package.styles:
            styles[style.style_id] = _serialize(package.resolve_style_with_id(style.style_id))
    return {
        "file_path": package.file_path,
        "core": _serialize(package.core),
        "app_info": _serialize(package.app_info),
        "document_defaults": _serialize(package.resolve_document_default_style()),
        "styles": styles,
        "footnotes": len(package.footnotes) if package.footnotes is not None else 0,
        "endnotes": len(package.endnotes) if package.endnotes is not None else 0,
        "medias": list(package.medias),
        "themes": sorted(package.themes),
    }


def _docx_query(package: DocxPackage, args: argparse.Namespace) -> Any:
    if args.style is not None:
        resolved = package.resolve_style_with_id(args.style)
        if resolved is None:
            raise LookupError(f"No style with id {args.style}")
        return _serialize(resolved)
    if args.defaults:
        return _serialize(package.resolve_document_default_style())
    if args.numbering is not None:
        numbering_id, level = args.numbering
        found = package.find_numbering_level(numbering_id, level)
        if found is None:
            raise LookupError(f"No numbering level {level} for numbering id {numbering_id}")
        return _serialize(package.resolve_numbering_level_style(found))
    if args.footnote is not None:
        return _serialize(package.resolve_footnote_style(FootnoteType(args.footnote)))
    return _docx_summary(package)


def _pptx_summary(package: PptxPackage) -> dict:
    return {
        "file_path": package.file_path,
        "core": _serialize(package.core),
        "app_info": _serialize(package.app_info),
        "slides": [
            {"part_name": slide.part_name, "layout": slide.layout_part_name, "text": list(slide.paragraphs)}
            for slide in package.slides()
        ],
    }


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args, unknown = parser.parse_known_args(argv)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        return code

    if unknown:
        unknown_str = " ".join(unknown)
        print(
            f"oox: warning: unsupported arguments: {unknown_str}",
            file=sys.stderr,
        )
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        package = oox.read_file(args.path)
        if isinstance(package, DocxPackage):
            payload = _docx_query(package, args)
        else:
            if args.style is not None or args.defaults or args.numbering or args.footnote:
                raise ValueError("style queries require a .docx package")
            payload = _pptx_summary(package)
        json.dump(payload, sys.stdout)
        sys.stdout.write("\n")
        return 0
    except Exception as exc:
        print(f"oox: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
