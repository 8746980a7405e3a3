"""
oox: Office Open XML package model and style-inheritance resolver.

Loads .docx and .pptx packages into immutable Python objects and answers
the question Word itself answers when it lays out text: which formatting is
in effect for this run of this paragraph, once document defaults, paragraph
and character styles, their ``basedOn`` chains, toggle properties and direct
formatting are all taken into account.
"""

import io
from pathlib import Path
from typing import Optional, Union

from oox.docx.footnotes import FootnoteType
from oox.docx.package import DocxPackage
from oox.docx.resolvedstyle import ResolvedStyle
from oox.docx.resolver import StyleResolver
from oox.docx.styles import StyleType
from oox.pptx.package import PptxPackage
from oox.router import get_loader, is_supported_file

__version__ = "0.1.0"


def read_docx(file_like: io.BytesIO, path: Optional[str] = None) -> DocxPackage:
    """Load a DOCX package."""
    return DocxPackage.from_bytes(file_like, path)


def read_pptx(file_like: io.BytesIO, path: Optional[str] = None) -> PptxPackage:
    """Load a PPTX package."""
    return PptxPackage.from_bytes(file_like, path)


def read_file(path: Union[str, Path]) -> Union[DocxPackage, PptxPackage]:
    """
    Read a package from disk.

    The package type is detected from the file extension.

    Args:
        path: Path to the .docx or .pptx file.

    Returns:
        DocxPackage or PptxPackage.

    Raises:
        PackageFormatNotSupportedError: If the file type is not supported.
        FileNotFoundError: If the file does not exist.

    Example:
        >>> import oox
        >>> package = oox.read_file("report.docx")
        >>> package.resolve_style_with_id("Heading1").run_properties.bold
        True
    """
    path = Path(path)
    loader = get_loader(str(path))
    with open(path, "rb") as f:
        return loader(io.BytesIO(f.read()), str(path))


__all__ = [
    # Version
    "__version__",
    # Main functions
    "read_file",
    "is_supported_file",
    "get_loader",
    # Format-specific loaders
    "read_docx",
    "read_pptx",
    # Model
    "DocxPackage",
    "PptxPackage",
    "StyleResolver",
    "ResolvedStyle",
    "StyleType",
    "FootnoteType",
]
