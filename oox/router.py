import logging
import mimetypes
from typing import Callable, Union

from oox.exceptions import PackageFormatNotSupportedError

logger = logging.getLogger(__name__)

mime_type_mapping = {
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/vnd.ms-word.document.macroEnabled.12": "docx",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.template": "docx",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
    "application/vnd.ms-powerpoint.presentation.macroEnabled.12": "pptx",
    "application/vnd.openxmlformats-officedocument.presentationml.slideshow": "pptx",
}

# not every platform's mimetypes table knows the macro-enabled and template types
extension_mapping = {
    ".docx": "docx",
    ".docm": "docx",
    ".dotx": "docx",
    ".pptx": "pptx",
    ".pptm": "pptx",
    ".ppsx": "pptx",
}


def _get_loader(file_type: str) -> Callable:
    """Return the ``from_bytes`` loader for a package type (lazy import)."""
    if file_type == "docx":
        from oox.docx.package import DocxPackage

        return DocxPackage.from_bytes
    elif file_type == "pptx":
        from oox.pptx.package import PptxPackage

        return PptxPackage.from_bytes
    else:
        raise RuntimeError(f"No loader for file type: {file_type}")


def detect_file_type(path: str) -> Union[str, None]:
    path = path.lower()
    mime_type, _ = mimetypes.guess_type(path)
    if mime_type in mime_type_mapping:
        file_type = mime_type_mapping[mime_type]
        logger.debug(f"Detected file type: {file_type} (MIME: {mime_type}) for file: {path}")
        return file_type
    for extension, file_type in extension_mapping.items():
        if path.endswith(extension):
            logger.debug(f"Detected file type: {file_type} for file: {path}")
            return file_type
    logger.debug(f"File [{path}] with mime type [{mime_type}] is not supported")
    return None


def is_supported_file(path: str) -> bool:
    """Checks if the path is a supported file"""
    return detect_file_type(path) is not None


def get_loader(path: str) -> Callable:
    """Analyses the path of a file and returns a suited package loader.
       The file does not need to exist. The path or filename alone suffices.

    :returns the ``from_bytes`` classmethod of ``DocxPackage`` or ``PptxPackage``
    :raises PackageFormatNotSupportedError: File is not covered by any loader
    """
    file_type = detect_file_type(path)
    if file_type is None:
        raise PackageFormatNotSupportedError(path)
    return _get_loader(file_type)
