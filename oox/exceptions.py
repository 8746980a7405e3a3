from typing import Optional


class OoxError(Exception):
    """Base class for every error raised while loading an OOXML package."""

    def __init__(self, message: Optional[str] = None, *, cause: Optional[Exception] = None):
        super().__init__(message)
        self.__cause__ = cause  # Optional chaining for debugging


class PackageFormatNotSupportedError(OoxError):
    """Raised when the file is not a package type this library reads."""

    def __init__(
        self, file_path: str, message: Optional[str] = None, *, cause: Optional[Exception] = None
    ):
        self.file_path = file_path
        if message is None:
            message = f"Package format not supported: {file_path}"
        super().__init__(message, cause=cause)


class PackageFileEncryptedError(OoxError):
    """Raised when the package is password protected (OLE-wrapped)."""


class PackageZipBombError(OoxError):
    """Raised when the ZIP container looks like a decompression bomb."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        part_name: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        # None when a package-wide limit is exceeded
        self.part_name = part_name
        super().__init__(message, cause=cause)


class PackageXmlError(OoxError):
    """Raised when a package part is not well-formed XML."""

    def __init__(
        self, part_name: str, message: Optional[str] = None, *, cause: Optional[Exception] = None
    ):
        self.part_name = part_name
        if message is None:
            message = f"Malformed XML in package part: {part_name}"
        super().__init__(message, cause=cause)
