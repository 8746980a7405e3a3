import io
import logging
import zipfile
from typing import Optional
from xml.etree import ElementTree as ET

from oox.exceptions import PackageFormatNotSupportedError, PackageXmlError, PackageZipBombError
from oox.util.zip_bomb import DEFAULT_ZIP_BOMB_LIMITS, ZipBombLimits, check_package

logger = logging.getLogger(__name__)


class ZipContext:
    """
    Open OOXML package with helpers for reading its parts.

    The archive is validated against ``limits`` on open. Use as a context
    manager or call ``close()``.
    """

    def __init__(
        self,
        file_like: io.BytesIO,
        *,
        limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
        source: Optional[str] = None,
    ):
        self.file_like = file_like
        self.source = source or type(self).__name__
        self.file_like.seek(0)
        try:
            self._zip = zipfile.ZipFile(self.file_like, "r")
        except zipfile.BadZipFile as exc:
            raise PackageFormatNotSupportedError(
                self.source, f"Not a ZIP container: {self.source}", cause=exc
            ) from exc
        try:
            check_package(self._zip, limits=limits, source=self.source)
        except PackageZipBombError:
            self._zip.close()
            raise
        self._namelist = self._zip.namelist()
        self._names = set(self._namelist)

    def __enter__(self) -> "ZipContext":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def namelist(self) -> list[str]:
        """Part names in archive order."""
        return self._namelist

    def exists(self, path: str) -> bool:
        return path in self._names

    def names_under(self, prefix: str) -> list[str]:
        return [name for name in self._namelist if name.startswith(prefix) and not name.endswith("/")]

    def read_xml_root(self, path: str) -> ET.Element:
        logger.debug(f"Parsing {path}")
        with self._zip.open(path) as f:
            try:
                return ET.parse(f).getroot()
            except ET.ParseError as exc:
                raise PackageXmlError(path, cause=exc) from exc

    def read_optional_xml_root(self, path: str) -> Optional[ET.Element]:
        if not self.exists(path):
            return None
        return self.read_xml_root(path)

    def read_bytes(self, path: str) -> bytes:
        return self._zip.read(path)

    def close(self) -> None:
        self._zip.close()
