"""
Decompression-bomb guard for OOXML packages.

Only the central directory is inspected; no part is inflated. Limits apply
per part (declared size, inflation ratio) and to the package as a whole
(part count, total size, overall inflation ratio). A failing part is named in
the raised ``PackageZipBombError``.
"""

import logging
import zipfile
from dataclasses import dataclass
from typing import Optional

from oox.exceptions import PackageZipBombError

logger = logging.getLogger(__name__)

_GIB = 1024 * 1024 * 1024


@dataclass(frozen=True)
class ZipBombLimits:
    """
    Thresholds for rejecting a package before any part is parsed.

    WordprocessingML and PresentationML parts are repetitive XML and deflate
    to a few percent of their size, so the ratio limits are generous.
    """

    max_entries: int = 50_000
    max_total_uncompressed_bytes: int = 4 * _GIB
    max_single_uncompressed_bytes: int = 1 * _GIB
    max_total_compression_ratio: float = 200.0
    max_entry_compression_ratio: float = 500.0


DEFAULT_ZIP_BOMB_LIMITS = ZipBombLimits()


def _in(source: Optional[str]) -> str:
    return f" in {source}" if source else ""


def check_part(info: zipfile.ZipInfo, *, limits: ZipBombLimits, source: Optional[str] = None) -> None:
    """Reject one package part whose declared size or inflation ratio exceeds ``limits``."""
    part_name = info.filename
    if info.file_size > limits.max_single_uncompressed_bytes:
        raise PackageZipBombError(
            f"Part {part_name}{_in(source)} declares {info.file_size} bytes "
            f"(limit {limits.max_single_uncompressed_bytes})",
            part_name=part_name,
        )
    if info.file_size == 0:
        return
    if info.compress_size <= 0:
        raise PackageZipBombError(
            f"Part {part_name}{_in(source)} declares content but no compressed data",
            part_name=part_name,
        )
    ratio = info.file_size / info.compress_size
    if ratio > limits.max_entry_compression_ratio:
        raise PackageZipBombError(
            f"Part {part_name}{_in(source)} inflates {ratio:.1f}x "
            f"(limit {limits.max_entry_compression_ratio})",
            part_name=part_name,
        )


def check_package(
    zf: zipfile.ZipFile, *, limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS, source: Optional[str] = None
) -> None:
    """Check every part of an opened package, then the package totals."""
    parts = [info for info in zf.infolist() if not info.is_dir()]
    if len(parts) > limits.max_entries:
        raise PackageZipBombError(
            f"Package{_in(source)} has {len(parts)} parts (limit {limits.max_entries})"
        )

    inflated = 0
    deflated = 0
    for info in parts:
        check_part(info, limits=limits, source=source)
        inflated += info.file_size
        deflated += info.compress_size
        if inflated > limits.max_total_uncompressed_bytes:
            raise PackageZipBombError(
                f"Package{_in(source)} exceeds {limits.max_total_uncompressed_bytes} "
                f"uncompressed bytes at part {info.filename}",
                part_name=info.filename,
            )

    if inflated == 0:
        return
    if deflated <= 0:
        raise PackageZipBombError(f"Package{_in(source)} declares content but no compressed data")
    ratio = inflated / deflated
    if ratio > limits.max_total_compression_ratio:
        raise PackageZipBombError(
            f"Package{_in(source)} inflates {ratio:.1f}x overall "
            f"(limit {limits.max_total_compression_ratio})"
        )
    logger.debug(f"Package{_in(source)}: {len(parts)} parts, {inflated} bytes uncompressed")
