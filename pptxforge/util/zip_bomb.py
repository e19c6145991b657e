from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass
from typing import BinaryIO

from pptxforge.exceptions import PresentationZipBombError


@dataclass(frozen=True)
class ZipBombLimits:
    """
    Heuristics for rejecting packages that are probably ZIP bombs.

    A presentation is a few dozen XML parts plus media, so the entry limit
    is far below what a generic archive tool would allow. Media can be
    large, which keeps the size limits generous.
    """

    max_entries: int = 10_000
    max_total_uncompressed_bytes: int = 2 * 1024 * 1024 * 1024  # 2 GiB
    max_single_uncompressed_bytes: int = 1 * 1024 * 1024 * 1024  # 1 GiB
    max_total_compression_ratio: float = 200.0
    max_entry_compression_ratio: float = 500.0


DEFAULT_ZIP_BOMB_LIMITS = ZipBombLimits()


def _suffix(source: str | None) -> str:
    return f" [{source}]" if source else ""


def validate_zipfile(
    zf: zipfile.ZipFile,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> None:
    """
    Check a package against high-confidence ZIP-bomb indicators.

    This is a best-effort DoS mitigation applied before any part is
    decompressed, not a complete sandbox.
    """
    infos = [info for info in zf.infolist() if not info.is_dir()]

    if len(infos) > limits.max_entries:
        raise PresentationZipBombError(
            f"Package has too many entries ({len(infos)} > {limits.max_entries})"
            + _suffix(source)
        )

    total_uncompressed = 0
    total_compressed = 0

    for info in infos:
        if info.file_size > limits.max_single_uncompressed_bytes:
            raise PresentationZipBombError(
                f"Package entry {info.filename} too large "
                f"({info.file_size} bytes > {limits.max_single_uncompressed_bytes})"
                + _suffix(source)
            )

        if info.file_size > 0:
            if info.compress_size <= 0:
                raise PresentationZipBombError(
                    f"Package entry {info.filename} has zero compressed size"
                    + _suffix(source)
                )
            ratio = info.file_size / info.compress_size
            if ratio > limits.max_entry_compression_ratio:
                raise PresentationZipBombError(
                    f"Package entry {info.filename} compression ratio too high "
                    f"({ratio:.1f} > {limits.max_entry_compression_ratio})"
                    + _suffix(source)
                )

        total_uncompressed += info.file_size
        total_compressed += info.compress_size

        if total_uncompressed > limits.max_total_uncompressed_bytes:
            raise PresentationZipBombError(
                f"Package uncompressed size too large "
                f"({total_uncompressed} bytes > {limits.max_total_uncompressed_bytes})"
                + _suffix(source)
            )

    if total_uncompressed > 0 and total_compressed > 0:
        total_ratio = total_uncompressed / total_compressed
        if total_ratio > limits.max_total_compression_ratio:
            raise PresentationZipBombError(
                f"Package total compression ratio too high "
                f"({total_ratio:.1f} > {limits.max_total_compression_ratio})"
                + _suffix(source)
            )


def open_zipfile(
    file_like: BinaryIO,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> zipfile.ZipFile:
    """
    Open a package and validate it for ZIP-bomb indicators.

    Caller owns the returned ZipFile and must close it.
    """
    file_like.seek(0)
    zf = zipfile.ZipFile(file_like, "r")
    try:
        validate_zipfile(zf, limits=limits, source=source)
    except Exception:
        zf.close()
        raise
    return zf


def validate_zip_bytesio(
    file_like: io.BytesIO,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> None:
    """Validate an in-memory package without keeping it open; restores the stream position."""
    original_pos = file_like.tell()
    try:
        file_like.seek(0)
        with zipfile.ZipFile(file_like, "r") as zf:
            validate_zipfile(zf, limits=limits, source=source)
    finally:
        file_like.seek(original_pos)
