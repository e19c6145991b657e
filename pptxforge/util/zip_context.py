import logging
import zipfile
from typing import BinaryIO
from xml.etree import ElementTree as ET

from pptxforge.exceptions import MalformedDocumentError, UnpackagingFailedError
from pptxforge.util.zip_bomb import (
    DEFAULT_ZIP_BOMB_LIMITS,
    ZipBombLimits,
    open_zipfile,
)

logger = logging.getLogger(__name__)


class ZipContext:
    """Read-only view of an opened package with helpers for its XML parts."""

    def __init__(
        self,
        file_like: BinaryIO,
        *,
        source: str | None = None,
        limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    ):
        self.source = source or type(self).__name__
        try:
            self._zip = open_zipfile(file_like, limits=limits, source=self.source)
        except zipfile.BadZipFile as exc:
            raise UnpackagingFailedError(
                self.source, f"Unzip failed: {self.source} is not a ZIP archive", cause=exc
            ) from exc
        self._namelist = set(self._zip.namelist())
        logger.debug(f"Opened package [{self.source}] with {len(self._namelist)} entries")

    def __enter__(self) -> "ZipContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def namelist(self) -> set[str]:
        return self._namelist

    def exists(self, path: str) -> bool:
        return path in self._namelist

    def read_bytes(self, path: str) -> bytes:
        try:
            return self._zip.read(path)
        except (KeyError, zipfile.BadZipFile, OSError) as exc:
            raise MalformedDocumentError(path, cause=exc) from exc

    def read_xml_root(self, path: str) -> ET.Element:
        """Parse a part; a missing or malformed part raises MalformedDocumentError."""
        data = self.read_bytes(path)
        try:
            return ET.fromstring(data)
        except ET.ParseError as exc:
            raise MalformedDocumentError(
                path, f"Invalid PPTX file: cannot parse {path}: {exc}", cause=exc
            ) from exc

    def read_optional_xml_root(self, path: str) -> ET.Element | None:
        """Parse a part that may legitimately be absent or damaged."""
        if not self.exists(path):
            return None
        try:
            return self.read_xml_root(path)
        except MalformedDocumentError as exc:
            logger.debug(f"Ignoring unreadable optional part {path}: {exc}")
            return None

    def close(self) -> None:
        self._zip.close()
