"""On-disk versions.json cache.

The file is overwritten in full on every save. There is no atomic rename,
so a crash mid-write leaves a file that fails to parse on the next load.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from protocol_versions.config import CACHE_FILE_NAME
from protocol_versions.errors import VersionsIOError, VersionsParseError
from protocol_versions.models import VersionsFile
from protocol_versions.parser import read_versions_file

logger = logging.getLogger(__name__)


class VersionsCache:
    """Read and write ``versions.json`` inside a directory."""

    def __init__(self, directory: str | Path) -> None:
        self.path = Path(directory) / CACHE_FILE_NAME

    def exists(self) -> bool:
        return self.path.is_file()

    def read_text(self) -> str:
        """Return the raw cache file content.

        Raises:
            VersionsIOError: If the file is missing or unreadable.
            VersionsParseError: If the content is not valid UTF-8.
        """
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("Cached %s is not valid UTF-8", self.path, exc_info=exc)
            raise VersionsParseError(f"Cannot decode {self.path}: {exc}") from exc
        except OSError as exc:
            logger.warning(
                "Encountered IOException while reading %s", self.path, exc_info=exc
            )
            raise VersionsIOError(f"Cannot read {self.path}: {exc}") from exc

    def load(self, custom_protocols: Mapping[int, str]) -> VersionsFile:
        """Read, parse and merge the cached document.

        Raises:
            VersionsIOError: If the file cannot be read.
            VersionsParseError: If the content is not a valid document.
        """
        return read_versions_file(self.read_text(), custom_protocols)

    def save(self, json_text: str) -> None:
        """Overwrite the cache file with ``json_text``.

        Raises:
            VersionsIOError: If the file cannot be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json_text, encoding="utf-8")
        except OSError as exc:
            logger.warning(
                "Encountered IOException while saving %s", self.path, exc_info=exc
            )
            raise VersionsIOError(f"Cannot write {self.path}: {exc}") from exc
