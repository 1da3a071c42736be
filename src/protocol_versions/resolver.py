"""Resolve the protocol versions mapping from a remote site and a local cache.

ProtocolVersionResolver exposes three async operations:

- ``create_file``: download, cache and return the remote document.
- ``update_file``: download the remote document and replace the cache only
  when its ``file_version`` is strictly greater than the cached one.
- ``load_file``: return the cached document without touching the network.

Operations on one resolver are serialized by an ``asyncio.Lock`` so the
current document and versions.json have a single writer at a time. Disk
I/O runs on a dedicated single-thread executor to keep the event loop free.

Every failure is logged and returned as a failed ``ResolveResult``; the
previously resolved document, if any, stays in place.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from protocol_versions.cache import VersionsCache
from protocol_versions.config import DEFAULT_VERSIONS_URL, ResolverConfig
from protocol_versions.errors import (
    VersionsError,
    VersionsLegacyFormatError,
    VersionsParseError,
)
from protocol_versions.fetcher import VersionsFetcher
from protocol_versions.models import ResolveResult, VersionsFile
from protocol_versions.parser import read_versions_file

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProtocolVersionResolver:
    """Orchestrates fetching, parsing, merging and caching versions.json.

    Args:
        directory: Directory holding versions.json.
        custom_protocols: Protocol number to display name overrides merged
            into every resolved document.
        fetcher: HTTP fetcher. A default VersionsFetcher is created when
            omitted.
        legacy_hint_url: URL suggested to the operator when the remote
            document is in the legacy format.
    """

    def __init__(
        self,
        directory: str | Path,
        custom_protocols: Mapping[int, str] | None = None,
        fetcher: VersionsFetcher | None = None,
        legacy_hint_url: str = DEFAULT_VERSIONS_URL,
    ) -> None:
        """Initialize the cache, fetcher and I/O executor."""
        self.cache = VersionsCache(directory)
        self.custom_protocols: dict[int, str] = dict(custom_protocols or {})
        self.fetcher = fetcher or VersionsFetcher()
        self.legacy_hint_url = legacy_hint_url
        self._versions: VersionsFile | None = None
        self._lock = asyncio.Lock()
        self._io = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="protocol-versions-io"
        )

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "ProtocolVersionResolver":
        """Create a resolver from a ResolverConfig."""
        return cls(
            directory=config.data_dir,
            custom_protocols=config.custom_protocols,
            fetcher=VersionsFetcher(
                timeout=config.timeout, user_agent=config.user_agent
            ),
            legacy_hint_url=config.versions_url,
        )

    # -- Public API ----------------------------------------------------------

    @property
    def versions(self) -> VersionsFile | None:
        """The last successfully resolved document, if any."""
        return self._versions

    def is_file_missing(self) -> bool:
        return not self.cache.exists()

    async def create_file(self, url: str) -> ResolveResult:
        """Download the remote document, cache it and make it current.

        Args:
            url: Address of the remote versions.json.

        Returns:
            The resolved document, or a failure when fetching, parsing or
            writing fails. Nothing is written unless the payload parses.
        """
        async with self._lock:
            try:
                json_text = await self.fetcher.fetch(url)
                return ResolveResult.success(await self._copy_and_update(json_text))
            except VersionsError as exc:
                return ResolveResult.failure(exc)

    async def update_file(self, url: str) -> ResolveResult:
        """Refresh the cache if the remote document is newer.

        The cached file is replaced only when the remote ``file_version`` is
        strictly greater. Equal or lower versions return the cached document
        and leave the file untouched.

        Args:
            url: Address of the remote versions.json.

        Returns:
            The new or cached document, or a failure.
        """
        async with self._lock:
            try:
                return ResolveResult.success(await self._update(url))
            except VersionsError as exc:
                return ResolveResult.failure(exc)

    async def load_file(self) -> ResolveResult:
        """Load the cached document without contacting the remote site."""
        async with self._lock:
            try:
                versions = await self._run_io(self.cache.load, self.custom_protocols)
            except VersionsError as exc:
                logger.warning("Unable to load %s", self.cache.path)
                return ResolveResult.failure(exc)
            self._versions = versions
            return ResolveResult.success(versions)

    async def refresh(self, url: str) -> ResolveResult:
        """Create the cache on first run, otherwise update it.

        When an update fails, the existing cache is loaded instead so a
        previously downloaded document can still be used.
        """
        if self.is_file_missing():
            logger.info("No %s found. Downloading...", self.cache.path.name)
            return await self.create_file(url)

        result = await self.update_file(url)
        if result.ok:
            return result
        logger.warning("Update failed (%s). Falling back to cached file.", result.reason)
        return await self.load_file()

    async def shutdown(self) -> None:
        """Release the HTTP client and I/O thread.

        Operations already running are not cancelled.
        """
        await self.fetcher.aclose()
        self._io.shutdown(wait=False)

    # -- Internal ------------------------------------------------------------

    async def _update(self, url: str) -> VersionsFile:
        json_text = await self.fetcher.fetch(url)
        current_text = await self._run_io(self.cache.read_text)

        current: VersionsFile | None = None
        new: VersionsFile | None = None
        error: VersionsError | None = None
        try:
            current = read_versions_file(current_text, self.custom_protocols)
        except VersionsError as exc:
            error = exc
        try:
            new = read_versions_file(json_text, self.custom_protocols)
        except VersionsError as exc:
            error = error or exc

        if error is not None or current is None or new is None:
            logger.warning("Error while getting current and new versions info.")
            logger.warning(
                "Current missing? %s; New missing? %s", current is None, new is None
            )
            raise error or VersionsParseError("Unable to parse versions documents")

        if new.is_legacy:
            logger.warning("Remote JSON file does not have a 'file_version' property set!")
            logger.warning("Make sure the URL points to an updated versions file.")
            logger.warning("New URL: %s", self.legacy_hint_url)
            raise VersionsLegacyFormatError(
                f"Remote document at {url} has no file_version"
            )

        if current.file_version < new.file_version:
            logger.info(
                "Current %s is outdated (%d < %d). Updating...",
                self.cache.path.name,
                current.file_version,
                new.file_version,
            )
            return await self._copy_and_update(json_text)

        logger.info("Current %s is up-to-date!", self.cache.path.name)
        self._versions = current
        return current

    async def _copy_and_update(self, json_text: str) -> VersionsFile:
        versions = read_versions_file(json_text, self.custom_protocols)
        await self._run_io(self.cache.save, json_text)
        self._versions = versions
        return versions

    async def _run_io(self, func: Callable[..., T], *args: object) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._io, func, *args)
