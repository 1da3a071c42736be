"""Data models for the versions.json document and resolver results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from protocol_versions.errors import VersionsError

LEGACY_FILE_VERSION = -1


class ProtocolInfo(BaseModel):
    """One protocol number mapped to a display name.

    ``source`` records where the entry came from: the site named in the
    remote document, or ``"Custom"`` for locally configured overrides.
    """

    model_config = ConfigDict(frozen=True)

    protocol: int
    name: str
    source: str


class VersionsFile(BaseModel):
    """The resolved versions.json document.

    A missing ``file_version`` parses as -1, which marks a legacy document
    that must never win an update comparison.
    """

    model_config = ConfigDict(frozen=True)

    file_version: int = Field(default=LEGACY_FILE_VERSION)
    protocols: tuple[ProtocolInfo, ...] = ()

    @property
    def is_legacy(self) -> bool:
        """Whether this document uses the old format without file_version."""
        return self.file_version == LEGACY_FILE_VERSION

    def name_of(self, protocol: int) -> str | None:
        """Return the display name for a protocol number.

        Entries are not de-duplicated, so the last match wins. Custom
        overrides are appended after remote entries and therefore take
        precedence.
        """
        name = None
        for info in self.protocols:
            if info.protocol == protocol:
                name = info.name
        return name

    def protocol_numbers(self) -> list[int]:
        """Return the known protocol numbers in order, without duplicates."""
        return list(dict.fromkeys(info.protocol for info in self.protocols))

    def to_json(self) -> str:
        """Serialize using the versions.json schema."""
        return self.model_dump_json()


class FailureReason(str, Enum):
    """Why a resolver operation produced no document."""

    NETWORK = "network"
    STATUS = "status"
    EMPTY_BODY = "empty_body"
    PARSE = "parse"
    LEGACY_FORMAT = "legacy_format"
    IO = "io"


@dataclass(frozen=True)
class ResolveResult:
    """Outcome of a create/update/load call.

    Attributes:
        versions: The resolved document, or None on failure.
        reason: Failure category, or None on success.
        message: Human-readable description of the failure.
    """

    versions: VersionsFile | None = None
    reason: FailureReason | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        """True when a document was resolved."""
        return self.versions is not None

    @classmethod
    def success(cls, versions: VersionsFile) -> "ResolveResult":
        return cls(versions=versions)

    @classmethod
    def failure(cls, error: "VersionsError") -> "ResolveResult":
        return cls(reason=error.reason, message=error.message)
