"""Exception hierarchy for fetching, parsing and caching versions.json.

Components raise these; ProtocolVersionResolver converts them into a
failed ResolveResult so none of them escapes a public operation.
"""

from __future__ import annotations

from protocol_versions.models import FailureReason


class VersionsError(Exception):
    """Base exception for all versions resolution errors."""

    reason: FailureReason = FailureReason.IO

    def __init__(self, message: str) -> None:
        """Initialize versions error.

        Args:
            message: Error message.
        """
        self.message = message
        super().__init__(self.message)


class VersionsNetworkError(VersionsError):
    """Connection failure, timeout or interrupted request."""

    reason = FailureReason.NETWORK


class VersionsStatusError(VersionsError):
    """Non-200 response from the remote site."""

    reason = FailureReason.STATUS

    def __init__(self, message: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(message)


class VersionsEmptyBodyError(VersionsError):
    """200 response without a body."""

    reason = FailureReason.EMPTY_BODY


class VersionsParseError(VersionsError):
    """Malformed JSON or a payload that does not match the schema."""

    reason = FailureReason.PARSE


class VersionsLegacyFormatError(VersionsError):
    """Remote document has no file_version (old versions.json format)."""

    reason = FailureReason.LEGACY_FORMAT


class VersionsIOError(VersionsError):
    """versions.json could not be read or written."""

    reason = FailureReason.IO
