"""Protocol version name resolution with remote fetch, local cache and overrides."""

from protocol_versions.cache import VersionsCache
from protocol_versions.config import (
    DEFAULT_VERSIONS_URL,
    ResolverConfig,
    load_custom_protocols,
)
from protocol_versions.errors import (
    VersionsEmptyBodyError,
    VersionsError,
    VersionsIOError,
    VersionsLegacyFormatError,
    VersionsNetworkError,
    VersionsParseError,
    VersionsStatusError,
)
from protocol_versions.fetcher import VersionsFetcher
from protocol_versions.models import (
    FailureReason,
    ProtocolInfo,
    ResolveResult,
    VersionsFile,
)
from protocol_versions.parser import (
    merge_custom_protocols,
    parse_versions_file,
    read_versions_file,
)
from protocol_versions.resolver import ProtocolVersionResolver

__all__ = [
    "DEFAULT_VERSIONS_URL",
    "FailureReason",
    "ProtocolInfo",
    "ProtocolVersionResolver",
    "ResolveResult",
    "ResolverConfig",
    "VersionsCache",
    "VersionsEmptyBodyError",
    "VersionsError",
    "VersionsFetcher",
    "VersionsFile",
    "VersionsIOError",
    "VersionsLegacyFormatError",
    "VersionsNetworkError",
    "VersionsParseError",
    "VersionsStatusError",
    "load_custom_protocols",
    "merge_custom_protocols",
    "parse_versions_file",
    "read_versions_file",
]
