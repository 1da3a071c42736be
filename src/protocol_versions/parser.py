"""Decode versions.json payloads and merge locally configured overrides."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from protocol_versions.config import CUSTOM_SOURCE
from protocol_versions.errors import VersionsParseError
from protocol_versions.models import ProtocolInfo, VersionsFile

logger = logging.getLogger(__name__)


def parse_versions_file(json_text: str) -> VersionsFile:
    """Decode a versions.json payload.

    A document without ``file_version`` decodes with ``file_version == -1``.

    Args:
        json_text: Raw JSON text.

    Returns:
        The decoded VersionsFile.

    Raises:
        VersionsParseError: If the text is not valid JSON or does not match
            the versions.json schema.
    """
    try:
        return VersionsFile.model_validate_json(json_text)
    except ValidationError as exc:
        logger.warning("Encountered invalid versions JSON.", exc_info=exc)
        raise VersionsParseError(
            f"Invalid versions JSON ({exc.error_count()} errors)"
        ) from exc


def merge_custom_protocols(
    versions: VersionsFile, custom_protocols: Mapping[int, str]
) -> VersionsFile:
    """Append custom protocol overrides after the parsed entries.

    Overrides are not de-duplicated against existing entries; a protocol
    present both upstream and locally appears twice.

    Args:
        versions: Parsed document.
        custom_protocols: Protocol number to display name.

    Returns:
        ``versions`` itself when there are no overrides, else a new
        VersionsFile with the same file_version.
    """
    if not custom_protocols:
        return versions

    custom = [
        ProtocolInfo(protocol=protocol, name=name, source=CUSTOM_SOURCE)
        for protocol, name in custom_protocols.items()
    ]
    return VersionsFile(
        file_version=versions.file_version,
        protocols=(*versions.protocols, *custom),
    )


def read_versions_file(
    json_text: str, custom_protocols: Mapping[int, str]
) -> VersionsFile:
    """Parse ``json_text`` and merge ``custom_protocols`` into it."""
    return merge_custom_protocols(parse_versions_file(json_text), custom_protocols)
