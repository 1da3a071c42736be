"""Tests for VersionsFile, ProtocolInfo and ResolveResult."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from protocol_versions.errors import VersionsStatusError
from protocol_versions.models import (
    FailureReason,
    ProtocolInfo,
    ResolveResult,
    VersionsFile,
)


def _versions() -> VersionsFile:
    return VersionsFile(
        file_version=4,
        protocols=[
            ProtocolInfo(protocol=754, name="1.16.4", source="PaperMC"),
            ProtocolInfo(protocol=755, name="1.17", source="PaperMC"),
            ProtocolInfo(protocol=754, name="1.16.5", source="Custom"),
        ],
    )


class TestVersionsFile:
    """Tests for the VersionsFile document model."""

    def test_missing_file_version_defaults_to_legacy(self) -> None:
        versions = VersionsFile(protocols=[])
        assert versions.file_version == -1
        assert versions.is_legacy

    def test_positive_file_version_is_not_legacy(self) -> None:
        assert not _versions().is_legacy

    def test_name_of_prefers_last_entry(self) -> None:
        """Custom overrides are appended last and win the lookup."""
        assert _versions().name_of(754) == "1.16.5"
        assert _versions().name_of(755) == "1.17"

    def test_name_of_unknown_protocol(self) -> None:
        assert _versions().name_of(47) is None

    def test_protocol_numbers_are_ordered_and_unique(self) -> None:
        assert _versions().protocol_numbers() == [754, 755]

    def test_to_json_uses_cache_schema(self) -> None:
        versions = VersionsFile(
            file_version=3,
            protocols=[ProtocolInfo(protocol=754, name="1.16.4", source="PaperMC")],
        )
        assert versions.to_json() == (
            '{"file_version":3,"protocols":'
            '[{"protocol":754,"name":"1.16.4","source":"PaperMC"}]}'
        )

    def test_document_is_frozen(self) -> None:
        versions = _versions()
        with pytest.raises(ValidationError):
            versions.file_version = 10  # type: ignore[misc]


class TestResolveResult:
    """Tests for the explicit result type."""

    def test_success(self) -> None:
        result = ResolveResult.success(_versions())
        assert result.ok
        assert result.reason is None
        assert result.versions is not None
        assert result.versions.file_version == 4

    def test_failure_carries_reason_and_message(self) -> None:
        error = VersionsStatusError("Unexpected status 404", status_code=404)
        result = ResolveResult.failure(error)
        assert not result.ok
        assert result.versions is None
        assert result.reason is FailureReason.STATUS
        assert "404" in result.message

    def test_protocols_cannot_be_mutated_in_place(self) -> None:
        versions = _versions()
        assert isinstance(versions.protocols, tuple)
        with pytest.raises(AttributeError):
            versions.protocols.append(  # type: ignore[attr-defined]
                ProtocolInfo(protocol=1, name="x", source="y")
            )
        assert len(versions.protocols) == 3
