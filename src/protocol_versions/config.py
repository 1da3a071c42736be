"""Configuration for the protocol versions resolver.

Environment variables:
- PROTOCOL_VERSIONS_URL: Remote versions.json URL (optional; defaults to
  DEFAULT_VERSIONS_URL).
- PROTOCOL_VERSIONS_DIR: Directory holding the cached versions.json
  (optional; defaults to platformdirs user_data_dir).
- PROTOCOL_VERSIONS_TIMEOUT_SECONDS: HTTP timeout in seconds (optional;
  default 10; must be >0).
- PROTOCOL_VERSIONS_CONFIG: YAML file with a ``custom_protocols`` mapping
  (optional).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from platformdirs import user_data_dir

logger = logging.getLogger(__name__)

DEFAULT_VERSIONS_URL = (
    "https://raw.githubusercontent.com/Andre601/OneVersionRemake/master/versions.json"
)
USER_AGENT = "OneVersionRemake"
CACHE_FILE_NAME = "versions.json"
CUSTOM_SOURCE = "Custom"
DEFAULT_TIMEOUT_SECONDS = 10.0


def load_custom_protocols(path: str | Path | None) -> dict[int, str]:
    """Load locally configured protocol overrides from a YAML file.

    The file is expected to look like::

        custom_protocols:
          754: "1.16.5"
          755: "Snapshot"

    Args:
        path: Path to the YAML file, or None.

    Returns:
        Mapping of protocol number to display name, in file order. Empty
        when no path is given or the file does not exist.

    Raises:
        ValueError: If the file is not valid YAML or not a mapping.
    """
    if not path:
        return {}
    config_path = Path(path)
    if not config_path.exists():
        logger.info("No custom protocol config at %s", config_path)
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {config_path}")

    raw = data.get("custom_protocols") or {}
    if not isinstance(raw, dict):
        raise ValueError(f"'custom_protocols' in {config_path} must be a mapping")

    custom: dict[int, str] = {}
    for key, value in raw.items():
        try:
            protocol = int(key)
        except (TypeError, ValueError):
            logger.warning("Skipping custom protocol with non-integer key %r", key)
            continue
        if value is None:
            logger.warning("Skipping custom protocol %d without a name", protocol)
            continue
        custom[protocol] = str(value)
    return custom


@dataclass(frozen=True)
class ResolverConfig:
    """Configuration for ProtocolVersionResolver.

    Attributes:
        versions_url: URL of the remote versions.json document.
        data_dir: Directory in which versions.json is cached.
        timeout: HTTP connect/request timeout in seconds.
        user_agent: User-Agent header sent with every request.
        custom_protocols: Protocol number to display name overrides.
    """

    versions_url: str = DEFAULT_VERSIONS_URL
    data_dir: Path = field(
        default_factory=lambda: Path(user_data_dir("protocol-versions"))
    )
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = USER_AGENT
    custom_protocols: dict[int, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "ResolverConfig":
        """Create ResolverConfig from environment variables."""
        raw_timeout = os.getenv("PROTOCOL_VERSIONS_TIMEOUT_SECONDS", "")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            timeout = DEFAULT_TIMEOUT_SECONDS
        if timeout <= 0:
            timeout = DEFAULT_TIMEOUT_SECONDS

        data_dir = os.getenv("PROTOCOL_VERSIONS_DIR")
        return cls(
            versions_url=os.getenv("PROTOCOL_VERSIONS_URL") or DEFAULT_VERSIONS_URL,
            data_dir=(
                Path(data_dir)
                if data_dir
                else Path(user_data_dir("protocol-versions"))
            ),
            timeout=timeout,
            custom_protocols=load_custom_protocols(
                os.getenv("PROTOCOL_VERSIONS_CONFIG")
            ),
        )
