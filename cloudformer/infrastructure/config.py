"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to all Cloudformer settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import json
import logging
import os

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a config value cannot be turned into its typed field."""


@dataclass(frozen=True)
class AWSConfig:
    """Provider connection settings."""
    region: str = ""
    profile: str = ""


@dataclass(frozen=True)
class PollingConfig:
    """Stack supervision timing."""
    interval_seconds: int = 30
    settle_seconds: int = 10
    max_wait_seconds: int = 0  # 0 waits forever

    def __post_init__(self) -> None:
        if self.interval_seconds < 0 or self.settle_seconds < 0:
            raise ValueError("polling intervals cannot be negative")
        if self.max_wait_seconds < 0:
            raise ValueError("max_wait_seconds cannot be negative")


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False


@dataclass(frozen=True)
class CloudformerConfig:
    """Root configuration for the Cloudformer application."""
    aws: AWSConfig = field(default_factory=AWSConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"


def _env_override(data: dict, prefix: str = "CLOUDFORMER") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern CLOUDFORMER_SECTION_KEY.
    For example: CLOUDFORMER_AWS_REGION=eu-west-1,
    CLOUDFORMER_POLLING_INTERVAL_SECONDS=5
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if len(parts) == 2 and parts[0] in ("aws", "polling", "telemetry"):
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
        else:
            data["_".join(parts)] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s must contain a JSON object", path)
        return {}
    return data


def _section(data: dict, name: str) -> dict:
    """Return one config section, ignoring values that are not JSON objects."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        logger.warning("Config section %r must be a JSON object, using defaults", name)
        return {}
    return section


def _build_sub_config(cls, data: dict, name: str):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    try:
        # Convert string numbers to int/bool
        for f in dataclasses.fields(cls):
            if f.name in filtered and isinstance(filtered[f.name], str):
                if f.type == "int":
                    filtered[f.name] = int(filtered[f.name])
                elif f.type == "bool":
                    filtered[f.name] = filtered[f.name].lower() in ("true", "1", "yes")
        return cls(**filtered)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid {name} config: {e}") from e


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "CLOUDFORMER",
) -> CloudformerConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (CLOUDFORMER_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to cloudformer.json in CWD.
        env_prefix: Environment variable prefix. Defaults to CLOUDFORMER.
    """
    config_path = Path(path) if path else Path("cloudformer.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return CloudformerConfig(
        aws=_build_sub_config(AWSConfig, _section(data, "aws"), "aws"),
        polling=_build_sub_config(PollingConfig, _section(data, "polling"), "polling"),
        telemetry=_build_sub_config(
            TelemetryConfig, _section(data, "telemetry"), "telemetry"
        ),
        log_level=data.get("log_level", "WARNING"),
    )
