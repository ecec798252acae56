"""Configuration loading and management for sigwarden.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in RegistryConfig)
    2. Global config (~/.sigwarden.toml)
    3. Project config (./sigwarden.toml)
    4. Explicit config file
    5. Environment variables (SIGWARDEN_* prefix)
    6. Keyword overrides

Example:
    >>> config = load_config(fail_on_unresolvable=False)
    >>> config.fail_on_unresolvable
    False
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_TARGET_VERSION = re.compile(r"\d+(\.\d+)?")


@dataclass(frozen=True)
class RegistryConfig:
    """Session-wide settings for a signature registry.

    Attributes:
        Unresolvable references:
            fail_on_unresolvable: Start every parse with the fail policy
                (otherwise warn-and-skip)
            log_missing_signatures: Emit the summary of classes silently
                skipped by bundled catalogs

        Bundled catalogs:
            jdk_target_version: Compiler target used to expand un-versioned
                ``jdk-*`` catalog names (e.g. "1.8", "11")
            catalog_dirs: Extra directories searched for ``<name>.txt``
                before the catalogs shipped with sigwarden

        Output control:
            missing_summary_width: Characters of class names listed in the
                missing-class summary before it is cut off
            verbosity: Logging verbosity level
    """

    # Unresolvable references
    fail_on_unresolvable: bool = True
    log_missing_signatures: bool = True

    # Bundled catalogs
    jdk_target_version: Optional[str] = None
    catalog_dirs: list[str] = field(default_factory=list)

    # Output control
    missing_summary_width: int = 70
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.jdk_target_version is not None and not _TARGET_VERSION.fullmatch(
            self.jdk_target_version
        ):
            raise InvalidConfigError(
                "jdk_target_version", self.jdk_target_version, "expected a version like 1.8 or 11"
            )
        if self.missing_summary_width < 1:
            raise InvalidConfigError(
                "missing_summary_width", self.missing_summary_width, "must be at least 1"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )


DEFAULT_CONFIG = RegistryConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> RegistryConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (highest priority)

    Returns:
        Validated RegistryConfig instance

    Raises:
        ConfigFileError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation

    Example:
        >>> config = load_config(config_file=Path("sigwarden.toml"))
    """
    merged: dict = {}

    global_config = Path.home() / ".sigwarden.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "sigwarden.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    unknown = sorted(set(merged) - set(RegistryConfig.__dataclass_fields__))
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown setting")

    # TOML integers are a common way to write "11"
    target = merged.get("jdk_target_version")
    if isinstance(target, (int, float)) and not isinstance(target, bool):
        merged["jdk_target_version"] = str(target)

    return RegistryConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SIGWARDEN_* environment variables.

    Supported environment variables:
        SIGWARDEN_FAIL_ON_UNRESOLVABLE: bool (true/false/1/0)
        SIGWARDEN_LOG_MISSING_SIGNATURES: bool
        SIGWARDEN_JDK_TARGET_VERSION: str
        SIGWARDEN_CATALOG_DIRS: os.pathsep separated directories
        SIGWARDEN_MISSING_SUMMARY_WIDTH: int
        SIGWARDEN_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any SIGWARDEN_* vars found.
    """
    type_hints = get_type_hints(RegistryConfig)

    result: dict[str, Any] = {}

    for field_name in RegistryConfig.__dataclass_fields__:
        env_key = f"SIGWARDEN_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return [part for part in value.split(os.pathsep) if part]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Settings may live at the top level or under a ``[sigwarden]`` table.

    Raises:
        ConfigFileError: If the file cannot be read or parsed
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        # Python < 3.11
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e)) from e

    section = data.get("sigwarden")
    if isinstance(section, dict):
        return dict(section)
    return data
