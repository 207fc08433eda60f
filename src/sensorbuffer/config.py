"""Configuration loading and management for SensorBuffer.

Configuration sources are merged in priority order:
    1. Defaults (defined in BufferConfig)
    2. Global config (~/.sensorbuffer.toml)
    3. Project config (./sensorbuffer.toml)
    4. Explicit config file
    5. Environment variables (SENSORBUFFER_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(root_dir="/var/spool/sensors", verbose=True)
    >>> config.verbosity
    'verbose'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ConfigurationError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "SENSORBUFFER_"
GLOBAL_CONFIG_NAME = ".sensorbuffer.toml"
PROJECT_CONFIG_NAME = "sensorbuffer.toml"

# Collision suffixes are drawn from [0, suffix_range); never below this.
MIN_SUFFIX_RANGE = 10000


@dataclass(frozen=True)
class BufferConfig:
    """Settings for an event buffer.

    Attributes:
        root_dir: Storage root; must exist when a writer is opened.
        timezone: IANA zone name used for timestamps and day directories
            (None = local system zone).
        suffix_range: Exclusive upper bound of the random suffix appended on
            filename collisions.
        pretty_print: Indent written XML documents.
        verbosity: Logging verbosity level.
    """

    root_dir: Optional[str] = None
    timezone: Optional[str] = None
    suffix_range: int = MIN_SUFFIX_RANGE
    pretty_print: bool = False
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.suffix_range < MIN_SUFFIX_RANGE:
            raise ConfigurationError(
                f"suffix_range must be at least {MIN_SUFFIX_RANGE}",
                key="suffix_range",
                value=self.suffix_range,
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ConfigurationError(
                "verbosity must be one of quiet/normal/verbose",
                key="verbosity",
                value=self.verbosity,
            )
        if self.timezone is not None:
            _resolve_timezone(self.timezone)

    @property
    def root_path(self) -> Optional[Path]:
        """Storage root as a Path, with ``~`` expanded."""
        if self.root_dir is None:
            return None
        return Path(self.root_dir).expanduser()

    @property
    def tzinfo(self) -> Optional[tzinfo]:
        """Resolved timezone, or None for the local system zone."""
        if self.timezone is None:
            return None
        return _resolve_timezone(self.timezone)


def _resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"unknown timezone: {e}", key="timezone", value=name) from e


def load_config(config_file: Optional[Path] = None, **overrides) -> BufferConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``verbose``
            and ``quiet`` booleans are folded into ``verbosity``; ``None``
            values are ignored.

    Returns:
        Validated BufferConfig instance

    Raises:
        ConfigurationError: If a config file or value is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigurationError("config file not found", source=config_file)
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

    merged.update({k: v for k, v in overrides.items() if v is not None})

    if isinstance(merged.get("root_dir"), Path):
        merged["root_dir"] = str(merged["root_dir"])

    try:
        return BufferConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(str(e)) from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SENSORBUFFER_* environment variables.

    Supported environment variables:
        SENSORBUFFER_ROOT_DIR: str
        SENSORBUFFER_TIMEZONE: str
        SENSORBUFFER_SUFFIX_RANGE: int
        SENSORBUFFER_PRETTY_PRINT: bool (true/false/1/0)
        SENSORBUFFER_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any SENSORBUFFER_* vars found.
    """
    type_hints = get_type_hints(BufferConfig)

    result: dict[str, Any] = {}

    for field_name in BufferConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise ConfigurationError(str(e), key=env_key, value=env_value) from e

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        type_hint = next(t for t in args if t is not type(None))

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"cannot read config file: {e}", source=path) from e
