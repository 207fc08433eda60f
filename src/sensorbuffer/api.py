"""Public API for SensorBuffer.

Example:
    >>> from sensorbuffer import open_buffer
    >>>
    >>> writer = open_buffer("/var/spool/sensors")
    >>> writer.write("IDE", "Activity", "src/app.py", "alice@example.com",
    ...              {"editor": "vim"})
    PosixPath('/var/spool/sensors/alice@example.com/2024_01_15/2024-01-15T10-30-00.000+01-00_IDE')
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .config import BufferConfig, load_config
from .exceptions import ConfigurationError
from .logging_config import get_logger
from .storage.writer import EventWriter

logger = get_logger(__name__)


def open_buffer(
    root: Optional[Union[str, Path]] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> EventWriter:
    """Create an ``EventWriter`` from configuration.

    Args:
        root: Storage root; takes precedence over the configured ``root_dir``.
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., timezone="UTC")

    Returns:
        Writer for the resolved storage root.

    Raises:
        ConfigurationError: If configuration is invalid or no root is set.
        DirectoryNotFound: If the storage root does not exist.
    """
    if root is not None:
        overrides["root_dir"] = str(root)

    return writer_from_config(load_config(config_file=config_file, **overrides))


def writer_from_config(config: BufferConfig) -> EventWriter:
    """Build an ``EventWriter`` from an already loaded configuration.

    Raises:
        ConfigurationError: If the configuration has no ``root_dir``.
        DirectoryNotFound: If the storage root does not exist.
    """
    if config.root_path is None:
        raise ConfigurationError(
            "no storage root given; pass root or set root_dir / SENSORBUFFER_ROOT_DIR"
        )

    logger.debug(f"Opening event buffer at {config.root_path}")
    return EventWriter(
        config.root_path,
        tz=config.tzinfo,
        suffix_range=config.suffix_range,
        pretty_print=config.pretty_print,
    )
