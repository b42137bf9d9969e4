"""
Runtime settings for force_diagram.

These are process-level switches, separate from DiagramConfig (which
describes one diagram):

    - whether the CLI configures logging, and at which level
    - whether a metadata JSON file is written next to each PNG

It provides:
    RuntimeConfig    - structured settings object
    load_config()    - load from environment variables or defaults
    configure_logging()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class RuntimeConfig:
    """
    Attributes
    ----------
    enable_logging:
        Install a root logging handler when the CLI starts.

    log_level:
        Level name for that handler ("DEBUG", "INFO", ...).

    write_metadata:
        Write ``<output>.meta.json`` after each export.
    """

    enable_logging: bool = True
    log_level: str = "INFO"
    write_metadata: bool = True


def _env_flag(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> RuntimeConfig:
    """
    Load RuntimeConfig from environment variables, falling back to defaults.

    Recognized variables:
        FORCE_DIAGRAM_ENABLE_LOGGING   ("true" / "false" / "1" / "0")
        FORCE_DIAGRAM_LOG_LEVEL        (DEBUG|INFO|WARNING|ERROR)
        FORCE_DIAGRAM_WRITE_METADATA   ("true" / "false" / "1" / "0")
    """
    return RuntimeConfig(
        enable_logging=_env_flag("FORCE_DIAGRAM_ENABLE_LOGGING", True),
        log_level=os.getenv("FORCE_DIAGRAM_LOG_LEVEL", "INFO").strip().upper(),
        write_metadata=_env_flag("FORCE_DIAGRAM_WRITE_METADATA", True),
    )


def configure_logging(runtime: Optional[RuntimeConfig] = None) -> None:
    runtime = runtime or load_config()
    if not runtime.enable_logging:
        return
    level = logging.getLevelName(runtime.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
