"""Locate and read the optional ``config.toml``."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "HIFUMI_CONFIG"
DEFAULT_CONFIG_PATH = Path("config.toml")
SECTION = "hifumi"


def config_path() -> Path:
    """Path named by ``HIFUMI_CONFIG``, else ``config.toml`` in the working directory."""
    raw = os.getenv(CONFIG_PATH_ENV, "").strip()
    return Path(raw) if raw else DEFAULT_CONFIG_PATH


def load_section(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Return the ``[hifumi]`` table of the config file.

    A missing file gives an empty table so every setting falls back to the
    environment. A file named explicitly through ``HIFUMI_CONFIG`` must exist.
    """
    target = Path(path) if path is not None else config_path()
    if not target.is_file():
        if path is None and os.getenv(CONFIG_PATH_ENV):
            raise ValueError(f"{CONFIG_PATH_ENV} points at a missing file: {target}")
        return {}

    with target.open("rb") as handle:
        raw = tomllib.load(handle)

    section = raw.get(SECTION, {})
    if not isinstance(section, dict):
        raise ValueError(f"[{SECTION}] in {target} must be a table")

    logger.info("Loaded settings from %s", target)
    return section


__all__ = ["load_section", "config_path", "CONFIG_PATH_ENV"]
