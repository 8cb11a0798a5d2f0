"""
Runtime settings for the CLI and the Streamlit page.

Values come from environment variables; a ``.env`` file in the working
directory is loaded first. The engine modules read no settings.

  PICTURE_EDITOR_MOSAIC_BLOCK_SIZE   MagicMosaic tile size in pixels (10)
  PICTURE_EDITOR_LOG_LEVEL           logging level name (INFO)
  PICTURE_EDITOR_DEFAULT_FORMAT      download/save format: PNG, JPEG or BMP (PNG)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .filters.pixel import MOSAIC_BLOCK_SIZE
from .image_io import SUPPORTED_FORMATS

ENV_PREFIX = "PICTURE_EDITOR_"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    mosaic_block_size: int = MOSAIC_BLOCK_SIZE
    log_level: str = "INFO"
    default_format: str = "PNG"


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default).strip()


def load_settings(dotenv: bool = True) -> Settings:
    """Build ``Settings`` from the environment.

    Raises:
        ValueError: if a variable holds an invalid value.
    """
    if dotenv:
        load_dotenv()

    raw_block = _env("MOSAIC_BLOCK_SIZE", str(MOSAIC_BLOCK_SIZE))
    try:
        block_size = int(raw_block)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}MOSAIC_BLOCK_SIZE must be an integer, got {raw_block!r}") from None
    if block_size < 1:
        raise ValueError(f"{ENV_PREFIX}MOSAIC_BLOCK_SIZE must be at least 1, got {block_size}")

    log_level = _env("LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"{ENV_PREFIX}LOG_LEVEL is not a logging level: {log_level!r}")

    default_format = _env("DEFAULT_FORMAT", "PNG").upper()
    if default_format == "JPG":
        default_format = "JPEG"
    if default_format not in SUPPORTED_FORMATS:
        raise ValueError(
            f"{ENV_PREFIX}DEFAULT_FORMAT must be one of {', '.join(SUPPORTED_FORMATS)}, got {default_format!r}"
        )

    return Settings(mosaic_block_size=block_size, log_level=log_level, default_format=default_format)


def configure_logging(level: str | int = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
