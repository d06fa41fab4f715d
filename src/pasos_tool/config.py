"""Logger y version del paquete."""

from __future__ import annotations

import logging
from importlib import metadata


def get_version() -> str:
    """Return pasos_tool version."""
    try:
        return metadata.version("pasos_tool")
    except metadata.PackageNotFoundError:
        return "Version unknown"


def get_logger() -> logging.Logger:
    """Gets the pasos_tool logger."""
    logger = logging.getLogger("pasos_tool")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)s - %(message)s",  # noqa: E501
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger
