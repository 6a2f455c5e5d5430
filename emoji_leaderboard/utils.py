"""
Shared utilities for the Emoji Leaderboard.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import json
import logging
import shutil
import tempfile
from pathlib import Path

from emoji_leaderboard.config import ALLOWED_DATASETS


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def set_package_log_level(level: int) -> None:
    """Apply a logging level to every logger already created by this package."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("emoji_leaderboard") and isinstance(logger, logging.Logger):
            logger.setLevel(level)


# --- File Operations ---
def atomic_write_json(data, path: Path) -> None:
    """
    Write JSON-serializable data to a file atomically using a temporary file.

    This prevents a half-written cache file if the write is interrupted.

    Args:
        data: Object to serialize (pretty-printed, UTF-8)
        path: Destination path for the JSON file
    """
    logger = setup_logging(__name__)

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            delete=False,
            suffix='.json',
            dir=path.parent  # Same filesystem for atomic move
        ) as tmp:
            tmp_path = Path(tmp.name)
            json.dump(data, tmp, ensure_ascii=False, indent=2)

        # Atomic move (rename) to final destination
        shutil.move(str(tmp_path), str(path))
        logger.debug(f"Atomically wrote {len(data)} records to {path}")

    except Exception:
        # Clean up temp file if it exists
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise


# --- Validation ---
def validate_dataset(dataset: str) -> None:
    """
    Validate that a dataset name is allowed.

    Args:
        dataset: Dataset name to validate

    Raises:
        ValueError: If dataset name is not in ALLOWED_DATASETS
    """
    if dataset not in ALLOWED_DATASETS:
        raise ValueError(
            f"Invalid dataset: '{dataset}'. "
            f"Allowed values: {', '.join(sorted(ALLOWED_DATASETS))}"
        )


__all__ = [
    # Logging
    'setup_logging',
    'set_package_log_level',
    # File operations
    'atomic_write_json',
    # Validation
    'validate_dataset',
]
