"""Utility helpers for logging, masking and filename safety.

Security:
    - We never log raw digit strings; identifiers are often personal data.
    - Displayed values can be masked down to their last few digits.
    - Filenames are sanitized before writing reports.
"""

from __future__ import annotations

import logging
import re

SAFE_NAME_RE = re.compile(r"[^A-Za-z0-9_.-]+")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return a configured logger that avoids duplicate handlers."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def mask_digits(value: str, visible: int = 4, mask_char: str = "•") -> str:
    """Mask all but the last `visible` characters of value."""
    if visible <= 0:
        return mask_char * len(value)
    hidden = max(0, len(value) - visible)
    return mask_char * hidden + value[hidden:]


def safe_filename(name: str, suffix: str = "") -> str:
    """Return a filesystem-friendly filename, appending suffix if it is missing."""
    cleaned = SAFE_NAME_RE.sub("_", name).strip("_") or "report"
    if suffix and not cleaned.endswith(suffix):
        cleaned += suffix
    return cleaned
