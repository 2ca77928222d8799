"""
Logging setup shared by the CLI and the Flask app.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", format_string: Optional[str] = None) -> None:
    """
    Configure root logging once for an entry point.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR)
        format_string: Custom format string (uses DEFAULT_FORMAT if None)

    Raises:
        ValueError: If level is not a known level name
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"unknown log level: {level}")
    # Reports go to stdout, so logs stay on stderr.
    logging.basicConfig(
        level=numeric,
        format=format_string or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
