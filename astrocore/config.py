"""Environment-driven settings.

Values are read at call time so tests can flip them with ``monkeypatch``.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def ephemeris_dir() -> Optional[str]:
    return os.getenv("EPHEMERIS_DIR")


def ephemeris_backend() -> str:
    """Return ``swieph`` (data files) or ``moseph`` (built-in Moshier theory)."""

    raw_backend = os.getenv("EPHEMERIS_BACKEND")
    backend = raw_backend.strip().lower() if raw_backend else "swieph"
    return "moseph" if backend == "moseph" else "swieph"


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
