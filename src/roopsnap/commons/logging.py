"""
Centralized logging.

One place to configure stdlib logging for the whole app; feature modules
either import `logger` or call `logging.getLogger(__name__)`.
"""

from __future__ import annotations

import logging
from functools import lru_cache


@lru_cache
def initialize_logger() -> logging.Logger:
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=logging.INFO,
    )
    return logging.getLogger("roopsnap")


logger = initialize_logger()
