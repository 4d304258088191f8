from __future__ import annotations

import logging
import os
from typing import Optional

from .save import SAVE_FILE_NAME

DEFAULT_LOG_FILE = 'saa.log'


def _flag(name: str) -> bool:
    return os.getenv(name, '0').lower() in ('1', 'true', 'yes', 'on')


def debug_enabled() -> bool:
    return _flag('SAA_DEBUG')


def save_path() -> str:
    """Save file location; SAA_SAVE_FILE overrides the default in the working directory."""
    return os.getenv('SAA_SAVE_FILE') or SAVE_FILE_NAME


def seed_from_env() -> Optional[int]:
    """Fixed shuffle seed from SAA_SEED, or None to seed from the clock."""
    raw = os.getenv('SAA_SEED')
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning('ignoring non-integer SAA_SEED=%r', raw)
        return None


def configure_logging() -> None:
    """
    Attaches a file handler when SAA_DEBUG or SAA_LOG_FILE is set.
    The terminal belongs to curses, so nothing is logged to the console.
    """
    log_file = os.getenv('SAA_LOG_FILE')
    debug = debug_enabled()
    if not log_file and not debug:
        return
    logging.basicConfig(
        filename=log_file or DEFAULT_LOG_FILE,
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
