"""Application logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler


def setup_logging(log_path: str | Path = "ifwifi.log", verbose: bool = False) -> logging.Logger:
    """Log everything to ``log_path``; the console shows INFO, or DEBUG when verbose."""
    logger = logging.getLogger("ifwifi")
    console_level = logging.DEBUG if verbose else logging.INFO
    if logger.handlers:
        for handler in logger.handlers:
            if isinstance(handler, RichHandler):
                handler.setLevel(console_level)
        return logger

    logger.setLevel(logging.DEBUG)
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s"))
    logger.addHandler(file_handler)

    console_handler = RichHandler(markup=True, show_path=False, rich_tracebacks=True)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)
    return logger
