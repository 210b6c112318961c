"""Logging helpers."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Configure root logging for the web app and CLI."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
    )
