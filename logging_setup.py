from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_level(level: str | None) -> int:
    name = (level or settings.log_level or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def setup_logging(
    log_name: str | None = "app",
    *,
    level: str | None = None,
    to_file: bool = True,
) -> None:
    """
    Call once at process start.
    Configures the root logger with a console handler and, unless
    ``to_file`` is False, a rotating file under ``settings.log_dir``.
    """
    root = logging.getLogger()

    # A second call only adjusts the level; handlers are attached once.
    root.setLevel(_resolve_level(level))
    if root.handlers:
        return

    fmt = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    if not to_file:
        return

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_dir / f"{log_name or 'app'}.log",
        maxBytes=10_000_000,   # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)
