from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
ROOT_LOGGER = "TableCanvas"


def resolve_logs_dir(log_dir_name: str = config.LOG_DIR_NAME) -> Path:
    """Description: Resolve the directory that holds canvas logs
    Inputs: log_dir_name: str
    Tries TABLECANVAS_LOG_DIR, the XDG state location, then cwd/logs, then the temp dir.
    """
    candidates = []
    env_override = os.environ.get(config.LOG_DIR_ENV)
    if env_override:
        candidates.append(Path(env_override).expanduser())

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    candidates.append(state_home / log_dir_name)
    candidates.append(Path.cwd() / "logs" / log_dir_name)

    for target in candidates:
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        return target

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str,
    *,
    retention: int = config.LOG_RETENTION,
    max_bytes: int = config.LOG_MAX_BYTES,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Description: Rotating file handler keeping `retention` files
    Inputs: log_dir: Path, filename: str, retention: int, max_bytes: int, formatter: Optional[logging.Formatter]
    """
    retention = max(1, retention)
    backup_count = max(0, retention - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def resolve_log_level(debug_enabled: bool) -> int:
    return logging.DEBUG if debug_enabled else logging.INFO


def configure_logging(debug_enabled: bool = False, log_dir: Optional[Path] = None) -> Path:
    """Description: Attach file and console handlers to the TableCanvas logger
    Inputs: debug_enabled: bool, log_dir: Optional[Path]
    Returns the log file path.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(resolve_log_level(debug_enabled))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    target_dir = log_dir if log_dir is not None else resolve_logs_dir()
    logger.addHandler(build_rotating_file_handler(target_dir, config.LOG_FILE, formatter=formatter))

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console.setLevel(logging.WARNING)
    logger.addHandler(console)
    logger.propagate = False
    return target_dir / config.LOG_FILE
