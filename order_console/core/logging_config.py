"""
Logging configuration for the console.

``setup_logging`` configures the root logger from the ``[Logger]``
section: a size-rotated log file under ``LogDir``, an optional console
handler, and a filter that masks sensitive values (tokens, passwords,
account numbers) with asterisks before anything is written. Old log
files past ``MaxAgeDays`` are pruned when logging is configured.
"""

import gzip
import logging
import os
import re
import shutil
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path

from order_console.core.config import LoggerConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second setup_logging call replaces them
_HANDLER_FLAG = "_order_console_handler"

logger = logging.getLogger(__name__)


class MaskingFilter(logging.Filter):
    """Replace every match of the configured patterns with asterisks of equal length."""

    def __init__(self, patterns: list[str]):
        super().__init__()
        self.patterns = [re.compile(p) for p in patterns]

    def mask(self, message: str) -> str:
        for pattern in self.patterns:
            message = pattern.sub(lambda m: "*" * len(m.group(0)), message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        if self.patterns:
            record.msg = self.mask(record.getMessage())
            record.args = None
        return True


def _gzip_namer(name: str) -> str:
    return name + ".gz"


def _gzip_rotator(source: str, dest: str) -> None:
    with open(source, "rb") as f_in, gzip.open(dest, "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    os.remove(source)


def prune_old_logs(log_dir: Path, prefix: str, max_age_days: int) -> list[Path]:
    """Delete log files starting with ``prefix`` older than ``max_age_days``.

    A ``max_age_days`` of 0 disables pruning. Returns the removed paths.
    """
    if max_age_days <= 0 or not log_dir.is_dir():
        return []

    cutoff = time.time() - max_age_days * 24 * 60 * 60
    removed = []
    for path in log_dir.iterdir():
        if not path.is_file() or not path.name.startswith(prefix):
            continue
        if path.stat().st_mtime < cutoff:
            try:
                path.unlink()
            except OSError as exc:
                logger.warning("Failed to remove old log file %s: %s", path, exc)
                continue
            removed.append(path)
    return removed


def setup_logging(config: LoggerConfig) -> Path:
    """Configure the root logger and return the active log file path.

    Handlers installed by a previous call are closed and replaced, so the
    function is safe to call again (tests, app reloads). Handlers added by
    other code are left alone.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            root.removeHandler(handler)
            handler.close()

    root.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    log_dir = Path(config.log_dir).resolve()
    log_dir.mkdir(parents=True, exist_ok=True)
    removed = prune_old_logs(log_dir, config.log_file_name, config.max_age_days)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    masking = MaskingFilter(config.masking_regex_patterns)

    log_path = log_dir / f"{config.log_file_name}.log"
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.max_size_mb * 1024 * 1024,
        backupCount=config.max_backups,
        encoding="utf-8",
    )
    if config.compress:
        file_handler.namer = _gzip_namer
        file_handler.rotator = _gzip_rotator
    handlers: list[logging.Handler] = [file_handler]

    if config.to_console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(masking)
        setattr(handler, _HANDLER_FLAG, True)
        root.addHandler(handler)

    logger.info(
        "Logger initialized: dir=%s file=%s max_size_mb=%d max_backups=%d max_age_days=%d",
        log_dir,
        log_path.name,
        config.max_size_mb,
        config.max_backups,
        config.max_age_days,
    )
    if removed:
        logger.info("Removed %d expired log file(s)", len(removed))
    return log_path
