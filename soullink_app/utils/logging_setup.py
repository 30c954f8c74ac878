"""Logging setup utility for the project.

Usage:
    from soullink_app.utils.logging_setup import setup_logging
    setup_logging()                       # INFO a stdout
    setup_logging(log_to_file=True)       # + logs/soullink.log rotativo
"""
from __future__ import annotations
import logging
import logging.handlers
from pathlib import Path
import sys

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
LOG_FILE = 'soullink.log'

# requests/sqlalchemy son muy verbosos en DEBUG
NOISY_LOGGERS = ('urllib3', 'sqlalchemy.engine')

def setup_logging(level: int = logging.INFO, log_to_file: bool = False, log_dir: str | None = None,
                  force: bool = False) -> logging.Logger:
    root = logging.getLogger()
    if root.handlers and not force:
        # Already configured
        return root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.setLevel(level)

    fmt = logging.Formatter(LOG_FORMAT)

    ch = logging.StreamHandler(stream=sys.stdout)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_to_file:
        path = Path(log_dir or (Path.cwd() / 'logs'))
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(path / LOG_FILE, maxBytes=2_000_000, backupCount=3, encoding='utf-8')
        fh.setFormatter(fmt)
        root.addHandler(fh)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return root
