"""
Root logger setup for wordle-server.

Every module logs through logging.getLogger(__name__), so one call here decides
where the game, rollover and auth messages go. uvicorn is started with
log_config=None and inherits the same handlers.
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

# urllib3: the CLI's requests session logs every connection.
# uvicorn.access: one line per request, and the routes already log game events.
QUIET_LOGGERS = ("urllib3", "uvicorn.access")


def _open_log_file(log_dir: Path | str, formatter: logging.Formatter) -> logging.FileHandler:
    dir_path = Path(log_dir)
    dir_path.mkdir(parents=True, exist_ok=True)
    started = datetime.now(tz=timezone.utc).strftime(LOG_FILE_TIMESTAMP_FORMAT)
    handler = logging.FileHandler(dir_path / f"{started}.log", encoding="utf-8")
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_dir: Path | str | None = None,
    level: int | str = logging.INFO,
) -> Path | None:
    """
    Send logs to stdout and, when LOG_DIR is set, to a file per server start
    (LOG_DIR/<utc start time>.log). Returns the file path, or None.

    level accepts a logging constant or a name such as "DEBUG" from LOG_LEVEL.
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [stdout_handler]
    file_handler = None
    if log_dir is not None:
        file_handler = _open_log_file(log_dir, formatter)
        handlers.append(file_handler)

    root = logging.getLogger()
    root.setLevel(level)
    # replace rather than add, so calling twice never duplicates lines
    root.handlers[:] = handlers

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if file_handler is None:
        return None
    return Path(file_handler.baseFilename)
