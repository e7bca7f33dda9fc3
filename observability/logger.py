"""Structured logging utilities for the CampusPrep backend."""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from typing import Any

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_FILE_LOGS = os.getenv("ENABLE_FILE_LOGS", "0") in ("1", "true", "True")
LOG_FILE = os.getenv("LOG_FILE", "logs/campusprep.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", "5242880"))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "5"))

HUMAN_FORMAT = "[%(asctime)s] %(levelname)s %(name)s :: %(message)s"
HUMAN_DATEFMT = "%Y-%m-%d %H:%M:%S"

_logger = logging.getLogger("campusprep")
_logger.setLevel(LOG_LEVEL)
_logger.propagate = False


def _ensure_handlers() -> None:
    if _logger.handlers:
        return

    # Console: human-readable lines only (stdout)
    human_console = logging.StreamHandler(stream=sys.stdout)
    human_console.setLevel(LOG_LEVEL)
    human_console.setFormatter(logging.Formatter(HUMAN_FORMAT, datefmt=HUMAN_DATEFMT))
    human_console.addFilter(lambda record: getattr(record, "is_json", False) is not True)
    _logger.addHandler(human_console)

    if not ENABLE_FILE_LOGS:
        return

    log_dir = os.path.dirname(LOG_FILE)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    # JSON file handler
    json_file = logging.handlers.RotatingFileHandler(
        LOG_FILE,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
    )
    json_file.setLevel(LOG_LEVEL)
    json_file.setFormatter(logging.Formatter("%(message)s"))
    json_file.addFilter(lambda record: getattr(record, "is_json", False) is True)
    _logger.addHandler(json_file)

    # Human-readable file handler
    human_file_name = LOG_FILE if LOG_FILE.endswith(".log") else f"{LOG_FILE}.log"
    human_file_name = human_file_name.replace(".log", "-human.log")
    human_file = logging.handlers.RotatingFileHandler(
        human_file_name,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
    )
    human_file.setLevel(LOG_LEVEL)
    human_file.setFormatter(logging.Formatter(HUMAN_FORMAT, datefmt=HUMAN_DATEFMT))
    human_file.addFilter(lambda record: getattr(record, "is_json", False) is not True)
    _logger.addHandler(human_file)


def configure_logging(level: str | None = None) -> None:
    """Route module loggers (``logging.getLogger(__name__)``) to stdout as well."""

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level or LOG_LEVEL, format=HUMAN_FORMAT, datefmt=HUMAN_DATEFMT)
    _ensure_handlers()


def _format_human(evt: dict[str, Any]) -> str:
    base = f"ref={evt.get('ref')} kind={evt.get('kind')}"
    extras: list[str] = []
    for key in ("attempt", "index", "score", "role", "outcome", "node", "ms", "status"):
        if key in evt:
            extras.append(f"{key}={evt[key]}")
    return base + (" " + " ".join(extras) if extras else "")


def log_event(kind: str, ref: str, **fields: Any) -> None:
    """Emit a domain event: human line to console/file, JSON line to file.

    ``ref`` names the subject of the event (usually an account id).
    """

    _ensure_handlers()

    payload: dict[str, Any] = {
        "ts": time.time(),
        "trace": str(uuid.uuid4()),
        "kind": kind,
        "ref": ref,
    }
    payload.update(fields)

    # Human line (console + human file handler)
    human_record = _logger.makeRecord(
        name=_logger.name,
        level=logging.INFO,
        fn="",
        lno=0,
        msg=_format_human(payload),
        args=(),
        exc_info=None,
    )
    human_record.is_json = False  # type: ignore[attr-defined]
    _logger.handle(human_record)

    if not ENABLE_FILE_LOGS:
        return

    # JSON line (file only)
    json_record = _logger.makeRecord(
        name=_logger.name,
        level=logging.INFO,
        fn="",
        lno=0,
        msg=json.dumps(payload, ensure_ascii=False, default=str),
        args=(),
        exc_info=None,
    )
    json_record.is_json = True  # type: ignore[attr-defined]
    _logger.handle(json_record)


__all__ = ["log_event", "configure_logging"]
