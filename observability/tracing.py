"""Simple span helper for timing provider calls."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from .logger import log_event


@contextmanager
def span(name: str, ref: str = "-") -> Iterator[None]:
    start = time.time()
    status = "ok"
    try:
        yield
    except Exception:
        status = "error"
        raise
    finally:
        elapsed_ms = int((time.time() - start) * 1000)
        log_event("span", ref, node=name, ms=elapsed_ms, status=status)


__all__ = ["span"]
