"""
Logging setup with contextvars-based metadata injection.

Every line carries a short run tag, the tree root being rendered and the
current view (whole/focus). Console output is always on; a rotating file log
is added when a path is given. httpx/httpcore are capped at WARNING.
"""

import contextvars
import hashlib
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

_UNSET = "-"

cv_run_tag = contextvars.ContextVar("run_tag", default=_UNSET)
cv_root = contextvars.ContextVar("root", default=_UNSET)
cv_view = contextvars.ContextVar("view", default=_UNSET)

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] r=%(run)s v=%(view)s | %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s | r=%(run)s root=%(root)s v=%(view)s | %(message)s"

NOISY_LOGGERS = ("httpx", "httpcore")


def make_run_tag(run_id: str, length: int = 8) -> str:
    """Short, stable tag for a run id (BLAKE2s hex prefix)."""
    return hashlib.blake2s(run_id.encode("utf-8"), digest_size=8).hexdigest()[:length]


class ContextInjectFilter(logging.Filter):
    """Copy the current run/root/view context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run = cv_run_tag.get() or _UNSET
        record.root = cv_root.get() or _UNSET
        record.view = cv_view.get() or _UNSET
        return True


def set_log_context(
    *,
    run_id_full: str | None = None,
    view: str | None = None,
    root: str | None = None,
) -> None:
    """Update logging context (thread-safe via contextvars)."""
    if run_id_full is not None:
        cv_run_tag.set(make_run_tag(str(run_id_full)))
    if root is not None:
        cv_root.set(str(root))
    if view is not None:
        cv_view.set(str(view))


@contextmanager
def view_context(view: str) -> Iterator[None]:
    """Tag log lines emitted inside the block with ``view``; restores the previous view."""
    token = cv_view.set(view)
    try:
        yield
    finally:
        cv_view.reset(token)


def _handler(handler: logging.Handler, level: int, fmt: str, datefmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    handler.addFilter(ContextInjectFilter())
    return handler


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10_000_000,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Replace the root logger's handlers with console (+ optional rotating file) handlers.

    Safe to call more than once; earlier handlers are dropped.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)  # handlers enforce levels

    root.addHandler(_handler(logging.StreamHandler(), console_level, CONSOLE_FORMAT, "%H:%M:%S"))

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        root.addHandler(_handler(fh, file_level, FILE_FORMAT, "%Y-%m-%d %H:%M:%S"))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured (console_level=%s, file=%s)",
        logging.getLevelName(console_level),
        log_file,
    )
