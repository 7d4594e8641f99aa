"""
Observability: logging setup and per-run context.

Provides:
- configure_logging: console + rotating file handlers
- set_log_context / view_context: run tag, root and view stamped on each line
"""

from infrastructure.observability.logging import (
    configure_logging,
    make_run_tag,
    set_log_context,
    view_context,
)

__all__ = [
    "configure_logging",
    "set_log_context",
    "view_context",
    "make_run_tag",
]
