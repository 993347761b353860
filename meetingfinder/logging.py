from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


_INITIALIZED = False


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    """Configure application-wide logging through a Rich console handler."""

    global _INITIALIZED
    if _INITIALIZED:
        logging.getLogger().setLevel(getattr(logging, level.upper(), logging.WARNING))
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.addHandler(handler)

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured at level %s", level.upper())


__all__ = ["configure_logging"]
