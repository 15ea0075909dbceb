from __future__ import annotations
import logging
from rich.console import Console
from rich.logging import RichHandler

def setup_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Route the `cjscan` logger tree to stderr through rich."""
    handler = RichHandler(console=console or Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("cjscan")
    root.handlers[:] = [handler]
    root.setLevel(level.upper())
    root.propagate = False
