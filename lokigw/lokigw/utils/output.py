"""Console and logging setup shared by the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()


def configure_logging(level: str = "WARNING") -> None:
    """Route library log records through rich on stderr."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    handler = RichHandler(
        console=Console(stderr=True), show_path=False, rich_tracebacks=True
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.handlers = [handler]
