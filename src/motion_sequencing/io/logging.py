"""Define utility functions to simplify logging to the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("motion_sequencing")
console = Console()


def configure_logging(level: int = logging.INFO) -> None:
    """Route the package's log records through a Rich handler on the shared console."""
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)


def log_info(message: str) -> None:
    """Log the given string as an informational status message."""
    logger.info(message)


def log_warning(message: str) -> None:
    """Log the given string as a warning."""
    logger.warning(message)
