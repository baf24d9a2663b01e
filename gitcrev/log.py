"""Logging setup for the git-crev command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False) -> None:
    """Route gitcrev log records to stderr through rich.

    Args:
        verbose: Log at DEBUG level instead of WARNING
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("gitcrev")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
