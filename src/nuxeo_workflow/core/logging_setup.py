"""Logging configuration for the package and the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "nuxeo_workflow"


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Calling this again replaces the previous handler instead of stacking a
    second one.

    Args:
        verbose: Log at DEBUG instead of WARNING.
        console: Console to write to. Defaults to stderr.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
