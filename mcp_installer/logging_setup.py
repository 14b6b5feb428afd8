"""
Logging configuration.

Status lines for the operator go to stdout through the Reporter; log
records go to stderr through a RichHandler so the two never interleave in
redirected output.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_CONSOLE = Console(stderr=True, soft_wrap=True)

_HANDLER_NAME = "mcp_installer.console"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Attach a RichHandler to the package logger.

    Calling this again replaces the handler instead of adding another.

    Args:
        verbose: Log DEBUG records instead of WARNING and above

    Returns:
        The package logger
    """
    logger = logging.getLogger("mcp_installer")
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = RichHandler(
        console=LOG_CONSOLE,
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
    )
    # RichHandler renders the level column itself
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.set_name(_HANDLER_NAME)

    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
