"""Logging setup for the CLI.

User-facing output goes through the Rich console; loguru carries
diagnostics (executed commands, failures) to stderr.
"""

import sys

from loguru import logger


def configure_logging(verbose: bool = False) -> None:
    """Configure the loguru sink.

    Args:
        verbose: Emit DEBUG records (every executed command) when True,
                 otherwise only warnings and errors
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> {message}",
        colorize=True,
    )
