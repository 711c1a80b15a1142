"""Logging setup for pg-typegen.

Modules obtain loggers through :func:`get_logger`; the command line calls
:func:`configure_logging` once to attach a rich handler to the package logger.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER_NAME = "pg_typegen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: int = logging.WARNING, use_rich: bool = True) -> None:
    """Attach a handler to the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level for the package logger.
        use_rich: Render records with :class:`rich.logging.RichHandler` on stderr.
    """
    global _configured

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(level)

    if _configured:
        return

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    logger.addHandler(handler)
    _configured = True
