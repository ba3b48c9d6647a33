"""Logging setup shared by the generator and the CLI.

All modules obtain loggers through :func:`get_logger` so that every record
lands under the ``sdkgen`` namespace and is rendered by a single
:class:`rich.logging.RichHandler`.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "sdkgen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the ``sdkgen`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: Union[int, str] = logging.WARNING, console: Optional[Console] = None) -> None:
    """Configure the ``sdkgen`` logger hierarchy.

    Safe to call more than once; later calls only adjust the level.

    Args:
        level: Logging level name or number.
        console: Console the handler writes to (stderr by default).
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if _configured:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    _configured = True
