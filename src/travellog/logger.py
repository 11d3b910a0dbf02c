# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "travellog-rich"


def configure_logging(level: str = "WARNING") -> None:
    """Route the travellog logger hierarchy through a rich handler on stderr.

    Safe to call more than once; the level is updated and the handler is only
    attached the first time.
    """
    logger = logging.getLogger("travellog")
    logger.setLevel(level.upper())
    logger.propagate = False

    if any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
