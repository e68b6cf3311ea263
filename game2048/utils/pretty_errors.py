from __future__ import annotations

import logging
import sys
from typing import Any

from game2048.utils.console import console

logger = logging.getLogger(__name__)


def _render_and_fallback(exc_type: type[BaseException], value: BaseException, tb: Any) -> None:
    """Print the default traceback, then the formatted error with its hints.

    Only game2048 errors get the formatted rendering; everything else keeps
    the default handler's output alone.
    """
    sys.__excepthook__(exc_type, value, tb)

    from game2048.shared.exceptions import Game2048Exception  # lazy import

    if isinstance(value, Game2048Exception):
        # Flush stderr to ensure traceback is printed first
        sys.stderr.flush()
        console.console.print("")
        console.render_exception(value)


def install_pretty_errors() -> None:
    """Install the global pretty error handler for uncaught exceptions."""
    sys.excepthook = _render_and_fallback
    logger.debug("Installed pretty error handler")
