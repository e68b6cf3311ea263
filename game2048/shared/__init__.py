from __future__ import annotations

from .exceptions import (
    ConfigError,
    Game2048Exception,
    InteractionError,
    RandomSourceError,
    UnsupportedInteractionError,
)
from .hints import Hint, render_hints

__all__ = [
    "ConfigError",
    "Game2048Exception",
    "Hint",
    "InteractionError",
    "RandomSourceError",
    "UnsupportedInteractionError",
    "render_hints",
]
