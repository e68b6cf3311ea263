"""game2048 exception system.

Errors carry structured hints for the CLI, and generic exceptions chained
into the base class are classified automatically:

    try:
        value = int(label)
    except ValueError as e:
        raise Game2048Exception(f"Invalid tile label {label!r}") from e
        # becomes InteractionError with hints
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import ValidationError

from game2048.shared.hints import (
    INVALID_CONFIG,
    MALFORMED_INTERACTION,
    RANDOM_SOURCE_UNAVAILABLE,
    UNSUPPORTED_INTERACTION,
    Hint,
)


class Game2048Exception(Exception):
    """Base exception class for all game2048 errors.

    Usage:
        raise Game2048Exception() from e  # Auto-converts to appropriate subclass
        raise Game2048Exception("Custom message") from e  # With custom message
    """

    def __new__(cls, message: str = "", *args: Any, **kwargs: Any) -> Any:
        """Auto-convert generic exceptions to specific game2048 exceptions when chained."""
        import sys

        # Only intercept for the base class, not subclasses
        if cls is not Game2048Exception:
            return super().__new__(cls)

        # Check if we're in a 'raise...from' context
        exc_type, exc_value, _ = sys.exc_info()
        if exc_type and exc_value:
            if isinstance(exc_value, Game2048Exception):
                return exc_value
            elif isinstance(exc_value, Exception):
                result = cls._analyze_exception(exc_value, message or str(exc_value))
                # Uncategorized errors are re-raised unchanged
                if type(result) is Game2048Exception:
                    raise exc_value from None
                return result

        return super().__new__(cls)

    # Subclasses can override this class attribute
    default_hints: ClassVar[list[Hint]] = []

    def __init__(self, message: str = "", *, hints: list[Hint] | None = None) -> None:
        # If we already have args set (from _analyze_exception), don't override them
        if not self.args:
            super().__init__(message)
        self.message = message or (self.args[0] if self.args else "")
        # If hints not provided, use defaults defined by subclass
        self.hints: list[Hint] = hints if hints is not None else list(self.default_hints)

    def __str__(self) -> str:
        return str(self.args[0]) if self.args and self.args[0] else ""

    @classmethod
    def _analyze_exception(cls, e: Exception, message: str) -> Game2048Exception:
        """Pick the subclass matching a chained exception."""
        error_msg = str(e).lower()
        final_msg = message or str(e)

        patterns = [
            # (condition_func, exception_class)
            (
                lambda: isinstance(e, ValidationError) and "for settings" in error_msg,
                ConfigError,
            ),
            (
                lambda: isinstance(e, ValueError)
                and ("label" in error_msg or "invalid literal" in error_msg),
                InteractionError,
            ),
            (lambda: isinstance(e, (ValidationError, KeyError, IndexError)), InteractionError),
            (lambda: isinstance(e, (OSError, NotImplementedError)), RandomSourceError),
            (lambda: "config" in error_msg or "environment variable" in error_msg, ConfigError),
        ]

        for condition, exception_class in patterns:
            if condition():
                # Bypass our custom __new__ and set args before __init__
                instance = Exception.__new__(exception_class)
                instance.args = (final_msg,)
                instance.__init__(final_msg)
                return instance

        # No pattern matched - return base exception instance
        instance = Exception.__new__(Game2048Exception)
        instance.args = (final_msg,)
        instance.__init__(final_msg)
        return instance


class InteractionError(Game2048Exception):
    """Malformed or unsupported chat interaction payload."""

    status_code: ClassVar[int] = 400
    default_hints: ClassVar[list[Hint]] = [MALFORMED_INTERACTION]


class UnsupportedInteractionError(InteractionError):
    """Interaction type, command or component the bot does not handle."""

    default_hints: ClassVar[list[Hint]] = [UNSUPPORTED_INTERACTION]


class RandomSourceError(Game2048Exception):
    """The randomness source failed; the game cannot continue."""

    default_hints: ClassVar[list[Hint]] = [RANDOM_SOURCE_UNAVAILABLE]


class ConfigError(Game2048Exception):
    """Invalid or missing configuration."""

    default_hints: ClassVar[list[Hint]] = [INVALID_CONFIG]
