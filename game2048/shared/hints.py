from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass
class Hint:
    """Structured hint for user guidance.

    Attributes:
        title: Short title describing the hint.
        message: Main explanatory message.
        tips: Optional list of short actionable tips.
        command_examples: Optional list of command examples to show.
        code: Optional machine-readable code (e.g., "INVALID_CONFIG").
        context: Optional context tags (e.g., ["bot", "config"]).
    """

    title: str
    message: str
    tips: list[str] | None = None
    command_examples: list[str] | None = None
    code: str | None = None
    context: list[str] | None = None


MALFORMED_INTERACTION = Hint(
    title="Malformed interaction",
    message="The interaction payload does not contain a game board.",
    tips=[
        "Check that the message has four rows of four buttons",
        "Tile labels must be decimal numbers or the blank placeholder",
        "Only messages rendered by this bot can be decoded",
    ],
    command_examples=["game2048 inspect message.json"],
    code="MALFORMED_INTERACTION",
    context=["bot", "codec"],
)

UNSUPPORTED_INTERACTION = Hint(
    title="Unsupported interaction",
    message="The bot only answers pings, its own command and its own buttons.",
    tips=[
        "Register the command under the configured name (GAME2048_COMMAND_NAME)",
        "Route only button interactions to the handler",
    ],
    code="UNSUPPORTED_INTERACTION",
    context=["bot"],
)

RANDOM_SOURCE_UNAVAILABLE = Hint(
    title="Randomness unavailable",
    message="The operating system could not provide random numbers for tile spawning.",
    tips=[
        "Set GAME2048_SEED to use a seeded generator instead",
        "Check the host's entropy source",
    ],
    command_examples=["GAME2048_SEED=42 game2048 play"],
    code="RANDOM_SOURCE_UNAVAILABLE",
    context=["board", "env"],
)

INVALID_CONFIG = Hint(
    title="Invalid configuration",
    message="Configuration is missing or malformed.",
    tips=[
        "Check GAME2048_* environment variables",
        "Check .env and ~/.game2048/.env",
        "GAME2048_FOUR_PROBABILITY must be between 0 and 1",
    ],
    code="INVALID_CONFIG",
    context=["config"],
)


def render_hints(hints: Iterable[Hint] | None, *, design: Any | None = None) -> None:
    """Render a collection of hints using the console design system.

    If the console is unavailable (headless library use), this is a no-op.
    """
    if not hints:
        return

    if design is None:
        try:
            from game2048.utils.console import console as design  # lazy import
        except ImportError:
            return

    for hint in hints:
        # Compact rendering - skip title if same as message
        if hint.title and hint.title != hint.message:
            design.warning(f"{hint.title}: {hint.message}")
        else:
            design.warning(hint.message)

        if hint.tips:
            for tip in hint.tips:
                design.info(f"  • {tip}")

        if hint.command_examples:
            for cmd in hint.command_examples:
                design.command_example(cmd)
