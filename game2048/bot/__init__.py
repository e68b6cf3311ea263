"""Chat bot front end: message codec and interaction handling."""

from __future__ import annotations

from .codec import decode_board, decode_score, encode_board, encode_score, render
from .handler import InteractionHandler, TurnResult, handle_interaction, parse_action, play_turn

__all__ = [
    "InteractionHandler",
    "TurnResult",
    "decode_board",
    "decode_score",
    "encode_board",
    "encode_score",
    "handle_interaction",
    "parse_action",
    "play_turn",
    "render",
]
