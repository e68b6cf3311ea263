"""Stateless interaction handler for the chat bot.

Every request rebuilds its own board from the message it was triggered on,
so requests share nothing and need no locking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from game2048.board import GameBoard, MoveDirection, default_spawner
from game2048.bot import codec
from game2048.bot.models import (
    CommandData,
    ComponentData,
    ComponentType,
    Interaction,
    InteractionResponse,
    InteractionResponseData,
    InteractionResponseType,
    InteractionType,
    Message,
    MessageFlags,
)
from game2048.settings import Settings, get_settings
from game2048.shared.exceptions import (
    Game2048Exception,
    InteractionError,
    UnsupportedInteractionError,
)

if TYPE_CHECKING:
    from game2048.board import TileSpawner

logger = logging.getLogger(__name__)

DataT = TypeVar("DataT", CommandData, ComponentData)

ACTIONS: dict[str, MoveDirection] = {
    "up": MoveDirection.UP,
    "down": MoveDirection.DOWN,
    "left": MoveDirection.LEFT,
    "right": MoveDirection.RIGHT,
}


def parse_action(token: str) -> MoveDirection | None:
    """Direction for an action token; None for anything that is not a move."""
    return ACTIONS.get(token)


@dataclass
class TurnResult:
    """Outcome of one button press.

    `action` is None when the token was not a move; the board is then
    unchanged and the display should stay as it is.
    """

    board: GameBoard
    action: MoveDirection | None
    moved: bool
    game_over: bool


def play_turn(message: Message, token: str, spawner: TileSpawner | None = None) -> TurnResult:
    """Decode the board from `message` and apply the action `token` to it."""
    board = codec.decode_board(message, spawner=spawner)
    action = parse_action(token)
    if action is None:
        logger.debug("Ignoring non-move action %r", token)
        return TurnResult(board=board, action=None, moved=False, game_over=board.has_lost())

    moved = board.move(action)
    return TurnResult(board=board, action=action, moved=moved, game_over=board.has_lost())


class InteractionHandler:
    """Answers verified interactions from the chat platform."""

    def __init__(
        self, settings: Settings | None = None, spawner: TileSpawner | None = None
    ) -> None:
        self.settings = settings or get_settings()
        self.spawner = spawner if spawner is not None else default_spawner(self.settings)

    def handle(self, interaction: Interaction) -> InteractionResponse:
        """Build the response for one interaction.

        Raises:
            InteractionError: if the payload is malformed or not one the bot handles
        """
        if interaction.type == InteractionType.PING:
            return InteractionResponse(type=InteractionResponseType.PONG)

        if interaction.type == InteractionType.APPLICATION_COMMAND:
            return self.handle_command(interaction, self._data(interaction, CommandData))

        if interaction.type == InteractionType.MESSAGE_COMPONENT:
            data = self._data(interaction, ComponentData)
            if data.component_type == ComponentType.BUTTON:
                return self.handle_button(interaction, data)

        raise UnsupportedInteractionError(f"Unsupported interaction type {interaction.type!r}")

    def handle_command(self, interaction: Interaction, data: CommandData) -> InteractionResponse:
        if data.name != self.settings.command_name:
            raise UnsupportedInteractionError(f"Unknown command {data.name!r}")

        ephemeral = data.option("ephemeral")
        if not isinstance(ephemeral, bool):
            ephemeral = self.settings.ephemeral_default

        game = GameBoard.new(self.spawner)
        logger.info("New game for user %s (ephemeral=%s)", interaction.author_id(), ephemeral)

        response_data = codec.render(game)
        if ephemeral:
            response_data.flags = MessageFlags.EPHEMERAL
        return InteractionResponse(
            type=InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE, data=response_data
        )

    def handle_button(self, interaction: Interaction, data: ComponentData) -> InteractionResponse:
        message = interaction.message
        if message is None or message.interaction is None:
            raise InteractionError("Button interaction without its game message")

        if interaction.author_id() != message.interaction.user.id:
            return InteractionResponse(
                type=InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
                data=InteractionResponseData(
                    content=(
                        f"Not your game! Start one by running `/{self.settings.command_name}`"
                    ),
                    flags=MessageFlags.EPHEMERAL,
                ),
            )

        turn = play_turn(message, data.custom_id, spawner=self.spawner)
        if turn.action is None:
            return InteractionResponse(type=InteractionResponseType.DEFERRED_UPDATE_MESSAGE)

        logger.info(
            "User %s moved %s: moved=%s score=%d game_over=%s",
            interaction.author_id(),
            turn.action.name.lower(),
            turn.moved,
            turn.board.score,
            turn.game_over,
        )
        return InteractionResponse(
            type=InteractionResponseType.UPDATE_MESSAGE, data=codec.render(turn.board)
        )

    @staticmethod
    def _data(interaction: Interaction, model: type[DataT]) -> DataT:
        if interaction.data is None:
            raise InteractionError(f"{interaction.type.name} interaction without data")
        try:
            return model.model_validate(interaction.data)
        except ValueError as e:
            raise Game2048Exception(f"Invalid {interaction.type.name} data") from e


def handle_interaction(
    payload: dict[str, Any], settings: Settings | None = None
) -> dict[str, Any]:
    """Validate a raw interaction payload and return the JSON response payload."""
    try:
        interaction = Interaction.model_validate(payload)
    except ValueError as e:
        raise Game2048Exception("Invalid interaction payload") from e
    return InteractionHandler(settings).handle(interaction).to_payload()
