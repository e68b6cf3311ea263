"""Tests for the stateless interaction handler."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from game2048.board import VACANT, GameBoard, MoveDirection, NoopTileSpawner, Tile
from game2048.bot.codec import VACANT_LABEL, decode_board, render
from game2048.bot.handler import InteractionHandler, handle_interaction, parse_action, play_turn
from game2048.bot.models import (
    Interaction,
    InteractionResponseType,
    Message,
    MessageFlags,
)
from game2048.settings import Settings
from game2048.shared.exceptions import InteractionError, UnsupportedInteractionError
from game2048.shared.hints import UNSUPPORTED_INTERACTION

T = Tile
V = VACANT

SAMPLE = [
    [T(2), T(2), T(2), T(2)],
    [T(2), T(8), T(1), V],
    [V, V, V, V],
    [T(2), T(4), T(1), T(2)],
]

ALMOST_STUCK = [
    [T(2), T(4), T(2), T(4)],
    [T(4), T(2), T(4), T(2)],
    [T(2), T(4), T(2), T(4)],
    [T(4), T(2), T(8), T(8)],
]

STUCK = [
    [T(2), T(4), T(2), T(4)],
    [T(4), T(2), T(4), T(2)],
    [T(2), T(4), T(2), T(4)],
    [T(4), T(2), T(4), T(2)],
]

PLAYER = "1001"


def game_message(cells, score: int = 0, owner: str = PLAYER) -> dict[str, Any]:
    data = render(GameBoard.from_cells(cells, score=score))
    return {
        "id": "m1",
        "content": data.content,
        "components": [row.model_dump(mode="json") for row in data.components or []],
        "interaction": {"id": "i0", "name": "2048", "user": {"id": owner}},
    }


def button_press(custom_id: str, cells=SAMPLE, score: int = 0, user: str = PLAYER):
    return {
        "id": "i1",
        "type": 3,
        "data": {"custom_id": custom_id, "component_type": 2},
        "message": game_message(cells, score),
        "member": {"user": {"id": user}, "nick": "player"},
    }


def command(name: str = "2048", options: list[dict[str, Any]] | None = None):
    return {
        "id": "i2",
        "type": 2,
        "data": {"id": "c1", "name": name, "options": options or []},
        "user": {"id": PLAYER},
    }


@pytest.fixture
def handler() -> InteractionHandler:
    return InteractionHandler(Settings(), spawner=NoopTileSpawner())


class TestParseAction:
    @pytest.mark.parametrize(
        ("token", "direction"),
        [
            ("up", MoveDirection.UP),
            ("down", MoveDirection.DOWN),
            ("left", MoveDirection.LEFT),
            ("right", MoveDirection.RIGHT),
        ],
    )
    def test_directions(self, token, direction):
        assert parse_action(token) is direction

    @pytest.mark.parametrize("token", ["0-0", "UP", "", "jump"])
    def test_other_tokens_are_not_moves(self, token):
        assert parse_action(token) is None


class TestPlayTurn:
    def test_move(self):
        message = Message.model_validate(game_message(SAMPLE, score=10))
        turn = play_turn(message, "up", spawner=NoopTileSpawner())
        assert turn.action is MoveDirection.UP
        assert turn.moved
        assert not turn.game_over
        assert turn.board.cells[0] == [T(4), T(2), T(2), T(4)]
        assert turn.board.score == 10 + 4 + 2 + 4

    def test_unknown_token_is_a_noop(self):
        message = Message.model_validate(game_message(SAMPLE, score=10))
        turn = play_turn(message, "3-2", spawner=NoopTileSpawner())
        assert turn.action is None
        assert not turn.moved
        assert turn.board == GameBoard.from_cells(SAMPLE, score=10)

    def test_merge_frees_a_cell(self):
        message = Message.model_validate(game_message(ALMOST_STUCK))
        turn = play_turn(message, "left", spawner=NoopTileSpawner())
        assert turn.moved
        assert not turn.game_over
        assert turn.board.cells[3] == [T(4), T(2), T(16), V]
        assert turn.board.score == 16

    def test_lost_board(self):
        message = Message.model_validate(game_message(STUCK, score=30))
        turn = play_turn(message, "up", spawner=NoopTileSpawner())
        assert turn.action is MoveDirection.UP
        assert not turn.moved
        assert turn.game_over


class TestHandle:
    def test_ping(self, handler):
        response = handler.handle(Interaction.model_validate({"type": 1}))
        assert response.type == InteractionResponseType.PONG
        assert response.to_payload() == {"type": 1}

    def test_command_starts_ephemeral_game_by_default(self):
        handler = InteractionHandler(Settings(seed=1, ephemeral_default=True))
        response = handler.handle(Interaction.model_validate(command()))
        assert response.type == InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE
        assert response.data.flags == MessageFlags.EPHEMERAL
        assert response.data.content == "**Score:** 0"
        assert len(response.data.components) == 5

    def test_command_places_two_tiles(self):
        handler = InteractionHandler(Settings(seed=1))
        response = handler.handle(Interaction.model_validate(command()))
        labels = [b.label for row in response.data.components[:4] for b in row.components]
        assert sum(label != VACANT_LABEL for label in labels) == 2

    def test_ephemeral_default_from_settings(self):
        handler = InteractionHandler(Settings(ephemeral_default=False), spawner=NoopTileSpawner())
        response = handler.handle(Interaction.model_validate(command()))
        assert response.data.flags is None

    def test_command_public_game(self, handler):
        interaction = Interaction.model_validate(
            command(options=[{"name": "ephemeral", "type": 5, "value": False}])
        )
        response = handler.handle(interaction)
        assert response.data.flags is None
        assert "flags" not in response.to_payload()["data"]

    def test_command_name_from_settings(self):
        handler = InteractionHandler(Settings(command_name="tiles"), spawner=NoopTileSpawner())
        response = handler.handle(Interaction.model_validate(command("tiles")))
        assert response.type == InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE

    def test_unknown_command(self, handler):
        with pytest.raises(UnsupportedInteractionError) as exc_info:
            handler.handle(Interaction.model_validate(command("chess")))
        assert exc_info.value.hints == [UNSUPPORTED_INTERACTION]
        assert exc_info.value.status_code == 400

    def test_button_move_updates_message(self, handler):
        response = handler.handle(Interaction.model_validate(button_press("down", score=6)))
        assert response.type == InteractionResponseType.UPDATE_MESSAGE
        board = decode_board(
            Message(content=response.data.content, components=response.data.components)
        )
        assert board.cells == [
            [V, V, V, V],
            [V, T(2), V, V],
            [T(2), T(8), T(2), V],
            [T(4), T(4), T(2), T(4)],
        ]
        assert board.score == 6 + 4 + 2 + 4

    def test_button_without_effect_still_updates(self, handler):
        settled = [[T(2), V, V, V], [V] * 4, [V] * 4, [V] * 4]
        response = handler.handle(Interaction.model_validate(button_press("left", settled, 8)))
        assert response.type == InteractionResponseType.UPDATE_MESSAGE
        assert response.data.content == "**Score:** 8"

    def test_grid_button_is_deferred(self, handler):
        response = handler.handle(Interaction.model_validate(button_press("0-0")))
        assert response.type == InteractionResponseType.DEFERRED_UPDATE_MESSAGE
        assert response.data is None

    def test_other_players_are_turned_away(self, handler):
        response = handler.handle(Interaction.model_validate(button_press("up", user="2002")))
        assert response.type == InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE
        assert response.data.flags == MessageFlags.EPHEMERAL
        assert response.data.content == "Not your game! Start one by running `/2048`"
        assert response.data.components is None

    def test_game_over_message(self, handler):
        response = handler.handle(Interaction.model_validate(button_press("left", STUCK, 50)))
        assert response.type == InteractionResponseType.UPDATE_MESSAGE
        assert response.data.content == "**Game Over!**\n> **Score:** 50"
        controls = response.data.components[-1].components
        assert all(b.disabled for b in controls)

    def test_filling_the_last_cell_ends_the_game(self):
        class FirstVacancySpawner:
            def spawn(self, board):
                pos = board.empty_locations()[0]
                board.set(pos, T(128))
                return pos

        handler = InteractionHandler(Settings(), spawner=FirstVacancySpawner())
        cells = [list(row) for row in STUCK]
        cells[3] = [T(16), T(32), T(64), V]
        response = handler.handle(Interaction.model_validate(button_press("right", cells, 4)))
        board = decode_board(
            Message(content=response.data.content, components=response.data.components)
        )
        assert board.cells[3] == [T(128), T(16), T(32), T(64)]
        assert board.has_lost()
        assert response.data.content.startswith("**Game Over!**")

    def test_button_without_message(self, handler):
        payload = button_press("up")
        del payload["message"]
        with pytest.raises(InteractionError):
            handler.handle(Interaction.model_validate(payload))

    def test_malformed_board_message(self, handler):
        payload = button_press("up")
        payload["message"]["components"][1]["components"][0]["label"] = "two"
        with pytest.raises(InteractionError):
            handler.handle(Interaction.model_validate(payload))

    def test_interaction_without_data(self, handler):
        with pytest.raises(InteractionError):
            handler.handle(Interaction.model_validate({"type": 2}))

    def test_invalid_component_data(self, handler):
        payload = button_press("up")
        payload["data"] = {"component_type": 2}
        with pytest.raises(InteractionError):
            handler.handle(Interaction.model_validate(payload))

    def test_select_menus_are_unsupported(self, handler):
        payload = button_press("up")
        payload["data"] = {"custom_id": "menu", "component_type": 1}
        with pytest.raises(UnsupportedInteractionError):
            handler.handle(Interaction.model_validate(payload))

    def test_moves_are_logged(self, handler, caplog):
        with caplog.at_level(logging.INFO, logger="game2048.bot.handler"):
            handler.handle(Interaction.model_validate(button_press("up")))
        assert "moved up" in caplog.text


class TestHandleInteraction:
    def test_round_trip_through_payloads(self):
        payload = handle_interaction({"type": 1})
        assert payload == {"type": 1}

    def test_invalid_payload(self):
        with pytest.raises(InteractionError):
            handle_interaction({"type": "not-a-type"})

    def test_oversized_tile_label(self):
        payload = button_press("up")
        payload["message"]["components"][0]["components"][0]["label"] = "9" * 5000
        with pytest.raises(InteractionError):
            handle_interaction(payload, Settings())

    def test_oversized_score_reads_as_zero(self):
        payload = button_press("left")
        payload["message"]["content"] = "**Score:** " + "9" * 5000
        response = handle_interaction(payload, Settings())
        assert response["data"]["content"] == "**Score:** 8"

    def test_requests_share_no_state(self):
        settings = Settings(seed=3)
        first = handle_interaction(button_press("left"), settings)
        second = handle_interaction(button_press("left"), settings)
        assert first == second
        board = decode_board(Message.model_validate(first["data"]))
        assert board.score == 8
