"""
Tests for GameService turn and score bookkeeping.
"""

from unittest.mock import MagicMock

import pytest

from services import error_codes
from services.game_service import GameService, ScoreboardRow


@pytest.fixture
def game(controller):
    return GameService(controller)


def _finish_spin(game, start: float = 0.0, duration: float = 2.0):
    game.spin(duration, now=start)
    return game.controller.tick(start + duration)


class TestPlayers:
    def test_add_player(self, game):
        player = game.add_player("  Ada ").value
        assert player.name == "Ada"
        assert game.current_player is player

    def test_blank_name_rejected(self, game):
        result = game.add_player("   ")
        assert result.error_code == error_codes.VALIDATION_ERROR
        assert game.players == []

    def test_remove_player_resets_turn_past_end(self, game):
        for name in ("Ada", "Bo", "Cy"):
            game.add_player(name)
        game.next_player()
        game.next_player()
        assert game.current_player.name == "Cy"

        game.remove_player(2)

        assert game.current_player_index == 0
        assert game.current_player.name == "Ada"

    def test_remove_unknown_player(self, game):
        assert game.remove_player(0).error_code == error_codes.PLAYER_NOT_FOUND

    def test_next_player_wraps(self, game):
        game.add_player("Ada")
        game.add_player("Bo")
        assert game.next_player().value.name == "Bo"
        assert game.next_player().value.name == "Ada"

    def test_next_player_without_players(self, game):
        assert game.next_player().error_code == error_codes.NO_PLAYERS
        assert game.current_player is None


class TestSpinning:
    def test_spin_requires_players(self, game):
        result = game.spin(3, now=0.0)
        assert result.error_code == error_codes.NO_PLAYERS
        assert not game.controller.is_spinning

    def test_landed_value_credited_to_current_player(self, game):
        game.add_player("Ada")
        game.add_player("Bo")

        frame = _finish_spin(game)

        ada, bo = game.players
        assert frame.result.value == 20
        assert (ada.score, ada.turns) == (20, 1)
        assert (bo.score, bo.turns) == (0, 0)
        assert game.result_message == "Result: 20 (20 points)"

    def test_spinning_message_and_turn_lock(self, game):
        game.add_player("Ada")
        game.add_player("Bo")
        game.spin(3, now=0.0)

        assert game.result_message == "Spinning..."
        assert game.next_player().error_code == error_codes.SPIN_IN_PROGRESS
        assert game.current_player.name == "Ada"

    def test_second_spin_rejected_while_spinning(self, game):
        game.add_player("Ada")
        game.spin(3, now=0.0)
        assert game.spin(3, now=1.0).error_code == error_codes.SPIN_IN_PROGRESS

    def test_scores_accumulate_across_turns(self, game):
        game.add_player("Ada")
        _finish_spin(game, start=0.0)
        _finish_spin(game, start=10.0)
        # 5.25 then 10.5 turns in total: slots 1 then 2
        assert game.players[0].score == 20 + 30
        assert game.players[0].turns == 2

    def test_existing_result_hook_still_called(self, controller):
        hook = MagicMock()
        controller.on_result = hook
        game = GameService(controller)
        game.add_player("Ada")

        frame = _finish_spin(game)

        hook.assert_called_once_with(frame.result)

    def test_removed_player_not_credited(self, game):
        game.add_player("Ada")
        game.spin(2, now=0.0)
        game.remove_player(0)

        game.controller.tick(2.0)

        assert game.players == []
        assert game.result_message.startswith("Result:")


class TestScoreboard:
    def test_rows_mark_current_player(self, game):
        game.add_player("Ada")
        game.add_player("Bo")
        _finish_spin(game)
        game.next_player()

        assert game.scoreboard() == [
            ScoreboardRow(name="Ada", score=20, turns=1, is_current=False),
            ScoreboardRow(name="Bo", score=0, turns=0, is_current=True),
        ]

    def test_get_state(self, game):
        game.add_player("Ada")
        state = game.get_state()
        assert state["players"] == [{"name": "Ada", "score": 0, "turns": 0}]
        assert state["current_player_index"] == 0
        assert state["angle"] == 0.0
        assert len(state["segments"]) == 5
        assert state["is_spinning"] is False
