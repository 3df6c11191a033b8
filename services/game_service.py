"""
GameService: players taking turns at the wheel and their scores.

Each completed spin adds the landed segment's value to the player whose turn
it was and counts the turn. Turns only advance on request, and not while the
wheel is spinning.
"""

import logging
from dataclasses import dataclass
from typing import Any

from domain.models.player import Player
from services import error_codes
from services.result import Result
from services.spin_controller import SpinController, SpinResult, SpinSession

logger = logging.getLogger("wheel_spin.services.game")


@dataclass(frozen=True)
class ScoreboardRow:
    name: str
    score: int
    turns: int
    is_current: bool


class GameService:
    """Turn and score bookkeeping around a SpinController."""

    def __init__(self, controller: SpinController):
        self.controller = controller
        self.players: list[Player] = []
        self.current_player_index = 0
        self.result_message = ""
        self._spinning_player: Player | None = None

        # Chain onto whatever result hook the controller already has
        self._previous_on_result = controller.on_result
        controller.on_result = self._on_spin_result

    @property
    def current_player(self) -> Player | None:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    def add_player(self, name: str) -> Result[Player]:
        name = (name or "").strip()
        if not name:
            return Result.fail("Player name cannot be blank", code=error_codes.VALIDATION_ERROR)
        player = Player(name=name)
        self.players.append(player)
        if len(self.players) == 1:
            self.current_player_index = 0
        logger.info(f"Player {name!r} joined ({len(self.players)} playing)")
        return Result.ok(player)

    def remove_player(self, index: int) -> Result[Player]:
        if not 0 <= index < len(self.players):
            return Result.fail(f"No player at index {index}", code=error_codes.PLAYER_NOT_FOUND)
        player = self.players.pop(index)
        if not self.players or self.current_player_index >= len(self.players):
            self.current_player_index = 0
        logger.info(f"Player {player.name!r} left ({len(self.players)} playing)")
        return Result.ok(player)

    def next_player(self) -> Result[Player]:
        if self.controller.is_spinning:
            return Result.fail("Wait for the wheel to stop", code=error_codes.SPIN_IN_PROGRESS)
        if not self.players:
            return Result.fail("No players", code=error_codes.NO_PLAYERS)
        self.current_player_index = (self.current_player_index + 1) % len(self.players)
        self.result_message = ""
        return Result.ok(self.current_player)

    def spin(self, requested_duration: Any = None, now: float | None = None) -> Result[SpinSession]:
        """Start a spin for the current player."""
        if not self.players:
            return Result.fail("Add a player before spinning", code=error_codes.NO_PLAYERS)
        result = self.controller.request_spin(requested_duration, now=now)
        if result:
            self._spinning_player = self.current_player
            self.result_message = "Spinning..."
        return result

    def _on_spin_result(self, result: SpinResult) -> None:
        player = self._spinning_player
        self._spinning_player = None
        self.result_message = f"Result: {result.label} ({result.value} points)"
        if player is not None and any(p is player for p in self.players):
            player.record_spin(result.value)
            logger.info(f"{player.name} landed {result.label!r}: +{result.value} (total {player.score})")
        if self._previous_on_result:
            self._previous_on_result(result)

    def scoreboard(self) -> list[ScoreboardRow]:
        return [
            ScoreboardRow(
                name=p.name,
                score=p.score,
                turns=p.turns,
                is_current=i == self.current_player_index,
            )
            for i, p in enumerate(self.players)
        ]

    def get_state(self) -> dict[str, Any]:
        """Debug snapshot of the whole game."""
        return {
            "segments": [seg.to_dict() for seg in self.controller.wheel.segments],
            "players": [{"name": p.name, "score": p.score, "turns": p.turns} for p in self.players],
            "current_player_index": self.current_player_index,
            "angle": self.controller.wheel.angle,
            "is_spinning": self.controller.is_spinning,
        }
