"""
Player domain model.
"""

from dataclasses import dataclass


@dataclass
class Player:
    """A participant taking turns at the wheel."""

    name: str
    score: int = 0
    turns: int = 0

    def record_spin(self, points: int) -> None:
        self.score += points
        self.turns += 1
