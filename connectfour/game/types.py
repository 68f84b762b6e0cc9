from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Player(enum.Enum):
    ONE = 1
    TWO = 2

    @property
    def other(self) -> Player:
        return Player.TWO if self is Player.ONE else Player.ONE

    def __str__(self) -> str:
        return f"Player {self.value}"


@dataclass(frozen=True, order=True)
class ScoredMove:
    """A candidate column and its evaluation. Compares by score only."""

    column: int = field(compare=False)
    score: int
