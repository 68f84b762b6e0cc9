from __future__ import annotations

import abc
from typing import Optional

from connectfour.config import COLS, MSEC_PER_MOVE, ROWS
from connectfour.game.arbitrator import Arbitrator
from connectfour.game.board import Board
from connectfour.game.types import Player


class Agent(abc.ABC):
    player: Player = Player.ONE
    opponent: Player = Player.TWO
    msec_per_move: int = MSEC_PER_MOVE
    rows: int = ROWS
    cols: int = COLS

    def init(self, player: Player, msec_per_move: int, rows: int, cols: int) -> None:
        """Called once before the first calc_move of a game."""
        self.player = player
        self.opponent = player.other
        self.msec_per_move = msec_per_move
        self.rows = rows
        self.cols = cols

    @abc.abstractmethod
    def calc_move(self, board: Board, opp_move_col: Optional[int], arb: Arbitrator) -> None:
        """Publish the column to play via `arb.set_move`, at least once."""

    @property
    def name(self) -> str:
        return self.__class__.__name__
