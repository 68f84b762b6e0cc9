"""Greedy agent: one ply of lookahead scored by the pattern count."""

from __future__ import annotations

import logging
from typing import Optional

from connectfour.game.arbitrator import Arbitrator
from connectfour.game.board import Board, BoardFullError
from connectfour.game.patterns import evaluate
from connectfour.game.types import ScoredMove

from .base import Agent

logger = logging.getLogger(__name__)


class GreedyAgent(Agent):
    """Plays the column whose resulting board has the best score differential.

    Columns are tried left to right and only a strictly better score replaces
    the current pick, so ties go to the lowest column index.
    """

    def calc_move(self, board: Board, opp_move_col: Optional[int], arb: Arbitrator) -> None:
        arb.set_move(self.choose_move(board))

    def choose_move(self, board: Board) -> int:
        if board.is_full():
            raise BoardFullError("The board is full")

        possible: list[ScoredMove] = []
        for col in range(board.num_cols()):
            if not board.is_valid_move(col):
                continue
            board.move(col, self.player)
            possible.append(ScoredMove(col, evaluate(board, self.player)))
            board.unmove(col, self.player)

        # max() keeps the first of equal elements
        best = max(possible)
        logger.debug("%s scored %s -> column %d", self.name, possible, best.column)
        return best.column
