from __future__ import annotations

import random
from typing import Optional

from connectfour.game.arbitrator import Arbitrator
from connectfour.game.board import Board, BoardFullError

from .base import Agent


class RandomAgent(Agent):
    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def calc_move(self, board: Board, opp_move_col: Optional[int], arb: Arbitrator) -> None:
        if board.is_full():
            raise BoardFullError("The board is full")
        moves = [c for c in range(board.num_cols()) if board.is_valid_move(c)]
        arb.set_move(self.rng.choice(moves))
