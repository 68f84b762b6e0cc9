"""Four-in-a-row pattern counting, the sole heuristic of the search agents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from connectfour.config import CONNECT_N

from .types import Player

if TYPE_CHECKING:
    from .board import Board

# (row step, col step): horizontal, vertical, diagonal up-right, diagonal down-right
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (-1, 1)]


def calc_score(board: Board, player: Player) -> int:
    """Count every length-4 window whose cells all belong to `player`.

    Overlapping windows are counted separately, so five in a row scores 2.
    Open and blocked alignments are weighted the same.
    """
    rows = board.num_rows()
    cols = board.num_cols()
    span = CONNECT_N - 1
    score = 0

    for dr, dc in DIRECTIONS:
        # Start cells for which the whole window stays on the grid
        r_lo = -dr * span if dr < 0 else 0
        r_hi = rows - dr * span if dr > 0 else rows
        c_hi = cols - dc * span
        for r in range(r_lo, r_hi):
            for c in range(c_hi):
                if all(board.get(r + dr * i, c + dc * i) is player for i in range(CONNECT_N)):
                    score += 1

    return score


def evaluate(board: Board, player: Player) -> int:
    """Own pattern count minus the opponent's. Positive = `player` ahead."""
    return calc_score(board, player) - calc_score(board, player.other)
