"""Minimax agent with iterative deepening under a per-move deadline.

Each call builds a fresh game tree over the current board and searches it at
depth 1, 2, 3, ... until the arbitrator's deadline fires or the search depth
reaches the number of empty cells. After every completed depth the root's
preferred column is published, so the arbitrator always holds the result of
the deepest finished search.

The tree is kept between depths of the same call: nodes expanded at depth d
are reused at depth d + 1, and only nodes the depth-first traversal actually
reaches get children. Leaves are scored with the four-in-a-row count
differential from `connectfour.game.patterns`. There is no pruning.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from connectfour.game.arbitrator import Arbitrator
from connectfour.game.board import Board, BoardFullError
from connectfour.game.patterns import evaluate

from .base import Agent
from .game_tree import GameTree

logger = logging.getLogger(__name__)

INF = math.inf


class MinimaxAgent(Agent):
    """Iterative-deepening minimax over a lazily expanded game tree.

    Equal-valued children are broken toward the centre column: a later child
    replaces the current choice only if its column is strictly closer to
    `cols // 2`.
    """

    def __init__(self, max_depth: Optional[int] = None) -> None:
        self.max_depth = max_depth
        self.completed_depth = 0
        self.last_tree: Optional[GameTree] = None
        self._arb: Optional[Arbitrator] = None
        self._cut_off = False

    @property
    def name(self) -> str:
        if self.max_depth is None:
            return "MinimaxAgent"
        return f"MinimaxAgent(d={self.max_depth})"

    def calc_move(self, board: Board, opp_move_col: Optional[int], arb: Arbitrator) -> None:
        if board.is_full():
            raise BoardFullError("The board is full")

        self._arb = arb
        self.completed_depth = 0

        root = GameTree(None, board)
        root.expand(self.player)
        self.last_tree = root

        # Fallback in case the deadline fires before depth 1 completes
        center = board.num_cols() // 2
        opening = min(root.children, key=lambda child: abs(center - child.move))
        root.chosen_move = opening.move
        arb.set_move(root.chosen_move)

        search_depth = 1
        while (
            not arb.is_time_up()
            and search_depth <= board.num_empty_cells()
            and (self.max_depth is None or search_depth <= self.max_depth)
        ):
            self._cut_off = False
            self.minimax(root, search_depth, True)
            if self._cut_off:
                logger.debug("%s: depth %d cut off by the deadline", self.name, search_depth)
                break
            arb.set_move(root.chosen_move)
            self.completed_depth = search_depth
            logger.debug(
                "%s: depth %d -> column %d (value %d)",
                self.name, search_depth, root.chosen_move, root.value,
            )
            search_depth += 1

        logger.debug(
            "%s: finished at depth %d with %d nodes",
            self.name, self.completed_depth, root.size(),
        )

    def minimax(self, node: GameTree, depth: int, maximizing: bool) -> int:
        """Propagate minimax values up from `depth` plies below `node`.

        Sets `node.value` and `node.chosen_move` as a side effect.
        """
        if depth == 0 or node.is_terminal() or self._time_up():
            if depth > 0 and not node.is_terminal():
                self._cut_off = True
            node.value = evaluate(node.board, self.player)
            return node.value

        node.expand(self.player if maximizing else self.opponent)

        center = node.board.num_cols() // 2
        value = -INF if maximizing else INF
        for child in node.children:
            new_val = self.minimax(child, depth - 1, not maximizing)
            better = new_val > value if maximizing else new_val < value
            if better:
                value = new_val
                node.value = new_val
                node.chosen_move = child.move
            elif new_val == value:
                if abs(center - child.move) < abs(center - node.chosen_move):
                    node.chosen_move = child.move
        return value

    def _time_up(self) -> bool:
        return self._arb is not None and self._arb.is_time_up()
