from __future__ import annotations

from typing import Optional

from connectfour.game.board import Board
from connectfour.game.types import Player


class GameTree:
    """Search node owning one board position.

    The root wraps the caller's board and has no move. Every other node owns a
    private snapshot taken right after `move` was played on its parent's board.
    Children are materialised lazily by `expand`.
    """

    def __init__(self, move: Optional[int], board: Board) -> None:
        self.move = move
        self.board = board
        self.children: list[GameTree] = []
        self.value = 0
        self.chosen_move: Optional[int] = None

    def add_child(self, move: int, board: Board) -> GameTree:
        child = GameTree(move, board)
        self.children.append(child)
        return child

    def is_leaf(self) -> bool:
        return not self.children

    def is_terminal(self) -> bool:
        return self.board.is_full()

    def expand(self, player: Player) -> None:
        """Create one child per playable column with `player` to move.

        No-op if the node already has children. The node's own board is
        restored after each snapshot.
        """
        if not self.is_leaf():
            return
        board = self.board
        for col in range(board.num_cols()):
            if board.is_column_full(col):
                continue
            board.move(col, player)
            self.add_child(col, board.copy())
            board.unmove(col, player)

    def depth(self) -> int:
        """Depth of the materialised subtree below this node."""
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children)

    def size(self) -> int:
        return 1 + sum(child.size() for child in self.children)
