from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from connectfour.config import COLS, ROWS

from .patterns import calc_score
from .types import Player


class BoardFullError(RuntimeError):
    """An agent was asked to move on a board with no empty cells."""


def parse_column(text: str, cols: int = COLS) -> Optional[int]:
    """Parse a 1-based column label like '4' into a 0-based column index.

    Returns None if the string is invalid.
    """
    text = text.strip()
    try:
        col = int(text)
    except ValueError:
        return None
    if not (1 <= col <= cols):
        return None
    return col - 1


def format_column(col: int) -> str:
    """Format a 0-based column index as its 1-based label."""
    return str(col + 1)


@dataclass
class Move:
    column: int
    row: int
    player: Player
    elapsed: Optional[float] = None

    def __str__(self) -> str:
        return f"{self.player}: {format_column(self.column)}"


class Board:
    """Connect Four grid. Row 0 is the bottom; pieces stack upward."""

    def __init__(self, rows: int = ROWS, cols: int = COLS) -> None:
        self._rows = rows
        self._cols = cols
        self._grid: list[list[Optional[Player]]] = [[None] * cols for _ in range(rows)]
        self._heights: list[int] = [0] * cols

    def num_rows(self) -> int:
        return self._rows

    def num_cols(self) -> int:
        return self._cols

    def get(self, row: int, col: int) -> Optional[Player]:
        return self._grid[row][col]

    def is_column_full(self, col: int) -> bool:
        return self._heights[col] >= self._rows

    def is_valid_move(self, col: int) -> bool:
        return 0 <= col < self._cols and not self.is_column_full(col)

    def is_full(self) -> bool:
        return all(h >= self._rows for h in self._heights)

    def num_empty_cells(self) -> int:
        return self._rows * self._cols - sum(self._heights)

    def height(self, col: int) -> int:
        return self._heights[col]

    def move(self, col: int, player: Player) -> int:
        """Drop a piece for `player` into `col`. Returns the row it landed on."""
        assert self.is_valid_move(col), f"Column {format_column(col)} is not playable"
        row = self._heights[col]
        self._grid[row][col] = player
        self._heights[col] = row + 1
        return row

    def unmove(self, col: int, player: Player) -> int:
        """Lift the top piece of `col`, which must belong to `player`."""
        row = self._heights[col] - 1
        assert row >= 0, f"Column {format_column(col)} is empty"
        assert self._grid[row][col] is player, f"Top of column {format_column(col)} is not {player}"
        self._grid[row][col] = None
        self._heights[col] = row
        return row

    def copy(self) -> Board:
        clone = Board.__new__(Board)
        clone._rows = self._rows
        clone._cols = self._cols
        clone._grid = [list(r) for r in self._grid]
        clone._heights = list(self._heights)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        lines = []
        for r in reversed(range(self._rows)):
            lines.append("".join(
                "." if cell is None else str(cell.value) for cell in self._grid[r]
            ))
        return "\n".join(lines)


class ConnectFourGameState:
    """Full game state for the fill-the-board variant.

    Play continues until every cell is taken; the player owning more
    four-in-a-row alignments wins.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS) -> None:
        self.board = Board(rows, cols)
        self.current_player = Player.ONE
        self.moves: list[Move] = []

    @property
    def is_over(self) -> bool:
        return self.board.is_full()

    @property
    def last_column(self) -> Optional[int]:
        return self.moves[-1].column if self.moves else None

    def scores(self) -> dict[Player, int]:
        return {p: calc_score(self.board, p) for p in Player}

    @property
    def winner(self) -> Optional[Player]:
        if not self.is_over:
            return None
        scores = self.scores()
        if scores[Player.ONE] == scores[Player.TWO]:
            return None
        return max(scores, key=scores.__getitem__)

    @property
    def is_draw(self) -> bool:
        return self.is_over and self.winner is None

    def legal_moves(self) -> list[int]:
        return [c for c in range(self.board.num_cols()) if self.board.is_valid_move(c)]

    def apply_move(self, col: int, elapsed: Optional[float] = None) -> None:
        """Drop a piece for the current player and advance the turn."""
        assert not self.is_over, "Game is already over"
        player = self.current_player
        row = self.board.move(col, player)
        self.moves.append(Move(column=col, row=row, player=player, elapsed=elapsed))
        self.current_player = player.other

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.unmove(move.column, move.player)
        self.current_player = move.player
        return move
