import pytest

from connectfour.game.board import (
    Board,
    ConnectFourGameState,
    Move,
    format_column,
    parse_column,
)
from connectfour.game.types import Player


def fill_board(rows: list[str]) -> Board:
    """Build a full board from rows given top to bottom, e.g. '1212'."""
    board = Board(len(rows), len(rows[0]))
    for line in reversed(rows):
        for c, ch in enumerate(line):
            board.move(c, Player(int(ch)))
    return board


class TestParseColumn:
    def test_valid(self):
        assert parse_column("1") == 0
        assert parse_column("4") == 3
        assert parse_column(" 7 ") == 6

    def test_invalid(self):
        assert parse_column("") is None
        assert parse_column("0") is None
        assert parse_column("8") is None
        assert parse_column("A") is None

    def test_custom_width(self):
        assert parse_column("5", cols=4) is None
        assert parse_column("4", cols=4) == 3


class TestFormatColumn:
    def test_basic(self):
        assert format_column(0) == "1"
        assert format_column(6) == "7"


class TestBoard:
    def test_empty_board(self):
        b = Board()
        assert b.num_rows() == 6
        assert b.num_cols() == 7
        assert b.num_empty_cells() == 42
        assert not b.is_full()
        assert b.get(0, 0) is None

    def test_pieces_stack_from_bottom(self):
        b = Board()
        assert b.move(3, Player.ONE) == 0
        assert b.move(3, Player.TWO) == 1
        assert b.get(0, 3) is Player.ONE
        assert b.get(1, 3) is Player.TWO
        assert b.num_empty_cells() == 40

    def test_column_full(self):
        b = Board()
        for i in range(6):
            b.move(2, Player.ONE if i % 2 == 0 else Player.TWO)
        assert b.is_column_full(2)
        assert not b.is_valid_move(2)
        with pytest.raises(AssertionError):
            b.move(2, Player.ONE)

    def test_is_valid_move_out_of_range(self):
        b = Board()
        assert not b.is_valid_move(-1)
        assert not b.is_valid_move(7)
        assert b.is_valid_move(0)
        assert b.is_valid_move(6)

    def test_move_unmove_roundtrip(self):
        b = Board()
        b.move(1, Player.ONE)
        b.move(1, Player.TWO)
        before = b.copy()
        b.move(1, Player.ONE)
        b.unmove(1, Player.ONE)
        assert b == before
        assert b.num_empty_cells() == before.num_empty_cells()

    def test_unmove_wrong_player(self):
        b = Board()
        b.move(0, Player.ONE)
        with pytest.raises(AssertionError):
            b.unmove(0, Player.TWO)

    def test_unmove_empty_column(self):
        b = Board()
        with pytest.raises(AssertionError):
            b.unmove(0, Player.ONE)

    def test_copy_is_independent(self):
        b = Board()
        b.move(0, Player.ONE)
        clone = b.copy()
        clone.move(0, Player.TWO)
        assert b.get(1, 0) is None
        assert clone.get(1, 0) is Player.TWO
        assert b != clone

    def test_full_board(self):
        b = fill_board(["1212", "2121", "1212", "2121"])
        assert b.is_full()
        assert b.num_empty_cells() == 0
        assert all(not b.is_valid_move(c) for c in range(4))


class TestConnectFourGameState:
    def test_initial_state(self):
        g = ConnectFourGameState()
        assert g.current_player is Player.ONE
        assert not g.is_over
        assert g.winner is None
        assert g.last_column is None
        assert g.legal_moves() == list(range(7))

    def test_alternating_turns(self):
        g = ConnectFourGameState()
        g.apply_move(3)
        assert g.current_player is Player.TWO
        g.apply_move(3)
        assert g.current_player is Player.ONE
        assert g.moves[1] == Move(column=3, row=1, player=Player.TWO)
        assert g.last_column == 3

    def test_undo_move(self):
        g = ConnectFourGameState()
        g.apply_move(3)
        g.apply_move(4)
        move = g.undo_move()
        assert move is not None
        assert move.column == 4
        assert g.current_player is Player.TWO
        assert g.board.get(0, 4) is None

    def test_undo_empty_returns_none(self):
        g = ConnectFourGameState()
        assert g.undo_move() is None

    def test_legal_moves_skip_full_columns(self):
        g = ConnectFourGameState()
        for _ in range(6):
            g.apply_move(0)
        assert g.legal_moves() == [1, 2, 3, 4, 5, 6]

    def test_four_in_a_row_does_not_end_game(self):
        g = ConnectFourGameState()
        for c in range(3):
            g.apply_move(c)  # Player 1, bottom row
            g.apply_move(c)  # Player 2, on top
        g.apply_move(3)  # Player 1 completes four
        assert g.scores()[Player.ONE] == 1
        assert not g.is_over
        assert g.winner is None

    def test_winner_has_most_fours(self):
        g = ConnectFourGameState(4, 4)
        g.board = fill_board(["1221", "2212", "2122", "1111"])
        assert g.is_over
        assert g.scores() == {Player.ONE: 2, Player.TWO: 0}
        assert g.winner is Player.ONE
        assert not g.is_draw

    def test_equal_fours_is_draw(self):
        g = ConnectFourGameState(4, 4)
        g.board = fill_board(["2211", "1122", "2211", "1122"])
        assert g.is_over
        assert g.winner is None
        assert g.is_draw

    def test_cannot_play_after_game_over(self):
        g = ConnectFourGameState(4, 4)
        for _ in range(4):
            for c in range(4):
                g.apply_move(c)
        assert g.is_over
        with pytest.raises(AssertionError):
            g.apply_move(0)
