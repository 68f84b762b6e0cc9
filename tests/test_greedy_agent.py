"""Tests for the one-ply greedy agent."""

import pytest

from connectfour.agent.greedy_agent import GreedyAgent
from connectfour.game.board import Board, BoardFullError
from connectfour.game.types import Player


class RecordingArbiter:
    def __init__(self) -> None:
        self.moves: list[int] = []

    def is_time_up(self) -> bool:
        return False

    def set_move(self, col: int) -> None:
        self.moves.append(col)


def make_agent(player: Player = Player.ONE, rows: int = 6, cols: int = 7) -> GreedyAgent:
    agent = GreedyAgent()
    agent.init(player, 1000, rows, cols)
    return agent


def fill_column(board: Board, col: int) -> None:
    for i in range(board.num_rows()):
        board.move(col, Player.ONE if i % 2 == 0 else Player.TWO)


def full_board() -> Board:
    b = Board(4, 4)
    for _ in range(4):
        for c in range(4):
            b.move(c, Player.ONE if c % 2 == 0 else Player.TWO)
    return b


class TestGreedyAgent:
    def test_name(self):
        assert GreedyAgent().name == "GreedyAgent"

    def test_empty_board_picks_first_column(self):
        arb = RecordingArbiter()
        make_agent().calc_move(Board(), None, arb)
        assert arb.moves == [0]

    def test_publishes_exactly_once(self):
        arb = RecordingArbiter()
        board = Board()
        board.move(3, Player.TWO)
        make_agent().calc_move(board, 3, arb)
        assert len(arb.moves) == 1

    def test_completes_four(self):
        b = Board()
        for c in range(3):
            b.move(c, Player.ONE)
            b.move(c, Player.TWO)
        assert make_agent(Player.ONE).choose_move(b) == 3

    def test_plays_as_player_two(self):
        b = Board()
        for c in range(4, 7):
            b.move(c, Player.TWO)
            b.move(c, Player.ONE)
        assert make_agent(Player.TWO).choose_move(b) == 3

    def test_skips_full_columns(self):
        b = Board()
        fill_column(b, 0)
        assert make_agent().choose_move(b) == 1

    def test_only_open_column(self):
        b = Board()
        for c in range(6):
            fill_column(b, c)
        assert make_agent().choose_move(b) == 6

    def test_board_restored(self):
        b = Board()
        b.move(2, Player.ONE)
        b.move(4, Player.TWO)
        before = b.copy()
        make_agent().choose_move(b)
        assert b == before

    def test_full_board_is_fatal(self):
        arb = RecordingArbiter()
        agent = make_agent(rows=4, cols=4)
        with pytest.raises(BoardFullError):
            agent.calc_move(full_board(), None, arb)
        assert arb.moves == []
