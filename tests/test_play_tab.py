from connectfour.agent.greedy_agent import GreedyAgent
from connectfour.game.board import Board, ConnectFourGameState
from connectfour.game.types import Player
from connectfour.ui.play_tab import (
    GameSession,
    _apply_human_move,
    _new_game_with_color,
    _resign,
    _undo_move,
)


def greedy_session() -> GameSession:
    return GameSession(agent=GreedyAgent())


def test_new_game_as_player_one():
    session = greedy_session()
    result = _new_game_with_color("Player 1", "GreedyAgent", session)
    assert session.human_player is Player.ONE
    assert len(session.game.moves) == 0  # no AI opening move
    assert "You are Player 1" in result[4]


def test_new_game_as_player_two_ai_goes_first():
    session = greedy_session()
    result = _new_game_with_color("Player 2", "GreedyAgent", session)
    assert session.human_player is Player.TWO
    assert session.agent.player is Player.ONE
    assert len(session.game.moves) == 1
    assert session.game.moves[0].player is Player.ONE
    assert session.game.current_player is Player.TWO
    assert "You are Player 2" in result[4]


def test_new_game_random_assigns_valid_color():
    session = greedy_session()
    colors_seen = set()
    for _ in range(50):
        _new_game_with_color("Random", "GreedyAgent", session)
        colors_seen.add(session.human_player)
    assert Player.ONE in colors_seen
    assert Player.TWO in colors_seen


def test_human_move_gets_ai_reply():
    session = greedy_session()
    _new_game_with_color("Player 1", "GreedyAgent", session)
    _apply_human_move("4", session)
    assert [m.player for m in session.game.moves] == [Player.ONE, Player.TWO]
    assert session.game.moves[0].column == 3
    assert session.game.current_player is Player.ONE


def test_invalid_column_text():
    session = greedy_session()
    _new_game_with_color("Player 1", "GreedyAgent", session)
    result = _apply_human_move("nine", session)
    assert "Invalid column" in result[1]
    assert not session.game.moves


def test_full_column_rejected():
    session = greedy_session()
    _new_game_with_color("Player 1", "GreedyAgent", session)
    for _ in range(6):
        session.game.apply_move(0)
    result = _apply_human_move("1", session)
    assert "is full" in result[1]


def test_undo_removes_human_and_ai_moves():
    session = greedy_session()
    _new_game_with_color("Player 1", "GreedyAgent", session)
    _apply_human_move("4", session)
    _undo_move(session)
    assert session.game.moves == []


def test_resign():
    session = greedy_session()
    _new_game_with_color("Player 1", "GreedyAgent", session)
    _resign(session)
    assert session.is_over
    assert session.game_over_banner == "AI wins!"
    result = _apply_human_move("4", session)
    assert not session.game.moves
    assert "resigned" in result[1]


def _finished_game(rows: list[str]) -> ConnectFourGameState:
    game = ConnectFourGameState(len(rows), len(rows[0]))
    board = Board(len(rows), len(rows[0]))
    for line in reversed(rows):
        for c, ch in enumerate(line):
            board.move(c, Player(int(ch)))
    game.board = board
    return game


def test_game_over_banner_win():
    session = greedy_session()
    session.human_player = Player.ONE
    session.game = _finished_game(["1221", "2212", "2122", "1111"])
    assert session.game_over_banner == "You win!"


def test_game_over_banner_loss():
    session = greedy_session()
    session.human_player = Player.TWO
    session.game = _finished_game(["1221", "2212", "2122", "1111"])
    assert session.game_over_banner == "AI wins!"


def test_game_over_banner_draw():
    session = greedy_session()
    session.game = _finished_game(["2211", "1122", "2211", "1122"])
    assert session.game_over_banner == "Draw!"
    assert "Draw" in session.status_text


def test_game_over_banner_empty_when_playing():
    session = greedy_session()
    assert session.game_over_banner == ""
