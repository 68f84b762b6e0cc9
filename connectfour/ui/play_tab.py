"""Play tab: Human vs AI with interactive SVG board."""

from __future__ import annotations

import random as _random
import time as _time
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from connectfour.agent.base import Agent
from connectfour.agent.registry import AGENT_FACTORIES, DEFAULT_AGENT, make_agent
from connectfour.config import COLS, MSEC_PER_MOVE, ROWS
from connectfour.game.arbitrator import request_move
from connectfour.game.board import ConnectFourGameState, format_column, parse_column
from connectfour.game.patterns import evaluate
from connectfour.game.types import Player
from connectfour.ui.board_component import render_board_svg

COLOR_CHOICES = ["Random", "Player 1", "Player 2"]


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: ConnectFourGameState = field(default_factory=ConnectFourGameState)
    agent: Agent = field(default_factory=lambda: make_agent(DEFAULT_AGENT))
    human_player: Player = field(default=Player.ONE)
    msec_per_move: int = MSEC_PER_MOVE
    resigned: bool = False
    _turn_start: float = field(default_factory=_time.time)

    def __post_init__(self) -> None:
        self.agent.init(self.ai_player, self.msec_per_move, ROWS, COLS)

    @property
    def ai_player(self) -> Player:
        return self.human_player.other

    def reset(self, human_player: Optional[Player] = None) -> None:
        self.game = ConnectFourGameState(ROWS, COLS)
        self.resigned = False
        self._turn_start = _time.time()
        if human_player is not None:
            self.human_player = human_player
        self.agent.init(self.ai_player, self.msec_per_move, ROWS, COLS)

    def mark_turn_start(self) -> None:
        """Record the moment the current player's clock starts."""
        self._turn_start = _time.time()

    def elapsed_since_turn_start(self) -> float:
        return _time.time() - self._turn_start

    @property
    def is_over(self) -> bool:
        return self.resigned or self.game.is_over

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        if self.resigned:
            return "AI wins!"
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is not None:
            if g.winner == self.human_player:
                return "You win!"
            return "AI wins!"
        return "Draw!"

    @property
    def status_text(self) -> str:
        g = self.game
        if self.resigned:
            return "Game over: you resigned."
        if g.is_over:
            scores = g.scores()
            tally = f"{scores[Player.ONE]} to {scores[Player.TWO]} fours"
            if g.winner is not None:
                who = "You win!" if g.winner == self.human_player else "AI wins!"
                return f"Game over: {who} ({tally})"
            return f"Game over: Draw! ({tally})"
        if g.current_player == self.human_player:
            return f"Your turn ({g.current_player})"
        return f"AI is thinking... ({g.current_player})"

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for i, move in enumerate(self.game.moves):
            t = f"{move.elapsed:.2f}" if move.elapsed is not None else "-"
            rows.append([str(i + 1), str(move.player), format_column(move.column), t])
        return rows


def _make_board_html(session: GameSession) -> str:
    clickable = (
        not session.is_over
        and session.game.current_player == session.human_player
    )
    eval_score = evaluate(session.game.board, Player.ONE) if session.game.moves else None
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
        eval_score=eval_score,
    )


def _play_ai_move(session: GameSession) -> None:
    t0 = _time.time()
    col = request_move(
        session.agent,
        session.game.board,
        session.game.last_column,
        session.msec_per_move,
    )
    session.game.apply_move(col, elapsed=_time.time() - t0)
    session.mark_turn_start()  # human's clock starts now


def _ai_opening_move(session: GameSession) -> None:
    """If AI goes first (human is Player 2), let the AI play the opening move."""
    if (
        session.human_player == Player.TWO
        and not session.game.moves
        and not session.is_over
    ):
        _play_ai_move(session)


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the AI respond."""
    if session.is_over:
        return (
            _make_board_html(session),
            session.status_text,
            session.move_history_table,
            session,
            "",  # clear coord input
        )

    if session.game.current_player != session.human_player:
        return (
            _make_board_html(session),
            "Wait, it's the AI's turn.",
            session.move_history_table,
            session,
            "",
        )

    col = parse_column(coord_text, session.game.board.num_cols())
    if col is None:
        return (
            _make_board_html(session),
            f"Invalid column: '{coord_text}'. Use a number like 4.",
            session.move_history_table,
            session,
            "",
        )

    if not session.game.board.is_valid_move(col):
        return (
            _make_board_html(session),
            f"Column {format_column(col)} is full.",
            session.move_history_table,
            session,
            "",
        )

    session.game.apply_move(col, elapsed=session.elapsed_since_turn_start())

    if not session.game.is_over:
        _play_ai_move(session)

    return (
        _make_board_html(session),
        session.status_text,
        session.move_history_table,
        session,
        "",
    )


def _new_game_with_color(color_choice: str, agent_choice: str, session: GameSession):
    """Start a new game. color_choice is 'Player 1', 'Player 2', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.ONE, Player.TWO])
    elif color_choice == "Player 2":
        human = Player.TWO
    else:
        human = Player.ONE

    session.agent = make_agent(agent_choice)
    session.reset(human_player=human)
    _ai_opening_move(session)

    return (
        _make_board_html(session),
        session.status_text,
        session.move_history_table,
        session,
        f"You are {human}.",
    )


def _undo_move(session: GameSession):
    """Undo the last move pair (AI + human)."""
    if not session.game.moves:
        return (
            _make_board_html(session),
            "Nothing to undo.",
            session.move_history_table,
            session,
        )

    session.resigned = False
    last = session.game.moves[-1]
    if last.player != session.human_player:
        session.game.undo_move()  # undo AI
    if session.game.moves:
        session.game.undo_move()  # undo human
    _ai_opening_move(session)

    return (
        _make_board_html(session),
        session.status_text,
        session.move_history_table,
        session,
    )


def _resign(session: GameSession):
    if not session.is_over:
        session.resigned = True
    return (
        _make_board_html(session),
        session.status_text,
        session.move_history_table,
        session,
    )


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(ConnectFourGameState(ROWS, COLS)),
                label="Board",
            )
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (Player 1)",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(
                value="You are Player 1.",
                label="Color",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=COLOR_CHOICES,
                value="Random",
                label="Play as",
            )
            agent_choice = gr.Dropdown(
                choices=list(AGENT_FACTORIES.keys()),
                value=DEFAULT_AGENT,
                label="Opponent",
            )
            new_game_btn = gr.Button("New Game", variant="primary")

            with gr.Row():
                undo_btn = gr.Button("Undo")
                resign_btn = gr.Button("Resign", variant="stop")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label=f"Column (1-{COLS})",
                placeholder="4",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button(
                "Submit Move",
                elem_id="coord-submit",
            )

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Column", "Time (s)"],
                datatype=["number", "str", "str", "str"],
                interactive=False,
                column_count=4,
            )

    board_outputs = [board_html, status_text, move_table, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )

    new_game_btn.click(
        fn=_new_game_with_color,
        inputs=[color_choice, agent_choice, session_state],
        outputs=board_outputs + [color_info],
    )

    undo_btn.click(
        fn=_undo_move,
        inputs=[session_state],
        outputs=board_outputs,
    )

    resign_btn.click(
        fn=_resign,
        inputs=[session_state],
        outputs=board_outputs,
    )
