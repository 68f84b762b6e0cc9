"""Arena tab: AI vs AI with live board updates."""

from __future__ import annotations

import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Generator, Optional

import gradio as gr

from connectfour.agent.base import Agent
from connectfour.agent.registry import AGENT_FACTORIES, make_agent
from connectfour.config import COLS, ROWS
from connectfour.game.arbitrator import request_move
from connectfour.game.board import ConnectFourGameState, format_column
from connectfour.game.patterns import evaluate
from connectfour.game.types import Player
from connectfour.ui.board_component import render_board_svg

# Ordered list for round-robin grid (exclude RandomAgent)
AGENT_NAMES = [n for n in AGENT_FACTORIES if n != "RandomAgent"]

SHORT_NAMES: dict[str, str] = {
    name: name.replace("MinimaxAgent", "MM").replace("GreedyAgent", "GR").replace(" ", "")
    for name in AGENT_NAMES
}

MOVE_DELAY = 0.4  # seconds between moves
ARENA_MSEC_PER_MOVE = 250


def _render_arena_board(game: ConnectFourGameState, result_msg: str = "") -> str:
    eval_score = evaluate(game.board, Player.ONE) if game.moves else None
    return render_board_svg(game, clickable=False, game_over_message=result_msg, eval_score=eval_score)


def _result_message(game: ConnectFourGameState) -> str:
    if not game.is_over:
        return ""
    if game.winner is not None:
        return f"{game.winner} wins!"
    return "Draw!"


def _move_table(game: ConnectFourGameState) -> list[list[str]]:
    rows: list[list[str]] = []
    for i, move in enumerate(game.moves):
        rows.append([str(i + 1), str(move.player), format_column(move.column)])
    return rows


def _new_match(
    one_name: str, two_name: str, msec_per_move: int,
) -> tuple[ConnectFourGameState, dict[Player, Agent]]:
    game = ConnectFourGameState(ROWS, COLS)
    agents = {Player.ONE: make_agent(one_name), Player.TWO: make_agent(two_name)}
    for player, agent in agents.items():
        agent.init(player, msec_per_move, ROWS, COLS)
    return game, agents


def _play_turn(game: ConnectFourGameState, agents: dict[Player, Agent], msec_per_move: int) -> int:
    agent = agents[game.current_player]
    t0 = time.time()
    col = request_move(agent, game.board, game.last_column, msec_per_move)
    game.apply_move(col, elapsed=time.time() - t0)
    return col


def _run_arena(
    one_name: str,
    two_name: str,
    msec_per_move: float,
    delay: float,
) -> Generator:
    """Generator that yields board updates after each move."""
    msec = int(msec_per_move)
    game, agents = _new_match(one_name, two_name, msec)
    names = {Player.ONE: one_name, Player.TWO: two_name}

    yield (
        _render_arena_board(game),
        f"Game started: {one_name} (Player 1) vs {two_name} (Player 2)",
        _move_table(game),
    )

    while not game.is_over:
        mover = game.current_player
        col = _play_turn(game, agents, msec)

        result = _result_message(game)
        if result:
            scores = game.scores()
            status = (
                f"Game over: {result} "
                f"({scores[Player.ONE]} to {scores[Player.TWO]} fours)"
            )
        else:
            status = (
                f"Move {len(game.moves)}: {names[mover]} played column "
                f"{format_column(col)}, {names[game.current_player]}'s turn"
            )

        yield (
            _render_arena_board(game, result),
            status,
            _move_table(game),
        )

        if not game.is_over:
            time.sleep(delay)


# ---------------------------------------------------------------------------
# Round-robin tournament
# ---------------------------------------------------------------------------

def _play_one_game(
    one_name: str, two_name: str, msec_per_move: int,
) -> tuple[str, str, Optional[str]]:
    """Play a full game. Returns (one_name, two_name, winner_name or None for draw)."""
    game, agents = _new_match(one_name, two_name, msec_per_move)
    while not game.is_over:
        _play_turn(game, agents, msec_per_move)

    if game.winner is Player.ONE:
        return (one_name, two_name, one_name)
    elif game.winner is Player.TWO:
        return (one_name, two_name, two_name)
    return (one_name, two_name, None)


def _build_grid(results: dict[tuple[str, str], Optional[str]]) -> list[list[str]]:
    """Build the results grid from completed games. Row = Player 1, Col = Player 2."""
    grid: list[list[str]] = []
    for row_agent in AGENT_NAMES:
        row = [SHORT_NAMES[row_agent]]
        for col_agent in AGENT_NAMES:
            if row_agent == col_agent:
                row.append("-")
                continue
            key = (row_agent, col_agent)
            if key not in results:
                row.append("...")
            elif results[key] == row_agent:
                row.append("W")
            elif results[key] is None:
                row.append("D")
            else:
                row.append("L")
        grid.append(row)
    return grid


def _run_round_robin(msec_per_move: float) -> Generator:
    """Run all-vs-all tournament with parallel game execution."""
    msec = int(msec_per_move)
    matchups = [(a, b) for a in AGENT_NAMES for b in AGENT_NAMES if a != b]
    total = len(matchups)
    results: dict[tuple[str, str], Optional[str]] = {}

    yield (
        f"Starting round-robin: {total} games across {len(AGENT_NAMES)} agents...",
        _build_grid(results),
    )

    completed = 0
    with ProcessPoolExecutor() as pool:
        future_to_match = {
            pool.submit(_play_one_game, one, two, msec): (one, two)
            for one, two in matchups
        }

        for future in as_completed(future_to_match):
            one_name, two_name, winner = future.result()
            results[(one_name, two_name)] = winner
            completed += 1

            if winner is None:
                result_str = "Draw"
            elif winner == one_name:
                result_str = f"{one_name} (P1) won"
            else:
                result_str = f"{two_name} (P2) won"

            yield (
                f"Game {completed}/{total}: {one_name} vs {two_name} -> {result_str}",
                _build_grid(results),
            )

    wins: dict[str, int] = {name: 0 for name in AGENT_NAMES}
    draws: dict[str, int] = {name: 0 for name in AGENT_NAMES}
    for (one, two), winner in results.items():
        if winner is not None:
            wins[winner] += 1
        else:
            draws[one] += 1
            draws[two] += 1

    ranking = sorted(AGENT_NAMES, key=lambda n: (wins[n], draws[n]), reverse=True)
    summary_lines = [f"Tournament complete! ({total} games)"]
    for i, name in enumerate(ranking):
        losses = (len(AGENT_NAMES) - 1) * 2 - wins[name] - draws[name]
        summary_lines.append(f"  {i+1}. {name}: {wins[name]}W {draws[name]}D {losses}L")

    yield (
        "\n".join(summary_lines),
        _build_grid(results),
    )


def build_arena_tab() -> None:
    """Construct the Arena tab UI inside a gr.Blocks context."""

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=_render_arena_board(ConnectFourGameState(ROWS, COLS)),
                label="Board",
            )
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Select two agents and click Start.",
                label="Status",
                interactive=False,
                lines=2,
            )

            gr.Markdown("### Setup")
            one_choice = gr.Dropdown(
                choices=list(AGENT_FACTORIES.keys()),
                value="MinimaxAgent",
                label="Player 1 Agent",
            )
            two_choice = gr.Dropdown(
                choices=list(AGENT_FACTORIES.keys()),
                value="GreedyAgent",
                label="Player 2 Agent",
            )
            budget_slider = gr.Slider(
                minimum=50,
                maximum=3000,
                value=ARENA_MSEC_PER_MOVE,
                step=50,
                label="Thinking time per move (ms)",
            )
            delay_slider = gr.Slider(
                minimum=0.0,
                maximum=2.0,
                value=MOVE_DELAY,
                step=0.1,
                label="Delay between moves (sec)",
            )
            start_btn = gr.Button("Start", variant="primary")

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Column"],
                datatype=["number", "str", "str"],
                interactive=False,
                column_count=3,
            )

    gr.Markdown("---")
    gr.Markdown("### Round Robin Tournament")
    gr.Markdown("Each agent plays every other agent twice (once as Player 1, once as Player 2).")
    round_robin_btn = gr.Button("All vs All", variant="primary")
    rr_status = gr.Textbox(
        value="Click 'All vs All' to start.",
        label="Tournament Status",
        interactive=False,
        lines=10,
    )
    rr_grid = gr.Dataframe(
        headers=["P1 / P2"] + [SHORT_NAMES[n] for n in AGENT_NAMES],
        interactive=False,
        column_count=len(AGENT_NAMES) + 1,
    )

    start_btn.click(
        fn=_run_arena,
        inputs=[one_choice, two_choice, budget_slider, delay_slider],
        outputs=[board_html, status_text, move_table],
    )

    round_robin_btn.click(
        fn=_run_round_robin,
        inputs=[budget_slider],
        outputs=[rr_status, rr_grid],
    )
