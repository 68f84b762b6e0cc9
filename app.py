"""Connect Four search engine - Gradio web app entry point."""

import logging

import gradio as gr

from connectfour.config import COLS, CONNECT_N, LOG_LEVEL, ROWS
from connectfour.ui.arena_tab import build_arena_tab
from connectfour.ui.board_component import BOARD_CLICK_JS
from connectfour.ui.play_tab import build_play_tab

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

with gr.Blocks(title="Connect Four") as demo:
    gr.Markdown("# Connect Four")
    gr.Markdown(
        f"{ROWS}x{COLS} board, played until full. "
        f"The player with more {CONNECT_N}-in-a-rows wins."
    )

    with gr.Tab("Play"):
        build_play_tab()

    with gr.Tab("Arena"):
        build_arena_tab()

    # Bind board click handler JS on page load
    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    demo.launch(theme=gr.themes.Soft())
