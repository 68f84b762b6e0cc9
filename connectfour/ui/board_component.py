"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from connectfour.game.board import ConnectFourGameState, format_column
from connectfour.game.types import Player

# Layout constants
CELL_SIZE = 64
MARGIN = 36
PIECE_RADIUS = 26
BANNER_HEIGHT = 56

# Colors
FRAME_COLOR = "#1F4FB4"
HOLE_COLOR = "#F3F4F6"
LABEL_COLOR = "#1F2937"
PLAYER_ONE_COLOR = "#DC2626"
PLAYER_TWO_COLOR = "#FACC15"
LAST_MOVE_COLOR = "#FFFFFF"
WIN_COLOR = "#4ADE80"
LOSS_COLOR = "#F87171"
DRAW_COLOR = "#FFFFFF"

PIECE_COLORS = {Player.ONE: PLAYER_ONE_COLOR, Player.TWO: PLAYER_TWO_COLOR}


def _coord(row: int, col: int, rows: int) -> tuple[int, int]:
    """Convert 0-based board coordinates to SVG pixel coordinates (row 0 at bottom)."""
    x = MARGIN + col * CELL_SIZE + CELL_SIZE // 2
    y = MARGIN + (rows - 1 - row) * CELL_SIZE + CELL_SIZE // 2
    return x, y


def _banner_color(message: str) -> str:
    if message.startswith("You win"):
        return WIN_COLOR
    if "wins" in message:
        return LOSS_COLOR
    return DRAW_COLOR


def render_board_svg(
    game_state: ConnectFourGameState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
    eval_score: Optional[int] = None,
) -> str:
    """Render the board as an SVG string, followed by the click script."""
    board = game_state.board
    rows, cols = board.num_rows(), board.num_cols()
    width = MARGIN * 2 + cols * CELL_SIZE
    height = MARGIN * 2 + rows * CELL_SIZE
    parts: list[str] = []

    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" '
        f'id="connectfour-board">'
    )

    # Frame
    parts.append(
        f'<rect x="{MARGIN}" y="{MARGIN}" width="{cols * CELL_SIZE}" '
        f'height="{rows * CELL_SIZE}" fill="{FRAME_COLOR}" rx="8"/>'
    )

    # Column labels (top)
    for c in range(cols):
        x, _ = _coord(0, c, rows)
        parts.append(
            f'<text x="{x}" y="{MARGIN - 12}" text-anchor="middle" '
            f'font-size="16" font-family="monospace" fill="{LABEL_COLOR}">'
            f'{format_column(c)}</text>'
        )

    # Holes and pieces
    last = game_state.moves[-1] if game_state.moves else None
    for r in range(rows):
        for c in range(cols):
            x, y = _coord(r, c, rows)
            player = board.get(r, c)
            fill = HOLE_COLOR if player is None else PIECE_COLORS[player]
            parts.append(f'<circle cx="{x}" cy="{y}" r="{PIECE_RADIUS}" fill="{fill}"/>')
            if highlight_last and last is not None and (last.row, last.column) == (r, c):
                parts.append(
                    f'<circle cx="{x}" cy="{y}" r="8" '
                    f'fill="{LAST_MOVE_COLOR}" opacity="0.7"/>'
                )

    # Evaluation readout (positive = Player 1 ahead)
    if eval_score is not None:
        parts.append(
            f'<text x="{width - MARGIN}" y="{height - 10}" text-anchor="end" '
            f'font-size="14" font-family="monospace" fill="{LABEL_COLOR}">'
            f'eval {eval_score:+d}</text>'
        )

    # Clickable column targets (invisible rects over playable columns)
    if clickable and not game_state.is_over:
        for c in range(cols):
            if not board.is_valid_move(c):
                continue
            x = MARGIN + c * CELL_SIZE
            label = format_column(c)
            parts.append(
                f'<rect x="{x}" y="{MARGIN}" width="{CELL_SIZE}" '
                f'height="{rows * CELL_SIZE}" fill="transparent" class="board-click" '
                f'data-coord="{label}" style="cursor:pointer">'
                f'<title>Column {label}</title></rect>'
            )

    if game_over_message:
        y = (height - BANNER_HEIGHT) // 2
        parts.append(
            f'<rect x="0" y="{y}" width="{width}" height="{BANNER_HEIGHT}" '
            f'fill="rgba(0, 0, 0, 0.6)"/>'
        )
        parts.append(
            f'<text x="{width // 2}" y="{y + BANNER_HEIGHT // 2 + 10}" '
            f'text-anchor="middle" font-size="28" font-weight="bold" '
            f'fill="{_banner_color(game_over_message)}">{game_over_message}</text>'
        )

    parts.append("</svg>")
    parts.append(f"<script>({CLICK_JS})();</script>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the column label to
# a hidden Gradio Textbox, then triggers the submit button.
CLICK_JS = """
() => {
    if (window._connectFourClickBound) return;
    window._connectFourClickBound = true;

    document.addEventListener('click', function(e) {
        const target = e.target.closest('.board-click');
        if (!target) return;
        const coord = target.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (container) {
            // Native setter so Gradio's change detection sees the value
            const nativeSetter = Object.getOwnPropertyDescriptor(
                window.HTMLInputElement.prototype, 'value'
            )?.set || Object.getOwnPropertyDescriptor(
                window.HTMLTextAreaElement.prototype, 'value'
            )?.set;
            if (nativeSetter) {
                nativeSetter.call(container, coord);
            } else {
                container.value = coord;
            }
            container.dispatchEvent(new Event('input', { bubbles: true }));
            const btn = document.querySelector('#coord-submit');
            if (btn) btn.click();
        }
    });
}
"""

BOARD_CLICK_JS = CLICK_JS
