from __future__ import annotations

import os

ROWS = 6
COLS = 7
CONNECT_N = 4

# Per-move thinking budget handed to agents and the arbitrator
MSEC_PER_MOVE = int(os.environ.get("CONNECTFOUR_MSEC_PER_MOVE", "1000"))

LOG_LEVEL = os.environ.get("CONNECTFOUR_LOG_LEVEL", "INFO")
