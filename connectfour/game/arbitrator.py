"""Per-move deadline keeping and move submission.

Agents poll `Arbitrator.is_time_up()` and publish their current best column
with `set_move()`, possibly several times per turn. `request_move` runs an
agent on a worker thread and collects whatever it published in time.
"""

from __future__ import annotations

import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TYPE_CHECKING, Callable, Optional

from .board import Board

if TYPE_CHECKING:
    from connectfour.agent.base import Agent

logger = logging.getLogger(__name__)

# Extra wait after the deadline for an agent to reach its next poll point
OVERRUN_GRACE_SEC = 0.25


class Arbitrator:
    """Deadline predicate plus a last-write-wins move slot."""

    def __init__(
        self,
        msec_per_move: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.msec_per_move = msec_per_move
        self._clock = clock
        self._deadline = clock() + msec_per_move / 1000.0
        self._expired = False
        self._move: Optional[int] = None
        self._submissions = 0

    def is_time_up(self) -> bool:
        if not self._expired and self._clock() >= self._deadline:
            self._expired = True
        return self._expired

    def expire(self) -> None:
        """Force the deadline to fire now."""
        self._expired = True

    def set_move(self, col: int) -> None:
        if self.is_time_up():
            logger.debug("Ignoring late move %d submitted after the deadline", col)
            return
        self._move = col
        self._submissions += 1

    @property
    def move(self) -> Optional[int]:
        return self._move

    @property
    def submissions(self) -> int:
        return self._submissions

    def remaining_sec(self) -> float:
        return max(0.0, self._deadline - self._clock())


def request_move(
    agent: Agent,
    board: Board,
    last_column: Optional[int],
    msec_per_move: int,
) -> int:
    """Ask `agent` for a move within `msec_per_move` and return the column.

    The agent searches on a worker thread against a snapshot of `board`, so a
    search still unwinding after the deadline cannot touch the caller's board.
    """
    arb = Arbitrator(msec_per_move)
    snapshot = board.copy()
    t0 = time.monotonic()

    # Not a context manager: shutting down must not block on an overrunning agent
    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"agent-{agent.name}")
    try:
        future = pool.submit(agent.calc_move, snapshot, last_column, arb)
        try:
            future.result(timeout=arb.remaining_sec() + OVERRUN_GRACE_SEC)
        except FutureTimeoutError:
            logger.warning(
                "%s overran its %d ms budget; using its last published move",
                agent.name, msec_per_move,
            )
    finally:
        arb.expire()
        pool.shutdown(wait=False)

    elapsed = time.monotonic() - t0
    if arb.move is None or not board.is_valid_move(arb.move):
        legal = [c for c in range(board.num_cols()) if board.is_valid_move(c)]
        col = random.choice(legal)
        logger.warning(
            "%s published no playable move (got %r); playing random column %d",
            agent.name, arb.move, col,
        )
        return col

    logger.debug(
        "%s chose column %d after %d submission(s) in %.3fs",
        agent.name, arb.move, arb.submissions, elapsed,
    )
    return arb.move
