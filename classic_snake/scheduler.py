"""
scheduler.py — Repeating tick task driven by elapsed frame time.

The game loop measures real time (pygame clock) and hands each frame's
``dt`` to the model; the model feeds it into a StepScheduler and asks it,
one tick at a time, whether another tick is due.

Restarting the schedule (e.g. on a speed-up) throws away whatever time had
accumulated toward the old interval, so a tick of the old schedule can never
fire after the new one has begun.
"""

import logging

logger = logging.getLogger(__name__)


class StepScheduler:
    """Accumulator-based repeating task with a mutable interval."""

    def __init__(self):
        self._interval_ms: int = 0
        self._elapsed_ms: float = 0.0
        self._active: bool = False

    # ── Accessors ────────────────────────────────────────────────
    @property
    def active(self) -> bool:
        return self._active

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    # ── Commands ─────────────────────────────────────────────────
    def start(self, interval_ms: int) -> None:
        """Cancel the current schedule (if any) and begin a new one."""
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        self._interval_ms = interval_ms
        self._elapsed_ms = 0.0
        self._active = True
        logger.debug("tick schedule started at %d ms", interval_ms)

    def stop(self) -> None:
        self._active = False
        self._elapsed_ms = 0.0

    def advance(self, dt_ms: float) -> None:
        """Add elapsed wall time. Ignored while stopped."""
        if self._active and dt_ms > 0:
            self._elapsed_ms += dt_ms

    def due(self) -> bool:
        """
        Consume one interval of accumulated time.
        Returns True if a tick should run now.
        """
        if not self._active or self._elapsed_ms < self._interval_ms:
            return False
        self._elapsed_ms -= self._interval_ms
        return True
