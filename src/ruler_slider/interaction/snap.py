import logging
from enum import Enum
from typing import Callable, Optional

from ruler_slider.config import RulerConfig
from ruler_slider.rulers.tick import TickRuler
from .viewport import Cancellable, ScrollViewport, TimerFactory

log = logging.getLogger(__name__)


class SnapPhase(Enum):
    IDLE = "idle"
    PENDING_SNAP = "pending_snap"
    ANIMATING = "animating"


class SnapScheduler:
    """Debounces scroll-ended notifications into one animated snap.

    IDLE --scroll ended--> PENDING_SNAP --timer--> ANIMATING --done--> IDLE

    cancel() brings any phase back to IDLE. At most one timer or animation is
    alive; its handle is kept in state.pending_snap. A completion arriving from
    a cancelled cycle is dropped.
    """

    def __init__(self, config: RulerConfig, viewport: ScrollViewport, state, start_timer: TimerFactory,
                 on_snapped: Callable[[float], None]) -> None:
        """
        Args:
            config: Ruler configuration (snapping flag, durations, curve)
            viewport: Viewport to read the offset from and animate
            state: ScrollState shared with the owning session
            start_timer: Factory for the debounce timer
            on_snapped: Called with the snapped value when it differs from the last reported one
        """
        self.config = config
        self.ruler = TickRuler(config)
        self.viewport = viewport
        self.state = state
        self.start_timer = start_timer
        self.on_snapped = on_snapped
        self.phase = SnapPhase.IDLE
        self._cycle = 0

    def scroll_ended(self) -> None:
        """Arm (or re-arm) the debounce timer."""
        if not self.config.snapping:
            return
        if self.phase is SnapPhase.ANIMATING:
            # Produced by our own animation settling; the running snap covers it.
            return
        self._release_handle()
        cycle = self._next_cycle()
        self.state.pending_snap = self.start_timer(self.config.snap_debounce_ms, lambda: self._on_timer(cycle))
        self.phase = SnapPhase.PENDING_SNAP
        log.debug("snap armed (cycle %d, %d ms)", cycle, self.config.snap_debounce_ms)

    def cancel(self) -> None:
        """Drop any pending timer or running animation."""
        if self.phase is SnapPhase.IDLE and self.state.pending_snap is None:
            return
        log.debug("snap cancelled in phase %s (cycle %d)", self.phase.value, self._cycle)
        self._release_handle()
        self._next_cycle()
        self.phase = SnapPhase.IDLE

    def _on_timer(self, cycle: int) -> None:
        if cycle != self._cycle or self.phase is not SnapPhase.PENDING_SNAP:
            return
        self.state.pending_snap = None

        # Read the offset now, not when the timer was armed.
        current = self.viewport.offset()
        target = self.ruler.get_tick_at(current)
        target_offset = max(0.0, min(target * self.config.tick_spacing, self.viewport.max_scroll_extent()))
        log.debug("snap fired: offset %.3f -> tick %d (offset %.3f)", current, target, target_offset)

        self.phase = SnapPhase.ANIMATING
        if abs(current - target_offset) < 1e-6:
            self._on_animation_done(cycle, target)
            return
        handle = self.viewport.animate_to(
            target_offset,
            self.config.snap_duration_ms,
            self.config.snap_curve,
            lambda: self._on_animation_done(cycle, target),
        )
        # animate_to may complete synchronously (zero duration)
        if cycle == self._cycle and self.phase is SnapPhase.ANIMATING:
            self.state.pending_snap = handle

    def _on_animation_done(self, cycle: int, target: int) -> None:
        if cycle != self._cycle or self.phase is not SnapPhase.ANIMATING:
            return
        self.state.pending_snap = None
        self.phase = SnapPhase.IDLE
        snapped = float(self.ruler.value_of_tick(target))
        log.debug("snap complete at %s", snapped)
        if self.state.last_reported_value != snapped:
            self.state.last_reported_value = snapped
            self.on_snapped(snapped)

    def _next_cycle(self) -> int:
        self._cycle += 1
        return self._cycle

    def _release_handle(self) -> None:
        handle: Optional[Cancellable] = self.state.pending_snap
        self.state.pending_snap = None
        if handle is not None:
            handle.cancel()
