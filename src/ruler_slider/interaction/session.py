import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional

from ruler_slider.config import RulerConfig
from ruler_slider.rulers.tick import TickRuler
from .snap import SnapPhase, SnapScheduler
from .timers import start_qt_timer
from .viewport import Cancellable, ScrollViewport, TimerFactory

log = logging.getLogger(__name__)

VALUE_TOLERANCE = 1e-6


@dataclass
class ScrollState:
    """Mutable scroll state, owned by exactly one ScrollSession."""
    offset: float = 0.0
    last_reported_value: Optional[float] = None
    pending_snap: Optional[Cancellable] = None


class ScrollSession:
    """Interaction controller for one mounted ruler.

    Listens to the viewport, turns offsets into values, reports changed values
    and hands scroll-ended notifications to the SnapScheduler.

    Example:
        session = ScrollSession(config, viewport, on_value_changed=print)
        session.initialize()
        ...
        session.dispose()
    """

    def __init__(self, config: RulerConfig, viewport: ScrollViewport,
                 on_value_changed: Optional[Callable[[float], None]] = None,
                 start_timer: Optional[TimerFactory] = None) -> None:
        """
        Args:
            config: Validated ruler configuration
            viewport: Scroll surface to drive and listen to
            on_value_changed: Receives every reported value
            start_timer: Debounce timer factory, defaults to a Qt single-shot timer
        """
        self.config = config
        self.ruler = TickRuler(config)
        self.viewport = viewport
        self.on_value_changed = on_value_changed
        self.state = ScrollState(offset=self.ruler.transform(config.initial_value))
        self._snap = SnapScheduler(config, viewport, self.state, start_timer or start_qt_timer, self._emit)

        self._outbox: Deque[float] = deque()
        self._emitting = False
        self._disposed = False

        viewport.add_listener(self)

    @property
    def value(self) -> Optional[float]:
        """Last value reported to on_value_changed, None before initialize()."""
        return self.state.last_reported_value

    @property
    def phase(self) -> SnapPhase:
        return self._snap.phase

    @property
    def disposed(self) -> bool:
        return self._disposed

    def initialize(self) -> None:
        """Jump to initial_value once the viewport is laid out and report it."""
        self.viewport.after_layout(self._jump_to_initial)

    def _jump_to_initial(self) -> None:
        if self._disposed:
            return
        offset = self.ruler.transform(self.config.initial_value)
        log.debug("jumping to initial value %s (offset %.3f)", self.config.initial_value, offset)
        self.viewport.jump_to(offset)
        # jump_to may not notify when the offset is unchanged
        self.on_scroll_position_changed(self.viewport.offset())

    def on_scroll_position_changed(self, offset: float) -> None:
        if self._disposed:
            return
        self.state.offset = self.ruler.clamp_offset(offset)
        value = self.ruler.get_value_at(self.state.offset)
        last = self.state.last_reported_value
        if last is None or abs(last - value) > VALUE_TOLERANCE:
            self.state.last_reported_value = value
            self._emit(value)

    def on_scroll_resumed(self) -> None:
        if self._disposed:
            return
        self._snap.cancel()

    def on_scroll_ended(self) -> None:
        if self._disposed:
            return
        self._snap.scroll_ended()

    def dispose(self) -> None:
        """Detach from the viewport and cancel any pending snap. Safe to call twice."""
        if self._disposed:
            return
        self._disposed = True
        try:
            self._snap.cancel()
        finally:
            self.viewport.remove_listener(self)
            self._outbox.clear()
        log.debug("session disposed")

    def _emit(self, value: float) -> None:
        if self.on_value_changed is None:
            return
        self._outbox.append(value)
        if self._emitting:
            # Delivered by the outer call once the callback returns.
            return
        self._emitting = True
        try:
            while self._outbox:
                self.on_value_changed(self._outbox.popleft())
        finally:
            self._emitting = False
