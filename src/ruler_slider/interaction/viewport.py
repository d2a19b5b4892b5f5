from typing import Callable, Protocol

from PySide6.QtCore import QEasingCurve


class Cancellable(Protocol):
    """A pending timer or animation. cancel() must be idempotent."""

    def cancel(self) -> None: ...


# start_timer(delay_ms, callback) -> handle
TimerFactory = Callable[[int, Callable[[], None]], Cancellable]


class ScrollListener(Protocol):
    """Receives the notifications a ScrollViewport emits."""

    def on_scroll_position_changed(self, offset: float) -> None: ...

    def on_scroll_resumed(self) -> None: ...

    def on_scroll_ended(self) -> None: ...


class ScrollViewport(Protocol):
    """Horizontal scroll surface the ruler content lives in.

    on_scroll_position_changed is sent for every offset change, whether it
    comes from the user, jump_to() or animate_to(). on_scroll_resumed is sent
    only for user scrolling (drag or wheel), on_scroll_ended when the user
    lets go.
    """

    def offset(self) -> float: ...

    def max_scroll_extent(self) -> float: ...

    def jump_to(self, offset: float) -> None: ...

    def animate_to(self, offset: float, duration_ms: int, curve: QEasingCurve.Type,
                   on_complete: Callable[[], None]) -> Cancellable:
        """Animate to offset. on_complete is not called once the handle is cancelled."""
        ...

    def after_layout(self, callback: Callable[[], None]) -> None:
        """Call callback once, after the first layout pass (immediately if already laid out)."""
        ...

    def add_listener(self, listener: ScrollListener) -> None: ...

    def remove_listener(self, listener: ScrollListener) -> None: ...
