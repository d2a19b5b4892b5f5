from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class QtTimerHandle:
    """Single-shot QTimer that can be cancelled before it fires.

    With a parent, the timer dies with it and the handle turns inert.
    """

    def __init__(self, delay_ms: int, callback: Callable[[], None], parent: Optional[QObject] = None) -> None:
        self._callback = callback
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)
        self._timer.destroyed.connect(self._forget)
        self._timer.start(max(0, int(delay_ms)))

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def _fire(self) -> None:
        callback = self._callback
        self._release()
        if callback is not None:
            callback()

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
        self._release()

    def _release(self) -> None:
        timer = self._timer
        self._forget()
        if timer is not None:
            timer.deleteLater()

    def _forget(self, *_args) -> None:
        self._callback = None
        self._timer = None


def start_qt_timer(delay_ms: int, callback: Callable[[], None], parent: Optional[QObject] = None) -> QtTimerHandle:
    """Default debounce timer factory used by ScrollSession."""
    return QtTimerHandle(delay_ms, callback, parent)
