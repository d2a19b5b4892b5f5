from .session import ScrollSession, ScrollState
from .snap import SnapPhase, SnapScheduler
from .timers import QtTimerHandle, start_qt_timer
from .viewport import Cancellable, ScrollListener, ScrollViewport

__all__ = [
    "ScrollSession",
    "ScrollState",
    "SnapPhase",
    "SnapScheduler",
    "QtTimerHandle",
    "start_qt_timer",
    "Cancellable",
    "ScrollListener",
    "ScrollViewport",
]
