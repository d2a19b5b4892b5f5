import logging
from functools import partial
from typing import Callable, List, Optional

from PySide6.QtCore import QEasingCurve, QPoint, Qt, QVariantAnimation, Signal
from PySide6.QtGui import QBrush, QPainter
from PySide6.QtWidgets import QWidget

from ruler_slider.colors.modes import ColorMap
from ruler_slider.config import RulerConfig, TicksAlignment
from ruler_slider.interaction.session import ScrollSession
from ruler_slider.interaction.timers import start_qt_timer
from ruler_slider.interaction.viewport import ScrollListener, TimerFactory
from ruler_slider.renderers.painter import TickRenderer
from ruler_slider.rulers.tick import TickRuler

log = logging.getLogger(__name__)


class _AnimationHandle:
    """Cancellable wrapper around a running QVariantAnimation."""

    def __init__(self, animation: QVariantAnimation, on_complete: Callable[[], None]) -> None:
        self._animation: Optional[QVariantAnimation] = animation
        self._on_complete: Optional[Callable[[], None]] = on_complete
        animation.finished.connect(self._finished)
        animation.destroyed.connect(self._forget)

    def cancel(self) -> None:
        animation = self._animation
        self._forget()
        if animation is not None:
            animation.stop()
            animation.deleteLater()

    def _finished(self) -> None:
        animation, on_complete = self._animation, self._on_complete
        self._forget()
        if animation is not None:
            animation.deleteLater()
        if on_complete is not None:
            on_complete()

    def _forget(self, *_args) -> None:
        self._animation = None
        self._on_complete = None


class RulerSliderWidget(QWidget):
    """
    Horizontally scrollable ruler that reports the value under its indicator.

    Key behaviors:
    - Left drag and mouse wheel scroll the ruler
    - Offset 0 puts the first tick under the centre indicator
    - With snapping enabled, the ruler animates to the nearest tick after scrolling ends
    - The widget is the ScrollViewport of its ScrollSession
    """

    valueChanged = Signal(float)

    def __init__(self, config: RulerConfig, color_map: Optional[ColorMap] = None, indicator: Optional[QWidget] = None,
                 on_value_changed: Optional[Callable[[float], None]] = None,
                 start_timer: Optional[TimerFactory] = None, parent: Optional[QWidget] = None) -> None:
        """Create ruler slider. on_value_changed(value) is connected to valueChanged."""
        super().__init__(parent)
        self.config: RulerConfig = config
        self.color_map: ColorMap = color_map or ColorMap()
        self.ruler = TickRuler(config)
        self.renderer = TickRenderer(config)
        self.indicator: Optional[QWidget] = indicator

        self._offset: float = 0.0
        self._listeners: List[ScrollListener] = []
        self._layout_callbacks: List[Callable[[], None]] = []
        self._laid_out: bool = False
        self.panning: bool = False
        self.last_mouse_pos: Optional[QPoint] = None

        self.setFixedSize(int(round(config.viewport_width)), int(round(config.viewport_height)))
        if indicator is not None:
            indicator.setParent(self)
            indicator.show()

        if on_value_changed is not None:
            self.valueChanged.connect(on_value_changed)
        # Parented timers die with the widget
        timers = start_timer or partial(start_qt_timer, parent=self)
        self.session = ScrollSession(config, self, self.valueChanged.emit, timers)
        self.destroyed.connect(self.session.dispose)
        self.session.initialize()

    @property
    def value(self) -> Optional[float]:
        return self.session.value

    # --- ScrollViewport ---

    def offset(self) -> float:
        return self._offset

    def max_scroll_extent(self) -> float:
        return self.ruler.max_scroll_extent

    def jump_to(self, offset: float) -> None:
        self._set_offset(offset)

    def animate_to(self, offset: float, duration_ms: int, curve: QEasingCurve.Type, on_complete: Callable[[], None]):
        if duration_ms <= 0:
            self._set_offset(offset)
            on_complete()
            return None

        animation = QVariantAnimation(self)
        animation.setStartValue(float(self._offset))
        animation.setEndValue(float(offset))
        animation.setDuration(duration_ms)
        animation.setEasingCurve(QEasingCurve(curve))
        animation.valueChanged.connect(lambda value: self._set_offset(float(value)))
        handle = _AnimationHandle(animation, on_complete)
        animation.start()
        return handle

    def after_layout(self, callback: Callable[[], None]) -> None:
        if self._laid_out:
            callback()
        else:
            self._layout_callbacks.append(callback)

    def add_listener(self, listener: ScrollListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ScrollListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _set_offset(self, offset: float) -> None:
        offset = self.ruler.clamp_offset(offset)
        if offset == self._offset:
            return
        self._offset = offset
        self.update()
        for listener in list(self._listeners):
            listener.on_scroll_position_changed(offset)

    def _notify_resumed(self) -> None:
        for listener in list(self._listeners):
            listener.on_scroll_resumed()

    def _notify_ended(self) -> None:
        for listener in list(self._listeners):
            listener.on_scroll_ended()

    # --- Qt events ---

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._place_indicator()
        if not self._laid_out and self.width() > 0:
            self._laid_out = True
            log.debug("ruler laid out at %dx%d", self.width(), self.height())
            callbacks, self._layout_callbacks = self._layout_callbacks, []
            for callback in callbacks:
                callback()

    def _place_indicator(self):
        if self.indicator is None:
            return
        hint = self.indicator.sizeHint()
        width = hint.width() if hint.isValid() else self.indicator.width()
        height = hint.height() if hint.isValid() else self.indicator.height()
        x = int(self.width() / 2 - width / 2)
        y = self.height() - height if self.config.ticks_alignment == TicksAlignment.BOTTOM else 0
        self.indicator.setGeometry(x, y, width, height)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setBrush(QBrush(self.color_map.get_object_color("surface-base")))
        painter.setPen(Qt.PenStyle.NoPen)
        painter.drawRect(self.rect())

        self.renderer.draw_ruler(painter, self._offset, self.width())

        if self.indicator is None:
            painter.setBrush(QBrush(self.color_map.get_accent_color("red")))
            painter.drawRect(int(self.width() / 2) - 1, 0, 2, self.height())

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.panning = True
            self.last_mouse_pos = event.pos()
            self._notify_resumed()

    def mouseMoveEvent(self, event):
        if self.panning and self.last_mouse_pos:
            delta = event.pos() - self.last_mouse_pos
            self.last_mouse_pos = event.pos()
            self._notify_resumed()
            # Dragging right reveals lower values
            self._set_offset(self._offset - delta.x())

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton and self.panning:
            self.panning = False
            self.last_mouse_pos = None
            self._notify_ended()

    def wheelEvent(self, event):
        delta = event.angleDelta().x() or event.angleDelta().y()
        self._notify_resumed()
        self._set_offset(self._offset - delta / 120 * self.config.tick_spacing)
        self._notify_ended()
        event.accept()

    def closeEvent(self, event):
        self.dispose()
        super().closeEvent(event)

    def dispose(self) -> None:
        """Stop snapping and detach the session. Safe to call more than once."""
        self.session.dispose()
