import os
import unittest
from unittest import mock

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QObject, QPoint, QPointF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QWheelEvent
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QApplication, QWidget

from ruler_slider.colors.modes import ColorMap
from ruler_slider.config import RulerConfig, TicksAlignment
from ruler_slider.interaction.snap import SnapPhase
from ruler_slider.interaction.timers import QtTimerHandle, start_qt_timer
from ruler_slider.renderers.painter import TickRenderer
from ruler_slider.widgets import RulerSliderWidget


class ManualTimers:
    def __init__(self):
        self.callbacks = []

    def start_timer(self, delay_ms, callback):
        timers = self

        class Handle:
            def cancel(self):
                if callback in timers.callbacks:
                    timers.callbacks.remove(callback)

        self.callbacks.append(callback)
        return Handle()

    def fire(self):
        callbacks, self.callbacks = self.callbacks, []
        for callback in callbacks:
            callback()


class TestRulerSliderWidget(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self):
        self.config = RulerConfig(min_value=20, max_value=100, initial_value=36, viewport_width=300,
                                  viewport_height=100, snapping=True, snap_duration_ms=0)
        self.timers = ManualTimers()
        self.values = []
        self.widget = RulerSliderWidget(self.config, on_value_changed=self.values.append,
                                        start_timer=self.timers.start_timer)

    def tearDown(self):
        self.widget.dispose()
        self.widget.deleteLater()

    def test_fixed_size(self):
        self.assertEqual(300, self.widget.width())
        self.assertEqual(100, self.widget.height())

    def test_initial_value_after_show(self):
        self.assertEqual([], self.values)
        self.widget.show()
        self.assertEqual(320.0, self.widget.offset())
        self.assertEqual([36.0], self.values)
        self.assertEqual(36.0, self.widget.value)

    def test_jump_reports_value(self):
        self.widget.show()
        self.widget.jump_to(334)
        self.assertEqual([36.0, 36.7], [round(v, 6) for v in self.values])

    def test_jump_is_clamped(self):
        self.widget.show()
        self.widget.jump_to(-100)
        self.assertEqual(0.0, self.widget.offset())
        self.widget.jump_to(99999)
        self.assertEqual(self.widget.max_scroll_extent(), self.widget.offset())
        self.assertEqual(1600.0, self.widget.max_scroll_extent())

    def test_snap_with_zero_duration(self):
        self.widget.show()
        self.widget.jump_to(327)
        self.widget.session.on_scroll_ended()
        self.assertEqual(SnapPhase.PENDING_SNAP, self.widget.session.phase)
        self.timers.fire()
        self.assertEqual(SnapPhase.IDLE, self.widget.session.phase)
        self.assertEqual(320.0, self.widget.offset())
        self.assertEqual([36.0, 36.4, 36.0], [round(v, 6) for v in self.values])

    def test_dispose_detaches_session(self):
        self.widget.show()
        self.widget.dispose()
        self.widget.dispose()
        self.widget.jump_to(400)
        self.assertEqual([36.0], self.values)

    def test_indicator_is_centered(self):
        indicator = QWidget()
        indicator.setFixedSize(4, 40)
        config = self.config.replace(ticks_alignment=TicksAlignment.BOTTOM)
        widget = RulerSliderWidget(config, indicator=indicator, start_timer=self.timers.start_timer)
        widget.show()
        self.assertIs(widget, indicator.parent())
        self.assertEqual(QPoint(148, 60), indicator.pos())
        widget.dispose()
        widget.deleteLater()


class TestRulerSliderGestures(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self):
        self.config = RulerConfig(min_value=20, max_value=100, initial_value=36, viewport_width=300,
                                  viewport_height=100, snapping=True, snap_duration_ms=100)
        self.timers = ManualTimers()
        self.values = []
        self.widget = RulerSliderWidget(self.config, on_value_changed=self.values.append,
                                        start_timer=self.timers.start_timer)
        self.widget.show()

    def tearDown(self):
        self.widget.dispose()
        self.widget.deleteLater()

    def drag(self, start_x, end_x):
        QTest.mousePress(self.widget, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(start_x, 50))
        QTest.mouseMove(self.widget, QPoint(end_x, 50))
        QTest.mouseRelease(self.widget, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(end_x, 50))

    def wheel(self, angle_y):
        pos = QPointF(150, 50)
        event = QWheelEvent(pos, self.widget.mapToGlobal(pos), QPoint(0, 0), QPoint(0, angle_y),
                            Qt.MouseButton.NoButton, Qt.KeyboardModifier.NoModifier,
                            Qt.ScrollPhase.NoScrollPhase, False)
        QApplication.sendEvent(self.widget, event)

    def test_drag_moves_ruler(self):
        self.drag(150, 143)
        self.assertEqual(327.0, self.widget.offset())
        self.assertEqual([36.0, 36.4], [round(v, 6) for v in self.values])
        self.assertEqual(SnapPhase.PENDING_SNAP, self.widget.session.phase)

    def test_drag_then_animated_snap(self):
        self.drag(150, 143)
        self.timers.fire()
        self.assertEqual(SnapPhase.ANIMATING, self.widget.session.phase)
        QTest.qWait(400)
        self.assertEqual(SnapPhase.IDLE, self.widget.session.phase)
        self.assertEqual(320.0, self.widget.offset())
        self.assertEqual([36.0, 36.4], [round(v, 6) for v in self.values[:2]])
        self.assertEqual(36.0, self.values[-1])
        self.assertIsNone(self.widget.session.state.pending_snap)

    def test_press_during_animation_cancels_snap(self):
        self.drag(150, 143)
        self.timers.fire()
        QTest.qWait(30)
        QTest.mousePress(self.widget, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(150, 50))
        self.assertEqual(SnapPhase.IDLE, self.widget.session.phase)
        self.assertIsNone(self.widget.session.state.pending_snap)
        offset, count = self.widget.offset(), len(self.values)
        QTest.qWait(300)
        self.assertEqual(offset, self.widget.offset())
        self.assertEqual(count, len(self.values))
        QTest.mouseRelease(self.widget, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(150, 50))

    def test_wheel_moves_one_tick(self):
        self.wheel(-120)
        self.assertEqual(340.0, self.widget.offset())
        self.assertEqual([36.0, 37.0], self.values)
        self.assertEqual(SnapPhase.PENDING_SNAP, self.widget.session.phase)
        # Already on a tick, nothing to animate
        self.timers.fire()
        self.assertEqual(SnapPhase.IDLE, self.widget.session.phase)
        self.assertEqual(340.0, self.widget.offset())
        self.assertEqual([36.0, 37.0], self.values)

    def test_wheel_burst_arms_one_snap(self):
        self.wheel(60)
        self.wheel(60)
        self.assertEqual(300.0, self.widget.offset())
        self.assertEqual(1, len(self.timers.callbacks))


class TestEmbeddedRulerSlider(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self):
        self.config = RulerConfig(min_value=20, max_value=100, initial_value=36, viewport_width=300,
                                  viewport_height=100, snapping=True, snap_debounce_ms=20, snap_duration_ms=50)
        self.values = []
        self.window = QWidget()
        self.ruler = RulerSliderWidget(self.config, on_value_changed=self.values.append, parent=self.window)
        self.window.show()

    def test_disposed_with_parent_window(self):
        session = self.ruler.session
        self.ruler.jump_to(327)
        session.on_scroll_ended()
        self.assertEqual(SnapPhase.PENDING_SNAP, session.phase)

        with mock.patch("sys.excepthook") as excepthook:
            self.window.close()
            self.window.deleteLater()
            QTest.qWait(200)

        self.assertTrue(session.disposed)
        self.assertEqual(SnapPhase.IDLE, session.phase)
        self.assertIsNone(session.state.pending_snap)
        self.assertEqual([36.0, 36.4], [round(v, 6) for v in self.values])
        excepthook.assert_not_called()

    def test_snaps_inside_parent_window(self):
        self.ruler.jump_to(327)
        self.ruler.session.on_scroll_ended()
        QTest.qWait(400)
        self.assertEqual(320.0, self.ruler.offset())
        self.assertEqual(SnapPhase.IDLE, self.ruler.session.phase)
        self.window.close()
        self.window.deleteLater()
        QTest.qWait(10)
        self.assertTrue(self.ruler.session.disposed)


class TestTickRenderer(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication([])

    def test_visible_range(self):
        renderer = TickRenderer(RulerConfig(min_value=0, max_value=100, tick_spacing=20))
        self.assertEqual((0, 10), renderer.visible_range(0, 300))
        self.assertEqual((41, 60), renderer.visible_range(1000, 300))
        self.assertEqual((91, 101), renderer.visible_range(2000, 300))

    def test_draw_ruler(self):
        config = RulerConfig(min_value=0, max_value=100, tick_spacing=20, label_rotation=45,
                             custom_labels=["zero", "ten"])
        renderer = TickRenderer(config)
        image = QImage(300, 100, QImage.Format.Format_ARGB32)
        image.fill(0)
        painter = QPainter(image)
        renderer.draw_ruler(painter, 0, 300)
        painter.end()
        # The first tick sits in the middle of the image
        self.assertTrue(any(image.pixelColor(x, 50).alpha() for x in (149, 150, 151)))
        self.assertEqual(0, image.pixelColor(10, 50).alpha())


class TestColorMap(unittest.TestCase):
    def test_modes(self):
        light, dark = ColorMap(), ColorMap(darkmode=True)
        self.assertEqual(QColor(255, 255, 255), light.get_object_color("surface-base"))
        self.assertEqual(QColor(20, 24, 31), dark.get_object_color("surface-base"))
        self.assertEqual(dark.get_accent_color("red"), light.get_accent_color("red", darkmode=True))


class TestQtTimerHandle(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication([])

    def test_fires_once(self):
        fired = []
        handle = start_qt_timer(10, lambda: fired.append(True))
        self.assertTrue(handle.active)
        QTest.qWait(100)
        self.assertEqual([True], fired)
        self.assertFalse(handle.active)
        handle.cancel()

    def test_cancel_before_firing(self):
        fired = []
        handle = start_qt_timer(10, lambda: fired.append(True))
        handle.cancel()
        handle.cancel()
        QTest.qWait(100)
        self.assertEqual([], fired)

    def test_inert_after_parent_deleted(self):
        fired = []
        parent = QObject()
        handle = QtTimerHandle(10, lambda: fired.append(True), parent=parent)
        self.assertTrue(handle.active)
        del parent
        self.assertFalse(handle.active)
        handle.cancel()
        QTest.qWait(100)
        self.assertEqual([], fired)


if __name__ == '__main__':
    unittest.main()
