"""
Unit tests for core/drag.py

Tests the drag state machine: start, first-wins within a frame,
drop, release outside and cancellation.
"""

import unittest
import sys
import os

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.drag import DragAssignmentController, DragPhase
from core.models import Highlight, PaneModel, PaneReport, SignalRowReport, step, sine, linear
from core.registry import SignalRegistry, SignalNotFoundError


class TestDragAssignmentController(unittest.TestCase):
    """Test suite for DragAssignmentController."""

    def setUp(self):
        self.registry = SignalRegistry()
        self.registry.register("Step Function", "#FF0000", step())
        self.registry.register("Sine Wave", "#0000FF", sine())
        self.registry.register("Ramp", "#00FF00", linear())
        self.drag = DragAssignmentController(self.registry)
        self.pane = PaneModel(id=1, title="Plot 1")

    def test_starts_idle(self):
        self.assertIs(self.drag.phase, DragPhase.IDLE)
        self.assertIsNone(self.drag.dragged_signal)

    def test_drag_start_from_row(self):
        self.drag.begin_frame()
        self.drag.process_rows({2: SignalRowReport(drag_started=True)})
        self.assertIs(self.drag.phase, DragPhase.DRAGGING)
        self.assertEqual(self.drag.dragged_signal, 2)

    def test_rows_without_drag_start(self):
        self.drag.begin_frame()
        self.drag.process_rows({0: SignalRowReport(hovered=True)})
        self.assertIs(self.drag.phase, DragPhase.IDLE)

    def test_first_drag_start_in_frame_wins(self):
        """Test that a second drag start in the same frame is ignored."""
        self.drag.begin_frame()
        self.drag.process_rows({
            1: SignalRowReport(drag_started=True),
            0: SignalRowReport(drag_started=True),
        })
        self.assertEqual(self.drag.dragged_signal, 0)

    def test_later_frame_replaces_drag(self):
        """Test last-writer-wins across frames."""
        self.drag.begin_frame()
        self.drag.begin_drag(0)
        self.drag.begin_frame()
        self.drag.begin_drag(1)
        self.assertEqual(self.drag.dragged_signal, 1)

    def test_invalid_index_fails_fast(self):
        self.drag.begin_frame()
        with self.assertRaises(SignalNotFoundError):
            self.drag.begin_drag(7)
        self.assertIs(self.drag.phase, DragPhase.IDLE)

    def test_highlight(self):
        self.assertIs(self.drag.highlight_for(PaneReport(pointer_inside_bounds=True)), Highlight.NONE)
        self.drag.begin_frame()
        self.drag.begin_drag(1)
        self.assertIs(self.drag.highlight_for(None), Highlight.DRAG_ACTIVE)
        self.assertIs(self.drag.highlight_for(PaneReport()), Highlight.DRAG_ACTIVE)
        self.assertIs(self.drag.highlight_for(PaneReport(pointer_inside_bounds=True)), Highlight.DROP_TARGET)

    def test_drop_attaches_with_registry_color(self):
        self.drag.begin_frame()
        self.drag.begin_drag(1)
        attachment = self.drag.drop_on(self.pane)
        self.assertEqual(attachment.signal_index, 1)
        self.assertEqual(attachment.color, "#0000FF")
        self.assertEqual(self.pane.signal_indices, [1])
        self.assertIs(self.drag.phase, DragPhase.IDLE)

    def test_drop_when_idle(self):
        self.assertIsNone(self.drag.drop_on(self.pane))
        self.assertEqual(self.pane.active_signals, [])

    def test_release_outside(self):
        self.drag.begin_frame()
        self.drag.begin_drag(2)
        self.drag.release()
        self.assertIs(self.drag.phase, DragPhase.IDLE)
        self.assertEqual(self.pane.active_signals, [])

    def test_cancel(self):
        self.drag.begin_frame()
        self.drag.begin_drag(2)
        self.drag.cancel()
        self.assertIs(self.drag.phase, DragPhase.IDLE)


if __name__ == "__main__":
    unittest.main()
