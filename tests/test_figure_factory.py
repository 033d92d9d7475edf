"""
Unit tests for viz/figure_factory.py

Tests pane figures (traces, labels, highlights, dangling attachments),
grid tick application and the time-axis figure.
"""

import unittest
import sys
import os

import numpy as np

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import LOGGER_NAME, DROP_TARGET_COLOR, DRAG_ACTIVE_COLOR
from core.axis_grid import AxisGridEngine, TIME_MINUTES, UNIT_FRACTIONS
from core.models import FrameEvents, Highlight, PaneModel, PaneReport, SignalRowReport
from core.workbench import WorkbenchController
from viz.figure_factory import (
    apply_grid_ticks,
    create_pane_figure,
    create_time_axis_figure,
    parse_x_range,
    pane_traces,
    time_hover_label,
)
import plotly.graph_objects as go


class TestPaneFigure(unittest.TestCase):
    """Test suite for pane figure creation."""

    def setUp(self):
        self.workbench = WorkbenchController()
        self.pane = self.workbench.add_pane()

    def drag_onto_pane(self, row):
        self.workbench.tick(FrameEvents(row_reports={row: SignalRowReport(drag_started=True)}))
        self.workbench.tick(FrameEvents(
            pointer_released=True,
            pane_reports={self.pane.id: PaneReport(pointer_inside_bounds=True)},
        ))

    def test_empty_pane(self):
        fig = create_pane_figure(self.pane, self.workbench.registry)
        self.assertEqual(len(fig.data), 0)
        self.assertEqual(fig.layout.height, 300)

    def test_sine_wave_end_to_end(self):
        """Test dragging Sine Wave twice renders two sine lines."""
        self.drag_onto_pane(1)
        fig = create_pane_figure(self.pane, self.workbench.registry)
        self.assertEqual(len(fig.data), 1)
        trace = fig.data[0]
        self.assertEqual(trace.name, "Sine Wave")
        self.assertEqual(trace.line.color, "#0000FF")
        self.assertEqual(len(trace.x), 200)
        self.assertAlmostEqual(trace.x[0], -5.0)
        self.assertAlmostEqual(trace.x[-1], 5.0)
        np.testing.assert_allclose(trace.y, np.sin(trace.x))

        self.drag_onto_pane(1)
        fig = create_pane_figure(self.pane, self.workbench.registry)
        self.assertEqual(len(self.pane.active_signals), 2)
        self.assertEqual([t.name for t in fig.data], ["Sine Wave", "Sine Wave (2)"])

    def test_attachment_color_kept_after_recolor(self):
        self.drag_onto_pane(0)
        self.workbench.registry.recolor(0, "#123456")
        fig = create_pane_figure(self.pane, self.workbench.registry)
        self.assertEqual(fig.data[0].line.color, "#FF0000")

    def test_dangling_attachment_skipped(self):
        """Test that a bad signal index is skipped, not fatal."""
        pane = PaneModel(id=9, title="Plot 9")
        pane.attach(99, "#FFFFFF")
        pane.attach(1, "#0000FF")
        with self.assertLogs(LOGGER_NAME, level="WARNING"):
            traces = pane_traces(pane, self.workbench.registry)
        self.assertEqual(len(traces), 1)
        self.assertEqual(traces[0].name, "Sine Wave")

    def test_no_highlight(self):
        fig = create_pane_figure(self.pane, self.workbench.registry)
        self.assertEqual(len(fig.layout.shapes), 0)

    def test_drag_highlights(self):
        fig = create_pane_figure(self.pane, self.workbench.registry, highlight=Highlight.DRAG_ACTIVE)
        self.assertEqual(len(fig.layout.shapes), 1)
        self.assertEqual(fig.layout.shapes[0].line.color, DRAG_ACTIVE_COLOR)

        fig = create_pane_figure(self.pane, self.workbench.registry, highlight=Highlight.DROP_TARGET)
        self.assertEqual(fig.layout.shapes[0].line.color, DROP_TARGET_COLOR)
        self.assertEqual(fig.layout.shapes[0].line.width, 3)

    def test_height_follows_pane(self):
        self.pane.height = 450.0
        fig = create_pane_figure(self.pane, self.workbench.registry)
        self.assertEqual(fig.layout.height, 450)

    def test_grid_engine_ticks(self):
        engine = AxisGridEngine(UNIT_FRACTIONS)
        fig = create_pane_figure(self.pane, self.workbench.registry, x_range=(-1.0, 1.0), engine=engine)
        self.assertEqual(fig.layout.xaxis.tickmode, "array")
        self.assertEqual(len(fig.layout.xaxis.tickvals), 21)
        self.assertEqual(len(fig.layout.xaxis.ticktext), 21)
        self.assertEqual(list(fig.layout.xaxis.range), [-1.0, 1.0])


class TestGridTicks(unittest.TestCase):

    def test_apply_grid_ticks_keeps_unlabeled_gridlines(self):
        fig = go.Figure()
        engine = AxisGridEngine(TIME_MINUTES)
        marks = apply_grid_ticks(fig, engine, (0.0, 2880.0), max_labels=12)
        self.assertEqual(len(fig.layout.xaxis.tickvals), len(marks))
        labels = [t for t in fig.layout.xaxis.ticktext if t]
        self.assertEqual(labels, ["Day 0", "Day 1", "Day 2"])

    def test_zoomed_out_pane_is_bounded(self):
        """Test that a wide pane range does not flood the axis."""
        fig = go.Figure()
        engine = AxisGridEngine(UNIT_FRACTIONS)
        apply_grid_ticks(fig, engine, (-500.0, 500.0), max_labels=12, max_gridlines=200)
        self.assertLessEqual(len(fig.layout.xaxis.tickvals), 200)
        self.assertLessEqual(sum(1 for t in fig.layout.xaxis.ticktext if t), 12)

    def test_far_zoomed_out_pane_is_bounded(self):
        fig = go.Figure()
        engine = AxisGridEngine(UNIT_FRACTIONS)
        apply_grid_ticks(fig, engine, (-1e6, 1e6))
        self.assertLessEqual(len(fig.layout.xaxis.tickvals), 200)
        self.assertGreater(len(fig.layout.xaxis.tickvals), 0)
        self.assertLessEqual(sum(1 for t in fig.layout.xaxis.ticktext if t), 12)

    def test_time_axis_figure(self):
        fig = create_time_axis_figure()
        self.assertEqual(len(fig.data), 1)
        self.assertIn("Day 0", fig.layout.xaxis.ticktext)
        self.assertIn("50%", fig.layout.yaxis.ticktext)
        self.assertAlmostEqual(float(np.max(fig.data[0].y)), 0.99, places=1)

    def test_time_axis_figure_zoomed(self):
        fig = create_time_axis_figure(x_range=(60.0, 90.0))
        self.assertIn("1:30", fig.layout.xaxis.ticktext)

    def test_time_hover_label(self):
        self.assertEqual(time_hover_label(1440.0 + 185.0), "Day 1, 3:05")


class TestParseXRange(unittest.TestCase):

    def test_range_keys(self):
        self.assertEqual(parse_x_range({"xaxis.range[0]": 1, "xaxis.range[1]": 2.5}), (1.0, 2.5))

    def test_range_list(self):
        self.assertEqual(parse_x_range({"xaxis.range": [-3, 3]}), (-3.0, 3.0))

    def test_autorange_and_empty(self):
        self.assertIsNone(parse_x_range({"xaxis.autorange": True}))
        self.assertIsNone(parse_x_range(None))
        self.assertIsNone(parse_x_range({"yaxis.range[0]": 0, "yaxis.range[1]": 1}))

    def test_bad_values(self):
        self.assertIsNone(parse_x_range({"xaxis.range[0]": "a", "xaxis.range[1]": 2}))


if __name__ == "__main__":
    unittest.main()
