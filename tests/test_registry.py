"""
Unit tests for core/registry.py

Tests registration order, lookup failures and recoloring.
"""

import unittest
import sys
import os

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.models import GeneratorKind, PaneModel, sine, step, linear
from core.registry import SignalRegistry, SignalNotFoundError, create_default_registry


class TestSignalRegistry(unittest.TestCase):
    """Test suite for SignalRegistry."""

    def setUp(self):
        self.registry = SignalRegistry()

    def test_register_returns_sequential_indices(self):
        self.assertEqual(self.registry.register("A", "#FF0000", step()), 0)
        self.assertEqual(self.registry.register("B", "#00FF00", sine()), 1)
        self.assertEqual(len(self.registry), 2)

    def test_get(self):
        index = self.registry.register("Ramp", "#123456", linear(slope=2.0))
        signal = self.registry.get(index)
        self.assertEqual(signal.name, "Ramp")
        self.assertEqual(signal.color, "#123456")
        self.assertIs(signal.generator.kind, GeneratorKind.LINEAR)

    def test_get_out_of_range(self):
        """Test that invalid indices raise SignalNotFoundError."""
        self.registry.register("A", "#FF0000", step())
        with self.assertRaises(SignalNotFoundError):
            self.registry.get(1)
        with self.assertRaises(SignalNotFoundError):
            self.registry.get(-1)

    def test_not_found_is_lookup_error(self):
        with self.assertRaises(LookupError):
            self.registry.get(0)

    def test_list_in_registration_order(self):
        self.registry.register("A", "#FF0000", step())
        self.registry.register("B", "#00FF00", sine())
        self.registry.register("C", "#0000FF", linear())
        listed = self.registry.list()
        self.assertEqual([i for i, _ in listed], [0, 1, 2])
        self.assertEqual([s.name for _, s in listed], ["A", "B", "C"])

    def test_contains(self):
        self.registry.register("A", "#FF0000", step())
        self.assertIn(0, self.registry)
        self.assertNotIn(1, self.registry)
        self.assertNotIn("0", self.registry)

    def test_recolor_keeps_index_and_attachments(self):
        """Test that recoloring replaces the entry but not attached colors."""
        index = self.registry.register("A", "#FF0000", step())
        pane = PaneModel(id=1, title="Plot 1")
        pane.attach(index, self.registry.get(index).color)

        updated = self.registry.recolor(index, "#00FFFF")

        self.assertEqual(updated.color, "#00FFFF")
        self.assertEqual(self.registry.get(index).color, "#00FFFF")
        self.assertEqual(self.registry.get(index).name, "A")
        self.assertEqual(pane.active_signals[0].color, "#FF0000")
        self.assertEqual(len(self.registry), 1)

    def test_recolor_unknown_index(self):
        with self.assertRaises(SignalNotFoundError):
            self.registry.recolor(3, "#FFFFFF")

    def test_default_registry(self):
        registry = create_default_registry()
        names = [s.name for _, s in registry.list()]
        self.assertEqual(names, ["Step Function", "Sine Wave"])
        self.assertIs(registry.get(0).generator.kind, GeneratorKind.STEP)
        self.assertIs(registry.get(1).generator.kind, GeneratorKind.SINE)


if __name__ == "__main__":
    unittest.main()
