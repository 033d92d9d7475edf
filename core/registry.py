"""
Signal Workbench - Signal Registry
===================================
Ordered, append-only collection of signal definitions.

A signal's index is its identity for the whole session; panes refer to
signals by index only.
"""

import logging
from dataclasses import replace
from typing import Iterator, List, Tuple

from config import LOGGER_NAME, SIGNAL_COLORS
from core.models import Signal, SignalGenerator, step, sine

logger = logging.getLogger(LOGGER_NAME)


class SignalNotFoundError(LookupError):
    """Raised when a signal index does not refer to a registered signal"""

    def __init__(self, index: int, count: int):
        super().__init__(f"Signal index {index} out of range (registry holds {count})")
        self.index = index


class SignalRegistry:
    """Append-only list of signals, addressed by index"""

    def __init__(self):
        self._signals: List[Signal] = []

    def register(self, name: str, color: str, generator: SignalGenerator) -> int:
        """Add a signal and return its index"""
        self._signals.append(Signal(name=name, color=color, generator=generator))
        index = len(self._signals) - 1
        logger.info(f"Registered signal {index}: {name}")
        return index

    def get(self, index: int) -> Signal:
        if not 0 <= index < len(self._signals):
            raise SignalNotFoundError(index, len(self._signals))
        return self._signals[index]

    def list(self) -> List[Tuple[int, Signal]]:
        """Get (index, signal) pairs in registration order"""
        return list(enumerate(self._signals))

    def recolor(self, index: int, color: str) -> Signal:
        """
        Change a signal's display color.

        The entry is replaced by a new immutable Signal at the same index.
        Attachments made earlier keep the color they captured.
        """
        updated = replace(self.get(index), color=color)
        self._signals[index] = updated
        return updated

    def __len__(self) -> int:
        return len(self._signals)

    def __iter__(self) -> Iterator[Signal]:
        return iter(self._signals)

    def __contains__(self, index) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._signals)


def create_default_registry() -> SignalRegistry:
    """Registry with the two built-in demo signals"""
    registry = SignalRegistry()
    registry.register("Step Function", SIGNAL_COLORS[0], step())
    registry.register("Sine Wave", SIGNAL_COLORS[1], sine())
    return registry
