"""
Signal Workbench - Drag Assignment
==================================
Tracks which registry signal is being dragged and attaches it to the pane
it is released over.

States:
    IDLE                 nothing dragged
    DRAGGING(index)      a registry row reported "drag started"

Transitions:
    IDLE -> DRAGGING(i)          first drag-started row of the frame
    DRAGGING(i) -> IDLE + attach pointer released inside a pane
    DRAGGING(i) -> IDLE          released outside every pane, or cancelled
"""

import logging
from enum import Enum
from typing import Dict, Optional

from config import LOGGER_NAME
from core.models import Highlight, PaneModel, PaneReport, SignalAttachment, SignalRowReport
from core.registry import SignalRegistry

logger = logging.getLogger(LOGGER_NAME)


class DragPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragAssignmentController:
    """Single-pointer drag state machine over a signal registry"""

    def __init__(self, registry: SignalRegistry):
        self.registry = registry
        self._dragged_signal: Optional[int] = None
        self._started_this_frame = False

    @property
    def phase(self) -> DragPhase:
        return DragPhase.IDLE if self._dragged_signal is None else DragPhase.DRAGGING

    @property
    def dragged_signal(self) -> Optional[int]:
        return self._dragged_signal

    @property
    def is_dragging(self) -> bool:
        return self._dragged_signal is not None

    def begin_frame(self):
        self._started_this_frame = False

    def begin_drag(self, signal_index: int) -> bool:
        """
        Start dragging ``signal_index``.

        Only the first drag start of a frame is honored. A start in a later
        frame replaces the current drag. An invalid index is a defect in
        event generation and raises SignalNotFoundError.
        """
        if self._started_this_frame:
            logger.debug(f"Ignoring second drag start (signal {signal_index}) in one frame")
            return False

        self.registry.get(signal_index)
        self._dragged_signal = signal_index
        self._started_this_frame = True
        logger.debug(f"Drag started: signal {signal_index}")
        return True

    def process_rows(self, row_reports: Dict[int, SignalRowReport]) -> Optional[int]:
        """Feed registry row reports in row order; returns the dragged signal"""
        for index in sorted(row_reports):
            if row_reports[index].drag_started:
                self.begin_drag(index)
        return self._dragged_signal

    def highlight_for(self, report: Optional[PaneReport]) -> Highlight:
        if not self.is_dragging:
            return Highlight.NONE
        if report is not None and report.pointer_inside_bounds:
            return Highlight.DROP_TARGET
        return Highlight.DRAG_ACTIVE

    def drop_on(self, pane: PaneModel) -> Optional[SignalAttachment]:
        """Attach the dragged signal to ``pane`` and go idle"""
        if self._dragged_signal is None:
            return None

        index = self._dragged_signal
        self._dragged_signal = None
        attachment = pane.attach(index, self.registry.get(index).color)
        logger.info(f"Dropped signal {index} onto pane {pane.id} ({pane.title})")
        return attachment

    def release(self):
        """Pointer released outside every pane"""
        if self._dragged_signal is not None:
            logger.debug(f"Drag of signal {self._dragged_signal} released outside panes")
        self._dragged_signal = None

    def cancel(self):
        """External cancellation, e.g. focus loss"""
        if self._dragged_signal is not None:
            logger.debug(f"Drag of signal {self._dragged_signal} cancelled")
        self._dragged_signal = None
