"""
Signal Workbench - Workbench Controller
========================================
Top-level owner of the signal registry and the pane collection.

Each UI frame the renderer collects interaction reports into a FrameEvents
and calls tick(). Within one frame:
    1. cancellation (focus loss) resets any drag
    2. registry rows are processed, so a drag started this frame already
       highlights the panes rendered in the same frame
    3. panes are processed in display order; the first pane containing the
       pointer on release takes the drop; resize/reposition is applied
    4. a release that no pane took ends the drag without effect
    5. requested closes are applied (stale ids are ignored)
"""

import logging
from typing import List, Optional

from config import (
    LOGGER_NAME,
    MIN_PANE_HEIGHT,
    DEFAULT_PANE_HEIGHT,
    DEFAULT_FLOATING_SIZE,
    FLOATING_ORIGIN,
    FLOATING_CASCADE_OFFSET,
)
from core.drag import DragAssignmentController
from core.models import FrameEvents, FrameResult, Highlight, PaneModel, PaneReport, SignalGenerator
from core.naming import get_pane_title
from core.registry import SignalRegistry, create_default_registry

logger = logging.getLogger(LOGGER_NAME)


def clamp_height(height: float, viewport_height: Optional[float] = None) -> float:
    """Clamp a pane height to the minimum, then to the available viewport"""
    height = max(height, MIN_PANE_HEIGHT)
    if viewport_height is not None:
        height = min(height, viewport_height)
    return height


class WorkbenchController:
    """Owns the registry, the panes and the drag state for one workbench"""

    def __init__(self, registry: Optional[SignalRegistry] = None, floating: bool = False):
        self.registry = registry if registry is not None else create_default_registry()
        self.floating = floating
        self.drag = DragAssignmentController(self.registry)
        self._panes: List[PaneModel] = []
        self._next_pane_id = 1

    # =========================================================================
    # Panes
    # =========================================================================
    @property
    def panes(self) -> List[PaneModel]:
        """Panes in display order"""
        return list(self._panes)

    def get_pane(self, pane_id: int) -> Optional[PaneModel]:
        for pane in self._panes:
            if pane.id == pane_id:
                return pane
        return None

    def add_pane(self, title: Optional[str] = None) -> PaneModel:
        """Create an empty pane with a fresh id"""
        pane_id = self._next_pane_id
        self._next_pane_id += 1

        pane = PaneModel(id=pane_id, title=title or get_pane_title(pane_id), height=DEFAULT_PANE_HEIGHT)
        if self.floating:
            cascade = FLOATING_CASCADE_OFFSET * (len(self._panes) % 10)
            pane.position = (FLOATING_ORIGIN[0] + cascade, FLOATING_ORIGIN[1] + cascade)
            pane.size = DEFAULT_FLOATING_SIZE

        self._panes.append(pane)
        logger.info(f"Added pane {pane.id} ({pane.title})")
        return pane

    def remove_pane(self, pane_id: int) -> bool:
        """Remove a pane; an unknown id is a no-op"""
        pane = self.get_pane(pane_id)
        if pane is None:
            logger.debug(f"Ignoring close of unknown pane {pane_id}")
            return False
        self._panes.remove(pane)
        logger.info(f"Removed pane {pane_id} ({pane.title})")
        return True

    def remove_attachment(self, pane_id: int, position: int) -> bool:
        pane = self.get_pane(pane_id)
        if pane is None:
            return False
        return pane.remove_attachment(position)

    # =========================================================================
    # Signals
    # =========================================================================
    def add_signal(self, name: str, color: str, generator: SignalGenerator) -> int:
        """
        Register a new signal at runtime and return its index.

        Programmatic hook only; the Dash front end shows the default registry
        built at startup.
        """
        return self.registry.register(name, color, generator)

    # =========================================================================
    # Frame processing
    # =========================================================================
    def _apply_geometry(self, pane: PaneModel, report: PaneReport, viewport_height: Optional[float]):
        if report.resize_delta is not None:
            pane.height = clamp_height(pane.height + report.resize_delta, viewport_height)

        if not pane.is_floating:
            return
        if report.new_position is not None:
            pane.position = (float(report.new_position[0]), float(report.new_position[1]))
        if report.new_size is not None:
            width, height = report.new_size
            pane.size = (float(width), clamp_height(float(height), viewport_height))

    def tick(self, events: FrameEvents) -> FrameResult:
        """Apply one frame of UI events and report what to render"""
        self.drag.begin_frame()
        result = FrameResult()

        if events.cancelled:
            self.drag.cancel()

        self.drag.process_rows(events.row_reports)
        for index in sorted(events.row_reports):
            if events.row_reports[index].hovered:
                result.hovered_row = index
                break

        to_close = []
        for pane in self._panes:
            report = events.pane_reports.get(pane.id)
            result.highlights[pane.id] = self.drag.highlight_for(report)
            if report is None:
                continue

            if (events.pointer_released and self.drag.is_dragging
                    and report.pointer_inside_bounds):
                attachment = self.drag.drop_on(pane)
                result.dropped = (pane.id, attachment)

            self._apply_geometry(pane, report, events.viewport_height)

            if report.close_requested:
                to_close.append(pane.id)

        if events.pointer_released:
            self.drag.release()

        for pane_id in to_close:
            if self.remove_pane(pane_id):
                result.closed.append(pane_id)
            result.highlights.pop(pane_id, None)

        result.drag_active = self.drag.is_dragging
        if not result.drag_active:
            result.highlights = {pid: Highlight.NONE for pid in result.highlights}
        return result
