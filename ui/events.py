"""
Signal Workbench - UI Event Translation
========================================
Turns browser event payloads (pushed into the ui-event store by the
clientside drag listeners) into FrameEvents for WorkbenchController.tick().

Payload shapes (all carry a monotonically increasing "seq"):
    {"kind": "drag_start", "row": 1}
    {"kind": "hover", "pane": 3}          (pane null: pointer left all panes)
    {"kind": "drop", "pane": 3}
    {"kind": "release"}
    {"kind": "cancel"}
    {"kind": "resize", "pane": 3, "delta": -42.0, "viewport": 900}
"""

import logging
from typing import Any, Dict, Optional

from config import LOGGER_NAME
from core.models import FrameEvents, PaneReport, SignalRowReport

logger = logging.getLogger(LOGGER_NAME)

EVENT_KINDS = ("drag_start", "hover", "drop", "release", "cancel", "resize")


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def events_from_payload(payload: Optional[Dict]) -> FrameEvents:
    """
    Build the FrameEvents for one browser event.

    Malformed payloads yield an empty FrameEvents (a frame where nothing
    happened) and a warning.
    """
    events = FrameEvents()
    if not payload:
        return events

    kind = payload.get("kind")
    if kind not in EVENT_KINDS:
        logger.warning(f"Ignoring UI event with unknown kind: {payload!r}")
        return events

    if kind == "cancel":
        events.cancelled = True
        return events

    if kind == "release":
        events.pointer_released = True
        return events

    if kind == "drag_start":
        row = _as_int(payload.get("row"))
        if row is None:
            logger.warning(f"Ignoring drag_start without row: {payload!r}")
            return events
        events.row_reports[row] = SignalRowReport(drag_started=True, hovered=True)
        return events

    # Pointer left every pane: a frame with no pane reports clears the drop target
    if kind == "hover" and payload.get("pane") is None:
        return events

    pane_id = _as_int(payload.get("pane"))
    if pane_id is None:
        logger.warning(f"Ignoring {kind} without pane: {payload!r}")
        return events

    if kind == "hover":
        events.pane_reports[pane_id] = PaneReport(pointer_inside_bounds=True)
    elif kind == "drop":
        events.pointer_released = True
        events.pane_reports[pane_id] = PaneReport(pointer_inside_bounds=True)
    elif kind == "resize":
        delta = _as_float(payload.get("delta"))
        if delta is None:
            logger.warning(f"Ignoring resize without delta: {payload!r}")
            return events
        events.pane_reports[pane_id] = PaneReport(resize_delta=delta)
        events.viewport_height = _as_float(payload.get("viewport"))

    return events


def close_event(pane_id: int) -> FrameEvents:
    """FrameEvents for a click on a pane's close button"""
    return FrameEvents(pane_reports={pane_id: PaneReport(close_requested=True)})
