"""
Signal Workbench - Callbacks
============================
Dash callbacks wiring the browser to the WorkbenchController.

Every server callback that changes workbench state is one "frame": it
builds a FrameEvents, calls workbench.tick() and re-renders the panes.
The server runs single-threaded, so frames never overlap.
"""

import logging
from typing import Dict, List, Optional, Tuple

import dash
from dash import Input, Output, State, callback_context, ALL, MATCH, no_update

from config import LOGGER_NAME, StoreKeys
from core.models import FrameEvents, Highlight
from core.registry import SignalRegistry
from core.workbench import WorkbenchController
from ui.events import events_from_payload, close_event
from ui.layout import render_panes, PANE_GRID_ENGINE
from viz.figure_factory import create_pane_figure, create_time_axis_figure, parse_x_range

logger = logging.getLogger(LOGGER_NAME)


# Installed once per page load; pushes payloads into the ui-event store.
DND_LISTENERS_JS = """
function(n_intervals) {
    if (window.__workbenchDnd) {
        return true;
    }
    if (!window.dash_clientside.set_props) {
        console.log('dash_clientside.set_props not available yet');
        return window.dash_clientside.no_update;
    }

    var seq = 0;
    var dropped = false;
    var hoverPane = null;
    var resizing = null;

    function send(payload) {
        seq += 1;
        payload.seq = seq;
        window.dash_clientside.set_props('%(store)s', {data: payload});
    }

    function closest(el, selector) {
        return (el && el.closest) ? el.closest(selector) : null;
    }

    document.addEventListener('dragstart', function(e) {
        var row = closest(e.target, '[data-signal-index]');
        if (!row) { return; }
        dropped = false;
        hoverPane = null;
        e.dataTransfer.setData('text/plain', row.dataset.signalIndex);
        e.dataTransfer.effectAllowed = 'copy';
        row.classList.add('signal-row-dragging');
        send({kind: 'drag_start', row: parseInt(row.dataset.signalIndex, 10)});
    });

    document.addEventListener('dragover', function(e) {
        var pane = closest(e.target, '[data-pane-id]');
        if (!pane) {
            if (hoverPane !== null) {
                hoverPane = null;
                send({kind: 'hover', pane: null});
            }
            return;
        }
        e.preventDefault();
        var id = parseInt(pane.dataset.paneId, 10);
        if (id !== hoverPane) {
            hoverPane = id;
            send({kind: 'hover', pane: id});
        }
    });

    document.addEventListener('drop', function(e) {
        var pane = closest(e.target, '[data-pane-id]');
        if (!pane) { return; }
        e.preventDefault();
        dropped = true;
        send({kind: 'drop', pane: parseInt(pane.dataset.paneId, 10)});
    });

    document.addEventListener('dragend', function(e) {
        document.querySelectorAll('.signal-row-dragging').forEach(function(el) {
            el.classList.remove('signal-row-dragging');
        });
        if (!dropped) {
            send({kind: 'release'});
        }
        hoverPane = null;
    });

    window.addEventListener('blur', function() {
        send({kind: 'cancel'});
    });

    document.addEventListener('mousedown', function(e) {
        var handle = closest(e.target, '[data-resize-pane]');
        if (!handle) { return; }
        e.preventDefault();
        resizing = {pane: parseInt(handle.dataset.resizePane, 10), y: e.clientY};
    });

    document.addEventListener('mouseup', function(e) {
        if (!resizing) { return; }
        var delta = e.clientY - resizing.y;
        if (delta !== 0) {
            send({kind: 'resize', pane: resizing.pane, delta: delta, viewport: window.innerHeight});
        }
        resizing = null;
    });

    window.__workbenchDnd = true;
    console.log('Workbench drag listeners installed');
    return true;
}
""" % {"store": StoreKeys.UI_EVENT}


def _triggered_close_id(ctx) -> Optional[int]:
    """Pane id of a clicked close button, or None for re-render triggers"""
    for trig in ctx.triggered:
        if "pane-close" not in trig["prop_id"] or not trig.get("value"):
            continue
        try:
            return ctx.triggered_id["id"]
        except (TypeError, KeyError):
            return None
    return None


def frame_summary(workbench: WorkbenchController, frame) -> Dict:
    return {
        "drag_active": frame.drag_active,
        "dragged_signal": workbench.drag.dragged_signal,
        "panes": [p.id for p in workbench.panes],
        "dropped": frame.dropped[0] if frame.dropped else None,
        "closed": frame.closed,
    }


def carried_highlight(workbench: WorkbenchController, highlights: Dict[int, Highlight],
                      pane_id: int) -> Highlight:
    """Highlight from the last frame, for re-renders between frames"""
    if not workbench.drag.is_dragging:
        return Highlight.NONE
    return highlights.get(pane_id, Highlight.DRAG_ACTIVE)


def apply_signal_colors(registry: SignalRegistry, colors: Optional[List[str]]) -> List[str]:
    """Recolor changed registry entries; returns the colors by index"""
    for index, color in enumerate(colors or []):
        if index not in registry or not color:
            continue
        if registry.get(index).color != color:
            registry.recolor(index, color)
            logger.info(f"Signal {index} recolored to {color}")
    return [signal.color for _, signal in registry.list()]


def drag_status_text(workbench: WorkbenchController) -> str:
    index = workbench.drag.dragged_signal
    if index is None:
        return ""
    return f"Dragging: {workbench.registry.get(index).name}"


def register_callbacks(app: dash.Dash, workbench: WorkbenchController):
    """Register all callbacks with the Dash app."""

    # Visible x range per pane, as last reported by its plot surface
    visible_ranges: Dict[int, Tuple[float, float]] = {}
    # Pane highlights from the last frame
    last_highlights: Dict[int, Highlight] = {}

    # =========================================================================
    # 1. FRAME: add / close panes, drag and resize events
    # =========================================================================
    @app.callback(
        [
            Output("panes-container", "children"),
            Output(StoreKeys.FRAME, "data"),
            Output("drag-status", "children"),
        ],
        [
            Input("btn-add-pane", "n_clicks"),
            Input({"type": "pane-close", "id": ALL}, "n_clicks"),
            Input(StoreKeys.UI_EVENT, "data"),
        ],
        [
            State(StoreKeys.THEME, "data"),
        ],
        prevent_initial_call=True,
    )
    def run_frame(add_clicks, close_clicks, ui_event, theme_name):
        """Apply one frame of UI events to the workbench and re-render panes."""
        ctx = callback_context
        trigger = ctx.triggered[0]["prop_id"] if ctx.triggered else ""

        try:
            if "btn-add-pane" in trigger:
                workbench.add_pane()
                events = FrameEvents()
            elif "pane-close" in trigger:
                pane_id = _triggered_close_id(ctx)
                if pane_id is None:
                    return no_update, no_update, no_update
                events = close_event(pane_id)
            elif StoreKeys.UI_EVENT in trigger:
                events = events_from_payload(ui_event)
            else:
                return no_update, no_update, no_update

            frame = workbench.tick(events)
            last_highlights.clear()
            last_highlights.update(frame.highlights)
            for pane_id in frame.closed:
                visible_ranges.pop(pane_id, None)

            panes = render_panes(workbench, frame, theme_name or "dark", visible_ranges)
            return panes, frame_summary(workbench, frame), drag_status_text(workbench)

        except Exception as e:
            logger.exception(f"Error in frame update: {e}")
            return no_update, no_update, no_update

    # =========================================================================
    # 2. SIGNAL COLORS
    # =========================================================================
    @app.callback(
        Output(StoreKeys.SIGNAL_COLORS, "data"),
        Input({"type": "signal-color", "index": ALL}, "value"),
        prevent_initial_call=True,
    )
    def recolor_signals(colors):
        """Apply color changes from the signal rows to the registry."""
        return apply_signal_colors(workbench.registry, colors)

    # =========================================================================
    # 3. PLOT SURFACE: grid ticks for the visible range
    # =========================================================================
    @app.callback(
        Output({"type": "pane-graph", "id": MATCH}, "figure"),
        Input({"type": "pane-graph", "id": MATCH}, "relayoutData"),
        [
            State(StoreKeys.THEME, "data"),
        ],
        prevent_initial_call=True,
    )
    def update_pane_ticks(relayout_data, theme_name):
        """Recompute grid marks when a pane is zoomed or panned."""
        try:
            pane_id = callback_context.triggered_id["id"]
        except (TypeError, KeyError):
            return no_update

        pane = workbench.get_pane(pane_id)
        if pane is None or not relayout_data:
            return no_update

        x_range = parse_x_range(relayout_data)
        if x_range is None and not relayout_data.get("xaxis.autorange"):
            return no_update

        if x_range is None:
            visible_ranges.pop(pane_id, None)
        else:
            visible_ranges[pane_id] = x_range

        highlight = carried_highlight(workbench, last_highlights, pane_id)
        return create_pane_figure(
            pane,
            workbench.registry,
            highlight=highlight,
            theme_name=theme_name or "dark",
            x_range=x_range,
            engine=PANE_GRID_ENGINE,
        )

    @app.callback(
        Output("time-axis-graph", "figure"),
        Input("time-axis-graph", "relayoutData"),
        [
            State(StoreKeys.THEME, "data"),
        ],
        prevent_initial_call=True,
    )
    def update_time_axis(relayout_data, theme_name):
        """Time axis view: day/hour/5-minute grid for the visible range."""
        if not relayout_data:
            return no_update
        x_range = parse_x_range(relayout_data)
        if x_range is None and not relayout_data.get("xaxis.autorange"):
            return no_update
        return create_time_axis_figure(theme_name or "dark", x_range)


def register_clientside_callbacks(app: dash.Dash):
    """Install the browser drag/resize listeners."""
    app.clientside_callback(
        DND_LISTENERS_JS,
        Output(StoreKeys.DND_INIT, "data"),
        Input("interval-dnd-init", "n_intervals"),
    )
