"""
Signal Workbench - UI Layout
=============================
Main layout and panel definitions for the Dash app, plus the renderers
that turn workbench state into components each frame.

Drag-and-drop hooks are plain data attributes read by the clientside
listeners in ui/callbacks.py:
    data-signal-index   draggable registry row
    data-pane-id        drop target (whole pane card)
    data-resize-pane    resize handle under a pane
"""

from typing import Dict, List, Optional

from dash import dcc, html
import dash_bootstrap_components as dbc

from config import (
    APP_TITLE,
    SIGNAL_COLORS,
    StoreKeys,
    DRAG_ACTIVE_COLOR,
    DRAG_ACTIVE_WIDTH,
    DROP_TARGET_COLOR,
    DROP_TARGET_WIDTH,
    TITLE_BAR_HEIGHT,
    get_theme_colors,
)
from core.axis_grid import AxisGridEngine, UNIT_FRACTIONS
from core.models import FrameResult, Highlight, PaneModel
from core.registry import SignalRegistry
from core.workbench import WorkbenchController
from viz.figure_factory import create_pane_figure, create_time_axis_figure

PANE_GRID_ENGINE = AxisGridEngine(UNIT_FRACTIONS)


def _pane_border(highlight: Highlight, theme_name: str) -> str:
    if highlight is Highlight.DROP_TARGET:
        return f"{DROP_TARGET_WIDTH}px solid {DROP_TARGET_COLOR}"
    if highlight is Highlight.DRAG_ACTIVE:
        return f"{DRAG_ACTIVE_WIDTH}px solid {DRAG_ACTIVE_COLOR}"
    return f"1px solid {get_theme_colors(theme_name).border}"


def _palette_with(color: str) -> List[str]:
    return SIGNAL_COLORS if color in SIGNAL_COLORS else [color] + SIGNAL_COLORS


def render_signal_rows(registry: SignalRegistry) -> List:
    """One draggable row per registered signal"""
    rows = []
    for index, signal in registry.list():
        rows.append(
            html.Div(
                [
                    html.Span("⣿", className="me-2 text-muted"),  # Drag handle icon
                    html.Span(signal.name, className="flex-grow-1"),
                    dbc.Select(
                        id={"type": "signal-color", "index": index},
                        options=[{"label": c, "value": c} for c in _palette_with(signal.color)],
                        value=signal.color,
                        size="sm",
                        className="signal-color-select",
                        style={"width": "96px", "color": signal.color},
                        title="Display color for new attachments",
                    ),
                ],
                className="signal-row d-flex align-items-center px-2 py-1 mb-1",
                draggable="true",
                style={"borderColor": signal.color},
                **{"data-signal-index": str(index)},
            )
        )
    return rows


def render_pane(
    pane: PaneModel,
    registry: SignalRegistry,
    highlight: Highlight = Highlight.NONE,
    theme_name: str = "dark",
    x_range=None,
):
    """Card with title bar, plot surface and resize handle for one pane"""
    theme = get_theme_colors(theme_name)
    figure = create_pane_figure(
        pane,
        registry,
        highlight=highlight,
        theme_name=theme_name,
        x_range=x_range,
        engine=PANE_GRID_ENGINE,
    )

    return html.Div(
        [
            dbc.Card([
                dbc.CardHeader([
                    html.Span(pane.title),
                    dbc.Badge(str(len(pane.active_signals)), color="secondary", className="ms-2"),
                    dbc.Button(
                        "✕",
                        id={"type": "pane-close", "id": pane.id},
                        color="link",
                        size="sm",
                        className="ms-auto p-0",
                        title="Close pane",
                    ),
                ], className="d-flex align-items-center py-1",
                   style={"minHeight": f"{TITLE_BAR_HEIGHT}px", "backgroundColor": theme.card_header}),
                dbc.CardBody([
                    dcc.Graph(
                        id={"type": "pane-graph", "id": pane.id},
                        figure=figure,
                        config={"displaylogo": False, "scrollZoom": True},
                        style={"height": f"{int(pane.height)}px"},
                    ),
                ], className="p-1"),
            ], style={"border": _pane_border(highlight, theme_name), "backgroundColor": theme.card}),
            html.Div(
                className="pane-resize-handle",
                title="Drag to resize",
                **{"data-resize-pane": str(pane.id)},
            ),
        ],
        className="pane mb-2",
        **{"data-pane-id": str(pane.id)},
    )


def render_panes(
    workbench: WorkbenchController,
    frame: Optional[FrameResult] = None,
    theme_name: str = "dark",
    visible_ranges: Optional[Dict[int, tuple]] = None,
) -> List:
    """All panes in display order, highlighted for the current frame"""
    highlights = frame.highlights if frame is not None else {}
    visible_ranges = visible_ranges or {}
    panes = [
        render_pane(
            pane,
            workbench.registry,
            highlight=highlights.get(pane.id, Highlight.NONE),
            theme_name=theme_name,
            x_range=visible_ranges.get(pane.id),
        )
        for pane in workbench.panes
    ]
    if not panes:
        panes = [html.Div("No plots. Use \"Add Plot\" to create one.", className="text-muted p-3")]
    return panes


def create_layout(workbench: WorkbenchController, theme_name: str = "dark"):
    """Create the main application layout"""
    return dbc.Container([
        # =====================================================================
        # STORES (State management)
        # =====================================================================
        dcc.Store(id=StoreKeys.UI_EVENT, data=None),       # Latest browser drag/resize event
        dcc.Store(id=StoreKeys.FRAME, data={}),            # Last frame summary
        dcc.Store(id=StoreKeys.THEME, data=theme_name),
        dcc.Store(id=StoreKeys.SIGNAL_COLORS,             # Registry colors by index
                  data=[s.color for _, s in workbench.registry.list()]),
        dcc.Store(id=StoreKeys.DND_INIT, data=False),      # Listener install flag
        dcc.Interval(id="interval-dnd-init", interval=500, max_intervals=20),

        # =====================================================================
        # HEADER
        # =====================================================================
        dbc.Row([
            dbc.Col([
                html.H4(APP_TITLE, className="mb-0 text-light"),
            ], width="auto"),
            dbc.Col([
                html.Span(id="drag-status", className="text-muted small"),
            ], className="d-flex align-items-center"),
        ], className="py-2 px-3 bg-dark border-bottom border-secondary align-items-center"),

        dbc.Tabs([
            # -----------------------------------------------------------------
            # WORKBENCH: signals sidebar + panes
            # -----------------------------------------------------------------
            dbc.Tab(label="Workbench", tab_id="tab-workbench", children=[
                dbc.Row([
                    dbc.Col([
                        dbc.Card([
                            dbc.CardHeader([
                                html.Span("📈 Signals"),
                                dbc.Badge(str(len(workbench.registry)), color="secondary", className="ms-2"),
                            ], className="py-2"),
                            dbc.CardBody([
                                html.Div(render_signal_rows(workbench.registry), id="signal-list"),
                            ], className="p-2"),
                        ], className="mb-2"),
                        dbc.Button("➕ Add Plot", id="btn-add-pane", color="primary", size="sm",
                                   className="w-100 mb-2"),
                        html.Details([
                            html.Summary("Instructions"),
                            html.P("Drag a signal onto a plot to add it.", className="small mb-1"),
                            html.P("Drag the bar under a plot to resize it.", className="small mb-1"),
                            html.P("Pan by dragging, zoom with the scroll wheel, reset with a double-click.",
                                   className="small mb-1"),
                        ], className="text-muted"),
                    ], width=3, style={"minWidth": "150px"}),
                    dbc.Col([
                        html.Div(render_panes(workbench, theme_name=theme_name), id="panes-container"),
                    ], width=9),
                ], className="pt-2"),
            ]),

            # -----------------------------------------------------------------
            # CUSTOM AXES: time grid demo
            # -----------------------------------------------------------------
            dbc.Tab(label="Custom Axes", tab_id="tab-custom-axes", children=[
                html.P("Zoom in on the X-axis to see hours and minutes", className="text-muted small pt-2"),
                dcc.Graph(
                    id="time-axis-graph",
                    figure=create_time_axis_figure(theme_name),
                    config={"displaylogo": False, "scrollZoom": True},
                ),
            ]),
        ], active_tab="tab-workbench", className="mt-2"),
    ], fluid=True)
