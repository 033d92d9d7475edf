"""
Signal Workbench - Figure Factory
==================================
Creates Plotly figures for workbench panes and the time-axis view.

INPUTS/OUTPUTS:
    create_pane_figure(pane, registry, highlight, theme_name, x_range)
        -> go.Figure with one line per attachment

    create_time_axis_figure(theme_name, x_range)
        -> go.Figure of a logistic curve over five days (x in minutes)
           with day/hour/5-minute grid and percentage y labels

    apply_grid_ticks(fig, engine, x_range)
        -> writes tickvals/ticktext for the visible range onto the x axis

Grid marks come from core.axis_grid; a mark whose label is "" still draws
its gridline.
"""

import logging
import numpy as np
from typing import Dict, List, Optional, Tuple
import plotly.graph_objects as go

from config import (
    LOGGER_NAME,
    SAMPLE_DOMAIN,
    SAMPLE_COUNT,
    DRAG_ACTIVE_COLOR,
    DRAG_ACTIVE_WIDTH,
    DROP_TARGET_COLOR,
    DROP_TARGET_WIDTH,
    MAX_AXIS_LABELS,
    MAX_AXIS_GRIDLINES,
    MINS_PER_DAY,
    MINS_PER_H,
    TIME_DEMO_DAYS,
    TIME_DEMO_SAMPLES,
    get_theme_colors,
)
from core.axis_grid import AxisGridEngine, TIME_MINUTES, format_percent
from core.models import Highlight, PaneModel, logistic
from core.naming import get_pane_labels
from core.registry import SignalRegistry, SignalNotFoundError

logger = logging.getLogger(LOGGER_NAME)

HIGHLIGHT_STROKES: Dict[Highlight, Tuple[str, int]] = {
    Highlight.DRAG_ACTIVE: (DRAG_ACTIVE_COLOR, DRAG_ACTIVE_WIDTH),
    Highlight.DROP_TARGET: (DROP_TARGET_COLOR, DROP_TARGET_WIDTH),
}


def _base_layout(fig: go.Figure, theme_name: str, height: float):
    theme = get_theme_colors(theme_name)
    fig.update_layout(
        template="plotly_dark" if theme_name == "dark" else "plotly_white",
        paper_bgcolor=theme.paper_bg,
        plot_bgcolor=theme.plot_bg,
        font=dict(color=theme.text, size=11),
        margin=dict(l=60, r=20, t=30, b=40),
        height=int(height),
        showlegend=True,
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="left",
            x=0,
            bgcolor="rgba(0,0,0,0)",
        ),
        hovermode="closest",
        uirevision="stable",
    )
    fig.update_xaxes(showgrid=True, gridcolor=theme.grid, linecolor=theme.border, mirror=True)
    fig.update_yaxes(showgrid=True, gridcolor=theme.grid, linecolor=theme.border, mirror=True)


def _add_highlight(fig: go.Figure, highlight: Highlight):
    """Draw the drag boundary around the plot area"""
    stroke = HIGHLIGHT_STROKES.get(highlight)
    if stroke is None:
        return
    color, width = stroke
    fig.add_shape(
        type="rect",
        xref="paper", yref="paper",
        x0=0, y0=0, x1=1, y1=1,
        line=dict(color=color, width=width),
        fillcolor="rgba(0,0,0,0)",
        layer="above",
    )


def pane_traces(pane: PaneModel, registry: SignalRegistry,
                domain: Tuple[float, float] = SAMPLE_DOMAIN,
                count: int = SAMPLE_COUNT) -> List[go.Scatter]:
    """
    One line trace per attachment, in attachment order.

    Attachments whose signal index is not in the registry are skipped.
    """
    resolved = []
    for attachment in pane.active_signals:
        try:
            signal = registry.get(attachment.signal_index)
        except SignalNotFoundError:
            logger.warning(
                f"Pane {pane.id}: skipping dangling attachment to signal {attachment.signal_index}"
            )
            continue
        resolved.append((attachment, signal))

    labels = get_pane_labels([signal.name for _, signal in resolved])

    traces = []
    for (attachment, signal), label in zip(resolved, labels):
        x, y = signal.sample_points(domain, count)
        traces.append(
            go.Scatter(
                x=x,
                y=y,
                name=label,
                mode="lines",
                line=dict(color=attachment.color, width=1.5),
                hovertemplate=f"<b>{label}</b><br>x: %{{x:.3f}}<br>y: %{{y:.4g}}<extra></extra>",
            )
        )
    return traces


def apply_grid_ticks(fig: go.Figure, engine: AxisGridEngine, x_range: Tuple[float, float],
                     max_labels: Optional[int] = MAX_AXIS_LABELS,
                     max_gridlines: Optional[int] = MAX_AXIS_GRIDLINES):
    """Replace the x-axis ticks with grid marks for the visible range"""
    # Every tickval is drawn as a gridline
    marks = engine.thin_marks(engine.compute_ticks(x_range), max_gridlines)
    labels = engine.label_marks(marks, max_labels)
    fig.update_xaxes(
        tickmode="array",
        tickvals=[m.value for m in marks],
        ticktext=labels,
        range=[min(x_range), max(x_range)],
    )
    return marks


def create_pane_figure(
    pane: PaneModel,
    registry: SignalRegistry,
    highlight: Highlight = Highlight.NONE,
    theme_name: str = "dark",
    x_range: Optional[Tuple[float, float]] = None,
    engine: Optional[AxisGridEngine] = None,
) -> go.Figure:
    """
    Create the figure for one pane.

    Args:
        pane: Pane to render
        registry: Signal registry the attachments point into
        highlight: Drag boundary highlight for this frame
        theme_name: "dark" or "light"
        x_range: Visible x range reported by the plot surface, if zoomed
        engine: Optional grid engine for custom x ticks

    Returns:
        Plotly figure
    """
    fig = go.Figure()
    for trace in pane_traces(pane, registry):
        fig.add_trace(trace)

    _base_layout(fig, theme_name, pane.height)
    fig.update_xaxes(range=list(x_range or SAMPLE_DOMAIN))
    if engine is not None:
        apply_grid_ticks(fig, engine, x_range or SAMPLE_DOMAIN)
    _add_highlight(fig, highlight)
    return fig


def time_hover_label(minutes: float) -> str:
    """Hover text like "Day 1, 3:05" for a position on the minutes axis"""
    day = int(minutes // MINS_PER_DAY)
    hour = int((minutes % MINS_PER_DAY) // MINS_PER_H)
    minute = int(minutes % MINS_PER_H)
    return f"Day {day}, {hour}:{minute:02d}"


def create_time_axis_figure(
    theme_name: str = "dark",
    x_range: Optional[Tuple[float, float]] = None,
    height: float = 400,
) -> go.Figure:
    """
    Logistic growth over five days on a minutes axis.

    Zoom in on the x axis to see hours, then 5-minute marks.
    """
    engine = AxisGridEngine(TIME_MINUTES)
    curve = logistic(steepness=2.5 / MINS_PER_DAY, midpoint=2.0 * MINS_PER_DAY)
    x = np.linspace(0.0, TIME_DEMO_DAYS * MINS_PER_DAY, TIME_DEMO_SAMPLES)
    y = curve.sample(x)

    fig = go.Figure(
        go.Scatter(
            x=x, y=y,
            name="Logistic",
            mode="lines",
            customdata=[time_hover_label(v) for v in x],
            hovertemplate="%{customdata}<br>%{y:.2%}<extra></extra>",
        )
    )
    _base_layout(fig, theme_name, height)
    fig.update_layout(xaxis_title="Time", yaxis_title="Percent")

    apply_grid_ticks(fig, engine, x_range or (0.0, TIME_DEMO_DAYS * MINS_PER_DAY))

    y_ticks = [round(v, 2) for v in np.arange(0.0, 1.0001, 0.1)]
    fig.update_yaxes(
        tickmode="array",
        tickvals=y_ticks,
        ticktext=[format_percent(v) for v in y_ticks],
    )
    return fig


def parse_x_range(relayout_data: Optional[Dict]) -> Optional[Tuple[float, float]]:
    """
    Extract the visible x range from Plotly relayoutData.

    Returns None for autorange/reset or when the x axis did not change.
    """
    if not relayout_data:
        return None
    if relayout_data.get("xaxis.autorange"):
        return None
    if "xaxis.range[0]" in relayout_data and "xaxis.range[1]" in relayout_data:
        try:
            return float(relayout_data["xaxis.range[0]"]), float(relayout_data["xaxis.range[1]"])
        except (TypeError, ValueError):
            return None
    rng = relayout_data.get("xaxis.range")
    if isinstance(rng, (list, tuple)) and len(rng) == 2:
        try:
            return float(rng[0]), float(rng[1])
        except (TypeError, ValueError):
            return None
    return None
