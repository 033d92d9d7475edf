"""
Signal Workbench - Axis Grid Engine
====================================
Multi-resolution grid marks and labels for a numeric axis.

Two pure stages, both parameterized by a UnitHierarchy:

    compute_ticks((min, max)) -> [GridMark(value, step_size), ...]
        Every quantized position in [floor(min), ceil(max)] is classified
        into the coarsest unit it is a multiple of. Positions that are not a
        multiple of any unit (e.g. minutes between 5-minute marks) are
        dropped, so zooming out never floods the axis.

    format_label(mark) -> str
        "" outside the valid domain (gridline kept, label suppressed),
        coarse label on exact multiples of the coarsest unit ("Day 2"),
        fine composite label otherwise ("1:30").

All "is a multiple of" checks use a tolerance; float equality is never used.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from config import APPROX_TOLERANCE, MAX_GRID_POSITIONS, MINS_PER_DAY, MINS_PER_H, TIME_DEMO_DAYS


def is_approx_zero(val: float, tol: float = APPROX_TOLERANCE) -> bool:
    return abs(val) < tol


def is_approx_integer(val: float, tol: float = APPROX_TOLERANCE) -> bool:
    return abs(val - round(val)) < tol


def nice_multiple(n: float) -> int:
    """Smallest of 1, 2, 5, 10, 20, 50, ... that is >= n"""
    magnitude = 1
    while True:
        for factor in (1, 2, 5):
            if factor * magnitude >= n:
                return factor * magnitude
        magnitude *= 10


@dataclass(frozen=True)
class GridMark:
    """One gridline position and the granularity it represents"""
    value: float
    step_size: float


@dataclass(frozen=True)
class UnitHierarchy:
    """
    Fixed hierarchy of unit sizes for one kind of axis.

    tick_units:  grid granularities, coarse to fine, e.g. (1440, 60, 5)
    label_units: components of the fine label below the coarsest unit,
                 e.g. (60, 1) -> "hours:minutes"
    valid_domain: half-open [lo, hi) where labels are shown, None = unbounded
    """
    name: str
    tick_units: Tuple[float, ...]
    label_units: Tuple[float, ...] = ()
    coarse_template: str = "{n}"
    separator: str = ":"
    pad_width: int = 2
    valid_domain: Optional[Tuple[float, float]] = None
    quantum: float = 1.0

    def __post_init__(self):
        if not self.tick_units:
            raise ValueError(f"Hierarchy '{self.name}' needs at least one tick unit")
        if any(u <= 0 for u in self.tick_units) or self.quantum <= 0:
            raise ValueError(f"Hierarchy '{self.name}' units must be positive")
        if list(self.tick_units) != sorted(self.tick_units, reverse=True):
            raise ValueError(f"Hierarchy '{self.name}' tick units must be ordered coarse to fine")

    @property
    def coarsest(self) -> float:
        return self.tick_units[0]

    @property
    def finest(self) -> float:
        return self.tick_units[-1]

    def in_domain(self, value: float) -> bool:
        if self.valid_domain is None:
            return True
        lo, hi = self.valid_domain
        return lo <= value < hi


# Minutes on the axis; days > hours > 5-minute marks
TIME_MINUTES = UnitHierarchy(
    name="time_minutes",
    tick_units=(MINS_PER_DAY, MINS_PER_H, 5.0),
    label_units=(MINS_PER_H, 1.0),
    coarse_template="Day {n}",
    valid_domain=(0.0, TIME_DEMO_DAYS * MINS_PER_DAY),
)

# Orders of magnitude on a plain numeric axis
DECADES = UnitHierarchy(
    name="decades",
    tick_units=(1000.0, 100.0, 10.0),
    coarse_template="{n}k",
)

# Pane sample axis: whole units > halves > tenths
UNIT_FRACTIONS = UnitHierarchy(
    name="unit_fractions",
    tick_units=(1.0, 0.5, 0.1),
    quantum=0.1,
)


class AxisGridEngine:
    """Tick classifier plus label formatter for one unit hierarchy"""

    def __init__(self, hierarchy: UnitHierarchy, max_positions: int = MAX_GRID_POSITIONS):
        self.hierarchy = hierarchy
        self.max_positions = max_positions

    def classify(self, value: float) -> Optional[float]:
        """Coarsest unit that ``value`` is a multiple of, or None"""
        for unit in self.hierarchy.tick_units:
            if is_approx_integer(value / unit):
                return unit
        return None

    def _iteration_step(self, lo: float, hi: float) -> float:
        # Walk quantized positions unless that would exceed the cap; then walk
        # multiples of the finest unit that fits (coarser marks are unchanged).
        # Past the coarsest unit, walk a 1-2-5 multiple of it.
        span = hi - lo
        intervals = max(self.max_positions - 1, 1)
        step = self.hierarchy.quantum
        if span / step <= intervals:
            return step
        for unit in reversed(self.hierarchy.tick_units):
            if unit >= step and span / unit <= intervals:
                return unit
        coarsest = self.hierarchy.coarsest
        return coarsest * nice_multiple(math.ceil(span / (coarsest * intervals)))

    def compute_ticks(self, bounds: Tuple[float, float]) -> List[GridMark]:
        lo, hi = sorted((float(bounds[0]), float(bounds[1])))
        if not (math.isfinite(lo) and math.isfinite(hi)):
            return []

        lo = math.floor(lo)
        hi = math.ceil(hi)
        step = self._iteration_step(lo, hi)

        first = math.ceil(lo / step - APPROX_TOLERANCE)
        last = math.floor(hi / step + APPROX_TOLERANCE)

        marks = []
        for k in range(first, last + 1):
            value = k * step
            if value < lo or value > hi:
                continue
            step_size = self.classify(value)
            if step_size is None:
                continue
            marks.append(GridMark(value=float(value), step_size=step_size))
        return marks

    def format_label(self, mark: Union[GridMark, float]) -> str:
        value = mark.value if isinstance(mark, GridMark) else float(mark)
        h = self.hierarchy

        if not h.in_domain(value):
            return ""

        coarse = value / h.coarsest
        if is_approx_integer(coarse):
            return h.coarse_template.format(n=int(round(coarse)))

        if not h.label_units:
            return f"{value:g}"

        remainder = value % h.coarsest
        finest = h.label_units[-1]
        if is_approx_integer(remainder / finest):
            remainder = round(remainder / finest) * finest

        parts = []
        for i, unit in enumerate(h.label_units):
            count, remainder = divmod(remainder, unit)
            count = int(count)
            parts.append(str(count) if i == 0 else f"{count:0{h.pad_width}d}")
        return h.separator.join(parts)

    def thin_marks(self, marks: Sequence[GridMark], max_marks: Optional[int]) -> List[GridMark]:
        """
        At most ``max_marks`` of ``marks``, dropping fine granularities first.

        Keeps every mark at or above the finest unit that fits. When even the
        coarsest marks overflow, keeps those whose index on the coarse lattice
        is a multiple of a 1-2-5 stride, so the kept set is stable under panning.
        """
        if max_marks is None or len(marks) <= max_marks:
            return list(marks)
        if max_marks <= 0:
            return []

        kept: List[GridMark] = []
        for unit in reversed(self.hierarchy.tick_units):
            kept = [m for m in marks if m.step_size >= unit]
            if len(kept) <= max_marks:
                return kept

        coarsest = self.hierarchy.coarsest
        lattice = coarsest
        if len(kept) >= 2:
            lattice = coarsest * max(1, round((kept[1].value - kept[0].value) / coarsest))
        stride = nice_multiple(math.ceil(len(kept) / max_marks))
        return [m for m in kept if round(m.value / lattice) % stride == 0]

    def label_marks(self, marks: Sequence[GridMark], max_labels: Optional[int] = None) -> List[str]:
        """
        Labels for ``marks``, thinned by zoom level.

        At most ``max_labels`` marks get text (see thin_marks); the rest get ""
        but keep their gridline.
        """
        if max_labels is None:
            return [self.format_label(m) for m in marks]

        labeled = {m.value for m in self.thin_marks(marks, max_labels)}
        return [self.format_label(m) if m.value in labeled else "" for m in marks]


def format_percent(value: float) -> str:
    """Percentage label for a fraction: integer percents only, zero skipped"""
    percent = 100.0 * value
    if is_approx_zero(percent):
        return ""
    if is_approx_integer(percent):
        return f"{percent:.0f}%"
    return ""
