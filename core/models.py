"""
Signal Workbench - Data Models
===============================
Core data structures for signals, panes, attachments and per-frame
interaction reports.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Tuple, Any, Union
import numpy as np
from enum import Enum

from config import DEFAULT_PANE_HEIGHT, SAMPLE_DOMAIN, SAMPLE_COUNT


class GeneratorKind(Enum):
    """Closed set of synthetic signal shapes"""
    STEP = "step"
    SINE = "sine"
    COSINE = "cosine"
    LINEAR = "linear"
    LOGISTIC = "logistic"


@dataclass(frozen=True)
class SignalGenerator:
    """
    A parameterized closed-form generator.

    Only the parameters relevant to ``kind`` are read by ``sample``; the
    others keep their defaults.
    """
    kind: GeneratorKind
    amplitude: float = 1.0
    frequency: float = 1.0
    phase: float = 0.0
    offset: float = 0.0
    slope: float = 1.0
    midpoint: float = 0.0
    steepness: float = 1.0
    threshold: float = 0.0

    def sample(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Evaluate the generator at a scalar or an array of x values"""
        x = np.asarray(x, dtype=float)

        if self.kind is GeneratorKind.STEP:
            y = np.where(x < self.threshold, -self.amplitude, self.amplitude)
        elif self.kind is GeneratorKind.SINE:
            y = self.amplitude * np.sin(self.frequency * x + self.phase)
        elif self.kind is GeneratorKind.COSINE:
            y = self.amplitude * np.cos(self.frequency * x + self.phase)
        elif self.kind is GeneratorKind.LINEAR:
            y = self.slope * x
        elif self.kind is GeneratorKind.LOGISTIC:
            y = self.amplitude / (1.0 + np.exp(-self.steepness * (x - self.midpoint)))
        else:
            raise ValueError(f"Unknown generator kind: {self.kind}")

        y = y + self.offset
        return float(y) if y.ndim == 0 else y

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SignalGenerator":
        params = dict(data)
        params["kind"] = GeneratorKind(params["kind"])
        return cls(**params)


def step(threshold: float = 0.0, amplitude: float = 1.0, offset: float = 0.0) -> SignalGenerator:
    return SignalGenerator(GeneratorKind.STEP, amplitude=amplitude, offset=offset, threshold=threshold)


def sine(amplitude: float = 1.0, frequency: float = 1.0, phase: float = 0.0,
         offset: float = 0.0) -> SignalGenerator:
    return SignalGenerator(GeneratorKind.SINE, amplitude=amplitude, frequency=frequency,
                           phase=phase, offset=offset)


def cosine(amplitude: float = 1.0, frequency: float = 1.0, phase: float = 0.0,
           offset: float = 0.0) -> SignalGenerator:
    return SignalGenerator(GeneratorKind.COSINE, amplitude=amplitude, frequency=frequency,
                           phase=phase, offset=offset)


def linear(slope: float = 1.0, offset: float = 0.0) -> SignalGenerator:
    return SignalGenerator(GeneratorKind.LINEAR, slope=slope, offset=offset)


def logistic(amplitude: float = 1.0, midpoint: float = 0.0, steepness: float = 1.0,
             offset: float = 0.0) -> SignalGenerator:
    return SignalGenerator(GeneratorKind.LOGISTIC, amplitude=amplitude, midpoint=midpoint,
                           steepness=steepness, offset=offset)


@dataclass(frozen=True)
class Signal:
    """A named, colored, sampleable signal owned by the registry"""
    name: str
    color: str
    generator: SignalGenerator

    def sample_points(
        self,
        domain: Tuple[float, float] = SAMPLE_DOMAIN,
        count: int = SAMPLE_COUNT,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Get (x, y) for ``count`` evenly spaced samples over the closed domain"""
        x = np.linspace(domain[0], domain[1], count)
        return x, self.generator.sample(x)


@dataclass
class SignalAttachment:
    """A signal reference (by registry index) bound to a pane"""
    signal_index: int
    color: str  # Captured at attach time, may diverge from the registry


@dataclass
class PaneModel:
    """
    One open plot pane.

    ``position``/``size`` are only set when panes are floating windows;
    stacked panes use ``height`` alone.
    """
    id: int
    title: str
    height: float = DEFAULT_PANE_HEIGHT
    position: Optional[Tuple[float, float]] = None
    size: Optional[Tuple[float, float]] = None
    active_signals: List[SignalAttachment] = field(default_factory=list)

    @property
    def is_floating(self) -> bool:
        return self.position is not None

    @property
    def signal_indices(self) -> List[int]:
        return [a.signal_index for a in self.active_signals]

    def attach(self, signal_index: int, color: str) -> SignalAttachment:
        """Append an attachment. Duplicates are allowed."""
        attachment = SignalAttachment(signal_index=signal_index, color=color)
        self.active_signals.append(attachment)
        return attachment

    def remove_attachment(self, position: int) -> bool:
        """Remove the attachment at ``position``; False if out of range"""
        if 0 <= position < len(self.active_signals):
            del self.active_signals[position]
            return True
        return False

    def clear(self):
        self.active_signals.clear()


# =============================================================================
# Per-frame interaction reports (produced by the UI layer)
# =============================================================================
@dataclass
class SignalRowReport:
    """Interaction report for one registry row"""
    drag_started: bool = False
    hovered: bool = False


@dataclass
class PaneReport:
    """Interaction report for one rendered pane"""
    pointer_inside_bounds: bool = False
    resize_delta: Optional[float] = None
    close_requested: bool = False
    new_position: Optional[Tuple[float, float]] = None
    new_size: Optional[Tuple[float, float]] = None


@dataclass
class FrameEvents:
    """Everything the UI reported during one frame"""
    row_reports: Dict[int, SignalRowReport] = field(default_factory=dict)
    pane_reports: Dict[int, PaneReport] = field(default_factory=dict)
    pointer_released: bool = False
    cancelled: bool = False
    viewport_height: Optional[float] = None


class Highlight(Enum):
    """Pane boundary highlight while a drag is in progress"""
    NONE = "none"
    DRAG_ACTIVE = "drag_active"
    DROP_TARGET = "drop_target"


@dataclass
class FrameResult:
    """
    Outcome of one workbench tick, consumed by the renderer.

    hovered_row is reported for renderers that outline the row under the
    pointer; the Dash front end does not re-render rows mid-drag and ignores it.
    """
    drag_active: bool = False
    highlights: Dict[int, Highlight] = field(default_factory=dict)
    dropped: Optional[Tuple[int, SignalAttachment]] = None
    closed: List[int] = field(default_factory=list)
    hovered_row: Optional[int] = None
