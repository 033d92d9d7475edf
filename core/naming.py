"""
Signal Workbench - Canonical Naming
====================================
Single source of truth for pane titles and legend labels.

Format rules:
- Pane title: "Plot N" where N is the pane id (never reused)
- Legend label: "signal_name", or "signal_name (k)" for the k-th repeat
  of the same signal within one pane
"""

from typing import List, Optional


def get_pane_title(pane_id: int) -> str:
    """Get the default title for a pane"""
    return f"Plot {pane_id}"


def get_signal_label(signal_name: str, occurrence: int = 1, display_name: Optional[str] = None) -> str:
    """
    Get the legend label for an attached signal.

    Args:
        signal_name: Registry name of the signal
        occurrence: 1-based count of this signal so far within the pane
        display_name: Optional custom display name

    Returns:
        Label string
    """
    name = display_name or signal_name
    if occurrence > 1:
        return f"{name} ({occurrence})"
    return name


def get_pane_labels(signal_names: List[str]) -> List[str]:
    """Legend labels for a pane's attachments, numbering repeats"""
    seen = {}
    labels = []
    for name in signal_names:
        seen[name] = seen.get(name, 0) + 1
        labels.append(get_signal_label(name, seen[name]))
    return labels
