# stackbar/__init__.py
"""
Stacked bar charts with a linked, hover-synchronized legend.

Structure:
- _preprocessing.py: Record normalization and category index
- stack.py: Stacked layout (cumulative bounds per segment)
- scales.py: Band, linear and color scales
- render.py: Geometry, legend entries and handler binding
- highlight.py: Highlight coordinator and the views it drives
- mount.py: In-memory and plotly mount targets
- chart.py: StackedBarChart orchestrating all of the above
"""
from __future__ import annotations

# ============================================================================
# Styling & configuration
# ============================================================================
from ._styling import (
    PALETTE,
    THEMES,
    apply_theme,
    apply_legend,
    hex_to_rgba,
)
from .config import ChartConfig, Margin

# ============================================================================
# Pipeline
# ============================================================================
from ._preprocessing import (
    Record,
    CategoryIndex,
    normalize_records,
    build_category_index,
    group_records,
)
from .keys import KeyCollisionError, normalize_key, build_key_map
from .stack import StackSegment, StackLayout, build_stack
from .scales import BandScale, LinearScale, ColorScale, Scales, build_scales
from .render import SegmentGeometry, LegendEntry, Handlers, bind_segments, bind_legend, bind_handlers

# ============================================================================
# Interaction & mounting
# ============================================================================
from .highlight import HighlightState, HighlightCoordinator, UNFOCUSED
from .mount import MountTarget, RecordingMount, PlotlyMount
from .chart import StackedBarChart
from .logger import ChartLogger, get_chart_callbacks

# ============================================================================
# Public API
# ============================================================================
__all__ = [
    # Styling
    "PALETTE",
    "THEMES",
    "apply_theme",
    "apply_legend",
    "hex_to_rgba",
    "ChartConfig",
    "Margin",
    # Pipeline
    "Record",
    "CategoryIndex",
    "normalize_records",
    "build_category_index",
    "group_records",
    "KeyCollisionError",
    "normalize_key",
    "build_key_map",
    "StackSegment",
    "StackLayout",
    "build_stack",
    "BandScale",
    "LinearScale",
    "ColorScale",
    "Scales",
    "build_scales",
    "SegmentGeometry",
    "LegendEntry",
    "Handlers",
    "bind_segments",
    "bind_legend",
    "bind_handlers",
    # Interaction
    "HighlightState",
    "HighlightCoordinator",
    "UNFOCUSED",
    "MountTarget",
    "RecordingMount",
    "PlotlyMount",
    "StackedBarChart",
    "ChartLogger",
    "get_chart_callbacks",
]
