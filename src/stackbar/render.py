# stackbar/render.py
"""
Projection of the stack layout onto drawable primitives.

Nothing here keeps state: geometry and legend entries are recomputed from
the layout and scales whenever either changes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ._preprocessing import CategoryIndex
from .keys import normalize_key
from .scales import Scales
from .stack import StackLayout


@dataclass(frozen=True)
class SegmentGeometry:
    key: str
    subcategory: str
    category: Any
    x: float
    y: float
    width: float
    height: float
    fill: str
    lower: float
    upper: float


@dataclass(frozen=True)
class LegendEntry:
    key: str
    label: str
    fill: str
    swatch_size: float = 12
    corner_radius: float = 2


@dataclass(frozen=True)
class Handlers:
    """Pointer callbacks attached to a mounted primitive.

    ``on_enter`` and ``on_click`` receive the primitive's raw subcategory.
    """

    on_enter: Callable[[str], None]
    on_leave: Callable[[], None]
    on_click: Optional[Callable[[str], None]] = None


def bind_segments(
    layout: StackLayout,
    scales: Scales,
    key_map: Optional[Dict[str, str]] = None,
) -> List[SegmentGeometry]:
    """Geometry, fill and join key for every stack segment, in paint order."""
    key_map = key_map or {}
    bandwidth = scales.x.bandwidth
    out = []
    for seg in layout.segments:
        x = scales.x(seg.category)
        if x is None:
            continue
        top = scales.y(seg.upper)
        bottom = scales.y(seg.lower)
        out.append(SegmentGeometry(
            key=key_map.get(seg.subcategory) or normalize_key(seg.subcategory),
            subcategory=seg.subcategory,
            category=seg.category,
            x=x,
            y=top,
            width=bandwidth,
            height=max(bottom - top, 0.0),
            fill=scales.color(seg.subcategory),
            lower=seg.lower,
            upper=seg.upper,
        ))
    return out


def bind_legend(
    index: CategoryIndex,
    scales: Scales,
    swatch_size: float = 12,
    key_map: Optional[Dict[str, str]] = None,
) -> List[LegendEntry]:
    """One swatch + label per subcategory, in canonical order."""
    key_map = key_map or {}
    return [
        LegendEntry(
            key=key_map.get(sub) or normalize_key(sub),
            label=sub,
            fill=scales.color(sub),
            swatch_size=swatch_size,
        )
        for sub in index.subcategories
    ]


def bind_handlers(coordinator) -> Tuple[Handlers, Handlers]:
    """
    Handlers for chart segments and legend entries.

    Both routes go through the same coordinator. Legend entries only
    react to hover; clicks are reported from chart segments.
    """
    segment_handlers = Handlers(
        on_enter=coordinator.enter,
        on_leave=coordinator.leave,
        on_click=coordinator.click,
    )
    legend_handlers = Handlers(
        on_enter=coordinator.enter,
        on_leave=coordinator.leave,
    )
    return segment_handlers, legend_handlers
