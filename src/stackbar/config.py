# stackbar/config.py
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

from ._styling import PALETTE, DIM_OPACITY, LEGEND_HIGHLIGHT, LEGEND_BACKGROUND, THEMES


@dataclass(frozen=True)
class Margin:
    top: float = 20
    right: float = 30
    bottom: float = 30
    left: float = 40


@dataclass(frozen=True)
class ChartConfig:
    """
    Drawing surface and styling options for a stacked bar chart.

    Parameters
    ----------
    width, height : float
        Outer size of the drawing surface, margins included.
    margin : Margin
        Space reserved around the plot area.
    padding : float
        Fraction of a band reserved for the gap between bars, in [0, 1].
    palette : list of str
        Colors assigned to subcategories in canonical order.
    dim_opacity : float
        Opacity of segments that are not focused while a key is hovered.
    legend_highlight, legend_background : str
        Background of the focused legend entry and of all other entries.
    swatch_size : float
        Side length of the legend color square.
    x_axis_offset : float
        Gap between the plot area and the category axis.
    theme : str
        Plotly theme name (see ``THEMES``).
    """

    width: float = 500
    height: float = 280
    margin: Margin = field(default_factory=Margin)
    padding: float = 0.2
    palette: List[str] = field(default_factory=lambda: list(PALETTE))
    dim_opacity: float = DIM_OPACITY
    legend_highlight: str = LEGEND_HIGHLIGHT
    legend_background: str = LEGEND_BACKGROUND
    swatch_size: float = 12
    x_axis_offset: float = 4
    theme: str = "fa"

    @property
    def drawing_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def drawing_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom

    def validate(self) -> "ChartConfig":
        """Raise ValueError for settings that cannot produce a chart."""
        if self.drawing_width <= 0 or self.drawing_height <= 0:
            raise ValueError(
                f"Drawing area must be positive, got "
                f"{self.drawing_width}x{self.drawing_height} after margins."
            )
        if not 0 <= self.padding <= 1:
            raise ValueError(f"padding must be in [0, 1], got {self.padding}")
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        if not 0 <= self.dim_opacity <= 1:
            raise ValueError(f"dim_opacity must be in [0, 1], got {self.dim_opacity}")
        if self.theme not in THEMES:
            raise ValueError(f"Unknown theme '{self.theme}'. Use one of {sorted(THEMES)}.")
        return self

    @classmethod
    def from_style(cls, style: Optional[Dict[str, Any]] = None) -> "ChartConfig":
        """Build a config from a plain dict of overrides.

        ``margin`` may be given as a dict with any of top/right/bottom/left.
        Unknown keys raise ValueError.
        """
        if not style:
            return cls()

        style = dict(style)
        known = {f.name for f in fields(cls)}
        unknown = set(style) - known
        if unknown:
            raise ValueError(f"Unknown style keys: {sorted(unknown)}")

        margin = style.pop("margin", None)
        if isinstance(margin, dict):
            style["margin"] = replace(Margin(), **margin)
        elif margin is not None:
            style["margin"] = margin
        return cls(**style)
