# stackbar/_styling.py
"""
Styling module for stackbar charts.

Contains the segment palette, emphasis colors for the linked legend,
and the plotly themes applied to rendered figures.
"""
from __future__ import annotations

from typing import Dict, Any, List

# =============================================================================
# COLOR PALETTE
# =============================================================================

PALETTE: List[str] = [
    "#0fb5ae", "#4046ea", "#f68511", "#de3d82", "#adadad",
]

# Emphasis applied by the highlight coordinator
DIM_OPACITY = 0.25
LEGEND_HIGHLIGHT = "#ededed"
LEGEND_BACKGROUND = "#ffffff"


def hex_to_rgba(hex_color: str, alpha: float = 0.25) -> str:
    """Convert #RRGGBB to rgba(r,g,b,a)."""
    hex_color = hex_color.lstrip("#")
    r = int(hex_color[0:2], 16)
    g = int(hex_color[2:4], 16)
    b = int(hex_color[4:6], 16)
    return f"rgba({r},{g},{b},{alpha})"


# =============================================================================
# PLOTLY THEMES
# =============================================================================

THEMES: Dict[str, Dict[str, Any]] = {
    "fa": {
        "font": "Source Sans Pro",
        "font_size": 14,
        "background": "white",
        "grid_color": "rgba(0,0,0,0.06)",
        "axis_color": "#4A4E69",
        "title_color": "#2C32D5",
        "legend_font_color": "#222222",
        "legend_font_size": 12,
    },
    "minimal": {
        "font": "Inter",
        "font_size": 13,
        "background": "white",
        "grid_color": "rgba(0,0,0,0.07)",
        "axis_color": "#444444",
        "title_color": "#222222",
        "legend_font_color": "#333333",
        "legend_font_size": 11,
    },
    "dark": {
        "font": "Arial",
        "font_size": 13,
        "background": "#111111",
        "grid_color": "#333333",
        "axis_color": "#E5E5E5",
        "title_color": "#F8F8F8",
        "legend_font_color": "#F0F0F0",
        "legend_font_size": 12,
    },
}


def apply_theme(fig, theme: str = "fa"):
    """Apply global stackbar theme to a Plotly figure."""
    t = THEMES.get(theme, THEMES["fa"])

    fig.update_layout(
        font=dict(family=t["font"], size=t["font_size"]),
        plot_bgcolor=t["background"],
        paper_bgcolor=t["background"],
    )

    # Category axis carries no grid, the bars are the reference
    fig.update_xaxes(
        showgrid=False,
        color=t["axis_color"],
        tickcolor=t["axis_color"],
    )

    fig.update_yaxes(
        showgrid=True,
        gridcolor=t["grid_color"],
        color=t["axis_color"],
        tickcolor=t["axis_color"],
    )

    return fig


def apply_legend(fig, theme: str = "fa"):
    """Style the legend annotations drawn beside the chart."""
    t = THEMES.get(theme, THEMES["fa"])

    legend_font_color = t.get("legend_font_color", t.get("axis_color", "#222"))
    legend_font_size = t.get("legend_font_size", 12)

    fig.update_annotations(
        selector=dict(name="legend-label"),
        font=dict(size=legend_font_size, color=legend_font_color),
    )
    # The built-in plotly legend is replaced by the linked one
    fig.update_layout(showlegend=False)

    return fig
