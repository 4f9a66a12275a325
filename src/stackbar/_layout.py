# stackbar/_layout.py
"""Figure finalization (theme, style overrides, sizing) for plotly output."""
from __future__ import annotations

from typing import Any, Dict, Optional

from ._styling import apply_theme, apply_legend

# Rough glyph width used to reserve room for legend labels
_CHAR_PX = 7


def finalize_figure(fig, config, style: Optional[Dict[str, Any]] = None):
    """
    Apply theme, style overrides, and size the figure to the config.

    Parameters
    ----------
    fig : go.Figure
        The Plotly figure to finalize.
    config : ChartConfig
        Surface size, margins and theme name.
    style : dict, optional
        Style overrides with keys: title, subtitle, x_title, y_title.

    Returns
    -------
    go.Figure
        The finalized figure.
    """
    fig = apply_theme(fig, config.theme)

    if style:
        if "title" in style:
            fig.update_layout(title={"text": style["title"], "font": {"size": 18}})
        if "subtitle" in style:
            fig.add_annotation(
                x=0, y=1.06,
                xref="paper", yref="paper",
                text=style["subtitle"],
                showarrow=False,
                font=dict(size=13, color="#444"),
            )
        if "x_title" in style:
            fig.update_xaxes(title_text=style["x_title"])
        if "y_title" in style:
            fig.update_yaxes(title_text=style["y_title"])

    fig = apply_legend(fig, config.theme)

    # Reserve room on the right for the linked legend
    labels = [a.text or "" for a in fig.layout.annotations if a.name == "legend-label"]
    legend_px = 0
    if labels:
        legend_px = int(config.swatch_size + 16 + _CHAR_PX * max(len(t) for t in labels))

    m = config.margin
    fig.update_layout(
        autosize=False,
        width=config.width + legend_px,
        height=config.height,
        margin=dict(l=m.left, r=m.right + legend_px, t=m.top, b=m.bottom),
    )

    return fig
