# stackbar/chart.py
"""Stacked bar chart with a legend linked through hover highlighting."""
from __future__ import annotations

import warnings
from typing import Any, Callable, Dict, Optional, Sequence

from ._preprocessing import (
    Records,
    build_category_index,
    normalize_records,
    unindexed_categories,
)
from .config import ChartConfig
from .highlight import ChartView, HighlightCoordinator, HighlightState, LegendView
from .keys import build_key_map
from .mount import PlotlyMount, RecordingMount
from .render import bind_handlers, bind_legend, bind_segments
from .scales import build_scales
from .stack import build_stack


class StackedBarChart:
    """
    Build, mount and drive a stacked bar chart.

    The data pipeline (index, stack, scales, geometry) runs eagerly and
    completes before anything is drawn. ``render`` mounts the result and
    wires both the segments and the legend to one ``HighlightCoordinator``.

    Parameters
    ----------
    records : DataFrame or iterable of Record / mapping
        Flat ``category``, ``subcategory``, ``value`` records.
    categories : sequence, optional
        Display order of the categories. Defaults to first-seen order.
    config : ChartConfig, optional
        Surface size, margins, padding, palette and emphasis styling.
    on_select : callable, optional
        Receives ``{"subcategory": str}`` when a segment is clicked.
    callbacks : dict, optional
        Logging hooks, see ``get_chart_callbacks``:
        - 'on_render_start': (num_records, num_categories, num_subcategories)
        - 'on_render_complete': (num_segments, max_total)
        - 'on_highlight': (key or None)
        - 'on_select': (event)
        - 'on_warning': (name, message)
    verbose : bool
        If True and no callbacks are provided, print simple messages.

    Examples
    --------
    >>> chart = StackedBarChart(records, categories=["2020", "2021"])
    >>> mount = chart.render()
    >>> mount.enter_segment(0)
    >>> chart.state.key
    'A'
    """

    def __init__(
        self,
        records: Records,
        categories: Optional[Sequence[Any]] = None,
        config: Optional[ChartConfig] = None,
        on_select: Optional[Callable[[Dict[str, str]], None]] = None,
        callbacks: Optional[Dict[str, Callable]] = None,
        verbose: bool = False,
    ):
        self.config = (config or ChartConfig()).validate()
        self.callbacks = callbacks or {}
        self.verbose = verbose
        self.coordinator = HighlightCoordinator()
        self.mount = None

        if on_select is not None:
            self.coordinator.on_select(on_select)
        if 'on_select' in self.callbacks:
            self.coordinator.on_select(self.callbacks['on_select'])
        elif verbose:
            self.coordinator.on_select(lambda event: print(f"clicked {event['subcategory']}"))

        self._records = records
        self._categories = categories
        self._compute()

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def _compute(self) -> None:
        frame, messages = normalize_records(self._records)
        index = build_category_index(frame, self._categories)
        key_map = build_key_map(index.subcategories)

        if self._categories is not None:
            hidden = unindexed_categories(frame, index)
            if hidden:
                messages.append(f"Categories {hidden} are not in the display order and will not be drawn.")

        layout = build_stack(frame, index)
        scales = build_scales(layout, index, self.config)
        segments = bind_segments(layout, scales, key_map)
        legend = bind_legend(index, scales, self.config.swatch_size, key_map)

        self.frame = frame
        self.index = index
        self.key_map = key_map
        self.layout = layout
        self.scales = scales
        self.segments = segments
        self.legend = legend

        for msg in messages:
            self._warn(msg)

    def _warn(self, message: str) -> None:
        warnings.warn(message, UserWarning, stacklevel=3)
        if 'on_warning' in self.callbacks:
            self.callbacks['on_warning']("records", message)
        elif self.verbose:
            print(f"Warning: {message}")

    # -------------------------------------------------------------------------
    # Mounting
    # -------------------------------------------------------------------------

    def render(self, mount=None):
        """
        Draw the chart and legend into ``mount`` (a new RecordingMount by
        default) and start in the unfocused state.

        Returns
        -------
        The mount that now hosts the primitives.
        """
        if mount is None:
            mount = RecordingMount()

        if 'on_render_start' in self.callbacks:
            self.callbacks['on_render_start'](
                len(self.frame), len(self.index.categories), len(self.index.subcategories)
            )
        elif self.verbose:
            print(f"Rendering {len(self.segments)} segments | {len(self.legend)} legend entries")

        if self.mount is not None and self.mount is not mount:
            self.mount.clear()
        self.coordinator.reset()

        segment_handlers, legend_handlers = bind_handlers(self.coordinator)
        mount.draw(self.segments, self.legend, segment_handlers, legend_handlers, scales=self.scales)

        cfg = self.config
        self.coordinator.subscribe(ChartView(mount, self.segments, cfg.dim_opacity))
        self.coordinator.subscribe(LegendView(mount, self.legend, cfg.legend_highlight, cfg.legend_background))
        if 'on_highlight' in self.callbacks:
            on_highlight = self.callbacks['on_highlight']
            self.coordinator.subscribe(lambda state: on_highlight(state.key), replay=False)

        self.mount = mount

        if 'on_render_complete' in self.callbacks:
            self.callbacks['on_render_complete'](len(self.segments), self.layout.max_total)

        return mount

    def update(self, records: Records, categories: Optional[Sequence[Any]] = None) -> None:
        """Replace the data, recompute everything and redraw if mounted."""
        self._records = records
        if categories is not None:
            self._categories = categories
        self._compute()
        if self.mount is not None:
            self.render(self.mount)

    def unmount(self) -> None:
        """Remove primitives and drop the highlight state."""
        if self.mount is not None:
            self.mount.clear()
        self.coordinator.reset()
        self.mount = None

    def to_figure(self, style: Optional[Dict[str, Any]] = None):
        """Render into a new PlotlyMount and return its figure."""
        mount = self.render(PlotlyMount(self.config, style))
        return mount.figure

    # -------------------------------------------------------------------------
    # Interaction
    # -------------------------------------------------------------------------

    @property
    def state(self) -> HighlightState:
        return self.coordinator.state

    def enter(self, subcategory: str) -> None:
        self._require_mounted()
        self.coordinator.enter(subcategory)

    def leave(self) -> None:
        self._require_mounted()
        self.coordinator.leave()

    def click(self, subcategory: str) -> None:
        self._require_mounted()
        self.coordinator.click(subcategory)

    def colors(self) -> Dict[str, str]:
        """Current subcategory -> color assignment."""
        return {sub: self.scales.color(sub) for sub in self.index.subcategories}

    def _require_mounted(self) -> None:
        if self.mount is None:
            raise RuntimeError("Chart is not mounted. Run render() first.")
