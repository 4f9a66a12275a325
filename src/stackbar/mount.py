# stackbar/mount.py
"""
Mount targets hosting the rendered primitives.

A mount receives geometry and legend entries, stores the handlers bound
to them and routes pointer events back through those handlers. Style
changes arrive only through ``apply_segment_opacity`` and
``apply_legend_background``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from ._layout import finalize_figure
from .config import ChartConfig
from .render import Handlers, LegendEntry, SegmentGeometry


class MountTarget(Protocol):  # pragma: no cover - structural only
    def draw(
        self,
        segments: Sequence[SegmentGeometry],
        legend: Sequence[LegendEntry],
        segment_handlers: Handlers,
        legend_handlers: Handlers,
        scales: Any = None,
    ) -> None:
        ...

    def apply_segment_opacity(self, opacities: Sequence[float]) -> None:
        ...

    def apply_legend_background(self, backgrounds: Sequence[str]) -> None:
        ...

    def clear(self) -> None:
        ...


class RecordingMount:
    """
    In-memory mount: keeps primitives and their current styles.

    Hosts (and tests) drive it with ``enter_segment``/``leave_segment``/
    ``click_segment`` and the legend counterparts.
    """

    def __init__(self):
        self._reset()

    def _reset(self) -> None:
        self.segments: List[SegmentGeometry] = []
        self.legend: List[LegendEntry] = []
        self.segment_opacity: List[float] = []
        self.legend_background: List[str] = []
        self._segment_handlers: Optional[Handlers] = None
        self._legend_handlers: Optional[Handlers] = None

    @property
    def is_drawn(self) -> bool:
        return self._segment_handlers is not None

    def draw(self, segments, legend, segment_handlers, legend_handlers, scales=None) -> None:
        self.segments = list(segments)
        self.legend = list(legend)
        self.segment_opacity = [1.0] * len(self.segments)
        self.legend_background = [""] * len(self.legend)
        self._segment_handlers = segment_handlers
        self._legend_handlers = legend_handlers

    def apply_segment_opacity(self, opacities: Sequence[float]) -> None:
        self.segment_opacity = list(opacities)

    def apply_legend_background(self, backgrounds: Sequence[str]) -> None:
        self.legend_background = list(backgrounds)

    def clear(self) -> None:
        self._reset()

    # -------------------------------------------------------------------------
    # Pointer dispatch
    # -------------------------------------------------------------------------

    def enter_segment(self, i: int) -> None:
        self._handlers("segment").on_enter(self.segments[i].subcategory)

    def leave_segment(self, i: int) -> None:
        self._handlers("segment").on_leave()

    def click_segment(self, i: int) -> None:
        handlers = self._handlers("segment")
        if handlers.on_click is not None:
            handlers.on_click(self.segments[i].subcategory)

    def enter_legend(self, i: int) -> None:
        self._handlers("legend").on_enter(self.legend[i].label)

    def leave_legend(self, i: int) -> None:
        self._handlers("legend").on_leave()

    def click_legend(self, i: int) -> None:
        handlers = self._handlers("legend")
        if handlers.on_click is not None:
            handlers.on_click(self.legend[i].label)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def opacity_by_segment(self) -> Dict[Tuple[str, Any], float]:
        """{(subcategory, category): opacity} for the mounted segments."""
        return {
            (seg.subcategory, seg.category): op
            for seg, op in zip(self.segments, self.segment_opacity)
        }

    def background_by_label(self) -> Dict[str, str]:
        return {entry.label: bg for entry, bg in zip(self.legend, self.legend_background)}

    def _handlers(self, kind: str) -> Handlers:
        handlers = self._segment_handlers if kind == "segment" else self._legend_handlers
        if handlers is None:
            raise RuntimeError("Nothing is mounted. Render a chart into this mount first.")
        return handlers


class PlotlyMount(RecordingMount):
    """
    Mount that also maintains a plotly figure.

    Segments are drawn as ``go.Bar`` traces (one per subcategory) on a
    pixel-space plot area with an inverted y axis, so the bound geometry
    is used as-is. The legend is drawn as swatch shapes with label
    annotations whose background carries the emphasis.

    Plotly hover/click payloads (from a ``FigureWidget`` or a Dash
    callback) are routed with ``handle_event``.
    """

    LEGEND_ROW = 0.09

    def __init__(self, config: Optional[ChartConfig] = None, style: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.config = config or ChartConfig()
        self.style = style
        self.figure = None
        self._points: List[Tuple[int, int]] = []
        self._legend_annotations: List[int] = []

    def draw(self, segments, legend, segment_handlers, legend_handlers, scales=None) -> None:
        import plotly.graph_objects as go

        super().draw(segments, legend, segment_handlers, legend_handlers, scales)
        cfg = self.config

        groups: Dict[str, List[int]] = {}
        for i, seg in enumerate(self.segments):
            groups.setdefault(seg.subcategory, []).append(i)

        fig = go.Figure()
        self._points = [(0, 0)] * len(self.segments)
        for trace_idx, (sub, idxs) in enumerate(groups.items()):
            segs = [self.segments[i] for i in idxs]
            fig.add_trace(go.Bar(
                x=[s.x + s.width / 2 for s in segs],
                y=[s.height for s in segs],
                base=[s.y for s in segs],
                width=[s.width for s in segs],
                name=sub,
                marker=dict(color=segs[0].fill, opacity=[1.0] * len(segs), line=dict(width=0)),
                customdata=[[s.subcategory, str(s.category), s.upper - s.lower] for s in segs],
                hovertemplate="<b>%{customdata[1]}</b><br>%{customdata[0]}: %{customdata[2]}<extra></extra>",
            ))
            for point_idx, i in enumerate(idxs):
                self._points[i] = (trace_idx, point_idx)

        fig.update_layout(barmode="overlay", bargap=0)
        fig.update_xaxes(range=[0, cfg.drawing_width], zeroline=False, ticks="outside", ticklen=cfg.x_axis_offset)
        fig.update_yaxes(range=[cfg.drawing_height, 0], zeroline=False)

        if scales is not None:
            fig.update_xaxes(
                tickvals=[scales.x.center(c) for c in scales.x.domain],
                ticktext=[str(c) for c in scales.x.domain],
            )
            ticks = scales.y.ticks(5)
            fig.update_yaxes(tickvals=[scales.y(t) for t in ticks], ticktext=[f"{t:g}" for t in ticks])

        self._legend_annotations = []
        for i, entry in enumerate(self.legend):
            y = 1.0 - i * self.LEGEND_ROW
            fig.add_shape(
                type="rect", name="legend-swatch",
                xref="paper", yref="paper",
                xsizemode="pixel", ysizemode="pixel",
                xanchor=1.02, yanchor=y,
                x0=0, x1=entry.swatch_size,
                y0=-entry.swatch_size / 2, y1=entry.swatch_size / 2,
                fillcolor=entry.fill, line=dict(width=0),
            )
            fig.add_annotation(
                name="legend-label",
                x=1.02, y=y, xref="paper", yref="paper",
                xanchor="left", yanchor="middle",
                xshift=entry.swatch_size + 4,
                text=entry.label, showarrow=False,
                bgcolor=cfg.legend_background,
            )
            self._legend_annotations.append(len(fig.layout.annotations) - 1)

        self.figure = finalize_figure(fig, cfg, self.style)

    def apply_segment_opacity(self, opacities: Sequence[float]) -> None:
        super().apply_segment_opacity(opacities)
        if self.figure is None:
            return
        per_trace: Dict[int, List[float]] = {}
        for (trace_idx, point_idx), op in zip(self._points, self.segment_opacity):
            per_trace.setdefault(trace_idx, []).append(op)
        for trace_idx, values in per_trace.items():
            self.figure.data[trace_idx].marker.opacity = values

    def apply_legend_background(self, backgrounds: Sequence[str]) -> None:
        super().apply_legend_background(backgrounds)
        if self.figure is None:
            return
        for ann_idx, bg in zip(self._legend_annotations, self.legend_background):
            self.figure.layout.annotations[ann_idx].bgcolor = bg

    def clear(self) -> None:
        super().clear()
        self.figure = None
        self._points = []
        self._legend_annotations = []

    def handle_event(self, kind: str, event_data: Optional[Dict[str, Any]] = None) -> None:
        """
        Route a plotly event payload.

        ``kind`` is one of hover, unhover or click (a ``plotly_`` prefix is
        accepted). The subcategory comes from the point's customdata, or
        from the trace name when customdata is absent.
        """
        kind = kind.replace("plotly_", "")
        if kind not in ("hover", "unhover", "click"):
            raise ValueError("kind must be 'hover', 'unhover' or 'click'")
        handlers = self._handlers("segment")

        if kind == "unhover":
            handlers.on_leave()
            return

        points = (event_data or {}).get("points") or []
        if not points:
            return
        subcategory = self._subcategory_of(points[0])
        if subcategory is None:
            return

        if kind == "hover":
            handlers.on_enter(subcategory)
        elif handlers.on_click is not None:
            handlers.on_click(subcategory)

    def _subcategory_of(self, point: Dict[str, Any]) -> Optional[str]:
        custom = point.get("customdata")
        if custom:
            return custom[0]
        curve = point.get("curveNumber")
        if self.figure is not None and curve is not None and curve < len(self.figure.data):
            return self.figure.data[curve].name
        return None
