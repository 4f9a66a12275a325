import numpy as np
import plotly.graph_objects as go
import pytest

from stackbar import PALETTE, ChartConfig, PlotlyMount, StackedBarChart

records = [
    {"category": "2020", "subcategory": "Kein Objekttyp", "value": 10},
    {"category": "2020", "subcategory": "B", "value": 20},
    {"category": "2021", "subcategory": "Kein Objekttyp", "value": 5},
    {"category": "2021", "subcategory": "B", "value": 5},
]


def _legend_bgs(fig):
    return [a.bgcolor for a in fig.layout.annotations if a.name == "legend-label"]


def test_figure_has_one_trace_per_subcategory():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    fig = chart.to_figure(style={"title": "Objekttypen"})
    assert isinstance(fig, go.Figure)
    assert [t.name for t in fig.data] == ["Kein Objekttyp", "B"]
    assert fig.data[0].marker.color == PALETTE[0]
    assert fig.layout.barmode == "overlay"
    assert fig.layout.title.text == "Objekttypen"

    base = fig.data[1].base
    heights = fig.data[1].y
    assert np.isclose(base[0], 0.0)
    assert np.isclose(base[0] + heights[0], 230 - 230 * 10 / 30)


def test_axis_ticks_follow_scales():
    chart = StackedBarChart(records, categories=["2021", "2020"])
    fig = chart.to_figure()
    assert list(fig.layout.xaxis.ticktext) == ["2021", "2020"]
    assert list(fig.layout.yaxis.range) == [230, 0]
    assert "30" in list(fig.layout.yaxis.ticktext)


def test_legend_annotations_and_swatches():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    fig = chart.to_figure()
    labels = [a.text for a in fig.layout.annotations if a.name == "legend-label"]
    swatches = [s.fillcolor for s in fig.layout.shapes if s.name == "legend-swatch"]
    assert labels == ["Kein Objekttyp", "B"]
    assert swatches == PALETTE[:2]
    assert fig.layout.showlegend is False
    assert fig.layout.width > chart.config.width


def test_hover_event_restyles_figure():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    chart.to_figure()
    mount = chart.mount

    mount.handle_event("plotly_hover", {"points": [{"curveNumber": 1, "pointNumber": 0,
                                                    "customdata": ["B", "2020", 20.0]}]})
    assert chart.state.key == "B"
    assert list(mount.figure.data[0].marker.opacity) == [0.25, 0.25]
    assert list(mount.figure.data[1].marker.opacity) == [1.0, 1.0]
    assert _legend_bgs(mount.figure) == ["#ffffff", "#ededed"]

    mount.handle_event("unhover")
    assert list(mount.figure.data[0].marker.opacity) == [1.0, 1.0]
    assert _legend_bgs(mount.figure) == ["#ffffff", "#ffffff"]


def test_click_event_uses_trace_name_fallback():
    events = []
    chart = StackedBarChart(records, categories=["2020", "2021"], on_select=events.append)
    chart.to_figure()
    chart.mount.handle_event("click", {"points": [{"curveNumber": 0, "pointNumber": 1}]})
    assert events == [{"subcategory": "Kein Objekttyp"}]
    assert not chart.state.focused


def test_unknown_event_kind():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    chart.to_figure()
    with pytest.raises(ValueError):
        chart.mount.handle_event("doubleclick", {"points": []})


def test_empty_chart_figure():
    chart = StackedBarChart([], categories=["2020"], config=ChartConfig(theme="dark"))
    fig = chart.to_figure()
    assert len(fig.data) == 0
    assert fig.layout.plot_bgcolor == "#111111"


def test_mount_standalone():
    mount = PlotlyMount(ChartConfig())
    chart = StackedBarChart(records, categories=["2020", "2021"])
    chart.render(mount)
    chart.enter("KeinObjekttyp")
    assert list(mount.figure.data[1].marker.opacity) == [0.25, 0.25]
    mount.clear()
    assert mount.figure is None
