import pandas as pd
import pytest

from stackbar import (
    PALETTE, ChartConfig, KeyCollisionError, RecordingMount, StackedBarChart,
)

records = [
    {"category": "2020", "subcategory": "A", "value": 10},
    {"category": "2020", "subcategory": "B", "value": 20},
    {"category": "2021", "subcategory": "A", "value": 5},
    {"category": "2021", "subcategory": "B", "value": 5},
]


def test_example_scenario():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    mount = chart.render()
    assert chart.layout.max_total == 30

    mount.enter_segment(0)
    assert chart.state.key == "A"
    assert mount.opacity_by_segment() == {
        ("A", "2020"): 1.0,
        ("A", "2021"): 1.0,
        ("B", "2020"): 0.25,
        ("B", "2021"): 0.25,
    }
    assert mount.background_by_label() == {"A": "#ededed", "B": "#ffffff"}

    mount.leave_segment(0)
    assert set(mount.opacity_by_segment().values()) == {1.0}
    assert mount.background_by_label() == {"A": "#ffffff", "B": "#ffffff"}


def test_render_starts_unfocused():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    mount = chart.render()
    assert not chart.state.focused
    assert mount.segment_opacity == [1.0] * 4
    assert mount.legend_background == ["#ffffff", "#ffffff"]


def test_legend_hover_highlights_chart():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    mount = chart.render()
    mount.enter_legend(1)
    assert mount.opacity_by_segment()[("B", "2021")] == 1.0
    assert mount.opacity_by_segment()[("A", "2021")] == 0.25
    assert mount.background_by_label()["B"] == "#ededed"
    mount.leave_legend(1)
    assert not chart.state.focused


def test_enter_is_idempotent():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    mount = chart.render()
    chart.enter("A")
    once = (list(mount.segment_opacity), list(mount.legend_background))
    chart.enter("A")
    assert (mount.segment_opacity, mount.legend_background) == once


def test_enter_elsewhere_without_leave():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    mount = chart.render()
    mount.enter_segment(0)
    mount.enter_segment(3)
    assert mount.opacity_by_segment()[("A", "2020")] == 0.25
    assert mount.opacity_by_segment()[("B", "2021")] == 1.0
    assert mount.background_by_label() == {"A": "#ffffff", "B": "#ededed"}


def test_stale_key_dims_everything():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    mount = chart.render()
    chart.enter("Z")
    assert mount.segment_opacity == [0.25] * 4
    assert mount.legend_background == ["#ffffff", "#ffffff"]


def test_click_reports_selection():
    events = []
    chart = StackedBarChart(records, categories=["2020", "2021"], on_select=events.append)
    mount = chart.render()
    mount.enter_segment(2)
    mount.click_segment(2)
    mount.click_legend(0)
    assert events == [{"subcategory": "B"}]
    assert chart.state.key == "B"


def test_dispatch_requires_render():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    with pytest.raises(RuntimeError, match="render"):
        chart.enter("A")
    chart.render()
    chart.unmount()
    with pytest.raises(RuntimeError):
        chart.leave()


def test_unmount_clears_mount_and_state():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    mount = chart.render()
    chart.enter("A")
    chart.unmount()
    assert mount.segments == []
    assert not chart.state.focused
    with pytest.raises(RuntimeError):
        mount.enter_segment(0)


def test_update_recomputes_and_resets_focus():
    events = []
    chart = StackedBarChart(records, categories=["2020", "2021"], on_select=events.append)
    mount = chart.render()
    chart.enter("A")

    more = records + [{"category": "2021", "subcategory": "C", "value": 40}]
    chart.update(more)
    assert not chart.state.focused
    assert chart.layout.max_total == 50
    assert len(mount.segments) == 6
    assert [e.label for e in mount.legend] == ["A", "B", "C"]
    assert chart.colors() == {"A": PALETTE[0], "B": PALETTE[1], "C": PALETTE[2]}

    mount.click_segment(5)
    assert events == [{"subcategory": "C"}]


def test_rerender_into_new_mount_clears_old():
    chart = StackedBarChart(records, categories=["2020", "2021"])
    first = chart.render()
    second = chart.render(RecordingMount())
    assert first.segments == []
    chart.enter("B")
    assert second.background_by_label()["B"] == "#ededed"


def test_empty_records_render():
    chart = StackedBarChart([], categories=["2020", "2021"])
    mount = chart.render()
    assert mount.segments == []
    assert mount.legend == []
    assert chart.scales.y(0) == chart.config.drawing_height
    chart.enter("A")
    chart.leave()


def test_frame_input_and_colors():
    chart = StackedBarChart(pd.DataFrame(records), categories=["2020", "2021"])
    assert chart.colors() == {"A": PALETTE[0], "B": PALETTE[1]}


def test_key_collision_raises():
    bad = [
        {"category": "2020", "subcategory": "Kein Objekttyp", "value": 1},
        {"category": "2020", "subcategory": "KeinObjekttyp", "value": 2},
    ]
    with pytest.raises(KeyCollisionError):
        StackedBarChart(bad, categories=["2020"])


def test_hidden_category_warns():
    with pytest.warns(UserWarning, match="not in the display order"):
        chart = StackedBarChart(records, categories=["2020"])
    assert [s.category for s in chart.segments] == ["2020", "2020"]


def test_duplicate_warning_goes_to_callbacks():
    seen = []
    dup = records + [{"category": "2020", "subcategory": "A", "value": 99}]
    with pytest.warns(UserWarning, match="Duplicate"):
        StackedBarChart(dup, categories=["2020", "2021"],
                        callbacks={"on_warning": lambda name, msg: seen.append(name)})
    assert seen == ["records"]


def test_invalid_config_raises():
    with pytest.raises(ValueError, match="padding"):
        StackedBarChart(records, config=ChartConfig(padding=1.5))
    with pytest.raises(ValueError, match="Drawing area"):
        StackedBarChart(records, config=ChartConfig(width=50))
