import numpy as np

from stackbar import (
    PALETTE, ChartConfig, HighlightCoordinator,
    normalize_records, build_category_index, build_stack, build_scales,
    bind_segments, bind_legend, bind_handlers,
)

records = [
    {"category": "2020", "subcategory": "Kein Objekttyp", "value": 10},
    {"category": "2020", "subcategory": "B", "value": 20},
    {"category": "2021", "subcategory": "Kein Objekttyp", "value": 5},
    {"category": "2021", "subcategory": "B", "value": 5},
]


def _pipeline(recs, categories=("2020", "2021")):
    df, _ = normalize_records(recs)
    index = build_category_index(df, list(categories))
    layout = build_stack(df, index)
    scales = build_scales(layout, index, ChartConfig())
    return index, layout, scales


def test_segment_geometry():
    _, layout, scales = _pipeline(records)
    segs = bind_segments(layout, scales)
    first = segs[0]
    assert first.key == "KeinObjekttyp"
    assert first.subcategory == "Kein Objekttyp"
    assert first.category == "2020"
    assert np.isclose(first.x, scales.x("2020"))
    assert np.isclose(first.y, 230 - 230 * 10 / 30)
    assert np.isclose(first.height, 230 * 10 / 30)
    assert np.isclose(first.width, scales.x.bandwidth)
    assert first.fill == PALETTE[0]

    top = [s for s in segs if s.category == "2020" and s.subcategory == "B"][0]
    assert np.isclose(top.y, 0.0)
    assert np.isclose(top.y + top.height, first.y)


def test_heights_never_negative():
    _, layout, scales = _pipeline(records + [{"category": "2022", "subcategory": "B", "value": 0}],
                                  ("2020", "2021", "2022"))
    assert all(s.height >= 0 for s in bind_segments(layout, scales))


def test_all_zero_values_give_flat_chart():
    zero = [dict(r, value=0) for r in records]
    _, layout, scales = _pipeline(zero)
    segs = bind_segments(layout, scales)
    assert len(segs) == 4
    assert all(s.height == 0 for s in segs)
    assert all(s.y == 230 for s in segs)


def test_legend_entries():
    index, _, scales = _pipeline(records)
    legend = bind_legend(index, scales, swatch_size=12)
    assert [e.label for e in legend] == ["Kein Objekttyp", "B"]
    assert [e.key for e in legend] == ["KeinObjekttyp", "B"]
    assert [e.fill for e in legend] == PALETTE[:2]
    assert legend[0].swatch_size == 12
    assert legend[0].corner_radius == 2


def test_handlers_route_to_coordinator():
    coordinator = HighlightCoordinator()
    selected = []
    coordinator.on_select(selected.append)
    segment_handlers, legend_handlers = bind_handlers(coordinator)

    segment_handlers.on_enter("Kein Objekttyp")
    assert coordinator.state.key == "KeinObjekttyp"
    legend_handlers.on_leave()
    assert not coordinator.state.focused

    segment_handlers.on_click("B")
    assert selected == [{"subcategory": "B"}]
    assert legend_handlers.on_click is None
