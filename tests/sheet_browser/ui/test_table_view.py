from sheet_browser.core.table import build_table
from sheet_browser.ui.table_view import (
    FALLBACK_VIEWPORT_WIDTH,
    build_table_view,
    columns_from_store,
    table_to_store,
    viewport_height,
    viewport_width,
)

ROWS = [{"c0": f"r{i}", "c1": i, "c2": "x", "c3": "y", "c4": "z", "c5": "w"} for i in range(4)]


def _store():
    return table_to_store("demo", build_table("Demo", ROWS))


def test_store_shape():
    data = _store()
    assert data["source"] == "demo"
    assert data["title"] == "Demo"
    assert [c["key"] for c in data["columns"]] == ["c0", "c1", "c2", "c3", "c4", "c5"]


def test_viewport_helpers():
    assert viewport_width({"width": 390, "height": 844}) == 390
    assert viewport_width(None) == FALLBACK_VIEWPORT_WIDTH
    assert viewport_width({"width": "wide"}) == FALLBACK_VIEWPORT_WIDTH
    assert viewport_height({"width": 390, "height": 844}) == 844
    assert viewport_height({}) is None


def test_phone_width_flags_two_columns():
    view = build_table_view(_store(), viewport={"width": 390, "height": 844})
    assert [c.key for c in view.visible_columns] == ["c0", "c1"]
    assert all(c.visible is not None for c in view.columns)
    assert len(view.rows) == 4


def test_manual_overrides_apply_on_top():
    view = build_table_view(
        _store(),
        viewport={"width": 390, "height": 844},
        overrides={"c0": False, "c5": True},
    )
    assert [c.key for c in view.visible_columns] == ["c1", "c5"]


def test_search_and_sort_shape_rows():
    view = build_table_view(
        _store(),
        viewport={"width": 1400},
        search="r",
        sort_by=[{"column_id": "c1", "direction": "desc"}],
    )
    assert [r["c1"] for r in view.rows] == [3, 2, 1, 0]


def test_missing_store_gives_empty_view():
    view = build_table_view(None)
    assert view.rows == []
    assert view.columns == []
    assert view.malformed is False


def test_malformed_rows_are_flagged():
    data = _store()
    data["rows"] = {"not": "a list"}
    view = build_table_view(data)
    assert view.malformed is True
    assert view.rows == []


def test_columns_from_store_skips_bad_entries():
    cols = columns_from_store({"columns": [{"key": "a"}, {"label": "no key"}, "junk"]})
    assert [c.key for c in cols] == ["a"]
