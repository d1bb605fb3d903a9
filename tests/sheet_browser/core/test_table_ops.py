from sheet_browser.core.table_ops import (
    MAX_WIDTH_PCT,
    MIN_WIDTH_PCT,
    SortConfig,
    column_widths,
    filter_and_sort,
    filter_rows,
    sort_rows,
)

ROWS = [
    {"name": "item10", "qty": 5, "note": "Blue"},
    {"name": "Item1", "qty": None, "note": "red"},
    {"name": "item2", "qty": 12, "note": None},
    {"name": None, "qty": 1, "note": "green and blue"},
]


def test_filter_rows_is_case_insensitive_over_all_values():
    kept = filter_rows(ROWS, "BLUE")
    assert [r["name"] for r in kept] == ["item10", None]


def test_filter_rows_matches_numbers_as_text():
    kept = filter_rows(ROWS, "12")
    assert [r["name"] for r in kept] == ["item2"]


def test_filter_rows_empty_term_keeps_everything():
    assert filter_rows(ROWS, "") == ROWS
    assert filter_rows(ROWS, None) == ROWS


def test_sort_config_from_sort_by():
    assert SortConfig.from_sort_by([{"column_id": "qty", "direction": "desc"}]) == SortConfig("qty", "desc")
    assert SortConfig.from_sort_by([]) == SortConfig()
    assert SortConfig.from_sort_by(None).key is None
    assert SortConfig.from_sort_by([{"column_id": "qty", "direction": "sideways"}]).direction == "asc"


def test_sort_text_naturally_with_missing_last():
    ordered = sort_rows(ROWS, SortConfig("name", "asc"))
    assert [r["name"] for r in ordered] == ["Item1", "item2", "item10", None]


def test_sort_numbers_descending_missing_still_last():
    ordered = sort_rows(ROWS, SortConfig("qty", "desc"))
    assert [r["qty"] for r in ordered] == [12, 5, 1, None]


def test_sort_without_key_keeps_order():
    assert sort_rows(ROWS, SortConfig()) == ROWS


def test_sort_is_stable():
    rows = [{"k": "a", "i": 0}, {"k": "b", "i": 1}, {"k": "a", "i": 2}]
    ordered = sort_rows(rows, SortConfig("k", "asc"))
    assert [r["i"] for r in ordered] == [0, 2, 1]


def test_filter_and_sort_combined():
    result = filter_and_sort(ROWS, "item", SortConfig("qty", "asc"))
    assert [r["name"] for r in result] == ["item10", "item2", "Item1"]


def test_column_widths_bounded_and_weighted():
    rows = [
        {"short": "a", "long": "x" * 400, "empty": ""},
        {"short": "b", "long": "y" * 300, "empty": None},
    ]
    widths = column_widths(rows, ["short", "long", "empty"])

    assert set(widths) == {"short", "long", "empty"}
    assert all(MIN_WIDTH_PCT <= w <= MAX_WIDTH_PCT for w in widths.values())
    assert widths["long"] > widths["short"]


def test_column_widths_strip_markdown_links():
    rows = [{"link": "[a](https://example.com/very/long/path/that/should/not/count)", "text": "a"}]
    widths = column_widths(rows, ["link", "text"])
    assert widths["link"] == widths["text"]


def test_column_widths_empty_inputs():
    assert column_widths([], ["a"]) == {}
    assert column_widths([{"a": 1}], []) == {}
