import pytest

from sheet_browser.core.exceptions import TableDataError
from sheet_browser.core.table import (
    Column,
    build_table,
    coerce_rows,
    columns_from_rows,
    format_column_label,
    is_table_shaped,
)


def test_format_column_label_camel_case():
    assert format_column_label("firstName") == "First Name"
    assert format_column_label("lastAudit") == "Last Audit"
    assert format_column_label("supportsSSO") == "Supports SSO"


def test_format_column_label_keeps_acronyms():
    assert format_column_label("HTTP status") == "HTTP status"
    assert format_column_label("total API calls") == "Total API calls"


def test_format_column_label_empty():
    assert format_column_label("") == ""


def test_columns_from_first_row_keys():
    rows = [{"vendorName": "a", "price": 1}, {"vendorName": "b", "extra": 2}]
    cols = columns_from_rows(rows)
    assert [c.key for c in cols] == ["vendorName", "price"]
    assert cols[0].label == "Vendor Name"
    assert all(c.visible is None for c in cols)


def test_columns_pick_up_styling():
    rows = [{"a": 1, "b": 2}]
    styling = {"a": {"cellStyle": {"color": "red"}}, "b": "not a dict"}
    cols = columns_from_rows(rows, styling)
    assert cols[0].shading == {"cellStyle": {"color": "red"}}
    assert cols[1].shading is None


def test_coerce_rows_rejects_non_lists():
    with pytest.raises(TableDataError):
        coerce_rows({"a": 1})
    with pytest.raises(TableDataError):
        coerce_rows([{"a": 1}, "row"])


def test_build_table():
    table = build_table("T", [{"a": 1}, {"a": 2}])
    assert table.title == "T"
    assert table.n_rows == 2
    assert table.column_keys == ["a"]


def test_build_table_empty_rows():
    table = build_table("Empty", [])
    assert table.n_rows == 0
    assert table.columns == []


def test_column_dict_round_trip_and_label_fallback():
    col = Column(key="k", label="", visible=False, shading={"cellStyle": {}})
    assert Column.from_dict(col.to_dict()) == col
    assert col.display_label == "k"


def test_is_table_shaped():
    assert is_table_shaped([], []) is True
    assert is_table_shaped(None, []) is False
    assert is_table_shaped([], "cols") is False
