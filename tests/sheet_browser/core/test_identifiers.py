from sheet_browser.core.identifiers import derive_identifiers, strip_parenthetical, truncate_preview
from sheet_browser.core.table import Column


def test_strip_parenthetical():
    assert strip_parenthetical("Acme Cloud (EU)") == "Acme Cloud"
    assert strip_parenthetical("  plain  ") == "plain"
    assert strip_parenthetical("(all inside)") == ""
    assert strip_parenthetical(None) == ""
    assert strip_parenthetical(42) == "42"


def test_truncate_preview_adds_ellipsis_past_limit():
    text = "x" * 50
    assert truncate_preview(text) == "x" * 45 + "..."
    assert truncate_preview("short") == "short"
    assert truncate_preview("x" * 45) == "x" * 45


def test_truncate_preview_strips_parenthetical_first():
    assert truncate_preview("Value (with a long note that would be cut)") == "Value"


def test_identifiers_prefer_candidate_keys_in_order():
    rows = [
        {"title": "T", "name": "N", "other": "o"},
        {"key": "K", "other": "o"},
        {"id": 7, "name": "N"},
    ]
    visible = [Column(key="other")]
    assert derive_identifiers(rows, visible) == ["N", "K", "7"]


def test_identifiers_fall_back_to_first_visible_column():
    rows = [{"city": "Paris (FR)", "pop": 2}, {"pop": 3}]
    visible = [Column(key="city"), Column(key="pop")]
    assert derive_identifiers(rows, visible) == ["Paris", ""]


def test_identifiers_skip_null_candidates():
    rows = [{"id": None, "name": "Named"}]
    assert derive_identifiers(rows, []) == ["Named"]


def test_identifiers_preferred_key_first():
    rows = [{"vendor": "Acme (EU)", "name": "ignored"}, {"name": "fallback"}]
    assert derive_identifiers(rows, [], preferred_key="vendor") == ["Acme", "fallback"]


def test_identifiers_one_per_row_even_without_columns():
    rows = [{"a": 1}, {"b": 2}]
    assert derive_identifiers(rows, []) == ["", ""]


def test_identifiers_malformed_rows():
    assert derive_identifiers(None, []) == []
    assert derive_identifiers({"not": "a list"}, []) == []
    assert derive_identifiers(["not a row"], []) == [""]
