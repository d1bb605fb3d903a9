import json
from pathlib import Path

import pytest

from sheet_browser.config.loader import DATA_ROOT_ENV
from sheet_browser.config.model import GlobalConfig, SourceConfig
from sheet_browser.core.exceptions import SheetFetchError, SourceConfigError
from sheet_browser.services.sheets_client import SheetPayload
from sheet_browser.services.table_service import TableService, load_source


@pytest.fixture(autouse=True)
def _no_data_root_env(monkeypatch):
    monkeypatch.delenv(DATA_ROOT_ENV, raising=False)


class StubClient:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def fetch(self, sheet_id, sheet, query=None, filters=None, use_numbers=True):
        self.calls.append((sheet_id, sheet, query, filters, use_numbers))
        if self.error is not None:
            raise self.error
        return self.payload


def _source(raw, index=0) -> SourceConfig:
    return SourceConfig.from_raw(raw, source_path=Path("sources/x.json"), index=index)


def _write_table(root: Path, name: str, rows) -> None:
    (root / name).write_text(json.dumps(rows))


def test_load_source_sheet_uses_client():
    cfg = _source({"name": "Roadmap", "kind": "sheet", "sheet_id": "abc", "query": "q", "filters": {"A": 1}})
    client = StubClient(SheetPayload(title="Remote", rows=[{"A": 1}]))

    table = load_source(cfg, GlobalConfig(), Path("."), client)

    assert table.title == "Remote"
    assert table.column_keys == ["A"]
    assert client.calls == [("abc", "Sheet1", "q", {"A": "1"}, True)]


def test_load_source_json_resolves_against_config_root(tmp_path):
    _write_table(tmp_path, "t.json", [{"a": 1}])
    cfg = _source({"name": "T", "file": "t.json"})

    table = load_source(cfg, GlobalConfig(), tmp_path)

    assert table.title == "T"
    assert table.n_rows == 1


def test_load_source_unknown_kind():
    cfg = _source({"name": "X", "kind": "xml"})
    with pytest.raises(SourceConfigError):
        load_source(cfg, GlobalConfig(), Path("."))


def test_service_loads_lazily_and_caches(tmp_path):
    _write_table(tmp_path, "a.json", [{"x": 1}])
    cfg = _source({"name": "A", "key": "a", "file": "a.json"})
    service = TableService(GlobalConfig(sources=[cfg]), tmp_path)

    assert list(service) == ["a"]
    assert len(service) == 1
    assert service.is_loaded("a") is False

    first = service["a"]
    assert service.is_loaded("a") is True
    assert service["a"] is first


def test_service_invalidate_refetches(tmp_path):
    _write_table(tmp_path, "a.json", [{"x": 1}])
    cfg = _source({"name": "A", "key": "a", "file": "a.json"})
    service = TableService(GlobalConfig(sources=[cfg]), tmp_path)

    assert service["a"].n_rows == 1
    _write_table(tmp_path, "a.json", [{"x": 1}, {"x": 2}])
    assert service["a"].n_rows == 1

    service.invalidate("a")
    assert service["a"].n_rows == 2


def test_service_unknown_key():
    service = TableService(GlobalConfig(), Path("."))
    with pytest.raises(KeyError):
        service["missing"]
    assert service.get("missing") is None


def test_service_propagates_fetch_errors_without_caching():
    cfg = _source({"name": "R", "key": "r", "sheet_id": "abc"})
    client = StubClient(error=SheetFetchError("quota", status=429))
    service = TableService(GlobalConfig(sources=[cfg]), Path("."), client=client)

    with pytest.raises(SheetFetchError):
        service["r"]
    assert service.is_loaded("r") is False


def test_default_key_prefers_configured_default():
    a = _source({"name": "A", "key": "a", "file": "a.json"}, 0)
    b = _source({"name": "B", "key": "b", "file": "b.json"}, 1)

    assert TableService(GlobalConfig(sources=[a, b], default_source="b"), Path(".")).default_key() == "b"
    assert TableService(GlobalConfig(sources=[a, b], default_source="zzz"), Path(".")).default_key() == "a"
    assert TableService(GlobalConfig(), Path(".")).default_key() is None
