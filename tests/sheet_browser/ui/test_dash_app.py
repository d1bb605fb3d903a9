import json
from pathlib import Path

import pytest

from sheet_browser.ui.dash_app import create_dash_app


def _write_config(root: Path) -> Path:
    (root / "sources").mkdir(parents=True)
    (root / "global.json").write_text(json.dumps({"ui_title": "Test Tables", "default_source": "demo"}))
    (root / "sources" / "demo.json").write_text(
        json.dumps({"name": "Demo", "key": "demo", "file": "demo.json"})
    )
    (root / "demo.json").write_text(json.dumps([{"name": "a", "value": 1}]))
    return root


def test_create_dash_app_from_config_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("SHEET_BROWSER_DATA_ROOT", raising=False)
    app = create_dash_app(_write_config(tmp_path / "config"))

    assert app.title == "Test Tables"
    assert app.layout is not None


def test_create_dash_app_without_sources(tmp_path):
    root = tmp_path / "config"
    root.mkdir()
    (root / "global.json").write_text("{}")

    with pytest.raises(RuntimeError):
        create_dash_app(root)
