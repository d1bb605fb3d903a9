from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from sheet_browser.config.loader import load_global_config
from sheet_browser.services.sheets_client import SheetsClient
from sheet_browser.services.table_service import TableService
from sheet_browser.ui.callbacks.callbacks_table import register_table_callbacks
from sheet_browser.ui.callbacks.callbacks_viewer import register_viewer_callbacks
from sheet_browser.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def create_dash_app(
    config_root: Path | str = Path("config"),
    client: Optional[SheetsClient] = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)
    if not global_config.sources:
        raise RuntimeError("No table sources were loaded from config")

    # 2) Initialize Service Layer
    tables = TableService(global_config, config_root, client=client)

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        tables=tables,
        sources=list(global_config.sources),
        default_source=tables.default_key(),
    )
    ctx.validate()

    logger.info(
        "App configured",
        extra={"n_sources": len(ctx.sources), "default_source": ctx.default_source},
    )

    # styles.css + viewer_events.js live next to this module
    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
        meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    )

    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_table_callbacks(app, ctx)
    register_viewer_callbacks(app, ctx)

    return app
