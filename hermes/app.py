#===============================================================================
#  Hermes | app.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Startup: settings, logging, command tree (load, generate, resolve), then
#  the overlay panel. The process exits shortly after the panel closes, so a
#  hotkey daemon can simply start it again.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from .app_catalog import AppCatalog
from .constants import APP_TITLE, COMMANDS_FILE_NAME, FOCUS_DELAY_MS
from .controller import PanelController
from .dispatcher import Dispatcher
from .generators import GeneratorContext
from .icons import IconProvider
from .loader import load, load_config
from .logging_setup import configure_logging, get_logger
from .models import CommandTree
from .navigation import NavigationMachine
from .panel import HermesPanel
from .process import ProcessExecutor
from .resolver import resolve
from .search import SearchIndex
from .settings import load_settings, save_settings, settings_path
from .window_catalog import WindowCatalog

DEFAULT_COMMANDS_FILE = Path(__file__).parent / "resources" / COMMANDS_FILE_NAME
QUIT_DELAY_MS = FOCUS_DELAY_MS * 4


def commands_file(settings: Dict[str, Any]) -> Path:
    """Configured command file, or the packaged example when it does not exist."""
    configured = Path(settings["commands_file"]).expanduser()
    return configured if configured.exists() else DEFAULT_COMMANDS_FILE


def build_tree(settings: Dict[str, Any], executor: ProcessExecutor) -> CommandTree:
    raw = load_config(commands_file(settings))
    ctx = GeneratorContext(executor=executor, settings=settings)
    return resolve(load(raw, ctx), executor, settings["shell"])


def run(argv: Optional[List[str]] = None) -> int:
    path = settings_path()
    settings = load_settings(path)
    log_info = configure_logging(Path(settings["log_dir"]).expanduser())
    log = get_logger()
    log.info("Starting %s (settings=%s, log=%s)", APP_TITLE, path, log_info["log_path"])

    if not path.exists():
        try:
            save_settings(path, settings)
        except OSError:
            log.warning("Could not write default settings to %s", path, exc_info=True)

    executor = ProcessExecutor(timeout=settings.get("process_timeout"))
    tree = build_tree(settings, executor)
    index = SearchIndex.from_tree(tree)
    log.info("Loaded %s top-level entries, %s searchable commands", len(tree), len(index))

    app = QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName(APP_TITLE)
    app.setQuitOnLastWindowClosed(False)

    app_catalog = AppCatalog(executor, settings)
    controller = PanelController(
        NavigationMachine(tree, index),
        Dispatcher(executor, settings),
        app_catalog,
        WindowCatalog(executor, settings),
    )
    icons = IconProvider(app_catalog)
    panel = HermesPanel(controller, icons)

    def close_panel():
        panel.hide()
        QTimer.singleShot(QUIT_DELAY_MS, app.quit)

    controller.close_requested.connect(close_panel)
    app.aboutToQuit.connect(controller.shutdown)
    app.aboutToQuit.connect(icons.shutdown)
    panel.show_centered()
    return app.exec()
