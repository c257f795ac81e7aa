#===============================================================================
#  Hermes | icons.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  On-demand app icons. A cached PNG is used when present; otherwise the
#  system's generic icon is returned at once and the real one is extracted on
#  the thread pool and announced through icon_ready.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from typing import Set

from PySide6.QtCore import QFileInfo, QObject, QRunnable, QThreadPool, Signal, Slot
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QFileIconProvider

from .app_catalog import AppCatalog
from .models import AppInfo

logger = logging.getLogger(__name__)


class IconJobSignals(QObject):
    done = Signal(str, object)   # app name, icon path or None


class IconJob(QRunnable):
    def __init__(self, catalog: AppCatalog, app: AppInfo):
        super().__init__()
        self.catalog = catalog
        self.app = app
        self.signals = IconJobSignals()

    @Slot()
    def run(self):
        try:
            path = self.catalog.extract_icon(self.app)
        except Exception:
            logger.exception("Icon extraction failed for %s", self.app.name)
            path = None
        self.signals.done.emit(self.app.name, str(path) if path else None)


class IconProvider(QObject):
    icon_ready = Signal(str, object)     # app name, QIcon

    def __init__(self, catalog: AppCatalog, parent=None):
        super().__init__(parent)
        self.catalog = catalog
        self.pool = QThreadPool.globalInstance()
        self._system = QFileIconProvider()
        self._pending: Set[str] = set()
        self._failed: Set[str] = set()

    def icon_for(self, app: AppInfo) -> QIcon:
        cached = self.catalog.icon_path(app.name)
        if cached.exists():
            return QIcon(str(cached))

        if app.name not in self._pending and app.name not in self._failed:
            self._pending.add(app.name)
            job = IconJob(self.catalog, app)
            job.signals.done.connect(self._on_done)
            self.pool.start(job)

        return self._system.icon(QFileInfo(app.path))

    @Slot(str, object)
    def _on_done(self, name: str, path):
        self._pending.discard(name)
        if path:
            self.icon_ready.emit(name, QIcon(path))
        else:
            # one attempt per session
            self._failed.add(name)

    def shutdown(self) -> None:
        self.pool.waitForDone()
