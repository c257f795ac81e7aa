#===============================================================================
#  Hermes | workers.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Background workers for the app and window catalogs. Results are emitted
#  with the request id they were started for; the receiving side decides
#  whether they are still wanted.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Qt, QThread, Signal, Slot

from .app_catalog import AppCatalog
from .window_catalog import WindowCatalog

logger = logging.getLogger(__name__)


class AppLoadWorker(QObject):
    loaded = Signal(int, object, bool)   # request id, List[AppInfo], is_final
    finished = Signal()

    def __init__(self, catalog: AppCatalog, request_id: int):
        super().__init__()
        self.catalog = catalog
        self.request_id = request_id

    @Slot()
    def run(self):
        delivered = False
        try:
            for apps, final in self.catalog.iter_apps():
                self.loaded.emit(self.request_id, apps, final)
                delivered = True
        except Exception:
            logger.exception("App catalog load failed")
            if not delivered:
                self.loaded.emit(self.request_id, [], True)
        finally:
            self.finished.emit()


class WindowQueryWorker(QObject):
    loaded = Signal(int, object)         # request id, List[WindowInfo]
    finished = Signal()

    def __init__(self, catalog: WindowCatalog, request_id: int):
        super().__init__()
        self.catalog = catalog
        self.request_id = request_id

    @Slot()
    def run(self):
        try:
            windows = self.catalog.query_windows()
        except Exception:
            logger.exception("Window query failed")
            windows = []
        self.loaded.emit(self.request_id, windows)
        self.finished.emit()


def start_worker(worker: QObject) -> QThread:
    """Move ``worker`` to a fresh thread and start it. Caller keeps both alive.

    The thread stops itself once the worker finishes, without needing the GUI
    event loop, so ``thread.wait()`` is enough to join it.
    """
    thread = QThread()
    worker.moveToThread(thread)
    thread.started.connect(worker.run)
    worker.finished.connect(thread.quit, Qt.DirectConnection)
    worker.finished.connect(worker.deleteLater)
    thread.finished.connect(thread.deleteLater)
    thread.start()
    return thread
