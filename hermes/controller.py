#===============================================================================
#  Hermes | controller.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Glue between the navigation machine and the outside world. Feeds events in,
#  carries out the returned effects and routes background results back in as
#  events on the GUI thread.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from typing import List, Tuple

from PySide6.QtCore import QObject, QThread, QTimer, Signal, Slot

from .app_catalog import AppCatalog
from .constants import FOCUS_DELAY_MS
from .dispatcher import Dispatcher
from .navigation import (
    AppsLoaded,
    ClosePanel,
    Effect,
    Event,
    ExecuteCommand,
    FocusWindow,
    LaunchApp,
    LoadApps,
    NavigationMachine,
    NavigationState,
    QueryWindows,
    Show,
    WindowsLoaded,
)
from .window_catalog import WindowCatalog
from .workers import AppLoadWorker, WindowQueryWorker, start_worker

logger = logging.getLogger(__name__)


class PanelController(QObject):
    state_changed = Signal()
    close_requested = Signal()

    def __init__(
        self,
        machine: NavigationMachine,
        dispatcher: Dispatcher,
        app_catalog: AppCatalog,
        window_catalog: WindowCatalog,
        parent=None,
    ):
        super().__init__(parent)
        self.machine = machine
        self.dispatcher = dispatcher
        self.app_catalog = app_catalog
        self.window_catalog = window_catalog
        self._jobs: List[Tuple[QThread, QObject]] = []

    @property
    def state(self) -> NavigationState:
        return self.machine.state

    def show(self) -> None:
        self.handle(Show())

    def handle(self, event: Event) -> None:
        effects = self.machine.handle(event)
        self.state_changed.emit()
        for effect in effects:
            self.run_effect(effect)

    def run_effect(self, effect: Effect) -> None:
        if isinstance(effect, ExecuteCommand):
            self.dispatcher.execute(effect.command)
        elif isinstance(effect, LaunchApp):
            self.dispatcher.launch_app(effect.name)
        elif isinstance(effect, FocusWindow):
            window_id = effect.window_id
            # let the panel give up focus first
            QTimer.singleShot(FOCUS_DELAY_MS, lambda: self.window_catalog.focus_window(window_id))
        elif isinstance(effect, ClosePanel):
            self.close_requested.emit()
        elif isinstance(effect, LoadApps):
            worker = AppLoadWorker(self.app_catalog, effect.request_id)
            worker.loaded.connect(self._on_apps_loaded)
            self._track(worker)
        elif isinstance(effect, QueryWindows):
            worker = WindowQueryWorker(self.window_catalog, effect.request_id)
            worker.loaded.connect(self._on_windows_loaded)
            self._track(worker)
        else:
            raise TypeError(f"Unknown effect: {effect!r}")

    def _track(self, worker: QObject) -> None:
        thread = start_worker(worker)
        job = (thread, worker)
        self._jobs.append(job)
        thread.finished.connect(lambda: self._jobs.remove(job) if job in self._jobs else None)

    def shutdown(self) -> None:
        """Block until every background job has finished, e.g. before the app quits."""
        for thread, _ in list(self._jobs):
            try:
                if thread.isRunning():
                    logger.info("Waiting for background job before exit")
                    thread.wait()
            except RuntimeError:
                # already collected through deleteLater
                continue
        self._jobs.clear()

    @Slot(int, object, bool)
    def _on_apps_loaded(self, request_id: int, apps, final: bool):
        logger.info("Apps delivered: request=%s count=%s final=%s", request_id, len(apps), final)
        self.handle(AppsLoaded(request_id, list(apps), final))

    @Slot(int, object)
    def _on_windows_loaded(self, request_id: int, windows):
        logger.info("Windows delivered: request=%s count=%s", request_id, len(windows))
        self.handle(WindowsLoaded(request_id, list(windows)))
