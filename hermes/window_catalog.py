#===============================================================================
#  Hermes | window_catalog.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Open-window listing and focusing through the external window manager CLI.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from .models import WindowInfo
from .process import ProcessExecutor

logger = logging.getLogger(__name__)


def parse_windows(output: str) -> List[WindowInfo]:
    """Keep titled windows that are visible or not minimized. Bad input gives []."""
    try:
        data = json.loads(output)
    except ValueError:
        logger.warning("Window query returned unparseable output")
        return []
    if not isinstance(data, list):
        return []

    windows: List[WindowInfo] = []
    for win in data:
        if not isinstance(win, dict):
            continue
        title = win.get("title") or ""
        visible = bool(win.get("is-visible", False))
        minimized = bool(win.get("is-minimized", False))
        if not title or not (visible or not minimized):
            continue
        try:
            windows.append(WindowInfo(
                id=int(win.get("id") or 0),
                title=str(title),
                app=str(win.get("app") or ""),
                space=int(win.get("space") or 0),
            ))
        except (TypeError, ValueError):
            continue
    return windows


class WindowCatalog:
    def __init__(self, executor: ProcessExecutor, settings: Dict[str, Any]):
        self.executor = executor
        self.window_tool = settings["window_tool"]

    def query_windows(self) -> List[WindowInfo]:
        output = self.executor.run_sync(self.window_tool, ["-m", "query", "--windows"])
        return parse_windows(output)

    def focus_window(self, window_id: int) -> None:
        self.executor.spawn(self.window_tool, ["-m", "window", "--focus", str(window_id)])
