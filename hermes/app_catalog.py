#===============================================================================
#  Hermes | app_catalog.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Installed-application discovery: directory scan, on-disk cache, last-used
#  recency ranking and icon extraction into the icon cache.
#
#  Delivery order
#  --------------
#    1) cached list (if any)                        -> not final
#    2) fresh scan, only when there was no cache    -> not final
#    3) recency-sorted copy of what was delivered   -> final (also cached)
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .constants import (
    APP_BUNDLE_SUFFIX,
    ICON_SIZE_PX,
    ICON_SOURCE_SUFFIX,
    LAST_USED_ATTRIBUTE,
    RECENCY_WORKERS,
)
from .models import AppInfo
from .process import ProcessExecutor

logger = logging.getLogger(__name__)

LAST_USED_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")


def sanitize_app_name(name: str) -> str:
    return name.replace("/", "_").replace(" ", "_")


def sort_by_recency(apps: List[AppInfo]) -> List[AppInfo]:
    """Recently used first (newest on top), never-used after, alphabetically."""
    used = sorted((a for a in apps if a.last_used is not None), key=lambda a: a.last_used, reverse=True)
    unused = sorted((a for a in apps if a.last_used is None), key=lambda a: a.name.lower())
    return used + unused


def parse_last_used(output: str) -> Optional[float]:
    if not output or "(null)" in output:
        return None
    m = LAST_USED_RE.search(output)
    if not m:
        return None
    try:
        dt = datetime.strptime(m.group(0), "%Y-%m-%d %H:%M:%S").replace(tzinfo=timezone.utc)
    except ValueError:
        return None
    return dt.timestamp()


class AppCatalog:
    def __init__(self, executor: ProcessExecutor, settings: Dict[str, Any]):
        self.executor = executor
        self.app_dirs = [Path(d).expanduser() for d in settings["app_dirs"]]
        self.cache_file = Path(settings["app_cache_file"]).expanduser()
        self.icon_cache_dir = Path(settings["icon_cache_dir"]).expanduser()
        self.metadata_tool = settings["metadata_tool"]
        self.icon_converter = settings["icon_converter"]

    # ----------------------------
    # Scan
    # ----------------------------
    def icon_path(self, name: str) -> Path:
        return self.icon_cache_dir / f"{sanitize_app_name(name)}.png"

    def scan_apps(self) -> List[AppInfo]:
        """Scan every app directory. The first directory wins on duplicate names."""
        apps: List[AppInfo] = []
        seen = set()
        for app_dir in self.app_dirs:
            try:
                entries = sorted(app_dir.iterdir(), key=lambda p: p.name.lower())
            except OSError:
                continue
            for item in entries:
                if not item.name.endswith(APP_BUNDLE_SUFFIX):
                    continue
                name = item.name[: -len(APP_BUNDLE_SUFFIX)]
                if name in seen:
                    continue
                seen.add(name)
                apps.append(AppInfo(name=name, path=str(item), icon=str(self.icon_path(name))))

        apps.sort(key=lambda a: a.name.lower())
        return apps

    # ----------------------------
    # Cache
    # ----------------------------
    def load_cache(self) -> Optional[List[AppInfo]]:
        if not self.cache_file.exists():
            return None
        try:
            data = json.loads(self.cache_file.read_text(encoding="utf-8"))
            return [AppInfo.from_dict(d) for d in data]
        except Exception:
            logger.warning("App cache unreadable: %s", self.cache_file, exc_info=True)
            return None

    def save_cache(self, apps: List[AppInfo]) -> None:
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            self.cache_file.write_text(json.dumps([a.to_dict() for a in apps], indent=2), encoding="utf-8")
        except OSError:
            logger.warning("Could not write app cache: %s", self.cache_file, exc_info=True)

    # ----------------------------
    # Recency
    # ----------------------------
    def query_last_used(self, path: str) -> Optional[float]:
        output = self.executor.run_sync(self.metadata_tool, ["-name", LAST_USED_ATTRIBUTE, path])
        return parse_last_used(output)

    def refresh_recency(self, apps: List[AppInfo]) -> List[AppInfo]:
        """Query last-used timestamps in parallel, re-rank and persist."""
        with ThreadPoolExecutor(max_workers=RECENCY_WORKERS) as pool:
            stamps = list(pool.map(self.query_last_used, [a.path for a in apps]))
        updated = [replace(app, last_used=ts) for app, ts in zip(apps, stamps)]
        ranked = sort_by_recency(updated)
        self.save_cache(ranked)
        return ranked

    def iter_apps(self) -> Iterator[Tuple[List[AppInfo], bool]]:
        """Yield (apps, is_final) in delivery order. Meant for a worker thread."""
        cached = self.load_cache()
        if cached is not None:
            yield cached, False

        scanned = self.scan_apps()
        delivered = cached if cached is not None else scanned
        if cached is None:
            yield scanned, False

        yield self.refresh_recency(delivered), True

    # ----------------------------
    # Icons
    # ----------------------------
    def find_icon_source(self, app: AppInfo) -> Optional[Path]:
        resources = Path(app.path) / "Contents" / "Resources"
        try:
            for item in sorted(resources.iterdir()):
                if item.name.endswith(ICON_SOURCE_SUFFIX):
                    return item
        except OSError:
            return None
        return None

    def extract_icon(self, app: AppInfo) -> Optional[Path]:
        """Convert the bundle's icon into the icon cache. Skips work if already cached."""
        target = self.icon_path(app.name)
        if target.exists():
            return target

        source = self.find_icon_source(app)
        if source is None:
            return None

        try:
            self.icon_cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.warning("Could not create icon cache: %s", self.icon_cache_dir, exc_info=True)
            return None
        self.executor.run_sync(self.icon_converter, [
            "-s", "format", "png",
            "-z", str(ICON_SIZE_PX), str(ICON_SIZE_PX),
            str(source), "--out", str(target),
        ])
        if target.exists():
            return target
        logger.info("Icon extraction produced nothing for %s", app.name)
        return None
