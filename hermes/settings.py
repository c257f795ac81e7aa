#===============================================================================
#  Hermes | settings.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Load/save of deployment settings: which external tools to call and where
#  the command file, caches and logs live.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict

from .constants import COMMANDS_FILE_NAME, SETTINGS_ENV_VAR, SETTINGS_FILE_NAME

logger = logging.getLogger(__name__)


def config_dir() -> Path:
    return Path.home() / ".config" / "hermes"


def cache_dir() -> Path:
    return Path.home() / ".cache"


def settings_path() -> Path:
    """Settings file location; $HERMES_SETTINGS wins over the default."""
    override = os.environ.get(SETTINGS_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return config_dir() / SETTINGS_FILE_NAME


def default_settings() -> Dict[str, Any]:
    home = Path.home()
    return {
        "commands_file": str(config_dir() / COMMANDS_FILE_NAME),
        "shell": shutil.which("fish") or "/bin/sh",
        "terminal_command": ["/usr/bin/open", "-na", "ghostty", "--args", "-e"],
        "open_tool": "/usr/bin/open",
        "service_list_command": ["/usr/bin/env", "launchctl", "list"],
        "service_marker": "org.hermes.",
        "service_tool": "service",
        "editor": "nvim",
        "clipboard_tool": "pbcopy",
        "snippets_file": str(home / ".config" / "hermes" / "snippets.txt"),
        "workspace_dir": str(home / "dotfiles" / "vpc"),
        "workspace_script": str(home / "dotfiles" / "bin" / "vpc.py"),
        "app_dirs": [
            "/Applications",
            str(home / "Applications"),
            "/System/Applications",
            "/System/Library/CoreServices/Applications",
        ],
        "app_cache_file": str(cache_dir() / "hermes" / "apps.json"),
        "icon_cache_dir": str(cache_dir() / "app-icons"),
        "metadata_tool": "/usr/bin/mdls",
        "icon_converter": "/usr/bin/sips",
        "window_tool": "yabai",
        "process_timeout": 10.0,     # seconds, synchronous calls only
        "log_dir": str(cache_dir() / "hermes" / "logs"),
    }


def load_settings(path: Path) -> Dict[str, Any]:
    """Load settings from disk, filling any missing keys with defaults."""
    d = default_settings()
    if not path.exists():
        return d
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("settings root must be an object")
        for k in d:
            if k not in data:
                data[k] = d[k]
        return data
    except Exception:
        logger.warning("Unreadable settings file %s, using defaults", path, exc_info=True)
        return d


def save_settings(path: Path, settings: Dict[str, Any]) -> None:
    """Persist settings to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2), encoding="utf-8")
