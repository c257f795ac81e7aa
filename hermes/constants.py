#===============================================================================
#  Hermes | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Central place for panel sizing, command-file conventions and the fixed
#  markers understood by the loader, resolver and dispatcher.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

APP_TITLE = "Hermes"
SETTINGS_ENV_VAR = "HERMES_SETTINGS"
SETTINGS_FILE_NAME = "settings.json"
COMMANDS_FILE_NAME = "commands.json"
LOG_FILE_NAME = "hermes.log"

# --- Command file format ---
META_PREFIX = "_"
DESC_FIELD = "_desc"
DEFAULT_SUBMENU_TITLE = "+"
GENERATOR_PREFIX = "generator:"
COMPUTED_TITLE_PREFIX = "#!fish:"
UNRESOLVED_TITLE = "(?)"

# --- Generators ---
RUNNING_GLYPH = "●"
STOPPED_GLYPH = "○"
SNIPPET_HEADER_PATTERN = r"^([^:]+):(.*)$"
SNIPPET_TRIGGER_PATTERN = r"\[([^\]]+)\]\s*$"
WORKSPACE_EXTENSION = ".vpc"

# --- Apps / icons ---
APP_BUNDLE_SUFFIX = ".app"
ICON_SOURCE_SUFFIX = ".icns"
ICON_SIZE_PX = 96
LAST_USED_ATTRIBUTE = "kMDItemLastUsedDate"
RECENCY_WORKERS = 8

# --- Navigation ---
MAX_SEARCH_RESULTS = 30
MAX_APPS_VISIBLE = 18
BREADCRUMB_SEPARATOR = " > "
SEARCH_KEY = ":"
APP_MODE_KEY = "a"
WINDOW_MODE_KEY = "w"
FOCUS_DELAY_MS = 50

# Commands matching any of these need a visible terminal session.
INTERACTIVE_PATTERNS = [
    r"^n?vim\s",
    r"^v\s",
    r"^v$",
    r"&&\s*v$",
    r"&&\s*v\s",
    r"^htop",
    r"^less\s",
    r"^man\s",
    r"^cmus",
    r"^ytdl$",
    r"^ytdl\s",
]

# --- Panel ---
PANEL_WIDTH = 780
PANEL_HEIGHT = 480
PANEL_BG = "#1a1a2e"
PANEL_ITEM_BG = "#16213e"
PANEL_ACCENT = "#00d4ff"
PANEL_TEXT = "#eeeeee"
PANEL_TEXT_DIM = "#888888"
PANEL_SUBMENU_TEXT = "#e8b84a"
