#===============================================================================
#  Hermes | loader.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Parses the JSON command file into a command tree and flattens a tree into
#  search records.
#
#  Command file format
#  -------------------
#    "k": ["Title", "shell command"]          -> action
#    "k": ["Title", ["prog", "arg", ...]]     -> action (argv joined by spaces)
#    "k": {"_desc": "Title", ...children}     -> submenu (dropped when empty)
#    "k": "generator:<name>"                  -> dynamic submenu
#    "_anything": ...                         -> metadata, ignored
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .constants import DEFAULT_SUBMENU_TITLE, DESC_FIELD, GENERATOR_PREFIX, META_PREFIX
from .generators import GeneratorContext, run_generator
from .models import Action, CommandEntry, CommandTree, FlatCommand, Submenu

logger = logging.getLogger(__name__)


def load_config(path: Path) -> Dict[str, Any]:
    """Read the command file. Missing or malformed files give an empty mapping."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("Command file not found: %s", path)
        return {}
    except Exception:
        logger.exception("Command file unreadable: %s", path)
        return {}
    if not isinstance(data, dict):
        logger.error("Command file root is not an object: %s", path)
        return {}
    return data


def parse_menu(raw: Dict[str, Any], ctx: GeneratorContext) -> CommandTree:
    result: CommandTree = {}
    seen = set()
    for key, value in raw.items():
        if key.startswith(META_PREFIX):
            continue
        if key.lower() in seen:
            logger.warning("Duplicate key '%s' ignored (keys are case-insensitive)", key)
            continue
        entry = parse_entry(value, ctx)
        if entry is not None:
            result[key] = entry
            seen.add(key.lower())
    return result


def parse_entry(value: Any, ctx: GeneratorContext) -> Optional[CommandEntry]:
    if isinstance(value, list):
        if len(value) < 2 or not isinstance(value[0], str):
            return None
        title, cmd = value[0], value[1]
        if isinstance(cmd, str):
            return Action(title, cmd)
        if isinstance(cmd, list) and all(isinstance(a, str) for a in cmd):
            return Action(title, " ".join(cmd))
        return None

    if isinstance(value, dict):
        desc = value.get(DESC_FIELD)
        children = parse_menu(value, ctx)
        if not children:
            return None
        return Submenu(desc if isinstance(desc, str) else DEFAULT_SUBMENU_TITLE, children)

    if isinstance(value, str) and value.startswith(GENERATOR_PREFIX):
        return run_generator(value[len(GENERATOR_PREFIX):], ctx)

    return None


def load(raw: Dict[str, Any], ctx: GeneratorContext) -> CommandTree:
    return parse_menu(raw, ctx)


def flatten(tree: CommandTree, path: Sequence[str] = ()) -> List[FlatCommand]:
    """Depth-first list of every action with the titles of its ancestor submenus."""
    results: List[FlatCommand] = []
    for key, entry in tree.items():
        if isinstance(entry, Action):
            results.append(FlatCommand(key, entry.title, entry.command, tuple(path)))
        else:
            results.extend(flatten(entry.children, (*path, entry.title)))
    return results
