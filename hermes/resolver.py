#===============================================================================
#  Hermes | resolver.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Computed titles ("#!fish:<command>") are replaced by the command's output.
#  Runs once at startup and blocks while each command runs.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from .constants import COMPUTED_TITLE_PREFIX, UNRESOLVED_TITLE
from .models import Action, CommandEntry, CommandTree, Submenu
from .process import ProcessExecutor


def resolve_title(title: str, executor: ProcessExecutor, shell: str) -> str:
    if not title.startswith(COMPUTED_TITLE_PREFIX):
        return title
    cmd = title[len(COMPUTED_TITLE_PREFIX):]
    output = executor.run_sync(shell, ["-c", cmd]).strip()
    return output or UNRESOLVED_TITLE


def resolve_entry(entry: CommandEntry, executor: ProcessExecutor, shell: str) -> CommandEntry:
    title = resolve_title(entry.title, executor, shell)
    if isinstance(entry, Action):
        return Action(title, entry.command)
    return Submenu(title, resolve(entry.children, executor, shell))


def resolve(tree: CommandTree, executor: ProcessExecutor, shell: str) -> CommandTree:
    return {key: resolve_entry(entry, executor, shell) for key, entry in tree.items()}
