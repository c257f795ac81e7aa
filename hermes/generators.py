#===============================================================================
#  Hermes | generators.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Dynamic submenus built from live system state. A command file refers to
#  them as "generator:<name>". Every generator degrades to a small but valid
#  submenu when its data source is missing or broken.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import re
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from .constants import (
    RUNNING_GLYPH,
    SNIPPET_HEADER_PATTERN,
    SNIPPET_TRIGGER_PATTERN,
    STOPPED_GLYPH,
    WORKSPACE_EXTENSION,
)
from .keys import assign_key
from .models import Action, CommandTree, Submenu
from .process import ProcessExecutor

logger = logging.getLogger(__name__)

SNIPPET_HEADER_RE = re.compile(SNIPPET_HEADER_PATTERN)
SNIPPET_TRIGGER_RE = re.compile(SNIPPET_TRIGGER_PATTERN)


@dataclass
class GeneratorContext:
    executor: ProcessExecutor
    settings: Dict[str, Any]
    home: Path = field(default_factory=Path.home)


Generator = Callable[[GeneratorContext], Submenu]

GENERATORS: Dict[str, Generator] = {}


def register_generator(*names: str) -> Callable[[Generator], Generator]:
    def wrap(fn: Generator) -> Generator:
        for name in names:
            GENERATORS[name] = fn
        return fn
    return wrap


def run_generator(name: str, ctx: GeneratorContext) -> Optional[Submenu]:
    """Look up and run a generator. Unknown names give None."""
    fn = GENERATORS.get(name)
    if fn is None:
        logger.warning("Unknown generator '%s'", name)
        return None
    return fn(ctx)


# ----------------------------
# Services
# ----------------------------
def _new_service_action(ctx: GeneratorContext) -> Action:
    return Action("New Service", f"{ctx.settings['service_tool']} create")


def parse_service_list(output: str, marker: str) -> List[Tuple[str, bool]]:
    """Return (name, running) pairs from tab-separated service-list output."""
    services: List[Tuple[str, bool]] = []
    for line in output.splitlines():
        if marker not in line:
            continue
        parts = line.split("\t")
        if len(parts) < 3:
            continue
        name = parts[2].split(marker)[-1]
        if not name:
            continue
        services.append((name, parts[0] != "-"))
    services.sort(key=lambda s: s[0])
    return services


@register_generator("services")
def build_services_menu(ctx: GeneratorContext) -> Submenu:
    tool = ctx.settings["service_tool"]
    items: CommandTree = {}
    try:
        cmd = list(ctx.settings["service_list_command"])
        output = ctx.executor.run_sync(cmd[0], cmd[1:])
        services = parse_service_list(output, ctx.settings["service_marker"])

        used = {"n"}
        for name, running in services:
            key = assign_key(name, used)
            if key is None:
                logger.debug("No key left for service '%s'", name)
                continue
            glyph = RUNNING_GLYPH if running else STOPPED_GLYPH
            items[key] = Submenu(f"{name} {glyph}", {
                "s": Action("Start", f"{tool} start {name}"),
                "t": Action("Stop", f"{tool} stop {name}"),
                "r": Action("Restart", f"{tool} restart {name}"),
                "l": Action("Log", f"{tool} log {name}"),
                "e": Action("Edit", f"{tool} edit {name}"),
            })
    except Exception:
        logger.exception("Services generator failed")
        items = {}

    items["n"] = _new_service_action(ctx)
    return Submenu("+services", items)


# ----------------------------
# Snippets
# ----------------------------
@dataclass(frozen=True)
class Snippet:
    title: str
    content: str
    trigger: Optional[str] = None

    @property
    def display(self) -> str:
        return f"{self.title} [{self.trigger}]" if self.trigger else self.title


def _split_title(raw_title: str) -> Tuple[str, Optional[str]]:
    m = SNIPPET_TRIGGER_RE.search(raw_title)
    if not m:
        return raw_title.strip(), None
    return raw_title[:m.start()].strip(), m.group(1).strip()


def parse_snippets(text: str) -> List[Snippet]:
    """Parse "title [trigger]: content" records with continuation lines."""
    snippets: List[Snippet] = []
    title: Optional[str] = None
    trigger: Optional[str] = None
    content = ""

    for line in text.split("\n"):
        m = SNIPPET_HEADER_RE.match(line)
        if m:
            if title is not None:
                snippets.append(Snippet(title, content.strip(" \t"), trigger))
            title, trigger = _split_title(m.group(1))
            content = m.group(2).strip(" \t")
        elif title is not None and line:
            content += "\n" + line

    if title is not None:
        snippets.append(Snippet(title, content.strip(" \t"), trigger))
    return snippets


def quote_for_shell(text: str, shell: str) -> str:
    """Single-quote ``text`` for ``shell``; fish also reads backslash escapes inside single quotes."""
    if Path(shell).name == "fish":
        return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"
    return shlex.quote(text)


def copy_command(snippet: Snippet, clipboard_tool: str, shell: str = "/bin/sh") -> str:
    return (
        f"echo {quote_for_shell(snippet.content, shell)} | {clipboard_tool}"
        f" && echo {quote_for_shell('Copied: ' + snippet.title, shell)}"
    )


@register_generator("snippets")
def build_snippets_menu(ctx: GeneratorContext) -> Submenu:
    snippets_file = Path(ctx.settings["snippets_file"]).expanduser()
    items: CommandTree = {
        "e": Action("Edit Snippets", f"{ctx.settings['editor']} {shlex.quote(str(snippets_file))}"),
    }

    try:
        text = snippets_file.read_text(encoding="utf-8")
    except OSError:
        logger.info("Snippets file not readable: %s", snippets_file)
        return Submenu("+snippets", items)

    try:
        used = {"e"}
        for snippet in parse_snippets(text):
            key = assign_key(snippet.title, used)
            if key is None:
                logger.debug("No key left for snippet '%s'", snippet.title)
                continue
            command = copy_command(snippet, ctx.settings["clipboard_tool"], ctx.settings["shell"])
            items[key] = Action(snippet.display, command)
    except Exception:
        logger.exception("Snippets generator failed")
        items = {"e": items["e"]}

    return Submenu("+snippets", items)


# ----------------------------
# Workspace files
# ----------------------------
def _no_workspaces() -> Submenu:
    return Submenu("Workspaces", {
        "x": Action("No workspace files found", "echo 'No .vpc files'"),
    })


@register_generator("workspaces", "vpc")
def build_workspaces_menu(ctx: GeneratorContext) -> Submenu:
    workspace_dir = Path(ctx.settings["workspace_dir"]).expanduser()
    script = ctx.settings["workspace_script"]

    try:
        files = sorted(
            (p.name[: -len(WORKSPACE_EXTENSION)], p)
            for p in workspace_dir.iterdir()
            if p.name.endswith(WORKSPACE_EXTENSION)
        )
    except OSError:
        logger.info("Workspace directory not readable: %s", workspace_dir)
        return _no_workspaces()

    items: CommandTree = {}
    used: set = set()
    for name, path in files:
        key = assign_key(name, used)
        if key is None:
            logger.debug("No key left for workspace '%s'", name)
            continue
        items[key] = Action(name, f"{script} {shlex.quote(str(path))}")

    return Submenu("Workspaces", items)
