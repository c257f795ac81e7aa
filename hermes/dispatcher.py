#===============================================================================
#  Hermes | dispatcher.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Runs a selected command. Interactive programs (editors, pagers, players)
#  get a terminal window; everything else runs detached in the background.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Pattern, Sequence

from .constants import INTERACTIVE_PATTERNS
from .process import ProcessExecutor

logger = logging.getLogger(__name__)


def compile_patterns(patterns: Sequence[str]) -> List[Pattern[str]]:
    return [re.compile(p) for p in patterns]


class Dispatcher:
    def __init__(
        self,
        executor: ProcessExecutor,
        settings: Dict[str, Any],
        patterns: Optional[Sequence[str]] = None,
    ):
        self.executor = executor
        self.shell = settings["shell"]
        self.terminal_command = list(settings["terminal_command"])
        self.open_tool = settings["open_tool"]
        self.patterns = compile_patterns(INTERACTIVE_PATTERNS if patterns is None else patterns)

    def needs_terminal(self, command: str) -> bool:
        return any(p.search(command) for p in self.patterns)

    def execute(self, command: str) -> None:
        if self.needs_terminal(command):
            self.execute_interactive(command)
        else:
            self.execute_background(command)

    def execute_interactive(self, command: str) -> None:
        logger.info("Interactive: %s", command)
        program, *args = self.terminal_command
        self.executor.spawn(program, [*args, self.shell, "-c", command])

    def execute_background(self, command: str) -> None:
        logger.info("Background: %s", command)
        self.executor.spawn(self.shell, ["-c", command])

    def launch_app(self, name: str) -> None:
        logger.info("Launch app: %s", name)
        self.executor.spawn(self.open_tool, ["-a", name])
