#===============================================================================
#  Hermes | process.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  The only place that spawns processes. Everything else talks to external
#  tools through ProcessExecutor so it can be swapped out in tests.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


class ProcessExecutor:
    """Run a program synchronously (capturing stdout) or detached."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run_sync(self, program: str, args: Sequence[str]) -> str:
        """Run and return stdout. Any failure yields an empty string."""
        cmd: List[str] = [program, *args]
        try:
            p = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Timed out after %ss: %s", self.timeout, " ".join(cmd))
            return ""
        except Exception:
            logger.warning("Failed to run: %s", " ".join(cmd), exc_info=True)
            return ""
        return p.stdout or ""

    def spawn(self, program: str, args: Sequence[str]) -> bool:
        """Start a detached process with output discarded. Returns False if it could not start."""
        cmd: List[str] = [program, *args]
        try:
            subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
                start_new_session=True,
            )
        except Exception:
            logger.warning("Failed to spawn: %s", " ".join(cmd), exc_info=True)
            return False
        logger.info("Spawned: %s", " ".join(cmd))
        return True
