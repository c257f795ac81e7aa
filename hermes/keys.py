#===============================================================================
#  Hermes | keys.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Single-character shortcut assignment for generated menu entries.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import string
from typing import Optional, Set


def assign_key(name: str, used: Set[str]) -> Optional[str]:
    """Pick the first free alphanumeric character of ``name`` as its key.

    Falls back to the digits 0-9. The chosen key is added to ``used``.
    Returns None when nothing is left.
    """
    for ch in name.lower():
        if ch.isalnum() and ch not in used:
            used.add(ch)
            return ch
    for ch in string.digits:
        if ch not in used:
            used.add(ch)
            return ch
    return None
