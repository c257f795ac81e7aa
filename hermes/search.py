#===============================================================================
#  Hermes | search.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Substring search over the flattened command tree.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import List, Sequence

from .constants import MAX_SEARCH_RESULTS
from .loader import flatten
from .models import CommandTree, FlatCommand


def matches(cmd: FlatCommand, query: str) -> bool:
    """``query`` must already be lower-cased."""
    if query in cmd.label.lower():
        return True
    return any(query in segment.lower() for segment in cmd.path)


class SearchIndex:
    def __init__(self, commands: Sequence[FlatCommand]):
        self.commands: List[FlatCommand] = list(commands)

    @classmethod
    def from_tree(cls, tree: CommandTree) -> "SearchIndex":
        return cls(flatten(tree))

    def __len__(self) -> int:
        return len(self.commands)

    def search(self, query: str, limit: int = MAX_SEARCH_RESULTS) -> List[FlatCommand]:
        q = query.lower()
        if not q:
            return []
        results: List[FlatCommand] = []
        for cmd in self.commands:
            if matches(cmd, q):
                results.append(cmd)
                if len(results) >= limit:
                    break
        return results
