#===============================================================================
#  Hermes | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Shared data models: the command tree, its flattened search projection,
#  installed applications and open windows.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class Action:
    """Leaf of the command tree."""
    title: str
    command: str


@dataclass(frozen=True)
class Submenu:
    """Interior node; owns its children exclusively."""
    title: str
    children: Dict[str, "CommandEntry"] = field(default_factory=dict)


CommandEntry = Union[Action, Submenu]
CommandTree = Dict[str, CommandEntry]


@dataclass(frozen=True)
class FlatCommand:
    key: str
    label: str
    command: str
    path: Tuple[str, ...] = ()


@dataclass
class AppInfo:
    """An installed application bundle. Identity is the name."""
    name: str
    path: str
    icon: Optional[str] = None
    last_used: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        # on-disk cache keys
        return {
            "name": self.name,
            "path": self.path,
            "icon": self.icon,
            "lastUsed": self.last_used,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppInfo":
        last_used = data.get("lastUsed")
        return cls(
            name=str(data["name"]),
            path=str(data["path"]),
            icon=data.get("icon"),
            last_used=float(last_used) if last_used is not None else None,
        )


@dataclass(frozen=True)
class WindowInfo:
    id: int
    title: str
    app: str
    space: int
