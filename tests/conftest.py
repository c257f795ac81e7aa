from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple, Union

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from hermes.generators import GeneratorContext  # noqa: E402
from hermes.settings import default_settings  # noqa: E402

Output = Union[str, Callable[[List[str]], str]]


class FakeExecutor:
    """Records calls; returns canned stdout per program."""

    def __init__(self, outputs: Dict[str, Output] = None):
        self.outputs = outputs or {}
        self.calls: List[Tuple[str, List[str]]] = []
        self.spawned: List[Tuple[str, List[str]]] = []

    def run_sync(self, program: str, args) -> str:
        args = list(args)
        self.calls.append((program, args))
        out = self.outputs.get(program, "")
        return out(args) if callable(out) else out

    def spawn(self, program: str, args) -> bool:
        self.spawned.append((program, list(args)))
        return True


@pytest.fixture()
def settings(tmp_path: Path) -> Dict[str, Any]:
    s = default_settings()
    s.update({
        "shell": "/bin/sh",
        "terminal_command": ["term", "-e"],
        "open_tool": "open",
        "service_list_command": ["launchctl", "list"],
        "service_marker": "org.test.",
        "service_tool": "service",
        "editor": "nvim",
        "clipboard_tool": "pbcopy",
        "snippets_file": str(tmp_path / "snippets.txt"),
        "workspace_dir": str(tmp_path / "vpc"),
        "workspace_script": "/opt/vpc.py",
        "app_dirs": [str(tmp_path / "Applications"), str(tmp_path / "System")],
        "app_cache_file": str(tmp_path / "cache" / "apps.json"),
        "icon_cache_dir": str(tmp_path / "icons"),
        "metadata_tool": "mdls",
        "icon_converter": "sips",
        "window_tool": "yabai",
        "log_dir": str(tmp_path / "logs"),
    })
    return s


@pytest.fixture()
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture()
def ctx(executor: FakeExecutor, settings: Dict[str, Any], tmp_path: Path) -> GeneratorContext:
    return GeneratorContext(executor=executor, settings=settings, home=tmp_path)


@pytest.fixture(scope="session")
def qapp():
    widgets = pytest.importorskip("PySide6.QtWidgets")
    return widgets.QApplication.instance() or widgets.QApplication([])
