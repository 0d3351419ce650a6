"""Shared fixtures for skill sync tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from skillsync.catalog import load_catalog
from skillsync.diagnostics import Diagnostics
from skillsync.prompts import Decision

if TYPE_CHECKING:
    from pathlib import Path

    from skillsync.catalog import Catalog
    from skillsync.tools import Tool

T0 = 1_700_000_000.0
T1 = T0 + 3600
T2 = T0 + 7200


class FakePaths:
    """PathProvider rooted in a temporary directory."""

    def __init__(self, home: Path, project: Path) -> None:
        self.home = home
        self.project = project

    def home_dir(self) -> Path:
        return self.home

    def cwd(self) -> Path:
        return self.project


class ScriptedConfirm:
    """Confirm callback that replays a fixed list of decisions."""

    def __init__(self, *decisions: Decision) -> None:
        self.decisions = list(decisions)
        self.messages: list[str] = []

    def __call__(self, message: str) -> Decision:
        self.messages.append(message)
        return self.decisions.pop(0)


@pytest.fixture()
def paths(tmp_path: Path) -> FakePaths:
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    return FakePaths(home, project)


@pytest.fixture()
def source_root(paths: FakePaths) -> Path:
    root = paths.home / "skills"
    root.mkdir()
    return root


@pytest.fixture()
def diagnostics() -> Diagnostics:
    return Diagnostics()


def skill_content(name: str, body: str = "Body.\n", description: str = "A test skill") -> str:
    """Build a SKILL.md document with frontmatter."""
    return f"---\nname: {name}\ndescription: {description}\n---\n\n{body}"


def write_skill(parent: Path, name: str, content: str | None = None, mtime: float | None = None) -> Path:
    """Write ``parent/name/SKILL.md``, optionally pinning its modification time."""
    skill_dir = parent / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    skill_path = skill_dir / "SKILL.md"
    skill_path.write_bytes((content if content is not None else skill_content(name)).encode("utf-8"))
    if mtime is not None:
        set_mtime(skill_path, mtime)
    return skill_path


def set_mtime(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


def tool_dir(paths: FakePaths, tool: Tool) -> Path:
    """Global install directory for a tool under the fake home."""
    return paths.home / f".{tool.id}" / "skills"


def local_dir(paths: FakePaths, tool: Tool) -> Path:
    """Project-local skills directory for a tool under the fake project."""
    return paths.project / f".{tool.id}" / "skills"


def reload(sources: list[Path], paths: FakePaths, diagnostics: Diagnostics | None = None) -> Catalog:
    return load_catalog(sources, diagnostics or Diagnostics(), paths)
