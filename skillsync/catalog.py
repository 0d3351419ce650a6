"""Skill catalog loading from sources, global tool installs and project-local dirs."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from .errors import HomeDirMissingError
from .loader import load_installed_skill, load_source_skill
from .tools import SystemPaths, Tool, display_path, global_skills_dir
from .types import InstalledSkill, SourceSkill

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .diagnostics import Diagnostics
    from .tools import PathProvider


def _empty_tool_index() -> dict[Tool, dict[str, InstalledSkill]]:
    return {tool: {} for tool in Tool}


class Catalog(BaseModel):
    """Name-keyed indexes of every skill visible to one command run."""

    sources: dict[str, SourceSkill] = Field(default_factory=dict)
    tools: dict[Tool, dict[str, InstalledSkill]] = Field(default_factory=_empty_tool_index)
    local: dict[Tool, dict[str, InstalledSkill]] = Field(default_factory=_empty_tool_index)
    conflicts: dict[str, list[Path]] = Field(default_factory=dict)

    def tool_skill(self, tool: Tool, name: str) -> InstalledSkill | None:
        return self.tools.get(tool, {}).get(name)

    def local_skill(self, tool: Tool, name: str) -> InstalledSkill | None:
        return self.local.get(tool, {}).get(name)

    def installed_names(self) -> list[str]:
        """Sorted names present in any global tool index."""
        return sorted({name for skills in self.tools.values() for name in skills})

    def local_names(self) -> list[str]:
        return sorted({name for skills in self.local.values() for name in skills})


def load_catalog(
    source_roots: Iterable[Path],
    diagnostics: Diagnostics,
    paths: PathProvider | None = None,
) -> Catalog:
    """Load source skills, global tool installs and local project skills."""
    paths = paths or SystemPaths()
    sources, conflicts = load_sources(source_roots, diagnostics, paths)
    return Catalog(
        sources=sources,
        tools=load_tools(diagnostics, paths),
        local=load_local_skills(diagnostics, paths),
        conflicts=conflicts,
    )


def load_sources(
    source_roots: Iterable[Path],
    diagnostics: Diagnostics,
    paths: PathProvider,
) -> tuple[dict[str, SourceSkill], dict[str, list[Path]]]:
    """Load source skills; the first root to define a name wins."""
    skills: dict[str, SourceSkill] = {}
    conflicts: dict[str, list[Path]] = {}

    for source_root in source_roots:
        entries = _read_source_directory(source_root, diagnostics)
        if entries is None:
            continue

        for skill_dir in entries:
            skill = load_source_skill(source_root, skill_dir, diagnostics)
            if skill is None:
                continue

            existing = skills.get(skill.name)
            if existing is not None:
                conflicts.setdefault(skill.name, [existing.skill_dir]).append(skill.skill_dir)
                continue

            skills[skill.name] = skill

    for name, dirs in conflicts.items():
        primary = skills[name]
        diagnostics.warn(
            f"skill '{name}' exists in multiple sources, using {display_path(primary.source_root, paths)}",
            skill=name,
        )
        for skill_dir in dirs:
            diagnostics.note(f"  - {display_path(skill_dir, paths)}")

    return skills, conflicts


def load_tools(diagnostics: Diagnostics, paths: PathProvider) -> dict[Tool, dict[str, InstalledSkill]]:
    """Load globally installed skills for every supported tool."""
    tools = _empty_tool_index()

    for tool in Tool:
        try:
            tool_dir = global_skills_dir(tool, paths)
        except HomeDirMissingError as err:
            diagnostics.warn(str(err), tool=tool.id)
            continue

        for skill_dir in _read_tool_directory(tool_dir, diagnostics):
            skill = load_installed_skill(skill_dir, tool, diagnostics, origin="global")
            if skill is not None and skill.name not in tools[tool]:
                tools[tool][skill.name] = skill

    return tools


def load_local_skills(diagnostics: Diagnostics, paths: PathProvider) -> dict[Tool, dict[str, InstalledSkill]]:
    """Load project-local skills relative to the working directory."""
    local = _empty_tool_index()

    try:
        cwd = paths.cwd()
    except OSError as err:
        diagnostics.warn(f"failed to get current directory: {err}")
        return local

    for tool in Tool:
        for skill_dir in _list_sorted(cwd / tool.skills_subdir):
            skill = load_installed_skill(skill_dir, tool, diagnostics, origin="local")
            if skill is not None and skill.name not in local[tool]:
                local[tool][skill.name] = skill

    return local


def _list_sorted(path: Path) -> list[Path]:
    # A project without local skills is the common case, so failures are silent.
    try:
        return sorted(path.iterdir(), key=lambda entry: entry.name)
    except OSError:
        return []


def _read_source_directory(path: Path, diagnostics: Diagnostics) -> list[Path] | None:
    try:
        return sorted(path.iterdir(), key=lambda entry: entry.name)
    except FileNotFoundError:
        diagnostics.warn(f"source directory not found: {path}")
        return None
    except OSError as err:
        diagnostics.warn(f"failed to read directory {path}: {err}")
        return None


def _read_tool_directory(path: Path, diagnostics: Diagnostics) -> list[Path]:
    try:
        return sorted(path.iterdir(), key=lambda entry: entry.name)
    except FileNotFoundError:
        return []
    except OSError as err:
        diagnostics.warn(f"failed to read directory {path}: {err}")
        return []
