"""Promote project-local skills into a tool's global install directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import AmbiguousLocalSkillError, LocalSkillNotFoundError, SkillExistsError
from .fs_utils import move_dir
from .logger import logger
from .tools import SystemPaths, Tool, global_skills_dir

if TYPE_CHECKING:
    from pathlib import Path

    from .catalog import Catalog
    from .tools import PathProvider
    from .types import InstalledSkill


def find_local_skills(catalog: Catalog, name: str, tool: Tool | None = None) -> list[InstalledSkill]:
    matches = []
    for candidate in Tool:
        if tool is not None and candidate != tool:
            continue
        skill = catalog.local_skill(candidate, name)
        if skill is not None:
            matches.append(skill)
    return matches


def promote_skill(
    catalog: Catalog,
    name: str,
    tool: Tool | None = None,
    dry_run: bool = False,
    force: bool = False,
    paths: PathProvider | None = None,
) -> list[tuple[InstalledSkill, Path]]:
    """Move a local skill to ``<home>/.<tool>/skills/<name>``.

    Returns the (local skill, destination) pairs that were (or, on a dry run,
    would be) moved.
    """
    paths = paths or SystemPaths()
    matches = find_local_skills(catalog, name, tool)
    if not matches:
        raise LocalSkillNotFoundError(name)
    if len(matches) > 1 and tool is None:
        raise AmbiguousLocalSkillError(name)

    moved = []
    for skill in matches:
        destination = global_skills_dir(skill.tool, paths) / skill.name
        if destination.exists() and not force:
            raise SkillExistsError(skill.name, destination)

        if not dry_run:
            move_dir(skill.skill_dir, destination, replace=force)
            logger.info("Promoted skill", skill=skill.name, tool=skill.tool.id, dest=str(destination))
        moved.append((skill, destination))

    return moved
