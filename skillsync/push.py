"""Push source skills into tool install directories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import SkillNotFoundError, TemplateRenderError
from .fs_utils import write_skill_file
from .logger import logger
from .prompts import require
from .render import render_template
from .status import contents_match
from .tools import SystemPaths, Tool, global_skills_dir
from .types import PushOutcome, PushStatus

if TYPE_CHECKING:
    from .catalog import Catalog
    from .diagnostics import Diagnostics
    from .prompts import ConfirmCallback
    from .tools import PathProvider
    from .types import SourceSkill


def select_skills(catalog: Catalog, names: list[str] | None) -> list[SourceSkill]:
    """Resolve requested names (all sources when empty), sorted case-insensitively."""
    if names:
        missing = [name for name in names if name not in catalog.sources]
        if missing:
            raise SkillNotFoundError(missing[0])
        skills = [catalog.sources[name] for name in dict.fromkeys(names)]
    else:
        skills = [catalog.sources[name] for name in sorted(catalog.sources)]
    return sorted(skills, key=lambda skill: skill.name.lower())


def push_status(rendered: str, existing: str | None) -> PushStatus:
    if existing is None:
        return PushStatus.NEW
    if contents_match(rendered, existing):
        return PushStatus.UNCHANGED
    return PushStatus.MODIFIED


def push_skill(
    catalog: Catalog,
    skill: SourceSkill,
    tool: Tool,
    confirm: ConfirmCallback,
    diagnostics: Diagnostics,
    paths: PathProvider,
    dry_run: bool = False,
    force: bool = False,
) -> PushOutcome:
    """Push one skill to one tool.

    Modified copies are only overwritten after ``confirm`` agrees, unless
    ``force`` is set. A declined prompt yields a skipped outcome; a canceled
    prompt raises PromptCanceledError.
    """
    try:
        rendered = render_template(skill.contents, tool)
    except TemplateRenderError as err:
        diagnostics.skip(skill.skill_path, err.reason)
        return PushOutcome(skill=skill.name, tool=tool, result="skipped")

    installed = catalog.tool_skill(tool, skill.name)
    status = push_status(rendered, installed.contents if installed else None)

    if status is PushStatus.UNCHANGED:
        return PushOutcome(skill=skill.name, tool=tool, status=status, result="unchanged")

    if status is PushStatus.MODIFIED and not force and not dry_run:
        decision = confirm(f"Overwrite modified skill '{skill.name}' in {tool.display_name}?")
        if not require(decision):
            return PushOutcome(skill=skill.name, tool=tool, status=status, result="skipped")

    if not dry_run:
        write_skill_file(global_skills_dir(tool, paths) / skill.name, rendered)
        logger.info("Pushed skill", skill=skill.name, tool=tool.id, status=status.value)

    result = "new" if status is PushStatus.NEW else "pushed"
    return PushOutcome(skill=skill.name, tool=tool, status=status, result=result)


def push_skills(
    catalog: Catalog,
    confirm: ConfirmCallback,
    diagnostics: Diagnostics,
    names: list[str] | None = None,
    tools: list[Tool] | None = None,
    dry_run: bool = False,
    force: bool = False,
    paths: PathProvider | None = None,
) -> list[PushOutcome]:
    """Push the selected source skills to every tool, tool by tool."""
    paths = paths or SystemPaths()
    skills = select_skills(catalog, names)

    outcomes: list[PushOutcome] = []
    for tool in tools or Tool.all():
        for skill in skills:
            outcomes.append(push_skill(catalog, skill, tool, confirm, diagnostics, paths, dry_run, force))
    return outcomes
