"""Bidirectional sync planning, conflict resolution and plan application."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import InvalidPulledContentError, SkillNotFoundError, SyncConflictError, TemplateRenderError
from .frontmatter import FrontmatterError, parse_frontmatter
from .fs_utils import write_skill_file, write_text_atomic
from .logger import logger
from .render import render_template
from .status import contents_match, normalize_line_endings
from .tools import SystemPaths, Tool, global_skills_dir
from .types import ConflictStrategy, SyncAction, SyncPlan, SyncReport

if TYPE_CHECKING:
    from .catalog import Catalog
    from .diagnostics import Diagnostics
    from .tools import PathProvider
    from .types import InstalledSkill, SourceSkill


def differing_tools(
    catalog: Catalog,
    source: SourceSkill,
    diagnostics: Diagnostics,
) -> dict[Tool, InstalledSkill]:
    """Installed copies of a source skill whose content differs from the rendered template."""
    differing: dict[Tool, InstalledSkill] = {}

    for tool in Tool:
        installed = catalog.tool_skill(tool, source.name)
        if installed is None:
            continue

        try:
            rendered = render_template(source.contents, tool)
        except TemplateRenderError as err:
            diagnostics.skip(source.skill_path, err.reason)
            continue

        if not contents_match(rendered, installed.contents):
            differing[tool] = installed

    return differing


def newest_tool(tool_skills: dict[Tool, InstalledSkill]) -> Tool:
    """The tool whose copy was modified last; ties go to the earlier tool."""
    newest: Tool | None = None
    for tool in Tool:
        skill = tool_skills.get(tool)
        if skill is None:
            continue
        if newest is None or skill.modified > tool_skills[newest].modified:
            newest = tool
    if newest is None:
        raise ValueError("no tool copies to choose from")
    return newest


def _pull_from(from_tool: Tool, tool_skills: dict[Tool, InstalledSkill]) -> SyncAction:
    others = [tool for tool in Tool if tool in tool_skills and tool != from_tool]
    if others:
        return SyncAction(kind="pull_and_push", from_tool=from_tool, to_tools=others)
    return SyncAction(kind="pull", from_tool=from_tool)


def _push_to_all(tool_skills: dict[Tool, InstalledSkill]) -> SyncAction:
    return SyncAction(kind="push", to_tools=[tool for tool in Tool if tool in tool_skills])


def determine_action(source: SourceSkill, tool_skills: dict[Tool, InstalledSkill]) -> SyncAction:
    """Pick the sync direction from modification times.

    The source wins ties: it is pushed unless some tool copy is strictly newer.
    """
    newest = newest_tool(tool_skills)
    if source.modified >= tool_skills[newest].modified:
        return _push_to_all(tool_skills)
    return _pull_from(newest, tool_skills)


def build_sync_plans(catalog: Catalog, diagnostics: Diagnostics) -> list[SyncPlan]:
    """Build a plan for every source skill with at least one differing tool copy."""
    plans: list[SyncPlan] = []

    for name in sorted(catalog.sources):
        source = catalog.sources[name]
        tool_skills = differing_tools(catalog, source, diagnostics)
        if not tool_skills:
            continue

        plans.append(
            SyncPlan(
                name=name,
                source=source,
                tool_skills=tool_skills,
                action=determine_action(source, tool_skills),
            )
        )

    return sorted(plans, key=lambda plan: plan.name.lower())


def has_divergence(plan: SyncPlan) -> bool:
    """Whether the differing tool copies also differ from each other."""
    contents = {normalize_line_endings(skill.contents) for skill in plan.tool_skills.values()}
    return len(contents) > 1


def resolve_conflict(plan: SyncPlan, strategy: ConflictStrategy) -> SyncPlan:
    """Apply the conflict strategy to a plan whose tool copies diverge."""
    if len(plan.tool_skills) < 2 or not has_divergence(plan):
        return plan

    if strategy is ConflictStrategy.PREFER_SOURCE:
        action = _push_to_all(plan.tool_skills)
    elif strategy is ConflictStrategy.PREFER_TOOL:
        action = _pull_from(newest_tool(plan.tool_skills), plan.tool_skills)
    else:
        raise SyncConflictError(plan.name, [tool.id for tool in Tool if tool in plan.tool_skills])

    return plan.model_copy(update={"action": action})


def check_pulled_content(name: str, installed: InstalledSkill) -> None:
    """Refuse tool-side content that would not load back as the same source skill."""
    try:
        frontmatter = parse_frontmatter(installed.contents)
    except FrontmatterError as err:
        raise InvalidPulledContentError(name, installed.skill_path, str(err)) from err

    if frontmatter.name != name:
        raise InvalidPulledContentError(
            name,
            installed.skill_path,
            f"frontmatter name '{frontmatter.name}' does not match '{name}'",
        )


def render_for_tools(template: str, to_tools: list[Tool]) -> dict[Tool, str]:
    """Render a template for every target tool; raises TemplateRenderError before anything is written."""
    return {tool: render_template(template, tool) for tool in to_tools}


def apply_push(name: str, rendered: dict[Tool, str], paths: PathProvider) -> None:
    """Write pre-rendered content into each tool's install directory."""
    for tool, content in rendered.items():
        write_skill_file(global_skills_dir(tool, paths) / name, content)
        logger.info("Pushed skill", skill=name, tool=tool.id)


def pulled_skill(plan: SyncPlan, from_tool: Tool) -> InstalledSkill:
    installed = plan.tool_skills.get(from_tool)
    if installed is None:
        raise SkillNotFoundError(plan.name)
    check_pulled_content(plan.name, installed)
    return installed


def apply_plan(plan: SyncPlan, paths: PathProvider, dry_run: bool = False) -> None:
    """Validate and render everything a plan needs, then write it.

    Raises TemplateRenderError or InvalidPulledContentError with nothing
    written. A dry run stops after those checks.
    """
    action = plan.action
    if action.kind == "push":
        rendered = render_for_tools(plan.source.contents, action.to_tools)
        if not dry_run:
            apply_push(plan.name, rendered, paths)
        return

    installed = pulled_skill(plan, action.from_tool)
    # The pulled copy is the template for the remaining tools.
    rendered = render_for_tools(installed.contents, action.to_tools)
    if dry_run:
        return

    write_text_atomic(plan.source.skill_path, installed.contents)
    logger.info("Pulled skill", skill=plan.name, tool=action.from_tool.id)
    apply_push(plan.name, rendered, paths)


def run_sync(
    catalog: Catalog,
    diagnostics: Diagnostics,
    names: list[str] | None = None,
    strategy: ConflictStrategy = ConflictStrategy.ERROR,
    dry_run: bool = False,
    paths: PathProvider | None = None,
) -> SyncReport:
    """Plan and apply a sync pass.

    Divergent skills under the ``error`` strategy are reported in
    ``SyncReport.conflicts`` and left untouched. A plan whose pulled content
    is invalid or does not render is recorded as a skipped skill. Every other
    plan is applied.
    """
    paths = paths or SystemPaths()
    names = names or []
    for name in names:
        if name not in catalog.sources:
            raise SkillNotFoundError(name)

    plans = build_sync_plans(catalog, diagnostics)
    if names:
        plans = [plan for plan in plans if plan.name in names]

    applied: list[SyncPlan] = []
    conflicts: list[str] = []
    push_count = 0
    pull_count = 0

    for plan in plans:
        try:
            plan = resolve_conflict(plan, strategy)
        except SyncConflictError as err:
            logger.warning("Sync conflict", skill=plan.name, tools=err.tools)
            conflicts.append(str(err))
            continue

        try:
            apply_plan(plan, paths, dry_run)
        except InvalidPulledContentError as err:
            diagnostics.skip(err.path, err.reason)
            continue
        except TemplateRenderError as err:
            diagnostics.skip(plan.source.skill_path, err.reason)
            continue

        applied.append(plan)
        if plan.action.kind in ("pull", "pull_and_push"):
            pull_count += 1
        if plan.action.kind in ("push", "pull_and_push"):
            push_count += 1

    return SyncReport(
        applied=applied,
        conflicts=conflicts,
        push_count=push_count,
        pull_count=pull_count,
        dry_run=dry_run,
    )
