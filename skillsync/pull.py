"""Pull tool-side edits (global or project-local) back into source directories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .diff import unified_diff
from .errors import InvalidPulledContentError, PromptCanceledError, SkillNotFoundError, TemplateRenderError
from .fs_utils import write_skill_file, write_text_atomic
from .logger import logger
from .prompts import require
from .render import render_template
from .status import contents_match
from .sync import check_pulled_content
from .tools import Tool, display_path
from .types import PullOutcome, PullPlan, PullVariant

if TYPE_CHECKING:
    from pathlib import Path

    from .catalog import Catalog
    from .diagnostics import Diagnostics
    from .prompts import PullResolver
    from .tools import PathProvider
    from .types import InstalledSkill


def pull_names(catalog: Catalog) -> list[str]:
    """Source names, then names only found in global or local tool directories."""
    names = sorted(catalog.sources)
    seen = set(names)
    for name in [*catalog.installed_names(), *catalog.local_names()]:
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names


def _copies(catalog: Catalog, tool: Tool, name: str) -> list[InstalledSkill]:
    copies = [catalog.tool_skill(tool, name), catalog.local_skill(tool, name)]
    return [copy for copy in copies if copy is not None]


def collect_pull_plans(catalog: Catalog, diagnostics: Diagnostics, name: str | None = None) -> list[PullPlan]:
    """Find every skill with tool copies that could be pulled.

    With a source, a variant is a copy that differs from the rendered
    template. Without one, every copy is an orphan variant.
    """
    names = pull_names(catalog)
    if name is not None:
        if name not in names:
            raise SkillNotFoundError(name)
        names = [name]

    plans: list[PullPlan] = []
    for skill_name in names:
        source = catalog.sources.get(skill_name)
        variants: list[PullVariant] = []

        try:
            for tool in Tool:
                copies = _copies(catalog, tool, skill_name)
                if source is None:
                    variants.extend(PullVariant(tool=tool, skill=copy, orphan=True) for copy in copies)
                    continue
                if not copies:
                    continue
                rendered = render_template(source.contents, tool)
                variants.extend(
                    PullVariant(tool=tool, skill=copy)
                    for copy in copies
                    if not contents_match(rendered, copy.contents)
                )
        except TemplateRenderError as err:
            diagnostics.skip(source.skill_path, err.reason)
            continue

        if variants:
            plans.append(PullPlan(name=skill_name, source=source, variants=variants))

    return sorted(plans, key=lambda plan: plan.name.lower())


def variant_diff(left: PullVariant, right: PullVariant, paths: PathProvider | None = None) -> str:
    return unified_diff(
        f"{left.label()}: {display_path(left.skill.skill_path, paths)}",
        f"{right.label()}: {display_path(right.skill.skill_path, paths)}",
        left.skill.contents,
        right.skill.contents,
    )


def resolve_variants(
    plan: PullPlan,
    resolver: PullResolver,
    paths: PathProvider | None = None,
) -> PullVariant | None:
    """Ask until the user picks one variant or skips; None means skip."""
    variants = plan.variants
    while True:
        choice = resolver.choose_variant(plan, variants)
        if choice is None:
            continue
        if choice.kind == "skip":
            return None
        if choice.kind == "diff":
            pair = (choice.index, choice.other)
            if None in pair or pair[0] == pair[1] or not all(0 <= i < len(variants) for i in pair):
                continue
            resolver.show_diff(variant_diff(variants[pair[0]], variants[pair[1]], paths))
            continue
        if choice.index is not None and 0 <= choice.index < len(variants):
            return variants[choice.index]


def select_target_source(
    plan: PullPlan,
    sources: list[Path],
    resolver: PullResolver,
    target: Path | None = None,
) -> Path:
    """Where a pulled skill lands: its own source root, ``target``, or a configured source."""
    if plan.source is not None:
        return plan.source.source_root
    if target is not None:
        return target
    if len(sources) == 1:
        return sources[0]

    chosen = resolver.choose_source(sources)
    if chosen is None:
        raise PromptCanceledError()
    return chosen


def apply_pull(plan: PullPlan, variant: PullVariant, target: Path) -> Path:
    """Write the variant's content verbatim as the source skill file."""
    check_pulled_content(plan.name, variant.skill)
    if plan.source is not None:
        write_text_atomic(plan.source.skill_path, variant.skill.contents)
        return plan.source.skill_path
    return write_skill_file(target / plan.name, variant.skill.contents)


def pull_skills(
    plans: list[PullPlan],
    sources: list[Path],
    resolver: PullResolver,
    diagnostics: Diagnostics,
    target: Path | None = None,
    dry_run: bool = False,
    paths: PathProvider | None = None,
) -> list[PullOutcome]:
    """Resolve and apply pull plans one skill at a time.

    A declined confirmation or a skipped choice leaves the skill alone; a
    canceled prompt raises PromptCanceledError and stops the run.
    """
    outcomes: list[PullOutcome] = []

    for plan in plans:
        if len(plan.variants) == 1:
            variant = plan.variants[0]
            if not require(resolver.confirm_pull(plan, variant)):
                outcomes.append(PullOutcome(name=plan.name, result="skipped"))
                continue
        else:
            variant = resolve_variants(plan, resolver, paths)
            if variant is None:
                outcomes.append(PullOutcome(name=plan.name, result="skipped"))
                continue

        destination = select_target_source(plan, sources, resolver, target)
        result = "created" if plan.source is None else "pulled"

        if not dry_run:
            try:
                apply_pull(plan, variant, destination)
            except InvalidPulledContentError as err:
                diagnostics.skip(variant.skill.skill_path, err.reason)
                outcomes.append(PullOutcome(name=plan.name, result="skipped", variant=variant))
                continue
            logger.info("Pulled skill", skill=plan.name, tool=variant.tool.id, origin=variant.origin)

        outcomes.append(PullOutcome(name=plan.name, result=result, variant=variant, target=destination))

    return outcomes
