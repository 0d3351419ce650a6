"""Validate source skills: frontmatter, naming and per-tool rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import SkillNotFoundError, TemplateRenderError
from .frontmatter import FrontmatterError, parse_frontmatter
from .render import render_template
from .tools import Tool
from .types import ValidationReport

if TYPE_CHECKING:
    from .catalog import Catalog
    from .types import SourceSkill


def validate_skill(skill: SourceSkill) -> ValidationReport:
    errors: list[str] = []

    try:
        frontmatter = parse_frontmatter(skill.contents)
    except FrontmatterError as err:
        errors.append(f"frontmatter: {err}")
    else:
        if frontmatter.name != skill.skill_dir.name:
            errors.append(
                f"frontmatter name '{frontmatter.name}' does not match directory name '{skill.skill_dir.name}'"
            )

    for tool in Tool:
        try:
            render_template(skill.contents, tool)
        except TemplateRenderError as err:
            errors.append(f"template ({tool.id} render): {err.reason}")

    return ValidationReport(name=skill.name, errors=errors)


def validate_skills(catalog: Catalog, name: str | None = None) -> list[ValidationReport]:
    """Validate one source skill or all of them."""
    if name is not None:
        skill = catalog.sources.get(name)
        if skill is None:
            raise SkillNotFoundError(name)
        return [validate_skill(skill)]

    return [validate_skill(catalog.sources[n]) for n in sorted(catalog.sources, key=str.lower)]
