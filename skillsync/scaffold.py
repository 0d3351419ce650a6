"""Create new skills and render existing ones for inspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import PathExistsError, SkillNotFoundError, SkillsError
from .fs_utils import write_skill_file
from .render import render_template

if TYPE_CHECKING:
    from pathlib import Path

    from .catalog import Catalog
    from .tools import Tool

SKILL_TEMPLATE = """---
name: {name}
description: <describe when this skill should be used>
---

# {title}

<instructions for the AI assistant>
"""


def title_case(name: str) -> str:
    """``my-new_skill`` -> ``My New Skill``."""
    words = name.replace("_", "-").split("-")
    return " ".join(word[:1].upper() + word[1:] for word in words if word)


def create_skill(path: Path) -> Path:
    """Create ``path/SKILL.md`` from the starter template."""
    if path.exists():
        raise PathExistsError(path)

    name = path.name
    if not name or name in {".", ".."}:
        raise SkillsError(f"Invalid path: {path}")

    return write_skill_file(path, SKILL_TEMPLATE.format(name=name, title=title_case(name)))


def render_skill(catalog: Catalog, name: str, tools: list[Tool]) -> list[tuple[Tool, str]]:
    """Render a source skill for each tool; render failures raise."""
    source = catalog.sources.get(name)
    if source is None:
        raise SkillNotFoundError(name)
    return [(tool, render_template(source.contents, tool)) for tool in tools]
