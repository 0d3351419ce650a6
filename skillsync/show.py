"""Look up a single skill wherever it lives."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import SkillNotFoundError
from .tools import Tool

if TYPE_CHECKING:
    from .catalog import Catalog
    from .types import InstalledSkill, SourceSkill


def find_skill(catalog: Catalog, name: str) -> SourceSkill | InstalledSkill:
    """Return the source skill, else the first global copy, else the first local copy."""
    source = catalog.sources.get(name)
    if source is not None:
        return source

    for lookup in (catalog.tool_skill, catalog.local_skill):
        for tool in Tool:
            skill = lookup(tool, name)
            if skill is not None:
                return skill

    raise SkillNotFoundError(name)
