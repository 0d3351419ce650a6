"""Per-skill status and unified diffs between sources and tool copies."""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from .errors import SkillNotFoundError, TemplateRenderError
from .status import classify_pair, collect_names
from .tools import Tool, display_path
from .types import SyncState

if TYPE_CHECKING:
    from .catalog import Catalog
    from .diagnostics import Diagnostics
    from .tools import PathProvider


def unified_diff(old_label: str, new_label: str, old: str, new: str) -> str:
    """Render a unified diff with three lines of context."""
    lines = difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=old_label,
        tofile=new_label,
        n=3,
    )
    output = []
    for line in lines:
        output.append(line if line.endswith("\n") else line + "\n\\ No newline at end of file\n")
    return "".join(output)


def diff_names(catalog: Catalog, name: str | None) -> list[str]:
    if name is not None:
        if name in catalog.sources or name in catalog.installed_names():
            return [name]
        raise SkillNotFoundError(name)
    return sorted(collect_names(catalog), key=str.lower)


def diff_skills(
    catalog: Catalog,
    diagnostics: Diagnostics,
    name: str | None = None,
    paths: PathProvider | None = None,
) -> str:
    """Build the diff report for one skill or every skill."""
    sections: list[str] = []

    for skill_name in diff_names(catalog, name):
        source = catalog.sources.get(skill_name)
        lines = [f"=== {skill_name} ===\n"]

        try:
            for tool in Tool:
                installed = catalog.tool_skill(tool, skill_name)
                state, rendered = classify_pair(source, installed, tool)
                if state is None:
                    continue

                lines.append(f"{tool.display_name}: {state.value}\n")
                if state is SyncState.MODIFIED:
                    lines.append(
                        unified_diff(
                            f"source: {display_path(source.skill_path, paths)}",
                            f"tool: {display_path(installed.skill_path, paths)}",
                            rendered,
                            installed.contents,
                        )
                    )
        except TemplateRenderError as err:
            diagnostics.skip(source.skill_path, err.reason)
            continue

        sections.append("".join(lines))

    return "\n".join(sections)
