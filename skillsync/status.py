"""Sync status computation for skills across tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import TemplateRenderError
from .render import render_template
from .tools import Tool
from .types import SkillEntry, SyncState, ToolStatus

if TYPE_CHECKING:
    from .catalog import Catalog
    from .diagnostics import Diagnostics
    from .types import InstalledSkill, SourceSkill


def normalize_line_endings(contents: str) -> str:
    """Normalize CRLF/CR to LF and drop at most one trailing newline."""
    normalized = contents.replace("\r\n", "\n").replace("\r", "\n")
    if normalized.endswith("\n"):
        normalized = normalized[:-1]
    return normalized


def contents_match(left: str, right: str) -> bool:
    return normalize_line_endings(left) == normalize_line_endings(right)


def classify_pair(
    source: SourceSkill | None,
    installed: InstalledSkill | None,
    tool: Tool,
) -> tuple[SyncState | None, str | None]:
    """Classify one (skill, tool) pair.

    Returns the state (None when neither side exists) and the rendered source
    when it had to be rendered. Raises TemplateRenderError.
    """
    if source is not None and installed is not None:
        rendered = render_template(source.contents, tool)
        state = SyncState.SYNCED if contents_match(rendered, installed.contents) else SyncState.MODIFIED
        return state, rendered
    if source is not None:
        return SyncState.MISSING, None
    if installed is not None:
        return SyncState.ORPHAN, None
    return None, None


def collect_names(catalog: Catalog) -> list[str]:
    """Source names first, then names only seen in tool installs; each sorted."""
    names = sorted(catalog.sources)
    seen = set(names)
    names.extend(name for name in catalog.installed_names() if name not in seen)
    return names


def classify(catalog: Catalog, diagnostics: Diagnostics) -> list[SkillEntry]:
    """Compute the sync state of every skill for every tool that has a copy or a source."""
    entries: list[SkillEntry] = []

    for name in collect_names(catalog):
        source = catalog.sources.get(name)
        tool_statuses: list[ToolStatus] = []

        try:
            for tool in Tool:
                state, _ = classify_pair(source, catalog.tool_skill(tool, name), tool)
                if state is not None:
                    tool_statuses.append(ToolStatus(tool=tool, state=state))
        except TemplateRenderError as err:
            # A row that can't be rendered for one tool is dropped entirely.
            diagnostics.skip(source.skill_path, err.reason)
            continue

        entries.append(SkillEntry(name=name, tool_statuses=tool_statuses))

    # sorted() is stable, so ties keep discovery order.
    return sorted(entries, key=lambda entry: entry.name.lower())
