"""Remove installed skill copies from tool directories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .fs_utils import remove_dir
from .logger import logger
from .prompts import require
from .tools import Tool
from .types import UnloadOutcome

if TYPE_CHECKING:
    from .catalog import Catalog
    from .prompts import ConfirmCallback


def unload_skill(
    catalog: Catalog,
    name: str,
    confirm: ConfirmCallback,
    tools: list[Tool] | None = None,
    dry_run: bool = False,
    force: bool = False,
) -> list[UnloadOutcome]:
    """Delete a skill's global install directory for each selected tool.

    Sources and project-local copies are never touched. Each removal is
    confirmed unless ``force`` or ``dry_run`` is set.
    """
    outcomes: list[UnloadOutcome] = []

    for tool in tools or Tool.all():
        installed = catalog.tool_skill(tool, name)
        if installed is None:
            outcomes.append(UnloadOutcome(tool=tool, result="not_installed"))
            continue

        if not force and not dry_run:
            if not require(confirm(f"Remove skill '{name}' from {tool.display_name}?")):
                outcomes.append(UnloadOutcome(tool=tool, result="skipped", skill_dir=installed.skill_dir))
                continue

        if not dry_run:
            remove_dir(installed.skill_dir)
            logger.info("Unloaded skill", skill=name, tool=tool.id)
        outcomes.append(UnloadOutcome(tool=tool, result="removed", skill_dir=installed.skill_dir))

    return outcomes
