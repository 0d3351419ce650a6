"""Rename a skill across its source directory and global tool installs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import SKILL_FILE_NAME
from .errors import InvalidSkillNameError, SkillExistsError, SkillNotFoundError
from .frontmatter import replace_frontmatter_name
from .fs_utils import move_dir, write_text_atomic
from .loader import read_skill_file
from .logger import logger
from .prompts import require
from .tools import Tool
from .types import RenameOp, RenameResult

if TYPE_CHECKING:
    from .catalog import Catalog
    from .prompts import ConfirmCallback


def check_skill_name(name: str) -> None:
    if not name or name in {".", ".."} or "/" in name or "\\" in name:
        raise InvalidSkillNameError(name)


def rename_ops(catalog: Catalog, old_name: str, new_name: str) -> list[RenameOp]:
    """The source directory first, then every global install of the skill."""
    source = catalog.sources.get(old_name)
    if source is None:
        raise SkillNotFoundError(old_name)

    ops = [RenameOp(label="source", src=source.skill_dir, dest=source.skill_dir.parent / new_name)]
    for tool in Tool:
        installed = catalog.tool_skill(tool, old_name)
        if installed is not None:
            ops.append(RenameOp(label=tool.id, src=installed.skill_dir, dest=installed.skill_dir.parent / new_name))
    return ops


def rename_skill(
    catalog: Catalog,
    old_name: str,
    new_name: str,
    confirm: ConfirmCallback,
    dry_run: bool = False,
    force: bool = False,
) -> RenameResult:
    """Move every location of ``old_name`` to ``new_name`` and rewrite the frontmatter name.

    Existing destinations are refused unless ``force`` replaces them. All
    destinations are checked before anything moves.
    """
    check_skill_name(new_name)
    ops = rename_ops(catalog, old_name, new_name)

    if not force:
        if new_name in catalog.sources:
            raise SkillExistsError(new_name, catalog.sources[new_name].skill_dir)
        for op in ops:
            if op.dest.exists():
                raise SkillExistsError(new_name, op.dest)

    result = RenameResult(old_name=old_name, new_name=new_name, ops=ops, applied=False)
    if dry_run:
        return result
    if not force and not require(confirm(f"Rename {len(ops)} location(s)?")):
        return result

    for op in ops:
        if op.src == op.dest:
            continue
        move_dir(op.src, op.dest, replace=force)

    for op in ops:
        skill_path = op.dest / SKILL_FILE_NAME
        contents = read_skill_file(skill_path)
        write_text_atomic(skill_path, replace_frontmatter_name(contents, new_name))

    logger.info("Renamed skill", old=old_name, new=new_name, locations=len(ops))
    return result.model_copy(update={"applied": True})
