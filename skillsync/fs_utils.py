"""Filesystem utilities for writing and moving skills."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

from .constants import SKILL_FILE_NAME
from .errors import SkillMoveError, SkillWriteError
from .logger import logger

if TYPE_CHECKING:
    from pathlib import Path


def write_text_atomic(path: Path, content: str) -> None:
    """Write content verbatim via a temp file and rename."""
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        tmp_path.write_bytes(content.encode("utf-8"))
        tmp_path.replace(path)
    except OSError as err:
        tmp_path.unlink(missing_ok=True)
        raise SkillWriteError(path, err) from err


def write_skill_file(skill_dir: Path, content: str) -> Path:
    """Write ``skill_dir/SKILL.md``, creating the directory if absent."""
    try:
        skill_dir.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise SkillWriteError(skill_dir, err) from err

    skill_path = skill_dir / SKILL_FILE_NAME
    write_text_atomic(skill_path, content)
    logger.debug("Wrote skill file", path=str(skill_path))
    return skill_path


def move_dir(src: Path, dest: Path, *, replace: bool = False) -> None:
    """Move a skill directory, optionally replacing an existing destination."""
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        if replace and dest.exists():
            shutil.rmtree(dest)
        shutil.move(str(src), str(dest))
    except OSError as err:
        raise SkillMoveError(src, dest, err) from err
    logger.debug("Moved skill directory", src=str(src), dest=str(dest))


def remove_dir(path: Path) -> None:
    """Delete a skill directory and everything in it."""
    try:
        shutil.rmtree(path)
    except OSError as err:
        raise SkillWriteError(path, err) from err
    logger.debug("Removed skill directory", path=str(path))
