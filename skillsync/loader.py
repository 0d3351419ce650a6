"""Load source and installed skills from skill directories."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from .constants import SKILL_FILE_NAME
from .frontmatter import FrontmatterError, parse_frontmatter
from .types import InstalledSkill, SourceSkill

if TYPE_CHECKING:
    from pathlib import Path

    from .diagnostics import Diagnostics
    from .tools import Tool


def read_skill_file(skill_path: Path) -> str:
    """Read a skill file verbatim, keeping its line endings."""
    return skill_path.read_bytes().decode("utf-8")


def file_mtime(path: Path) -> float:
    """Return the file's modification time, or the epoch if it can't be read."""
    try:
        return path.stat().st_mtime
    except OSError:
        return 0.0


def _load(skill_dir: Path, diagnostics: Diagnostics) -> tuple[Path, str, str] | None:
    skill_path = skill_dir / SKILL_FILE_NAME
    if not skill_path.is_file():
        return None

    try:
        contents = read_skill_file(skill_path)
    except (OSError, UnicodeDecodeError) as err:
        diagnostics.skip(skill_path, str(err))
        return None

    try:
        frontmatter = parse_frontmatter(contents)
    except FrontmatterError as err:
        diagnostics.skip(skill_path, str(err))
        return None

    return skill_path, contents, frontmatter.name


def load_source_skill(source_root: Path, skill_dir: Path, diagnostics: Diagnostics) -> SourceSkill | None:
    """Load a source skill from a directory if it has a skill file."""
    loaded = _load(skill_dir, diagnostics)
    if loaded is None:
        return None

    skill_path, contents, name = loaded
    return SourceSkill(
        name=name,
        source_root=source_root,
        skill_dir=skill_dir,
        skill_path=skill_path,
        contents=contents,
        modified=file_mtime(skill_path),
    )


def load_installed_skill(
    skill_dir: Path,
    tool: Tool,
    diagnostics: Diagnostics,
    origin: Literal["global", "local"] = "global",
) -> InstalledSkill | None:
    """Load a tool-installed (global or project-local) skill if present."""
    loaded = _load(skill_dir, diagnostics)
    if loaded is None:
        return None

    skill_path, contents, name = loaded
    return InstalledSkill(
        name=name,
        tool=tool,
        origin=origin,
        skill_dir=skill_dir,
        skill_path=skill_path,
        contents=contents,
        modified=file_mtime(skill_path),
    )
