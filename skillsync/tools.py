"""Supported tools and the home/working-directory abstraction."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Protocol

from .constants import SKILLS_DIR_NAME
from .errors import HomeDirMissingError


class Tool(str, Enum):
    """Consumer tools, in the order they are processed and displayed."""

    CLAUDE = "claude"
    CODEX = "codex"
    GEMINI = "gemini"

    @property
    def id(self) -> str:
        """Identifier bound as ``tool`` when rendering templates."""
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def skills_subdir(self) -> Path:
        """``.<tool>/skills``, relative to the home directory or a project root."""
        return Path(f".{self.value}") / SKILLS_DIR_NAME

    @classmethod
    def all(cls) -> list[Tool]:
        return list(cls)


_DISPLAY_NAMES: dict[Tool, str] = {
    Tool.CLAUDE: "Claude Code",
    Tool.CODEX: "Codex",
    Tool.GEMINI: "Gemini",
}


def parse_tool_filter(value: str | None) -> list[Tool]:
    """Expand a ``--tool`` argument (a tool id or ``all``) into tools."""
    if value is None or value == "all":
        return Tool.all()
    return [Tool(value)]


class PathProvider(Protocol):
    """Interface for the global locations the engine reads from."""

    def home_dir(self) -> Path:
        """Return the user's home directory, raising HomeDirMissingError."""
        ...

    def cwd(self) -> Path:
        """Return the current project directory."""
        ...


class SystemPaths:
    """PathProvider backed by the real process environment."""

    def home_dir(self) -> Path:
        try:
            return Path.home()
        except (RuntimeError, KeyError) as err:
            raise HomeDirMissingError() from err

    def cwd(self) -> Path:
        return Path.cwd()


def global_skills_dir(tool: Tool, paths: PathProvider) -> Path:
    """Return ``<home>/.<tool>/skills``."""
    return paths.home_dir() / tool.skills_subdir


def local_skills_dir(tool: Tool, paths: PathProvider) -> Path:
    """Return ``<cwd>/.<tool>/skills``."""
    return paths.cwd() / tool.skills_subdir


def display_path(path: Path, paths: PathProvider | None = None) -> str:
    """Render a path for display, using ``~`` for the home directory."""
    try:
        home = (paths or SystemPaths()).home_dir()
    except HomeDirMissingError:
        return str(path)
    try:
        relative = path.relative_to(home)
    except ValueError:
        return str(path)
    if relative == Path("."):
        return "~"
    return str(Path("~") / relative)
