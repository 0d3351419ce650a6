"""Error types raised by the skill sync engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class SkillsError(Exception):
    """Base class for expected, user-facing failures."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class ConfigError(SkillsError):
    """The config file could not be read or parsed."""


class NoSourcesError(ConfigError):
    def __init__(self, config_path: Path) -> None:
        super().__init__(
            f"No sources configured; edit {config_path} to add at least one source.",
            {"config_path": str(config_path)},
        )
        self.config_path = config_path


class HomeDirMissingError(SkillsError):
    def __init__(self) -> None:
        super().__init__("Failed to resolve the home directory.")


class SkillNotFoundError(SkillsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Skill not found: {name}", {"name": name})
        self.name = name


class TemplateRenderError(SkillsError):
    """A skill template failed to parse or referenced an undefined variable."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to render template: {message}")
        self.reason = message


class SyncConflictError(SkillsError):
    """Installed copies of a skill were changed independently in several tools."""

    def __init__(self, name: str, tools: list[str]) -> None:
        joined = " and ".join(f"[{tool}]" for tool in tools)
        super().__init__(
            f"Conflict: skill '{name}' has divergent modifications in {joined}. Resolve manually.",
            {"name": name, "tools": tools},
        )
        self.name = name
        self.tools = tools


class SkillWriteError(SkillsError):
    def __init__(self, path: Path, error: OSError) -> None:
        super().__init__(f"Failed to write skill file at {path}: {error}", {"path": str(path)})
        self.path = path


class SkillMoveError(SkillsError):
    def __init__(self, src: Path, dest: Path, error: OSError) -> None:
        super().__init__(
            f"Failed to move skill from {src} to {dest}: {error}",
            {"from": str(src), "to": str(dest)},
        )
        self.src = src
        self.dest = dest


class InvalidPulledContentError(SkillsError):
    """Tool-side content would not be a valid source skill."""

    def __init__(self, name: str, path: Path, reason: str) -> None:
        super().__init__(
            f"Refusing to pull '{name}' from {path}: {reason}",
            {"name": name, "path": str(path)},
        )
        self.name = name
        self.path = path
        self.reason = reason


class PromptCanceledError(SkillsError):
    def __init__(self) -> None:
        super().__init__("Prompt canceled.")


class LocalSkillNotFoundError(SkillsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No local skill named '{name}' found in the project skill directories", {"name": name})
        self.name = name


class AmbiguousLocalSkillError(SkillsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Multiple local skills named '{name}' found. Specify --tool to disambiguate.", {"name": name})
        self.name = name


class SkillExistsError(SkillsError):
    def __init__(self, name: str, path: Path) -> None:
        super().__init__(f"Skill '{name}' already exists at {path}. Use --force to overwrite.", {"path": str(path)})
        self.name = name
        self.path = path


class PathExistsError(SkillsError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Path already exists: {path}", {"path": str(path)})
        self.path = path


class PathMissingError(SkillsError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Path does not exist: {path}", {"path": str(path)})
        self.path = path


class InvalidSkillNameError(SkillsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid skill name: '{name}'", {"name": name})
        self.name = name


class EditorError(SkillsError):
    """The editor could not be started or exited unsuccessfully."""

    def __init__(self, editor: str, message: str) -> None:
        super().__init__(f"Editor '{editor}' failed: {message}", {"editor": editor})
        self.editor = editor
