"""Skill sync domain types."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict

from .tools import Tool


class Frontmatter(BaseModel):
    name: str
    description: str


class SourceSkill(BaseModel):
    """A canonical skill template loaded from a source root."""

    model_config = ConfigDict(frozen=True)

    name: str
    source_root: Path
    skill_dir: Path
    skill_path: Path
    contents: str
    modified: float = 0.0


class InstalledSkill(BaseModel):
    """A skill copy installed in a tool's global or project-local directory."""

    model_config = ConfigDict(frozen=True)

    name: str
    tool: Tool
    origin: Literal["global", "local"] = "global"
    skill_dir: Path
    skill_path: Path
    contents: str
    modified: float = 0.0


class SyncState(str, Enum):
    SYNCED = "synced"
    MODIFIED = "modified"
    MISSING = "missing"
    ORPHAN = "orphan"


class ToolStatus(BaseModel):
    tool: Tool
    state: SyncState


class SkillEntry(BaseModel):
    name: str
    tool_statuses: list[ToolStatus]

    def state_for(self, tool: Tool) -> SyncState | None:
        return next((s.state for s in self.tool_statuses if s.tool == tool), None)


class SkippedSkill(BaseModel):
    path: Path
    reason: str


class ConflictStrategy(str, Enum):
    ERROR = "error"
    PREFER_SOURCE = "prefer_source"
    PREFER_TOOL = "prefer_tool"


class SyncAction(BaseModel):
    """What to do for one skill.

    ``kind`` is ``push`` (source -> ``to_tools``), ``pull`` (``from_tool`` ->
    source) or ``pull_and_push`` (``from_tool`` -> source -> ``to_tools``).
    """

    kind: Literal["push", "pull", "pull_and_push"]
    from_tool: Tool | None = None
    to_tools: list[Tool] = []


class SyncPlan(BaseModel):
    name: str
    source: SourceSkill
    tool_skills: dict[Tool, InstalledSkill]
    action: SyncAction


class SyncReport(BaseModel):
    applied: list[SyncPlan]
    conflicts: list[str]
    push_count: int
    pull_count: int
    dry_run: bool


class PushStatus(str, Enum):
    NEW = "new"
    UNCHANGED = "unchanged"
    MODIFIED = "modified"


class PushOutcome(BaseModel):
    """Result of pushing one skill to one tool.

    ``result`` is ``new``, ``unchanged``, ``pushed`` or ``skipped``.
    """

    skill: str
    tool: Tool
    status: PushStatus | None = None
    result: Literal["new", "unchanged", "pushed", "skipped"]

    @property
    def marker(self) -> str:
        return {"new": "+", "unchanged": "=", "pushed": "~", "skipped": "!"}[self.result]


class PullVariant(BaseModel):
    tool: Tool
    skill: InstalledSkill
    orphan: bool = False

    @property
    def origin(self) -> str:
        return self.skill.origin

    def label(self) -> str:
        return f"{self.tool.display_name} ({self.skill.origin})"


class PullPlan(BaseModel):
    name: str
    source: SourceSkill | None = None
    variants: list[PullVariant]


class PullOutcome(BaseModel):
    """Result of resolving one pull plan; ``result`` is ``pulled``, ``created`` or ``skipped``."""

    name: str
    result: Literal["pulled", "created", "skipped"]
    variant: PullVariant | None = None
    target: Path | None = None


class VariantChoice(BaseModel):
    """Answer to a multi-variant pull prompt.

    ``select`` picks ``index`` (0-based), ``skip`` leaves the skill alone and
    ``diff`` asks for the diff between ``index`` and ``other``.
    """

    kind: Literal["select", "skip", "diff"]
    index: int | None = None
    other: int | None = None


class ValidationReport(BaseModel):
    name: str
    errors: list[str]

    @property
    def valid(self) -> bool:
        return not self.errors


class UnloadOutcome(BaseModel):
    """Result of removing one skill from one tool; ``result`` is ``removed``, ``skipped`` or ``not_installed``."""

    tool: Tool
    result: Literal["removed", "skipped", "not_installed"]
    skill_dir: Path | None = None


class RenameOp(BaseModel):
    label: str
    src: Path
    dest: Path


class RenameResult(BaseModel):
    old_name: str
    new_name: str
    ops: list[RenameOp]
    applied: bool
