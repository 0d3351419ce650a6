"""Keep skill definitions in sync between source directories and tool installs."""

from __future__ import annotations

from .catalog import Catalog, load_catalog
from .config import SkillsConfig, default_config_path, expand_source_path, load_config, write_config
from .constants import CONFIG_ENV_VAR, CONFIG_FILE, SKILL_FILE_NAME
from .diagnostics import Diagnostics
from .diff import diff_skills, unified_diff
from .edit import edit_skill, editor_command
from .errors import (
    AmbiguousLocalSkillError,
    ConfigError,
    EditorError,
    HomeDirMissingError,
    InvalidPulledContentError,
    InvalidSkillNameError,
    LocalSkillNotFoundError,
    NoSourcesError,
    PathExistsError,
    PathMissingError,
    PromptCanceledError,
    SkillExistsError,
    SkillMoveError,
    SkillNotFoundError,
    SkillsError,
    SkillWriteError,
    SyncConflictError,
    TemplateRenderError,
)
from .frontmatter import FrontmatterError, parse_frontmatter, replace_frontmatter_name
from .loader import load_installed_skill, load_source_skill
from .promote import promote_skill
from .prompts import Decision, PullResolver, TerminalPullResolver, terminal_confirm
from .pull import collect_pull_plans, pull_skills, resolve_variants
from .push import push_skills
from .rename import rename_skill
from .render import render_template
from .scaffold import create_skill, render_skill
from .show import find_skill
from .status import classify, contents_match, normalize_line_endings
from .sync import build_sync_plans, determine_action, resolve_conflict, run_sync
from .tools import PathProvider, SystemPaths, Tool
from .types import (
    ConflictStrategy,
    InstalledSkill,
    PullOutcome,
    PullPlan,
    PullVariant,
    PushOutcome,
    PushStatus,
    RenameOp,
    RenameResult,
    SkillEntry,
    SourceSkill,
    SyncAction,
    SyncPlan,
    SyncReport,
    SyncState,
    UnloadOutcome,
    ValidationReport,
    VariantChoice,
)
from .unload import unload_skill
from .validate import validate_skills

__all__ = [
    # catalog
    "Catalog",
    "load_catalog",
    # config
    "SkillsConfig",
    "default_config_path",
    "expand_source_path",
    "load_config",
    "write_config",
    # constants
    "CONFIG_ENV_VAR",
    "CONFIG_FILE",
    "SKILL_FILE_NAME",
    # diagnostics
    "Diagnostics",
    # diff
    "diff_skills",
    "unified_diff",
    # edit
    "edit_skill",
    "editor_command",
    # errors
    "AmbiguousLocalSkillError",
    "ConfigError",
    "EditorError",
    "HomeDirMissingError",
    "InvalidPulledContentError",
    "InvalidSkillNameError",
    "LocalSkillNotFoundError",
    "NoSourcesError",
    "PathExistsError",
    "PathMissingError",
    "PromptCanceledError",
    "SkillExistsError",
    "SkillMoveError",
    "SkillNotFoundError",
    "SkillsError",
    "SkillWriteError",
    "SyncConflictError",
    "TemplateRenderError",
    # frontmatter
    "FrontmatterError",
    "parse_frontmatter",
    "replace_frontmatter_name",
    # loader
    "load_installed_skill",
    "load_source_skill",
    # promote
    "promote_skill",
    # prompts
    "Decision",
    "PullResolver",
    "TerminalPullResolver",
    "terminal_confirm",
    # pull
    "collect_pull_plans",
    "pull_skills",
    "resolve_variants",
    # push
    "push_skills",
    # rename
    "rename_skill",
    # render
    "render_template",
    # scaffold
    "create_skill",
    "render_skill",
    # show
    "find_skill",
    # status
    "classify",
    "contents_match",
    "normalize_line_endings",
    # sync
    "build_sync_plans",
    "determine_action",
    "resolve_conflict",
    "run_sync",
    # tools
    "PathProvider",
    "SystemPaths",
    "Tool",
    # types
    "ConflictStrategy",
    "InstalledSkill",
    "PullOutcome",
    "PullPlan",
    "PullVariant",
    "PushOutcome",
    "PushStatus",
    "RenameOp",
    "RenameResult",
    "SkillEntry",
    "SourceSkill",
    "SyncAction",
    "SyncPlan",
    "SyncReport",
    "SyncState",
    "UnloadOutcome",
    "ValidationReport",
    "VariantChoice",
    # unload
    "unload_skill",
    # validate
    "validate_skills",
]
