"""Configuration loading: the ordered list of source directories."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, ValidationError

from .constants import CONFIG_ENV_VAR, CONFIG_FILE, DEFAULT_SOURCE_DIR
from .errors import ConfigError, NoSourcesError, PathExistsError
from .tools import SystemPaths

if TYPE_CHECKING:
    from .tools import PathProvider


class RawConfig(BaseModel):
    sources: list[str] | None = None


class SkillsConfig(BaseModel):
    path: Path
    sources: list[Path]


def default_config_path(paths: PathProvider | None = None) -> Path:
    """``$SKILLS_CONFIG`` if set, else ``~/.skills.yaml``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return (paths or SystemPaths()).home_dir() / CONFIG_FILE


def default_source_dir(paths: PathProvider | None = None) -> Path:
    return (paths or SystemPaths()).home_dir() / DEFAULT_SOURCE_DIR


def expand_source_path(raw: str, base_dir: Path) -> Path:
    """Expand ``~`` and environment variables; resolve relative paths against base_dir."""
    expanded = Path(os.path.expandvars(os.path.expanduser(raw)))
    if not expanded.is_absolute():
        expanded = base_dir / expanded
    return Path(os.path.normpath(expanded))


def load_config(path: Path | None = None, paths: PathProvider | None = None) -> SkillsConfig:
    """Read and validate the config file."""
    path = path or default_config_path(paths)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as err:
        raise NoSourcesError(path) from err
    except OSError as err:
        raise ConfigError(f"Failed to read config at {path}: {err}") from err

    try:
        raw = RawConfig.model_validate(yaml.safe_load(content) or {})
    except (yaml.YAMLError, ValidationError) as err:
        raise ConfigError(f"Failed to parse config at {path}: {err}") from err

    if not raw.sources:
        raise NoSourcesError(path)

    base_dir = path.parent
    return SkillsConfig(path=path, sources=[expand_source_path(s, base_dir) for s in raw.sources])


def write_config(path: Path, sources: list[Path]) -> None:
    """Create a config file; an existing one is never overwritten."""
    if path.exists():
        raise PathExistsError(path)

    path.parent.mkdir(parents=True, exist_ok=True)
    content = yaml.safe_dump({"sources": [str(source) for source in sources]}, sort_keys=True)
    path.write_text(content, encoding="utf-8")
