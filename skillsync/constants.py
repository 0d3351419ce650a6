"""Skill sync constants."""

from __future__ import annotations

from pathlib import Path

SKILL_FILE_NAME = "SKILL.md"
SKILLS_DIR_NAME = "skills"
FRONTMATTER_DELIMITER = "---"
CONFIG_FILE = Path(".skills.yaml")
CONFIG_ENV_VAR = "SKILLS_CONFIG"
DEFAULT_SOURCE_DIR = Path("skills")
