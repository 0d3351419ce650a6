"""YAML frontmatter parsing for skill files."""

from __future__ import annotations

import yaml

from .constants import FRONTMATTER_DELIMITER
from .types import Frontmatter


class FrontmatterError(ValueError):
    """The frontmatter block is missing or invalid."""


def split_frontmatter(contents: str) -> tuple[str, str] | None:
    """Split a document into its YAML payload and body.

    The first line must be exactly ``---``; the payload runs to the next
    ``---`` line. Returns None when there is no complete block.
    """
    lines = contents.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != FRONTMATTER_DELIMITER:
        return None

    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip("\r\n") == FRONTMATTER_DELIMITER:
            return "".join(lines[1:index]), "".join(lines[index + 1 :])

    return None


def parse_frontmatter(contents: str) -> Frontmatter:
    """Parse and validate the frontmatter of a skill file."""
    parts = split_frontmatter(contents)
    if parts is None:
        raise FrontmatterError("missing YAML frontmatter")

    try:
        raw = yaml.safe_load(parts[0])
    except yaml.YAMLError as err:
        raise FrontmatterError(str(err)) from err

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise FrontmatterError("frontmatter must be a mapping")

    name = _string_field(raw, "name")
    if not name:
        raise FrontmatterError("missing required field 'name'")

    description = _string_field(raw, "description")
    if not description:
        raise FrontmatterError("missing required field 'description'")

    return Frontmatter(name=name, description=description)


def _string_field(raw: dict[str, object], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise FrontmatterError(f"field '{key}' must be a string")
    return value.strip()


def replace_frontmatter_name(contents: str, name: str) -> str:
    """Rewrite the top-level ``name:`` line of the frontmatter, keeping line endings."""
    lines = contents.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != FRONTMATTER_DELIMITER:
        return contents

    for index, line in enumerate(lines[1:], start=1):
        stripped = line.rstrip("\r\n")
        if stripped == FRONTMATTER_DELIMITER:
            break
        if stripped.startswith("name:"):
            lines[index] = f"name: {name}{line[len(stripped):]}"
            break

    return "".join(lines)
