"""Open a skill file in the user's editor."""

from __future__ import annotations

import os
import shlex
import subprocess
from typing import TYPE_CHECKING

from .errors import EditorError
from .logger import logger
from .show import find_skill

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from .catalog import Catalog

DEFAULT_EDITOR = "vi"


def editor_command(environ: Mapping[str, str] | None = None) -> list[str]:
    """``$EDITOR``, then ``$VISUAL``, then ``vi``, split like a shell would."""
    environ = os.environ if environ is None else environ
    editor = environ.get("EDITOR") or environ.get("VISUAL") or DEFAULT_EDITOR
    return shlex.split(editor)


def edit_skill(catalog: Catalog, name: str, environ: Mapping[str, str] | None = None) -> Path:
    skill_path = find_skill(catalog, name).skill_path
    command = editor_command(environ)
    editor = " ".join(command)

    logger.debug("Launching editor", editor=editor, path=str(skill_path))
    try:
        result = subprocess.run([*command, str(skill_path)], check=False)
    except OSError as err:
        raise EditorError(editor, str(err)) from err

    if result.returncode != 0:
        raise EditorError(editor, f"exited with status {result.returncode}")
    return skill_path
