"""Per-tool rendering of skill templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jinja2 import Environment, StrictUndefined, TemplateError

from .errors import TemplateRenderError

if TYPE_CHECKING:
    from .tools import Tool

# Only ``tool`` is bound; any other name is an error rather than an empty string.
_env = Environment(
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


def render_template(template: str, tool: Tool) -> str:
    """Render a skill template for a specific tool."""
    try:
        return _env.from_string(template).render(tool=tool.id)
    except TemplateError as err:
        raise TemplateRenderError(str(err)) from err
