"""Interactive decisions, kept behind callbacks so planning stays free of terminal I/O."""

from __future__ import annotations

import sys
import time
from enum import Enum
from typing import TYPE_CHECKING, Callable, Protocol

from .errors import PromptCanceledError
from .types import VariantChoice

if TYPE_CHECKING:
    from pathlib import Path

    from .types import PullPlan, PullVariant


class Decision(str, Enum):
    CONFIRM = "confirm"
    DECLINE = "decline"
    CANCEL = "cancel"


ConfirmCallback = Callable[[str], Decision]


def require(decision: Decision) -> bool:
    """Map a decision to proceed/skip, raising on cancellation."""
    if decision is Decision.CANCEL:
        raise PromptCanceledError()
    return decision is Decision.CONFIRM


class PullResolver(Protocol):
    """Callbacks used by the pull command."""

    def confirm_pull(self, plan: PullPlan, variant: PullVariant) -> Decision: ...

    def choose_variant(self, plan: PullPlan, variants: list[PullVariant]) -> VariantChoice | None:
        """Return the user's choice, or None when the answer was not understood."""
        ...

    def show_diff(self, diff_text: str) -> None: ...

    def choose_source(self, sources: list[Path]) -> Path | None:
        """Pick a target source root for an orphan pull; None cancels."""
        ...


def format_age(modified: float, now: float | None = None) -> str:
    """Format a relative age such as ``3 hours ago``."""
    seconds = max(0, int((now if now is not None else time.time()) - modified))
    if seconds < 60:
        return "moments ago"
    if seconds < 60 * 60:
        return _ago(seconds // 60, "minute")
    if seconds < 60 * 60 * 24:
        return _ago(seconds // 3600, "hour")
    return _ago(seconds // 86400, "day")


def _ago(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def _ask(message: str) -> str | None:
    try:
        return input(message)
    except (EOFError, KeyboardInterrupt):
        print(file=sys.stderr)
        return None


def terminal_confirm(message: str) -> Decision:
    """Yes/no prompt on stdin; anything but ``y``/``yes`` declines."""
    answer = _ask(f"{message} [y/N] ")
    if answer is None:
        return Decision.CANCEL
    return Decision.CONFIRM if answer.strip().lower() in {"y", "yes"} else Decision.DECLINE


class TerminalPullResolver:
    """PullResolver that prompts on stdin/stdout."""

    def confirm_pull(self, plan: PullPlan, variant: PullVariant) -> Decision:
        if variant.orphan:
            message = f"Create skill '{plan.name}' from {variant.label()}?"
        else:
            message = f"Pull changes for '{plan.name}' from {variant.label()}?"
        return terminal_confirm(message)

    def choose_variant(self, plan: PullPlan, variants: list[PullVariant]) -> VariantChoice | None:
        print(f"{plan.name} has different modifications in multiple tools:\n")
        for index, variant in enumerate(variants, start=1):
            print(f"  [{index}] {variant.label()}  (modified {format_age(variant.skill.modified)})")
        print("  [d] Show diff between two versions")
        print("  [s] Skip")

        answer = _ask("Which version to pull? [s] ")
        if answer is None:
            raise PromptCanceledError()
        return parse_variant_choice(answer, len(variants))

    def show_diff(self, diff_text: str) -> None:
        print(diff_text, end="" if diff_text.endswith("\n") else "\n")

    def choose_source(self, sources: list[Path]) -> Path | None:
        print("Available sources:")
        for index, source in enumerate(sources, start=1):
            print(f"  [{index}] {source}")
        answer = _ask("Select target source [1] ")
        if answer is None:
            return None
        answer = answer.strip() or "1"
        if answer.isdigit() and 1 <= int(answer) <= len(sources):
            return sources[int(answer) - 1]
        return None


def parse_variant_choice(answer: str, count: int) -> VariantChoice | None:
    """Parse ``s``, ``d``, ``d 1 3`` or a 1-based index."""
    parts = answer.strip().lower().split()
    if not parts or parts[0] == "s":
        return VariantChoice(kind="skip")
    if parts[0] == "d":
        if len(parts) == 3 and parts[1].isdigit() and parts[2].isdigit():
            return VariantChoice(kind="diff", index=int(parts[1]) - 1, other=int(parts[2]) - 1)
        if count == 2:
            return VariantChoice(kind="diff", index=0, other=1)
        return None
    if parts[0].isdigit():
        return VariantChoice(kind="select", index=int(parts[0]) - 1)
    return None
