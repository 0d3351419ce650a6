"""Tests for pushing source skills into tool directories."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from skillsync.diagnostics import Diagnostics
from skillsync.errors import PromptCanceledError, SkillNotFoundError
from skillsync.prompts import Decision
from skillsync.push import push_skills, push_status
from skillsync.tools import Tool
from skillsync.types import PushStatus

from .conftest import ScriptedConfirm, reload, skill_content, tool_dir, write_skill

if TYPE_CHECKING:
    from pathlib import Path

    from .conftest import FakePaths


def test_push_status() -> None:
    assert push_status("a\n", None) is PushStatus.NEW
    assert push_status("a\n", "a\r\n") is PushStatus.UNCHANGED
    assert push_status("a\n", "b\n") is PushStatus.MODIFIED


class TestPushSkills:
    @pytest.fixture(autouse=True)
    def _setup(self, paths: FakePaths, source_root: Path) -> None:
        self.paths = paths
        self.source_root = source_root
        self.diagnostics = Diagnostics()

    def _push(self, confirm=None, **kwargs):
        catalog = reload([self.source_root], self.paths)
        return push_skills(catalog, confirm or ScriptedConfirm(), self.diagnostics, paths=self.paths, **kwargs)

    def _installed(self, tool: Tool, name: str = "alpha") -> str:
        return (tool_dir(self.paths, tool) / name / "SKILL.md").read_text(encoding="utf-8")

    def test_new_skill_is_rendered_per_tool(self) -> None:
        write_skill(self.source_root, "alpha", skill_content("alpha", "Hello {{ tool }}.\n"))

        outcomes = self._push()

        assert [(o.tool, o.result) for o in outcomes] == [(tool, "new") for tool in Tool]
        assert "Hello claude." in self._installed(Tool.CLAUDE)
        assert "Hello gemini." in self._installed(Tool.GEMINI)

    def test_push_is_idempotent(self) -> None:
        write_skill(self.source_root, "alpha")
        self._push()
        before = {tool: self._installed(tool) for tool in Tool}

        outcomes = self._push()

        assert {o.result for o in outcomes} == {"unchanged"}
        assert {o.marker for o in outcomes} == {"="}
        assert {tool: self._installed(tool) for tool in Tool} == before

    def test_modified_copy_asks_before_overwriting(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CODEX), "alpha", skill_content("alpha", "Local edit.\n"))
        confirm = ScriptedConfirm(Decision.CONFIRM)

        outcomes = self._push(confirm, tools=[Tool.CODEX])

        assert outcomes[0].status is PushStatus.MODIFIED
        assert outcomes[0].result == "pushed"
        assert confirm.messages == ["Overwrite modified skill 'alpha' in Codex?"]
        assert "Body." in self._installed(Tool.CODEX)

    def test_declined_overwrite_is_skipped(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CODEX), "alpha", skill_content("alpha", "Local edit.\n"))

        outcomes = self._push(ScriptedConfirm(Decision.DECLINE), tools=[Tool.CODEX])

        assert outcomes[0].result == "skipped"
        assert "Local edit." in self._installed(Tool.CODEX)

    def test_cancel_aborts(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CODEX), "alpha", skill_content("alpha", "Local edit.\n"))

        with pytest.raises(PromptCanceledError):
            self._push(ScriptedConfirm(Decision.CANCEL))

    def test_force_skips_the_prompt(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CODEX), "alpha", skill_content("alpha", "Local edit.\n"))
        confirm = ScriptedConfirm()

        self._push(confirm, force=True)

        assert confirm.messages == []
        assert "Body." in self._installed(Tool.CODEX)

    def test_dry_run_writes_nothing(self) -> None:
        write_skill(self.source_root, "alpha")

        outcomes = self._push(dry_run=True)

        assert {o.result for o in outcomes} == {"new"}
        assert not tool_dir(self.paths, Tool.CLAUDE).exists()

    def test_render_failure_skips_the_pair(self) -> None:
        write_skill(self.source_root, "broken", skill_content("broken", "{{ nope }}\n"))
        write_skill(self.source_root, "fine")

        outcomes = self._push(tools=[Tool.CLAUDE])

        assert [(o.skill, o.result) for o in outcomes] == [("broken", "skipped"), ("fine", "new")]
        assert len(self.diagnostics.skipped) == 1

    def test_named_skills_only(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(self.source_root, "beta")

        outcomes = self._push(names=["beta"], tools=[Tool.CLAUDE])

        assert [o.skill for o in outcomes] == ["beta"]
        assert not (tool_dir(self.paths, Tool.CLAUDE) / "alpha").exists()

    def test_unknown_name(self) -> None:
        with pytest.raises(SkillNotFoundError):
            self._push(names=["ghost"])
