"""Tests for pull planning and variant resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from skillsync.diagnostics import Diagnostics
from skillsync.errors import PromptCanceledError, SkillNotFoundError
from skillsync.prompts import Decision
from skillsync.pull import collect_pull_plans, pull_skills
from skillsync.tools import Tool
from skillsync.types import VariantChoice

from .conftest import local_dir, reload, skill_content, tool_dir, write_skill

if TYPE_CHECKING:
    from pathlib import Path

    from skillsync.types import PullPlan, PullVariant

    from .conftest import FakePaths


class ScriptedResolver:
    """PullResolver that replays canned answers and records what it was shown."""

    def __init__(
        self,
        decisions: list[Decision] | None = None,
        choices: list[VariantChoice | None] | None = None,
        source: Path | None = None,
    ) -> None:
        self.decisions = decisions or []
        self.choices = choices or []
        self.source = source
        self.diffs: list[str] = []
        self.source_prompts = 0

    def confirm_pull(self, plan: PullPlan, variant: PullVariant) -> Decision:
        return self.decisions.pop(0)

    def choose_variant(self, plan: PullPlan, variants: list[PullVariant]) -> VariantChoice | None:
        return self.choices.pop(0)

    def show_diff(self, diff_text: str) -> None:
        self.diffs.append(diff_text)

    def choose_source(self, sources: list[Path]) -> Path | None:
        self.source_prompts += 1
        return self.source


class TestCollectPullPlans:
    @pytest.fixture(autouse=True)
    def _setup(self, paths: FakePaths, source_root: Path) -> None:
        self.paths = paths
        self.source_root = source_root

    def _plans(self, name: str | None = None) -> list[PullPlan]:
        return collect_pull_plans(reload([self.source_root], self.paths), Diagnostics(), name)

    def test_beta_scenario_is_an_orphan_candidate(self) -> None:
        write_skill(tool_dir(self.paths, Tool.CLAUDE), "beta")

        (plan,) = self._plans()

        assert plan.name == "beta"
        assert plan.source is None
        assert [(v.tool, v.orphan) for v in plan.variants] == [(Tool.CLAUDE, True)]

    def test_only_modified_copies_are_variants(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CLAUDE), "alpha")
        write_skill(tool_dir(self.paths, Tool.CODEX), "alpha", skill_content("alpha", "Edit.\n"))

        (plan,) = self._plans()

        assert [v.tool for v in plan.variants] == [Tool.CODEX]
        assert not plan.variants[0].orphan

    def test_local_copies_are_variants(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(local_dir(self.paths, Tool.GEMINI), "alpha", skill_content("alpha", "Project edit.\n"))

        (plan,) = self._plans()

        assert plan.variants[0].origin == "local"
        assert plan.variants[0].label() == "Gemini (local)"

    def test_nothing_to_pull(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CLAUDE), "alpha")

        assert self._plans() == []

    def test_unknown_name(self) -> None:
        with pytest.raises(SkillNotFoundError):
            self._plans("ghost")


class TestPullSkills:
    @pytest.fixture(autouse=True)
    def _setup(self, paths: FakePaths, source_root: Path) -> None:
        self.paths = paths
        self.source_root = source_root
        self.diagnostics = Diagnostics()

    def _pull(self, resolver: ScriptedResolver, sources: list[Path] | None = None, **kwargs):
        sources = sources or [self.source_root]
        catalog = reload(sources, self.paths)
        plans = collect_pull_plans(catalog, self.diagnostics)
        return pull_skills(plans, sources, resolver, self.diagnostics, paths=self.paths, **kwargs)

    def _source_text(self, name: str = "alpha") -> str:
        return (self.source_root / name / "SKILL.md").read_text(encoding="utf-8")

    def test_beta_orphan_is_created_in_the_only_source(self) -> None:
        content = skill_content("beta", "Written in Claude.\n")
        write_skill(tool_dir(self.paths, Tool.CLAUDE), "beta", content)

        (outcome,) = self._pull(ScriptedResolver([Decision.CONFIRM]))

        assert outcome.result == "created"
        assert outcome.target == self.source_root
        assert self._source_text("beta") == content

    def test_single_variant_confirmed(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CODEX), "alpha", skill_content("alpha", "Edit.\n"))

        (outcome,) = self._pull(ScriptedResolver([Decision.CONFIRM]))

        assert outcome.result == "pulled"
        assert outcome.variant.tool is Tool.CODEX
        assert self._source_text() == skill_content("alpha", "Edit.\n")

    def test_single_variant_declined(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CODEX), "alpha", skill_content("alpha", "Edit.\n"))

        (outcome,) = self._pull(ScriptedResolver([Decision.DECLINE]))

        assert outcome.result == "skipped"
        assert self._source_text() == skill_content("alpha")

    def test_cancel_aborts(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CODEX), "alpha", skill_content("alpha", "Edit.\n"))

        with pytest.raises(PromptCanceledError):
            self._pull(ScriptedResolver([Decision.CANCEL]))

    def test_multiple_variants_diff_then_select(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CLAUDE), "alpha", skill_content("alpha", "Claude edit.\n"))
        write_skill(tool_dir(self.paths, Tool.CODEX), "alpha", skill_content("alpha", "Codex edit.\n"))
        resolver = ScriptedResolver(
            choices=[
                VariantChoice(kind="diff", index=0, other=1),
                None,
                VariantChoice(kind="select", index=7),
                VariantChoice(kind="select", index=1),
            ]
        )

        (outcome,) = self._pull(resolver)

        assert len(resolver.diffs) == 1
        assert "-Claude edit." in resolver.diffs[0]
        assert "+Codex edit." in resolver.diffs[0]
        assert outcome.variant.tool is Tool.CODEX
        assert "Codex edit." in self._source_text()

    def test_multiple_variants_skipped(self) -> None:
        write_skill(self.source_root, "alpha")
        write_skill(tool_dir(self.paths, Tool.CLAUDE), "alpha", skill_content("alpha", "Claude edit.\n"))
        write_skill(local_dir(self.paths, Tool.CLAUDE), "alpha", skill_content("alpha", "Project edit.\n"))

        (outcome,) = self._pull(ScriptedResolver(choices=[VariantChoice(kind="skip")]))

        assert outcome.result == "skipped"
        assert self._source_text() == skill_content("alpha")

    def test_orphan_goes_to_target(self, tmp_path: Path) -> None:
        other = tmp_path / "other"
        other.mkdir()
        write_skill(tool_dir(self.paths, Tool.CLAUDE), "beta")
        resolver = ScriptedResolver([Decision.CONFIRM])

        (outcome,) = self._pull(resolver, [self.source_root, other], target=other)

        assert outcome.target == other
        assert (other / "beta" / "SKILL.md").is_file()
        assert resolver.source_prompts == 0

    def test_orphan_asks_for_a_source_when_several_exist(self, tmp_path: Path) -> None:
        other = tmp_path / "other"
        other.mkdir()
        write_skill(tool_dir(self.paths, Tool.CLAUDE), "beta")
        resolver = ScriptedResolver([Decision.CONFIRM], source=other)

        (outcome,) = self._pull(resolver, [self.source_root, other])

        assert resolver.source_prompts == 1
        assert outcome.target == other
        assert (other / "beta" / "SKILL.md").is_file()

    def test_declined_source_choice_cancels(self, tmp_path: Path) -> None:
        other = tmp_path / "other"
        other.mkdir()
        write_skill(tool_dir(self.paths, Tool.CLAUDE), "beta")

        with pytest.raises(PromptCanceledError):
            self._pull(ScriptedResolver([Decision.CONFIRM]), [self.source_root, other])

    def test_dry_run_writes_nothing(self) -> None:
        write_skill(tool_dir(self.paths, Tool.CLAUDE), "beta")

        (outcome,) = self._pull(ScriptedResolver([Decision.CONFIRM]), dry_run=True)

        assert outcome.result == "created"
        assert not (self.source_root / "beta").exists()
