"""End-to-end tests for the command line interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from skillsync.cli import main
from skillsync.constants import CONFIG_ENV_VAR

from .conftest import T0, T1, skill_content, write_skill

if TYPE_CHECKING:
    from pathlib import Path


class TestCli:
    @pytest.fixture(autouse=True)
    def _setup(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        self.home = tmp_path / "home"
        self.project = tmp_path / "project"
        self.home.mkdir()
        self.project.mkdir()
        monkeypatch.setenv("HOME", str(self.home))
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(self.project)

    def _init(self) -> Path:
        source = self.home / "skills"
        assert main(["init", "--source", str(source)]) == 0
        return source

    def test_init_creates_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        source = self._init()

        assert source.is_dir()
        assert (self.home / ".skills.yaml").is_file()
        assert "Created config at ~/.skills.yaml" in capsys.readouterr().out

    def test_missing_config_is_an_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["list"]) == 1
        assert "No sources configured" in capsys.readouterr().err

    def test_push_then_list(self, capsys: pytest.CaptureFixture[str]) -> None:
        source = self._init()
        write_skill(source, "alpha")
        capsys.readouterr()

        assert main(["push", "--all"]) == 0
        out = capsys.readouterr().out
        assert "Pushing Claude Code..." in out
        assert "+ alpha (new)" in out

        assert main(["list"]) == 0
        out = capsys.readouterr().out
        assert "alpha\n  source: ~/skills\n" in out
        assert "claude: synced" in out

    def test_sync_reports_conflicts(self, capsys: pytest.CaptureFixture[str]) -> None:
        source = self._init()
        write_skill(source, "alpha", mtime=T0)
        write_skill(self.home / ".claude" / "skills", "alpha", skill_content("alpha", "One.\n"), mtime=T1)
        write_skill(self.home / ".codex" / "skills", "alpha", skill_content("alpha", "Two.\n"), mtime=T1)
        capsys.readouterr()

        assert main(["sync"]) == 1
        assert "divergent modifications in [claude] and [codex]" in capsys.readouterr().err

        assert main(["sync", "--prefer-source"]) == 0
        assert "Synced: 1 pushed, 0 pulled." in capsys.readouterr().out

        assert main(["sync"]) == 0
        assert "All skills are in sync." in capsys.readouterr().out

    def test_unknown_skill(self, capsys: pytest.CaptureFixture[str]) -> None:
        self._init()

        assert main(["diff", "ghost"]) == 1
        assert "Skill not found: ghost" in capsys.readouterr().err

    def test_new_then_validate(self, capsys: pytest.CaptureFixture[str]) -> None:
        source = self._init()

        assert main(["new", str(source / "fresh")]) == 0
        assert main(["validate"]) == 0
        out = capsys.readouterr().out
        assert "✓ fresh" in out
        assert "1 valid, 0 invalid" in out

    def test_validate_unknown_skill_fails(self, capsys: pytest.CaptureFixture[str]) -> None:
        self._init()

        assert main(["validate", "ghost"]) == 1
        captured = capsys.readouterr()
        assert "Skill not found: ghost" in captured.err
        assert "valid" not in captured.out

    def test_show_prints_source(self, capsys: pytest.CaptureFixture[str]) -> None:
        source = self._init()
        write_skill(source, "alpha", skill_content("alpha", "No trailing newline."))
        capsys.readouterr()

        assert main(["show", "alpha"]) == 0
        assert capsys.readouterr().out == skill_content("alpha", "No trailing newline.\n")

    def test_unload_removes_installs(self, capsys: pytest.CaptureFixture[str]) -> None:
        source = self._init()
        write_skill(source, "alpha")
        write_skill(self.home / ".codex" / "skills", "alpha")
        capsys.readouterr()

        assert main(["unload", "alpha", "--force"]) == 0
        out = capsys.readouterr().out
        assert "Unloading alpha..." in out
        assert "  codex : - (removed)" in out
        assert "  claude: - (not installed)" in out
        assert not (self.home / ".codex" / "skills" / "alpha").exists()
        assert (source / "alpha" / "SKILL.md").is_file()

    def test_mv_renames_everywhere(self, capsys: pytest.CaptureFixture[str]) -> None:
        source = self._init()
        write_skill(source, "alpha")
        write_skill(self.home / ".codex" / "skills", "alpha")
        capsys.readouterr()

        assert main(["mv", "alpha", "omega", "--force"]) == 0
        out = capsys.readouterr().out
        assert "Renaming 'alpha' -> 'omega'" in out
        assert "  codex: ~/.codex/skills/alpha -> ~/.codex/skills/omega" in out
        assert "Done. Renamed 2 location(s)." in out
        assert "name: omega" in (self.home / ".codex" / "skills" / "omega" / "SKILL.md").read_text()

    def test_mv_dry_run(self, capsys: pytest.CaptureFixture[str]) -> None:
        source = self._init()
        write_skill(source, "alpha")
        capsys.readouterr()

        assert main(["mv", "alpha", "omega", "--dry-run"]) == 0
        assert "Dry run - no changes made." in capsys.readouterr().out
        assert (source / "alpha").is_dir()
