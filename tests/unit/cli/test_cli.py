"""Tests for CLI command plumbing."""

from pathlib import Path

import pytest

from indexsync.cli import util as cli_util
from indexsync.cli.commands import index as index_commands
from indexsync.cli.commands import settings as settings_commands
from indexsync.cli.main import app
from indexsync.cli.util import run_with_container
from indexsync.domain.shared.error import BackendError


class Article:
    pass


@pytest.fixture
def isolated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("INDEXSYNC_CONFIG_FILE", raising=False)
    monkeypatch.setattr(cli_util, "configure_logging", lambda config: None)
    return monkeypatch


class TestRunWithContainer:
    """Tests for run_with_container."""

    def test_returns_result_of_unit_of_work(self, isolated: pytest.MonkeyPatch) -> None:
        async def answer(uow):
            return 42

        assert run_with_container(answer) == 42

    def test_indexsync_errors_exit_with_status_1(
        self, isolated: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        async def fail(uow):
            raise BackendError("Algolia unreachable")

        with pytest.raises(SystemExit) as exc_info:
            run_with_container(fail)

        assert exc_info.value.code == 1
        assert "Algolia unreachable" in capsys.readouterr().err


    def test_invalid_configuration_exits_with_status_1(
        self,
        isolated: pytest.MonkeyPatch,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        config_file = tmp_path / "indexsync.yaml"
        config_file.write_text(
            "search:\n"
            "  indices:\n"
            "    - name: ordered\n"
            "      entity: collections.OrderedDict\n"
            "    - name: ordered\n"
            "      entity: collections.Counter\n"
        )
        isolated.setenv("INDEXSYNC_CONFIG_FILE", str(config_file))
        reached = []

        async def record(uow):
            reached.append(uow)

        with pytest.raises(SystemExit) as exc_info:
            run_with_container(record)

        assert exc_info.value.code == 1
        assert reached == []
        err = " ".join(capsys.readouterr().err.split())
        assert "declared more than once" in err
        assert "ConfigurationError" in err


class TestSettingsCommands:
    """Tests for the settings command group."""

    def test_backup_reports_each_index(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(
            settings_commands,
            "run_with_container",
            lambda fn: ["Saved settings for app_posts", "Saved settings for app_pages"],
        )

        settings_commands.backup(["posts", "pages"])

        out = capsys.readouterr().out
        assert "Saved settings for app_posts" in out
        assert "Saved settings for app_pages" in out

    def test_push_warns_when_nothing_was_pushed(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(settings_commands, "run_with_container", lambda fn: [])

        settings_commands.push()

        assert "No index settings were processed" in capsys.readouterr().out


class TestIndexCommands:
    """Tests for the index command group."""

    def test_import_prints_counts_per_record_type(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(index_commands, "run_with_container", lambda fn: {Article: 3})

        index_commands.import_records(["articles"])

        out = capsys.readouterr().out
        assert "Article" in out
        assert "Imported 3 records" in out

    def test_clear_reports_each_cleared_index(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(
            index_commands, "run_with_container", lambda fn: ["app_posts", "app_pages"]
        )

        index_commands.clear()

        out = capsys.readouterr().out
        assert "Cleared app_posts" in out
        assert "Cleared app_pages" in out


class TestMainApp:
    def test_registers_command_groups(self) -> None:
        assert "index" in app
        assert "settings" in app
