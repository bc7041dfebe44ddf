"""Unit tests for the CLI entry point."""

import pytest

from contest_scp.cli.main import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["SCP_DIR", "SCP_START", "SCP_HOURS", "SCP_TOP_PERCENT", "LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def contest_dir(tmp_path, write_log, qso_line):
    """Contest where DL1XYZ is confirmed by two logs and JA1QQQ by none."""
    directory = tmp_path / "cqww"
    write_log(
        directory,
        "w1aa.log",
        [
            qso_line("W1AA", "K2BB", minute=10),
            qso_line("W1AA", "DL1XYZ", minute=20, frequency=14030),
            qso_line("W1AA", "JA1QQQ", minute=100, frequency=14200),
        ],
    )
    write_log(
        directory,
        "k2bb.log",
        [
            qso_line("K2BB", "W1AA", minute=10),
            qso_line("K2BB", "DL1XYZ", minute=60, frequency=14100),
        ],
    )
    return directory


def _args(contest_dir, *extra: str) -> list[str]:
    return ["--dir", str(contest_dir), "--start", "2023-01-28", "--hours", "24", *extra]


class TestMain:
    """Tests for main."""

    def test_prints_call_list(self, contest_dir, capsys) -> None:
        assert main(_args(contest_dir)) == 0

        assert capsys.readouterr().out.splitlines() == ["DL1XYZ", "K2BB", "W1AA"]

    def test_extended_output(self, contest_dir, capsys) -> None:
        assert main(_args(contest_dir, "--extended")) == 0

        assert capsys.readouterr().out.splitlines() == ["DL1XYZ 2", "K2BB 1", "W1AA 1"]

    def test_missing_dir(self, capsys) -> None:
        assert main([]) == 1

        assert "ERROR: --dir is required" in capsys.readouterr().err

    def test_no_valid_logs(self, tmp_path, capsys) -> None:
        (tmp_path / "empty").mkdir()

        assert main(_args(tmp_path / "empty")) == 1

        assert "ERROR: No valid logs" in capsys.readouterr().err

    def test_keyboard_interrupt(self, contest_dir, monkeypatch, capsys) -> None:
        def interrupted(config):
            raise KeyboardInterrupt

        monkeypatch.setattr("contest_scp.cli.main.run_scp", interrupted)

        assert main(_args(contest_dir)) == 130
        assert "Interrupted" in capsys.readouterr().err

    def test_unexpected_error(self, contest_dir, monkeypatch, capsys) -> None:
        def broken(config):
            raise RuntimeError("boom")

        monkeypatch.setattr("contest_scp.cli.main.run_scp", broken)

        assert main(_args(contest_dir)) == 1
        assert "ERROR: Unexpected error: boom" in capsys.readouterr().err
