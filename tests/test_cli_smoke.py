"""
Smoke tests for the ironmind CLI.

Tests basic functionality:
- App runs without errors
- Profile and history files are created
- Rotation drives today's workout
- Sessions can be logged, listed and deleted
- Smart Targets and nutrition totals come back as JSON
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ironmind.cli.main import app


runner = CliRunner()


@pytest.fixture
def temp_history_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _init(history_path: Path) -> None:
    result = runner.invoke(app, [
        "init",
        "--history-path", str(history_path),
        "--name", "Alex",
        "--age", "30",
        "--weight-kg", "80",
        "--height-cm", "180",
        "--gender", "male",
    ])
    assert result.exit_code == 0, result.output


def _log_bench(history_path: Path, date: str, sets: str = "50x10, 52.5x8") -> None:
    result = runner.invoke(app, [
        "log-session",
        "--history-path", str(history_path),
        "--type", "Push",
        "--date", date,
        "--duration", "45",
        "-e", f"Chest: Bench Press: {sets}",
    ])
    assert result.exit_code == 0, result.output


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        """Test that app runs and shows help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "ironmind" in result.output or "workout" in result.output.lower()

    def test_init_creates_history(self, temp_history_dir):
        """Test init creates history and profile files."""
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)

        assert history_path.exists()
        assert (temp_history_dir / "profile.json").exists()

    def test_init_twice_keeps_rotation(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        runner.invoke(app, ["set-split", "ppl", "--start", "2024-06-10", "-p", str(history_path)])

        result = runner.invoke(app, ["init", "-p", str(history_path), "--age", "31"])
        assert result.exit_code == 0
        assert "Updated profile" in result.output
        profile = json.loads((temp_history_dir / "profile.json").read_text())
        assert profile["age"] == 31
        assert profile["split_type"] == "ppl"

    def test_command_before_init_fails(self, temp_history_dir):
        result = runner.invoke(app, ["show-history", "-p", str(temp_history_dir / "sessions.jsonl")])
        assert result.exit_code == 1
        assert "init" in result.output

    def test_rotation_sets_today(self, temp_history_dir):
        """set-split anchors the rotation; today follows it."""
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)

        result = runner.invoke(app, ["set-split", "ppl", "--start", "2024-06-10", "-p", str(history_path)])
        assert result.exit_code == 0
        assert "Push/Pull/Legs" in result.output

        result = runner.invoke(app, [
            "today", "--date", "2024-06-11", "--days", "7", "--json", "-p", str(history_path),
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["workout"] == "Pull"
        assert data["rest_day"] is False
        assert data["exercises"]
        # PPL PPL Rest, anchored on 2024-06-10
        assert [d["workout"] for d in data["schedule"]] == [
            "Pull", "Legs", "Push", "Pull", "Legs", "Rest Day", "Push",
        ]

    def test_clear_rotation_uses_weekly_schedule(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        runner.invoke(app, ["set-split", "ppl", "-p", str(history_path)])

        result = runner.invoke(app, ["set-split", "--clear", "-p", str(history_path)])
        assert result.exit_code == 0

        # 2024-06-10 is a Monday
        result = runner.invoke(app, ["today", "--date", "2024-06-10", "--json", "-p", str(history_path)])
        assert json.loads(result.output)["workout"] == "Chest & Triceps"

    def test_custom_split_needs_days(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        result = runner.invoke(app, ["set-split", "custom", "-p", str(history_path)])
        assert result.exit_code == 1

    def test_log_session_adds_to_history(self, temp_history_dir):
        """Test log-session adds entry to history."""
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)

        result = runner.invoke(app, [
            "log-session",
            "--history-path", str(history_path),
            "--type", "Push",
            "--date", "2024-06-10",
            "-e", "Chest: Bench Press: 50x10, 52.5x8",
            "-e", "Triceps: Dips: 0x12x3",
        ])

        assert result.exit_code == 0
        assert "Logged" in result.output

        lines = history_path.read_text().strip().splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["type"] == "Push"
        assert [len(ex["sets"]) for ex in record["exercises"]] == [2, 3]

    def test_log_session_on_rest_day_needs_type(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)

        # 2024-06-15 is a Saturday
        result = runner.invoke(app, [
            "log-session", "-p", str(history_path), "--date", "2024-06-15", "-e", "Bench Press: 50x10",
        ])
        assert result.exit_code == 1
        assert "rest day" in result.output

    def test_log_session_rejects_bad_sets(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)

        result = runner.invoke(app, [
            "log-session", "-p", str(history_path), "--type", "Push", "-e", "Bench Press: fifty",
        ])
        assert result.exit_code == 1
        assert history_path.read_text() == ""

    def test_interactive_log_session_is_timed(self, temp_history_dir, monkeypatch):
        """Sets typed at the prompt; the session lasts until the last prompt."""
        from ironmind.cli.commands import sessions as session_commands

        clock = iter(range(1_700_000_000_000, 1_800_000_000_000, 60_000))
        monkeypatch.setattr(session_commands, "now_ms", lambda: next(clock))

        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)

        # "Zzz" has no starting exercises, so the only one is the extra
        result = runner.invoke(
            app,
            ["log-session", "-p", str(history_path), "--type", "Zzz", "--date", "2024-06-10"],
            input="Bench Press\n50x10\n=\n52.5x8\n\n\n",
        )
        assert result.exit_code == 0, result.output
        assert "Logged Zzz session" in result.output

        record = json.loads(history_path.read_text().strip())
        assert [(s["weight"], s["reps"]) for s in record["exercises"][0]["sets"]] == [
            (50.0, 10), (50.0, 10), (52.5, 8),
        ]
        # start, three sets, finish: one clock tick each
        assert record["end_time"] - record["start_time"] == 4 * 60_000
        assert record["duration"] == 240

    def test_limit_must_be_positive(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        _log_bench(history_path, "2024-06-10")

        result = runner.invoke(app, ["show-history", "--limit", "0", "--json", "-p", str(history_path)])
        assert result.exit_code == 1
        result = runner.invoke(app, ["report-data", "--limit", "0", "-p", str(history_path)])
        assert result.exit_code == 1
        assert "--limit" in result.output

        result = runner.invoke(app, ["show-history", "--limit", "1", "--json", "-p", str(history_path)])
        assert len(json.loads(result.output)) == 1

    def test_show_history(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        _log_bench(history_path, "2024-06-10")

        result = runner.invoke(app, ["show-history", "-p", str(history_path)])
        assert result.exit_code == 0
        assert "Push" in result.output

        result = runner.invoke(app, ["show-history", "--json", "-p", str(history_path)])
        data = json.loads(result.output)
        assert data[0]["volume"] == 500 + 420

    def test_target_json(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        _log_bench(history_path, "2024-06-10")

        result = runner.invoke(app, [
            "target", "Chest: Bench Press", "--type", "Push", "--date", "2024-06-15", "--json",
            "-p", str(history_path),
        ])
        assert result.exit_code == 0
        target = json.loads(result.output)["targets"]["Chest: Bench Press"]
        assert target["has_data"] is True
        assert target["session_count"] == 1
        assert target["days_since_last_session"] == 5
        assert target["confidence"] == "First session logged"

    def test_target_other_type_has_no_data(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        _log_bench(history_path, "2024-06-10")

        result = runner.invoke(app, [
            "target", "Chest: Bench Press", "--type", "Pull", "--date", "2024-06-15", "--json",
            "-p", str(history_path),
        ])
        target = json.loads(result.output)["targets"]["Chest: Bench Press"]
        assert target["has_data"] is False

    def test_target_on_rest_day(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        result = runner.invoke(app, ["target", "--date", "2024-06-15", "-p", str(history_path)])
        assert result.exit_code == 0
        assert "rest day" in result.output

    def test_report_data_needs_sessions(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        _log_bench(history_path, "2024-06-10")

        result = runner.invoke(app, ["report-data", "-p", str(history_path)])
        assert result.exit_code == 1
        assert "8 sessions" in result.output

    def test_report_data(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        for day in range(1, 9):
            _log_bench(history_path, f"2024-06-{day:02d}")

        result = runner.invoke(app, ["report-data", "-p", str(history_path)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["session_count"] == 8
        assert data["profile"]["name"] == "Alex"

    def test_delete_record(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        _log_bench(history_path, "2024-06-10")
        _log_bench(history_path, "2024-06-12")

        result = runner.invoke(app, ["delete-record", "1", "--force", "-p", str(history_path)])
        assert result.exit_code == 0
        assert "Deleted" in result.output

        lines = history_path.read_text().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["date"] == "2024-06-12"

    def test_delete_record_out_of_range(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        _log_bench(history_path, "2024-06-10")

        result = runner.invoke(app, ["delete-record", "5", "--force", "-p", str(history_path)])
        assert result.exit_code == 1

    def test_nutrition_totals(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)

        result = runner.invoke(app, ["log-food", "2 eggs", "--date", "2024-06-10", "-p", str(history_path)])
        assert result.exit_code == 0
        assert "Logged Eggs" in result.output

        result = runner.invoke(app, ["log-water", "500", "--date", "2024-06-10", "-p", str(history_path)])
        assert result.exit_code == 0

        result = runner.invoke(app, ["nutrition", "--date", "2024-06-10", "--json", "-p", str(history_path)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["totals"]["calories"] == 155
        assert data["totals"]["water"] == 500
        assert data["goals"]["calories"] == 2759

    def test_unknown_food(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        result = runner.invoke(app, ["log-food", "unicorn steak", "-p", str(history_path)])
        assert result.exit_code == 1

    def test_foods_search(self):
        result = runner.invoke(app, ["foods", "chicken"])
        assert result.exit_code == 0
        assert "Chicken" in result.output

    def test_show_profile(self, temp_history_dir):
        history_path = temp_history_dir / "sessions.jsonl"
        _init(history_path)
        result = runner.invoke(app, ["show-profile", "-p", str(history_path)])
        assert result.exit_code == 0
        assert "Alex" in result.output
