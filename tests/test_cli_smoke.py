"""
Minimal smoke tests for the hiit CLI.

Tests basic functionality:
- App runs without errors
- Data directory initialises with sample routines
- Routines list, preview and import
- A one-second routine runs to completion
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from hiit_cli.cli.main import app


runner = CliRunner()

FAST_CONFIG = """\
timings:
  start_countdown: 0
  inter_rep_prepare: 0
  no_rest_transition: 0
  rest_prepare: 0
  inter_rep_rest: 0
display:
  emoji: false
  audio: false
"""

ONE_SECOND_ROUTINE = {
    "name": "One Second",
    "description": "Smoke test",
    "workouts": [{"name": "Jacks", "sets": 1, "length": 1, "rest": 0}],
}


@pytest.fixture
def temp_data_dir():
    """Create a temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _invoke(data_dir: Path, *args: str, **kwargs):
    return runner.invoke(app, ["--data-dir", str(data_dir), *args], **kwargs)


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        """Test that app runs and shows help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "hiit" in result.output.lower()

    def test_init_copies_samples(self, temp_data_dir):
        """Test init creates the routines directory with samples."""
        data_dir = temp_data_dir / "hiit"
        result = _invoke(data_dir, "init")

        assert result.exit_code == 0
        assert (data_dir / "routines" / "quick-hiit.json").exists()
        assert "Created data directory" in result.output

    def test_init_without_samples(self, temp_data_dir):
        result = _invoke(temp_data_dir, "init", "--no-samples")
        assert result.exit_code == 0
        assert list((temp_data_dir / "routines").glob("*.json")) == []

    def test_list(self, temp_data_dir):
        """Test list shows the bundled routines."""
        result = _invoke(temp_data_dir, "list")
        assert result.exit_code == 0
        assert "Available Routines" in result.output

    def test_data(self, temp_data_dir):
        result = _invoke(temp_data_dir, "data")
        assert result.exit_code == 0
        assert "Data Directory" in result.output

    def test_preview(self, temp_data_dir):
        result = _invoke(temp_data_dir, "preview", "tabata-burner")
        assert result.exit_code == 0
        assert "Single Round Time:" in result.output
        assert "(3 reps)" in result.output

    def test_preview_json(self, temp_data_dir):
        result = _invoke(temp_data_dir, "preview", "quick-hiit", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["name"] == "Quick HIIT"
        assert data["reps"] == 1
        assert len(data["exercises"]) == 4

    def test_preview_missing_routine(self, temp_data_dir):
        result = _invoke(temp_data_dir, "preview", "nope")
        assert result.exit_code == 1
        assert "Error" in result.output


class TestImport:
    """import validates and copies routine files."""

    def test_import(self, temp_data_dir):
        source = temp_data_dir / "mine.json"
        source.write_text(json.dumps(ONE_SECOND_ROUTINE), encoding="utf-8")

        result = _invoke(temp_data_dir, "import", str(source))

        assert result.exit_code == 0
        assert (temp_data_dir / "routines" / "one-second.json").exists()

    def test_import_with_name(self, temp_data_dir):
        source = temp_data_dir / "mine.json"
        source.write_text(json.dumps(ONE_SECOND_ROUTINE), encoding="utf-8")

        result = _invoke(temp_data_dir, "import", str(source), "--name", "quick")

        assert result.exit_code == 0
        assert (temp_data_dir / "routines" / "quick.json").exists()

    def test_import_invalid(self, temp_data_dir):
        source = temp_data_dir / "bad.json"
        source.write_text(json.dumps({"name": "Bad", "workouts": []}), encoding="utf-8")

        result = _invoke(temp_data_dir, "import", str(source))

        assert result.exit_code == 1
        assert "Error" in result.output
        assert not (temp_data_dir / "routines").exists()

    def test_import_existing_declined(self, temp_data_dir):
        source = temp_data_dir / "mine.json"
        source.write_text(json.dumps(ONE_SECOND_ROUTINE), encoding="utf-8")
        _invoke(temp_data_dir, "import", str(source))
        target = temp_data_dir / "routines" / "one-second.json"
        target.write_text("{}", encoding="utf-8")

        result = _invoke(temp_data_dir, "import", str(source), input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert target.read_text(encoding="utf-8") == "{}"

    def test_import_name_with_slash(self, temp_data_dir):
        """A "/" in the routine name becomes a dash in the file name."""
        source = temp_data_dir / "mine.json"
        source.write_text(json.dumps({**ONE_SECOND_ROUTINE, "name": "Push/Pull"}), encoding="utf-8")

        result = _invoke(temp_data_dir, "import", str(source))

        assert result.exit_code == 0
        assert (temp_data_dir / "routines" / "push-pull.json").exists()

    def test_import_name_cannot_leave_routines_dir(self, temp_data_dir):
        source = temp_data_dir / "mine.json"
        source.write_text(json.dumps(ONE_SECOND_ROUTINE), encoding="utf-8")

        result = _invoke(temp_data_dir, "import", str(source), "--name", "../escaped")

        assert result.exit_code == 0
        assert (temp_data_dir / "routines" / "escaped.json").exists()
        assert not (temp_data_dir / "escaped.json").exists()

    def test_import_unusable_name(self, temp_data_dir):
        source = temp_data_dir / "mine.json"
        source.write_text(json.dumps(ONE_SECOND_ROUTINE), encoding="utf-8")

        result = _invoke(temp_data_dir, "import", str(source), "--name", "..")

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_import_name_with_markup(self, temp_data_dir):
        """Routine names are printed literally, not as Rich markup."""
        source = temp_data_dir / "mine.json"
        source.write_text(json.dumps({**ONE_SECOND_ROUTINE, "name": "Legs [/x]"}), encoding="utf-8")

        result = _invoke(temp_data_dir, "import", str(source), "--name", "legs")

        assert result.exit_code == 0
        assert "Legs [/x]" in result.output

    def test_import_existing_forced(self, temp_data_dir):
        source = temp_data_dir / "mine.json"
        source.write_text(json.dumps(ONE_SECOND_ROUTINE), encoding="utf-8")
        _invoke(temp_data_dir, "import", str(source))

        result = _invoke(temp_data_dir, "import", str(source), "--force")

        assert result.exit_code == 0
        assert "Imported" in result.output


class TestRun:
    """run executes a routine end to end."""

    def test_run_one_second_routine(self, temp_data_dir):
        (temp_data_dir / "config.yaml").write_text(FAST_CONFIG, encoding="utf-8")
        routines = temp_data_dir / "routines"
        routines.mkdir()
        (routines / "one.json").write_text(json.dumps(ONE_SECOND_ROUTINE), encoding="utf-8")

        result = _invoke(temp_data_dir, "--no-audio", "run", "one")

        assert result.exit_code == 0
        assert "WORKOUT CRUSHED" in result.output

    def test_run_with_scalar_display_section(self, temp_data_dir):
        """A malformed config section is ignored instead of crashing the run."""
        config = FAST_CONFIG.split("display:")[0] + "display: true\n"
        (temp_data_dir / "config.yaml").write_text(config, encoding="utf-8")
        routines = temp_data_dir / "routines"
        routines.mkdir()
        (routines / "one.json").write_text(json.dumps(ONE_SECOND_ROUTINE), encoding="utf-8")

        result = _invoke(temp_data_dir, "--no-audio", "--no-emoji", "run", "one")

        assert result.exit_code == 0
        assert "WORKOUT CRUSHED" in result.output

    def test_run_missing_routine(self, temp_data_dir):
        result = _invoke(temp_data_dir, "run", "nope")
        assert result.exit_code == 1
        assert "not found" in result.output


class TestInteractiveMenu:
    """Main menu when no command is given."""

    def test_quit(self, temp_data_dir):
        result = _invoke(temp_data_dir, input="0\n")
        assert result.exit_code == 0

    def test_unknown_choice(self, temp_data_dir):
        result = _invoke(temp_data_dir, input="x\n")
        assert result.exit_code == 1
        assert "Unknown choice" in result.output

    def test_data_from_menu(self, temp_data_dir):
        result = _invoke(temp_data_dir, input="4\n")
        assert result.exit_code == 0
        assert "Data Directory" in result.output
