"""Tests for CLI commands: help, next, rate, stats, cleanup, study, config and serve."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from lexideck.application.scheduler import progress_key
from lexideck.domain.models import LearningDirection, ProgressRecord, Rating
from lexideck.infrastructure.adapters.json_store import JsonProgressStore
from lexideck.interface.cli import app

runner = CliRunner()


@pytest.fixture
def source_args(mock_home, catalog_csv, tmp_path):
    """Point every command at the temp word list and progress file."""
    return ["--catalog-path", str(catalog_csv), "--progress-path", str(tmp_path / "progress.json")]


@pytest.fixture
def store(tmp_path):
    return JsonProgressStore(tmp_path / "progress.json")


# --- Help ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "lexideck: spaced-repetition vocabulary trainer" in result.stdout
    assert "study" in result.stdout
    assert "rate" in result.stdout
    assert "config" in result.stdout


# --- Next ---


def test_next_json_admits_first_new_item(source_args, catalog):
    result = runner.invoke(app, ["next", "--json", *source_args])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["item"]["id"] == catalog[0].id
    assert data["item"]["prompt"] == "สวัสดี"
    assert data["item"]["answer"] == "Bonjour"


def test_next_reverse_direction(source_args):
    result = runner.invoke(app, ["next", "--json", "--direction", "reverse", *source_args])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["item"]["prompt"] == "Bonjour"


def test_next_nothing_owed(source_args, store, catalog):
    store.save(
        {
            item.id: ProgressRecord(item.id, 2**53, 1, 1, Rating.EASY)
            for item in catalog
        }
    )

    result = runner.invoke(app, ["next", *source_args])

    assert result.exit_code == 0
    assert "Nothing to review right now." in result.stdout


def test_missing_catalog_file_exits_with_error(mock_home, tmp_path):
    result = runner.invoke(
        app,
        ["next", "--catalog-path", str(tmp_path / "missing.csv"),
         "--progress-path", str(tmp_path / "p.json")],
    )

    assert result.exit_code == 1
    assert "Could not read catalog file" in result.output


# --- Rate ---


def test_rate_persists_and_advances(source_args, store, catalog):
    result = runner.invoke(app, ["rate", catalog[0].id, "good", *source_args])

    assert result.exit_code == 0
    assert "reps=1" in result.stdout
    assert "12.0 h" in result.stdout

    saved = store.load()
    assert saved[catalog[0].id].last_rating == Rating.GOOD

    result = runner.invoke(app, ["next", "--json", *source_args])
    assert json.loads(result.stdout)["item"]["id"] == catalog[1].id


def test_rate_reverse_uses_suffixed_key(source_args, store, catalog):
    result = runner.invoke(app, ["rate", catalog[0].id, "1", "-d", "reverse", *source_args])

    assert result.exit_code == 0
    assert set(store.load()) == {progress_key(catalog[0].id, LearningDirection.REVERSE)}


def test_rate_invalid_rating(source_args, catalog):
    result = runner.invoke(app, ["rate", catalog[0].id, "meh", *source_args])
    assert result.exit_code == 2


def test_rate_unknown_item(source_args):
    result = runner.invoke(app, ["rate", "deadbeef", "good", *source_args])

    assert result.exit_code == 1
    assert "Unknown item: deadbeef" in result.output


# --- Stats ---


def test_stats_json(source_args, store, catalog):
    store.save({catalog[1].id: ProgressRecord(catalog[1].id, 0, 60_000, 0, Rating.FAIL)})

    result = runner.invoke(app, ["stats", "--json", *source_args])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["total"] == 3
    assert data["new"] == 2
    assert data["fail"] == 1
    assert data["due"] == 1


def test_stats_text(source_args):
    result = runner.invoke(app, ["stats", *source_args])

    assert result.exit_code == 0
    assert "Direction: primary  Items: 3" in result.stdout
    assert "New: 3" in result.stdout


# --- Cleanup ---


def test_cleanup_removes_orphans(source_args, store, catalog):
    store.save(
        {
            "gone": ProgressRecord("gone", 0, 1, 0, Rating.HARD),
            "gone_rev": ProgressRecord("gone_rev", 0, 1, 0, Rating.HARD),
            catalog[0].id: ProgressRecord(catalog[0].id, 0, 1, 0, Rating.HARD),
        }
    )

    result = runner.invoke(app, ["cleanup", *source_args])

    assert result.exit_code == 0
    assert "Removed 2 orphaned progress entries." in result.stdout
    assert set(store.load()) == {catalog[0].id}


def test_cleanup_nothing_to_do(source_args):
    result = runner.invoke(app, ["cleanup", *source_args])

    assert result.exit_code == 0
    assert "Nothing to clean up." in result.stdout


# --- Study ---


def test_study_until_done(source_args, store, catalog):
    # Reveal and rate every word Easy; then nothing is due and nothing is in rotation.
    result = runner.invoke(app, ["study", *source_args], input="\n4\n" * 3)

    assert result.exit_code == 0
    assert "สวัสดี" in result.stdout
    assert "Bonjour" in result.stdout
    assert "All done for now!" in result.stdout
    assert "Reviewed 3." in result.stdout
    assert {r.last_rating for r in store.load().values()} == {Rating.EASY}


def test_study_quit_and_bad_input(source_args, store, catalog):
    result = runner.invoke(app, ["study", *source_args], input="\nnope\n\nq\n")

    assert result.exit_code == 0
    assert "is not a rating" in result.stdout
    assert "All done for now!" not in result.stdout
    assert store.load() == {}


# --- Config ---


@patch("lexideck.interface.cli.resolve_config")
def test_config_show_command(mock_resolve_config):
    mock_config = MagicMock()
    mock_config.model_dump.return_value = {
        "progress_path": Path("/tmp/progress.json"),
        "direction": "primary",
        "max_active_learning": 50,
    }
    mock_resolve_config.return_value = mock_config

    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    output_data = json.loads(result.stdout)
    assert output_data["progress_path"] == str(Path("/tmp/progress.json"))
    assert output_data["max_active_learning"] == 50


# --- Serve ---


@patch("uvicorn.run")
def test_serve_command(mock_run):
    result = runner.invoke(app, ["serve", "--port", "9000"])
    assert result.exit_code == 0
    mock_run.assert_called_with("lexideck.server:app", host="127.0.0.1", port=9000, reload=False)
