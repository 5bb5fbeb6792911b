"""Tests for the spinstats command line interface."""

import json

import pytest
from typer.testing import CliRunner

from src.config import settings
from src.infrastructure.cli.app import app

COLLECTION = [
    {"id": 1, "title": "The Beatles - Abbey Road", "style": ["Rock"]},
    {"id": 2, "title": "John Coltrane - Blue Train", "style": ["Hard Bop"]},
]


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path, monkeypatch):
    """Keep the CLI's log file out of the working directory."""
    monkeypatch.setattr(settings.logging, "log_file", tmp_path / "spinstats.log")


@pytest.fixture
def collection_file(tmp_path):
    path = tmp_path / "collection.json"
    path.write_text(json.dumps(COLLECTION), encoding="utf-8")
    return path


def write_log(path, records):
    path.write_text("\n".join(json.dumps(record) for record in records), encoding="utf-8")
    return path


class TestHelp:
    """Test command registration."""

    def test_commands_listed(self, runner):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("stats", "match", "settings", "version"):
            assert command in result.stdout

    def test_version(self, runner):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "spinstats" in result.stdout


class TestStatsCommand:
    """Test replaying a detection log."""

    def test_short_session_not_enough_data(self, runner, collection_file, tmp_path):
        log = write_log(
            tmp_path / "short.jsonl",
            [
                {"title": "Abbey Road", "artist": "The Beatles", "detected_at": 0},
                {"title": "Blue Train", "artist": "John Coltrane", "detected_at": 300},
            ],
        )

        result = runner.invoke(app, ["stats", str(collection_file), str(log)])

        assert result.exit_code == 0
        assert "Not enough data yet" in result.stdout

    def test_long_session_shows_top_album(self, runner, collection_file, tmp_path):
        log = write_log(
            tmp_path / "long.jsonl",
            [
                {"title": "Abbey Road", "artist": "The Beatles", "detected_at": 0},
                {"title": "Blue Train", "artist": "John Coltrane", "detected_at": 1500},
                {"silence": True, "detected_at": 1800},
            ],
        )

        result = runner.invoke(app, ["stats", str(collection_file), str(log)])

        assert result.exit_code == 0
        assert "Not enough data yet" not in result.stdout
        assert "Top Album" in result.stdout
        assert "Abbey Road" in result.stdout

    def test_invalid_log_fails(self, runner, collection_file, tmp_path):
        log = tmp_path / "broken.jsonl"
        log.write_text("{not json\n", encoding="utf-8")

        result = runner.invoke(app, ["stats", str(collection_file), str(log)])

        assert result.exit_code == 1

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(
            app, ["stats", str(tmp_path / "nope.json"), str(tmp_path / "nope.jsonl")]
        )
        assert result.exit_code != 0


class TestMatchCommand:
    """Test one-off fuzzy lookups."""

    def test_accepted_match(self, runner, collection_file):
        result = runner.invoke(
            app, ["match", str(collection_file), "abbey road", "--artist", "beatles"]
        )

        assert result.exit_code == 0
        assert "Abbey Road" in result.stdout
        assert "accepted" in result.stdout

    def test_rejected_match(self, runner, collection_file):
        result = runner.invoke(app, ["match", str(collection_file), "Qwzx Vvq", "-a", "Zzq"])

        assert result.exit_code == 0
        assert "rejected" in result.stdout


class TestSettingsCommand:
    """Test the effective configuration listing."""

    def test_lists_settings(self, runner):
        result = runner.invoke(app, ["settings"])

        assert result.exit_code == 0
        assert "acceptance_threshold" in result.stdout
        assert "min_listening_seconds" in result.stdout
