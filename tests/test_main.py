"""Tests for the command line front end."""
import json
import sys
import pytest
import main
from ui.cli.console_utils import format_elapsed_time, format_results


@pytest.fixture
def tracks_file(tmp_path, song_tracks):
    path = tmp_path / "tracks.json"
    path.write_text(json.dumps(song_tracks), encoding="utf-8")
    return path


def run_main(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["main.py", *map(str, args)])
    return main.main()


def test_runs_queries_against_tracks_file(monkeypatch, capsys, tracks_file):
    assert run_main(monkeypatch, tracks_file, "-q", "song", "-q", "two") == 0
    output = capsys.readouterr().out
    assert "Indexed 2 tracks" in output
    assert "2 track(s) for 'song'" in output
    assert "1 track(s) for 'two'" in output


def test_reports_malformed_tracks_file(monkeypatch, capsys, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    assert run_main(monkeypatch, path, "-q", "song") == 1
    assert "Could not index tracks" in capsys.readouterr().out


def test_reports_missing_tracks_file(monkeypatch, capsys, tmp_path):
    assert run_main(monkeypatch, tmp_path / "missing.json", "-q", "song") == 1
    assert "Tracks file not found" in capsys.readouterr().out


def test_format_results_truncates_long_lists():
    text = format_results("love", list(range(30)), limit=5)
    assert "30 track(s) for 'love'" in text
    assert "... and 25 more" in text
    assert format_results("love", []) == "  No tracks found for 'love'"


@pytest.mark.parametrize("seconds, expected", [(0.25, "250ms"), (12.34, "12.3s"), (125, "2m 5s"), (7320, "2h 2m")])
def test_format_elapsed_time(seconds, expected):
    assert format_elapsed_time(seconds) == expected
