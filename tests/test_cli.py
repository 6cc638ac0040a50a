# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the command-line interface."""
import csv
import json
import sys

import pytest

from disc_migration.cli import main, run_scenario


def _write_scenario(tmp_path, **overrides):
    data = {
        "G": 1.0,
        "particles": [
            {"name": "star", "m": 1.0},
            {"name": "planet", "m": 1e-6, "a": 1.0, "e": 0.05, "tau_a": 1e3},
        ],
    }
    data.update(overrides)
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _run_main(monkeypatch, *args):
    monkeypatch.setattr(sys, 'argv', ['disc-migration', *args])
    main()


class TestRunScenario:

    def test_writes_history(self, tmp_path, capsys):
        output = str(tmp_path / "history.csv")
        rows = run_scenario(_write_scenario(tmp_path), output, duration=1.0, step=0.1, record_every=5)

        assert rows == 3
        with open(output, newline='', encoding='utf-8') as f:
            records = list(csv.DictReader(f))
        assert [r['name'] for r in records] == ["planet"] * 3
        assert float(records[-1]['a']) < 1.0

        out = capsys.readouterr().out
        assert "Wrote 3 element rows" in out
        assert "force evaluations" in out


class TestMain:

    def test_success(self, tmp_path, monkeypatch):
        output = tmp_path / "history.csv"
        _run_main(
            monkeypatch, '-i', _write_scenario(tmp_path), '-o', str(output),
            '--duration', '0.5', '--step', '0.1',
        )
        assert output.exists()

    def test_missing_input_file(self, tmp_path, capsys, monkeypatch):
        missing = str(tmp_path / "missing.json")
        with pytest.raises(SystemExit) as exc_info:
            _run_main(
                monkeypatch, '-i', missing, '-o', str(tmp_path / "out.csv"),
                '--duration', '1', '--step', '0.1',
            )
        assert exc_info.value.code == 1
        assert "not found" in capsys.readouterr().err.lower()

    def test_invalid_json(self, tmp_path, capsys, monkeypatch):
        path = tmp_path / "broken.json"
        path.write_text("[1, 2", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            _run_main(
                monkeypatch, '-i', str(path), '-o', str(tmp_path / "out.csv"),
                '--duration', '1', '--step', '0.1',
            )
        assert exc_info.value.code == 1
        assert "invalid scenario file" in capsys.readouterr().err.lower()

    def test_invalid_scenario(self, tmp_path, capsys, monkeypatch):
        path = _write_scenario(tmp_path, particles=[])
        with pytest.raises(SystemExit) as exc_info:
            _run_main(
                monkeypatch, '-i', path, '-o', str(tmp_path / "out.csv"),
                '--duration', '1', '--step', '0.1',
            )
        assert exc_info.value.code == 1
        assert "particles" in capsys.readouterr().err

    def test_non_positive_step(self, tmp_path, capsys, monkeypatch):
        with pytest.raises(SystemExit) as exc_info:
            _run_main(
                monkeypatch, '-i', _write_scenario(tmp_path), '-o', str(tmp_path / "out.csv"),
                '--duration', '1', '--step', '0',
            )
        assert exc_info.value.code == 1
        assert "step" in capsys.readouterr().err

    def test_required_arguments(self, monkeypatch):
        with pytest.raises(SystemExit) as exc_info:
            _run_main(monkeypatch, '-i', 'scenario.json')
        assert exc_info.value.code == 2
