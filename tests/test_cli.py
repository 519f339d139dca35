import json

import numpy as np
import pytest

from clock_kiosk.__main__ import main


@pytest.fixture(autouse=True)
def kiosk_env(monkeypatch, tmp_path):
    monkeypatch.setenv("CLOCK_KIOSK_DATABASE_PATH", str(tmp_path / "kiosk.db"))
    monkeypatch.setenv("CLOCK_KIOSK_EMBEDDING_DIMENSION", "4")


@pytest.fixture
def embedding_file(tmp_path):
    path = tmp_path / "emp-1.npy"
    np.save(path, np.array([0.5, 0.25, 0.0, 1.0], dtype=np.float32))
    return str(path)


def test_enroll_then_revoke(embedding_file, capsys):
    assert main(["enroll", "--employee", "emp-1", "--embedding", embedding_file, "--actor", "hr:alice"]) == 0
    enrolled = json.loads(capsys.readouterr().out)
    assert enrolled["employee_id"] == "emp-1"
    assert enrolled["dimension"] == 4

    assert main(["revoke", "--employee", "emp-1", "--actor", "hr:alice"]) == 0
    assert json.loads(capsys.readouterr().out)["removed"] is True

    assert main(["revoke", "--employee", "emp-1", "--actor", "hr:alice"]) == 1


def test_enroll_with_wrong_dimension_fails(tmp_path):
    path = tmp_path / "short.npy"
    np.save(path, np.zeros(3, dtype=np.float32))

    assert main(["enroll", "--employee", "emp-1", "--embedding", str(path), "--actor", "hr:alice"]) == 1


def test_state_and_events_for_empty_day(capsys):
    assert main(["state", "--employee", "emp-1", "--date", "2024-03-04"]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "employee_id": "emp-1",
        "date": "2024-03-04",
        "state": "not_started",
    }

    assert main(["events", "--employee", "emp-1", "--date", "2024-03-04"]) == 0
    assert json.loads(capsys.readouterr().out) == []
