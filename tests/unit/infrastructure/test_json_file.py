"""Atomic JSON file helpers."""

import json
from unittest.mock import patch

import pytest

from secure_inquiry.infrastructure.storage.json_file import read_json, write_json_atomic


def test_read_missing_file_returns_none(tmp_path):
    assert read_json(tmp_path / "absent.json") is None


def test_read_blank_file_returns_none(tmp_path):
    path = tmp_path / "blank.json"
    path.write_text("  \n", encoding="utf-8")
    assert read_json(path) is None


def test_read_invalid_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        read_json(path)


def test_write_creates_parent_directories(tmp_path):
    path = tmp_path / "nested" / "dir" / "state.json"
    write_json_atomic(path, {"counter": 1, "circuit_state": "CLOSED"})
    assert json.loads(path.read_text(encoding="utf-8")) == {"counter": 1, "circuit_state": "CLOSED"}


def test_write_leaves_no_temp_files(tmp_path):
    path = tmp_path / "data.json"
    write_json_atomic(path, [1])
    write_json_atomic(path, [1, 2])
    assert [p.name for p in tmp_path.iterdir()] == ["data.json"]
    assert read_json(path) == [1, 2]


def test_failed_replace_keeps_previous_content(tmp_path):
    path = tmp_path / "data.json"
    write_json_atomic(path, ["first"])
    with patch(
        "secure_inquiry.infrastructure.storage.json_file.os.replace",
        side_effect=OSError("disk full"),
    ):
        with pytest.raises(OSError):
            write_json_atomic(path, ["second"])
    assert read_json(path) == ["first"]
    assert [p.name for p in tmp_path.iterdir()] == ["data.json"]
