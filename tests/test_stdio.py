"""Tests for the JSON-lines stdio server."""

from __future__ import annotations

import io
import json

import pytest

from taskresult.server.stdio import StdioServer


@pytest.fixture()
def server(fake_lookup) -> StdioServer:
    return StdioServer(lookup=fake_lookup)


def test_translate(server):
    response = server.handle_request({"id": "1", "command": "translate", "args": {"code": "0x8004131F"}})
    assert response["id"] == "1"
    assert response["ok"] is True
    assert response["result"]["ConstantName"] == "SCHED_E_ALREADY_RUNNING"


def test_translate_task_object(server):
    response = server.handle_request({
        "id": "2", "command": "translate",
        "args": {"code": {"TaskName": "Backup", "LastTaskResult": 267009}},
    })
    assert response["result"]["ConstantName"] == "SCHED_S_TASK_RUNNING"


def test_translate_no_input(server):
    response = server.handle_request({"id": "3", "command": "translate", "args": {"code": ""}})
    assert response == {"id": "3", "ok": True, "result": None}


def test_translate_batch(server):
    response = server.handle_request({
        "id": "4", "command": "translate.batch", "args": {"codes": [0, None, "bad", 2147942402]},
    })
    results = response["result"]
    assert [r["ResultCode"] for r in results] == [0, None, 2147942402]
    assert results[1]["Message"] == "Unable to parse result code"


def test_translate_batch_requires_list(server):
    response = server.handle_request({"id": "5", "command": "translate.batch", "args": {"codes": "1"}})
    assert response["ok"] is False


def test_facility_get(server):
    response = server.handle_request({"id": "6", "command": "facility.get", "args": {"facility_code": 7}})
    assert response["result"] == {"FacilityCode": 7, "CanonicalName": "FACILITY_WIN32"}


def test_facility_get_out_of_range(server):
    response = server.handle_request({"id": "7", "command": "facility.get", "args": {"facility_code": 9000}})
    assert response["ok"] is False


def test_unknown_command(server):
    response = server.handle_request({"id": "8", "command": "task.start"})
    assert response["ok"] is False
    assert "Unknown command" in response["error"]


def test_run_loop(server):
    stdin = io.StringIO(
        '{"id": "a", "command": "translate", "args": {"code": 0}}\n'
        "\n"
        "not json\n"
        "[1, 2]\n"
    )
    stdout = io.StringIO()
    server.run(stdin=stdin, stdout=stdout)
    lines = [json.loads(line) for line in stdout.getvalue().splitlines()]
    assert len(lines) == 3
    assert lines[0]["result"]["ConstantName"] == "ERROR_SUCCESS"
    assert lines[1]["ok"] is False and lines[1]["error"].startswith("Invalid JSON")
    assert lines[2]["ok"] is False


def test_non_object_args_rejected(server):
    response = server.handle_request({"id": "9", "command": "translate", "args": "0x1"})
    assert response == {"id": "9", "ok": False, "error": "'args' must be an object"}


def test_run_loop_survives_bad_args(server):
    stdin = io.StringIO(
        '{"id": "a", "command": "translate", "args": "0x1"}\n'
        '{"id": "b", "command": "translate", "args": {"code": 2}}\n'
    )
    stdout = io.StringIO()
    server.run(stdin=stdin, stdout=stdout)
    lines = [json.loads(line) for line in stdout.getvalue().splitlines()]
    assert [line["id"] for line in lines] == ["a", "b"]
    assert lines[0]["ok"] is False
    assert lines[1]["result"]["ResultCode"] == 2
