"""End-to-end translation tests."""

from __future__ import annotations

import io
import json

import pytest

from taskresult import translate, translate_many
from taskresult.adapters.oslookup import TableMessageLookup
from taskresult.engine.assembler import PARSE_FAILURE_MESSAGE
from taskresult.observe.events import EventEmitter


class TestScenarios:
    def test_zero_is_success(self, fake_lookup):
        result = translate(0, lookup=fake_lookup)
        assert result.constant_name == "ERROR_SUCCESS"
        assert result.message == "The operation completed successfully"
        assert result.is_success is True
        assert result.source == "OSError"
        assert result.hex_code == "0x00000000"
        assert result.facility == "FACILITY_NULL"

    def test_task_running(self, fake_lookup):
        result = translate(267009, lookup=fake_lookup)
        assert result.constant_name == "SCHED_S_TASK_RUNNING"
        assert result.message == "The task is currently running"
        assert result.is_success is True
        assert result.hex_code == "0x00041301"
        assert result.source == "DomainTaxonomy"
        assert result.facility == "FACILITY_ITF"
        assert result.facility_code == 4

    def test_already_running_from_hex(self, fake_lookup):
        result = translate("0x8004131F", lookup=fake_lookup)
        assert result.constant_name == "SCHED_E_ALREADY_RUNNING"
        assert result.message == "An instance of this task is already running"
        assert result.is_success is False
        assert result.result_code == 2147750687

    def test_win32_file_not_found(self, fake_lookup):
        result = translate(2147942402, lookup=fake_lookup)
        assert result.facility == "FACILITY_WIN32"
        assert result.facility_code == 7
        assert result.source == "OSError"
        assert result.message == "The system cannot find the file specified."
        assert result.is_success is False
        assert result.constant_name is None
        assert result.hex_code == "0x80070002"

    def test_win32_file_not_found_with_bundled_table(self):
        result = translate(2147942402, lookup=TableMessageLookup())
        assert result.message == "The system cannot find the file specified."


class TestFallbacks:
    def test_unknown_code(self, fake_lookup):
        result = translate(999999999, lookup=fake_lookup)
        assert result.source == "Unknown"
        assert result.message == "Unknown result code: 0x3B9AC9FF"
        assert result.constant_name is None
        assert result.meanings == []
        assert result.is_success is True  # severity bit clear
        assert result.facility == "FACILITY_7066"

    def test_unknown_failure_guess(self, fake_lookup):
        result = translate(0x80049999, lookup=fake_lookup)
        assert result.source == "Unknown"
        assert result.is_success is False

    def test_lookup_failure_degrades_to_unknown(self, raising_lookup):
        result = translate(2147942402, lookup=raising_lookup)
        assert result.source == "Unknown"
        assert result.facility == "FACILITY_WIN32"
        assert result.message.startswith("Unknown result code:")

    def test_lookup_failure_keeps_taxonomy(self, raising_lookup):
        result = translate(267009, lookup=raising_lookup)
        assert result.constant_name == "SCHED_S_TASK_RUNNING"

    @pytest.mark.parametrize("value", ["garbage", "8004131F", 1.5, True, 2**64])
    def test_parse_failure(self, fake_lookup, value):
        result = translate(value, lookup=fake_lookup)
        assert result.message == PARSE_FAILURE_MESSAGE
        assert result.source == "Unknown"
        assert result.result_code is None
        assert result.hex_code is None
        assert result.is_success is None
        assert result.constant_name is None
        assert result.facility is None
        assert result.facility_code is None
        assert result.meanings == []
        assert fake_lookup.calls == []

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_no_input(self, fake_lookup, value):
        assert translate(value, lookup=fake_lookup) is None


class TestResultInvariants:
    def test_top_level_mirrors_first_meaning(self, fake_lookup):
        result = translate(2147942402, lookup=fake_lookup)
        primary = result.meanings[0]
        assert (result.message, result.source, result.constant_name, result.is_success) == (
            primary.message, primary.source, primary.constant_name, primary.is_success,
        )

    def test_multi_format_equivalence(self, fake_lookup):
        results = [translate(v, lookup=fake_lookup) for v in (267009, "267009", "0x00041301", "0X00041301")]
        assert all(r == results[0] for r in results)
        assert results[0].result_code == 267009

    def test_idempotent(self, fake_lookup):
        assert translate("0x80070005", lookup=fake_lookup) == translate("0x80070005", lookup=fake_lookup)

    def test_negative_int32_matches_taxonomy(self, fake_lookup):
        result = translate(-2147216609, lookup=fake_lookup)
        assert result.constant_name == "SCHED_E_ALREADY_RUNNING"
        assert result.result_code == -2147216609
        assert result.hex_code == "0x8004131F"

    def test_minus_one(self, fake_lookup):
        result = translate(-1, lookup=fake_lookup)
        assert result.hex_code == "0xFFFFFFFF"
        assert result.facility_code == 8191
        assert result.facility == "FACILITY_8191"
        assert result.is_success is False

    def test_to_output_uses_published_names(self, fake_lookup):
        data = translate(267009, lookup=fake_lookup).to_output()
        assert list(data) == [
            "ResultCode", "HexCode", "Message", "Source", "ConstantName",
            "IsSuccess", "Facility", "FacilityCode", "Meanings",
        ]
        assert list(data["Meanings"][0]) == ["Source", "ConstantName", "Message", "IsSuccess"]

    def test_default_lookup_used_when_none_given(self):
        result = translate(0)
        assert result.constant_name == "ERROR_SUCCESS"


class TestBatch:
    def test_order_preserved_and_empty_dropped(self, fake_lookup):
        results = translate_many([267009, None, "0x8004131F", "", "bad", 0], lookup=fake_lookup)
        assert [r.constant_name for r in results] == [
            "SCHED_S_TASK_RUNNING", "SCHED_E_ALREADY_RUNNING", None, "ERROR_SUCCESS",
        ]
        assert results[2].message == PARSE_FAILURE_MESSAGE

    def test_workers_match_sequential(self, fake_lookup):
        values = [0x00041300 + (i % 0x31) for i in range(200)] + ["0x80070002", 5, None]
        sequential = translate_many(values, lookup=fake_lookup)
        parallel = translate_many(values, lookup=fake_lookup, workers=8)
        assert parallel == sequential

    def test_accepts_generator(self, fake_lookup):
        results = translate_many((c for c in ["1", "2"]), lookup=fake_lookup, workers=2)
        assert [r.result_code for r in results] == [1, 2]

    def test_empty_batch(self, fake_lookup):
        assert translate_many([], lookup=fake_lookup) == []


class TestEvents:
    def test_parse_failure_event(self, fake_lookup):
        stream = io.StringIO()
        translate("nope", lookup=fake_lookup, events=EventEmitter(True, stream=stream))
        event = json.loads(stream.getvalue().splitlines()[0])
        assert event["event"] == "translate.parse_failure"
        assert event["data"]["input"] == "'nope'"

    def test_lookup_failure_event(self, raising_lookup):
        stream = io.StringIO()
        translate(2147942402, lookup=raising_lookup, events=EventEmitter(True, stream=stream))
        event = json.loads(stream.getvalue().splitlines()[0])
        assert event["event"] == "lookup.failed"
        assert event["data"]["code"] == 2

    def test_disabled_emitter_is_silent(self, fake_lookup):
        stream = io.StringIO()
        translate("nope", lookup=fake_lookup, events=EventEmitter(False, stream=stream))
        assert stream.getvalue() == ""
