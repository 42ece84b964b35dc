"""Exit code mapping regression tests."""

from taskresult.engine.dispatcher import error_envelope, exit_code_for, success_envelope


def test_exit_code_success():
    assert exit_code_for(success_envelope("x", [])) == 0


def test_exit_code_usage_class():
    env = error_envelope("x", "ERR_USAGE", "missing argument")
    assert exit_code_for(env) == 10


def test_exit_code_validation_class():
    env = error_envelope("x", "ERR_INVALID_ARGUMENT", "bad lookup")
    assert exit_code_for(env) == 10


def test_exit_code_config_invalid_class():
    env = error_envelope("x", "ERR_CONFIG_INVALID", "unknown key")
    assert exit_code_for(env) == 10


def test_exit_code_io_class():
    env = error_envelope("x", "ERR_INPUT_NOT_FOUND", "missing")
    assert exit_code_for(env) == 50


def test_exit_code_internal_fallback():
    env = error_envelope("x", "ERR_INTERNAL", "boom")
    assert exit_code_for(env) == 90
