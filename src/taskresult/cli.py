"""Typer CLI application — top-level commands and subcommand groups."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from taskresult.help import patch_typer_errors

patch_typer_errors()

import taskresult
from taskresult.adapters.oslookup import default_lookup
from taskresult.config.settings import OUTPUT_FORMATS, Settings, SettingsError
from taskresult.contracts.common import WarningDetail
from taskresult.contracts.results import FacilityEntry
from taskresult.data.facilities import FACILITIES, facility_name
from taskresult.data.taxonomy import TAXONOMY, TAXONOMY_VERSION
from taskresult.engine.assembler import PARSE_FAILURE_MESSAGE
from taskresult.engine.dispatcher import (
    error_envelope,
    exit_code_for,
    print_response,
    success_envelope,
)
from taskresult.engine.hresult import decompose, format_hex
from taskresult.engine.normalizer import CodeParseError, normalize_code
from taskresult.engine.translator import translate_many
from taskresult.io.fileops import InputFormatError, parse_codes, read_codes
from taskresult.observe.events import EventEmitter, Timer

# ---------------------------------------------------------------------------
# App & subcommand groups
# ---------------------------------------------------------------------------

_MAIN_HELP = """\
Agent-first CLI for translating Task Scheduler and Windows result codes.

Accepts integers (`267009`, `-2147216609`) and hex strings (`0x8004131F`) and
returns the canonical name, message, success flag, facility, and every
candidate meaning in precedence order.

**Every command** returns a JSON `ResponseEnvelope`:
`{"ok": bool, "command": "...", "result": ..., "errors": [...], "warnings": [...], "metrics": {...}}`

**Exit codes:** 0=success, 10=validation, 50=io, 90=internal

Run `taskresult guide` for a machine-readable orientation.
"""

_TRANSLATE_EPILOG = """\
**Examples:**

`taskresult translate 267009`  — SCHED_S_TASK_RUNNING

`taskresult translate 0x8004131F 2147942402`  — several codes at once

`taskresult translate -- -2147216609`  — negative codes after `--`
"""

_FACILITY_EPILOG = """\
**Examples:**

`taskresult facility ls`  — all known HRESULT facilities
"""

_TAXONOMY_EPILOG = """\
**Examples:**

`taskresult taxonomy ls`  — all Task Scheduler status codes

`taskresult taxonomy ls --kind failure`  — only SCHED_E_* codes
"""


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(taskresult.__version__)
        raise typer.Exit()


app = typer.Typer(
    name="taskresult",
    help=_MAIN_HELP,
    no_args_is_help=True,
    rich_markup_mode="markdown",
)

facility_app = typer.Typer(
    name="facility", help="HRESULT facility listing.",
    epilog=_FACILITY_EPILOG,
    no_args_is_help=True, rich_markup_mode="markdown",
)
taxonomy_app = typer.Typer(
    name="taxonomy", help="Task Scheduler status code listing.",
    epilog=_TAXONOMY_EPILOG,
    no_args_is_help=True, rich_markup_mode="markdown",
)

app.add_typer(facility_app)
app.add_typer(taxonomy_app)


@app.callback(invoke_without_command=True)
def main_callback(
    version: Annotated[
        bool, typer.Option("--version", "-V", help="Print version and exit.", is_eager=True)
    ] = False,
) -> None:
    if version:
        _version_callback(True)


# Type aliases for common options
ConfigOpt = Annotated[Optional[str], typer.Option("--config", "-c", help="Path to a taskresult.yaml settings file")]
LookupOpt = Annotated[Optional[str], typer.Option("--lookup", help="OS message lookup: auto, system (Windows only), or table")]
FormatOpt = Annotated[Optional[str], typer.Option("--format", help="Output format: json or toon")]
EventsFlag = Annotated[bool, typer.Option("--events", help="Emit NDJSON lifecycle events to stderr")]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _emit(envelope, code=None, fmt: str = "json"):
    print_response(envelope, fmt)
    raise typer.Exit(code if code is not None else exit_code_for(envelope))


def _load_settings(config: str | None, cmd: str, **overrides: Any) -> Settings:
    """Load settings from --config or ./taskresult.yaml, then apply CLI overrides."""
    try:
        if config:
            settings = Settings.load(config)
        else:
            settings = Settings.load_from_dir(Path.cwd()) or Settings()
    except FileNotFoundError:
        _emit(error_envelope(cmd, "ERR_CONFIG_NOT_FOUND", f"Settings file not found: {config}"))
    except SettingsError as e:
        _emit(error_envelope(cmd, "ERR_CONFIG_INVALID", str(e)))

    try:
        return settings.merged(**overrides)
    except ValueError as e:
        _emit(error_envelope(cmd, "ERR_INVALID_ARGUMENT", str(e)))


def _output_format(fmt: str | None, cmd: str) -> str:
    """Validate a --format value for commands that take no config."""
    if fmt is None:
        return "json"
    if fmt not in OUTPUT_FORMATS:
        _emit(error_envelope(cmd, "ERR_INVALID_ARGUMENT", f"Unknown output format: '{fmt}'. Supported: {', '.join(OUTPUT_FORMATS)}"))
    return fmt


def _build_lookup(settings: Settings, cmd: str):
    try:
        return default_lookup(settings.lookup, extra=settings.os_messages)
    except OSError as e:
        _emit(error_envelope(cmd, "ERR_INVALID_ARGUMENT", str(e)), fmt=settings.format)


def _translate_and_emit(cmd: str, values: list[Any], settings: Settings) -> None:
    events = EventEmitter.from_env(settings.events)
    lookup = _build_lookup(settings, cmd)
    events.emit("translate.start", {"command": cmd, "inputs": len(values), "lookup": settings.lookup})

    with Timer() as t:
        results = translate_many(values, lookup=lookup, workers=settings.workers, events=events)

    warnings = [
        WarningDetail(code="WARN_UNPARSEABLE_CODE", message=PARSE_FAILURE_MESSAGE, index=i)
        for i, r in enumerate(results)
        if r.result_code is None
    ]
    events.emit("translate.done", {"command": cmd, "translated": len(results), "duration_ms": t.elapsed_ms})
    env = success_envelope(
        cmd,
        [r.to_output() for r in results],
        warnings=warnings,
        duration_ms=t.elapsed_ms,
        inputs=len(values),
        translated=len(results),
    )
    _emit(env, fmt=settings.format)


# ---------------------------------------------------------------------------
# taskresult version
# ---------------------------------------------------------------------------
@app.command()
def version():
    """Print the taskresult version and bundled taxonomy version.

    Example: `taskresult version`
    """
    env = success_envelope("version", {
        "version": taskresult.__version__,
        "taxonomy_version": TAXONOMY_VERSION,
    })
    _emit(env)


# ---------------------------------------------------------------------------
# taskresult guide
# ---------------------------------------------------------------------------
@app.command()
def guide():
    """Print the agent integration guide as structured JSON.

    Covers commands, input formats, the result contract, resolution tiers,
    error codes, and exit codes.

    Example: `taskresult guide`
    """
    guide_data = {
        "overview": (
            "taskresult translates numeric execution-result codes from the Windows "
            "Task Scheduler or the operating system into structured diagnostics."
        ),
        "commands": {
            "taskresult translate CODE...": "Translate one or more codes given as arguments",
            "taskresult batch --input FILE": "Translate codes from a text, JSON array, or NDJSON file ('-' for stdin)",
            "taskresult decompose CODE": "Show the HRESULT severity, facility, and error number of a code",
            "taskresult facility ls": "List known HRESULT facilities",
            "taskresult taxonomy ls": "List bundled Task Scheduler status codes",
            "taskresult serve --stdio": "JSON-lines server for agent tool integration",
        },
        "input_formats": [
            {"format": "integer", "example": "267009"},
            {"format": "negative integer", "example": "-2147216609"},
            {"format": "hex (0x prefix required)", "example": "0x8004131F"},
            {"format": "task object (batch)", "example": '{"TaskName": "Backup", "LastTaskResult": 267009}'},
        ],
        "result_fields": {
            "ResultCode": "int — normalized signed 64-bit code (null if unparseable)",
            "HexCode": "string — 0x + 8 or 16 uppercase hex digits",
            "Message": "string — primary interpretation",
            "Source": "DomainTaxonomy | OSError | Unknown",
            "ConstantName": "string? — symbolic name such as SCHED_S_TASK_RUNNING",
            "IsSuccess": "bool? — best-effort guess from the severity bit when Source is Unknown",
            "Facility": "string — canonical facility name or FACILITY_<n>",
            "FacilityCode": "int 0-8191",
            "Meanings": "array — every candidate interpretation in precedence order",
        },
        "resolution_tiers": [
            "1. Task Scheduler taxonomy (exact match, then the other 32-bit form)",
            "2. Win32 facility (7): low 16 bits looked up as an OS error",
            "3. Small codes 1-65535 without a taxonomy match: looked up as an OS error",
            "4. Zero with no other match: ERROR_SUCCESS",
        ],
        "error_codes": {
            "ERR_USAGE": "CLI usage error (exit 10)",
            "ERR_INVALID_ARGUMENT": "Invalid option value (exit 10)",
            "ERR_INPUT_INVALID": "Batch input cannot be parsed (exit 10)",
            "ERR_CONFIG_INVALID": "Settings file is invalid (exit 10)",
            "ERR_INPUT_NOT_FOUND": "Batch input file does not exist (exit 50)",
            "ERR_CONFIG_NOT_FOUND": "Settings file does not exist (exit 50)",
            "ERR_INTERNAL": "Unexpected failure (exit 90)",
        },
        "warning_codes": {
            "WARN_UNPARSEABLE_CODE": "An input could not be parsed; its result has Source Unknown",
        },
        "exit_codes": {
            "0": "Success",
            "10": "Validation error (bad arguments, input, or settings)",
            "50": "IO error (file not found)",
            "90": "Internal error",
        },
    }
    _emit(success_envelope("guide", guide_data))


# ---------------------------------------------------------------------------
# taskresult translate
# ---------------------------------------------------------------------------
@app.command(
    "translate",
    epilog=_TRANSLATE_EPILOG,
    context_settings={"ignore_unknown_options": True},
)
def translate_cmd(
    codes: Annotated[list[str], typer.Argument(help="Result codes: decimal (267009) or 0x-prefixed hex (0x8004131F)")],
    config: ConfigOpt = None,
    lookup: LookupOpt = None,
    fmt: FormatOpt = None,
    events: EventsFlag = False,
):
    """Translate one or more result codes into structured diagnostics.

    Each code yields one result with its canonical name, message, success
    flag, facility, and all candidate meanings. Unparseable codes produce a
    result with Source `Unknown` and a `WARN_UNPARSEABLE_CODE` warning;
    blank codes produce no result.

    Example: `taskresult translate 267009 0x8004131F`

    See also: `taskresult batch` for files and streams.
    """
    settings = _load_settings(config, "translate", lookup=lookup, format=fmt, events=events or None)
    _translate_and_emit("translate", list(codes), settings)


# ---------------------------------------------------------------------------
# taskresult batch
# ---------------------------------------------------------------------------
@app.command("batch")
def batch_cmd(
    input_path: Annotated[str, typer.Option("--input", "-i", help="Input file: one code per line, a JSON array, or NDJSON task objects ('-' for stdin)")],
    workers: Annotated[Optional[int], typer.Option("--workers", "-w", help="Translate with N worker threads (output order is preserved)")] = None,
    config: ConfigOpt = None,
    lookup: LookupOpt = None,
    fmt: FormatOpt = None,
    events: EventsFlag = False,
):
    """Translate every code in a file or on stdin.

    Objects may carry the code in `ResultCode`, `LastTaskResult`,
    `result_code`, or `code`. Blank lines and null entries produce no
    result. Results keep input order.

    Example: `taskresult batch --input codes.txt`

    Example: `Get-ScheduledTask | Get-ScheduledTaskInfo | ConvertTo-Json | taskresult batch -i -`
    """
    settings = _load_settings(
        config, "batch", lookup=lookup, format=fmt, events=events or None, workers=workers,
    )
    try:
        if input_path == "-":
            values = parse_codes(sys.stdin.read())
        else:
            values = read_codes(input_path)
    except FileNotFoundError:
        _emit(error_envelope("batch", "ERR_INPUT_NOT_FOUND", f"Input file not found: {input_path}"), fmt=settings.format)
        return
    except (InputFormatError, UnicodeDecodeError) as e:
        _emit(error_envelope("batch", "ERR_INPUT_INVALID", str(e)), fmt=settings.format)
        return

    _translate_and_emit("batch", values, settings)


# ---------------------------------------------------------------------------
# taskresult decompose
# ---------------------------------------------------------------------------
@app.command("decompose", context_settings={"ignore_unknown_options": True})
def decompose_cmd(
    code: Annotated[str, typer.Argument(help="Result code: decimal or 0x-prefixed hex")],
):
    """Split a code into HRESULT severity, facility, and error number.

    Example: `taskresult decompose 0x80070002`
    """
    try:
        value = normalize_code(code)
    except CodeParseError as e:
        _emit(error_envelope("decompose", "ERR_INVALID_ARGUMENT", str(e)))
        return
    if value is None:
        _emit(error_envelope("decompose", "ERR_INVALID_ARGUMENT", "No result code given"))
        return

    parts = decompose(value)
    _emit(success_envelope("decompose", {
        "ResultCode": value,
        "HexCode": format_hex(value),
        "IsFailure": parts.is_failure,
        "FacilityCode": parts.facility_code,
        "Facility": facility_name(parts.facility_code),
        "ErrorCode": parts.error_code,
    }))


# ---------------------------------------------------------------------------
# taskresult facility ls
# ---------------------------------------------------------------------------
@facility_app.command("ls")
def facility_ls(
    fmt: FormatOpt = None,
):
    """List known HRESULT facilities.

    Example: `taskresult facility ls`
    """
    fmt = _output_format(fmt, "facility.ls")
    rows = [
        FacilityEntry(facility_code=code, canonical_name=name).model_dump(by_alias=True)
        for code, name in sorted(FACILITIES.items())
    ]
    _emit(success_envelope("facility.ls", rows), fmt=fmt)


# ---------------------------------------------------------------------------
# taskresult taxonomy ls
# ---------------------------------------------------------------------------
@taxonomy_app.command("ls")
def taxonomy_ls(
    kind: Annotated[Optional[str], typer.Option("--kind", help="Filter: success or failure")] = None,
    fmt: FormatOpt = None,
):
    """List bundled Task Scheduler status codes.

    Example: `taskresult taxonomy ls --kind failure`
    """
    fmt = _output_format(fmt, "taxonomy.ls")
    if kind not in (None, "success", "failure"):
        _emit(error_envelope("taxonomy.ls", "ERR_INVALID_ARGUMENT", f"Unknown kind: '{kind}'. Supported: success, failure"), fmt=fmt)
        return

    rows = []
    for code, entry in TAXONOMY.items():
        if kind == "success" and not entry.is_success:
            continue
        if kind == "failure" and entry.is_success:
            continue
        rows.append({"ResultCode": code, "HexCode": format_hex(code), **entry.model_dump(by_alias=True)})
    env = success_envelope("taxonomy.ls", {"version": TAXONOMY_VERSION, "entries": rows})
    _emit(env, fmt=fmt)


# ---------------------------------------------------------------------------
# taskresult serve --stdio
# ---------------------------------------------------------------------------
@app.command("serve")
def serve_cmd(
    stdio: Annotated[bool, typer.Option("--stdio", help="Use stdin/stdout for JSON request/response (for agent tool integration)")] = True,
    config: ConfigOpt = None,
    lookup: LookupOpt = None,
):
    """Start stdio server for agent tool integration.

    Reads JSON commands from stdin and writes JSON responses to stdout.
    Each line is a JSON object: `{"id": "1", "command": "translate", "args": {"code": "0x8004131F"}}`

    Example: `taskresult serve --stdio`
    """
    from taskresult.server.stdio import StdioServer

    settings = _load_settings(config, "serve", lookup=lookup)
    server = StdioServer(
        lookup=_build_lookup(settings, "serve"),
        events=EventEmitter.from_env(settings.events),
    )
    server.run()


# ---------------------------------------------------------------------------
# Entrypoint (for `python -m taskresult`)
# ---------------------------------------------------------------------------
def main() -> None:
    try:
        app()
    except SystemExit:
        raise
    except Exception as exc:
        # Catch-all: any unhandled exception gets wrapped in a proper JSON
        # error envelope so machine consumers never see raw tracebacks.
        env = error_envelope("unknown", "ERR_INTERNAL", str(exc))
        print_response(env)
        raise SystemExit(90) from exc


if __name__ == "__main__":
    main()
