"""Monkey-patch Typer so CLI usage errors are reported as JSON envelopes."""

from __future__ import annotations

import click


def usage_error_types() -> tuple[type[Exception], ...]:
    """UsageError classes Typer may raise.

    Newer Typer releases parse arguments with a bundled ``typer._click`` copy
    whose exceptions are distinct from the installed click package's.
    """
    import typer.core

    types: list[type[Exception]] = [click.exceptions.UsageError]
    bundled = getattr(typer.core, "_click", None)
    if bundled is not None:
        bundled_error = bundled.exceptions.UsageError
        if bundled_error not in types:
            types.append(bundled_error)
    return tuple(types)


def patch_typer_errors() -> None:
    """Patch TyperGroup.invoke to emit JSON envelopes for CLI usage errors."""
    import typer.core

    _orig_invoke = typer.core.TyperGroup.invoke
    caught = usage_error_types()

    def _json_invoke(self, ctx):
        try:
            return _orig_invoke(self, ctx)
        except caught as e:
            from taskresult.engine.dispatcher import error_envelope, exit_code_for, print_response

            command = ctx.invoked_subcommand or ctx.info_name or "unknown"
            env = error_envelope(command, "ERR_USAGE", str(e.format_message()))
            print_response(env)
            raise SystemExit(exit_code_for(env)) from e

    typer.core.TyperGroup.invoke = _json_invoke
