"""CLI presentation helpers: usage-error envelopes and TOON output."""

from taskresult.help.toon import to_toon
from taskresult.help.usage import patch_typer_errors

__all__ = ["patch_typer_errors", "to_toon"]
