"""taskresult — translate task and OS result codes into structured diagnostics."""

__version__ = "0.1.0"

from taskresult.engine.translator import translate, translate_many

__all__ = ["__version__", "translate", "translate_many"]
