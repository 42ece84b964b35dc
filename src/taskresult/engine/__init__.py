"""Translation engine."""

from taskresult.engine.translator import translate, translate_many

__all__ = ["translate", "translate_many"]
