"""Pydantic models for responses and translation results."""

from taskresult.contracts.common import (
    ErrorDetail,
    Metrics,
    ResponseEnvelope,
    WarningDetail,
)
from taskresult.contracts.results import (
    FacilityEntry,
    Meaning,
    TaxonomyEntry,
    TranslationResult,
)

__all__ = [
    "ErrorDetail",
    "FacilityEntry",
    "Meaning",
    "Metrics",
    "ResponseEnvelope",
    "TaxonomyEntry",
    "TranslationResult",
    "WarningDetail",
]
