"""Translation result models: taxonomy entries, meanings, and results.

Attributes are snake_case; serialized output uses the PascalCase field names
(``model_dump(by_alias=True)``) that downstream tooling relies on.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

MeaningSource = Literal["DomainTaxonomy", "OSError"]
ResultSource = Literal["DomainTaxonomy", "OSError", "Unknown"]


class _Contract(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        frozen=True,
    )


class TaxonomyEntry(_Contract):
    """A domain status code definition."""

    canonical_name: str
    message: str
    is_success: bool


class FacilityEntry(_Contract):
    """A 13-bit facility identifier and its canonical name."""

    facility_code: int = Field(ge=0, le=0x1FFF)
    canonical_name: str


class Meaning(_Contract):
    """One candidate interpretation of a code, tagged with its source tier."""

    source: MeaningSource
    constant_name: str | None = None
    message: str
    is_success: bool


class TranslationResult(_Contract):
    """Structured diagnostic for one result code."""

    result_code: int | None = None
    hex_code: str | None = None
    message: str
    source: ResultSource = "Unknown"
    constant_name: str | None = None
    is_success: bool | None = None
    facility: str | None = None
    facility_code: int | None = None
    meanings: list[Meaning] = Field(default_factory=list)

    def to_output(self) -> dict:
        """Serialize using the published PascalCase field names."""
        return self.model_dump(mode="json", by_alias=True)
