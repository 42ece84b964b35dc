"""Bundled, versioned lookup tables."""

from taskresult.data.facilities import FACILITIES, facility_name
from taskresult.data.taxonomy import TAXONOMY, TAXONOMY_VERSION
from taskresult.data.win32 import WIN32_MESSAGES

__all__ = [
    "FACILITIES",
    "TAXONOMY",
    "TAXONOMY_VERSION",
    "WIN32_MESSAGES",
    "facility_name",
]
