"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: errors.py
Description:
    Error taxonomy for the tagging engine.

    ValidationError        — returned (not raised) by the record builder
                             when a required selection is missing.
    ZoneRangeError         — raised for zone indices outside the 8 × 12
                             grid; a caller bug.
    ChainIntegrityWarning  — reason a rebound-chain walk was truncated;
                             never fatal.
    RecordNotFoundError    — raised by stores on replace/delete of an
                             unknown record id.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ZoneRangeError(ValueError):
    """A zone row/col/index/label outside the 96-cell grid."""


class RecordNotFoundError(KeyError):
    """No record with the given id in the requested collection."""


@dataclass(frozen=True)
class ValidationError:
    """A missing or invalid selection, named by ``field``."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ChainIntegrityWarning(str, Enum):
    """Why a rebound-chain walk stopped before reaching a root shot."""

    MISSING = "missing"
    CYCLE = "cycle"
    DEPTH_CAP = "depth_cap"
