"""Zone value — xT (Expected Threat) grid lookup and zone geometry.

Maps a pitch zone to a threat value indicating how dangerous that
location is for creating goals, and converts between the three zone
notations in use:
  - (row, col)      row 0–7, col 0–11
  - label           "a1" … "h12"  (row letter + 1-based column)
  - flat index      0–95, row-major (legacy stored records)

Grid: 8 rows (a→h, touchline→touchline) × 12 columns (defense→attack).
"""

from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path

import numpy as np

from pitch_tagger.errors import ZoneRangeError
from pitch_tagger.models import N_COLS, N_ROWS, N_ZONES, ROW_LETTERS, PitchZone

logger = logging.getLogger(__name__)

# Rows a/h, b/g, c/f and d/e are identical: the grid is symmetric
# about the halfway line along the touchlines.
_XT_GRID = np.array([
    # col 1        col 2        col 3        col 4
    # col 5        col 6        col 7        col 8
    # col 9        col 10       col 11       col 12

    # Row a (touchline)
    [0.00638303, 0.00779616, 0.00844854, 0.00977659,
     0.01126267, 0.01248344, 0.01473596, 0.0174506,
     0.02122129, 0.02756312, 0.03485072, 0.0379259],

    # Row b
    [0.00750072, 0.00878589, 0.00942382, 0.0105949,
     0.01214719, 0.0138454, 0.01611813, 0.01870347,
     0.02401521, 0.02953272, 0.04066992, 0.04647721],

    # Row c
    [0.0088799, 0.00977745, 0.01001304, 0.01110462,
     0.01269174, 0.01429128, 0.01685596, 0.01935132,
     0.0241224, 0.02855202, 0.05491138, 0.06442595],

    # Row d (central)
    [0.00941056, 0.01082722, 0.01016549, 0.01132376,
     0.01262646, 0.01484598, 0.01689528, 0.0199707,
     0.02385149, 0.03511326, 0.10805102, 0.25745362],

    # Row e (central)
    [0.00941056, 0.01082722, 0.01016549, 0.01132376,
     0.01262646, 0.01484598, 0.01689528, 0.0199707,
     0.02385149, 0.03511326, 0.10805102, 0.25745362],

    # Row f
    [0.0088799, 0.00977745, 0.01001304, 0.01110462,
     0.01269174, 0.01429128, 0.01685596, 0.01935132,
     0.0241224, 0.02855202, 0.05491138, 0.06442595],

    # Row g
    [0.00750072, 0.00878589, 0.00942382, 0.0105949,
     0.01214719, 0.0138454, 0.01611813, 0.01870347,
     0.02401521, 0.02953272, 0.04066992, 0.04647721],

    # Row h (touchline)
    [0.00638303, 0.00779616, 0.00844854, 0.00977659,
     0.01126267, 0.01248344, 0.01473596, 0.0174506,
     0.02122129, 0.02756312, 0.03485072, 0.0379259],
])

_LABEL_RE = re.compile(r"^\s*([a-hA-H])\s*(\d{1,2})\s*$")


# ---------------------------------------------------------------------------
# Zone geometry
# ---------------------------------------------------------------------------

def zone_at(row: int, col: int) -> PitchZone:
    """Build a zone from grid coordinates.

    Raises:
        ZoneRangeError: If (row, col) is outside the 8 × 12 grid.
    """
    if not (0 <= row < N_ROWS and 0 <= col < N_COLS):
        raise ZoneRangeError(f"Zone ({row}, {col}) outside the {N_ROWS}x{N_COLS} grid")
    return PitchZone(row, col)


def zone_from_index(index: int) -> PitchZone:
    """Build a zone from its flat row-major index (0–95)."""
    if not 0 <= index < N_ZONES:
        raise ZoneRangeError(f"Zone index {index} outside 0..{N_ZONES - 1}")
    return PitchZone(index // N_COLS, index % N_COLS)


def mirror(zone: PitchZone) -> PitchZone:
    """Point-symmetric counterpart of a zone (involutive).

    Used to read the attacking-side threat of an event tagged where
    the defending team is.
    """
    return PitchZone(N_ROWS - 1 - zone.row, N_COLS - 1 - zone.col)


def label_to_zone(label: str | None) -> PitchZone | None:
    """Parse ``"a1"`` … ``"h12"`` (case-insensitive).

    Returns None for anything that is not a valid zone label.
    """
    if not label:
        return None
    m = _LABEL_RE.match(label)
    if m is None:
        return None
    row = ROW_LETTERS.index(m.group(1).lower())
    number = int(m.group(2))
    if not 1 <= number <= N_COLS:
        return None
    return PitchZone(row, number - 1)


def zone_to_label(zone: PitchZone, upper: bool = False) -> str:
    """Inverse of ``label_to_zone``; ``upper=True`` gives the stored "A1" form."""
    label = zone.label
    return label.upper() if upper else label


def coerce_zone(value: PitchZone | str | int | None) -> PitchZone | None:
    """Accept any stored zone notation; None when it cannot be resolved."""
    if value is None or isinstance(value, PitchZone):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return PitchZone(value // N_COLS, value % N_COLS) if 0 <= value < N_ZONES else None
    return label_to_zone(value)


def all_zones() -> list[PitchZone]:
    """All 96 zones in row-major order."""
    return [PitchZone(r, c) for r in range(N_ROWS) for c in range(N_COLS)]


# ---------------------------------------------------------------------------
# Threat table
# ---------------------------------------------------------------------------

class ZoneTable:
    """An 8 × 12 threat matrix, loaded once and read-only afterwards."""

    def __init__(self, grid: np.ndarray | list[list[float]]):
        arr = np.array(grid, dtype=float)
        if arr.shape != (N_ROWS, N_COLS):
            raise ValueError(
                f"xT grid must have shape ({N_ROWS}, {N_COLS}), got {arr.shape}"
            )
        if not np.all(np.isfinite(arr)) or np.any(arr < 0):
            raise ValueError("xT grid values must be finite and non-negative")
        arr.setflags(write=False)
        self._grid = arr

    @property
    def grid(self) -> np.ndarray:
        return self._grid

    def threat(self, row: int, col: int) -> float:
        """Threat value of cell (row, col)."""
        if not (0 <= row < N_ROWS and 0 <= col < N_COLS):
            raise ZoneRangeError(f"Zone ({row}, {col}) outside the {N_ROWS}x{N_COLS} grid")
        return float(self._grid[row, col])

    def threat_of(self, zone: PitchZone) -> float:
        return self.threat(zone.row, zone.col)

    def mirrored_threat_of(self, zone: PitchZone) -> float:
        """Threat of the opposite zone."""
        return self.threat_of(mirror(zone))

    @classmethod
    def from_json(cls, path: str | Path) -> ZoneTable:
        """Load a table from JSON.

        Accepts either a nested 8 × 12 list or a mapping of zone labels
        to values (``{"a1": 0.0064, ...}``) that covers all 96 zones.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, list):
            return cls(data)

        grid = np.full((N_ROWS, N_COLS), np.nan)
        for key, value in data.items():
            zone = label_to_zone(key)
            if zone is None:
                raise ValueError(f"Invalid zone label in {path}: {key!r}")
            grid[zone.row, zone.col] = float(value)
        if np.isnan(grid).any():
            missing = [z.label for z in all_zones() if np.isnan(grid[z.row, z.col])]
            raise ValueError(f"xT table {path} is missing zones: {', '.join(missing)}")
        logger.info("Loaded xT table from %s", path)
        return cls(grid)

    @classmethod
    def from_csv(cls, path: str | Path) -> ZoneTable:
        """Load a table from a headerless CSV of 8 rows × 12 columns."""
        path = Path(path)
        with path.open("r", encoding="utf-8", newline="") as f:
            rows = [
                [float(cell) for cell in row]
                for row in csv.reader(f)
                if row
            ]
        logger.info("Loaded xT table from %s", path)
        return cls(rows)


DEFAULT_TABLE = ZoneTable(_XT_GRID)


def threat_of(zone: PitchZone, table: ZoneTable | None = None) -> float:
    """Look up the xT value of a zone in ``table`` (default: built-in grid).

    Raises:
        ZoneRangeError: If the zone is outside the grid.
    """
    return (table or DEFAULT_TABLE).threat_of(zone)
