"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: data/export.py
Description:
    Flat Parquet export of one match collection.

    Each stored record becomes one row; list-valued fields (defense
    player ids, line players) are kept as list<string> columns.  The
    schema is inferred by PyArrow from the union of keys, so packing,
    regain and loses exports each get their own column set.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from pitch_tagger.data.base import Collection, RecordStore
from pitch_tagger.data.migration import ZONE_KEYS, zone_labels

logger = logging.getLogger(__name__)


def records_to_table(records: list[dict[str, Any]]) -> pa.Table:
    """Build an Arrow table from storage dicts (missing keys → null).

    Zone keys are written as upper-case labels whatever notation the
    record was stored in; values that name no zone are kept as text.
    """
    columns: list[str] = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)
    rows = []
    for record in records:
        row = {key: record.get(key) for key in columns}
        for key in ZONE_KEYS:
            if row.get(key) is not None:
                row[key] = str(row[key])
        row.update(zone_labels(record))
        rows.append(row)
    return pa.Table.from_pylist(rows)


def export_match_parquet(
    store: RecordStore,
    match_id: str,
    collection: Collection,
    path: str | Path,
) -> int:
    """Write one collection of one match to a Parquet file.

    Returns:
        Number of rows written.  An empty collection writes no file.
    """
    records = store.list_records(match_id, collection)
    if not records:
        logger.info("No %s records in match %s, nothing exported", collection.value, match_id)
        return 0
    table = records_to_table(records)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(table, path, compression="zstd")
    logger.info(
        "Exported %d %s records of match %s to %s",
        table.num_rows, collection.value, match_id, path,
    )
    return table.num_rows


def read_parquet_records(path: str | Path) -> list[dict[str, Any]]:
    """Read an exported file back as storage dicts (nulls dropped)."""
    table = pq.read_table(Path(path))
    return [
        {k: v for k, v in row.items() if v is not None}
        for row in table.to_pylist()
    ]
