"""
Project: PitchTagger
File Created: 2026-02-18
Author: Xingnan Zhu
File Name: data/store.py
Description:
    Record stores implementing the RecordStore protocol.

    InMemoryRecordStore — dict of lists, for tests and scratch sessions.
    JsonRecordStore     — one JSON document per match on disk:
                            <root>/<match_id>.json
                          with one list per collection
                          ("actions_packing", "actions_regain", ...,
                          "shots"), the same layout as the match
                          documents of the tagging app.

    Stores copy records on the way in and out; callers never share
    mutable dicts with the store.
"""

from __future__ import annotations

import copy
import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any

from pitch_tagger.data.base import Collection
from pitch_tagger.errors import RecordNotFoundError

logger = logging.getLogger(__name__)


def _find(records: list[dict[str, Any]], record_id: str) -> int:
    for i, record in enumerate(records):
        if record.get("id") == record_id:
            return i
    return -1


class InMemoryRecordStore:
    """Volatile store; contents vanish with the process."""

    def __init__(self) -> None:
        self._data: dict[tuple[str, Collection], list[dict[str, Any]]] = defaultdict(list)

    def append_record(self, match_id: str, collection: Collection, record: dict[str, Any]) -> None:
        self._data[(match_id, collection)].append(copy.deepcopy(record))

    def replace_record(
        self, match_id: str, collection: Collection, record_id: str, record: dict[str, Any],
    ) -> None:
        records = self._data[(match_id, collection)]
        i = _find(records, record_id)
        if i < 0:
            raise RecordNotFoundError(f"{collection.value}/{record_id} in match {match_id}")
        records[i] = copy.deepcopy(record)

    def delete_record(self, match_id: str, collection: Collection, record_id: str) -> None:
        records = self._data[(match_id, collection)]
        i = _find(records, record_id)
        if i < 0:
            raise RecordNotFoundError(f"{collection.value}/{record_id} in match {match_id}")
        del records[i]

    def list_records(self, match_id: str, collection: Collection) -> list[dict[str, Any]]:
        return copy.deepcopy(self._data.get((match_id, collection), []))


class JsonRecordStore:
    """Match documents as JSON files under ``root``."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, match_id: str) -> Path:
        # One file per match directly under root.
        if not match_id or match_id in (".", "..") or "/" in match_id or "\\" in match_id:
            raise ValueError(f"Invalid match id: {match_id!r}")
        return self.root / f"{match_id}.json"

    def load_document(self, match_id: str) -> dict[str, Any]:
        """The whole match document ({} if the match has none yet)."""
        path = self._path(match_id)
        if not path.exists():
            return {}
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError):
            logger.exception("Failed to read match document: %s", path)
            raise

    def _write_document(self, match_id: str, document: dict[str, Any]) -> None:
        path = self._path(match_id)
        tmp = path.with_suffix(".json.tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
        tmp.replace(path)

    def _update(self, match_id: str, collection: Collection, records: list[dict[str, Any]]) -> None:
        document = self.load_document(match_id)
        document[collection.document_key] = records
        self._write_document(match_id, document)

    def append_record(self, match_id: str, collection: Collection, record: dict[str, Any]) -> None:
        records = self.list_records(match_id, collection)
        records.append(record)
        self._update(match_id, collection, records)
        logger.info("Saved %s/%s for match %s", collection.value, record.get("id"), match_id)

    def replace_record(
        self, match_id: str, collection: Collection, record_id: str, record: dict[str, Any],
    ) -> None:
        records = self.list_records(match_id, collection)
        i = _find(records, record_id)
        if i < 0:
            raise RecordNotFoundError(f"{collection.value}/{record_id} in match {match_id}")
        records[i] = record
        self._update(match_id, collection, records)
        logger.info("Replaced %s/%s for match %s", collection.value, record_id, match_id)

    def delete_record(self, match_id: str, collection: Collection, record_id: str) -> None:
        records = self.list_records(match_id, collection)
        i = _find(records, record_id)
        if i < 0:
            raise RecordNotFoundError(f"{collection.value}/{record_id} in match {match_id}")
        del records[i]
        self._update(match_id, collection, records)
        logger.info("Deleted %s/%s for match %s", collection.value, record_id, match_id)

    def list_records(self, match_id: str, collection: Collection) -> list[dict[str, Any]]:
        return list(self.load_document(match_id).get(collection.document_key, []))

    def match_ids(self) -> list[str]:
        return sorted(p.stem for p in self.root.glob("*.json"))
