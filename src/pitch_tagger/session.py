"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: session.py
Description:
    TaggingSession — one analyst recording actions for one match.

    Wires the picking state, the record builder and a record store
    together: save() builds the record for the current picks, stores
    it in the collection of its category and resets the picks for the
    next action.  Shots go through the session's ShotBook.
"""

from __future__ import annotations

import logging

from pitch_tagger.config import EngineConfig
from pitch_tagger.data.base import Collection, RecordStore, RosterProvider, collection_for
from pitch_tagger.data.shots import ShotBook
from pitch_tagger.errors import ValidationError
from pitch_tagger.models import ActionCategory, ActionMode, PackingRecord
from pitch_tagger.records.builder import ActionDetails, ActionRecordT, build_record
from pitch_tagger.records.serialize import record_from_dict, record_to_dict
from pitch_tagger.scoring.zone_value import ZoneTable
from pitch_tagger.selection.state import ActionSelectionState

logger = logging.getLogger(__name__)


class TaggingSession:
    def __init__(
        self,
        store: RecordStore,
        match_id: str,
        roster: RosterProvider | None = None,
        table: ZoneTable | None = None,
        config: EngineConfig | None = None,
    ):
        self.store = store
        self.match_id = match_id
        self.roster = roster
        self.table = table
        self.config = config
        self.state = ActionSelectionState()
        self.shots = ShotBook(store, match_id, config)

    def start(self, category: ActionCategory, mode: ActionMode = ActionMode.ATTACK) -> None:
        """Begin recording a new action; earlier picks are dropped."""
        self.state = ActionSelectionState(category=category)
        self.state.set_mode(mode)

    def _known_ids(self) -> set[str] | None:
        if self.roster is None:
            return None
        return {p.player_id for p in self.roster.players_for_match(self.match_id)}

    def save(self, details: ActionDetails | None = None) -> ActionRecordT | ValidationError:
        """Build and store the current action.

        On a ValidationError nothing is stored and the picks stay as
        they are so the user can complete them.
        """
        result = build_record(
            self.state,
            self.match_id,
            details,
            known_player_ids=self._known_ids(),
            table=self.table,
            config=self.config,
        )
        if isinstance(result, ValidationError):
            logger.debug("Not saved: %s", result)
            return result

        mode = result.mode if isinstance(result, PackingRecord) else ActionMode.ATTACK
        collection = collection_for(result.category, mode)
        self.store.append_record(self.match_id, collection, record_to_dict(result))
        self.state.reset()
        return result

    def cancel(self) -> None:
        self.state.reset()

    def records(self, collection: Collection) -> list[ActionRecordT]:
        return [
            record_from_dict(d)
            for d in self.store.list_records(self.match_id, collection)
        ]

    def all_records(self) -> list[ActionRecordT]:
        """Every action of the match across the four action collections."""
        out: list[ActionRecordT] = []
        for collection in Collection:
            if collection is not Collection.SHOTS:
                out.extend(self.records(collection))
        return out

    def delete(self, record: ActionRecordT) -> None:
        mode = record.mode if isinstance(record, PackingRecord) else ActionMode.ATTACK
        self.store.delete_record(
            self.match_id, collection_for(record.category, mode), record.id,
        )
