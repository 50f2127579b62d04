"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: data/shots.py
Description:
    ShotBook — the shots of one match, backed by a RecordStore.

    Serves as the ancestor lookup for rebound chains and runs every
    save through the xG pipeline, so stored shots always carry their
    final xG.  Reopening a stored shot recovers its base xG with the
    inverse pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from pitch_tagger.config import EngineConfig
from pitch_tagger.data.base import Collection, RecordStore
from pitch_tagger.errors import RecordNotFoundError
from pitch_tagger.models import ShotEvent
from pitch_tagger.records.serialize import shot_from_dict, shot_to_dict
from pitch_tagger.scoring.shot_chain import evaluate_shot, recover_base_xg, walk_chain

logger = logging.getLogger(__name__)


class ShotBook:
    def __init__(self, store: RecordStore, match_id: str, config: EngineConfig | None = None):
        self.store = store
        self.match_id = match_id
        self.config = config

    def shots(self) -> list[ShotEvent]:
        return [
            shot_from_dict(d)
            for d in self.store.list_records(self.match_id, Collection.SHOTS)
        ]

    def shot_by_id(self, shot_id: str) -> ShotEvent | None:
        for shot in self.shots():
            if shot.id == shot_id:
                return shot
        return None

    def _lookup(self):
        # One read of the collection per operation, not per chain link.
        by_id = {s.id: s for s in self.shots()}
        return by_id.get

    def save_shot(self, shot: ShotEvent) -> ShotEvent:
        """Compute the final xG of a new shot and append it."""
        scored = evaluate_shot(shot, self._lookup(), self.config)
        scored = replace(scored, match_id=self.match_id)
        self.store.append_record(self.match_id, Collection.SHOTS, shot_to_dict(scored))
        logger.info("Shot %s saved with xG %d%%", scored.id, scored.xg_percent)
        return scored

    def reopen(self, shot_id: str) -> ShotEvent:
        """Stored shot with its base xG recovered, ready for editing.

        Raises:
            RecordNotFoundError: If no such shot is stored.
        """
        lookup = self._lookup()
        shot = lookup(shot_id)
        if shot is None:
            raise RecordNotFoundError(f"shots/{shot_id} in match {self.match_id}")
        base = recover_base_xg(shot, lookup, self.config)
        return replace(shot, base_xg_percent=base)

    def update_shot(self, shot: ShotEvent) -> ShotEvent:
        """Replace a stored shot wholesale, recomputing its final xG.

        Shots that rebound off this one keep their stored xG.
        """
        scored = evaluate_shot(shot, self._lookup(), self.config)
        scored = replace(scored, match_id=self.match_id)
        self.store.replace_record(
            self.match_id, Collection.SHOTS, scored.id, shot_to_dict(scored),
        )
        return scored

    def delete_shot(self, shot_id: str) -> None:
        self.store.delete_record(self.match_id, Collection.SHOTS, shot_id)

    def chain_of(self, shot_id: str) -> list[ShotEvent]:
        """The shot followed by its ancestors, nearest first."""
        lookup = self._lookup()
        shot = lookup(shot_id)
        if shot is None:
            return []
        walk = walk_chain(
            shot.previous_shot_id, lookup, origin_id=shot.id, config=self.config,
        )
        return [shot, *walk.ancestors]

    def total_xg(self) -> float:
        """Sum of final xG (as probability) over all shots of the match."""
        return sum(s.xg or 0.0 for s in self.shots())
