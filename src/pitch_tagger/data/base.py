"""
Collaborator protocols for PitchTagger.

Defines the interfaces the engine talks to but does not own:
the record store, the roster provider and the shot lookup.
Concrete implementations live next to this module.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from pitch_tagger.models import ActionCategory, ActionMode, RosterPlayer, ShotEvent


class Collection(str, Enum):
    """Disjoint logical collections of a match document."""

    PACKING = "packing"
    UNPACKING = "unpacking"  # defense-mode packing
    REGAIN = "regain"
    LOSES = "loses"
    SHOTS = "shots"

    @property
    def document_key(self) -> str:
        """Key of the collection inside a stored match document."""
        if self is Collection.SHOTS:
            return "shots"
        return f"actions_{self.value}"


def collection_for(category: ActionCategory, mode: ActionMode = ActionMode.ATTACK) -> Collection:
    """Collection a record of this category (and packing mode) is stored in."""
    if category is ActionCategory.PACKING:
        return Collection.UNPACKING if mode is ActionMode.DEFENSE else Collection.PACKING
    return Collection(category.value)


class RecordStore(Protocol):
    """Persistence service keyed by match and collection.

    Records cross this boundary as storage dicts (see
    ``records.serialize``); each carries a unique ``"id"``.
    """

    def append_record(self, match_id: str, collection: Collection, record: dict[str, Any]) -> None:
        ...

    def replace_record(
        self, match_id: str, collection: Collection, record_id: str, record: dict[str, Any],
    ) -> None:
        """Raises RecordNotFoundError for an unknown id."""
        ...

    def delete_record(self, match_id: str, collection: Collection, record_id: str) -> None:
        """Raises RecordNotFoundError for an unknown id."""
        ...

    def list_records(self, match_id: str, collection: Collection) -> list[dict[str, Any]]:
        ...


class RosterProvider(Protocol):
    def players_for_match(self, match_id: str) -> list[RosterPlayer]:
        ...


class ShotSource(Protocol):
    def shot_by_id(self, shot_id: str) -> ShotEvent | None:
        ...
