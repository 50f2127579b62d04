"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: __init__.py
Description:
    Record stores, rosters, shot book, migration and export.
"""

from pitch_tagger.data.base import Collection, RecordStore, collection_for
from pitch_tagger.data.roster import Roster, load_roster_csv, load_roster_json
from pitch_tagger.data.shots import ShotBook
from pitch_tagger.data.store import InMemoryRecordStore, JsonRecordStore

__all__ = [
    "Collection",
    "InMemoryRecordStore",
    "JsonRecordStore",
    "RecordStore",
    "Roster",
    "ShotBook",
    "collection_for",
    "load_roster_csv",
    "load_roster_json",
]
