"""
PitchTagger — match tagging engine for football analysts.

Usage::

    from pitch_tagger import (
        ActionCategory, ActionMode, PitchZone,
        TaggingSession, InMemoryRecordStore, JsonRecordStore,
        ShotEvent, evaluate_shot, recover_base_xg,
        threat_of, mirror, label_to_zone,
    )
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pitch-tagger")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

# Core models
from pitch_tagger.config import DEFAULT_CONFIG, EngineConfig
from pitch_tagger.errors import (
    ChainIntegrityWarning,
    RecordNotFoundError,
    ValidationError,
    ZoneRangeError,
)
from pitch_tagger.models import (
    ActionCategory,
    ActionMode,
    ActionType,
    BodyPart,
    LosesRecord,
    PackingRecord,
    PitchZone,
    RegainRecord,
    ShotEvent,
    ShotSituation,
    ZoneTransition,
)

# Scoring
from pitch_tagger.scoring.shot_chain import evaluate_shot, final_xg, recover_base_xg
from pitch_tagger.scoring.zone_value import (
    DEFAULT_TABLE,
    ZoneTable,
    label_to_zone,
    mirror,
    threat_of,
    zone_to_label,
)

# Recording
from pitch_tagger.records.builder import ActionDetails, build_record
from pitch_tagger.selection.state import ActionSelectionState
from pitch_tagger.session import TaggingSession

# Storage
from pitch_tagger.data.store import InMemoryRecordStore, JsonRecordStore

__all__ = [
    # Core
    "ActionCategory",
    "ActionMode",
    "ActionType",
    "BodyPart",
    "ChainIntegrityWarning",
    "DEFAULT_CONFIG",
    "EngineConfig",
    "LosesRecord",
    "PackingRecord",
    "PitchZone",
    "RecordNotFoundError",
    "RegainRecord",
    "ShotEvent",
    "ShotSituation",
    "ValidationError",
    "ZoneRangeError",
    "ZoneTransition",
    # Scoring
    "DEFAULT_TABLE",
    "ZoneTable",
    "evaluate_shot",
    "final_xg",
    "label_to_zone",
    "mirror",
    "recover_base_xg",
    "threat_of",
    "zone_to_label",
    # Recording
    "ActionDetails",
    "ActionSelectionState",
    "TaggingSession",
    "build_record",
    # Storage
    "InMemoryRecordStore",
    "JsonRecordStore",
]
