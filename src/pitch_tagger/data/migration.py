"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: data/migration.py
Description:
    Repairs for records written by older versions of the tagging app.

    1. Regain / loses records without the mirrored zone, its xT and
       the attack flag get them filled in from the tagged zone.
    2. Records without a ``category`` tag get one inferred from which
       optional fields are present.  This is a heuristic for legacy
       data only; new records always carry their category.
"""

from __future__ import annotations

import logging
from typing import Any

from pitch_tagger.config import DEFAULT_CONFIG, EngineConfig
from pitch_tagger.data.base import Collection, RecordStore
from pitch_tagger.models import ActionCategory
from pitch_tagger.scoring.zone_value import DEFAULT_TABLE, ZoneTable, coerce_zone, mirror, zone_to_label

logger = logging.getLogger(__name__)

_REGAIN_MARKERS = ("playersBehindBall", "opponentsBeforeBall", "opponentsBehindBall")

# Keys that may hold a zone in any stored notation.
ZONE_KEYS = ("fromZone", "toZone", "startZone", "endZone", "defenseZone", "attackZone")


def zone_labels(record: dict[str, Any]) -> dict[str, str]:
    """Upper-case labels for zone keys stored in another notation.

    Only keys whose value resolves to a zone and differs from its label
    are returned; an empty dict means the record is already normalised.
    """
    labels: dict[str, str] = {}
    for key in ZONE_KEYS:
        value = record.get(key)
        if not isinstance(value, (str, int)):
            continue
        zone = coerce_zone(value)
        if zone is None:
            continue
        label = zone_to_label(zone, upper=True)
        if value != label:
            labels[key] = label
    return labels


def migrate_regain_loses(
    record: dict[str, Any],
    category: ActionCategory = ActionCategory.REGAIN,
    table: ZoneTable | None = None,
    config: EngineConfig | None = None,
) -> tuple[dict[str, Any], bool]:
    """Fill mirrored zone / xT (and, for regains, the attack flag) on a legacy dict.

    Zone keys stored as flat indices or lower-case labels are rewritten
    to upper-case labels.

    Returns:
        (record, changed).  Complete, normalised records and records whose
        zone cannot be resolved come back unchanged (the same object).
    """
    is_regain = category is ActionCategory.REGAIN
    labels = zone_labels(record)
    if (
        record.get("attackXT") is not None
        and record.get("attackZone")
        and (not is_regain or record.get("isAttack") is not None)
    ):
        if labels:
            return {**record, **labels}, True
        return record, False

    zone = coerce_zone(record.get("fromZone", record.get("startZone")))
    if zone is None:
        logger.warning("Cannot migrate record %s: no usable zone", record.get("id"))
        return record, False

    table = table or DEFAULT_TABLE
    cfg = config or DEFAULT_CONFIG
    attack_zone = mirror(zone)
    attack_xt = table.threat_of(attack_zone)

    migrated = {**record, **labels}
    migrated["defenseZone"] = zone_to_label(zone, upper=True)
    migrated["defenseXT"] = table.threat_of(zone)
    migrated["attackZone"] = zone_to_label(attack_zone, upper=True)
    migrated["attackXT"] = attack_xt
    if is_regain:
        migrated["isAttack"] = attack_xt < cfg.attack_xt_threshold
    return migrated, True


def infer_category(record: dict[str, Any]) -> ActionCategory:
    """Category of a legacy record, guessed from its fields.

    An explicit ``category`` always wins.
    """
    tagged = record.get("category")
    if tagged is not None:
        return ActionCategory(tagged)

    if record.get("isReaction5s") is not None:
        return ActionCategory.LOSES
    if any(record.get(key) is not None for key in _REGAIN_MARKERS):
        return ActionCategory.REGAIN
    if record.get("isBelow8s") is not None:
        return ActionCategory.LOSES
    return ActionCategory.PACKING


def migrate_match(
    store: RecordStore,
    match_id: str,
    table: ZoneTable | None = None,
    config: EngineConfig | None = None,
) -> dict[str, int]:
    """Migrate every regain and loses record of one match in place.

    Returns:
        Number of records updated per collection.
    """
    stats: dict[str, int] = {}
    for collection, category in (
        (Collection.REGAIN, ActionCategory.REGAIN),
        (Collection.LOSES, ActionCategory.LOSES),
    ):
        updated = 0
        for record in store.list_records(match_id, collection):
            migrated, changed = migrate_regain_loses(record, category, table, config)
            if migrated.get("category") is None:
                migrated = {**migrated, "category": category.value}
                changed = True
            if changed:
                store.replace_record(match_id, collection, str(record["id"]), migrated)
                updated += 1
        stats[collection.value] = updated

    logger.info(
        "Migrated match %s: %d regain, %d loses records",
        match_id, stats[Collection.REGAIN.value], stats[Collection.LOSES.value],
    )
    return stats
