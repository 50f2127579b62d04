"""PitchTagger Demo — tag a short passage of play and a rebound.

Usage:
    uv run python demo.py
"""

from pitch_tagger.analysis.summary import connections, summarize_player
from pitch_tagger.data.base import Collection
from pitch_tagger.data.roster import Roster
from pitch_tagger.data.store import InMemoryRecordStore
from pitch_tagger.models import ActionCategory, BodyPart, RosterPlayer, ShotEvent
from pitch_tagger.records.builder import ActionDetails
from pitch_tagger.scoring.zone_value import label_to_zone
from pitch_tagger.session import TaggingSession


def main():
    match_id = "demo-match"
    roster = Roster({match_id: [
        RosterPlayer("p6", "Nowak", "CM", 6),
        RosterPlayer("p10", "Silva", "AM", 10),
        RosterPlayer("p9", "Berg", "ST", 9),
    ]})
    store = InMemoryRecordStore()
    session = TaggingSession(store, match_id, roster=roster)

    # Pass c5 → d9 breaking two lines
    session.state.click_player("p6")
    session.state.click_player("p10")
    session.state.click_zone(label_to_zone("c5"))
    session.state.click_zone(label_to_zone("d9"))
    session.state.players.add_points(2)
    record = session.save(ActionDetails(minute=23))
    print(f"Pass  {record.sender_id} -> {record.receiver_id}: "
          f"xT {record.xt_start:.3f} -> {record.xt_end:.3f}, PxT {record.pxt:.3f}")

    # Dribble in d9
    session.start(ActionCategory.PACKING)
    session.state.click_player("p10")
    session.state.click_zone(label_to_zone("d9"))
    session.state.click_zone(label_to_zone("d9"))
    record = session.save(ActionDetails(minute=23))
    print(f"Dribble {record.sender_id} in {record.zone_transition.start}: {record.action_type.value}")

    # Regain high up the pitch
    session.start(ActionCategory.REGAIN)
    session.state.click_player("p9")
    session.state.click_zone(label_to_zone("d11"))
    regain = session.save(ActionDetails(minute=31))
    print(f"Regain {regain.defense_zone} (mirror {regain.attack_zone}), "
          f"attack xT {regain.attack_xt:.4f}, isAttack={regain.is_attack}")

    # Shot, saved, then headed rebound
    first = session.shots.save_shot(ShotEvent(
        id="shot-1", x=91.0, y=47.0, base_xg_percent=30, player_id="p10", minute=32,
    ))
    rebound = session.shots.save_shot(ShotEvent(
        id="shot-2", x=96.0, y=51.0, base_xg_percent=50, player_id="p9", minute=32,
        body_part=BodyPart.HEAD, line_defenders_count=1, previous_shot_id=first.id,
    ))
    print(f"\nShot {first.id}: {first.xg_percent}%")
    print(f"Rebound {rebound.id}: {rebound.xg_percent}% "
          f"(base recovered on reopen: {session.shots.reopen(rebound.id).base_xg_percent}%)")

    # Summaries
    records = session.all_records()
    shots = session.shots.shots()
    print("\n" + "=" * 60)
    print("PLAYER SUMMARY")
    print("=" * 60)
    for player in roster.players_for_match(match_id):
        s = summarize_player(records, shots, player.player_id)
        print(f"  #{player.number} {player.name:<8} PxT {s.total_pxt:+.3f}  "
              f"xG {s.total_xg:.2f}  regains {s.regains}")

    for edge in connections(records):
        print(f"  {edge.sender_id} -> {edge.receiver_id}: {edge.count}x, {edge.packing_points} pts")

    print(f"\nStored packing records: {len(store.list_records(match_id, Collection.PACKING))}")


if __name__ == "__main__":
    main()
