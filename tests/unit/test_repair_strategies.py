"""Repair strategy and repair engine tests."""

from trip_coherence.domain.enums import FindingKind, Severity
from trip_coherence.domain.models import Finding, Trip, TripDay, TripItem
from trip_coherence.repair import REPAIR_DISPATCH, RepairEngine
from trip_coherence.repair.strategies import (
    repair_activity_after_departure,
    repair_activity_before_arrival,
    repair_duplicate,
    repair_invalid_activity,
    repair_logistics_order,
    repair_meal_order,
    repair_overlap,
)
from trip_coherence.validators import run_all_validators


def _item(item_id: str, type_: str, title: str, start: str, end: str) -> TripItem:
    return TripItem(id=item_id, type=type_, title=title, start_time=start, end_time=end)


def _trip(*days: list[TripItem]) -> Trip:
    return Trip(days=[TripDay(day_number=index + 1, items=list(items)) for index, items in enumerate(days)])


def _only(trip: Trip, kind: FindingKind) -> Finding:
    matches = [row for row in run_all_validators(trip) if row.kind == kind]
    assert matches, f"expected a {kind.value} finding"
    return matches[0]


def _times(trip: Trip, day_number: int, item_id: str) -> tuple[str, str]:
    item = next(row for row in trip.find_day(day_number).items if row.id == item_id)
    return item.start_time, item.end_time


def _ids(trip: Trip, day_number: int) -> list[str]:
    return [row.id for row in trip.find_day(day_number).items]


def test_dispatch_covers_every_finding_kind():
    assert set(REPAIR_DISPATCH) == set(FindingKind)


def test_activity_before_arrival_moves_after_landing():
    trip = _trip(
        [
            _item("flight", "flight", "Vol Paris → Rome", "07:30", "09:30"),
            _item("walk", "activity", "City Walk", "09:00", "10:00"),
        ],
        [],
    )
    actions = repair_activity_before_arrival(trip, _only(trip, FindingKind.ACTIVITY_BEFORE_ARRIVAL))
    assert _times(trip, 1, "walk") == ("10:00", "11:00")
    assert actions == ["day1:moved:City Walk:10:00-11:00"]


def test_activity_before_arrival_removed_without_slot():
    trip = _trip(
        [
            _item("flight", "flight", "Vol Paris → Rome", "20:00", "22:00"),
            _item("show", "activity", "Opera", "19:00", "21:00"),
        ],
        [],
    )
    actions = repair_activity_before_arrival(trip, _only(trip, FindingKind.ACTIVITY_BEFORE_ARRIVAL))
    assert _ids(trip, 1) == ["flight"]
    assert actions == ["day1:removed:no_slot:Opera"]


def test_activity_after_departure_moves_before_checkout():
    trip = _trip(
        [],
        [
            _item("orsay", "activity", "Musée d'Orsay", "10:00", "12:00"),
            _item("checkout", "checkout", "Check-out Hôtel", "11:00", "11:30"),
        ],
    )
    repair_activity_after_departure(trip, _only(trip, FindingKind.ACTIVITY_AFTER_DEPARTURE))
    assert _times(trip, 2, "orsay") == ("08:30", "10:30")


def test_activity_after_departure_removed_when_too_early():
    trip = _trip(
        [],
        [
            _item("orsay", "activity", "Musée d'Orsay", "09:00", "11:00"),
            _item("checkout", "checkout", "Check-out Hôtel", "09:30", "10:00"),
        ],
    )
    actions = repair_activity_after_departure(trip, _only(trip, FindingKind.ACTIVITY_AFTER_DEPARTURE))
    assert _ids(trip, 2) == ["checkout"]
    assert actions == ["day2:removed:no_slot:Musée d'Orsay"]


def test_tight_departure_keeps_margin_before_main_transport():
    trip = _trip(
        [],
        [
            _item("shop", "activity", "Galeries Lafayette", "16:00", "17:45"),
            _item("flight", "flight", "Vol Paris → Rome", "18:00", "20:00"),
        ],
    )
    repair_activity_after_departure(trip, _only(trip, FindingKind.DEPARTURE_TOO_TIGHT))
    assert _times(trip, 2, "shop") == ("15:45", "17:30")


def test_overlap_moves_later_item_with_gap():
    trip = _trip(
        [],
        [
            _item("museum", "activity", "Museum", "10:00", "11:00"),
            _item("market", "activity", "Mercato Centrale", "10:30", "11:30"),
        ],
        [],
    )
    repair_overlap(trip, _only(trip, FindingKind.OVERLAP))
    assert _times(trip, 2, "museum") == ("10:00", "11:00")
    assert _times(trip, 2, "market") == ("11:15", "12:15")


def test_overlap_never_moves_a_booking():
    trip = _trip(
        [],
        [
            _item("tour", "activity", "Vatican Museums", "14:00", "17:00"),
            _item("train", "transport", "Train Rome → Florence", "16:00", "17:30"),
        ],
        [],
    )
    repair_overlap(trip, _only(trip, FindingKind.OVERLAP))
    assert _times(trip, 2, "train") == ("16:00", "17:30")
    assert _times(trip, 2, "tour") == ("17:45", "20:45")


def test_overlap_between_bookings_without_room_is_left_unresolved():
    trip = _trip(
        [],
        [
            _item("train", "transport", "Train Rome → Naples", "20:00", "22:30"),
            _item("ferry", "transport", "Ferry Naples → Capri", "22:00", "23:00"),
        ],
        [],
    )
    actions = repair_overlap(trip, _only(trip, FindingKind.OVERLAP))
    assert actions == ["day2:unresolved:overlap:Ferry Naples → Capri"]
    assert _ids(trip, 2) == ["train", "ferry"]


def test_logistics_replay_on_first_day():
    trip = _trip(
        [
            _item("flight", "flight", "Vol Paris → Rome", "08:00", "10:00"),
            _item("transfer", "transport", "Transfert Aéroport → Hôtel", "09:30", "10:15"),
            _item("walk", "activity", "Pantheon", "11:00", "12:00"),
        ],
        [],
    )
    actions = repair_logistics_order(trip, _only(trip, FindingKind.TRANSFER_AFTER_ACTIVITY))
    assert _times(trip, 1, "flight") == ("08:00", "10:00")
    assert _times(trip, 1, "transfer") == ("10:00", "10:45")
    assert _times(trip, 1, "walk") == ("11:00", "12:00")
    assert "day1:reordered_logistics:2" in actions


def test_logistics_replay_reanchors_content_on_first_day():
    trip = _trip(
        [
            _item("walk", "activity", "Pantheon", "09:00", "10:00"),
            _item("gelato", "activity", "Giolitti", "09:30", "10:00"),
            _item("flight", "flight", "Vol Paris → Rome", "09:45", "11:45"),
        ],
        [],
    )
    repair_logistics_order(trip, _only(trip, FindingKind.ILLOGICAL_SEQUENCE))
    assert _times(trip, 1, "walk") == ("12:15", "13:15")
    assert _times(trip, 1, "gelato") == ("13:30", "14:00")


def test_logistics_replay_on_last_day():
    trip = _trip(
        [],
        [
            _item("louvre", "activity", "Louvre", "09:00", "10:00"),
            _item("checkout", "checkout", "Check-out", "11:00", "11:30"),
            _item("transfer", "transport", "Transfert Hôtel → Aéroport", "11:00", "12:00"),
            _item("flight", "flight", "Vol Paris → Rome", "14:00", "16:00"),
        ],
    )
    repair_logistics_order(trip, _only(trip, FindingKind.CHECKOUT_AFTER_TRANSFER))
    assert _times(trip, 2, "checkout") == ("11:00", "11:30")
    assert _times(trip, 2, "transfer") == ("11:30", "12:30")
    assert _times(trip, 2, "flight") == ("14:00", "16:00")
    assert _times(trip, 2, "louvre") == ("09:00", "10:00")


def test_logistics_replay_ignores_middle_days():
    trip = _trip([], [], [])
    finding = Finding(kind=FindingKind.ILLOGICAL_SEQUENCE, day_number=2)
    assert repair_logistics_order(trip, finding) == []


def test_duplicate_removes_later_occurrence():
    trip = _trip(
        [_item("e1", "activity", "Tour Eiffel", "10:00", "12:00")],
        [],
        [_item("e3", "activity", "Tour Eiffel", "14:00", "16:00")],
    )
    actions = repair_duplicate(trip, _only(trip, FindingKind.DUPLICATE_ATTRACTION))
    assert _ids(trip, 1) == ["e1"]
    assert _ids(trip, 3) == []
    assert actions == ["day3:removed:duplicate_of_day1:Tour Eiffel"]


def test_invalid_activities_are_removed():
    trip = _trip(
        [],
        [
            _item("pause", "activity", "Pause café", "15:00", "15:30"),
            _item("yoga", "activity", "Sunrise Yoga", "03:00", "04:00"),
        ],
        [],
    )
    generic = repair_invalid_activity(trip, _only(trip, FindingKind.GENERIC_ACTIVITY))
    hour = repair_invalid_activity(trip, _only(trip, FindingKind.ACTIVITY_IMPOSSIBLE_HOUR))
    assert generic == ["day2:removed:generic:Pause café"]
    assert hour == ["day2:removed:impossible_hour:Sunrise Yoga"]
    assert _ids(trip, 2) == []


def test_meal_order_moves_meals_to_canonical_windows():
    trip = _trip(
        [],
        [
            _item("din", "restaurant", "Dîner", "18:00", "19:30"),
            _item("dej", "restaurant", "Déjeuner", "19:45", "20:45"),
        ],
        [],
    )
    repair_meal_order(trip, _only(trip, FindingKind.MEAL_WRONG_ORDER))
    assert _times(trip, 2, "dej") == ("12:30", "13:30")
    assert _times(trip, 2, "din") == ("19:30", "21:00")


def test_meal_without_duration_gets_window_length():
    trip = _trip(
        [],
        [
            _item("lunch", "restaurant", "Lunch", "13:00", "13:00"),
            _item("breakfast", "restaurant", "Breakfast", "14:00", "14:00"),
        ],
        [],
    )
    repair_meal_order(trip, _only(trip, FindingKind.MEAL_WRONG_ORDER))
    assert _times(trip, 2, "breakfast") == ("08:00", "09:30")
    assert _times(trip, 2, "lunch") == ("12:30", "14:00")


def test_strategies_tolerate_missing_items():
    trip = _trip([], [_item("museum", "activity", "Museum", "10:00", "11:00")], [])
    ghost = _item("ghost", "activity", "Ghost", "10:30", "11:30")
    finding = Finding(kind=FindingKind.OVERLAP, day_number=2, items=[trip.days[1].items[0], ghost])
    assert repair_overlap(trip, finding) == []
    assert repair_invalid_activity(trip, Finding(kind=FindingKind.GENERIC_ACTIVITY, day_number=9)) == []


def test_engine_works_on_a_copy_and_sorts():
    trip = _trip(
        [],
        [
            _item("market", "activity", "Mercato Centrale", "10:30", "11:30"),
            _item("museum", "activity", "Museum", "10:00", "11:00"),
        ],
        [],
    )
    result = RepairEngine().repair(trip, run_all_validators(trip))
    assert _ids(trip, 2) == ["market", "museum"]
    assert _ids(result.trip, 2) == ["museum", "market"]
    assert [row.order_index for row in result.trip.days[1].items] == [0, 1]
    assert result.rounds == 1
    assert result.remaining == []


def test_engine_skips_findings_resolved_earlier_in_the_pass():
    trip = _trip(
        [
            _item("flight", "flight", "Vol Paris → Rome", "07:30", "09:30"),
            _item("walk", "activity", "City Walk", "09:00", "10:00"),
        ],
        [],
    )
    findings = run_all_validators(trip)
    assert [row.kind for row in findings] == [FindingKind.ACTIVITY_BEFORE_ARRIVAL, FindingKind.OVERLAP]
    result = RepairEngine().repair(trip, findings)
    assert result.actions == ["day1:moved:City Walk:10:00-11:00"]


def test_engine_can_leave_warnings_alone():
    trip = _trip(
        [_item("e1", "activity", "Tour Eiffel", "10:00", "12:00")],
        [_item("e2", "activity", "Tour Eiffel", "10:00", "12:00")],
    )
    result = RepairEngine(include_warnings=False).repair(trip, run_all_validators(trip))
    assert result.actions == []
    assert result.rounds == 0
    assert [row.severity for row in result.remaining_warnings] == [Severity.WARNING]


def test_engine_follows_cascade_within_round_budget():
    trip = _trip(
        [
            _item("flight", "flight", "Vol Paris → Rome", "10:00", "12:00"),
            _item("colosseum", "activity", "Colosseum", "09:00", "10:00"),
            _item("forum", "activity", "Foro Romano", "12:30", "14:00"),
        ],
        [],
    )
    findings = run_all_validators(trip)

    single = RepairEngine(run_all_validators, max_rounds=1).repair(trip, findings)
    assert single.rounds == 1
    assert [row.kind for row in single.remaining] == [FindingKind.OVERLAP]

    bounded = RepairEngine(run_all_validators, max_rounds=3).repair(trip, findings)
    assert bounded.rounds == 2
    assert bounded.remaining == []
    assert _times(bounded.trip, 1, "forum") == ("13:45", "15:15")


def test_logistics_replay_keeps_gaps_between_bookings():
    trip = _trip(
        [
            _item("flight", "flight", "Vol Paris → Rome", "08:00", "10:00"),
            _item("transfer", "transport", "Transfert Aéroport → Hôtel", "09:30", "10:15"),
            _item("hotel", "hotel", "Check-in Hôtel Artemide", "15:00", "15:30"),
        ],
        [],
    )
    repair_logistics_order(trip, _only(trip, FindingKind.TRANSFER_AFTER_ACTIVITY))
    assert _times(trip, 1, "transfer") == ("10:00", "10:45")
    assert _times(trip, 1, "hotel") == ("15:00", "15:30")
