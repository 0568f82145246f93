"""共有位置ステートのテスト"""

from fakes import KONSTANZ
from revgeocode.features.geocoding.domain.models import Address
from revgeocode.features.location.domain.models import (
    DEFAULT_LOCATION_RECORD,
    LocationRecord,
    Slot,
)
from revgeocode.features.location.state.location_state_store import LocationStateStore

RECORD = LocationRecord(coordinates=KONSTANZ, address=Address(city="Konstanz"), summary="A city.")


def test_every_slot_starts_with_default(store: LocationStateStore) -> None:
    for slot in Slot:
        assert store.get(slot) is DEFAULT_LOCATION_RECORD


def test_set_replaces_only_that_slot(store: LocationStateStore) -> None:
    assert store.set(Slot.ORIGIN, RECORD) is True

    assert store.get(Slot.ORIGIN) == RECORD
    assert store.get("origin") == RECORD  # type: ignore[arg-type]
    assert store.get(Slot.CURRENT) is DEFAULT_LOCATION_RECORD
    assert store.snapshot()[Slot.DESTINATION] is DEFAULT_LOCATION_RECORD


def test_store_accepts_default_record(store: LocationStateStore) -> None:
    store.set(Slot.CURRENT, RECORD)
    store.set(Slot.CURRENT, DEFAULT_LOCATION_RECORD)

    assert store.get(Slot.CURRENT) is DEFAULT_LOCATION_RECORD


def test_subscribers_are_notified(store: LocationStateStore) -> None:
    all_events: list[tuple[Slot, LocationRecord]] = []
    origin_events: list[Slot] = []
    store.subscribe(lambda slot, record: all_events.append((slot, record)))
    unsubscribe = store.subscribe(lambda slot, record: origin_events.append(slot), slots=[Slot.ORIGIN])

    store.set(Slot.CURRENT, RECORD)
    store.set(Slot.ORIGIN, RECORD)
    unsubscribe()
    store.set(Slot.ORIGIN, DEFAULT_LOCATION_RECORD)

    assert [slot for slot, _ in all_events] == [Slot.CURRENT, Slot.ORIGIN, Slot.ORIGIN]
    assert origin_events == [Slot.ORIGIN]


def test_failing_subscriber_does_not_stop_fan_out(store: LocationStateStore) -> None:
    received: list[Slot] = []

    def broken(slot: Slot, record: LocationRecord) -> None:
        raise RuntimeError("panel crashed")

    store.subscribe(broken)
    store.subscribe(lambda slot, record: received.append(slot))

    store.set(Slot.DESTINATION, RECORD)

    assert received == [Slot.DESTINATION]
    assert store.get(Slot.DESTINATION) == RECORD


def test_tokens_ignored_by_default(store: LocationStateStore) -> None:
    older = store.issue_token(Slot.ORIGIN)
    newer = store.issue_token(Slot.ORIGIN)

    assert newer > older
    assert store.set(Slot.ORIGIN, RECORD, token=newer)
    assert store.set(Slot.ORIGIN, DEFAULT_LOCATION_RECORD, token=older)
    assert store.get(Slot.ORIGIN) is DEFAULT_LOCATION_RECORD


def test_stale_tokens_discarded_when_enabled() -> None:
    store = LocationStateStore(discard_stale=True)
    older = store.issue_token(Slot.ORIGIN)
    newer = store.issue_token(Slot.ORIGIN)

    assert store.set(Slot.ORIGIN, RECORD, token=newer) is True
    assert store.set(Slot.ORIGIN, DEFAULT_LOCATION_RECORD, token=older) is False
    assert store.get(Slot.ORIGIN) == RECORD
    # トークンなしの書き込みは常に受け付ける
    assert store.set(Slot.ORIGIN, DEFAULT_LOCATION_RECORD) is True
