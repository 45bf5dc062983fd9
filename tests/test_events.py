from __future__ import annotations

import logging

import pytest

from pyvsh.config import LedgerConfig
from pyvsh.exceptions import InvalidArgumentError, UnauthorizedError
from pyvsh.ledger import VehicleServiceLedger
from pyvsh.models.events import (
    LedgerEvent,
    LedgerEventType,
    ServiceCenterAdded,
    ServiceCenterRemoved,
    ServiceRecordAdded,
)

OWNER = "0x" + "11" * 20
CENTER_1 = "0x" + "c1" * 20
ADDRESS = "0x" + "ad" * 20


def _ledger(**config: bool) -> VehicleServiceLedger:
    return VehicleServiceLedger(OWNER, address=ADDRESS, config=LedgerConfig(**config), clock=lambda: 1_700_000_000)


def test_add_center_emits_event_and_receipt() -> None:
    ledger = _ledger()
    seen: list[LedgerEvent] = []
    ledger.subscribe(seen.append)

    receipt = ledger.add_service_center(OWNER, CENTER_1, "Quick Fix Auto")

    assert len(seen) == 1
    event = seen[0]
    assert isinstance(event, ServiceCenterAdded)
    assert event.event == LedgerEventType.SERVICE_CENTER_ADDED
    assert (event.center, event.name) == (CENTER_1, "Quick Fix Auto")
    assert event.ledger == ADDRESS
    assert receipt.events == (event,)
    assert receipt.sender == OWNER
    assert receipt.block_number == event.block_number == 1
    assert receipt.tx_hash == event.tx_hash
    assert receipt.tx_hash.startswith("0x")


def test_remove_and_record_events() -> None:
    ledger = _ledger()
    seen: list[LedgerEvent] = []
    ledger.subscribe(seen.append)

    ledger.add_service_center(OWNER, CENTER_1, "Quick Fix Auto")
    receipt = ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000)
    ledger.remove_service_center(OWNER, CENTER_1)

    added, recorded, removed = seen
    assert isinstance(recorded, ServiceRecordAdded)
    assert recorded.vehicle_id == "ABC123"
    assert recorded.service_center == CENTER_1
    assert recorded.service_type == "Oil Change"
    assert recorded.timestamp == receipt.timestamp
    assert isinstance(removed, ServiceCenterRemoved)
    assert removed.center == CENTER_1
    assert [e.block_number for e in seen] == [1, 2, 3]


def test_failed_operation_emits_nothing() -> None:
    ledger = _ledger()
    seen: list[LedgerEvent] = []
    ledger.subscribe(seen.append)

    with pytest.raises(UnauthorizedError):
        ledger.add_service_center(CENTER_1, CENTER_1, "Self Service")

    assert seen == []
    assert ledger.get_events() == []


def test_failing_listener_does_not_undo_commit(caplog: pytest.LogCaptureFixture) -> None:
    ledger = _ledger()
    seen: list[LedgerEvent] = []

    def _boom(_event: LedgerEvent) -> None:
        raise RuntimeError("listener failed")

    ledger.subscribe(_boom)
    ledger.subscribe(seen.append)

    with caplog.at_level(logging.WARNING, logger="pyvsh.state.events"):
        ledger.add_service_center(OWNER, CENTER_1, "Quick Fix Auto")

    assert ledger.is_authorized_center(CENTER_1) is True
    assert len(seen) == 1
    assert "Event listener" in caplog.text


def test_unsubscribe_stops_delivery() -> None:
    ledger = _ledger()
    seen: list[LedgerEvent] = []
    unsubscribe = ledger.subscribe(seen.append)

    ledger.add_service_center(OWNER, CENTER_1, "Quick Fix Auto")
    unsubscribe()
    unsubscribe()
    ledger.remove_service_center(OWNER, CENTER_1)

    assert len(seen) == 1


def test_event_log_filters() -> None:
    ledger = _ledger()
    ledger.add_service_center(OWNER, CENTER_1, "Quick Fix Auto")
    ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000)
    ledger.add_service_record(CENTER_1, "ABC123", "Brake Service", 55000)

    assert len(ledger.get_events()) == 3
    records = ledger.get_events(LedgerEventType.SERVICE_RECORD_ADDED)
    assert [e.service_type for e in records] == ["Oil Change", "Brake Service"]  # type: ignore[union-attr]
    assert len(ledger.get_events("ServiceCenterAdded")) == 1
    assert [e.block_number for e in ledger.get_events(from_block=3)] == [3]


@pytest.mark.parametrize("event_type", ["OwnershipTransferred", "serviceRecordAdded", 7])
def test_event_log_unknown_type_rejected(event_type: object) -> None:
    ledger = _ledger()
    ledger.add_service_center(OWNER, CENTER_1, "Quick Fix Auto")
    with pytest.raises(InvalidArgumentError, match="Unknown event type") as exc_info:
        ledger.get_events(event_type)  # type: ignore[arg-type]
    assert exc_info.value.operation == "get_events"


def test_event_log_disabled_still_notifies() -> None:
    ledger = _ledger(record_events=False)
    seen: list[LedgerEvent] = []
    ledger.subscribe(seen.append)

    ledger.add_service_center(OWNER, CENTER_1, "Quick Fix Auto")

    assert ledger.get_events() == []
    assert len(seen) == 1


def test_tx_hashes_are_unique_per_block() -> None:
    ledger = _ledger()
    ledger.add_service_center(OWNER, CENTER_1, "Quick Fix Auto")
    first = ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000)
    second = ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000)

    assert first.tx_hash != second.tx_hash
    assert second.block_number == first.block_number + 1
    assert second.timestamp >= first.timestamp


def test_event_dump_uses_original_names() -> None:
    ledger = _ledger()
    ledger.add_service_center(OWNER, CENTER_1, "Quick Fix Auto")
    ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000)

    dumped = ledger.get_events(LedgerEventType.SERVICE_RECORD_ADDED)[0].model_dump(by_alias=True, mode="json")
    assert dumped["event"] == "ServiceRecordAdded"
    assert dumped["vehicleId"] == "ABC123"
    assert dumped["serviceCenter"] == CENTER_1
    assert dumped["blockNumber"] == 2
