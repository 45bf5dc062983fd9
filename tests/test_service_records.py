from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyvsh.exceptions import InvalidArgumentError, UnauthorizedError
from pyvsh.ledger import VehicleServiceLedger

OWNER = "0x" + "11" * 20
CENTER_1 = "0x" + "c1" * 20
CENTER_2 = "0x" + "c2" * 20
BUYER = "0x" + "b0" * 20


class _Clock:
    def __init__(self, start: int = 1_700_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now


def _ledger(clock: _Clock | None = None) -> VehicleServiceLedger:
    ledger = VehicleServiceLedger(OWNER, clock=clock or _Clock())
    ledger.add_service_center(OWNER, CENTER_1, "Quick Fix Auto")
    return ledger


def test_authorized_center_adds_record() -> None:
    ledger = _ledger()
    ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000, "Changed oil and filter")
    assert ledger.get_record_count("ABC123") == 1


def test_record_fields_are_stored() -> None:
    clock = _Clock(1_700_000_123)
    ledger = _ledger(clock)
    ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000, "Changed oil and filter")

    record = ledger.get_service_record_by_index("ABC123", 0)
    assert record.vehicle_id == "ABC123"
    assert record.service_type == "Oil Change"
    assert record.mileage == 50000
    assert record.description == "Changed oil and filter"
    assert record.service_center == CENTER_1
    assert record.timestamp == 1_700_000_123


def test_description_may_be_empty() -> None:
    ledger = _ledger()
    ledger.add_service_record(CENTER_1, "ABC123", "Inspection", 1)
    assert ledger.get_service_record_by_index("ABC123", 0).description == ""


@pytest.mark.parametrize("caller", [CENTER_2, BUYER, OWNER])
def test_non_center_is_unauthorized(caller: str) -> None:
    ledger = _ledger()
    with pytest.raises(UnauthorizedError, match="Not an authorized service center"):
        ledger.add_service_record(caller, "ABC123", "Oil Change", 50000, "Changed oil and filter")
    assert ledger.get_record_count("ABC123") == 0


def test_authorization_checked_before_arguments() -> None:
    ledger = _ledger()
    with pytest.raises(UnauthorizedError):
        ledger.add_service_record(CENTER_2, "", "", 0, "")


@pytest.mark.parametrize(
    ("vehicle_id", "service_type", "mileage", "reason"),
    [
        ("", "Oil Change", 50000, "Vehicle ID cannot be empty"),
        ("ABC123", "", 50000, "Service type cannot be empty"),
        ("ABC\ud800", "Oil Change", 50000, "Vehicle ID cannot be empty"),
        ("ABC123", "Oil \udc00Change", 50000, "Service type cannot be empty"),
        ("ABC123", "Oil Change", 0, "Mileage must be greater than 0"),
        ("ABC123", "Oil Change", -5, "Mileage must be greater than 0"),
        ("ABC123", "Oil Change", True, "Mileage must be greater than 0"),
        ("ABC123", "Oil Change", 500.5, "Mileage must be greater than 0"),
        ("ABC123", "Oil Change", "50000", "Mileage must be greater than 0"),
    ],
)
def test_invalid_arguments_rejected(vehicle_id: str, service_type: str, mileage: object, reason: str) -> None:
    ledger = _ledger()
    before = ledger.block_number
    with pytest.raises(InvalidArgumentError) as exc_info:
        ledger.add_service_record(CENTER_1, vehicle_id, service_type, mileage, "x")  # type: ignore[arg-type]

    assert exc_info.value.reason == reason
    assert exc_info.value.code == "INVALID_ARGUMENT"
    assert ledger.get_record_count(vehicle_id) == 0
    assert ledger.block_number == before


def test_non_string_description_rejected() -> None:
    ledger = _ledger()
    with pytest.raises(InvalidArgumentError):
        ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000, None)  # type: ignore[arg-type]


def test_unencodable_description_rejected() -> None:
    ledger = _ledger()
    with pytest.raises(InvalidArgumentError, match="Description must be a string"):
        ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000, "note \ud83d")
    assert ledger.get_record_count("ABC123") == 0


def test_failed_insert_does_not_advance_block() -> None:
    ledger = _ledger()
    before = ledger.block_number
    with pytest.raises(InvalidArgumentError):
        ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 0)
    assert ledger.block_number == before


def test_earlier_records_unchanged_by_later_inserts() -> None:
    ledger = _ledger()
    ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000, "Original description")
    before = ledger.get_service_record_by_index("ABC123", 0)

    ledger.add_service_record(CENTER_1, "ABC123", "Brake Service", 55000, "Different service")
    after = ledger.get_service_record_by_index("ABC123", 0)

    assert after == before
    assert after.model_dump() == before.model_dump()


def test_records_cannot_be_mutated_by_callers() -> None:
    ledger = _ledger()
    ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000)
    record = ledger.get_service_record_by_index("ABC123", 0)

    with pytest.raises(ValidationError):
        record.mileage = 1  # type: ignore[misc]

    history = ledger.get_service_history("ABC123")
    history.clear()
    assert ledger.get_record_count("ABC123") == 1


def test_revocation_blocks_new_records_but_keeps_old_ones() -> None:
    ledger = _ledger()
    ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000)
    assert ledger.get_record_count("ABC123") == 1
    assert ledger.get_service_history("ABC123")[0].service_type == "Oil Change"
    original = ledger.get_service_record_by_index("ABC123", 0)

    ledger.remove_service_center(OWNER, CENTER_1)

    with pytest.raises(UnauthorizedError):
        ledger.add_service_record(CENTER_1, "ABC123", "Brake Service", 55000)

    assert ledger.get_record_count("ABC123") == 1
    assert ledger.get_service_record_by_index("ABC123", 0) == original
    assert ledger.get_service_record_by_index("ABC123", 0).service_center == CENTER_1


def test_block_time_never_goes_backwards() -> None:
    clock = _Clock(1_700_000_500)
    ledger = _ledger(clock)
    ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000)

    clock.now = 1_700_000_000
    ledger.add_service_record(CENTER_1, "ABC123", "Brake Service", 55000)

    first, second = ledger.get_service_history("ABC123")
    assert second.timestamp == first.timestamp == 1_700_000_500


def test_timestamp_positive_even_with_zero_clock() -> None:
    ledger = _ledger(_Clock(0))
    ledger.add_service_record(CENTER_1, "ABC123", "Oil Change", 50000)
    assert ledger.get_service_record_by_index("ABC123", 0).timestamp > 0
