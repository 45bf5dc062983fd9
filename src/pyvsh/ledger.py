"""The vehicle service ledger.

A :class:`VehicleServiceLedger` owns one :class:`~pyvsh.state.store.LedgerState`
and exposes the registry, ingestion and query operations over it. Mutating
operations take the calling principal explicitly, run every guard before
touching state, then commit as a single block and return a
:class:`~pyvsh.models.events.TransactionReceipt`.
"""

from __future__ import annotations

import asyncio
import hashlib
import json
import logging
import time
from collections.abc import Callable
from typing import Any

from pyvsh._constants import (
    NULL_PRINCIPAL,
    REASON_EMPTY_NAME,
    REASON_EMPTY_SERVICE_TYPE,
    REASON_EMPTY_VEHICLE_ID,
    REASON_INVALID_DEPLOYER,
    REASON_UNKNOWN_EVENT_TYPE,
)
from pyvsh.config import LedgerConfig
from pyvsh.exceptions import InvalidArgumentError, LedgerError
from pyvsh.identity import is_valid_principal
from pyvsh.models.events import (
    LedgerEvent,
    LedgerEventType,
    ServiceCenterAdded,
    ServiceCenterRemoved,
    ServiceRecordAdded,
    TransactionReceipt,
)
from pyvsh.models.record import ServiceRecord
from pyvsh.state import policy
from pyvsh.state.events import EventBus, EventListener
from pyvsh.state.store import LedgerState

_logger = logging.getLogger(__name__)


def block_clock() -> int:
    """Current wall-clock time in whole epoch seconds."""
    return int(time.time())


def _tx_hash(address: str, block_number: int, sender: str, operation: str, args: dict[str, Any]) -> str:
    payload = json.dumps(
        {"ledger": address, "block": block_number, "sender": sender, "op": operation, "args": args},
        sort_keys=True,
        separators=(",", ":"),
    )
    return "0x" + hashlib.sha256(payload.encode("utf-8")).hexdigest()


class VehicleServiceLedger:
    """Append-only, access-controlled store of vehicle service records.

    Usage::

        ledger = VehicleServiceLedger(owner)
        ledger.add_service_center(owner, center, "Quick Fix Auto")
        ledger.add_service_record(center, "ABC123", "Oil Change", 50000, "Changed oil")
        history = ledger.get_service_history("ABC123")

    Parameters
    ----------
    owner : str
        Principal with registry-administration rights. Fixed for the
        lifetime of the ledger.
    address : str
        Opaque identifier of this ledger instance. Assigned by
        :class:`~pyvsh.network.LocalNetwork` on deployment.
    config : LedgerConfig or None
        Ledger configuration. Defaults to :class:`LedgerConfig()`.
    clock : callable
        Returns the current time in epoch seconds; used for block time.
    """

    def __init__(
        self,
        owner: str,
        *,
        address: str = NULL_PRINCIPAL,
        config: LedgerConfig | None = None,
        clock: Callable[[], int] = block_clock,
    ) -> None:
        policy.require_principal(owner, operation="deploy", reason=REASON_INVALID_DEPLOYER)
        self._state = LedgerState(owner=owner)
        self._address = address
        self._config = config or LedgerConfig()
        self._clock = clock
        self._bus = EventBus()
        self._write_lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"VehicleServiceLedger(address={self._address!r}, owner={self._state.owner!r})"

    @property
    def address(self) -> str:
        return self._address

    @property
    def owner(self) -> str:
        return self._state.owner

    @property
    def block_number(self) -> int:
        """Number of committed blocks."""
        return self._state.block_number

    @property
    def write_lock(self) -> asyncio.Lock:
        """Lock async clients of this ledger hold while submitting writes."""
        return self._write_lock

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register a synchronous event listener; returns its unsubscribe callable."""
        return self._bus.subscribe(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        self._bus.unsubscribe(listener)

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    def _commit(
        self,
        sender: str,
        operation: str,
        args: dict[str, Any],
        apply: Callable[[int, int, str], LedgerEvent],
    ) -> TransactionReceipt:
        """Open a block, apply the (already guarded) mutation and publish its event."""
        previous = (self._state.block_number, self._state.block_timestamp)
        block_number, timestamp = self._state.advance_block(self._clock())
        tx_hash = _tx_hash(self._address, block_number, sender, operation, args)
        try:
            event = apply(block_number, timestamp, tx_hash)
        except Exception:
            self._state.block_number, self._state.block_timestamp = previous
            raise
        if self._config.record_events:
            self._state.events.append(event)

        receipt = TransactionReceipt(
            tx_hash=tx_hash,
            block_number=block_number,
            timestamp=timestamp,
            sender=sender,
            events=(event,),
        )
        _logger.debug("Committed %s block=%d sender=%s tx=%s", operation, block_number, sender, tx_hash)
        self._bus.publish(event)
        return receipt

    def _rejected(self, exc: LedgerError, sender: str) -> None:
        _logger.debug("Rejected %s sender=%s: %s (%s)", exc.operation, sender, exc.reason, exc.code)

    # ------------------------------------------------------------------
    # Registry management
    # ------------------------------------------------------------------

    def add_service_center(self, caller: str, center: str, name: str) -> TransactionReceipt:
        """Authorize *center* to append records under display *name*.

        Raises
        ------
        UnauthorizedError
            *caller* is not the owner.
        InvalidArgumentError
            *center* is malformed or null, or *name* is empty.
        AlreadyExistsError
            *center* is already active.
        """
        op = "add_service_center"
        try:
            policy.require_owner(self._state, caller, operation=op)
            policy.require_principal(center, operation=op)
            policy.require_non_empty(name, REASON_EMPTY_NAME, operation=op)
            policy.require_inactive(self._state, center, operation=op)
        except LedgerError as exc:
            self._rejected(exc, caller)
            raise

        def _apply(block_number: int, _timestamp: int, tx_hash: str) -> LedgerEvent:
            event = ServiceCenterAdded(
                ledger=self._address,
                block_number=block_number,
                tx_hash=tx_hash,
                center=center,
                name=name,
            )
            self._state.activate(center, name)
            return event

        return self._commit(caller, op, {"center": center, "name": name}, _apply)

    def remove_service_center(self, caller: str, center: str) -> TransactionReceipt:
        """Revoke *center*. Records it already appended are kept unchanged.

        Raises
        ------
        UnauthorizedError
            *caller* is not the owner.
        NotFoundError
            *center* is not currently active.
        """
        op = "remove_service_center"
        try:
            policy.require_owner(self._state, caller, operation=op)
            policy.require_active(self._state, center, operation=op)
        except LedgerError as exc:
            self._rejected(exc, caller)
            raise

        def _apply(block_number: int, _timestamp: int, tx_hash: str) -> LedgerEvent:
            event = ServiceCenterRemoved(
                ledger=self._address,
                block_number=block_number,
                tx_hash=tx_hash,
                center=center,
            )
            self._state.deactivate(center)
            return event

        return self._commit(caller, op, {"center": center}, _apply)

    # ------------------------------------------------------------------
    # Record ingestion
    # ------------------------------------------------------------------

    def add_service_record(
        self,
        caller: str,
        vehicle_id: str,
        service_type: str,
        mileage: int,
        description: str = "",
    ) -> TransactionReceipt:
        """Append a service record for *vehicle_id*, attributed to *caller*.

        The record's timestamp is the committing block's time. There is no
        way to update or delete a record once appended.

        Raises
        ------
        UnauthorizedError
            *caller* is not an active service center.
        InvalidArgumentError
            Empty *vehicle_id* or *service_type*, or *mileage* not a
            positive integer.
        """
        op = "add_service_record"
        try:
            policy.require_active_center(self._state, caller, operation=op)
            policy.require_non_empty(vehicle_id, REASON_EMPTY_VEHICLE_ID, operation=op)
            policy.require_non_empty(service_type, REASON_EMPTY_SERVICE_TYPE, operation=op)
            policy.require_positive_mileage(mileage, operation=op)
            policy.require_description(description, operation=op)
        except LedgerError as exc:
            self._rejected(exc, caller)
            raise

        def _apply(block_number: int, timestamp: int, tx_hash: str) -> LedgerEvent:
            record = ServiceRecord(
                timestamp=timestamp,
                vehicle_id=vehicle_id,
                service_type=service_type,
                mileage=mileage,
                description=description,
                service_center=caller,
            )
            event = ServiceRecordAdded(
                ledger=self._address,
                block_number=block_number,
                tx_hash=tx_hash,
                vehicle_id=vehicle_id,
                service_center=caller,
                service_type=service_type,
                timestamp=timestamp,
            )
            self._state.append(record)
            return event

        args = {
            "vehicle_id": vehicle_id,
            "service_type": service_type,
            "mileage": mileage,
            "description": description,
        }
        return self._commit(caller, op, args, _apply)

    # ------------------------------------------------------------------
    # Queries (public, read-only)
    # ------------------------------------------------------------------

    def get_owner(self) -> str:
        return self._state.owner

    def get_service_history(self, vehicle_id: str) -> list[ServiceRecord]:
        """All records for *vehicle_id* in insertion order; empty if none."""
        policy.require_vehicle_key(vehicle_id, operation="get_service_history")
        return self._state.history(vehicle_id)

    def get_record_count(self, vehicle_id: str) -> int:
        policy.require_vehicle_key(vehicle_id, operation="get_record_count")
        return self._state.record_count(vehicle_id)

    def get_service_record_by_index(self, vehicle_id: str, index: int) -> ServiceRecord:
        """Record *index* (0-based) of *vehicle_id*.

        Raises
        ------
        InvalidArgumentError
            *vehicle_id* is not a string.
        OutOfBoundsError
            *index* is negative or not below :meth:`get_record_count`.
        """
        policy.require_vehicle_key(vehicle_id, operation="get_service_record_by_index")
        policy.require_index_in_bounds(self._state, vehicle_id, index, operation="get_service_record_by_index")
        return self._state.record_at(vehicle_id, index)

    def is_authorized_center(self, center: str) -> bool:
        if not is_valid_principal(center):
            return False
        return self._state.is_active(center)

    def get_service_center_name(self, center: str) -> str:
        """Display name of an active center, ``""`` for anyone else."""
        if not is_valid_principal(center):
            return ""
        return self._state.center_name(center)

    def get_events(
        self,
        event_type: LedgerEventType | str | None = None,
        *,
        from_block: int = 0,
    ) -> list[LedgerEvent]:
        """Logged events in commit order, optionally filtered.

        Always empty when the ledger was configured with
        ``record_events=False``.

        Raises
        ------
        InvalidArgumentError
            *event_type* names no ledger event.
        """
        wanted = None
        if event_type is not None:
            try:
                wanted = LedgerEventType(event_type)
            except ValueError as exc:
                raise InvalidArgumentError(REASON_UNKNOWN_EVENT_TYPE, operation="get_events") from exc

        return [
            event
            for event in self._state.events
            if event.block_number >= from_block and (wanted is None or event.event == wanted)
        ]
