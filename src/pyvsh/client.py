"""High-level async client bound to one principal."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from pyvsh.ledger import VehicleServiceLedger
from pyvsh.models.events import LedgerEvent, LedgerEventType, TransactionReceipt
from pyvsh.models.record import ServiceRecord

_logger = logging.getLogger(__name__)


class LedgerClient:
    """Async client issuing calls to a ledger as one principal.

    Mutating calls are commit requests: they are serialized through the ledger's
    write lock and resolve to a :class:`TransactionReceipt` once committed.
    Reads never take the lock.

    Usage::

        async with LedgerClient(ledger, owner, on_event=print) as client:
            await client.add_service_center(center, "Quick Fix Auto")
            shop = client.connect(center)
            await shop.add_service_record("ABC123", "Oil Change", 50000)
            history = await client.connect(buyer).get_service_history("ABC123")
    """

    def __init__(
        self,
        ledger: VehicleServiceLedger,
        principal: str,
        *,
        write_lock: asyncio.Lock | None = None,
        on_event: Callable[[LedgerEvent], None] | None = None,
    ) -> None:
        self._ledger = ledger
        self._principal = principal
        self._write_lock = write_lock or ledger.write_lock
        self._on_event = on_event
        self._unsubscribe: Callable[[], None] | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> LedgerClient:
        if self._on_event is not None and self._unsubscribe is None:
            self._unsubscribe = self._ledger.subscribe(self._on_event)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def principal(self) -> str:
        return self._principal

    @property
    def address(self) -> str:
        return self._ledger.address

    @property
    def ledger(self) -> VehicleServiceLedger:
        return self._ledger

    @property
    def write_lock(self) -> asyncio.Lock:
        return self._write_lock

    def connect(self, principal: str) -> LedgerClient:
        """Client for the same ledger acting as *principal*.

        The returned client shares this client's write lock. It does not
        inherit the event callback.
        """
        return LedgerClient(self._ledger, principal, write_lock=self._write_lock)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def _submit(self, operation: str, fn: Callable[[], TransactionReceipt]) -> TransactionReceipt:
        async with self._write_lock:
            receipt = fn()
        _logger.debug("%s confirmed block=%d tx=%s", operation, receipt.block_number, receipt.tx_hash)
        return receipt

    async def add_service_center(self, center: str, name: str) -> TransactionReceipt:
        return await self._submit(
            "add_service_center",
            lambda: self._ledger.add_service_center(self._principal, center, name),
        )

    async def remove_service_center(self, center: str) -> TransactionReceipt:
        return await self._submit(
            "remove_service_center",
            lambda: self._ledger.remove_service_center(self._principal, center),
        )

    async def add_service_record(
        self,
        vehicle_id: str,
        service_type: str,
        mileage: int,
        description: str = "",
    ) -> TransactionReceipt:
        return await self._submit(
            "add_service_record",
            lambda: self._ledger.add_service_record(self._principal, vehicle_id, service_type, mileage, description),
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def owner(self) -> str:
        return self._ledger.get_owner()

    async def get_service_history(self, vehicle_id: str) -> list[ServiceRecord]:
        return self._ledger.get_service_history(vehicle_id)

    async def get_record_count(self, vehicle_id: str) -> int:
        return self._ledger.get_record_count(vehicle_id)

    async def get_service_record_by_index(self, vehicle_id: str, index: int) -> ServiceRecord:
        return self._ledger.get_service_record_by_index(vehicle_id, index)

    async def is_authorized_center(self, center: str) -> bool:
        return self._ledger.is_authorized_center(center)

    async def get_service_center_name(self, center: str) -> str:
        return self._ledger.get_service_center_name(center)

    async def get_events(
        self,
        event_type: LedgerEventType | str | None = None,
        *,
        from_block: int = 0,
    ) -> list[LedgerEvent]:
        return self._ledger.get_events(event_type, from_block=from_block)
