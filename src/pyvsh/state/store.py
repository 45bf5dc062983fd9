"""Ledger state.

The three logical tables of a ledger (center registry, center names and
per-vehicle histories) plus the fixed owner and block position live on one
explicit :class:`LedgerState` owned by a single ledger. This is the only
component that mutates them; it performs no authorization. Callers run the
guards in :mod:`pyvsh.state.policy` first.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pyvsh.models.events import LedgerEvent
from pyvsh.models.record import ServiceCenterRegistration, ServiceRecord


@dataclass
class LedgerState:
    """Mutable state of one ledger instance."""

    owner: str
    registrations: dict[str, ServiceCenterRegistration] = field(default_factory=dict)
    histories: dict[str, list[ServiceRecord]] = field(default_factory=dict)
    events: list[LedgerEvent] = field(default_factory=list)
    block_number: int = 0
    block_timestamp: int = 0

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def is_active(self, center: str) -> bool:
        entry = self.registrations.get(center)
        return entry is not None and entry.active

    def center_name(self, center: str) -> str:
        entry = self.registrations.get(center)
        if entry is None or entry.name is None:
            return ""
        return entry.name

    def activate(self, center: str, name: str) -> None:
        self.registrations[center] = ServiceCenterRegistration.activated(name)

    def deactivate(self, center: str) -> None:
        self.registrations[center] = ServiceCenterRegistration.deactivated()

    # ------------------------------------------------------------------
    # Histories
    # ------------------------------------------------------------------

    def append(self, record: ServiceRecord) -> None:
        self.histories.setdefault(record.vehicle_id, []).append(record)

    def history(self, vehicle_id: str) -> list[ServiceRecord]:
        """Fresh list of the records for *vehicle_id* in insertion order."""
        return list(self.histories.get(vehicle_id, ()))

    def record_count(self, vehicle_id: str) -> int:
        return len(self.histories.get(vehicle_id, ()))

    def record_at(self, vehicle_id: str, index: int) -> ServiceRecord:
        return self.histories[vehicle_id][index]

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def advance_block(self, clock_seconds: int) -> tuple[int, int]:
        """Open the next block and return ``(block_number, timestamp)``.

        Block time never moves backwards and is always positive, even when
        the clock does.
        """
        self.block_number += 1
        self.block_timestamp = max(clock_seconds, self.block_timestamp, 1)
        return self.block_number, self.block_timestamp
