"""Ledger event and transaction receipt models.

Events are the observational side channel of the ledger: they are emitted
after a commit and are never required for correctness.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import Field

from pyvsh.models._base import LedgerBaseModel


class LedgerEventType(StrEnum):
    SERVICE_CENTER_ADDED = "ServiceCenterAdded"
    SERVICE_CENTER_REMOVED = "ServiceCenterRemoved"
    SERVICE_RECORD_ADDED = "ServiceRecordAdded"


class _EventBase(LedgerBaseModel):
    ledger: str
    """Address of the emitting ledger."""
    block_number: int = Field(ge=1)
    tx_hash: str


class ServiceCenterAdded(_EventBase):
    event: Literal["ServiceCenterAdded"] = "ServiceCenterAdded"
    center: str
    name: str


class ServiceCenterRemoved(_EventBase):
    event: Literal["ServiceCenterRemoved"] = "ServiceCenterRemoved"
    center: str


class ServiceRecordAdded(_EventBase):
    event: Literal["ServiceRecordAdded"] = "ServiceRecordAdded"
    vehicle_id: str
    service_center: str
    service_type: str
    timestamp: int


LedgerEvent = Annotated[
    ServiceCenterAdded | ServiceCenterRemoved | ServiceRecordAdded,
    Field(discriminator="event"),
]
"""Any event emitted by a ledger, discriminated on ``event``."""


class TransactionReceipt(LedgerBaseModel):
    """Confirmation that a mutating call was committed.

    Parameters
    ----------
    tx_hash : str
        Deterministic hash identifying the committed call.
    block_number : int
        Position of the commit in the ledger's total order (1-based).
    timestamp : int
        Block time, epoch seconds. Never decreases between blocks.
    sender : str
        Principal that issued the call.
    events : tuple
        Events emitted by the call, in emission order.
    """

    tx_hash: str
    block_number: int = Field(ge=1)
    timestamp: int = Field(gt=0)
    sender: str
    events: tuple[LedgerEvent, ...] = ()
