"""Data models for ledger records, events and deployments."""

from pyvsh.models._base import LedgerBaseModel, block_time_to_datetime
from pyvsh.models.deployment import DeploymentInfo
from pyvsh.models.events import (
    LedgerEvent,
    LedgerEventType,
    ServiceCenterAdded,
    ServiceCenterRemoved,
    ServiceRecordAdded,
    TransactionReceipt,
)
from pyvsh.models.record import ServiceCenterRegistration, ServiceRecord

__all__ = [
    "DeploymentInfo",
    "LedgerBaseModel",
    "LedgerEvent",
    "LedgerEventType",
    "ServiceCenterAdded",
    "ServiceCenterRegistration",
    "ServiceCenterRemoved",
    "ServiceRecord",
    "ServiceRecordAdded",
    "TransactionReceipt",
    "block_time_to_datetime",
]
