"""Service record and service center registration models."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, model_validator

from pyvsh.models._base import LedgerBaseModel, block_time_to_datetime


class ServiceRecord(LedgerBaseModel):
    """One maintenance event appended to a vehicle's history.

    Records are created by the ledger only; ``timestamp`` and
    ``service_center`` come from the committing block and the caller,
    never from client input.
    """

    timestamp: int = Field(gt=0)
    """Block time of insertion, epoch seconds."""
    vehicle_id: str = Field(min_length=1)
    """Caller-supplied vehicle identifier (e.g. a VIN), stored verbatim."""
    service_type: str = Field(min_length=1)
    mileage: int = Field(gt=0)
    """Odometer reading, unit-less."""
    description: str = ""
    service_center: str = Field(min_length=1)
    """Principal of the center that appended the record."""

    @property
    def serviced_at(self) -> datetime:
        """``timestamp`` as a UTC datetime."""
        return block_time_to_datetime(self.timestamp)


class ServiceCenterRegistration(LedgerBaseModel):
    """Registry entry for a principal that was ever authorized.

    An active registration always carries a non-empty name; an inactive
    one never carries a name.
    """

    active: bool = False
    name: str | None = None

    @model_validator(mode="after")
    def _check_name_matches_state(self) -> ServiceCenterRegistration:
        if self.active and not self.name:
            raise ValueError("active registration requires a name")
        if not self.active and self.name is not None:
            raise ValueError("inactive registration cannot keep a name")
        return self

    @classmethod
    def activated(cls, name: str) -> ServiceCenterRegistration:
        return cls(active=True, name=name)

    @classmethod
    def deactivated(cls) -> ServiceCenterRegistration:
        return cls(active=False, name=None)
