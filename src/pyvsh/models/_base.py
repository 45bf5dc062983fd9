"""Base model for ledger values.

Every ledger model inherits from :class:`LedgerBaseModel` which provides:

* ``frozen=True`` so a value handed out by the ledger can never be
  mutated by the caller (records are immutable once appended).
* ``alias_generator=to_camel`` so dumps use the camelCase field names
  of the original record layout (``vehicleId``, ``serviceCenter``),
  while Python code uses snake_case.
* ``extra="forbid"`` so typos in field names fail loudly.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def block_time_to_datetime(value: int) -> datetime:
    """Convert a block timestamp (epoch seconds) to a UTC datetime."""
    return datetime.fromtimestamp(value, tz=UTC)


def parse_deployed_at(value: Any) -> Any:
    """Accept epoch seconds or milliseconds in addition to ISO strings."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    ts = int(value)
    if ts >= _MS_THRESHOLD:
        ts = ts // 1000
    return block_time_to_datetime(ts)


DeployedAt = Annotated[datetime, BeforeValidator(parse_deployed_at)]
"""Annotated type that also coerces epoch ints (seconds or ms) to UTC datetimes."""


class LedgerBaseModel(BaseModel):
    """Base for immutable ledger values."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )
