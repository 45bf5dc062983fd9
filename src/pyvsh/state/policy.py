"""Access-control and input guards.

Pure checks against a :class:`~pyvsh.state.store.LedgerState`. Each guard
either returns or raises the matching :mod:`pyvsh.exceptions` error; none of
them mutate state, so running all guards before any mutation makes every
operation all-or-nothing.
"""

from __future__ import annotations

from typing import Any

from pyvsh._constants import (
    REASON_ALREADY_AUTHORIZED,
    REASON_CENTER_NOT_ACTIVE,
    REASON_INDEX_OUT_OF_BOUNDS,
    REASON_INVALID_CENTER,
    REASON_INVALID_DESCRIPTION,
    REASON_INVALID_MILEAGE,
    REASON_INVALID_VEHICLE_KEY,
    REASON_NOT_AUTHORIZED_CENTER,
    REASON_ONLY_OWNER,
)
from pyvsh.exceptions import (
    AlreadyExistsError,
    InvalidArgumentError,
    NotFoundError,
    OutOfBoundsError,
    UnauthorizedError,
)
from pyvsh.identity import is_utf8_text, is_valid_principal
from pyvsh.state.store import LedgerState


def require_owner(state: LedgerState, caller: str, *, operation: str) -> None:
    if caller != state.owner:
        raise UnauthorizedError(REASON_ONLY_OWNER, operation=operation)


def require_active_center(state: LedgerState, caller: str, *, operation: str) -> None:
    if not state.is_active(caller):
        raise UnauthorizedError(REASON_NOT_AUTHORIZED_CENTER, operation=operation)


def require_principal(value: Any, *, operation: str, reason: str = REASON_INVALID_CENTER) -> None:
    if not is_valid_principal(value):
        raise InvalidArgumentError(reason, operation=operation)


def require_non_empty(value: Any, reason: str, *, operation: str) -> None:
    """Reject anything but a non-empty, UTF-8 encodable ``str``.

    Only the empty string is empty; whitespace is kept verbatim.
    """
    if not is_utf8_text(value) or not value:
        raise InvalidArgumentError(reason, operation=operation)


def require_inactive(state: LedgerState, center: str, *, operation: str) -> None:
    if state.is_active(center):
        raise AlreadyExistsError(REASON_ALREADY_AUTHORIZED, operation=operation)


def require_active(state: LedgerState, center: Any, *, operation: str) -> None:
    if not isinstance(center, str) or not state.is_active(center):
        raise NotFoundError(REASON_CENTER_NOT_ACTIVE, operation=operation)


def require_positive_mileage(mileage: Any, *, operation: str) -> None:
    # bool is an int subclass; True is not an odometer reading.
    if isinstance(mileage, bool) or not isinstance(mileage, int) or mileage <= 0:
        raise InvalidArgumentError(REASON_INVALID_MILEAGE, operation=operation)


def require_description(description: Any, *, operation: str) -> None:
    if not is_utf8_text(description):
        raise InvalidArgumentError(REASON_INVALID_DESCRIPTION, operation=operation)


def require_vehicle_key(vehicle_id: Any, *, operation: str) -> None:
    # Queries accept any string, empty included.
    if not isinstance(vehicle_id, str):
        raise InvalidArgumentError(REASON_INVALID_VEHICLE_KEY, operation=operation)


def require_index_in_bounds(state: LedgerState, vehicle_id: str, index: Any, *, operation: str) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise OutOfBoundsError(REASON_INDEX_OUT_OF_BOUNDS, operation=operation)
    if index < 0 or index >= state.record_count(vehicle_id):
        raise OutOfBoundsError(REASON_INDEX_OUT_OF_BOUNDS, operation=operation)
