"""Ledger constants and rejection reasons."""

from __future__ import annotations

#: The all-zero address; never a valid service center or deployer.
NULL_PRINCIPAL: str = "0x" + "0" * 40

#: Length in bytes of a derived principal / ledger address.
ADDRESS_BYTES: int = 20

# ---------------------------------------------------------------------------
# Rejection reasons. These strings are what callers render to a human, so
# they stay stable across releases.
# ---------------------------------------------------------------------------

REASON_ONLY_OWNER = "Only owner can perform this action"
REASON_NOT_AUTHORIZED_CENTER = "Not an authorized service center"
REASON_INVALID_CENTER = "Invalid service center address"
REASON_EMPTY_NAME = "Name cannot be empty"
REASON_ALREADY_AUTHORIZED = "Service center already authorized"
REASON_CENTER_NOT_ACTIVE = "Service center not authorized"
REASON_EMPTY_VEHICLE_ID = "Vehicle ID cannot be empty"
REASON_EMPTY_SERVICE_TYPE = "Service type cannot be empty"
REASON_INVALID_MILEAGE = "Mileage must be greater than 0"
REASON_INVALID_DESCRIPTION = "Description must be a string"
REASON_INDEX_OUT_OF_BOUNDS = "Index out of bounds"
REASON_INVALID_DEPLOYER = "Invalid deployer address"
REASON_INVALID_VEHICLE_KEY = "Vehicle ID must be a string"
REASON_UNKNOWN_EVENT_TYPE = "Unknown event type"
