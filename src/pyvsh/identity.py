"""Principal helpers.

A principal is an opaque, already-authenticated identity handle. The ledger
only ever compares principals for equality; this module exists so callers
(and tests) can mint realistic key-derived handles and so the network can
assign ledger addresses.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from pyvsh._constants import ADDRESS_BYTES, NULL_PRINCIPAL


def is_utf8_text(value: Any) -> bool:
    """Return ``True`` for a ``str`` that encodes as UTF-8 (no lone surrogates)."""
    if not isinstance(value, str):
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def is_valid_principal(value: Any) -> bool:
    """Return ``True`` for a well-formed, non-null principal."""
    return is_utf8_text(value) and bool(value) and value != NULL_PRINCIPAL


def _to_address(digest: bytes) -> str:
    return "0x" + digest[-ADDRESS_BYTES:].hex()


def principal_from_public_key(public_key: ec.EllipticCurvePublicKey) -> str:
    """Derive a principal from an EC public key.

    ``0x`` followed by the last 20 bytes of SHA3-256 over the uncompressed
    SEC1 point (without the ``0x04`` prefix byte).
    """
    point = public_key.public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)
    return _to_address(hashlib.sha3_256(point[1:]).digest())


@dataclass(frozen=True)
class Signer:
    """A principal together with the key it was derived from."""

    principal: str
    private_key: ec.EllipticCurvePrivateKey


def generate_signer() -> Signer:
    """Create a fresh SECP256K1 key pair and its principal."""
    private_key = ec.generate_private_key(ec.SECP256K1())
    return Signer(principal=principal_from_public_key(private_key.public_key()), private_key=private_key)


def ledger_address(deployer: str, nonce: int) -> str:
    """Deterministic address of the *nonce*-th ledger deployed by *deployer*."""
    return _to_address(hashlib.sha3_256(f"{deployer}:{nonce}".encode()).digest())
