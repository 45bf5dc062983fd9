"""pyvsh - Append-only vehicle service history ledger."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyvsh")
except PackageNotFoundError:
    __version__ = "0+local"
from pyvsh._constants import NULL_PRINCIPAL
from pyvsh.client import LedgerClient
from pyvsh.config import LedgerConfig
from pyvsh.deployment import load_deployment_info, save_deployment_info
from pyvsh.exceptions import (
    AlreadyExistsError,
    InvalidArgumentError,
    LedgerConfigError,
    LedgerError,
    NotFoundError,
    OutOfBoundsError,
    UnauthorizedError,
)
from pyvsh.identity import Signer, generate_signer, is_utf8_text, is_valid_principal, principal_from_public_key
from pyvsh.ledger import VehicleServiceLedger
from pyvsh.models import (
    DeploymentInfo,
    LedgerEvent,
    LedgerEventType,
    ServiceCenterAdded,
    ServiceCenterRegistration,
    ServiceCenterRemoved,
    ServiceRecord,
    ServiceRecordAdded,
    TransactionReceipt,
)
from pyvsh.network import LocalNetwork

__all__ = [
    "__version__",
    "AlreadyExistsError",
    "DeploymentInfo",
    "InvalidArgumentError",
    "LedgerClient",
    "LedgerConfig",
    "LedgerConfigError",
    "LedgerError",
    "LedgerEvent",
    "LedgerEventType",
    "LocalNetwork",
    "NULL_PRINCIPAL",
    "NotFoundError",
    "OutOfBoundsError",
    "ServiceCenterAdded",
    "ServiceCenterRegistration",
    "ServiceCenterRemoved",
    "ServiceRecord",
    "ServiceRecordAdded",
    "Signer",
    "TransactionReceipt",
    "UnauthorizedError",
    "VehicleServiceLedger",
    "generate_signer",
    "is_utf8_text",
    "is_valid_principal",
    "load_deployment_info",
    "principal_from_public_key",
    "save_deployment_info",
]
