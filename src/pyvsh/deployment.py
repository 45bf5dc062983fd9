"""Persist the address of a deployed ledger.

Deployment tooling writes a :class:`~pyvsh.models.deployment.DeploymentInfo`
once; every later client reads it back to find the ledger it should talk to.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from pyvsh.config import LedgerConfig
from pyvsh.exceptions import LedgerConfigError
from pyvsh.models.deployment import DeploymentInfo

_logger = logging.getLogger(__name__)


def _resolve(path: str | Path | None, config: LedgerConfig | None) -> Path:
    if path is not None:
        return Path(path)
    return Path((config or LedgerConfig()).deployment_file)


def save_deployment_info(
    info: DeploymentInfo,
    path: str | Path | None = None,
    *,
    config: LedgerConfig | None = None,
) -> Path:
    """Write *info* as JSON and return the path written.

    Defaults to ``config.deployment_file`` when *path* is not given.
    """
    target = _resolve(path, config)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(info.model_dump_json(by_alias=True, indent=2) + "\n", encoding="utf-8")
    _logger.debug("Deployment info for %s saved to %s", info.ledger_address, target)
    return target


def load_deployment_info(
    path: str | Path | None = None,
    *,
    config: LedgerConfig | None = None,
) -> DeploymentInfo:
    """Read deployment info written by :func:`save_deployment_info`.

    Raises
    ------
    LedgerConfigError
        The file is missing, is not a file, or does not hold valid
        deployment info.
    """
    source = _resolve(path, config)
    if not source.is_file():
        raise LedgerConfigError(
            f"Deployment info not found at {source}; deploy a ledger first",
            operation="load_deployment_info",
        )
    try:
        return DeploymentInfo.model_validate_json(source.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise LedgerConfigError(
            f"Invalid deployment info in {source}: {exc.error_count()} error(s)",
            operation="load_deployment_info",
        ) from exc
