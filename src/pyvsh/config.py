"""Ledger configuration for pyvsh."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyvsh.exceptions import LedgerConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class LedgerConfig:
    """Ledger/network configuration.

    Parameters
    ----------
    network : str
        Name of the network the ledgers are deployed on. Recorded in
        the deployment info file.
    deployment_file : str
        Path of the JSON file holding the deployed ledger address.
    record_events : bool
        Keep a queryable log of emitted events on each ledger. Listeners
        are notified either way.
    """

    network: str = "localhost"
    deployment_file: str = "deployment-info.json"
    record_events: bool = True

    def __post_init__(self) -> None:
        if not self.network or not self.network.strip():
            raise LedgerConfigError("Network name cannot be empty")
        if not self.deployment_file:
            raise LedgerConfigError("Deployment file path cannot be empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> LedgerConfig:
        """Create configuration from environment variables.

        Reads ``VSH_NETWORK``, ``VSH_DEPLOYMENT_FILE`` and
        ``VSH_RECORD_EVENTS``. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        LedgerConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "VSH_NETWORK": "network",
            "VSH_DEPLOYMENT_FILE": "deployment_file",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "record_events" not in overrides:
            config_kwargs["record_events"] = _env_bool(env.get("VSH_RECORD_EVENTS"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
