"""In-process ledger network.

:class:`LocalNetwork` stands in for the distributed ledger the service
history is deployed on: it assigns ledger addresses, keeps every deployed
ledger reachable by address and provides the shared block clock.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pyvsh._constants import REASON_INVALID_DEPLOYER
from pyvsh.config import LedgerConfig
from pyvsh.exceptions import LedgerConfigError
from pyvsh.identity import ledger_address
from pyvsh.ledger import VehicleServiceLedger, block_clock
from pyvsh.models.deployment import DeploymentInfo
from pyvsh.state import policy

_logger = logging.getLogger(__name__)


class LocalNetwork:
    """Registry of ledgers deployed on one network.

    Usage::

        network = LocalNetwork(LedgerConfig.from_env())
        ledger = network.deploy(owner)
        save_deployment_info(network.deployment_info(ledger))

        # later, from another connection
        ledger = network.attach(load_deployment_info().ledger_address)
    """

    def __init__(
        self,
        config: LedgerConfig | None = None,
        *,
        clock: Callable[[], int] = block_clock,
    ) -> None:
        self._config = config or LedgerConfig()
        self._clock = clock
        self._ledgers: dict[str, VehicleServiceLedger] = {}
        self._deployments: dict[str, DeploymentInfo] = {}
        self._nonces: dict[str, int] = {}

    @property
    def name(self) -> str:
        return self._config.network

    @property
    def config(self) -> LedgerConfig:
        return self._config

    def __contains__(self, address: object) -> bool:
        return address in self._ledgers

    def __len__(self) -> int:
        return len(self._ledgers)

    def deploy(self, deployer: str) -> VehicleServiceLedger:
        """Deploy a new ledger owned by *deployer*.

        Raises
        ------
        InvalidArgumentError
            *deployer* is not a well-formed, non-null principal.
        """
        policy.require_principal(deployer, operation="deploy", reason=REASON_INVALID_DEPLOYER)
        nonce = self._nonces.get(deployer, 0)
        address = ledger_address(deployer, nonce)
        self._nonces[deployer] = nonce + 1

        ledger = VehicleServiceLedger(deployer, address=address, config=self._config, clock=self._clock)
        self._ledgers[address] = ledger
        self._deployments[address] = DeploymentInfo(
            ledger_address=address,
            deployer=deployer,
            network=self.name,
            deployed_at=datetime.now(UTC),
        )
        _logger.debug("Deployed ledger %s on %s by %s", address, self.name, deployer)
        return ledger

    def attach(self, address: str) -> VehicleServiceLedger:
        """Return the ledger previously deployed at *address*.

        Raises
        ------
        LedgerConfigError
            Nothing is deployed at *address* on this network.
        """
        ledger = self._ledgers.get(address)
        if ledger is None:
            raise LedgerConfigError(f"No ledger deployed at {address} on network {self.name!r}", operation="attach")
        return ledger

    def deployment_info(self, ledger: VehicleServiceLedger) -> DeploymentInfo:
        info = self._deployments.get(ledger.address)
        if info is None or self._ledgers.get(ledger.address) is not ledger:
            raise LedgerConfigError(
                f"Ledger {ledger.address} was not deployed on network {self.name!r}",
                operation="deployment_info",
            )
        return info
