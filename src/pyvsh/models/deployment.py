"""Deployment info model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from pyvsh.models._base import DeployedAt, LedgerBaseModel


class DeploymentInfo(LedgerBaseModel):
    """Where a ledger lives and who deployed it.

    External tooling records this after deployment and supplies
    ``ledger_address`` to every later connection. Older files written
    with a ``contractAddress`` key are accepted.
    """

    ledger_address: str = Field(
        min_length=1,
        validation_alias=AliasChoices("ledgerAddress", "contractAddress", "ledger_address"),
    )
    deployer: str = Field(min_length=1)
    network: str = Field(min_length=1)
    deployed_at: DeployedAt
