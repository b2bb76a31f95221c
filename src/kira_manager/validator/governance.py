"""
Governance operations on behalf of the validator account.

Permission grants and identity records are ordinary transactions: they go
through the same submit-confirm-classify pipeline as lifecycle transitions.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from kira_manager.chain import SekaidClient, TransactionPipeline, TxOptions, render_tx
from kira_manager.config import KiraConfig
from kira_manager.executor import CommandExecutor

from .permissions import POST_GENESIS_PERMISSIONS, Permission

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GovernanceService:
    """Grants permissions and maintains identity records."""

    pipeline: TransactionPipeline
    """Submits and confirms transactions."""

    config: KiraConfig
    """Node configuration: chain id, keyring and fees."""

    log: logging.Logger = field(default=logger, repr=False)
    """Logger for governance progress."""

    @classmethod
    def create(
        cls,
        executor: CommandExecutor,
        config: KiraConfig,
        log: logging.Logger | None = None,
    ) -> GovernanceService:
        """Wire a governance service from an executor and the node configuration."""
        log = log or logger
        pipeline = TransactionPipeline.create(executor, config, log)
        return cls(pipeline=pipeline, config=config, log=log)

    @property
    def client(self) -> SekaidClient:
        """Client for the consensus daemon."""
        return self.pipeline.client

    def _options(self) -> TxOptions:
        # Governance messages run with the daemon's default gas.
        return TxOptions(
            chain_id=self.config.network_name,
            keyring_backend=self.config.keyring_backend,
            home=self.config.sekaid_home,
            fees=self.config.fees,
        )

    async def grant_permission(self, permission: Permission, address: str) -> None:
        """
        Whitelist a permission for an address, signed by that address.

        Raises:
            TransactionError: If the chain rejected the grant.
            BlockTimeoutError: If no block was produced within the budget.
        """
        command = render_tx(
            [
                "customgov",
                "permission",
                "whitelist",
                f"--permission={int(permission)}",
                f"--addr={address}",
            ],
            address,
            self._options(),
        )
        await self.pipeline.execute(command)
        self.log.info("Permission %s granted to %s", permission.name, address)

    async def has_permission(self, permission: Permission, address: str) -> bool:
        """Whether the address holds a whitelisted permission."""
        permissions = await self.client.permissions(address)
        return int(permission) in permissions.whitelist

    async def post_genesis_permissions(self, key_name: str) -> str:
        """
        Grant the genesis validator the permissions needed to govern.

        Grants are submitted one at a time, each waiting for its block. A
        grant that confirms but does not show up in the permission query is
        logged; the remaining grants still proceed.

        Args:
            key_name: Keyring name of the validator account.

        Returns:
            The address the permissions were granted to.

        Raises:
            TransactionError: If the chain rejected a grant.
        """
        address = await self.client.address_by_name(key_name)
        self.log.info(
            "Permissions to add for %s: %s",
            address,
            [int(permission) for permission in POST_GENESIS_PERMISSIONS],
        )

        for permission in POST_GENESIS_PERMISSIONS:
            await self.grant_permission(permission, address)
            if not await self.has_permission(permission, address):
                self.log.error("Permission %d wasn't found with %s address", permission, address)

        return address

    async def upsert_identity_record(self, key_name: str, key: str, value: str) -> None:
        """
        Register an identity record, or delete it when the value is empty.

        Raises:
            TransactionError: If the chain rejected the record change.
        """
        address = await self.client.address_by_name(key_name)

        if value:
            self.log.info("Registering identity record from %s: {%r: %r}", address, key, value)
            subcommand = [
                "customgov",
                "register-identity-records",
                f"--infos-json={json.dumps({key: value})}",
            ]
        else:
            self.log.info("Deleting identity record %r from %s", key, address)
            subcommand = ["customgov", "delete-identity-records", f"--keys={key}"]

        command = render_tx(subcommand, address, self._options())
        await self.pipeline.execute(command)
