"""Privileged transfers against a Substrate ledger."""

import asyncio

from typing import Any, Protocol, Self

from substrateinterface import Keypair, KeypairType, SubstrateInterface
from substrateinterface.exceptions import SubstrateRequestException
from websocket import WebSocketException

from src.helpers.constants import DRY_RUN_OK
from src.helpers.logging import get_logger
from src.slash.errors import TransferError
from src.slash.models import TransferOutcome


logger = get_logger(__name__)


class LedgerClient(Protocol):
    """Capability used by the orchestrator to move funds out of an account."""

    async def force_transfer(
        self, from_address: str, amount: int, *, dry_run: bool
    ) -> TransferOutcome:
        """Move amount out of from_address under the signer's privilege."""
        ...


class SubstrateLedgerClient:
    """Executes ``Sudo.sudo(Balances.force_transfer)`` from any account to the signer.

    The signer holds the sudo key, so the source account does not sign.
    Dry runs go through ``system_dryRun`` and never touch chain state; live
    runs return as soon as the node accepts the extrinsic, without waiting
    for inclusion.

    substrate-interface is synchronous, so each call runs in a worker thread
    and is awaited before the next one starts.
    """

    def __init__(self, substrate: SubstrateInterface, signer: Keypair) -> None:
        """Initialize ledger client.

        Args:
            substrate: Connected substrate interface
            signer: Keypair holding the sudo key
        """
        self.substrate = substrate
        self.signer = signer

    @classmethod
    def connect(cls, node_url: str, root_mnemonic: str) -> Self:
        """Connect to a node and load the sudo keypair.

        Args:
            node_url: Node websocket URL
            root_mnemonic: Mnemonic or SURI of the sudo account

        Returns:
            Connected ledger client

        Raises:
            ValueError: If node_url is empty or the mnemonic is invalid
            ConnectionError: If the node cannot be reached
        """
        if not node_url:
            msg = "Node URL cannot be empty"
            raise ValueError(msg)

        signer = Keypair.create_from_uri(
            root_mnemonic, crypto_type=KeypairType.SR25519
        )
        logger.debug("ROOT_MNEMONIC loaded as %s", signer.ss58_address)
        substrate = SubstrateInterface(url=node_url)
        return cls(substrate, signer)

    @property
    def address(self) -> str:
        """Signer address receiving slashed funds."""
        return self.signer.ss58_address

    def _create_extrinsic(self, from_address: str, amount: int) -> Any:
        transfer = self.substrate.compose_call(
            call_module="Balances",
            call_function="force_transfer",
            call_params={
                "source": from_address,
                "dest": self.signer.ss58_address,
                "value": amount,
            },
        )
        sudo = self.substrate.compose_call(
            call_module="Sudo",
            call_function="sudo",
            call_params={"call": transfer},
        )
        return self.substrate.create_signed_extrinsic(call=sudo, keypair=self.signer)

    def _dry_run(self, from_address: str, amount: int) -> TransferOutcome:
        extrinsic = self._create_extrinsic(from_address, amount)
        response = self.substrate.rpc_request(
            "system_dryRun", [extrinsic.data.to_hex()]
        )
        result = str(response.get("result", ""))
        success = result.startswith(DRY_RUN_OK)
        logger.debug(
            "Dry run enabled. Transfer: Ok: %s, Status: %s", success, result
        )
        return TransferOutcome(
            address=from_address,
            amount=amount,
            dry_run=True,
            success=success,
            detail=result,
        )

    def _submit(self, from_address: str, amount: int) -> TransferOutcome:
        extrinsic = self._create_extrinsic(from_address, amount)
        receipt = self.substrate.submit_extrinsic(extrinsic, wait_for_inclusion=False)
        logger.debug(
            "Tx signed and sent. Transfer Hash: %s", receipt.extrinsic_hash
        )
        return TransferOutcome(
            address=from_address,
            amount=amount,
            dry_run=False,
            success=True,
            detail=receipt.extrinsic_hash,
        )

    async def force_transfer(
        self, from_address: str, amount: int, *, dry_run: bool
    ) -> TransferOutcome:
        """Slash amount from from_address into the signer account.

        Args:
            from_address: Account to move funds out of
            amount: Amount in minor units
            dry_run: Simulate instead of submitting

        Returns:
            Outcome of the simulated or submitted transfer

        Raises:
            TransferError: If the node rejects the call or cannot be reached
        """
        logger.debug(
            "Starting force transfer... moving %d tokens from %s to %s",
            amount,
            from_address,
            self.signer.ss58_address,
        )
        operation = self._dry_run if dry_run else self._submit
        try:
            return await asyncio.to_thread(operation, from_address, amount)
        except (SubstrateRequestException, WebSocketException, OSError, ValueError) as e:
            raise TransferError(from_address, amount, str(e)) from e


__all__ = ["LedgerClient", "SubstrateLedgerClient"]
