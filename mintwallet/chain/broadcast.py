"""Simulate, send and confirm a fully-signed transaction."""

from __future__ import annotations

import base64
import logging
import time
from typing import Callable

from solders.transaction import VersionedTransaction

from ..config import ChainClientConfig
from .exceptions import ExpiredError, SimulationError, TransactionFailedError

_LOG = logging.getLogger(__name__)

_COMMITMENT_RANK = {"processed": 0, "confirmed": 1, "finalized": 2}


def encode_transaction(tx: VersionedTransaction) -> str:
    return base64.b64encode(bytes(tx)).decode("ascii")


class BroadcastSequencer:
    def __init__(
        self,
        rpc,
        config: ChainClientConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.rpc = rpc
        self.config = config or rpc.config
        self._sleep = sleep

    def simulate(self, tx: VersionedTransaction) -> list[str]:
        """Dry-run *tx*; returns the program logs.

        Raises:
            SimulationError: If the chain reports an error.
        """
        value = self.rpc.simulate_transaction(encode_transaction(tx))
        logs = value.get("logs") or []
        if value.get("err") is not None:
            raise SimulationError(value["err"], logs)
        _LOG.info("simulation ok, %d log lines", len(logs))
        return logs

    def send(self, tx: VersionedTransaction) -> str:
        return self.rpc.send_transaction(
            encode_transaction(tx),
            skip_preflight=False,
            preflight_commitment=self.config.preflight_commitment,
            max_retries=self.config.max_retries,
        )

    def confirm(self, signature: str, last_valid_block_height: int) -> dict:
        """Poll until *signature* reaches the configured commitment.

        Raises:
            TransactionFailedError: If the transaction landed with an error.
            ExpiredError: If the block height passes *last_valid_block_height*
                before confirmation.
        """
        while True:
            status = self._check_status(signature)
            if status is not None:
                return status

            block_height = self.rpc.get_block_height()
            if block_height > last_valid_block_height:
                # The transaction may have landed between the two reads.
                status = self._check_status(signature)
                if status is not None:
                    return status
                raise ExpiredError(signature, last_valid_block_height, block_height)
            self._sleep(self.config.poll_interval)

    def _check_status(self, signature: str) -> dict | None:
        """Return the status once it meets the commitment, None while pending."""
        status = self.rpc.get_signature_status(signature)
        if not status:
            return None
        if status.get("err") is not None:
            raise TransactionFailedError(signature, status["err"])
        reached = _COMMITMENT_RANK.get(status.get("confirmationStatus") or "", -1)
        if reached < _COMMITMENT_RANK[self.config.commitment]:
            return None
        _LOG.info(
            "tx=%s confirmed at slot %s (%s)",
            signature,
            status.get("slot"),
            status.get("confirmationStatus"),
        )
        return status

    def broadcast(
        self,
        tx: VersionedTransaction,
        last_valid_block_height: int,
        simulate: bool | None = None,
    ) -> str:
        """Simulate (unless disabled), send and confirm *tx*. Returns its signature."""
        if self.config.simulate if simulate is None else simulate:
            self.simulate(tx)
        signature = self.send(tx)
        self.confirm(signature, last_valid_block_height)
        return signature

    def explorer_url(self, signature: str) -> str:
        url = f"https://explorer.solana.com/tx/{signature}"
        if self.config.cluster and self.config.cluster != "mainnet-beta":
            url += f"?cluster={self.config.cluster}"
        return url
