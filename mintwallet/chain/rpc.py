"""Solana JSON-RPC client.

Speaks JSON-RPC 2.0 over plain HTTP; only the handful of methods the
co-signing flow needs are wrapped.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from ..config import ChainClientConfig
from .exceptions import RpcError

_LOG = logging.getLogger(__name__)


class SolanaRpcClient:
    def __init__(self, config: ChainClientConfig | None = None):
        self.config = config or ChainClientConfig.from_env()
        self._request_id = 0

    @property
    def rpc_url(self) -> str:
        return self.config.rpc_url

    def _rpc(self, method: str, params: list[Any] | None = None) -> Any:
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or [],
        }
        try:
            resp = requests.post(
                self.config.rpc_url, json=payload, timeout=self.config.timeout
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise RpcError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise RpcError(f"{method} returned invalid JSON: {e}") from e

        if "error" in data:
            error = data["error"] or {}
            raise RpcError(
                error.get("message", "Unknown RPC error"),
                code=error.get("code"),
                data=error.get("data"),
            )
        return data.get("result")

    def get_latest_blockhash(self) -> tuple[str, int]:
        """Return (blockhash, last_valid_block_height)."""
        result = self._rpc(
            "getLatestBlockhash", [{"commitment": self.config.commitment}]
        )
        value = result["value"]
        return value["blockhash"], int(value["lastValidBlockHeight"])

    def get_minimum_balance_for_rent_exemption(self, data_size: int) -> int:
        return int(
            self._rpc(
                "getMinimumBalanceForRentExemption",
                [data_size, {"commitment": self.config.commitment}],
            )
        )

    def get_block_height(self) -> int:
        return int(self._rpc("getBlockHeight", [{"commitment": self.config.commitment}]))

    def simulate_transaction(self, tx_base64: str) -> dict[str, Any]:
        """Dry-run a signed transaction; returns the RPC ``value`` object."""
        result = self._rpc(
            "simulateTransaction",
            [
                tx_base64,
                {
                    "encoding": "base64",
                    "sigVerify": True,
                    "commitment": self.config.preflight_commitment,
                },
            ],
        )
        return result["value"]

    def send_transaction(
        self,
        tx_base64: str,
        skip_preflight: bool = False,
        preflight_commitment: str | None = None,
        max_retries: int | None = None,
    ) -> str:
        """Send a signed transaction. Returns the transaction signature."""
        opts: dict[str, Any] = {
            "encoding": "base64",
            "skipPreflight": skip_preflight,
            "preflightCommitment": preflight_commitment or self.config.preflight_commitment,
        }
        if max_retries is not None:
            opts["maxRetries"] = max_retries
        signature = self._rpc("sendTransaction", [tx_base64, opts])
        _LOG.info("solana tx sent: %s", signature)
        return signature

    def get_signature_status(self, signature: str) -> dict[str, Any] | None:
        result = self._rpc(
            "getSignatureStatuses",
            [[signature], {"searchTransactionHistory": False}],
        )
        statuses = result.get("value") or []
        return statuses[0] if statuses else None
