"""HTTP client for the Crossmint wallet service."""

import logging

import requests

from .config import GatewayConfig
from .errors import GatewayError
from .types import SubmittedTransaction, WalletHandle

_LOG = logging.getLogger(__name__)


class CrossmintGateway:
    """Creates smart wallets and submits transactions for co-signing.

    Every call authenticates with the static API key from *config*.
    """

    def __init__(self, config: GatewayConfig):
        self._config = config
        self._base_url = config.base_url.rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base_url

    def create_wallet(
        self,
        admin_signer_address: str,
        chain_type: str = "solana",
        wallet_type: str = "smart",
    ) -> WalletHandle:
        """Create a smart wallet administered by an external-wallet signer."""
        body = {
            "chainType": chain_type,
            "type": wallet_type,
            "config": {
                "adminSigner": {
                    "type": "external-wallet",
                    "address": admin_signer_address,
                }
            },
        }
        data = self._request("POST", "/wallets", body)
        wallet = WalletHandle.from_response(data)
        _LOG.info("created wallet address=%s", wallet.address)
        return wallet

    def get_wallet(self, wallet_locator: str) -> WalletHandle:
        return WalletHandle.from_response(
            self._request("GET", f"/wallets/{wallet_locator}")
        )

    def submit_transaction(
        self,
        wallet_address: str,
        transaction_base58: str,
        required_signers: list[str] | None = None,
    ) -> SubmittedTransaction:
        """Submit a base58 transaction; returns the wrapped tx and pending approvals.

        Raises:
            GatewayError: On transport failure, a non-2xx status, or a response
                without an on-chain transaction.
        """
        params: dict = {"transaction": transaction_base58}
        if required_signers:
            params["requiredSigners"] = list(required_signers)
        data = self._request(
            "POST", f"/wallets/{wallet_address}/transactions", {"params": params}
        )
        submitted = self._parse_transaction(data)
        _LOG.info(
            "submitted transaction id=%s wallet=%s pending=%d",
            submitted.id,
            wallet_address,
            len(submitted.pending_approvals),
        )
        return submitted

    def get_transaction(
        self, wallet_address: str, transaction_id: str
    ) -> SubmittedTransaction:
        data = self._request(
            "GET", f"/wallets/{wallet_address}/transactions/{transaction_id}"
        )
        return self._parse_transaction(data)

    # -- internal helpers --

    def _parse_transaction(self, data: dict) -> SubmittedTransaction:
        on_chain = data.get("onChain") if isinstance(data, dict) else None
        if not isinstance(on_chain, dict) or not on_chain.get("transaction"):
            raise GatewayError("Wallet service response has no onChain.transaction")
        return SubmittedTransaction.from_response(data)

    def _request(self, method: str, path: str, body: dict | None = None) -> dict:
        url = f"{self._base_url}{path}"
        headers = {
            "X-API-KEY": self._config.api_key,
            "Content-Type": "application/json",
        }
        try:
            resp = requests.request(
                method, url, json=body, headers=headers, timeout=self._config.timeout
            )
        except requests.RequestException as e:
            raise GatewayError(f"{method} {url} failed: {e}") from e

        if 200 <= resp.status_code < 300:
            if resp.status_code == 204 or not resp.content:
                return {}
            try:
                return resp.json()
            except ValueError as e:
                raise GatewayError(
                    f"{method} {url} returned invalid JSON",
                    status=resp.status_code,
                    body=resp.text,
                ) from e

        _LOG.error("wallet service error %s: %s", resp.status_code, resp.text)
        raise GatewayError(
            f"Wallet service rejected request ({resp.status_code} {resp.reason}). "
            f"Details: {resp.text}",
            status=resp.status_code,
            body=resp.text,
        )
