"""Tests for the wallet-service HTTP client (no network)."""

import json

import pytest
import requests

from mintwallet import gateway as gateway_module
from mintwallet.config import GatewayConfig
from mintwallet.errors import GatewayError
from mintwallet.gateway import CrossmintGateway

BASE_URL = "https://wallets.test/api/2025-06-09"
ADMIN = "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text="", reason="OK"):
        self.status_code = status_code
        self._payload = payload
        self.text = text or ("" if payload is None else json.dumps(payload))
        self.content = self.text.encode()
        self.reason = reason

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON")
        return self._payload


@pytest.fixture
def gateway():
    return CrossmintGateway(GatewayConfig(api_key="sk_test", base_url=BASE_URL + "/", timeout=5))


def _wallet_payload():
    return {
        "type": "solana-smart-wallet",
        "address": "5m1YWzkbvHpZs3K1Ttn3dQtJHQeKh3hG9jFhYZ3RUFXQ",
        "createdAt": "2025-06-09T00:00:00Z",
        "config": {
            "adminSigner": {
                "type": "external-wallet",
                "address": ADMIN,
                "locator": f"external-wallet:{ADMIN}",
            }
        },
    }


def _transaction_payload(pending=None):
    return {
        "id": "tx-123",
        "status": "awaiting-approval",
        "approvals": {"pending": pending or []},
        "onChain": {"transaction": "3Bxs4h24hBtQy9rw", "lastValidBlockHeight": 2048},
    }


@pytest.fixture
def http(monkeypatch):
    state = {"calls": [], "responses": []}

    def fake_request(method, url, json=None, headers=None, timeout=None):
        state["calls"].append(
            {"method": method, "url": url, "json": json, "headers": headers, "timeout": timeout}
        )
        return state["responses"].pop(0)

    monkeypatch.setattr(gateway_module.requests, "request", fake_request)
    return state


class TestCreateWallet:
    def test_request_shape(self, gateway, http):
        http["responses"].append(FakeResponse(201, _wallet_payload()))
        gateway.create_wallet(ADMIN)

        call = http["calls"][0]
        assert call["method"] == "POST"
        assert call["url"] == f"{BASE_URL}/wallets"
        assert call["headers"]["X-API-KEY"] == "sk_test"
        assert call["headers"]["Content-Type"] == "application/json"
        assert call["timeout"] == 5
        assert call["json"] == {
            "chainType": "solana",
            "type": "smart",
            "config": {"adminSigner": {"type": "external-wallet", "address": ADMIN}},
        }

    def test_parses_wallet(self, gateway, http):
        http["responses"].append(FakeResponse(201, _wallet_payload()))
        wallet = gateway.create_wallet(ADMIN)
        assert wallet.address == "5m1YWzkbvHpZs3K1Ttn3dQtJHQeKh3hG9jFhYZ3RUFXQ"
        assert wallet.admin_signer["address"] == ADMIN
        assert wallet.created_at == "2025-06-09T00:00:00Z"

    def test_error_surfaces_status_and_body(self, gateway, http):
        http["responses"].append(
            FakeResponse(400, None, text='{"message":"invalid signer"}', reason="Bad Request")
        )
        with pytest.raises(GatewayError) as exc:
            gateway.create_wallet(ADMIN)
        assert exc.value.status == 400
        assert exc.value.body == '{"message":"invalid signer"}'
        assert "Bad Request" in str(exc.value)
        assert "invalid signer" in str(exc.value)

    def test_transport_failure(self, gateway, monkeypatch):
        def boom(*args, **kwargs):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(gateway_module.requests, "request", boom)
        with pytest.raises(GatewayError, match="connection refused"):
            gateway.create_wallet(ADMIN)

    def test_invalid_json(self, gateway, http):
        http["responses"].append(FakeResponse(200, None, text="<html>"))
        with pytest.raises(GatewayError, match="invalid JSON"):
            gateway.create_wallet(ADMIN)


class TestGetWallet:
    def test_get(self, gateway, http):
        http["responses"].append(FakeResponse(200, _wallet_payload()))
        wallet = gateway.get_wallet("me:solana-smart-wallet")
        assert http["calls"][0]["method"] == "GET"
        assert http["calls"][0]["url"] == f"{BASE_URL}/wallets/me:solana-smart-wallet"
        assert wallet.type == "solana-smart-wallet"


class TestSubmitTransaction:
    def test_request_shape(self, gateway, http):
        http["responses"].append(FakeResponse(201, _transaction_payload()))
        gateway.submit_transaction("WALLET", "3Bxs4h24hBtQy9rw", required_signers=[ADMIN])
        call = http["calls"][0]
        assert call["url"] == f"{BASE_URL}/wallets/WALLET/transactions"
        assert call["json"] == {
            "params": {"transaction": "3Bxs4h24hBtQy9rw", "requiredSigners": [ADMIN]}
        }

    def test_omits_empty_required_signers(self, gateway, http):
        http["responses"].append(FakeResponse(201, _transaction_payload()))
        gateway.submit_transaction("WALLET", "3Bxs4h24hBtQy9rw")
        assert http["calls"][0]["json"] == {"params": {"transaction": "3Bxs4h24hBtQy9rw"}}

    def test_parses_pending_approvals(self, gateway, http):
        pending = [{"message": "2NEpo7TZRRrLZSi2U", "signer": f"external-wallet:{ADMIN}"}]
        http["responses"].append(FakeResponse(201, _transaction_payload(pending)))
        submitted = gateway.submit_transaction("WALLET", "3Bxs4h24hBtQy9rw")
        assert submitted.id == "tx-123"
        assert submitted.wrapped_transaction == "3Bxs4h24hBtQy9rw"
        assert submitted.last_valid_block_height == 2048
        assert len(submitted.pending_approvals) == 1
        assert submitted.pending_approvals[0].signer == f"external-wallet:{ADMIN}"
        assert submitted.pending_approvals[0].message == "2NEpo7TZRRrLZSi2U"

    def test_missing_on_chain_transaction(self, gateway, http):
        http["responses"].append(FakeResponse(201, {"id": "tx-1", "approvals": {"pending": []}}))
        with pytest.raises(GatewayError, match="onChain"):
            gateway.submit_transaction("WALLET", "3Bxs4h24hBtQy9rw")

    def test_server_error(self, gateway, http):
        http["responses"].append(
            FakeResponse(500, None, text="upstream unavailable", reason="Internal Server Error")
        )
        with pytest.raises(GatewayError) as exc:
            gateway.submit_transaction("WALLET", "3Bxs4h24hBtQy9rw")
        assert exc.value.status == 500


class TestGetTransaction:
    def test_get(self, gateway, http):
        http["responses"].append(FakeResponse(200, _transaction_payload()))
        submitted = gateway.get_transaction("WALLET", "tx-123")
        assert http["calls"][0]["url"] == f"{BASE_URL}/wallets/WALLET/transactions/tx-123"
        assert submitted.status == "awaiting-approval"

    def test_null_pending_approvals(self, gateway, http):
        payload = _transaction_payload()
        payload["approvals"] = {"pending": None}
        http["responses"].append(FakeResponse(200, payload))
        assert gateway.get_transaction("WALLET", "tx-123").pending_approvals == []

    def test_accepted_status(self, gateway, http):
        http["responses"].append(FakeResponse(202, _transaction_payload(), reason="Accepted"))
        assert gateway.get_transaction("WALLET", "tx-123").id == "tx-123"


class TestResponseStatus:
    def test_no_content_is_empty_body(self, gateway, http):
        http["responses"].append(FakeResponse(204, None, reason="No Content"))
        assert gateway._request("DELETE", "/wallets/WALLET") == {}

    def test_no_content_where_transaction_expected(self, gateway, http):
        http["responses"].append(FakeResponse(204, None, reason="No Content"))
        with pytest.raises(GatewayError, match="onChain.transaction"):
            gateway.get_transaction("WALLET", "tx-123")

    def test_redirect_is_rejected(self, gateway, http):
        http["responses"].append(FakeResponse(302, None, text="moved", reason="Found"))
        with pytest.raises(GatewayError) as exc:
            gateway.get_wallet("WALLET")
        assert exc.value.status == 302
