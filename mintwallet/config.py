"""Process configuration, read once from the environment.

Environment variables (all overridable via constructor args):
    CROSSMINT_API_KEY            wallet-service API key (required)
    CROSSMINT_BASE_URL           wallet-service base URL
    CROSSMINT_TIMEOUT            HTTP timeout in seconds (default 30)
    WALLET_SECRET_KEY            base58 admin signer secret (generated if unset)
    MINTWALLET_RPC_URL           Solana JSON-RPC endpoint (default devnet)
    MINTWALLET_CLUSTER           explorer cluster name (default devnet)
    MINTWALLET_COMMITMENT        confirmation commitment (default confirmed)
    MINTWALLET_MAX_RETRIES       sendTransaction maxRetries (default 5)
    MINTWALLET_POLL_INTERVAL     confirmation poll seconds (default 2)
    MINTWALLET_SIMULATE          simulate before broadcast (default 1)
    MINTWALLET_SIGNATURE_POLICY  strict | partial (default strict)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .cosign import SignaturePolicy
from .errors import ConfigError, KeypairError
from .keypair import Keypair

DEFAULT_BASE_URL = "https://staging.crossmint.com/api/2025-06-09"
DEFAULT_RPC_URL = "https://api.devnet.solana.com"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _int(env: Mapping[str, str], name: str, default: str) -> int:
    value = env.get(name) or default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _float(env: Mapping[str, str], name: str, default: str) -> float:
    value = env.get(name) or default
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {value!r}") from None


def _bool(env: Mapping[str, str], name: str, default: str) -> bool:
    value = (env.get(name) or default).strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class GatewayConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "GatewayConfig":
        env = os.environ if env is None else env
        api_key = env.get("CROSSMINT_API_KEY", "").strip()
        if not api_key:
            raise ConfigError("CROSSMINT_API_KEY not set in environment variables")
        return cls(
            api_key=api_key,
            base_url=(env.get("CROSSMINT_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            timeout=_float(env, "CROSSMINT_TIMEOUT", "30"),
        )


@dataclass(frozen=True)
class ChainClientConfig:
    rpc_url: str = DEFAULT_RPC_URL
    cluster: str = "devnet"
    commitment: str = "confirmed"
    preflight_commitment: str = "processed"
    max_retries: int = 5
    poll_interval: float = 2.0
    simulate: bool = True
    timeout: float = 30.0

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ChainClientConfig":
        env = os.environ if env is None else env
        commitment = env.get("MINTWALLET_COMMITMENT") or "confirmed"
        if commitment not in ("processed", "confirmed", "finalized"):
            raise ConfigError(f"MINTWALLET_COMMITMENT invalid: {commitment!r}")
        return cls(
            rpc_url=env.get("MINTWALLET_RPC_URL") or DEFAULT_RPC_URL,
            cluster=env.get("MINTWALLET_CLUSTER") or "devnet",
            commitment=commitment,
            max_retries=_int(env, "MINTWALLET_MAX_RETRIES", "5"),
            poll_interval=_float(env, "MINTWALLET_POLL_INTERVAL", "2"),
            simulate=_bool(env, "MINTWALLET_SIMULATE", "1"),
        )


@dataclass(frozen=True)
class AppConfig:
    gateway: GatewayConfig
    chain: ChainClientConfig
    signature_policy: SignaturePolicy = SignaturePolicy.STRICT
    wallet_secret: str | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "AppConfig":
        env = os.environ if env is None else env
        policy = (env.get("MINTWALLET_SIGNATURE_POLICY") or "strict").strip().lower()
        try:
            signature_policy = SignaturePolicy(policy)
        except ValueError:
            raise ConfigError(
                f"MINTWALLET_SIGNATURE_POLICY must be 'strict' or 'partial', got {policy!r}"
            ) from None
        return cls(
            gateway=GatewayConfig.from_env(env),
            chain=ChainClientConfig.from_env(env),
            signature_policy=signature_policy,
            wallet_secret=env.get("WALLET_SECRET_KEY") or None,
        )

    def admin_signer(self) -> Keypair:
        """The admin signer from WALLET_SECRET_KEY, or a fresh one if unset."""
        if not self.wallet_secret:
            return Keypair.generate()
        try:
            return Keypair.from_base58_secret(self.wallet_secret)
        except KeypairError as e:
            raise ConfigError(f"WALLET_SECRET_KEY is invalid: {e}") from e
