"""Crossmint smart-wallet co-signing client for Solana."""

from .config import AppConfig, ChainClientConfig, GatewayConfig
from .cosign import (
    SignaturePolicy,
    assemble_signed_transaction,
    match_approvals,
    required_signers,
)
from .errors import (
    ApprovalEncodingError,
    ConfigError,
    GatewayError,
    InvalidSignatureLengthError,
    KeypairError,
    LocatorError,
    MintWalletError,
    MissingSignaturesError,
    NoMatchingSignerError,
    SignatureError,
)
from .gateway import CrossmintGateway
from .keypair import Keypair
from .locator import SignerLocator
from .types import Approval, PendingApproval, SubmittedTransaction, WalletHandle

__all__ = [
    "AppConfig",
    "Approval",
    "ApprovalEncodingError",
    "ChainClientConfig",
    "ConfigError",
    "CrossmintGateway",
    "GatewayConfig",
    "GatewayError",
    "InvalidSignatureLengthError",
    "Keypair",
    "KeypairError",
    "LocatorError",
    "MintWalletError",
    "MissingSignaturesError",
    "NoMatchingSignerError",
    "PendingApproval",
    "SignatureError",
    "SignaturePolicy",
    "SignerLocator",
    "SubmittedTransaction",
    "WalletHandle",
    "assemble_signed_transaction",
    "match_approvals",
    "required_signers",
]
