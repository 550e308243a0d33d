"""Solana chain access: JSON-RPC client, broadcast sequencing, mint builder."""

from .broadcast import BroadcastSequencer, encode_transaction
from .exceptions import (
    ChainError,
    ExpiredError,
    RpcError,
    SimulationError,
    TransactionBuildError,
    TransactionFailedError,
)
from .mint import (
    TOKEN_2022_PROGRAM_ID,
    MintPlan,
    associated_token_address,
    build_token_mint_transaction,
)
from .rpc import SolanaRpcClient

__all__ = [
    "BroadcastSequencer",
    "ChainError",
    "ExpiredError",
    "MintPlan",
    "RpcError",
    "SimulationError",
    "SolanaRpcClient",
    "TOKEN_2022_PROGRAM_ID",
    "TransactionBuildError",
    "TransactionFailedError",
    "associated_token_address",
    "build_token_mint_transaction",
    "encode_transaction",
]
