"""Wallet-service objects exchanged with the co-signing coordinator."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PendingApproval:
    message: str  # base58
    signer: str  # locator

    @classmethod
    def from_dict(cls, data: dict) -> "PendingApproval":
        return cls(message=data["message"], signer=data["signer"])


@dataclass(frozen=True)
class Approval:
    signer: str  # locator
    signature: str  # base58

    def to_dict(self) -> dict[str, str]:
        return {"signer": self.signer, "signature": self.signature}


@dataclass
class WalletHandle:
    address: str
    type: str
    admin_signer: dict[str, Any]
    created_at: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, data: dict) -> "WalletHandle":
        config = data.get("config") or {}
        return cls(
            address=data["address"],
            type=data.get("type", ""),
            admin_signer=config.get("adminSigner") or {},
            created_at=data.get("createdAt"),
            raw=data,
        )


@dataclass
class SubmittedTransaction:
    id: str | None
    status: str | None
    pending_approvals: list[PendingApproval]
    wrapped_transaction: str  # base58
    last_valid_block_height: int | None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, data: dict) -> "SubmittedTransaction":
        approvals = data.get("approvals") or {}
        on_chain = data["onChain"]
        height = on_chain.get("lastValidBlockHeight")
        return cls(
            id=data.get("id"),
            status=data.get("status"),
            pending_approvals=[
                PendingApproval.from_dict(p) for p in approvals.get("pending") or []
            ],
            wrapped_transaction=on_chain["transaction"],
            last_valid_block_height=int(height) if height is not None else None,
            raw=data,
        )
