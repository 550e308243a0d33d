"""End-to-end token mint through a co-signed smart wallet."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import base58

from .chain.broadcast import BroadcastSequencer
from .chain.mint import MINT_SIZE, build_token_mint_transaction
from .cosign import SignaturePolicy, assemble_signed_transaction, match_approvals
from .keypair import Keypair

_LOG = logging.getLogger(__name__)


@dataclass
class MintResult:
    wallet_address: str
    mint_address: str
    recipient_token_account: str
    transaction_id: Optional[str]
    signature: Optional[str]


def run_token_mint(
    gateway,
    rpc,
    sequencer: BroadcastSequencer,
    admin_signer: Keypair,
    mint_keypair: Keypair,
    recipient_owner: str,
    policy: SignaturePolicy = SignaturePolicy.STRICT,
    decimals: int = 9,
) -> MintResult:
    """Create a wallet, mint a token from it, co-sign and broadcast.

    The smart wallet pays for everything, so it must hold SOL before the
    broadcast step.  ``signature`` in the result is None when the wallet
    service reported no pending approvals.
    """
    wallet = gateway.create_wallet(admin_signer.public_key)

    rent = rpc.get_minimum_balance_for_rent_exemption(MINT_SIZE)
    blockhash, last_valid_block_height = rpc.get_latest_blockhash()
    plan = build_token_mint_transaction(
        payer=wallet.address,
        mint=mint_keypair.public_key,
        recipient_owner=recipient_owner,
        recent_blockhash=blockhash,
        rent_lamports=rent,
        decimals=decimals,
    )

    serialized = base58.b58encode(bytes(plan.transaction)).decode("ascii")
    submitted = gateway.submit_transaction(
        wallet.address, serialized, required_signers=[mint_keypair.public_key]
    )
    result = MintResult(
        wallet_address=wallet.address,
        mint_address=plan.mint,
        recipient_token_account=plan.recipient_token_account,
        transaction_id=submitted.id,
        signature=None,
    )
    if not submitted.pending_approvals:
        _LOG.info("no pending approvals for transaction %s", submitted.id)
        return result

    approvals = match_approvals(
        submitted.pending_approvals, [mint_keypair, admin_signer]
    )
    signed = assemble_signed_transaction(
        submitted.wrapped_transaction, approvals, policy=policy
    )
    if submitted.last_valid_block_height is not None:
        last_valid_block_height = submitted.last_valid_block_height
    result.signature = sequencer.broadcast(signed, last_valid_block_height)
    return result
