#!/usr/bin/env python3
"""Demo: mint a Token-2022 token from a Crossmint smart wallet on devnet.

Prerequisites
─────────────
1. A Crossmint staging API key with wallet scopes
2. Environment variables set:
     CROSSMINT_API_KEY     – wallet-service API key

Optional env:
     WALLET_SECRET_KEY     – base58 admin signer secret (random when unset)
     MINTWALLET_RPC_URL    – defaults to https://api.devnet.solana.com
     MINTWALLET_SIMULATE   – set to 0 to skip the dry run

The new smart wallet pays for the mint account, so fund it with devnet SOL
when the script prints its address, or the broadcast will fail.

Usage:
    python scripts/mint_token_devnet.py
"""

from __future__ import annotations

import logging
import sys

from mintwallet import AppConfig, CrossmintGateway, Keypair, MintWalletError
from mintwallet.chain import BroadcastSequencer, SolanaRpcClient
from mintwallet.flow import run_token_mint


def main() -> int:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    try:
        config = AppConfig.from_env()
        admin_signer = config.admin_signer()
    except MintWalletError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 1

    gateway = CrossmintGateway(config.gateway)
    rpc = SolanaRpcClient(config.chain)
    sequencer = BroadcastSequencer(rpc, config.chain)
    mint_keypair = Keypair.generate()
    recipient = Keypair.generate()

    print("=== Solana Token Creation ===")
    print(f"Gateway          = {gateway.base_url}")
    print(f"RPC              = {rpc.rpc_url}")
    print(f"Admin signer     = {admin_signer.public_key}")
    print(f"Mint             = {mint_keypair.public_key}")
    print(f"Recipient owner  = {recipient.public_key}")
    print(f"Signature policy = {config.signature_policy.value}")
    print()

    try:
        result = run_token_mint(
            gateway,
            rpc,
            sequencer,
            admin_signer=admin_signer,
            mint_keypair=mint_keypair,
            recipient_owner=recipient.public_key,
            policy=config.signature_policy,
        )
    except MintWalletError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    print(f"Payer wallet            = {result.wallet_address}")
    print(f"Token mint              = {result.mint_address}")
    print(f"Recipient token account = {result.recipient_token_account}")
    print(f"Wallet-service tx id    = {result.transaction_id}")
    if result.signature is None:
        print("No pending approvals; nothing broadcast.")
    else:
        print(f"Signature               = {result.signature}")
        print(f"Explorer                = {sequencer.explorer_url(result.signature)}")
    print()
    print("Script completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
