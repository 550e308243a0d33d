"""Unsigned token-mint transaction builder.

Builds the three-instruction transaction the demo submits for co-signing:
create the mint account, initialize it as a mint, and create the
recipient's associated token account.  The payer (the smart wallet) is
also the mint and freeze authority.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.system_program import CreateAccountParams, create_account
from solders.sysvar import RENT
from solders.transaction import VersionedTransaction

from .exceptions import TransactionBuildError

_LOG = logging.getLogger(__name__)

TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
TOKEN_2022_PROGRAM_ID = Pubkey.from_string("TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)
MINT_SIZE = 82

_INITIALIZE_MINT = 0


def _pubkey(value: Pubkey | str) -> Pubkey:
    return value if isinstance(value, Pubkey) else Pubkey.from_string(value)


def associated_token_address(
    owner: Pubkey | str,
    mint: Pubkey | str,
    program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
) -> Pubkey:
    """Derive the associated token account PDA for *owner* and *mint*."""
    address, _bump = Pubkey.find_program_address(
        [bytes(_pubkey(owner)), bytes(program_id), bytes(_pubkey(mint))],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )
    return address


def initialize_mint_instruction(
    mint: Pubkey,
    decimals: int,
    mint_authority: Pubkey,
    freeze_authority: Pubkey | None,
    program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
) -> Instruction:
    if not 0 <= decimals <= 255:
        raise TransactionBuildError(f"decimals must be in 0..255, got {decimals}")
    data = struct.pack("<BB", _INITIALIZE_MINT, decimals) + bytes(mint_authority)
    if freeze_authority is None:
        data += b"\x00" + bytes(32)
    else:
        data += b"\x01" + bytes(freeze_authority)
    accounts = [
        AccountMeta(mint, is_signer=False, is_writable=True),
        AccountMeta(RENT, is_signer=False, is_writable=False),
    ]
    return Instruction(program_id, data, accounts)


def create_associated_token_account_instruction(
    payer: Pubkey,
    ata: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
) -> Instruction:
    accounts = [
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(ata, is_signer=False, is_writable=True),
        AccountMeta(owner, is_signer=False, is_writable=False),
        AccountMeta(mint, is_signer=False, is_writable=False),
        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(program_id, is_signer=False, is_writable=False),
    ]
    return Instruction(ASSOCIATED_TOKEN_PROGRAM_ID, b"", accounts)


@dataclass
class MintPlan:
    transaction: VersionedTransaction
    payer: str
    mint: str
    recipient_owner: str
    recipient_token_account: str


def build_token_mint_transaction(
    payer: Pubkey | str,
    mint: Pubkey | str,
    recipient_owner: Pubkey | str,
    recent_blockhash: Hash | str,
    rent_lamports: int,
    decimals: int = 9,
    program_id: Pubkey = TOKEN_2022_PROGRAM_ID,
) -> MintPlan:
    """Build an unsigned v0 transaction creating a mint and a recipient account.

    All signature slots are left at the default (zero) signature.
    """
    payer_key = _pubkey(payer)
    mint_key = _pubkey(mint)
    owner_key = _pubkey(recipient_owner)
    if isinstance(recent_blockhash, str):
        recent_blockhash = Hash.from_string(recent_blockhash)

    ata = associated_token_address(owner_key, mint_key, program_id)
    instructions = [
        create_account(
            CreateAccountParams(
                from_pubkey=payer_key,
                to_pubkey=mint_key,
                lamports=rent_lamports,
                space=MINT_SIZE,
                owner=program_id,
            )
        ),
        initialize_mint_instruction(mint_key, decimals, payer_key, payer_key, program_id),
        create_associated_token_account_instruction(
            payer_key, ata, owner_key, mint_key, program_id
        ),
    ]
    message = MessageV0.try_compile(payer_key, instructions, [], recent_blockhash)
    slots = [Signature.default()] * message.header.num_required_signatures
    tx = VersionedTransaction.populate(message, slots)
    _LOG.info("built mint tx payer=%s mint=%s ata=%s", payer_key, mint_key, ata)
    return MintPlan(
        transaction=tx,
        payer=str(payer_key),
        mint=str(mint_key),
        recipient_owner=str(owner_key),
        recipient_token_account=str(ata),
    )
