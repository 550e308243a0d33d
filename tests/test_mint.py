"""Tests for the unsigned token-mint transaction builder."""

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.signature import Signature

from mintwallet.chain.exceptions import TransactionBuildError
from mintwallet.chain.mint import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    MINT_SIZE,
    TOKEN_2022_PROGRAM_ID,
    associated_token_address,
    build_token_mint_transaction,
    initialize_mint_instruction,
)
from mintwallet.cosign import required_signers
from mintwallet.errors import MintWalletError
from mintwallet.keypair import Keypair


@pytest.fixture
def plan():
    payer = Keypair.generate().public_key
    mint = Keypair.generate().public_key
    owner = Keypair.generate().public_key
    return build_token_mint_transaction(
        payer=payer,
        mint=mint,
        recipient_owner=owner,
        recent_blockhash=str(Hash.default()),
        rent_lamports=1_461_600,
    )


class TestBuildTokenMintTransaction:
    def test_required_signers_are_payer_then_mint(self, plan):
        assert required_signers(plan.transaction) == [plan.payer, plan.mint]

    def test_signature_slots_unsigned(self, plan):
        assert plan.transaction.signatures == [Signature.default(), Signature.default()]

    def test_three_instructions(self, plan):
        message = plan.transaction.message
        keys = message.account_keys
        programs = [keys[ix.program_id_index] for ix in message.instructions]
        assert programs == [
            Pubkey.from_string("11111111111111111111111111111111"),
            TOKEN_2022_PROGRAM_ID,
            ASSOCIATED_TOKEN_PROGRAM_ID,
        ]

    def test_initialize_mint_data(self, plan):
        message = plan.transaction.message
        data = bytes(message.instructions[1].data)
        assert data[0] == 0
        assert data[1] == 9
        assert data[2:34] == bytes(Pubkey.from_string(plan.payer))
        assert data[34] == 1
        assert data[35:67] == bytes(Pubkey.from_string(plan.payer))

    def test_recipient_token_account(self, plan):
        expected = associated_token_address(plan.recipient_owner, plan.mint)
        assert plan.recipient_token_account == str(expected)

    def test_blockhash(self, plan):
        assert plan.transaction.message.recent_blockhash == Hash.default()


class TestAssociatedTokenAddress:
    def test_deterministic(self):
        owner = Keypair.generate().public_key
        mint = Keypair.generate().public_key
        assert associated_token_address(owner, mint) == associated_token_address(owner, mint)

    def test_program_id_changes_address(self):
        from mintwallet.chain.mint import TOKEN_PROGRAM_ID

        owner = Keypair.generate().public_key
        mint = Keypair.generate().public_key
        assert associated_token_address(owner, mint) != associated_token_address(
            owner, mint, TOKEN_PROGRAM_ID
        )


class TestInitializeMintInstruction:
    def test_without_freeze_authority(self):
        mint = Pubkey.from_string(Keypair.generate().public_key)
        authority = Pubkey.from_string(Keypair.generate().public_key)
        ix = initialize_mint_instruction(mint, 6, authority, None)
        assert len(ix.data) == 67
        assert ix.data[34] == 0
        assert ix.accounts[0].pubkey == mint
        assert ix.accounts[0].is_writable

    def test_decimals_range(self):
        key = Pubkey.from_string(Keypair.generate().public_key)
        with pytest.raises(TransactionBuildError, match="256"):
            initialize_mint_instruction(key, 256, key, None)
        with pytest.raises(MintWalletError):
            initialize_mint_instruction(key, -1, key, None)

    def test_mint_size(self):
        assert MINT_SIZE == 82
