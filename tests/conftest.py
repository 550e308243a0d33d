import base58
import pytest
from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.message import MessageV0, to_bytes_versioned
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from mintwallet.config import ChainClientConfig
from mintwallet.keypair import Keypair

MEMO_PROGRAM_ID = Pubkey.from_string("MemoSq4gqABAXKb96qTH8ttZxC7HmsoLhcGY6TrdZLy")


def make_wrapped(signers: list[Keypair]) -> VersionedTransaction:
    """Unsigned v0 transaction requiring every keypair in *signers*."""
    payer = Pubkey.from_string(signers[0].public_key)
    metas = [
        AccountMeta(Pubkey.from_string(k.public_key), is_signer=True, is_writable=False)
        for k in signers[1:]
    ]
    ix = Instruction(MEMO_PROGRAM_ID, b"co-sign me", metas)
    msg = MessageV0.try_compile(payer, [ix], [], Hash.default())
    slots = [Signature.default()] * msg.header.num_required_signatures
    return VersionedTransaction.populate(msg, slots)


def message_b58(tx: VersionedTransaction) -> str:
    return base58.b58encode(to_bytes_versioned(tx.message)).decode("ascii")


def with_slot(tx: VersionedTransaction, index: int, signature: Signature) -> VersionedTransaction:
    slots = list(tx.signatures)
    slots[index] = signature
    return VersionedTransaction.populate(tx.message, slots)


class FakeRpc:
    def __init__(self, config=None, statuses=None, heights=None, simulation=None):
        self.config = config or ChainClientConfig(poll_interval=0)
        self.statuses = list(statuses or [{"confirmationStatus": "confirmed", "slot": 7, "err": None}])
        self.heights = list(heights or [100])
        self.simulation = simulation or {"err": None, "logs": ["Program log: ok"]}
        self.calls: list[tuple] = []

    def get_latest_blockhash(self):
        self.calls.append(("get_latest_blockhash",))
        return str(Hash.default()), 150

    def get_minimum_balance_for_rent_exemption(self, size):
        self.calls.append(("get_minimum_balance_for_rent_exemption", size))
        return 1_461_600

    def simulate_transaction(self, tx_base64):
        self.calls.append(("simulate_transaction", tx_base64))
        return self.simulation

    def send_transaction(self, tx_base64, skip_preflight=False, preflight_commitment=None, max_retries=None):
        self.calls.append(("send_transaction", tx_base64, max_retries))
        return "5igSignature"

    def get_signature_status(self, signature):
        self.calls.append(("get_signature_status", signature))
        if len(self.statuses) > 1:
            return self.statuses.pop(0)
        return self.statuses[0]

    def get_block_height(self):
        self.calls.append(("get_block_height",))
        if len(self.heights) > 1:
            return self.heights.pop(0)
        return self.heights[0]

    def names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def three_signers():
    return [Keypair.generate() for _ in range(3)]
