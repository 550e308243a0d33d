"""Co-signing of wallet-service transactions with locally-held keypairs.

The wallet service returns a wrapped transaction that already carries its
own signature, plus a list of pending approvals naming the other parties
that must sign.  This module produces those signatures and slots them into
the transaction in the order its message header requires.
"""

from __future__ import annotations

import enum
import logging
from typing import Iterable, Sequence

import base58
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from .errors import (
    ApprovalEncodingError,
    InvalidSignatureLengthError,
    LocatorError,
    MissingSignaturesError,
    NoMatchingSignerError,
)
from .keypair import Keypair
from .locator import SignerLocator
from .types import Approval, PendingApproval

_LOG = logging.getLogger(__name__)

SIGNATURE_LENGTH = 64
_DEFAULT_SIGNATURE = Signature.default()


class SignaturePolicy(str, enum.Enum):
    STRICT = "strict"
    PARTIAL = "partial"


def _short(address: str) -> str:
    return f"{address[:8]}...{address[-8:]}"


def _find_signer(locator: str, available: Sequence[Keypair]) -> Keypair:
    try:
        address = SignerLocator.parse(locator).address
    except LocatorError as e:
        raise NoMatchingSignerError(locator) from e
    for keypair in available:
        if keypair.public_key == address:
            return keypair
    raise NoMatchingSignerError(locator)


def match_approvals(
    pending: Iterable[PendingApproval], available_signers: Sequence[Keypair]
) -> list[Approval]:
    """Sign every pending approval with the keypair it names.

    Returns:
        One Approval per input, in input order.

    Raises:
        NoMatchingSignerError: If any approval names a signer not present in
            *available_signers*.  Nothing is returned in that case.
        ApprovalEncodingError: If an approval message is not valid base58.
    """
    approvals: list[Approval] = []
    for request in pending:
        keypair = _find_signer(request.signer, available_signers)
        try:
            message = base58.b58decode(request.message)
        except ValueError as e:
            raise ApprovalEncodingError(request.signer, "message") from e
        signature = keypair.sign(message)
        approvals.append(
            Approval(
                signer=request.signer,
                signature=base58.b58encode(signature).decode("ascii"),
            )
        )
        _LOG.debug("signed approval for %s", request.signer)
    return approvals


def load_transaction(wrapped: VersionedTransaction | str | bytes) -> VersionedTransaction:
    """Accept a transaction object, its raw bytes, or its base58 encoding."""
    if isinstance(wrapped, VersionedTransaction):
        return wrapped
    if isinstance(wrapped, str):
        wrapped = base58.b58decode(wrapped)
    return VersionedTransaction.from_bytes(bytes(wrapped))


def required_signers(tx: VersionedTransaction) -> list[str]:
    """Base58 addresses of the signers the message header requires, in order."""
    count = tx.message.header.num_required_signatures
    return [str(key) for key in tx.message.account_keys[:count]]


def _decode_signatures(approvals: Iterable[Approval]) -> dict[str, Signature]:
    by_address: dict[str, Signature] = {}
    for approval in approvals:
        address = SignerLocator.parse(approval.signer).address
        try:
            raw = base58.b58decode(approval.signature)
        except ValueError as e:
            raise ApprovalEncodingError(address, "signature") from e
        if len(raw) != SIGNATURE_LENGTH:
            raise InvalidSignatureLengthError(address, len(raw))
        by_address[address] = Signature.from_bytes(raw)
    return by_address


def assemble_signed_transaction(
    wrapped: VersionedTransaction | str | bytes,
    approvals: Iterable[Approval],
    policy: SignaturePolicy = SignaturePolicy.STRICT,
) -> VersionedTransaction:
    """Place approval signatures into the wrapped transaction's signer slots.

    Slot ``i`` receives the signature of the ``i``-th required signer.  The
    input transaction is left untouched; a new one is returned.

    Under ``STRICT`` every required signer must end up with a signature,
    either from *approvals* or already present in *wrapped*.  Under
    ``PARTIAL`` slots without an approval keep whatever *wrapped* carried.

    Raises:
        InvalidSignatureLengthError: An approval signature is not 64 bytes.
        ApprovalEncodingError: An approval signature is not valid base58.
        MissingSignaturesError: ``STRICT`` only; lists every unsatisfied signer.
    """
    tx = load_transaction(wrapped)
    policy = SignaturePolicy(policy)
    signers = required_signers(tx)
    by_address = _decode_signatures(approvals)

    slots = list(tx.signatures)
    if len(slots) < len(signers):
        slots.extend([_DEFAULT_SIGNATURE] * (len(signers) - len(slots)))

    if policy is SignaturePolicy.STRICT:
        missing = [
            address
            for index, address in enumerate(signers)
            if address not in by_address and slots[index] == _DEFAULT_SIGNATURE
        ]
        if missing:
            raise MissingSignaturesError(missing)

    for address in by_address:
        if address not in signers:
            _LOG.warning("approval for %s is not a required signer; ignored", address)

    for index, address in enumerate(signers):
        signature = by_address.get(address)
        if signature is not None:
            slots[index] = signature
            _LOG.info("slotted signature %d for %s", index + 1, _short(address))

    return VersionedTransaction.populate(tx.message, slots)
