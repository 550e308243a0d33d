"""Parsing of wallet-service signer locators.

The wallet service names signers with colon-separated locators whose
segment order varies by endpoint, e.g. ``external-wallet:<address>`` or
``solana:<address>:external-wallet``.  Exactly one segment is the signer's
base58 public key; the rest describe chain and signer kind.
"""

import re
from dataclasses import dataclass

import base58

from .errors import LocatorError

_BASE58_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")
_KNOWN_CHAINS = frozenset({"solana"})


def is_public_key(value: str) -> bool:
    """True when *value* is a base58 string decoding to 32 bytes."""
    if not _BASE58_RE.match(value):
        return False
    try:
        return len(base58.b58decode(value)) == 32
    except ValueError:
        return False


@dataclass(frozen=True)
class SignerLocator:
    address: str
    chain: str | None = None
    kind: str | None = None

    @classmethod
    def parse(cls, locator: str) -> "SignerLocator":
        """Split a locator into address, chain and kind.

        Raises:
            LocatorError: If no segment is a public key, or more than one is.
        """
        if not isinstance(locator, str) or not locator:
            raise LocatorError("Signer locator must be a non-empty string")
        segments = locator.split(":")
        addresses = [s for s in segments if is_public_key(s)]
        if not addresses:
            raise LocatorError(f"No public key in signer locator: {locator}")
        if len(addresses) > 1:
            raise LocatorError(f"Ambiguous signer locator: {locator}")

        chain = None
        kind = None
        for segment in segments:
            if segment == addresses[0] or not segment:
                continue
            if segment in _KNOWN_CHAINS and chain is None:
                chain = segment
            elif kind is None:
                kind = segment
        return cls(address=addresses[0], chain=chain, kind=kind)

    def __str__(self) -> str:
        parts = [p for p in (self.chain, self.address, self.kind) if p]
        return ":".join(parts)
