"""Ed25519 keypairs in Solana form: generate, load, save, sign, verify."""

import json
from pathlib import Path

import base58
from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from .errors import KeypairError, SignatureError


class Keypair:
    """A locally-held ed25519 signing key addressed by its base58 public key."""

    def __init__(self, signing_key: SigningKey):
        self._signing_key = signing_key

    def __repr__(self) -> str:
        return f"Keypair({self.public_key})"

    @classmethod
    def generate(cls) -> "Keypair":
        """Generate a new random keypair (in-memory only)."""
        return cls(SigningKey.generate())

    @classmethod
    def from_seed(cls, seed: bytes) -> "Keypair":
        if len(seed) != 32:
            raise KeypairError(f"Invalid seed: expected 32 bytes, got {len(seed)}")
        return cls(SigningKey(seed))

    @classmethod
    def from_secret_key(cls, secret: bytes) -> "Keypair":
        """Build from a 64-byte Solana secret key (seed followed by public key).

        Raises:
            KeypairError: If the length is wrong or the public half does not
                belong to the seed.
        """
        if len(secret) != 64:
            raise KeypairError(
                f"Invalid secret key: expected 64 bytes, got {len(secret)}"
            )
        keypair = cls.from_seed(secret[:32])
        if keypair.public_key_bytes != secret[32:]:
            raise KeypairError("Secret key public half does not match its seed")
        return keypair

    @classmethod
    def from_base58_secret(cls, value: str) -> "Keypair":
        try:
            secret = base58.b58decode(value.strip())
        except ValueError as e:
            raise KeypairError(f"Secret key is not valid base58: {e}") from e
        return cls.from_secret_key(secret)

    @classmethod
    def load(cls, path: str) -> "Keypair":
        """Load a keypair file in Solana CLI format (JSON array of 64 ints)."""
        p = Path(path)
        if not p.exists():
            raise KeypairError(f"Keypair file not found: {path}")
        try:
            raw = json.loads(p.read_text())
            secret = bytes(raw)
        except (ValueError, TypeError) as e:
            raise KeypairError(f"Invalid keypair file {path}: {e}") from e
        return cls.from_secret_key(secret)

    def save(self, path: str) -> None:
        """Write the keypair in Solana CLI format. Creates parent dirs."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(list(self.secret_key_bytes)))

    @property
    def public_key_bytes(self) -> bytes:
        """Raw 32-byte ed25519 public key."""
        return bytes(self._signing_key.verify_key)

    @property
    def public_key(self) -> str:
        """Base58-encoded public key (the Solana address)."""
        return base58.b58encode(self.public_key_bytes).decode("ascii")

    @property
    def secret_key_bytes(self) -> bytes:
        """64-byte Solana secret key: seed followed by public key."""
        return bytes(self._signing_key) + self.public_key_bytes

    def to_base58_secret(self) -> str:
        return base58.b58encode(self.secret_key_bytes).decode("ascii")

    def sign(self, message: bytes) -> bytes:
        """Sign raw message bytes, returning the 64-byte detached signature."""
        return self._signing_key.sign(message).signature

    @staticmethod
    def verify(public_key: str | bytes, signature: bytes, message: bytes) -> None:
        """Verify a detached ed25519 signature over message bytes.

        Args:
            public_key: Base58 address or raw 32-byte public key.

        Raises:
            SignatureError: If verification fails.
        """
        try:
            if isinstance(public_key, str):
                public_key = base58.b58decode(public_key)
            VerifyKey(public_key).verify(message, signature)
        except BadSignatureError as e:
            raise SignatureError(f"Signature verification failed: {e}") from e
        except Exception as e:
            raise SignatureError(f"Verification error: {e}") from e
