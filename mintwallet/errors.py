"""Error categories for wallet, gateway and co-signing failures."""


class MintWalletError(Exception):
    """Base exception for all mintwallet errors."""


class ConfigError(MintWalletError):
    """Missing or invalid configuration value."""


class KeypairError(MintWalletError):
    """Keypair loading, decoding or generation error."""


class SignatureError(MintWalletError):
    """Signature verification failed."""


class LocatorError(MintWalletError):
    """Signer locator string could not be parsed."""


class NoMatchingSignerError(MintWalletError):
    """A pending approval names a signer no local keypair can satisfy."""

    def __init__(self, locator: str):
        super().__init__(f"No matching keypair found for required signer: {locator}")
        self.locator = locator


class InvalidSignatureLengthError(MintWalletError):
    """A signature does not decode to exactly 64 bytes."""

    def __init__(self, signer: str, length: int):
        super().__init__(f"Invalid signature length for {signer}: {length} bytes")
        self.signer = signer
        self.length = length


class MissingSignaturesError(MintWalletError):
    """One or more required on-chain signers have no signature."""

    def __init__(self, missing: list[str]):
        super().__init__(f"Missing signatures for required signers: {', '.join(missing)}")
        self.missing = list(missing)


class GatewayError(MintWalletError):
    """Wallet service transport or API error."""

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class ApprovalEncodingError(MintWalletError):
    """An approval message or signature is not valid base58."""

    def __init__(self, signer: str, field: str):
        super().__init__(f"Approval {field} for {signer} is not valid base58")
        self.signer = signer
        self.field = field
