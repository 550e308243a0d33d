from ..errors import MintWalletError


class ChainError(MintWalletError):
    pass


class RpcError(ChainError):
    def __init__(self, message: str, code: int | None = None, data=None):
        super().__init__(message)
        self.code = code
        self.data = data


class SimulationError(ChainError):
    """Raised when the chain rejects a dry run; nothing was broadcast."""

    def __init__(self, err, logs: list[str] | None = None):
        self.err = err
        self.logs = list(logs or [])
        message = f"Transaction simulation failed: {err}"
        if self.logs:
            message += "\n" + "\n".join(f"  {line}" for line in self.logs)
        super().__init__(message)


class TransactionFailedError(ChainError):
    def __init__(self, signature: str, err):
        super().__init__(f"Transaction {signature} failed: {err}")
        self.signature = signature
        self.err = err


class ExpiredError(ChainError):
    """Raised when the last valid block height passes before confirmation.

    The blockhash the transaction references is no longer eligible, so it
    can never land; it must be rebuilt and re-signed.
    """

    def __init__(self, signature: str, last_valid_block_height: int, block_height: int):
        super().__init__(
            f"Transaction {signature} expired: block height {block_height} "
            f"exceeded last valid block height {last_valid_block_height}"
        )
        self.signature = signature
        self.last_valid_block_height = last_valid_block_height
        self.block_height = block_height


class TransactionBuildError(ChainError):
    """Invalid parameters for a locally built transaction."""
