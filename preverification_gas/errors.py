"""
Error taxonomy for preVerificationGas estimation.

Nothing in the estimation core recovers from these; they are raised to the
caller, and the API/CLI surfaces decide how to report them.
"""


class PreVerificationGasError(Exception):
    """Base class for estimation failures."""
    pass


class EncodingError(PreVerificationGasError, ValueError):
    """The UserOperation could not be ABI-packed."""
    pass


class ProviderError(PreVerificationGasError):
    """An RPC query (network, gas price, eth_call) failed or returned garbage."""
    pass


class DivisionHazardError(PreVerificationGasError, ZeroDivisionError):
    """The provider reported an L2 gas price of zero."""

    def __init__(self, strategy: str, numerator: int) -> None:
        self.strategy = strategy
        self.numerator = numerator
        super().__init__(
            f"{strategy}: L2 gas price is zero, cannot scale L1 cost {numerator} into L2 gas"
        )
