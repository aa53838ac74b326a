"""
Optimism-specific view of a chain provider.
"""

from __future__ import annotations

from .base import ChainProvider
from .contract import ContractView

# OP stack GasPriceOracle predeploy
GAS_PRICE_ORACLE_ADDRESS = "0x420000000000000000000000000000000000000F"


class OptimismProviderView:
    """Adds the L1 price queries an OP stack chain exposes through its predeploys."""

    def __init__(self, provider: ChainProvider) -> None:
        self.provider = provider
        self._oracle = ContractView(GAS_PRICE_ORACLE_ADDRESS, provider)

    async def get_l1_gas_price(self) -> int:
        """L1 base fee (wei) as last relayed to the L2."""
        (l1_base_fee,) = await self._oracle.call_function("l1BaseFee()", ["uint256"])
        return l1_base_fee


def as_l2_provider(provider: ChainProvider) -> OptimismProviderView:
    return OptimismProviderView(provider)
