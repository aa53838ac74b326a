"""
Arbitrum ArbGasInfo precompile binding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .base import ChainProvider
from .contract import ContractView

ARB_GAS_INFO_ADDRESS = "0x000000000000000000000000000000000000006C"


@dataclass(frozen=True)
class ArbPricesInWei:
    """getPricesInWei() result, in the precompile's return order."""
    per_l2_tx: int
    per_l1_calldata_byte: int
    per_storage_allocation: int
    per_arbgas_base: int
    per_arbgas_congestion: int
    per_arbgas_total: int

    @classmethod
    def from_tuple(cls, values: Tuple[int, ...]) -> "ArbPricesInWei":
        return cls(*values)

    @property
    def l1_price_per_byte(self) -> int:
        return self.per_l1_calldata_byte

    @property
    def l2_gas_price(self) -> int:
        return self.per_arbgas_total


class ArbGasInfo:
    def __init__(self, provider: ChainProvider, address: str = ARB_GAS_INFO_ADDRESS) -> None:
        self._contract = ContractView(address, provider)

    async def get_prices_in_wei(self) -> ArbPricesInWei:
        values = await self._contract.call_function("getPricesInWei()", ["uint256"] * 6)
        return ArbPricesInWei.from_tuple(values)
