"""
L1 data fee strategies for rollups.

On a rollup the bundler also pays for posting the handleOps calldata to L1.
Each strategy converts that L1 cost into extra L2 gas, which is added to the
base preVerificationGas. Strategies are picked by chain id:

    strategy = strategy_for_chain(network.chain_id)
    extra_gas = await strategy.calc_l1_gas(user_op, provider, overheads)
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional

import structlog

from ..errors import DivisionHazardError, ProviderError
from ..providers.arbitrum import ArbGasInfo
from ..providers.base import ChainProvider
from ..providers.optimism import as_l2_provider
from .estimator import calc_calldata_consumed_gas_on_l1
from .overheads import DEFAULT_GAS_OVERHEADS, GasOverheads, OverheadsLike, resolve_overheads
from .packing import pack_stub_user_op
from .userop import UserOperation

logger = structlog.stdlib.get_logger(__name__)

# Arbitrum L2 submission wrapper bytes added on top of the packed op
ARBITRUM_USER_OP_SIZE_OVERHEAD = 140


class RollupFamily(str, Enum):
    NONE = "none"
    OPTIMISM = "optimism"
    ARBITRUM = "arbitrum"


CHAIN_ROLLUP_FAMILIES: Dict[int, RollupFamily] = {
    10: RollupFamily.OPTIMISM,  # optimism
    420: RollupFamily.OPTIMISM,  # optimism-goerli
    42161: RollupFamily.ARBITRUM,  # arbitrum
    421613: RollupFamily.ARBITRUM,  # arbitrum-goerli
}


def _checked_price(value: int, label: str) -> int:
    if value < 0:
        raise ProviderError(f"{label} must be non-negative, got {value}")
    return value


def _scale_to_l2_gas(strategy: str, numerator: int, l2_price: int) -> int:
    if l2_price == 0:
        raise DivisionHazardError(strategy, numerator)
    return numerator // l2_price


class L1FeeStrategy(ABC):
    family: RollupFamily

    @abstractmethod
    async def calc_l1_gas(
        self,
        user_op: UserOperation,
        provider: ChainProvider,
        overheads: Optional[OverheadsLike] = None,
    ) -> int:
        """Extra L2 gas covering the op's L1 data fee"""
        pass


class NoL1FeeStrategy(L1FeeStrategy):
    family = RollupFamily.NONE

    async def calc_l1_gas(
        self,
        user_op: UserOperation,
        provider: ChainProvider,
        overheads: Optional[OverheadsLike] = None,
    ) -> int:
        return 0


class OptimismL1FeeStrategy(L1FeeStrategy):
    family = RollupFamily.OPTIMISM

    async def calc_l1_gas(
        self,
        user_op: UserOperation,
        provider: ChainProvider,
        overheads: Optional[OverheadsLike] = None,
    ) -> int:
        l2_provider = as_l2_provider(provider)
        l1_base_price, l2_price = await asyncio.gather(
            l2_provider.get_l1_gas_price(),
            provider.get_gas_price(),
        )
        l1_base_price = _checked_price(l1_base_price, "L1 base gas price")
        l2_price = _checked_price(l2_price, "L2 gas price")

        gas_on_l1 = calc_calldata_consumed_gas_on_l1(user_op)
        extra_gas = _scale_to_l2_gas(self.family.value, gas_on_l1 * l1_base_price, l2_price)
        logger.debug(
            "optimism_l1_gas",
            l1_gas_price=l1_base_price,
            l2_gas_price=l2_price,
            gas_on_l1=gas_on_l1,
            extra_pre_verification_gas=extra_gas,
        )
        return extra_gas


class ArbitrumL1FeeStrategy(L1FeeStrategy):
    """
    Scales ArbGasInfo's L1 price per byte by the packed op size.

    The op is packed with this strategy's own overheads (protocol defaults)
    rather than the caller's, unless honor_overrides is set.
    """

    family = RollupFamily.ARBITRUM

    def __init__(
        self,
        overheads: GasOverheads = DEFAULT_GAS_OVERHEADS,
        honor_overrides: bool = False,
    ) -> None:
        self.overheads = overheads
        self.honor_overrides = honor_overrides

    async def calc_l1_gas(
        self,
        user_op: UserOperation,
        provider: ChainProvider,
        overheads: Optional[OverheadsLike] = None,
    ) -> int:
        prices = await ArbGasInfo(provider).get_prices_in_wei()
        l1_price_per_byte = _checked_price(prices.l1_price_per_byte, "L1 price per byte")
        l2_price = _checked_price(prices.l2_gas_price, "L2 gas price")

        effective = resolve_overheads(overheads, self.overheads) if self.honor_overrides else self.overheads
        packed = pack_stub_user_op(user_op, effective)
        user_op_size = ARBITRUM_USER_OP_SIZE_OVERHEAD + len(packed)

        fee_on_l1 = l1_price_per_byte * user_op_size
        extra_gas = _scale_to_l2_gas(self.family.value, fee_on_l1, l2_price)
        logger.debug(
            "arbitrum_l1_gas",
            l1_gas_price_per_byte=l1_price_per_byte,
            l2_gas_price=l2_price,
            fee_on_l1=fee_on_l1,
            extra_pre_verification_gas=extra_gas,
        )
        return extra_gas


_STRATEGIES: Dict[RollupFamily, L1FeeStrategy] = {
    RollupFamily.NONE: NoL1FeeStrategy(),
    RollupFamily.OPTIMISM: OptimismL1FeeStrategy(),
    RollupFamily.ARBITRUM: ArbitrumL1FeeStrategy(),
}


def rollup_family_for_chain(chain_id: int) -> RollupFamily:
    return CHAIN_ROLLUP_FAMILIES.get(chain_id, RollupFamily.NONE)


def strategy_for_chain(chain_id: int) -> L1FeeStrategy:
    return _STRATEGIES[rollup_family_for_chain(chain_id)]


async def calc_l1_gas_on_optimism(user_op: UserOperation, provider: ChainProvider) -> int:
    return await _STRATEGIES[RollupFamily.OPTIMISM].calc_l1_gas(user_op, provider)


async def calc_l1_gas_on_arbitrum(user_op: UserOperation, provider: ChainProvider) -> int:
    return await _STRATEGIES[RollupFamily.ARBITRUM].calc_l1_gas(user_op, provider)
