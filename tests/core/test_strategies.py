"""
Tests for the rollup L1 data fee strategies.
"""

import asyncio

import pytest

from preverification_gas.core.estimator import calc_calldata_consumed_gas_on_l1
from preverification_gas.core.strategies import (
    ArbitrumL1FeeStrategy,
    NoL1FeeStrategy,
    OptimismL1FeeStrategy,
    RollupFamily,
    calc_l1_gas_on_arbitrum,
    calc_l1_gas_on_optimism,
    rollup_family_for_chain,
    strategy_for_chain,
)
from preverification_gas.errors import DivisionHazardError, ProviderError
from preverification_gas.providers.arbitrum import ARB_GAS_INFO_ADDRESS
from preverification_gas.providers.base import Network
from preverification_gas.providers.contract import function_selector
from preverification_gas.providers.optimism import GAS_PRICE_ORACLE_ADDRESS


@pytest.mark.asyncio
async def test_optimism_scales_l1_gas_by_price_ratio(user_op, make_provider):
    provider = make_provider(chain_id=10, network_name="optimism", l1_base_fee=1000, gas_price=100)

    extra = await OptimismL1FeeStrategy().calc_l1_gas(user_op, provider)

    gas_on_l1 = calc_calldata_consumed_gas_on_l1(user_op)
    assert gas_on_l1 == 5628
    assert extra == gas_on_l1 * 1000 // 100 == 56280
    assert provider.calls[0][0] == GAS_PRICE_ORACLE_ADDRESS
    assert provider.calls[0][1] == function_selector("l1BaseFee()")


@pytest.mark.asyncio
async def test_optimism_result_floors(user_op, make_provider):
    provider = make_provider(l1_base_fee=1, gas_price=7)

    extra = await calc_l1_gas_on_optimism(user_op, provider)

    assert extra == 5628 // 7


@pytest.mark.asyncio
async def test_optimism_expensive_l2_shrinks_to_zero(user_op, make_provider):
    provider = make_provider(l1_base_fee=1, gas_price=10**12)

    assert await OptimismL1FeeStrategy().calc_l1_gas(user_op, provider) == 0


@pytest.mark.asyncio
async def test_optimism_zero_l2_price_is_a_hazard(user_op, make_provider):
    provider = make_provider(l1_base_fee=1000, gas_price=0)

    with pytest.raises(DivisionHazardError):
        await OptimismL1FeeStrategy().calc_l1_gas(user_op, provider)


@pytest.mark.asyncio
async def test_optimism_negative_price_rejected(user_op, make_provider):
    provider = make_provider(gas_price=-1)

    with pytest.raises(ProviderError):
        await OptimismL1FeeStrategy().calc_l1_gas(user_op, provider)


@pytest.mark.asyncio
async def test_optimism_queries_prices_concurrently(user_op, make_provider):
    provider = make_provider()
    l2_queried = asyncio.Event()
    original_call = provider.call

    async def call(to, data, block="latest"):
        # blocks until the L2 price query has been issued as well
        await l2_queried.wait()
        return await original_call(to, data, block)

    async def get_gas_price():
        l2_queried.set()
        return 100

    provider.call = call
    provider.get_gas_price = get_gas_price

    extra = await asyncio.wait_for(OptimismL1FeeStrategy().calc_l1_gas(user_op, provider), timeout=2)

    assert extra == 56280


@pytest.mark.asyncio
async def test_arbitrum_uses_price_per_byte_and_packed_size(user_op, make_provider):
    provider = make_provider(chain_id=42161, arb_prices=(11, 2000, 22, 33, 44, 1000))

    extra = await ArbitrumL1FeeStrategy().calc_l1_gas(user_op, provider)

    # (140 + 576 packed bytes) * 2000 wei per byte / 1000 wei per gas
    assert extra == (140 + 576) * 2000 // 1000 == 1432
    assert provider.calls == [(ARB_GAS_INFO_ADDRESS, function_selector("getPricesInWei()"))]


@pytest.mark.asyncio
async def test_arbitrum_ignores_caller_overheads_by_default(user_op, make_provider):
    provider = make_provider()

    default = await calc_l1_gas_on_arbitrum(user_op, provider)
    overridden = await ArbitrumL1FeeStrategy().calc_l1_gas(user_op, provider, {"sigSize": 0})

    assert overridden == default


@pytest.mark.asyncio
async def test_arbitrum_can_honor_overrides(user_op, make_provider):
    provider = make_provider(arb_prices=(0, 1000, 0, 0, 0, 1000))

    extra = await ArbitrumL1FeeStrategy(honor_overrides=True).calc_l1_gas(user_op, provider, {"sigSize": 0})

    # no stub signature: 96 fewer packed bytes
    assert extra == 140 + 576 - 96


@pytest.mark.asyncio
async def test_arbitrum_zero_l2_price_is_a_hazard(user_op, make_provider):
    provider = make_provider(arb_prices=(0, 2000, 0, 0, 0, 0))

    with pytest.raises(DivisionHazardError) as excinfo:
        await ArbitrumL1FeeStrategy().calc_l1_gas(user_op, provider)

    assert excinfo.value.strategy == "arbitrum"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "l1_price,l2_price",
    [(0, 1), (1, 1), (5, 3), (10**9, 10**18), (10**18, 1)],
)
async def test_strategies_never_return_negative(user_op, make_provider, l1_price, l2_price):
    provider = make_provider(
        l1_base_fee=l1_price,
        gas_price=l2_price,
        arb_prices=(0, l1_price, 0, 0, 0, l2_price),
    )

    assert await OptimismL1FeeStrategy().calc_l1_gas(user_op, provider) >= 0
    assert await ArbitrumL1FeeStrategy().calc_l1_gas(user_op, provider) >= 0


@pytest.mark.asyncio
async def test_no_l1_fee_strategy_returns_zero(user_op, make_provider):
    assert await NoL1FeeStrategy().calc_l1_gas(user_op, make_provider()) == 0


@pytest.mark.parametrize(
    "chain_id,family",
    [
        (10, RollupFamily.OPTIMISM),
        (420, RollupFamily.OPTIMISM),
        (42161, RollupFamily.ARBITRUM),
        (421613, RollupFamily.ARBITRUM),
        (1, RollupFamily.NONE),
        (8453, RollupFamily.NONE),
    ],
)
def test_chain_lookup(chain_id, family):
    assert rollup_family_for_chain(chain_id) is family
    assert strategy_for_chain(chain_id).family is family


def test_network_descriptor_is_immutable():
    network = Network(chain_id=10, name="optimism")

    with pytest.raises(AttributeError):
        network.chain_id = 1
