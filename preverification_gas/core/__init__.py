"""
preVerificationGas estimation core

- calc_pre_verification_gas: base calldata + overhead model
- calc_calldata_consumed_gas_on_l1: L1 posting cost of the packed op
- OptimismL1FeeStrategy / ArbitrumL1FeeStrategy: rollup L1 data fee in L2 gas
- unified_calc_pre_verification_gas: base + the connected chain's L1 fee

Usage:
    from preverification_gas.core import UserOperation, unified_calc_pre_verification_gas
    from preverification_gas.providers import JsonRpcProvider, RpcConfig

    async with JsonRpcProvider(RpcConfig(rpc_url="https://mainnet.optimism.io")) as provider:
        gas = await unified_calc_pre_verification_gas(user_op, provider, {"bundleSize": 4})
"""

from .estimator import calc_calldata_consumed_gas_on_l1, calc_pre_verification_gas
from .overheads import (
    DEFAULT_GAS_OVERHEADS,
    L1_CALLDATA_OVERHEADS,
    GasOverheads,
    resolve_overheads,
)
from .packing import build_stub_user_op, pack_stub_user_op, pack_user_op
from .strategies import (
    ArbitrumL1FeeStrategy,
    L1FeeStrategy,
    NoL1FeeStrategy,
    OptimismL1FeeStrategy,
    RollupFamily,
    calc_l1_gas_on_arbitrum,
    calc_l1_gas_on_optimism,
    rollup_family_for_chain,
    strategy_for_chain,
)
from .unified import (
    PreVerificationGasEstimate,
    estimate_pre_verification_gas,
    unified_calc_pre_verification_gas,
)
from .userop import UserOperation

__all__ = [
    "calc_calldata_consumed_gas_on_l1",
    "calc_pre_verification_gas",
    "DEFAULT_GAS_OVERHEADS",
    "L1_CALLDATA_OVERHEADS",
    "GasOverheads",
    "resolve_overheads",
    "build_stub_user_op",
    "pack_stub_user_op",
    "pack_user_op",
    "ArbitrumL1FeeStrategy",
    "L1FeeStrategy",
    "NoL1FeeStrategy",
    "OptimismL1FeeStrategy",
    "RollupFamily",
    "calc_l1_gas_on_arbitrum",
    "calc_l1_gas_on_optimism",
    "rollup_family_for_chain",
    "strategy_for_chain",
    "PreVerificationGasEstimate",
    "estimate_pre_verification_gas",
    "unified_calc_pre_verification_gas",
    "UserOperation",
]
