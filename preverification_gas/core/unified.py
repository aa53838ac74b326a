"""
preVerificationGas including the L1 data fee of the connected chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import structlog

from ..providers.base import ChainProvider
from .estimator import calc_pre_verification_gas
from .overheads import OverheadsLike
from .strategies import strategy_for_chain
from .userop import UserOperation

logger = structlog.stdlib.get_logger(__name__)


@dataclass
class PreVerificationGasEstimate:
    base_pre_verification_gas: int
    l1_gas: int
    chain_id: int
    network: str
    rollup_family: str

    @property
    def pre_verification_gas(self) -> int:
        return self.base_pre_verification_gas + self.l1_gas

    def to_dict(self) -> Dict[str, Any]:
        return {
            "preVerificationGas": self.pre_verification_gas,
            "basePreVerificationGas": self.base_pre_verification_gas,
            "l1Gas": self.l1_gas,
            "chainId": self.chain_id,
            "network": self.network,
            "rollupFamily": self.rollup_family,
        }


async def estimate_pre_verification_gas(
    user_op: UserOperation,
    provider: ChainProvider,
    overheads: Optional[OverheadsLike] = None,
) -> PreVerificationGasEstimate:
    network = await provider.get_network()
    base = calc_pre_verification_gas(user_op, overheads)

    strategy = strategy_for_chain(network.chain_id)
    l1_gas = await strategy.calc_l1_gas(user_op, provider, overheads)

    logger.info(
        "pre_verification_gas_estimated",
        chain_id=network.chain_id,
        network=network.name,
        rollup_family=strategy.family.value,
        base_pre_verification_gas=base,
        l1_gas=l1_gas,
    )
    return PreVerificationGasEstimate(
        base_pre_verification_gas=base,
        l1_gas=l1_gas,
        chain_id=network.chain_id,
        network=network.name,
        rollup_family=strategy.family.value,
    )


async def unified_calc_pre_verification_gas(
    user_op: UserOperation,
    provider: ChainProvider,
    overheads: Optional[OverheadsLike] = None,
) -> int:
    """
    Calculate preVerificationGas for the provider's chain.

    The base estimate (calc_pre_verification_gas) plus, on Optimism and
    Arbitrum, the extra gas covering the op's L1 calldata cost. Chains are
    matched by chain id only; unknown chains get the base estimate.
    """
    estimate = await estimate_pre_verification_gas(user_op, provider, overheads)
    return estimate.pre_verification_gas
