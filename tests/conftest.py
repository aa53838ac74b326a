"""
Shared fixtures: a scripted chain provider and a fixed UserOperation.
"""

from typing import Any, Dict, List, Sequence, Tuple

import pytest
from eth_abi import encode

from preverification_gas.core.userop import UserOperation
from preverification_gas.errors import ProviderError
from preverification_gas.providers.arbitrum import ARB_GAS_INFO_ADDRESS
from preverification_gas.providers.base import ChainProvider, Network
from preverification_gas.providers.optimism import GAS_PRICE_ORACLE_ADDRESS

SENDER = "0x1111111111111111111111111111111111111111"


class FakeChainProvider(ChainProvider):
    """Chain provider answering from fixed prices; records eth_call targets."""

    name = "fake"

    def __init__(
        self,
        chain_id: int = 1,
        network_name: str = "homestead",
        gas_price: int = 100,
        l1_base_fee: int = 1000,
        arb_prices: Sequence[int] = (0, 2000, 0, 0, 0, 1000),
    ) -> None:
        self.network = Network(chain_id=chain_id, name=network_name)
        self.gas_price = gas_price
        self.l1_base_fee = l1_base_fee
        self.arb_prices = list(arb_prices)
        self.calls: List[Tuple[str, str]] = []

    async def ready(self) -> bool:
        return True

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "chainId": self.network.chain_id}

    async def get_network(self) -> Network:
        return self.network

    async def get_gas_price(self) -> int:
        return self.gas_price

    async def call(self, to: str, data: str, block: str = "latest") -> bytes:
        self.calls.append((to, data))
        if to.lower() == GAS_PRICE_ORACLE_ADDRESS.lower():
            return encode(["uint256"], [self.l1_base_fee])
        if to.lower() == ARB_GAS_INFO_ADDRESS.lower():
            return encode(["uint256"] * 6, self.arb_prices)
        raise ProviderError(f"unexpected eth_call to {to}")


@pytest.fixture
def make_provider():
    def _make(**kwargs: Any) -> FakeChainProvider:
        return FakeChainProvider(**kwargs)
    return _make


@pytest.fixture
def user_op() -> UserOperation:
    """Op with empty initCode/callData/paymasterAndData, zero limits and fees,
    and no signature or preVerificationGas. Packs to 576 bytes."""
    return UserOperation(
        sender=SENDER,
        nonce=0,
        init_code="0x",
        call_data="0x",
        call_gas_limit=0,
        verification_gas_limit=0,
        max_fee_per_gas=0,
        max_priority_fee_per_gas=0,
        paymaster_and_data="0x",
    )


@pytest.fixture
def rpc_user_op() -> Dict[str, Any]:
    return {
        "sender": SENDER,
        "nonce": "0x0",
        "initCode": "0x",
        "callData": "0x",
        "callGasLimit": "0x0",
        "verificationGasLimit": "0x0",
        "maxFeePerGas": "0x0",
        "maxPriorityFeePerGas": "0x0",
        "paymasterAndData": "0x",
    }
