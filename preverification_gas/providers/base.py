from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Network:
    """Chain descriptor as reported by the provider."""
    chain_id: int
    name: str


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: int = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class ChainProvider(Provider):
    """Read-only chain access needed for gas estimation"""

    @abstractmethod
    async def get_network(self) -> Network:
        """Return the chain id and its well-known name"""
        pass

    @abstractmethod
    async def get_gas_price(self) -> int:
        """Current gas price in wei (eth_gasPrice)"""
        pass

    @abstractmethod
    async def call(self, to: str, data: str, block: str = "latest") -> bytes:
        """Execute a read-only contract call (eth_call) and return the raw result"""
        pass
