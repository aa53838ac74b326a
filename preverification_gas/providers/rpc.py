"""
JSON-RPC chain provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
import structlog

from .base import ChainProvider, Network
from .. import config as app_config
from ..errors import ProviderError

logger = structlog.stdlib.get_logger(__name__)

# chain id -> name, following the network names ethers reports
KNOWN_NETWORKS: Dict[int, str] = {
    1: "homestead",
    5: "goerli",
    10: "optimism",
    137: "matic",
    420: "optimism-goerli",
    42161: "arbitrum",
    421613: "arbitrum-goerli",
    11155111: "sepolia",
}


def network_name(chain_id: int) -> str:
    return KNOWN_NETWORKS.get(chain_id, "unknown")


def _parse_hex_result(value: Any, method: str) -> int:
    if not isinstance(value, str) or not value.startswith("0x"):
        raise ProviderError(f"Invalid {method} result: {value!r}")
    try:
        return int(value, 16)
    except ValueError as exc:
        raise ProviderError(f"Invalid {method} result: {value!r}") from exc


@dataclass
class RpcConfig:
    rpc_url: str
    timeout_s: int = 20


class JsonRpcProvider(ChainProvider):
    name = "rpc"

    def __init__(
        self,
        config: Optional[RpcConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config or RpcConfig(
            rpc_url=app_config.settings.rpc_url,
            timeout_s=app_config.settings.request_timeout_seconds,
        )
        self.timeout_s = self._config.timeout_s
        self._client = client
        self._request_id = 0

    async def ready(self) -> bool:
        return bool(self._config.rpc_url)

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {"status": "disabled", "reason": "RPC URL not configured"}

        try:
            network = await self.get_network()
            return {"status": "healthy", "chainId": network.chain_id, "network": network.name}
        except ProviderError as exc:
            return {"status": "error", "reason": str(exc)}

    async def get_network(self) -> Network:
        result = await self._rpc_call("eth_chainId", [])
        chain_id = _parse_hex_result(result, "eth_chainId")
        return Network(chain_id=chain_id, name=network_name(chain_id))

    async def get_gas_price(self) -> int:
        result = await self._rpc_call("eth_gasPrice", [])
        return _parse_hex_result(result, "eth_gasPrice")

    async def call(self, to: str, data: str, block: str = "latest") -> bytes:
        result = await self._rpc_call("eth_call", [{"to": to, "data": data}, block])
        if not isinstance(result, str) or not result.startswith("0x"):
            raise ProviderError(f"Invalid eth_call result: {result!r}")
        try:
            return bytes.fromhex(result[2:])
        except ValueError as exc:
            raise ProviderError("eth_call returned malformed hex") from exc

    async def aclose(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "JsonRpcProvider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _rpc_call(self, method: str, params: list[Any]) -> Any:
        if not self._config.rpc_url:
            raise ProviderError("RPC provider is not configured")
        if not self._client or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout_s)

        self._request_id += 1
        try:
            response = await self._client.post(
                self._config.rpc_url,
                json={"jsonrpc": "2.0", "id": self._request_id, "method": method, "params": params},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("rpc_request_failed", method=method, error=str(exc))
            raise ProviderError(f"{method} request failed: {exc}") from exc
        except ValueError as exc:
            raise ProviderError(f"{method} returned a non-JSON response") from exc

        if not isinstance(payload, dict):
            raise ProviderError(f"{method} returned an unexpected payload")
        if "error" in payload:
            raise ProviderError(f"{method} error: {payload['error']}")
        return payload.get("result")


_rpc_provider: Optional[JsonRpcProvider] = None


def get_rpc_provider() -> JsonRpcProvider:
    global _rpc_provider
    if _rpc_provider is None:
        _rpc_provider = JsonRpcProvider()
    return _rpc_provider
