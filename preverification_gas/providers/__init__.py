from .base import ChainProvider, Network, Provider
from .rpc import JsonRpcProvider, RpcConfig, get_rpc_provider

__all__ = [
    "ChainProvider",
    "Network",
    "Provider",
    "JsonRpcProvider",
    "RpcConfig",
    "get_rpc_provider",
]
