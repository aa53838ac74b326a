"""
Minimal read-only contract bindings over a ChainProvider.
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak

from ..errors import ProviderError
from .base import ChainProvider


def function_selector(signature: str) -> str:
    selector = keccak(text=signature)[:4].hex()
    return f"0x{selector}"


def encode_call(signature: str, arg_types: Sequence[str] = (), args: Sequence[Any] = ()) -> str:
    call_data = function_selector(signature)
    if arg_types:
        call_data += encode(list(arg_types), list(args)).hex()
    return call_data


class ContractView:
    """Bound address + provider for view-function calls."""

    def __init__(self, address: str, provider: ChainProvider) -> None:
        self.address = address
        self.provider = provider

    async def call_function(
        self,
        signature: str,
        output_types: Sequence[str],
        arg_types: Sequence[str] = (),
        args: Sequence[Any] = (),
    ) -> Tuple[Any, ...]:
        raw = await self.provider.call(self.address, encode_call(signature, arg_types, args))
        if not raw:
            raise ProviderError(f"{signature} at {self.address} returned no data")
        try:
            return decode(list(output_types), raw)
        except DecodingError as exc:
            raise ProviderError(f"Could not decode {signature} result from {self.address}") from exc
