"""
ERC-4337 UserOperation model.

Every field is optional: callers usually ask for preVerificationGas before the
operation is complete (the signature and preVerificationGas itself are the
typical gaps). Integers are raw units (wei / gas units); byte fields are
0x-prefixed hex strings.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from ..errors import EncodingError

# snake_case attribute -> JSON-RPC (camelCase) key, in packing order
RPC_FIELD_NAMES: Dict[str, str] = {
    "sender": "sender",
    "nonce": "nonce",
    "init_code": "initCode",
    "call_data": "callData",
    "call_gas_limit": "callGasLimit",
    "verification_gas_limit": "verificationGasLimit",
    "pre_verification_gas": "preVerificationGas",
    "max_fee_per_gas": "maxFeePerGas",
    "max_priority_fee_per_gas": "maxPriorityFeePerGas",
    "paymaster_and_data": "paymasterAndData",
    "signature": "signature",
}

QUANTITY_FIELDS = frozenset({
    "nonce",
    "call_gas_limit",
    "verification_gas_limit",
    "pre_verification_gas",
    "max_fee_per_gas",
    "max_priority_fee_per_gas",
})


def _to_hex(value: int) -> str:
    return hex(value)


def parse_quantity(value: Any, field_name: str = "value") -> int:
    """Parse an RPC quantity given as int, hex string or decimal string."""
    if isinstance(value, bool):
        raise EncodingError(f"{field_name}: expected an integer, got a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if text.lower().startswith("0x"):
                return int(text, 16) if len(text) > 2 else 0
            return int(text, 10)
        except ValueError as exc:
            raise EncodingError(f"{field_name}: invalid quantity {value!r}") from exc
    raise EncodingError(f"{field_name}: expected an integer, got {type(value).__name__}")


@dataclass
class UserOperation:
    """Partial ERC-4337 (EntryPoint v0.6) UserOperation."""
    sender: Optional[str] = None
    nonce: Optional[int] = None
    init_code: Optional[str] = None
    call_data: Optional[str] = None
    call_gas_limit: Optional[int] = None
    verification_gas_limit: Optional[int] = None
    pre_verification_gas: Optional[int] = None
    max_fee_per_gas: Optional[int] = None
    max_priority_fee_per_gas: Optional[int] = None
    paymaster_and_data: Optional[str] = None
    signature: Optional[str] = None

    @classmethod
    def from_rpc(cls, data: Dict[str, Any]) -> "UserOperation":
        """Build from the eth_sendUserOperation shape; snake_case keys work too."""
        if not isinstance(data, Mapping):
            raise EncodingError(f"UserOperation must be a JSON object, got {type(data).__name__}")
        values: Dict[str, Any] = {}
        for attr, rpc_key in RPC_FIELD_NAMES.items():
            raw = data.get(rpc_key, data.get(attr))
            if raw is None:
                continue
            values[attr] = parse_quantity(raw, rpc_key) if attr in QUANTITY_FIELDS else raw
        return cls(**values)

    def to_rpc_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for attr, rpc_key in RPC_FIELD_NAMES.items():
            value = getattr(self, attr)
            if value is None:
                continue
            result[rpc_key] = _to_hex(value) if attr in QUANTITY_FIELDS else value
        return result

    def with_defaults(self, **defaults: Any) -> "UserOperation":
        """Copy with `defaults` filled in wherever this operation has no value."""
        missing = {
            name: value
            for name, value in defaults.items()
            if getattr(self, name) is None
        }
        return replace(self, **missing)
