"""
UserOperation ABI packing and the placeholder op used for gas estimation.
"""

from __future__ import annotations

from typing import Any, List

from eth_abi import encode
from eth_abi.exceptions import EncodingError as AbiEncodingError
from eth_utils import is_hex_address, keccak, to_canonical_address

from ..errors import EncodingError
from .overheads import DEFAULT_GAS_OVERHEADS, GasOverheads
from .userop import RPC_FIELD_NAMES, UserOperation

# preVerificationGas stand-in; any value of the same width leaves the packed
# length unchanged.
DUMMY_PRE_VERIFICATION_GAS = 21000
DUMMY_SIGNATURE_BYTE = 0x01

PACKED_TYPES = [
    "address",  # sender
    "uint256",  # nonce
    "bytes",  # initCode
    "bytes",  # callData
    "uint256",  # callGasLimit
    "uint256",  # verificationGasLimit
    "uint256",  # preVerificationGas
    "uint256",  # maxFeePerGas
    "uint256",  # maxPriorityFeePerGas
    "bytes",  # paymasterAndData
    "bytes",  # signature
]

SIGNING_TYPES = [
    "address",
    "uint256",
    "bytes32",
    "bytes32",
    "uint256",
    "uint256",
    "uint256",
    "uint256",
    "uint256",
    "bytes32",
]

_BYTES_FIELDS = ("init_code", "call_data", "paymaster_and_data", "signature")


def _hex_to_bytes(value: Any, field_name: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise EncodingError(f"{field_name}: expected hex string, got {type(value).__name__}")
    hex_data = value[2:] if value.startswith("0x") else value
    if len(hex_data) % 2 != 0:
        raise EncodingError(f"{field_name}: byte data must have an even-length hex string")
    try:
        return bytes.fromhex(hex_data)
    except ValueError as exc:
        raise EncodingError(f"{field_name}: invalid hex data") from exc


def _packing_values(op: UserOperation) -> List[Any]:
    missing = [RPC_FIELD_NAMES[name] for name in RPC_FIELD_NAMES if getattr(op, name) is None]
    if missing:
        raise EncodingError(f"UserOperation is missing fields required for packing: {', '.join(missing)}")
    if not is_hex_address(op.sender):
        raise EncodingError(f"sender: invalid address {op.sender!r}")

    values: List[Any] = []
    for name in RPC_FIELD_NAMES:
        value = getattr(op, name)
        if name in _BYTES_FIELDS:
            value = _hex_to_bytes(value, RPC_FIELD_NAMES[name])
        elif name == "sender":
            value = to_canonical_address(value)
        else:
            if isinstance(value, bool) or not isinstance(value, int):
                raise EncodingError(f"{RPC_FIELD_NAMES[name]}: expected an integer")
            if value < 0 or value >= 2**256:
                raise EncodingError(f"{RPC_FIELD_NAMES[name]}: value out of uint256 range")
        values.append(value)
    return values


def pack_user_op(op: UserOperation, for_signature: bool = True) -> bytes:
    """
    ABI-encode a complete UserOperation.

    With for_signature=True the dynamic fields are replaced by their keccak256
    hashes and the signature is left out (the userOpHash preimage). With
    for_signature=False every field, signature included, is encoded as-is,
    which is what the calldata cost is computed from.
    """
    values = _packing_values(op)
    if for_signature:
        (sender, nonce, init_code, call_data, call_gas, verification_gas,
         pre_verification_gas, max_fee, max_priority_fee, paymaster_and_data, _) = values
        types = SIGNING_TYPES
        values = [
            sender, nonce, keccak(init_code), keccak(call_data),
            call_gas, verification_gas, pre_verification_gas, max_fee, max_priority_fee,
            keccak(paymaster_and_data),
        ]
    else:
        types = PACKED_TYPES
    try:
        return encode(types, values)
    except (AbiEncodingError, TypeError, ValueError) as exc:
        raise EncodingError(f"Failed to ABI-encode UserOperation: {exc}") from exc


def dummy_signature(size: int) -> str:
    return "0x" + bytes([DUMMY_SIGNATURE_BYTE] * size).hex()


def build_stub_user_op(
    op: UserOperation,
    overheads: GasOverheads = DEFAULT_GAS_OVERHEADS,
) -> UserOperation:
    """
    Placeholder op for cost estimation.

    Only fields the caller left empty are filled: preVerificationGas with
    21000 and the signature with sig_size bytes of 0x01.
    """
    return op.with_defaults(
        pre_verification_gas=DUMMY_PRE_VERIFICATION_GAS,
        signature=dummy_signature(overheads.sig_size),
    )


def pack_stub_user_op(
    op: UserOperation,
    overheads: GasOverheads = DEFAULT_GAS_OVERHEADS,
) -> bytes:
    return pack_user_op(build_stub_user_op(op, overheads), for_signature=False)
