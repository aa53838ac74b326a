"""
Base preVerificationGas and L1 calldata cost calculations.

preVerificationGas is the overhead the EntryPoint cannot measure on-chain:
the calldata cost of the op inside the handleOps transaction plus its share
of the per-bundle and per-op overheads.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .overheads import (
    DEFAULT_GAS_OVERHEADS,
    L1_CALLDATA_OVERHEADS,
    GasOverheads,
    OverheadsLike,
    resolve_overheads,
)
from .packing import pack_stub_user_op
from .userop import UserOperation

WORD_SIZE = 32


def _gas(value: float) -> Decimal:
    # str() keeps 4.1 as 4.1 instead of its binary expansion
    return Decimal(str(value))


def calldata_cost(packed: bytes, overheads: GasOverheads) -> Decimal:
    zero_count = packed.count(0)
    return (
        zero_count * _gas(overheads.zero_byte)
        + (len(packed) - zero_count) * _gas(overheads.non_zero_byte)
    )


def word_count(length: int) -> int:
    return (length + WORD_SIZE - 1) // WORD_SIZE


def gas_from_packed(packed: bytes, overheads: GasOverheads) -> int:
    total = (
        calldata_cost(packed, overheads)
        + _gas(overheads.fixed) / _gas(overheads.bundle_size)
        + _gas(overheads.per_user_op)
        + _gas(overheads.per_user_op_word) * word_count(len(packed))
    )
    return int(total.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _calc_with_overheads(user_op: UserOperation, overheads: GasOverheads) -> int:
    return gas_from_packed(pack_stub_user_op(user_op, overheads), overheads)


def calc_pre_verification_gas(
    user_op: UserOperation,
    overheads: Optional[OverheadsLike] = None,
) -> int:
    """
    Calculate the base preVerificationGas of a UserOperation.

    Args:
        user_op: Filled UserOperation; only the signature and
            preVerificationGas itself may be missing.
        overheads: Partial overrides merged over DEFAULT_GAS_OVERHEADS.

    Raises:
        EncodingError: the op cannot be packed.
    """
    return _calc_with_overheads(user_op, resolve_overheads(overheads, DEFAULT_GAS_OVERHEADS))


def calc_calldata_consumed_gas_on_l1(user_op: UserOperation) -> int:
    """Gas the op's packed bytes would consume if posted to L1 as calldata."""
    return _calc_with_overheads(user_op, L1_CALLDATA_OVERHEADS)
