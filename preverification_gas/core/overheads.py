"""
Gas overhead configuration for preVerificationGas calculations.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class GasOverheads(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    fixed: float = Field(
        default=21000, ge=0,
        description="Fixed overhead for the entire handleOps bundle",
    )
    per_user_op: float = Field(
        default=18300, ge=0, alias="perUserOp",
        description="Per-UserOperation overhead, on top of the per-bundle share",
    )
    per_user_op_word: float = Field(
        default=4, ge=0, alias="perUserOpWord",
        description="Overhead per 32-byte word of the packed UserOperation",
    )
    zero_byte: float = Field(
        default=4, ge=0, alias="zeroByte",
        description="Calldata cost of a zero byte",
    )
    non_zero_byte: float = Field(
        default=16, ge=0, alias="nonZeroByte",
        description="Calldata cost of a non-zero byte",
    )
    bundle_size: float = Field(
        default=1, ge=1, alias="bundleSize",
        description="Expected bundle size, splits the fixed overhead between ops",
    )
    sig_size: int = Field(
        default=65, ge=0, alias="sigSize",
        description="Expected signature length when the UserOperation has none",
    )


OverheadsLike = Union[GasOverheads, Mapping[str, Any]]

DEFAULT_GAS_OVERHEADS = GasOverheads()

# Not overridable: gas consumed by posting the packed op to L1 as calldata.
L1_CALLDATA_OVERHEADS = GasOverheads(
    fixed=2100,
    per_user_op=0,
    per_user_op_word=4,
    zero_byte=4,
    non_zero_byte=16,
    bundle_size=1,
    sig_size=65,
)


def resolve_overheads(
    overrides: Optional[OverheadsLike] = None,
    base: GasOverheads = DEFAULT_GAS_OVERHEADS,
) -> GasOverheads:
    """Merge partial overrides over `base`.

    A GasOverheads instance only contributes the fields that were set
    explicitly; a mapping may use either snake_case or camelCase keys.
    """
    if overrides is None:
        return base
    if isinstance(overrides, GasOverheads):
        updates = overrides.model_dump(exclude_unset=True)
    else:
        updates = GasOverheads.model_validate(dict(overrides)).model_dump(exclude_unset=True)
    if not updates:
        return base
    return GasOverheads.model_validate({**base.model_dump(), **updates})
