from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException

from ..config import settings
from ..core.estimator import calc_pre_verification_gas
from ..core.overheads import GasOverheads, OverheadsLike
from ..core.unified import estimate_pre_verification_gas
from ..core.userop import UserOperation
from ..errors import DivisionHazardError, EncodingError, ProviderError
from ..providers.base import ChainProvider
from ..providers.rpc import get_rpc_provider
from ..types import (
    BasePreVerificationGasResponse,
    PreVerificationGasRequest,
    PreVerificationGasResponse,
)

router = APIRouter(prefix="/v1/pre-verification-gas")
logger = structlog.stdlib.get_logger(__name__)


def get_chain_provider() -> ChainProvider:
    return get_rpc_provider()


def _effective_overheads(overheads: Optional[GasOverheads]) -> Optional[OverheadsLike]:
    if overheads is not None:
        return overheads
    return settings.default_overheads or None


def _parse_user_op(request: PreVerificationGasRequest) -> UserOperation:
    try:
        return UserOperation.from_rpc(request.user_op)
    except EncodingError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("", response_model=PreVerificationGasResponse)
async def estimate(
    request: PreVerificationGasRequest,
    provider: ChainProvider = Depends(get_chain_provider),
) -> PreVerificationGasResponse:
    """preVerificationGas including the connected chain's L1 data fee"""
    user_op = _parse_user_op(request)
    try:
        result = await estimate_pre_verification_gas(
            user_op, provider, _effective_overheads(request.overheads)
        )
    except EncodingError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except DivisionHazardError as exc:
        logger.warning("l2_gas_price_zero", strategy=exc.strategy)
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except ProviderError as exc:
        logger.warning("provider_error", error=str(exc))
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return PreVerificationGasResponse(
        pre_verification_gas=result.pre_verification_gas,
        base_pre_verification_gas=result.base_pre_verification_gas,
        l1_gas=result.l1_gas,
        chain_id=result.chain_id,
        network=result.network,
        rollup_family=result.rollup_family,
    )


@router.post("/base", response_model=BasePreVerificationGasResponse)
async def estimate_base(request: PreVerificationGasRequest) -> BasePreVerificationGasResponse:
    """Base preVerificationGas only; no RPC access"""
    user_op = _parse_user_op(request)
    try:
        gas = calc_pre_verification_gas(user_op, _effective_overheads(request.overheads))
    except EncodingError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return BasePreVerificationGasResponse(pre_verification_gas=gas)
