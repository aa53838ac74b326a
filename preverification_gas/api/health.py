from fastapi import APIRouter, Depends
from typing import Dict, Any

from .estimate import get_chain_provider
from ..providers.base import ChainProvider

router = APIRouter()


@router.get("/healthz")
async def health_check(provider: ChainProvider = Depends(get_chain_provider)) -> Dict[str, Any]:
    """Health check endpoint that verifies the chain RPC"""

    provider_status = await provider.health_check()

    return {
        "status": "healthy" if provider_status["status"] == "healthy" else "degraded",
        "providers": {provider.name: provider_status},
    }
