from fastapi import FastAPI

from . import __version__
from .api import estimate, health
from .config import settings
from .logging_config import setup_logging
from .middleware import RequestLoggingMiddleware

setup_logging()

# Create FastAPI app
app = FastAPI(
    title="preVerificationGas Estimator",
    description="ERC-4337 preVerificationGas estimation with rollup L1 data fees",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(estimate.router, tags=["Estimation"])


@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "name": "preVerificationGas Estimator",
        "version": __version__,
        "docs": "/docs",
        "health": "/healthz",
        "estimate": "/v1/pre-verification-gas",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "preverification_gas.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )
