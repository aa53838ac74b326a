from .requests import PreVerificationGasRequest
from .responses import BasePreVerificationGasResponse, PreVerificationGasResponse

__all__ = [
    "PreVerificationGasRequest",
    "BasePreVerificationGasResponse",
    "PreVerificationGasResponse",
]
