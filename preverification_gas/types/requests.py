from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from ..core.overheads import GasOverheads


class PreVerificationGasRequest(BaseModel):
    user_op: Dict[str, Any] = Field(
        alias="userOp",
        description="Partial UserOperation in eth_sendUserOperation (camelCase) shape",
    )
    overheads: Optional[GasOverheads] = Field(
        default=None,
        description="Partial gas overhead overrides; unset fields keep the defaults",
    )

    model_config = {"populate_by_name": True}
