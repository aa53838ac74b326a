from pydantic import BaseModel, Field


class BasePreVerificationGasResponse(BaseModel):
    pre_verification_gas: int = Field(serialization_alias="preVerificationGas")


class PreVerificationGasResponse(BaseModel):
    pre_verification_gas: int = Field(serialization_alias="preVerificationGas")
    base_pre_verification_gas: int = Field(serialization_alias="basePreVerificationGas")
    l1_gas: int = Field(serialization_alias="l1Gas", description="Extra gas for the L1 data fee")
    chain_id: int = Field(serialization_alias="chainId")
    network: str
    rollup_family: str = Field(serialization_alias="rollupFamily")
