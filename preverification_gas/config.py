from pathlib import Path
from typing import Any, Dict

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # Chain RPC
    rpc_url: str = Field(
        default="",
        description="JSON-RPC endpoint of the chain whose preVerificationGas is estimated",
        validation_alias=AliasChoices("rpc_url", "RPC_URL", "ETH_RPC_URL"),
    )
    request_timeout_seconds: int = Field(default=20, ge=1, description="RPC request timeout")

    # Estimation defaults
    default_overheads: Dict[str, Any] = Field(
        default_factory=dict,
        description=(
            "Gas overhead overrides applied when a request supplies none "
            "(e.g. {\"bundleSize\": 4}); empty means the protocol defaults"
        ),
    )

    @field_validator("default_overheads")
    @classmethod
    def _check_default_overheads(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        if value:
            # deferred: the core package imports this module through the providers
            from .core.overheads import GasOverheads

            try:
                GasOverheads.model_validate(value)
            except ValidationError as exc:
                raise ValueError(f"invalid default_overheads: {exc}") from exc
        return value

    @property
    def has_rpc_url(self) -> bool:
        return bool(self.rpc_url)


# Global settings instance
settings = Settings()
