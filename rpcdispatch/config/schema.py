"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


class ServerConfig(BaseModel):
    """Dispatch and HTTP endpoint behaviour."""
    path: str = "/rpc"
    default_error_status: int = 400  # Status hint for errors that do not carry one
    sanitize_errors: bool = False  # Redact tokens/keys from fault messages
    expose_error_data: bool = True  # Copy RpcError.data into faults


class LoggingConfig(BaseModel):
    """Loguru sink configuration."""
    level: str = "INFO"
    file: str | None = None  # Rotating file sink name under ~/.rpcdispatch/logs


class Config(BaseSettings):
    """Root configuration for rpcdispatch."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    handlers: dict[str, str] = Field(default_factory=dict)  # name -> "package.module:Class"

    model_config = ConfigDict(
        env_prefix="RPCDISPATCH_",
        env_nested_delimiter="__"
    )
