"""Observability config."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Read from environment variables prefixed with `AIOCHAIN_`,
    e.g. `AIOCHAIN_LOG_LEVEL=DEBUG`.

    Attributes:
        service_namespace (str): The namespace put on the tracing resource. Defaults to "aiochain".
        enable_console_tracer (bool): Whether to export spans to the console. Defaults to False.
        enable_console_logs (bool): Whether to attach a console handler to the aiochain logger. Defaults to True.
        log_level (str): Level of the aiochain logger. Defaults to "WARNING".

    """

    model_config = SettingsConfigDict(env_prefix="AIOCHAIN_")

    service_namespace: str = "aiochain"

    enable_console_tracer: bool = Field(default=False, description="Whether to enable the console tracer.")
    enable_console_logs: bool = Field(default=True, description="Whether to enable the console logs.")
    log_level: str = Field(default="WARNING", description="Level of the aiochain logger.")
