"""Application configuration via pydantic-settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Search provider
    linkup_api_key: str = ""
    linkup_base_url: str = "https://api.linkup.so/v1"
    linkup_timeout_seconds: float = 45.0
    linkup_max_retries: int = 2
    linkup_circuit_failure_threshold: int = 5
    linkup_circuit_reset_seconds: float = 60.0

    # Request limits
    min_prompt_length: int = 10
    max_prompt_length: int = 2000
    default_results: int = 15
    min_results_limit: int = 5
    max_results_limit: int = 25
    deep_default_results: int = 5
    deep_max_results: int = 5

    # Discovery
    cost_per_search_cents: int = 1
    discovery_timeout_seconds: float = 60.0

    # Telemetry
    telemetry_queue_size: int = 1000

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = 8000
