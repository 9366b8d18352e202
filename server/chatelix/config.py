from functools import lru_cache
from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    server_port: int = 8000
    # Allow both localhost and 127.0.0.1 for local development
    allowed_origins: List[AnyHttpUrl] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]  # type: ignore
    log_level: str = "INFO"

    # Edge functions: one streaming endpoint per provider route
    functions_base_url: str = "http://localhost:54321/functions/v1"
    functions_api_key: Optional[str] = None
    # Non-streaming completions go through a single aggregator function
    generate_endpoint: str = "aggregator-chat"

    # Request defaults applied when the client omits them
    default_model: str = "openai/gpt-4o-mini"
    default_temperature: float = 0.7
    default_max_tokens: int = 2000

    # httpx timeouts (seconds)
    connect_timeout: float = 10.0
    read_timeout: float = 120.0
    write_timeout: float = 30.0
    pool_timeout: float = 10.0

    rate_limit_per_minute: int = 30

    # pydantic-settings v2 style config: load env from both ../.env (repo root) and .env
    model_config = SettingsConfigDict(
        env_prefix="CHATELIX_",
        case_sensitive=False,
        env_file=("../.env", ".env"),
        extra="ignore",  # ignore env vars not defined as fields
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
