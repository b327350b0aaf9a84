from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Anthropic
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"

    # LLM call
    llm_timeout_seconds: float = 15.0
    llm_max_tokens: int = 400
    llm_temperature: float = 0.1

    # Rate limiting (per client, fixed window)
    rate_limit_requests: int = 10
    rate_limit_window_seconds: float = 60.0

    # Search cache
    cache_ttl_seconds: float = 5 * 60

    # Input
    max_query_length: int = 500

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "http://localhost:3000"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def get_settings() -> Settings:
    """Read settings fresh from the environment.

    Used for API credentials so a rotated key takes effect without a restart.
    """
    return Settings()


settings = Settings()
