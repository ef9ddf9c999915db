"""topicweight configuration — loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "TOPICWEIGHT_", "env_file": ".env"}

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-2024-11-20"
    chat_model: str = "gpt-4o-mini"

    # Search
    serper_api_key: str = ""
    search_results_per_fact: int = 3

    # Ground News interest lookup (off unless explicitly enabled)
    ground_news_enabled: bool = False

    # Outbound timeouts, seconds
    generation_timeout: float = 120.0
    search_timeout: float = 15.0
    ground_news_timeout: float = 10.0
    chat_timeout: float = 60.0

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"


settings = Settings()
