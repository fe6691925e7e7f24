from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DragonHoard"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/dragonhoard"

    anthropic_api_key: str = ""
    generation_model: str = "claude-sonnet-4-20250514"
    generation_max_tokens: int = 1024

    # Chest and breeding results are revealed no sooner than this,
    # even when the generator answers faster
    presentation_floor_seconds: float = 2.0
    reveal_delay_seconds: float = 1.0

    leaderboard_limit: int = 50


settings = Settings()
