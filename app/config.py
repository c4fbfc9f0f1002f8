from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/goaltracker"
    default_tz: str = "UTC"
    tracker_api_key: str | None = None

    # Owner used when a request carries no X-User-Id header (single-user installs).
    default_user_id: str | None = None

    log_level: str = "INFO"

    # Analytics tuning
    top_missed_reasons: int = 5  # Size of the merged missed-reason leaderboard
    operations_weeks: int = 8  # Weeks in the created/completed task series

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
