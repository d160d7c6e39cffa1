# barbershop/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    database_url: str = "sqlite:///./barbershop.db"
    redis_url: str = "redis://localhost:6379/0"

    # Scheduling
    business_start_hour: int = 9
    business_end_hour: int = 18
    slot_interval_minutes: int = 30
    closed_weekdays: list[int] = [5, 6]  # Saturday, Sunday

    # Per-date booking lock (seconds)
    lock_timeout: float = 10.0
    lock_wait: float = 3.0

    # Reminders
    remind_before_minutes: int = 1440  # 0 = disabled
    reminder_check_interval: int = 60

    log_level: str = "INFO"

    # HTTP server (python -m barbershop.main)
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # Relative SQLite path is resolved against the project root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
