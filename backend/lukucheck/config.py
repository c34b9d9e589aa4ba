from __future__ import annotations
import os
from pydantic import BaseModel
from lukucheck.services.cycle_clock import CycleConfig

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "dev")
    app_name: str = os.getenv("APP_NAME", "lukucheck-api")
    app_display_name: str = os.getenv("APP_DISPLAY_NAME", "LukuCheck")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "1") == "1"

    # Daily challenge cycle (local wall clock of cycle_timezone)
    cycle_timezone: str = os.getenv("CYCLE_TIMEZONE", "Africa/Nairobi")
    submission_open_hour: int = int(os.getenv("SUBMISSION_OPEN_HOUR", "6"))
    submission_close_hour: int = int(os.getenv("SUBMISSION_CLOSE_HOUR", "18"))
    leaderboard_release_hour: int = int(os.getenv("LEADERBOARD_RELEASE_HOUR", "18"))  # same time submissions close
    leaderboard_release_minute: int = int(os.getenv("LEADERBOARD_RELEASE_MINUTE", "0"))
    leaderboard_viewing_cutoff_hour: int = int(os.getenv("LEADERBOARD_VIEWING_CUTOFF_HOUR", "18"))
    leaderboard_viewing_cutoff_minute: int = int(os.getenv("LEADERBOARD_VIEWING_CUTOFF_MINUTE", "25"))
    leaderboard_viewing_end_hour: int = int(os.getenv("LEADERBOARD_VIEWING_END_HOUR", "18"))  # next day
    ai_usage_reset_hour: int = int(os.getenv("AI_USAGE_RESET_HOUR", "6"))
    ai_usage_daily_limit: int = int(os.getenv("AI_USAGE_DAILY_LIMIT", "5"))

    def cycle_config(self) -> CycleConfig:
        return CycleConfig(
            submission_open_hour=self.submission_open_hour,
            submission_close_hour=self.submission_close_hour,
            leaderboard_release_hour=self.leaderboard_release_hour,
            leaderboard_release_minute=self.leaderboard_release_minute,
            leaderboard_viewing_cutoff_hour=self.leaderboard_viewing_cutoff_hour,
            leaderboard_viewing_cutoff_minute=self.leaderboard_viewing_cutoff_minute,
            leaderboard_viewing_end_hour=self.leaderboard_viewing_end_hour,
            ai_usage_reset_hour=self.ai_usage_reset_hour,
        )

settings = Settings()
cycle_config = settings.cycle_config()
