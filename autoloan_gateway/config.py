"""Configuration management using Pydantic Settings"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "autoloan-gateway"
    log_level: str = "INFO"

    # Risk scorer
    risk_scorer_mode: Literal["local", "remote"] = "local"
    risk_api_base: str = "http://localhost:8001"
    risk_timeout_seconds: float = 10.0
    risk_max_attempts: int = 2  # first call + one retry
    risk_backoff_seconds: float = 0.5

    # Underwriting thresholds
    rule_max_ltv: float = 1.25
    rule_max_dti: float = 0.50
    rule_min_income: float = 2000.0
    rule_max_pd: float = 0.35


settings = Settings()
