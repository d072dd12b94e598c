"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="PAYMENT_OPTIMIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Service
    service_name: str = "payment-optimizer"
    log_level: str = "INFO"

    # Score model (heuristic, not a bureau model)
    baseline_score: int = 700
    score_floor: int = 300
    score_ceiling: int = 900
    utilization_impact_multiplier: float = -2.0  # points per percentage point of utilization change
    utilization_impact_cap: float = 100.0
    payment_history_impact: float = 5.0
    credit_mix_impact: float = 2.0

    # Allocation
    healthy_utilization_threshold: float = 0.30
    mop_up_increment_cents: int = 10_000  # $100 per account per sweep


settings = Settings()
