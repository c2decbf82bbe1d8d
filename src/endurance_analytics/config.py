"""Configuration settings for the Endurance Analytics engine."""

from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Path calculations:
# __file__ = src/endurance_analytics/config.py
# .parent.parent.parent = project root
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (ENDURANCE_*)."""

    model_config = SettingsConfigDict(
        env_prefix="ENDURANCE_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Fitness-fatigue model
    ctl_time_constant: int = 42
    atl_time_constant: int = 7

    # Lactate threshold anchors (fraction of heart rate reserve)
    lt1_hrr_fraction: float = 0.70
    lt2_hrr_fraction: float = 0.85
    zone1_ceiling_fraction: float = 0.60
    zone4_ceiling_fraction: float = 0.92

    # Reference thresholds for TSS estimation when no athlete value is known
    reference_ftp_watts: float = 200.0
    reference_run_threshold_pace_sec_per_km: float = 300.0
    reference_css_sec_per_100m: float = 110.0

    # Efficiency trend comparison window
    efficiency_trend_window_days: int = 30

    # Competitive flag: estimate within this % of the qualifying cutoff
    qualification_margin_pct: float = 2.0

    log_level: str = "INFO"

    @model_validator(mode="after")
    def check_threshold_anchor_order(self) -> "Settings":
        """Zone anchors must be strictly increasing inside (0, 1)."""
        anchors = [
            self.zone1_ceiling_fraction,
            self.lt1_hrr_fraction,
            self.lt2_hrr_fraction,
            self.zone4_ceiling_fraction,
        ]
        if not (0 < anchors[0] < anchors[1] < anchors[2] < anchors[3] < 1):
            raise ValueError(
                "Heart rate anchors must satisfy 0 < zone1 < lt1 < lt2 < zone4 < 1"
            )
        if self.ctl_time_constant <= self.atl_time_constant:
            raise ValueError("ctl_time_constant must be longer than atl_time_constant")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
