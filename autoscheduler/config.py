from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchedulerSettings(BaseSettings):
    """Scheduler settings"""

    # Working hours used when no stored settings row is available
    default_work_start: str = Field(
        default="09:00", description="Default start of the working day (HH:MM)"
    )
    default_work_end: str = Field(
        default="17:00", description="Default end of the working day (HH:MM)"
    )
    default_break_minutes: int = Field(
        default=15, ge=0, description="Break inserted after sessions and events"
    )

    # Session sizing
    chunk_minutes: int = Field(
        default=90, gt=0, description="Maximum session length without a focus key"
    )
    focus_chunk_minutes: int = Field(
        default=120, gt=0, description="Maximum session length with a focus key"
    )
    focus_burst: int = Field(
        default=2,
        ge=1,
        description="Consecutive focus sessions allowed before a normal one",
    )

    # Dependency resolution
    max_dependency_passes: int = Field(
        default=10000, gt=0, description="Hard cap on dependency resolution scans"
    )

    # Continuation records
    continuation_marker: str = Field(
        default="[auto-cont]", description="Note tag for continuation sessions"
    )
    continuation_title_suffix: str = Field(
        default=" (cont.)", description="Title suffix for continuation sessions"
    )

    # Behavioral history
    behavior_history_limit: int = Field(
        default=20, gt=0, description="Number of recent overrun records to average"
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTOSCHEDULER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = SchedulerSettings()
