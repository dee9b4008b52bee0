import os
import logging
from pydantic import BaseModel, Field, model_validator
from dotenv import load_dotenv

from hr_evaluation.core.exceptions import ConfigurationError

load_dotenv()


class SemesterWindow(BaseModel):
    start_month: int = Field(ge=1, le=12)
    end_month: int = Field(ge=1, le=12)
    name: str

    @model_validator(mode="after")
    def check_order(self) -> "SemesterWindow":
        if self.start_month > self.end_month:
            raise ValueError(
                f"{self.name}: start month {self.start_month} is after end month {self.end_month}"
            )
        return self

    @property
    def months(self) -> range:
        return range(self.start_month, self.end_month + 1)


class SemesterConfig(BaseModel):
    """
    Month windows for the two semesters (calendar months, 1-12).
    Defaults mirror the school calendar: January-June and July-December.
    """
    S1: SemesterWindow = SemesterWindow(start_month=1, end_month=6, name="First Semester")
    S2: SemesterWindow = SemesterWindow(start_month=7, end_month=12, name="Second Semester")

    @model_validator(mode="after")
    def check_overlap(self) -> "SemesterConfig":
        overlap = set(self.S1.months) & set(self.S2.months)
        if overlap:
            raise ValueError(f"Semesters cannot have overlapping months: {sorted(overlap)}")
        return self


def _semester_from_env() -> SemesterConfig:
    return SemesterConfig(
        S1=SemesterWindow(
            start_month=int(os.getenv("EVAL_S1_START_MONTH", "1")),
            end_month=int(os.getenv("EVAL_S1_END_MONTH", "6")),
            name=os.getenv("EVAL_S1_NAME", "First Semester"),
        ),
        S2=SemesterWindow(
            start_month=int(os.getenv("EVAL_S2_START_MONTH", "7")),
            end_month=int(os.getenv("EVAL_S2_END_MONTH", "12")),
            name=os.getenv("EVAL_S2_NAME", "Second Semester"),
        ),
    )


class Config(BaseModel):
    app_name: str = "HR Evaluation Engine"
    environment: str = os.getenv("APP_ENV", "development")
    version: str = "1.0.0"

    # Logging
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Bonus eligibility
    bonus_threshold: float = float(os.getenv("EVAL_BONUS_THRESHOLD", "4.2"))

    # Periodization
    semester: SemesterConfig = Field(default_factory=_semester_from_env)

    # Record intake: reject-and-continue by default, raise on first bad record when strict
    strict_records: bool = os.getenv("EVAL_STRICT_RECORDS", "false").lower() == "true"


_logger = logging.getLogger(__name__)


def validate_settings(config: Config) -> None:
    """A threshold off the 1.0-5.0 rating scale is fatal everywhere except development."""
    if 1.0 <= config.bonus_threshold <= 5.0:
        return
    if config.environment != "development":
        raise ConfigurationError(
            f"FATAL: EVAL_BONUS_THRESHOLD={config.bonus_threshold} is outside the 1.0-5.0 rating scale.",
            details={"bonus_threshold": config.bonus_threshold},
        )
    _logger.warning(
        f"EVAL_BONUS_THRESHOLD={config.bonus_threshold} is outside the 1.0-5.0 rating scale "
        "- only acceptable in development."
    )


settings = Config()

# --- Startup Validation for Production ---
validate_settings(settings)
