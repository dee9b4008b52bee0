import logging
from datetime import date
from typing import Dict, Optional, Tuple

from hr_evaluation.core.config import SemesterConfig, settings
from hr_evaluation.schemas.evaluation import DepartmentRegime, Period

logger = logging.getLogger(__name__)

# Calendar months 1-12
QUARTER_BY_MONTH: Dict[int, Period] = {
    **{m: Period.Q1 for m in (1, 2, 3)},
    **{m: Period.Q2 for m in (4, 5, 6)},
    **{m: Period.Q3 for m in (7, 8, 9)},
    **{m: Period.Q4 for m in (10, 11, 12)},
}

QUARTER_LABELS: Dict[Period, str] = {
    Period.Q1: "1st Quarter",
    Period.Q2: "2nd Quarter",
    Period.Q3: "3rd Quarter",
    Period.Q4: "4th Quarter",
}


def quarter_of_month(month: int) -> Period:
    return QUARTER_BY_MONTH[month]


def semester_of_month(month: int, semester_config: Optional[SemesterConfig] = None) -> Period:
    """
    Semester for a calendar month using the configured windows.

    Months outside both windows (possible when the windows leave a gap)
    fall back to the default January-June / July-December split.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    config = semester_config or settings.semester
    if month in config.S1.months:
        return Period.S1
    if month in config.S2.months:
        return Period.S2
    logger.warning(f"Month {month} is outside the configured semesters, using default split")
    return Period.S1 if month <= 6 else Period.S2


def quarter_of(day: date) -> Period:
    return quarter_of_month(day.month)


def semester_of(day: date, semester_config: Optional[SemesterConfig] = None) -> Period:
    return semester_of_month(day.month, semester_config)


def period_of(day: date, regime: DepartmentRegime, semester_config: Optional[SemesterConfig] = None) -> Period:
    """Period label of a date under the given regime. Only the month matters."""
    if regime == DepartmentRegime.QUARTER:
        return quarter_of(day)
    if regime == DepartmentRegime.SEMESTER:
        return semester_of(day, semester_config)
    raise ValueError(f"No periods are defined for regime {regime.value!r}")


def periods_of(day: date, semester_config: Optional[SemesterConfig] = None) -> Tuple[Period, Period]:
    """(semester, quarter) of a date; every evaluation is filed under both."""
    return semester_of(day, semester_config), quarter_of(day)


def period_label(period: Period, semester_config: Optional[SemesterConfig] = None) -> str:
    """Human-readable name, e.g. "First Semester" or "3rd Quarter"."""
    if period.regime == DepartmentRegime.QUARTER:
        return QUARTER_LABELS[period]
    config = semester_config or settings.semester
    return getattr(config, period.value).name
