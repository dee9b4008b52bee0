"""
Period buckets for the "history by period" view.

Every evaluation is filed under its semester AND its quarter; which regime
is relevant for an employee is decided when a bucket is displayed, not here.
"""
import logging
from typing import Dict, Iterable, List, Optional

from hr_evaluation.core.config import SemesterConfig
from hr_evaluation.schemas.evaluation import EvaluationRecord, Period, PeriodBuckets
from hr_evaluation.services import department_classifier
from hr_evaluation.services.period_classifier import periods_of

logger = logging.getLogger(__name__)


def _by_score_desc(records: List[EvaluationRecord]) -> List[EvaluationRecord]:
    # list.sort is stable, ties keep encounter order
    return sorted(records, key=lambda r: r.final_score, reverse=True)


def organize(
    records: Iterable[EvaluationRecord],
    semester_config: Optional[SemesterConfig] = None
) -> PeriodBuckets:
    buckets: Dict[Period, List[EvaluationRecord]] = {p: [] for p in Period}
    count = 0
    for record in records:
        semester, quarter = periods_of(record.evaluation_date, semester_config)
        buckets[semester].append(record)
        buckets[quarter].append(record)
        count += 1

    logger.debug(f"Organized {count} evaluations into period buckets")
    return PeriodBuckets(**{p.value: _by_score_desc(items) for p, items in buckets.items()})


def history_for_period(
    buckets: PeriodBuckets,
    period: Period,
    department: Optional[str] = None
) -> List[EvaluationRecord]:
    """
    Records of one period as shown in the history table.

    Only employees belonging to the period's regime are kept (a Q2 list shows
    quarter-based employees only). `department` further narrows the list to a
    single department name.
    """
    regime = period.regime
    shown = []
    for record in buckets.bucket(period):
        if not department_classifier.classify(record.employee_departments).includes(regime):
            continue
        if department is not None and department not in record.employee_departments:
            continue
        shown.append(record)
    return shown


def organize_by_year(records: Iterable[EvaluationRecord]) -> Dict[int, List[EvaluationRecord]]:
    by_year: Dict[int, List[EvaluationRecord]] = {}
    for record in records:
        by_year.setdefault(record.evaluation_date.year, []).append(record)
    return {year: _by_score_desc(items) for year, items in by_year.items()}


def available_years(records: Iterable[EvaluationRecord]) -> List[int]:
    """Years that have at least one evaluation, most recent first."""
    return sorted({r.evaluation_date.year for r in records}, reverse=True)
