"""
Performance bonus eligibility.

An employee qualifies once they have at least as many evaluations as their
regime has periods (4 for quarter-based, 2 otherwise) and the plain mean of
all their scores, across every year, reaches the bonus threshold.
"""
from typing import Dict, Iterable, List, Optional, Tuple

from hr_evaluation.schemas.evaluation import (
    REQUIRED_PERIODS,
    EligibilityResult,
    EligibleEmployee,
    EvaluationRecord,
)
from hr_evaluation.services import department_classifier
from hr_evaluation.services.base import BaseService

# (lower bound, label), highest first
RATING_BANDS: Tuple[Tuple[float, str], ...] = (
    (4.5, "Excellent"),
    (4.0, "Very Satisfactory"),
    (3.5, "Good"),
    (3.0, "Satisfactory"),
    (2.0, "Fair"),
)

# Averages are compared after rounding so 4.19999... from float sums counts as 4.2
_SCORE_PRECISION = 6


def rating_label(score: float) -> str:
    for lower_bound, label in RATING_BANDS:
        if score >= lower_bound:
            return label
    return "Poor"


def is_assistant(position: Optional[str]) -> bool:
    return bool(position) and "assistant" in position.lower()


def required_periods(departments: Iterable[str]) -> int:
    return REQUIRED_PERIODS[department_classifier.classify(departments).regime]


class EligibilityEvaluator(BaseService):
    """
    Partitions evaluated employees into eligible / not eligible.

    The assistant flag is carried for display grouping only; everyone is
    held to the same threshold.
    """

    @property
    def threshold(self) -> float:
        return self.settings.bonus_threshold

    def evaluate(self, records: Iterable[EvaluationRecord]) -> EligibilityResult:
        by_employee: Dict[int, List[EvaluationRecord]] = {}
        for record in records:
            by_employee.setdefault(record.employee_id, []).append(record)

        eligible: List[EligibleEmployee] = []
        not_eligible: List[str] = []
        skipped = 0

        for employee_id, evaluations in by_employee.items():
            first = evaluations[0]
            needed = required_periods(first.employee_departments)
            if len(evaluations) < needed:
                skipped += 1
                continue

            average = sum(e.final_score for e in evaluations) / len(evaluations)
            if round(average, _SCORE_PRECISION) >= self.threshold:
                position = next((e.employee_position for e in evaluations if e.employee_position), None)
                eligible.append(EligibleEmployee(
                    employee_id=employee_id,
                    employee_name=first.employee_name,
                    employee_departments=list(first.employee_departments),
                    position=position,
                    average_score=average,
                    evaluation_count=len(evaluations),
                    required_periods=needed,
                    is_assistant=is_assistant(position),
                    rating_label=rating_label(average),
                ))
            else:
                not_eligible.append(first.employee_name)

        eligible.sort(key=lambda e: e.average_score, reverse=True)
        self.log_info(
            f"Bonus eligibility: {len(eligible)} eligible, {len(not_eligible)} not eligible, "
            f"{skipped} with too few evaluations",
            threshold=self.threshold,
        )
        return EligibilityResult(eligible=eligible, not_eligible=not_eligible)
