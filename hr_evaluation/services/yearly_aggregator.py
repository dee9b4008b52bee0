"""
Yearly Totals Service

Folds one calendar year of evaluations into a single row per employee:
semester and quarter slot scores plus a combined total that is only set
once every period required by the employee's regime has a score.

Slots are last-write-wins: when two evaluations land in the same period for
the same employee, the one processed later replaces the earlier score.
"""
from typing import Dict, Iterable, List, Optional, Union

from hr_evaluation.schemas.evaluation import (
    DepartmentRegime,
    EmployeeTotalScore,
    EvaluationRecord,
    Period,
    YearlyTotalsReport,
)
from hr_evaluation.services import department_classifier
from hr_evaluation.services.base import BaseService
from hr_evaluation.services.period_classifier import periods_of

SLOT_BY_PERIOD: Dict[Period, str] = {
    Period.S1: "first_semester_score",
    Period.S2: "second_semester_score",
    Period.Q1: "q1_score",
    Period.Q2: "q2_score",
    Period.Q3: "q3_score",
    Period.Q4: "q4_score",
}

# Year selector that folds every year into one row per employee (employee self-service view)
ALL_YEARS = "all"


def _mean_if_complete(scores) -> Optional[float]:
    if any(s is None for s in scores):
        return None
    return sum(scores) / len(scores)


def combined_score(total: EmployeeTotalScore, regime: DepartmentRegime) -> Optional[float]:
    """Completeness gate: mean of the regime's slots, or None while any slot is empty."""
    if regime == DepartmentRegime.QUARTER:
        return _mean_if_complete(total.quarter_scores)
    if regime == DepartmentRegime.SEMESTER:
        return _mean_if_complete(total.semester_scores)
    return None


def _sort_key(total: EmployeeTotalScore):
    # Set totals first (highest first), unset totals after in encounter order
    if total.total_score is None:
        return (1, 0.0)
    return (0, -total.total_score)


def semester_totals(totals: Iterable[EmployeeTotalScore]) -> List[EmployeeTotalScore]:
    return [t for t in totals if t.is_semester_based]


def quarter_totals(totals: Iterable[EmployeeTotalScore]) -> List[EmployeeTotalScore]:
    return [t for t in totals if t.is_quarter_based]


class YearlyAggregator(BaseService):
    """Recomputes per-employee yearly totals from raw evaluations on every call."""

    def aggregate(
        self,
        records: Iterable[EvaluationRecord],
        year: Union[int, str]
    ) -> List[EmployeeTotalScore]:
        """
        Per-employee totals for `year`, or for every year when `year` is ALL_YEARS.

        Employees are classified by the departments on their first record in
        `records`, whichever year that record falls in.
        """
        records = list(records)
        known_by = department_classifier.first_seen_departments(records)
        by_employee: Dict[int, EmployeeTotalScore] = {}

        for record in records:
            if year != ALL_YEARS and record.evaluation_date.year != year:
                continue

            total = by_employee.get(record.employee_id)
            if total is None:
                total = EmployeeTotalScore(
                    employee_id=record.employee_id,
                    employee_name=record.employee_name,
                    employee_departments=list(known_by[record.employee_id]),
                )
                by_employee[record.employee_id] = total
            total.evaluation_count += 1

            semester, quarter = periods_of(record.evaluation_date, self.settings.semester)
            setattr(total, SLOT_BY_PERIOD[semester], record.final_score)
            setattr(total, SLOT_BY_PERIOD[quarter], record.final_score)

        for total in by_employee.values():
            classification = department_classifier.classify(total.employee_departments)
            total.is_quarter_based = classification.is_quarter_based
            total.is_semester_based = classification.is_semester_based
            total.total_score = combined_score(total, classification.regime)
            self.log_debug(
                f"Employee {total.employee_id}: {total.evaluation_count} evaluations, "
                f"regime={classification.regime.value}, total={total.total_score}"
            )

        totals = sorted(by_employee.values(), key=_sort_key)
        self.log_info(
            f"Aggregated {len(totals)} employees for {year}",
            year=year,
            complete=sum(t.total_score is not None for t in totals),
        )
        return totals

    def report(self, records: Iterable[EvaluationRecord], year: Union[int, str, None]) -> YearlyTotalsReport:
        """Totals for `year` (or ALL_YEARS) split into the semester and quarter display tables."""
        if year is None:
            return YearlyTotalsReport()
        totals = self.aggregate(records, year)
        return YearlyTotalsReport(
            year=None if year == ALL_YEARS else year,
            all_years=year == ALL_YEARS,
            totals=totals,
            semester_totals=semester_totals(totals),
            quarter_totals=quarter_totals(totals),
        )
