import logging
from typing import Iterable, List, Optional

from hr_evaluation.schemas.evaluation import EmployeeTotalScore, EvaluationRecord
from hr_evaluation.schemas.viewer import ViewerContext
from hr_evaluation.services.department_classifier import first_seen_departments

logger = logging.getLogger(__name__)


def scope_to(records: Iterable[EvaluationRecord], department: Optional[str]) -> List[EvaluationRecord]:
    """
    Restrict evaluations to employees of one department.

    `department` is compared exactly against the resolved department names
    on the employee's first record, and an employee's records are kept or
    dropped together. None means unscoped and returns every record. Must run before bucketing,
    aggregation and eligibility so all three see the same population.
    """
    records = list(records)
    if department is None:
        return records
    # All-or-nothing per employee, judged by the employee's first-seen departments
    known_by = first_seen_departments(records)
    scoped = [r for r in records if department in known_by[r.employee_id]]
    logger.debug(f"Scoped {len(scoped)} of {len(records)} evaluations to department '{department}'")
    return scoped


def scope_totals_to(totals: Iterable[EmployeeTotalScore], department: Optional[str]) -> List[EmployeeTotalScore]:
    """Same department rule applied to already aggregated totals."""
    totals = list(totals)
    if department is None:
        return totals
    return [t for t in totals if department in t.employee_departments]


def scope_to_employee(records: Iterable[EvaluationRecord], employee_id: int) -> List[EvaluationRecord]:
    return [r for r in records if r.employee_id == employee_id]


def scope_for_viewer(records: Iterable[EvaluationRecord], viewer: ViewerContext) -> List[EvaluationRecord]:
    """Apply the viewer's scope: coordinators see their department, employees see themselves."""
    if viewer.is_employee:
        return scope_to_employee(records, viewer.employee_id)
    return scope_to(records, viewer.scope_department)
