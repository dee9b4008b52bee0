"""
Department -> periodization regime.

Basic-education departments (pre-elementary, elementary, junior high) are
evaluated per quarter; college and senior high are evaluated per semester.
Matching is a case-insensitive substring test against the department's
display name, so "BSED - College of Education" and "College" both match.
"""
from typing import Dict, Iterable, Optional, Tuple, Union

from hr_evaluation.schemas.evaluation import DepartmentClassification, DepartmentRegime, EvaluationRecord

# regime -> rules; a rule (patterns, exclusions) matches when the name
# contains one of its patterns and none of its exclusions
REGIME_RULES: Dict[DepartmentRegime, Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...]] = {
    DepartmentRegime.QUARTER: (
        (("pre elementary", "pre-elementary"), ()),
        (("elementary",), ()),
        (("high school", "highschool"), ("senior",)),
    ),
    DepartmentRegime.SEMESTER: (
        (("college",), ()),
        (("senior high", "senior-high"), ()),
    ),
}


def _matches(name: str, regime: DepartmentRegime) -> bool:
    lowered = name.lower()
    for patterns, excludes in REGIME_RULES[regime]:
        if any(p in lowered for p in patterns) and not any(x in lowered for x in excludes):
            return True
    return False


def is_quarter_based(names: Iterable[Optional[str]]) -> bool:
    return any(_matches(n, DepartmentRegime.QUARTER) for n in names if n)


def is_semester_based(names: Iterable[Optional[str]]) -> bool:
    return any(_matches(n, DepartmentRegime.SEMESTER) for n in names if n)


def classify(names: Union[str, Iterable[Optional[str]], None]) -> DepartmentClassification:
    """
    Classify an employee by all of their department names.

    Membership is inclusive: an employee with one elementary and one college
    department is both quarter- and semester-based. Empty input classifies
    as neither.
    """
    if names is None:
        names = ()
    elif isinstance(names, str):
        names = (names,)
    names = tuple(names)
    return DepartmentClassification(
        is_quarter_based=is_quarter_based(names),
        is_semester_based=is_semester_based(names),
    )


def regime_of(name: str) -> DepartmentRegime:
    """Regime of a single department name. Quarter rules are checked first."""
    return classify(name).regime


def first_seen_departments(records: Iterable[EvaluationRecord]) -> Dict[int, Tuple[str, ...]]:
    """
    Department list each employee is known by: the one on their first record.

    Scoping, totals and eligibility all classify an employee by this list so
    records tagged differently over time never split one employee apart.
    """
    departments: Dict[int, Tuple[str, ...]] = {}
    for record in records:
        departments.setdefault(record.employee_id, record.employee_departments)
    return departments
