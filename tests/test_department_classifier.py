import pytest
from hr_evaluation.schemas.evaluation import DepartmentRegime
from hr_evaluation.services import department_classifier


@pytest.mark.parametrize("name", [
    "Pre Elementary",
    "pre-elementary department",
    "Elementary",
    "Junior High School",
    "HIGHSCHOOL",
])
def test_quarter_based_departments(name):
    result = department_classifier.classify([name])
    assert result.is_quarter_based
    assert not result.is_semester_based


@pytest.mark.parametrize("name", [
    "College",
    "college of nursing",
    "Senior High",
    "senior-high department",
])
def test_semester_based_departments(name):
    result = department_classifier.classify([name])
    assert result.is_semester_based
    assert not result.is_quarter_based


def test_senior_high_school_is_semester_not_quarter():
    """'Senior High School' contains 'high school' but the senior exclusion wins."""
    result = department_classifier.classify(["Senior High School"])
    assert result.is_semester_based
    assert not result.is_quarter_based
    assert result.regime == DepartmentRegime.SEMESTER


def test_empty_and_unclassified():
    for names in ([], None, ["Admin Office", "Maintenance"]):
        result = department_classifier.classify(names)
        assert not result.is_quarter_based
        assert not result.is_semester_based
        assert result.regime == DepartmentRegime.UNCLASSIFIED


def test_multi_department_employee_is_in_both_regimes():
    result = department_classifier.classify(["Elementary", "College of Education"])
    assert result.is_quarter_based
    assert result.is_semester_based
    # quarter gating takes precedence for a single combined total
    assert result.regime == DepartmentRegime.QUARTER


def test_single_name_and_regime_of():
    assert department_classifier.classify("Elementary").is_quarter_based
    assert department_classifier.regime_of("College") == DepartmentRegime.SEMESTER
    assert department_classifier.regime_of("Security") == DepartmentRegime.UNCLASSIFIED


def test_none_entries_are_ignored():
    result = department_classifier.classify([None, "College"])
    assert result.is_semester_based
