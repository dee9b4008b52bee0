import enum
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DepartmentRegime(str, enum.Enum):
    """Periodization scheme a department evaluates under."""
    QUARTER = "quarter"
    SEMESTER = "semester"
    UNCLASSIFIED = "unclassified"


class Period(str, enum.Enum):
    S1 = "S1"
    S2 = "S2"
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"

    @property
    def regime(self) -> DepartmentRegime:
        return DepartmentRegime.SEMESTER if self.value.startswith("S") else DepartmentRegime.QUARTER


SEMESTER_PERIODS: Tuple[Period, ...] = (Period.S1, Period.S2)
QUARTER_PERIODS: Tuple[Period, ...] = (Period.Q1, Period.Q2, Period.Q3, Period.Q4)

# Number of filled periods an employee needs before a combined score or a bonus decision
REQUIRED_PERIODS: Dict[DepartmentRegime, int] = {
    DepartmentRegime.QUARTER: len(QUARTER_PERIODS),
    DepartmentRegime.SEMESTER: len(SEMESTER_PERIODS),
    DepartmentRegime.UNCLASSIFIED: len(SEMESTER_PERIODS),
}


class EvaluationRecord(BaseModel):
    """
    One submitted evaluation, with the employee's department ids already
    resolved to display names by the caller. Accepts the camelCase payload
    of the evaluations API as well as snake_case names.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    evaluation_id: Optional[int] = Field(default=None, alias="evaluationID")
    employee_id: int = Field(alias="employeeID")
    employee_name: str = Field(default="", alias="employeeName")
    evaluator_id: int = Field(alias="evaluatorID")
    evaluation_date: date = Field(alias="evaluationDate")
    final_score: float = Field(alias="finalScore", ge=0.0, le=5.0, allow_inf_nan=False)
    employee_departments: Tuple[str, ...] = Field(default=(), alias="employeeDepartments")
    employee_position: Optional[str] = Field(default=None, alias="position")

    @field_validator("evaluation_date", mode="before")
    @classmethod
    def drop_time_of_day(cls, value):
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            # ISO ("2024-03-01T10:00:00") and SQL ("2024-03-01 10:00:00") timestamps
            value = value.strip()
            for separator in ("T", " "):
                if separator in value:
                    return value.split(separator, 1)[0]
        return value

    @field_validator("employee_departments", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return () if value is None else value


class DepartmentClassification(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_quarter_based: bool = False
    is_semester_based: bool = False

    @property
    def regime(self) -> DepartmentRegime:
        """Regime used for completeness gating; quarter wins for dual membership."""
        if self.is_quarter_based:
            return DepartmentRegime.QUARTER
        if self.is_semester_based:
            return DepartmentRegime.SEMESTER
        return DepartmentRegime.UNCLASSIFIED

    def includes(self, regime: DepartmentRegime) -> bool:
        if regime == DepartmentRegime.QUARTER:
            return self.is_quarter_based
        if regime == DepartmentRegime.SEMESTER:
            return self.is_semester_based
        return not (self.is_quarter_based or self.is_semester_based)


class PeriodBuckets(BaseModel):
    S1: List[EvaluationRecord] = []
    S2: List[EvaluationRecord] = []
    Q1: List[EvaluationRecord] = []
    Q2: List[EvaluationRecord] = []
    Q3: List[EvaluationRecord] = []
    Q4: List[EvaluationRecord] = []

    def bucket(self, period: Period) -> List[EvaluationRecord]:
        return getattr(self, period.value)

    def is_empty(self) -> bool:
        return not any(self.bucket(p) for p in Period)


class EmployeeTotalScore(BaseModel):
    employee_id: int
    employee_name: str = ""
    employee_departments: List[str] = []
    first_semester_score: Optional[float] = None
    second_semester_score: Optional[float] = None
    q1_score: Optional[float] = None
    q2_score: Optional[float] = None
    q3_score: Optional[float] = None
    q4_score: Optional[float] = None
    evaluation_count: int = 0
    is_quarter_based: bool = False
    is_semester_based: bool = False
    total_score: Optional[float] = None

    @property
    def semester_scores(self) -> Tuple[Optional[float], ...]:
        return (self.first_semester_score, self.second_semester_score)

    @property
    def quarter_scores(self) -> Tuple[Optional[float], ...]:
        return (self.q1_score, self.q2_score, self.q3_score, self.q4_score)

    @property
    def regime(self) -> DepartmentRegime:
        return DepartmentClassification(
            is_quarter_based=self.is_quarter_based,
            is_semester_based=self.is_semester_based,
        ).regime

    @property
    def required_periods(self) -> int:
        return REQUIRED_PERIODS[self.regime]

    @property
    def completed_periods(self) -> int:
        """Filled slots under the employee's gating regime, e.g. for a "1/2 Semesters Complete" badge."""
        if self.regime == DepartmentRegime.QUARTER:
            return sum(s is not None for s in self.quarter_scores)
        if self.regime == DepartmentRegime.SEMESTER:
            return sum(s is not None for s in self.semester_scores)
        return 0


class YearlyTotalsReport(BaseModel):
    year: Optional[int] = None
    all_years: bool = False
    totals: List[EmployeeTotalScore] = []
    semester_totals: List[EmployeeTotalScore] = []
    quarter_totals: List[EmployeeTotalScore] = []


class EligibleEmployee(BaseModel):
    employee_id: int
    employee_name: str = ""
    employee_departments: List[str] = []
    position: Optional[str] = None
    average_score: float
    evaluation_count: int
    required_periods: int
    is_assistant: bool = False
    rating_label: str


class EligibilityResult(BaseModel):
    eligible: List[EligibleEmployee] = []
    not_eligible: List[str] = []


# Resolve forward references for Pydantic V2
EvaluationRecord.model_rebuild()
PeriodBuckets.model_rebuild()
YearlyTotalsReport.model_rebuild()
EligibilityResult.model_rebuild()
