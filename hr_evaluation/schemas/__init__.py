# Schemas package
# Explicit class exports for cleaner imports
from .evaluation import (
    DepartmentRegime,
    Period,
    SEMESTER_PERIODS,
    QUARTER_PERIODS,
    REQUIRED_PERIODS,
    EvaluationRecord,
    DepartmentClassification,
    PeriodBuckets,
    EmployeeTotalScore,
    YearlyTotalsReport,
    EligibleEmployee,
    EligibilityResult,
)
from .viewer import ViewerRole, ReportView, VISIBLE_VIEWS, ViewerContext
from .report import RejectedRecord, EvaluationReport
