from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from hr_evaluation.schemas.evaluation import EligibilityResult, PeriodBuckets, YearlyTotalsReport
from hr_evaluation.schemas.viewer import ReportView, ViewerRole


class RejectedRecord(BaseModel):
    index: int
    reason: str


class EvaluationReport(BaseModel):
    """Everything the evaluations screen renders for one viewer, in one pass."""
    report_id: str
    viewer_role: ViewerRole
    scope_department: Optional[str] = None
    views: List[ReportView] = []

    accepted_count: int = 0
    rejected: List[RejectedRecord] = []
    available_years: List[int] = []

    period_buckets: Optional[PeriodBuckets] = None
    yearly_totals: Optional[YearlyTotalsReport] = None
    eligibility: Optional[EligibilityResult] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with JSON-serializable values."""
        return self.model_dump(mode="json")


EvaluationReport.model_rebuild()
