"""
Evaluation Report Service

Entry point for the evaluations screen. Composes the engine for a resolved
viewer:

- Scope first (coordinator -> department, employee -> self)
- Then period buckets, yearly totals and bonus eligibility over the scoped set
- Views outside the viewer's role are refused

Nothing is cached; each call recomputes from the records it is given, so an
evaluations reset upstream simply shows up as an empty input.
"""
import uuid
from typing import Any, FrozenSet, Iterable, List, Optional, Union

from hr_evaluation.core.config import Config
from hr_evaluation.core.exceptions import AccessDeniedError
from hr_evaluation.core.logging import report_id_var, setup_logging
from hr_evaluation.schemas.evaluation import (
    EligibilityResult,
    EvaluationRecord,
    Period,
    PeriodBuckets,
    YearlyTotalsReport,
)
from hr_evaluation.schemas.report import EvaluationReport, RejectedRecord
from hr_evaluation.schemas.viewer import ReportView, ViewerContext
from hr_evaluation.services import period_bucketer
from hr_evaluation.services.base import BaseService
from hr_evaluation.services.eligibility import EligibilityEvaluator
from hr_evaluation.services.record_parser import parse_records
from hr_evaluation.services.scope_filter import scope_for_viewer
from hr_evaluation.services.yearly_aggregator import ALL_YEARS, YearlyAggregator


class EvaluationReportService(BaseService):

    def __init__(self, settings: Optional[Config] = None):
        super().__init__(settings)
        setup_logging(self.settings.log_level)
        self.aggregator = YearlyAggregator(self.settings)
        self.eligibility_evaluator = EligibilityEvaluator(self.settings)

    def visible_views(self, viewer: ViewerContext) -> FrozenSet[ReportView]:
        return viewer.views

    def _require(self, viewer: ViewerContext, view: ReportView) -> None:
        if not viewer.can_view(view):
            self.log_warning(f"{viewer.role.value} viewer requested {view.value} view")
            raise AccessDeniedError(f"Role {viewer.role.value} cannot view {view.value}")

    def period_buckets(self, records: Iterable[EvaluationRecord], viewer: ViewerContext) -> PeriodBuckets:
        self._require(viewer, ReportView.PERIOD_HISTORY)
        scoped = scope_for_viewer(records, viewer)
        return period_bucketer.organize(scoped, self.settings.semester)

    def period_history(
        self,
        records: Iterable[EvaluationRecord],
        viewer: ViewerContext,
        period: Period,
        department: Optional[str] = None
    ) -> List[EvaluationRecord]:
        """
        One period's table. `department` is the department picker of unscoped
        viewers and is ignored for scoped ones.
        """
        buckets = self.period_buckets(records, viewer)
        selected = None if viewer.is_scoped else department
        return period_bucketer.history_for_period(buckets, period, selected)

    def yearly_totals(
        self,
        records: Iterable[EvaluationRecord],
        viewer: ViewerContext,
        year: Union[int, str, None] = None
    ) -> YearlyTotalsReport:
        """
        Totals for `year`. Without a year, employees get one row across all of
        their years and everyone else gets the most recent year with evaluations.
        """
        self._require(viewer, ReportView.YEARLY_TOTALS)
        scoped = scope_for_viewer(records, viewer)
        if year is None and viewer.is_employee:
            year = ALL_YEARS
        elif year is None:
            years = period_bucketer.available_years(scoped)
            year = years[0] if years else None
        return self.aggregator.report(scoped, year)

    def eligibility(self, records: Iterable[EvaluationRecord], viewer: ViewerContext) -> EligibilityResult:
        self._require(viewer, ReportView.ELIGIBILITY)
        scoped = scope_for_viewer(records, viewer)
        return self.eligibility_evaluator.evaluate(scoped)

    def build_report(
        self,
        raw_records: Iterable[Any],
        viewer: ViewerContext,
        year: Union[int, str, None] = None
    ) -> EvaluationReport:
        """
        Parse raw payloads and compute every view the viewer is allowed to see.

        Malformed payloads are reported in `rejected` and left out of all views
        (or raised, when strict record intake is configured).
        """
        report_id = str(uuid.uuid4())
        token = report_id_var.set(report_id)
        try:
            parsed = parse_records(raw_records, strict=self.settings.strict_records)
            records = parsed.records
            views = viewer.views

            report = EvaluationReport(
                report_id=report_id,
                viewer_role=viewer.role,
                scope_department=viewer.scope_department,
                views=[v for v in ReportView if v in views],
                accepted_count=parsed.accepted_count,
                rejected=[RejectedRecord(index=e.index, reason=e.details["reason"]) for e in parsed.rejected],
                available_years=period_bucketer.available_years(scope_for_viewer(records, viewer)),
            )
            if ReportView.PERIOD_HISTORY in views:
                report.period_buckets = self.period_buckets(records, viewer)
            if ReportView.YEARLY_TOTALS in views:
                report.yearly_totals = self.yearly_totals(records, viewer, year)
            if ReportView.ELIGIBILITY in views:
                report.eligibility = self.eligibility(records, viewer)

            self.log_info(
                f"Built evaluation report for {viewer.role.value} viewer: "
                f"{parsed.accepted_count} records, {parsed.rejected_count} rejected"
            )
            return report
        finally:
            report_id_var.reset(token)
