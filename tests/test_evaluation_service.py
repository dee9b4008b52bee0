import logging

import pytest
from datetime import date

from hr_evaluation.core.config import Config
from hr_evaluation.core.exceptions import AccessDeniedError, InvalidRecordError
from hr_evaluation.core.logging import CustomJsonFormatter, report_id_var
from hr_evaluation.schemas.evaluation import Period
from hr_evaluation.schemas.viewer import ReportView, ViewerContext, ViewerRole
from hr_evaluation.services.evaluation_service import EvaluationReportService

ELEMENTARY = "Elementary"
COLLEGE = "College of Education"


@pytest.fixture
def service(settings):
    return EvaluationReportService(settings)


@pytest.fixture
def school_records(make_record):
    records = []
    # Elementary teacher with all four quarters in 2024
    for month, score in [(1, 4.5), (4, 4.5), (7, 4.0), (10, 4.6)]:
        records.append(make_record(employee_id=1, score=score, on=date(2024, month, 10),
                                   departments=(ELEMENTARY,), name="Ana"))
    # College instructor with both semesters in 2024 and one in 2023
    records.append(make_record(employee_id=2, score=3.8, on=date(2023, 9, 1), departments=(COLLEGE,), name="Ben"))
    records.append(make_record(employee_id=2, score=4.0, on=date(2024, 2, 1), departments=(COLLEGE,), name="Ben"))
    records.append(make_record(employee_id=2, score=4.2, on=date(2024, 8, 1), departments=(COLLEGE,), name="Ben"))
    return records


def test_visible_views_per_role(service):
    assert service.visible_views(ViewerContext(role=ViewerRole.ADMIN)) == frozenset(ReportView)
    employee = ViewerContext(role=ViewerRole.TEACHING, employee_id=1)
    assert ReportView.ELIGIBILITY not in service.visible_views(employee)


def test_employee_cannot_see_eligibility(service, school_records):
    employee = ViewerContext(role=ViewerRole.TEACHING, employee_id=1)
    with pytest.raises(AccessDeniedError) as exc_info:
        service.eligibility(school_records, employee)
    assert exc_info.value.error_code == "PERMISSION_DENIED"


def test_yearly_totals_default_to_most_recent_year(service, school_records, admin_viewer):
    report = service.yearly_totals(school_records, admin_viewer)
    assert report.year == 2024
    assert [t.employee_id for t in report.totals] == [1, 2]
    assert [t.employee_id for t in report.quarter_totals] == [1]
    assert [t.employee_id for t in report.semester_totals] == [2]
    assert report.totals[1].total_score == pytest.approx(4.1)


def test_coordinator_sees_only_their_department(service, school_records, coordinator_viewer):
    totals = service.yearly_totals(school_records, coordinator_viewer, 2024)
    assert [t.employee_id for t in totals.totals] == [1]

    result = service.eligibility(school_records, coordinator_viewer)
    assert [e.employee_name for e in result.eligible] == ["Ana"]
    assert result.not_eligible == []

    buckets = service.period_buckets(school_records, coordinator_viewer)
    assert all(r.employee_id == 1 for r in buckets.S1 + buckets.S2)


def test_department_picker_ignored_for_scoped_viewer(service, school_records, coordinator_viewer, admin_viewer):
    picked = service.period_history(school_records, admin_viewer, Period.S1, department=COLLEGE)
    assert [r.employee_id for r in picked] == [2]

    scoped = service.period_history(school_records, coordinator_viewer, Period.Q1, department=COLLEGE)
    assert [r.employee_id for r in scoped] == [1]


def test_build_report_for_admin(service, school_records, admin_viewer):
    raw = [r.model_dump(by_alias=True) for r in school_records]
    raw.insert(2, {"employeeID": 9, "evaluatorID": 1, "evaluationDate": "31/12/2024", "finalScore": 4.0})

    report = service.build_report(raw, admin_viewer)
    assert report.accepted_count == len(school_records)
    assert [r.index for r in report.rejected] == [2]
    assert report.available_years == [2024, 2023]
    assert report.views == [ReportView.PERIOD_HISTORY, ReportView.YEARLY_TOTALS, ReportView.ELIGIBILITY]
    assert report.yearly_totals.year == 2024
    assert [e.employee_name for e in report.eligibility.eligible] == ["Ana"]
    assert report.eligibility.not_eligible == ["Ben"]
    assert report.to_dict()["viewer_role"] == "ADMIN"
    # correlation id is only bound while the report is built
    assert report.report_id
    assert report_id_var.get() == ""


def test_build_report_for_employee_is_self_scoped(service, school_records):
    viewer = ViewerContext(role=ViewerRole.NON_TEACHING, employee_id=2)
    report = service.build_report(school_records, viewer, year=2023)
    assert report.eligibility is None
    assert report.yearly_totals.year == 2023
    assert [t.employee_id for t in report.yearly_totals.totals] == [2]
    assert {r.employee_id for r in report.period_buckets.S2} == {2}


def test_employee_totals_span_all_years_by_default(service, school_records):
    """Self-service totals fold every year into one row unless a year is picked."""
    viewer = ViewerContext(role=ViewerRole.NON_TEACHING, employee_id=2)
    totals = service.build_report(school_records, viewer).yearly_totals
    assert totals.all_years is True
    assert totals.year is None
    [ben] = totals.totals
    assert ben.evaluation_count == 3
    assert ben.first_semester_score == pytest.approx(4.0)
    # 2024-08 lands in the same semester as 2023-09 and replaces it
    assert ben.second_semester_score == pytest.approx(4.2)
    assert ben.total_score == pytest.approx(4.1)


def test_unscoped_totals_still_default_to_latest_year(service, school_records, admin_viewer):
    totals = service.yearly_totals(school_records, admin_viewer)
    assert totals.all_years is False
    assert totals.year == 2024


def test_service_applies_configured_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    config = Config()
    assert config.log_level == "DEBUG"
    EvaluationReportService(config)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h.formatter, CustomJsonFormatter) for h in root.handlers)


def test_build_report_strict_intake(settings, school_records, admin_viewer):
    settings.strict_records = True
    service = EvaluationReportService(settings)
    with pytest.raises(InvalidRecordError):
        service.build_report([{"employeeID": "x"}], admin_viewer)
    assert report_id_var.get() == ""


def test_reset_evaluations_leaves_no_residue(service, school_records, admin_viewer):
    service.build_report(school_records, admin_viewer)
    report = service.build_report([], admin_viewer)
    assert report.period_buckets.is_empty()
    assert report.yearly_totals.year is None
    assert report.yearly_totals.totals == []
    assert report.eligibility.eligible == []
    assert report.eligibility.not_eligible == []
