import enum
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class ViewerRole(str, enum.Enum):
    """
    Roles of the HR system as resolved by the authentication layer.

    - ADMIN: Full access, all departments
    - HR: Full access, all departments
    - COORDINATOR: Department head, sees a single department
    - TEACHING / NON_TEACHING: Employee self-service, own evaluations only
    """
    ADMIN = "ADMIN"
    HR = "HR"
    COORDINATOR = "COORDINATOR"
    TEACHING = "TEACHING"
    NON_TEACHING = "NON_TEACHING"


class ReportView(str, enum.Enum):
    PERIOD_HISTORY = "period_history"
    YEARLY_TOTALS = "yearly_totals"
    ELIGIBILITY = "eligibility"


VISIBLE_VIEWS: Dict[ViewerRole, FrozenSet[ReportView]] = {
    ViewerRole.ADMIN: frozenset(ReportView),
    ViewerRole.HR: frozenset(ReportView),
    ViewerRole.COORDINATOR: frozenset(ReportView),
    ViewerRole.TEACHING: frozenset({ReportView.PERIOD_HISTORY, ReportView.YEARLY_TOTALS}),
    ViewerRole.NON_TEACHING: frozenset({ReportView.PERIOD_HISTORY, ReportView.YEARLY_TOTALS}),
}

EMPLOYEE_ROLES: FrozenSet[ViewerRole] = frozenset({ViewerRole.TEACHING, ViewerRole.NON_TEACHING})


class ViewerContext(BaseModel):
    """Already-resolved identity of whoever is looking at the report."""
    model_config = ConfigDict(frozen=True)

    role: ViewerRole
    department: Optional[str] = None
    employee_id: Optional[int] = None

    @model_validator(mode="after")
    def check_scope(self) -> "ViewerContext":
        if self.role == ViewerRole.COORDINATOR and not self.department:
            raise ValueError("A coordinator viewer must carry the department they coordinate")
        if self.role in EMPLOYEE_ROLES and self.employee_id is None:
            raise ValueError("An employee viewer must carry their own employee_id")
        return self

    @property
    def is_coordinator(self) -> bool:
        return self.role == ViewerRole.COORDINATOR

    @property
    def is_employee(self) -> bool:
        return self.role in EMPLOYEE_ROLES

    @property
    def is_scoped(self) -> bool:
        return self.is_coordinator or self.is_employee

    @property
    def scope_department(self) -> Optional[str]:
        """Department the viewer is restricted to, or None when unscoped."""
        return self.department if self.is_coordinator else None

    @property
    def views(self) -> FrozenSet[ReportView]:
        return VISIBLE_VIEWS[self.role]

    def can_view(self, view: ReportView) -> bool:
        return view in self.views
