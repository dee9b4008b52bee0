import logging
import pytest
import os
from datetime import date
from itertools import count

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("EVAL_BONUS_THRESHOLD", "4.2")

from hr_evaluation.core.config import Config
from hr_evaluation.schemas.evaluation import EvaluationRecord
from hr_evaluation.schemas.viewer import ViewerContext, ViewerRole

ELEMENTARY = "Elementary"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Services install the JSON handler on the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(scope="function")
def settings():
    """Fresh default settings so tests never share mutated config."""
    return Config()


@pytest.fixture(scope="function")
def make_record():
    """Factory for evaluation records with sensible defaults."""
    ids = count(1)

    def _make_record(
        employee_id=1,
        score=4.0,
        on=date(2024, 3, 15),
        departments=(ELEMENTARY,),
        name=None,
        evaluator_id=99,
        position=None,
    ):
        return EvaluationRecord(
            evaluation_id=next(ids),
            employee_id=employee_id,
            employee_name=name or f"Employee {employee_id}",
            evaluator_id=evaluator_id,
            evaluation_date=on,
            final_score=score,
            employee_departments=departments,
            employee_position=position,
        )
    return _make_record


@pytest.fixture(scope="function")
def admin_viewer():
    return ViewerContext(role=ViewerRole.ADMIN)


@pytest.fixture(scope="function")
def coordinator_viewer():
    return ViewerContext(role=ViewerRole.COORDINATOR, department=ELEMENTARY)
