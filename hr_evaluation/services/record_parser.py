"""
Intake of raw evaluation payloads.

Payloads come from the evaluations API already joined with department names.
A payload that fails validation is rejected on its own; the remaining
records are still processed.
"""
import logging
from typing import Any, Iterable, List

from pydantic import BaseModel, ConfigDict, ValidationError

from hr_evaluation.core.exceptions import InvalidRecordError
from hr_evaluation.schemas.evaluation import EvaluationRecord

logger = logging.getLogger(__name__)


class ParsedRecords(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    records: List[EvaluationRecord] = []
    rejected: List[InvalidRecordError] = []

    @property
    def accepted_count(self) -> int:
        return len(self.records)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)


def _reason(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "record"
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


def parse_record(index: int, item: Any) -> EvaluationRecord:
    if isinstance(item, EvaluationRecord):
        return item
    try:
        return EvaluationRecord.model_validate(item)
    except ValidationError as e:
        raise InvalidRecordError(index, item, _reason(e)) from e


def parse_records(items: Iterable[Any], strict: bool = False) -> ParsedRecords:
    """
    Validate every payload.

    Args:
        items: Mappings in the API's shape, or EvaluationRecord instances
        strict: Raise the first InvalidRecordError instead of collecting it

    Returns:
        ParsedRecords with the valid records in input order and the rejections
    """
    records: List[EvaluationRecord] = []
    rejected: List[InvalidRecordError] = []

    for index, item in enumerate(items):
        try:
            records.append(parse_record(index, item))
        except InvalidRecordError as e:
            if strict:
                raise
            logger.warning(e.message, extra={"code": e.error_code})
            rejected.append(e)

    return ParsedRecords(records=records, rejected=rejected)
