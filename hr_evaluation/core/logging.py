import logging
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger
from contextvars import ContextVar

# Context variable to store the report_id for the report currently being built
report_id_var: ContextVar[str] = ContextVar("report_id", default="")

_HANDLER_NAME = "hr_evaluation_json"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)

        # Inject correlation ID if available
        report_id = report_id_var.get()
        if report_id:
            log_record["report_id"] = report_id

        if not log_record.get("timestamp"):
            from datetime import datetime, timezone
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Install the JSON handler on the root logger. `level` defaults to LOG_LEVEL."""
    if level is None:
        from hr_evaluation.core.config import settings
        level = settings.log_level
    logger = logging.getLogger()

    # Idempotent: repeated calls only adjust the level
    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in logger.handlers):
        log_handler = logging.StreamHandler()
        log_handler.set_name(_HANDLER_NAME)
        formatter = CustomJsonFormatter("%(timestamp) %(level) %(name) %(message)")
        log_handler.setFormatter(formatter)
        logger.addHandler(log_handler)

    logger.setLevel(level)
    return logger
