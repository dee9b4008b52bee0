import logging
from typing import Optional

from hr_evaluation.core.config import Config, settings as default_settings


class BaseService:
    """
    Common plumbing for the evaluation services: settings access and a
    per-class logger. Services hold no state between calls.
    """

    def __init__(self, settings: Optional[Config] = None):
        self.settings = settings or default_settings
        self._logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    def log_info(self, message: str, **extra) -> None:
        self._logger.info(message, extra=extra or None)

    def log_warning(self, message: str, **extra) -> None:
        self._logger.warning(message, extra=extra or None)

    def log_debug(self, message: str, **extra) -> None:
        self._logger.debug(message, extra=extra or None)
