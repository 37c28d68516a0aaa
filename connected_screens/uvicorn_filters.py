"""Custom filters for uvicorn access logging."""

import logging

from connected_screens.settings import app_settings


class ExcludePathsFilter(logging.Filter):
    """
    Logging filter to exclude monitoring endpoint requests from access logs.

    Health checks and Prometheus scraping would otherwise flood uvicorn's
    access log. The excluded paths are configurable via the
    LOG_EXCLUDED_PATHS setting.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Determine if the log record should be logged.

        Args:
            record: The log record to evaluate.

        Returns:
            False if the request path is in LOG_EXCLUDED_PATHS, True otherwise.
        """
        message = record.getMessage()
        return not any(
            path in message for path in app_settings.LOG_EXCLUDED_PATHS
        )


def install_access_log_filter() -> None:
    """Attach ExcludePathsFilter to uvicorn's access logger once."""
    access_logger = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, ExcludePathsFilter) for f in access_logger.filters):
        access_logger.addFilter(ExcludePathsFilter())
