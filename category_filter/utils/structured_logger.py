"""
Structured JSON logging for Lambda functions.

This module provides a structured logger that outputs JSON-formatted
logs with correlation IDs, context, and standardized fields for
CloudWatch Logs Insights queries.
"""

import json
import logging
import os
import time
from typing import Optional
from datetime import datetime, timezone
from decimal import Decimal


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal types."""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        return str(obj)


class StructuredLogger:
    """
    Structured JSON logger for Lambda functions.

    Outputs logs in JSON format with:
    - Timestamp (ISO 8601)
    - Log level
    - Correlation IDs (requestId, cacheKey)
    - Component and operation
    - Message and additional context
    """

    def __init__(
        self,
        component: str,
        request_id: Optional[str] = None,
        cache_key: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component name (e.g., 'FilterHandler', 'FragmentCache')
            request_id: Request identifier from Lambda context
            cache_key: Fragment cache key of the request being served
        """
        self.component = component
        self.request_id = request_id
        self.cache_key = cache_key
        self.logger = logging.getLogger(component)

        log_level = os.getenv('LOG_LEVEL', 'INFO')
        self.logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    def _format_log(
        self,
        level: str,
        message: str,
        operation: Optional[str] = None,
        **kwargs
    ) -> str:
        """
        Format log entry as JSON.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            message: Log message
            operation: Operation being performed
            **kwargs: Additional context fields

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'component': self.component,
            'message': message
        }

        if self.request_id:
            log_entry['requestId'] = self.request_id
        if self.cache_key:
            log_entry['cacheKey'] = self.cache_key

        if operation:
            log_entry['operation'] = operation

        if kwargs:
            log_entry['context'] = kwargs

        return json.dumps(log_entry, cls=DecimalEncoder)

    def debug(self, message: str, operation: Optional[str] = None, **kwargs) -> None:
        """Log debug message."""
        self.logger.debug(self._format_log('DEBUG', message, operation, **kwargs))

    def info(self, message: str, operation: Optional[str] = None, **kwargs) -> None:
        """Log info message."""
        self.logger.info(self._format_log('INFO', message, operation, **kwargs))

    def warning(self, message: str, operation: Optional[str] = None, **kwargs) -> None:
        """Log warning message."""
        self.logger.warning(self._format_log('WARNING', message, operation, **kwargs))

    def error(
        self,
        message: str,
        operation: Optional[str] = None,
        error: Optional[Exception] = None,
        exc_info: bool = False,
        **kwargs
    ) -> None:
        """
        Log error message.

        Args:
            message: Log message
            operation: Operation being performed
            error: Exception object if available
            exc_info: Attach the active traceback
            **kwargs: Additional context
        """
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_message'] = str(error)

        self.logger.error(
            self._format_log('ERROR', message, operation, **kwargs),
            exc_info=exc_info
        )

    def log_cache_result(self, cache_name: str, hit: bool, **kwargs) -> None:
        """
        Log a cache lookup outcome at DEBUG level.

        Args:
            cache_name: Cache being read ('fragment', 'terms')
            hit: True on cache hit
            **kwargs: Additional context
        """
        self.debug(
            f'Cache {"hit" if hit else "miss"}: {cache_name}',
            operation='cache_lookup',
            cache_name=cache_name,
            hit=hit,
            **kwargs
        )

    def log_performance(self, operation: str, duration_ms: float, **kwargs) -> None:
        """
        Log performance metric at DEBUG level.

        Args:
            operation: Operation name
            duration_ms: Duration in milliseconds
            **kwargs: Additional context
        """
        self.debug(
            f'Performance: {operation}',
            operation='performance',
            operation_name=operation,
            duration_ms=duration_ms,
            **kwargs
        )


class LoggingContext:
    """
    Context manager for logging operation duration.

    Automatically logs operation start, end, and duration.
    """

    def __init__(self, logger: StructuredLogger, operation: str, **kwargs):
        """
        Initialize logging context.

        Args:
            logger: StructuredLogger instance
            operation: Operation name
            **kwargs: Additional context
        """
        self.logger = logger
        self.operation = operation
        self.context = kwargs
        self.start_time: Optional[float] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self):
        """Log operation start."""
        self.start_time = time.time()
        self.logger.debug(
            f'Starting operation: {self.operation}',
            operation=self.operation,
            **self.context
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Log operation end and duration."""
        if self.start_time is not None:
            self.duration_ms = (time.time() - self.start_time) * 1000

            if exc_type is not None:
                self.logger.error(
                    f'Operation failed: {self.operation}',
                    operation=self.operation,
                    error=exc_val,
                    duration_ms=self.duration_ms,
                    **self.context
                )
            else:
                self.logger.debug(
                    f'Completed operation: {self.operation}',
                    operation=self.operation,
                    duration_ms=self.duration_ms,
                    **self.context
                )


def get_structured_logger(
    component: str,
    request_id: Optional[str] = None,
    cache_key: Optional[str] = None
) -> StructuredLogger:
    """
    Factory function for creating StructuredLogger instances.

    Args:
        component: Name of the component (e.g., 'FilterHandler')
        request_id: Optional request ID from Lambda context
        cache_key: Optional fragment cache key

    Returns:
        Configured StructuredLogger instance

    Example:
        >>> logger = get_structured_logger('FilterHandler', request_id='abc-123')
        >>> logger.info('Filter request received')
    """
    return StructuredLogger(
        component=component,
        request_id=request_id,
        cache_key=cache_key
    )


def configure_lambda_logging():
    """
    Configure logging for Lambda environment.

    Sets up root logger to output to stdout with appropriate format.
    Should be called at module level in Lambda handlers.
    """
    log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(message)s',  # Just the message, we format as JSON
        force=True
    )

    if log_level != 'DEBUG':
        logging.getLogger('boto3').setLevel(logging.WARNING)
        logging.getLogger('botocore').setLevel(logging.WARNING)
        logging.getLogger('urllib3').setLevel(logging.WARNING)
