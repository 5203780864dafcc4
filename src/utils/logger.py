"""Logging configuration for the profiling server.

This module provides structured logging with different handlers for
development, test and production environments, including JSON formatting
for log aggregation in production.
"""

import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger


class ProfilingFormatter(jsonlogger.JsonFormatter):
    """JSON formatter for application logs."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record dictionary to modify
            record: The original logging record
            message_dict: Additional message data
        """
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno
        log_record['application'] = 'profiling-server'

        request_id = _current_request_id()
        if request_id:
            log_record['request_id'] = request_id

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class ContextFilter(logging.Filter):
    """Filter to add fixed contextual fields to log records."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        """Initialize context filter.

        Args:
            context: Additional context to add to all log records
        """
        super().__init__()
        self.context = context or {}

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context to log record."""
        for key, value in self.context.items():
            setattr(record, key, value)
        return True


def _current_request_id() -> Optional[str]:
    # Imported lazily; the middleware module imports this one.
    from src.api.middleware.request_id import request_id_var

    return request_id_var.get()


class LoggerConfig:
    """Logger configuration manager."""

    COMPONENTS = {
        'api': 'profiling.api',
        'database': 'profiling.database',
        'security': 'profiling.security',
        'llm': 'profiling.llm',
    }

    def __init__(
        self,
        environment: str = 'development',
        log_level: str = 'INFO',
        log_format: str = 'text',
        log_dir: Optional[str] = 'logs',
    ):
        """Initialize logger configuration.

        Args:
            environment: Environment name (development, production, test)
            log_level: Default log level
            log_format: ``json`` or ``text`` console output
            log_dir: Directory for file handlers, None disables file logging
        """
        self.environment = environment
        self.log_level = getattr(logging, log_level.upper())
        self.log_format = log_format
        self.log_dir = Path(log_dir) if log_dir and environment != 'test' else None
        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self._configure_root_logger()
        self._configure_component_loggers()

    def _configure_root_logger(self) -> None:
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)
        root_logger.handlers.clear()

        if self.environment == 'production':
            self._add_production_handlers(root_logger)
        elif self.environment == 'test':
            self._add_test_handlers(root_logger)
        else:
            self._add_development_handlers(root_logger)

    def _add_production_handlers(self, logger: logging.Logger) -> None:
        json_formatter = ProfilingFormatter(
            fmt='%(timestamp)s %(level)s %(logger)s %(message)s'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(json_formatter)
        logger.addHandler(console_handler)

        if self.log_dir:
            error_handler = logging.handlers.RotatingFileHandler(
                filename=self.log_dir / "error.log",
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(json_formatter)
            logger.addHandler(error_handler)

    def _add_development_handlers(self, logger: logging.Logger) -> None:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)

        if self.log_format == 'json':
            formatter: logging.Formatter = ProfilingFormatter(
                fmt='%(timestamp)s %(level)s %(logger)s %(message)s'
            )
        else:
            formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)-20s | %(funcName)-15s:%(lineno)-3d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if self.log_dir:
            debug_handler = logging.FileHandler(
                filename=self.log_dir / "debug.log",
                mode='a',
                encoding='utf-8'
            )
            debug_handler.setLevel(logging.DEBUG)
            debug_handler.setFormatter(formatter)
            logger.addHandler(debug_handler)

    def _add_test_handlers(self, logger: logging.Logger) -> None:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter(
            fmt='TEST | %(levelname)s | %(name)s | %(message)s'
        ))
        logger.addHandler(console_handler)

    def _configure_component_loggers(self) -> None:
        for component, logger_name in self.COMPONENTS.items():
            logger = logging.getLogger(logger_name)
            logger.setLevel(self.log_level)
            logger.addFilter(ContextFilter({'component': component}))

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger instance."""
        return logging.getLogger(name)

    def get_component_logger(self, component: str) -> logging.Logger:
        """Get a component-specific logger.

        Args:
            component: Component name (api, database, security, ...)

        Returns:
            logging.Logger: Component logger

        Raises:
            ValueError: If component is not recognized
        """
        if component not in self.COMPONENTS:
            raise ValueError(f"Unknown component: {component}. Available: {list(self.COMPONENTS.keys())}")

        return logging.getLogger(self.COMPONENTS[component])


_logger_config: Optional[LoggerConfig] = None


def setup_logging(
    environment: str = 'development',
    log_level: str = 'INFO',
    log_format: str = 'text',
    log_dir: Optional[str] = 'logs',
) -> LoggerConfig:
    """Setup application logging.

    Args:
        environment: Environment name
        log_level: Log level
        log_format: Console format for development
        log_dir: Directory for log files

    Returns:
        LoggerConfig: Active logger configuration
    """
    global _logger_config
    _logger_config = LoggerConfig(environment, log_level, log_format, log_dir)
    return _logger_config


def get_logger(name: str = __name__) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name, defaults to caller's module name

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)


def get_component_logger(component: str) -> logging.Logger:
    """Get a component-specific logger, configuring defaults when needed."""
    if _logger_config is None:
        setup_logging(environment='test')

    return _logger_config.get_component_logger(component)


def get_api_logger() -> logging.Logger:
    """Get API component logger."""
    return get_component_logger('api')


def get_database_logger() -> logging.Logger:
    """Get database component logger."""
    return get_component_logger('database')


def get_security_logger() -> logging.Logger:
    """Get security component logger."""
    return get_component_logger('security')


def log_api_response(method: str, path: str, status_code: int, duration_ms: float, logger: Optional[logging.Logger] = None) -> None:
    """Log API response.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
        logger: Logger instance
    """
    if logger is None:
        logger = get_api_logger()

    level = logging.WARNING if status_code >= 400 else logging.INFO

    logger.log(level, f"{method} {path} - {status_code}", extra={
        'http_method': method,
        'request_path': path,
        'status_code': status_code,
        'duration_ms': duration_ms,
        'event_type': 'api_response'
    })


def log_security_event(event_type: str, details: Dict[str, Any], severity: str = 'INFO', logger: Optional[logging.Logger] = None) -> None:
    """Log security event.

    Args:
        event_type: Type of security event
        details: Event details
        severity: Event severity (INFO, WARNING, ERROR, CRITICAL)
        logger: Logger instance
    """
    if logger is None:
        logger = get_security_logger()

    level = getattr(logging, severity.upper(), logging.INFO)

    logger.log(level, f"Security event: {event_type}", extra={
        'security_event_type': event_type,
        'event_details': details,
        'severity': severity,
        'event_type': 'security_event'
    })


class PerformanceLogger:
    """Context manager for performance logging."""

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None, extra: Optional[Dict[str, Any]] = None):
        """Initialize performance logger.

        Args:
            operation: Operation name
            logger: Logger instance
            extra: Additional fields to log
        """
        self.operation = operation
        self.logger = logger or get_logger()
        self.extra = extra or {}
        self.start_time: Optional[datetime] = None

    def __enter__(self) -> 'PerformanceLogger':
        """Start timing."""
        self.start_time = datetime.now(timezone.utc)
        self.logger.debug(f"Starting {self.operation}", extra={
            'operation': self.operation,
            'event_type': 'performance_start',
            **self.extra
        })
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """End timing and log result."""
        if self.start_time:
            duration = datetime.now(timezone.utc) - self.start_time
            duration_ms = duration.total_seconds() * 1000

            level = logging.WARNING if duration_ms > 5000 else logging.DEBUG

            self.logger.log(level, f"Completed {self.operation}", extra={
                'operation': self.operation,
                'duration_ms': duration_ms,
                'event_type': 'performance_end',
                'success': exc_type is None,
                **self.extra
            })
