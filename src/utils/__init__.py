"""Profiling server utilities package.

This package provides score normalization, answer quality checks, JSON
helpers, the exception hierarchy and logging used throughout the server.
"""

from src.utils.answer_quality import collect_invalid_answers, is_likely_invalid
from src.utils.datetime_utils import ensure_utc, format_datetime_iso, utc_now
from src.utils.exceptions import (
    BadRequestError,
    DatabaseConnectionError,
    DataSaveError,
    ExternalServiceError,
    NotFoundError,
    ProfilingError,
    ResourceNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from src.utils.json_utils import extract_json_from_text, is_valid_json, parse_json
from src.utils.logger import (
    PerformanceLogger,
    get_api_logger,
    get_database_logger,
    get_logger,
    get_security_logger,
    log_api_response,
    log_security_event,
    setup_logging,
)
from src.utils.score_utils import normalize_scores, round_scores, scores_total

__all__ = [
    # Scores
    "normalize_scores",
    "round_scores",
    "scores_total",

    # Answer quality
    "collect_invalid_answers",
    "is_likely_invalid",

    # JSON
    "extract_json_from_text",
    "is_valid_json",
    "parse_json",

    # DateTime utilities
    "ensure_utc",
    "format_datetime_iso",
    "utc_now",

    # Exception classes
    "ProfilingError",
    "BadRequestError",
    "ValidationError",
    "UnauthorizedError",
    "NotFoundError",
    "ResourceNotFoundError",
    "DatabaseConnectionError",
    "DataSaveError",
    "ExternalServiceError",

    # Logger functions
    "get_logger",
    "get_api_logger",
    "get_database_logger",
    "get_security_logger",
    "setup_logging",
    "log_api_response",
    "log_security_event",
    "PerformanceLogger",
]
