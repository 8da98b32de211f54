"""Utility modules."""

from .exceptions import (
    PipelineError,
    TransactionLoadError,
    ConfigurationError,
    ColumnNotFoundError,
    ReportGenerationError,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    "PipelineError",
    "TransactionLoadError",
    "ConfigurationError",
    "ColumnNotFoundError",
    "ReportGenerationError",
    "setup_logging",
    "get_logger",
]
