"""Custom exceptions for the transaction pipeline package."""


class PipelineError(Exception):
    """Base exception for transaction pipeline errors."""

    pass


class TransactionLoadError(PipelineError):
    """Error reading a transactions file."""

    pass


class ConfigurationError(PipelineError):
    """Error in configuration."""

    pass


class ColumnNotFoundError(PipelineError):
    """Requested column does not exist in the pipeline."""

    pass


class ReportGenerationError(PipelineError):
    """Error generating Excel report."""

    pass
