"""Pipeline boards: column definitions and the classifier."""

from .columns import ColumnSpec, Partition, Pipeline, PIPELINE_COLUMNS
from .engine import PipelineClassifier, TransactionPartitions

__all__ = [
    "ColumnSpec",
    "Partition",
    "Pipeline",
    "PIPELINE_COLUMNS",
    "PipelineClassifier",
    "TransactionPartitions",
]
