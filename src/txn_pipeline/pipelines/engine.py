"""
Pipeline classifier.

Partitions transaction collections into the ordered columns of a pipeline
board. Input collections are never mutated.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional
import logging

from ..classification.status import is_reporting_ready
from ..config import PipelineConfig
from ..context import BusinessContext
from ..models.transaction import Transaction
from ..models.views import PipelineColumn, TransactionStub
from ..presentation import (
    AmountFormatter,
    deduplicate_transactions,
    format_amount,
    sort_most_recent_first,
    to_stub,
)
from ..utils.exceptions import ColumnNotFoundError
from .columns import PIPELINE_COLUMNS, ColumnSpec, Partition, Pipeline

logger = logging.getLogger(__name__)


@dataclass
class TransactionPartitions:
    """
    Transactions fetched from the two server-side collections.

    ``pending`` holds unverified records, ``source_of_truth`` verified ones.
    Each collection is deduplicated by id on construction, keeping the
    first occurrence.
    """

    pending: list[Transaction] = field(default_factory=list)
    source_of_truth: list[Transaction] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.pending = deduplicate_transactions(self.pending)
        self.source_of_truth = deduplicate_transactions(self.source_of_truth)

    @classmethod
    def merge(
        cls,
        pending: Iterable[Iterable[Transaction]] = (),
        source_of_truth: Iterable[Iterable[Transaction]] = (),
    ) -> "TransactionPartitions":
        """
        Combine several query results per collection.

        Args:
            pending: Result pages/queries against the pending collection
            source_of_truth: Result pages/queries against the source-of-truth collection

        Returns:
            Deduplicated partitions, earlier batches taking precedence
        """
        return cls(
            pending=[tx for batch in pending for tx in batch],
            source_of_truth=[tx for batch in source_of_truth for tx in batch],
        )

    @property
    def all(self) -> list[Transaction]:
        return deduplicate_transactions(self.pending + self.source_of_truth)

    def get(self, partition: Partition) -> list[Transaction]:
        if partition is Partition.PENDING:
            return self.pending
        if partition is Partition.SOURCE_OF_TRUTH:
            return self.source_of_truth
        return self.all


class PipelineClassifier:
    """
    Builds pipeline boards from transaction partitions.

    Every column is filtered by its membership test, sorted most recent
    first, and capped for the summary board.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        context: Optional[BusinessContext] = None,
        formatter: AmountFormatter = format_amount,
    ):
        """
        Initialize the classifier.

        Args:
            config: Application configuration (defaults when omitted)
            context: Active business; other businesses' records are excluded
            formatter: Amount formatter used for stubs
        """
        self.config = config or PipelineConfig()
        if context is None and self.config.business.business_id:
            context = BusinessContext(self.config.business.business_id)
        self.context = context
        self.formatter = formatter

    @staticmethod
    def columns_for(pipeline: Pipeline) -> tuple[ColumnSpec, ...]:
        return PIPELINE_COLUMNS[pipeline]

    def _scope(self, transactions: list[Transaction]) -> list[Transaction]:
        if self.context is None:
            return transactions
        scoped = self.context.scope(transactions)
        excluded = len(transactions) - len(scoped)
        if excluded:
            logger.debug(
                f"Excluded {excluded} transactions outside business {self.context.business_id}"
            )
        return scoped

    def column_transactions(
        self, spec: ColumnSpec, partitions: TransactionPartitions
    ) -> list[Transaction]:
        """
        Transactions belonging to a column, most recent first.

        Args:
            spec: Column definition
            partitions: Source collections

        Returns:
            Matching transactions, uncapped
        """
        candidates = self._scope(partitions.get(spec.partition))
        return sort_most_recent_first(tx for tx in candidates if spec.matches(tx))

    def _stub(self, spec: ColumnSpec, tx: Transaction) -> TransactionStub:
        return to_stub(
            tx,
            formatter=self.formatter,
            title_fallback=spec.title_fallback,
            max_title_length=self.config.pipeline.title_max_length,
        )

    def classify(
        self,
        pipeline: Pipeline,
        partitions: TransactionPartitions,
        show_all: bool = False,
    ) -> list[PipelineColumn]:
        """
        Build the board for a pipeline.

        Args:
            pipeline: Pipeline to build
            partitions: Source collections
            show_all: Skip the summary cap and list every member

        Returns:
            Columns in pipeline order
        """
        limit = None if show_all else self.config.pipeline.summary_limit

        columns: list[PipelineColumn] = []
        for spec in self.columns_for(pipeline):
            members = self.column_transactions(spec, partitions)
            shown = members if limit is None else members[:limit]
            columns.append(
                PipelineColumn(
                    title=spec.title,
                    actions=list(spec.actions),
                    transactions=[self._stub(spec, tx) for tx in shown],
                    total_count=len(members),
                )
            )
            logger.debug(f"{pipeline.value} / {spec.title}: {len(members)} transactions")

        logger.info(
            f"Classified {pipeline.value} pipeline: "
            + ", ".join(f"{c.title}={c.total_count}" for c in columns)
        )
        return columns

    def view_all(
        self,
        pipeline: Pipeline,
        column_title: str,
        partitions: TransactionPartitions,
    ) -> list[TransactionStub]:
        """
        Every transaction in one column, most recent first.

        Raises:
            ColumnNotFoundError: If the pipeline has no column with that title
        """
        spec = next(
            (c for c in self.columns_for(pipeline) if c.title == column_title), None
        )
        if spec is None:
            raise ColumnNotFoundError(
                f"Pipeline '{pipeline.value}' has no column '{column_title}'"
            )
        return [self._stub(spec, tx) for tx in self.column_transactions(spec, partitions)]

    def reporting_ready(self, partitions: TransactionPartitions) -> list[TransactionStub]:
        """Reporting-ready source-of-truth transactions, most recent first."""
        ready = [
            tx for tx in self._scope(partitions.source_of_truth) if is_reporting_ready(tx)
        ]
        return [
            to_stub(
                tx,
                formatter=self.formatter,
                max_title_length=self.config.pipeline.title_max_length,
            )
            for tx in sort_most_recent_first(ready)
        ]
