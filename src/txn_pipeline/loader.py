"""
Transaction file loader.

Reads JSON exports of the transactions API and validates each record into a
Transaction. Accepts a bare list of records, a list response
(``{"transactions": [...]}``) or a partitions document
(``{"pending": [...], "source_of_truth": [...]}``).
"""

from pathlib import Path
from typing import Any, Optional
import json
import logging

from pydantic import ValidationError

from .models.transaction import Transaction
from .pipelines.engine import TransactionPartitions
from .utils.exceptions import TransactionLoadError

logger = logging.getLogger(__name__)

PARTITION_KEYS = ("pending", "source_of_truth")


class TransactionLoader:
    """
    Loader for transaction JSON files.

    Records that fail validation are logged and skipped so that one bad
    record does not hide the rest.
    """

    def __init__(self, encoding: str = "utf-8"):
        """
        Args:
            encoding: File encoding
        """
        self.encoding = encoding

    def _read(self, file_path: Path) -> Any:
        logger.info(f"Reading transactions file: {file_path}")
        try:
            with open(file_path, "r", encoding=self.encoding) as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read transactions file: {e}")
            raise TransactionLoadError(f"Failed to read transactions file: {e}") from e

    def load_partitions(self, file_path: Path) -> TransactionPartitions:
        """
        Load a file into pending/source-of-truth partitions.

        Flat files (a list or a list response) are treated as the
        source-of-truth collection.

        Raises:
            TransactionLoadError: If the file cannot be read or has no records
        """
        document = self._read(file_path)

        if isinstance(document, dict) and any(key in document for key in PARTITION_KEYS):
            partitions = TransactionPartitions(
                pending=self.parse_records(document.get("pending"), "pending"),
                source_of_truth=self.parse_records(
                    document.get("source_of_truth"), "source_of_truth"
                ),
            )
        else:
            partitions = TransactionPartitions(
                source_of_truth=self.parse_records(_records_of(document), "transactions")
            )

        logger.info(
            f"Loaded {len(partitions.pending)} pending and "
            f"{len(partitions.source_of_truth)} source-of-truth transactions"
        )
        return partitions

    def load_file(self, file_path: Path) -> list[Transaction]:
        """
        Load every transaction in a file, whatever its layout.

        Returns:
            Deduplicated transactions, pending first
        """
        return self.load_partitions(file_path).all

    def parse_records(self, records: Optional[Any], label: str = "transactions") -> list[Transaction]:
        """
        Validate raw records.

        Args:
            records: List of raw record mappings (None is treated as empty)
            label: Collection name for log messages

        Returns:
            Valid transactions in input order

        Raises:
            TransactionLoadError: If ``records`` is not a list
        """
        if records is None:
            return []
        if not isinstance(records, list):
            raise TransactionLoadError(f"'{label}' must be a list of records")

        transactions: list[Transaction] = []
        for idx, record in enumerate(records):
            try:
                transactions.append(Transaction.model_validate(record))
            except ValidationError as e:
                logger.warning(
                    f"{label}[{idx}]: invalid transaction record, skipping "
                    f"({e.error_count()} errors)"
                )
                logger.debug(str(e))
                continue

        return transactions


def _records_of(document: Any) -> Any:
    if isinstance(document, dict):
        if "transactions" not in document:
            raise TransactionLoadError("Expected a 'transactions' list or partition keys")
        return document["transactions"]
    return document
