"""Data models for transactions and their derived views."""

from .transaction import (
    Accounting,
    AccountingEntry,
    AccountType,
    Capture,
    CaptureSource,
    PaymentMethodEntry,
    ReconciliationStatus,
    ReconciliationType,
    Transaction,
    TransactionKind,
    TransactionMetadata,
    TransactionSummary,
    VerificationStatus,
)
from .views import (
    DateGroup,
    DateRange,
    LedgerRow,
    PipelineColumn,
    TransactionStub,
)

__all__ = [
    "Accounting",
    "AccountingEntry",
    "AccountType",
    "Capture",
    "CaptureSource",
    "PaymentMethodEntry",
    "ReconciliationStatus",
    "ReconciliationType",
    "Transaction",
    "TransactionKind",
    "TransactionMetadata",
    "TransactionSummary",
    "VerificationStatus",
    "DateGroup",
    "DateRange",
    "LedgerRow",
    "PipelineColumn",
    "TransactionStub",
]
