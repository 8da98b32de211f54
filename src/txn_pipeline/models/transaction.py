"""Data models for transaction records as returned by the transactions backend."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


class TransactionKind(str, Enum):
    """Classification kind of a transaction."""

    SALE = "sale"
    PURCHASE = "purchase"
    STATEMENT_ENTRY = "statement_entry"
    # Never sent by the backend; returned when no signal identifies the kind
    UNKNOWN = "unknown"


class CaptureSource(str, Enum):
    """Known provenance tags for ``metadata.capture.source``."""

    PURCHASE_INVOICE_OCR = "purchase_invoice_ocr"
    MANUAL_ENTRY = "manual_entry"
    BANK_STATEMENT_UPLOAD = "bank_statement_upload"
    BANK_STATEMENT_OCR = "bank_statement_ocr"  # Legacy alias of BANK_STATEMENT_UPLOAD
    CREDIT_CARD_STATEMENT_UPLOAD = "credit_card_statement_upload"
    POS_ONE_OFF_ITEM = "pos_one_off_item"


class VerificationStatus(str, Enum):
    """Verification state of a transaction."""

    UNVERIFIED = "unverified"
    VERIFIED = "verified"
    EXCEPTION = "exception"


class ReconciliationStatus(str, Enum):
    """Reconciliation state of a transaction."""

    UNRECONCILED = "unreconciled"
    PENDING_BANK_MATCH = "pending_bank_match"
    MATCHED = "matched"  # Legacy, equivalent to RECONCILED
    RECONCILED = "reconciled"
    EXCEPTION = "exception"
    NOT_REQUIRED = "not_required"


class ReconciliationType(str, Enum):
    """Which external statement a purchase reconciles against."""

    BANK_TRANSFER = "bank_transfer"
    CARD = "card"


class AccountType(str, Enum):
    """Chart-of-accounts account type."""

    EXPENSE = "expense"
    ASSET = "asset"
    INCOME = "income"
    LIABILITY = "liability"
    EQUITY = "equity"


class WireModel(BaseModel):
    """
    Base for models read from backend JSON.

    Accepts camelCase wire names and snake_case field names, and keeps
    fields this client does not know about.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


def _none_as_empty(value: Any) -> Any:
    """Treat an explicit JSON null section as an empty one."""
    return {} if value is None else value


def _none_as_default(model: type[BaseModel], value: Any, info: ValidationInfo) -> Any:
    """Treat an explicit JSON null scalar as the field default."""
    if value is None:
        return model.model_fields[info.field_name].get_default(call_default_factory=True)
    return value


class TransactionSummary(WireModel):
    """Headline figures of a transaction."""

    third_party_name: Optional[str] = None
    description: Optional[str] = None

    # Signed total in major units
    total_amount: Decimal = Decimal("0")
    sub_total_before_charges: Optional[Decimal] = None

    currency: str = "GBP"

    # Epoch milliseconds
    transaction_date: int = 0

    @field_validator("total_amount", "currency", "transaction_date", mode="before")
    @classmethod
    def _null_scalars(cls, value: Any, info: ValidationInfo) -> Any:
        return _none_as_default(cls, value, info)

    @field_validator("transaction_date")
    @classmethod
    def _representable_date(cls, value: int) -> int:
        """Reject timestamps that cannot be read as a local datetime."""
        try:
            datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"transactionDate {value} is out of range") from e
        return value


class Classification(WireModel):
    """Backend classification of the transaction."""

    kind: Optional[str] = None
    confidence: Optional[float] = None
    needs_review: Optional[bool] = None


class Capture(WireModel):
    """How the transaction entered the system."""

    source: Optional[str] = None
    mechanism: Optional[str] = None


class Verification(WireModel):
    status: Optional[str] = None


class Reconciliation(WireModel):
    status: Optional[str] = None
    type: Optional[str] = None


class StatementContext(WireModel):
    """Flags set by statement ingestion."""

    is_credit: Optional[bool] = None


class TransactionMetadata(WireModel):
    """Provenance, classification and workflow state of a transaction."""

    business_id: Optional[str] = None
    reference: Optional[str] = None

    classification: Classification = Field(default_factory=Classification)
    capture: Capture = Field(default_factory=Capture)
    verification: Verification = Field(default_factory=Verification)
    reconciliation: Reconciliation = Field(default_factory=Reconciliation)
    statement_context: StatementContext = Field(default_factory=StatementContext)

    @field_validator(
        "classification",
        "capture",
        "verification",
        "reconciliation",
        "statement_context",
        mode="before",
    )
    @classmethod
    def _empty_sections(cls, value: Any) -> Any:
        return _none_as_empty(value)


class AccountingEntry(WireModel):
    """
    A single debit or credit line.

    Amounts are always non-negative; direction comes from which side the
    entry is on and from the chart flags.
    """

    chart_name: Optional[str] = None
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    is_asset: Optional[bool] = None
    is_liability: Optional[bool] = None
    is_income: Optional[bool] = None
    payment_method: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _null_amount(cls, value: Any, info: ValidationInfo) -> Any:
        return _none_as_default(cls, value, info)


class PaymentMethodEntry(WireModel):
    """A payment breakdown line, named by ``type`` or legacy ``paymentType``."""

    type: Optional[str] = None
    payment_type: Optional[str] = None
    amount: Optional[Decimal] = None


class Accounting(WireModel):
    """Double-entry lines and payment breakdown of a transaction."""

    debits: list[AccountingEntry] = Field(default_factory=list)
    credits: list[AccountingEntry] = Field(default_factory=list)
    payment_breakdown: list[PaymentMethodEntry] = Field(default_factory=list)

    @field_validator("debits", "credits", "payment_breakdown", mode="before")
    @classmethod
    def _empty_lists(cls, value: Any) -> Any:
        return [] if value is None else value


class Transaction(WireModel):
    """
    A transaction record.

    Validated once when loaded, so classification code can read nested
    sections without presence checks. ``details`` stays free-form because it
    carries legacy payloads whose shape varies between record generations.
    """

    id: str = ""
    summary: TransactionSummary = Field(default_factory=TransactionSummary)
    metadata: TransactionMetadata = Field(default_factory=TransactionMetadata)
    accounting: Accounting = Field(default_factory=Accounting)
    details: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fill_id_from_metadata(cls, data: Any) -> Any:
        """Older records carry their identifier under ``metadata.id``."""
        if isinstance(data, dict) and data.get("id") in (None, ""):
            metadata = data.get("metadata")
            if isinstance(metadata, dict) and metadata.get("id"):
                data = {**data, "id": str(metadata["id"])}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        """Numeric ids are accepted and kept as strings."""
        if value is None:
            return ""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("summary", "metadata", "accounting", "details", mode="before")
    @classmethod
    def _empty_sections(cls, value: Any) -> Any:
        return _none_as_empty(value)

    @property
    def kind(self) -> Optional[str]:
        """Raw ``metadata.classification.kind``."""
        return self.metadata.classification.kind

    @property
    def transaction_datetime(self) -> datetime:
        """Transaction date as a naive local datetime."""
        return datetime.fromtimestamp(self.summary.transaction_date / 1000)
