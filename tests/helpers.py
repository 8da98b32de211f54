"""Builders for transaction fixtures in backend wire format."""

from datetime import datetime
from typing import Any, Optional

from txn_pipeline.models.transaction import Transaction

DEFAULT_DATE = datetime(2024, 3, 1, 12, 0)


def epoch_millis(moment: datetime) -> int:
    """Local naive datetime to epoch milliseconds."""
    return int(moment.timestamp() * 1000)


def entry(chart_name: str, amount: Any, **flags: Any) -> dict[str, Any]:
    """An accounting line, e.g. ``entry("Bank", "10.00", isAsset=True)``."""
    return {"chartName": chart_name, "amount": str(amount), **flags}


def transaction_record(
    tx_id: str = "tx-1",
    *,
    name: Optional[str] = "Acme Supplies",
    description: Optional[str] = None,
    amount: Any = "100.00",
    currency: str = "GBP",
    date: datetime = DEFAULT_DATE,
    kind: Optional[str] = None,
    source: Optional[str] = None,
    mechanism: Optional[str] = None,
    verification: Optional[str] = None,
    reconciliation: Optional[str] = None,
    reconciliation_type: Optional[str] = None,
    is_credit: Optional[bool] = None,
    debits: Optional[list] = None,
    credits: Optional[list] = None,
    payment_breakdown: Optional[list] = None,
    details: Optional[dict] = None,
    business_id: Optional[str] = None,
) -> dict[str, Any]:
    """Raw camelCase record as the backend returns it."""
    metadata: dict[str, Any] = {
        "classification": {"kind": kind},
        "capture": {"source": source, "mechanism": mechanism},
        "verification": {"status": verification},
        "reconciliation": {"status": reconciliation, "type": reconciliation_type},
        "statementContext": {"isCredit": is_credit},
    }
    if business_id is not None:
        metadata["businessId"] = business_id

    accounting: dict[str, Any] = {
        "debits": debits or [],
        "credits": credits or [],
    }
    if payment_breakdown is not None:
        accounting["paymentBreakdown"] = payment_breakdown

    return {
        "id": tx_id,
        "summary": {
            "thirdPartyName": name,
            "description": description,
            "totalAmount": str(amount),
            "currency": currency,
            "transactionDate": epoch_millis(date),
        },
        "metadata": metadata,
        "accounting": accounting,
        "details": details or {},
    }


def make_transaction(tx_id: str = "tx-1", **kwargs: Any) -> Transaction:
    """Validated Transaction built from :func:`transaction_record` arguments."""
    return Transaction.model_validate(transaction_record(tx_id, **kwargs))
