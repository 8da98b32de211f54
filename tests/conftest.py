"""Shared fixtures for the transaction pipeline tests."""

from datetime import datetime
import logging

import pytest

from txn_pipeline.utils.logging_config import LOGGER_NAME

from helpers import entry, make_transaction


@pytest.fixture
def unverified_purchase():
    return make_transaction(
        "p-unverified",
        kind="purchase",
        source="purchase_invoice_ocr",
        verification="unverified",
        date=datetime(2024, 3, 5, 9, 0),
    )


@pytest.fixture
def payable_purchase():
    """Verified purchase on account, waiting for a statement line."""
    return make_transaction(
        "p-payable",
        kind="purchase",
        verification="verified",
        reconciliation="pending_bank_match",
        payment_breakdown=[{"type": "accounts_payable"}],
        debits=[entry("Office Supplies", "40.00", isAsset=False)],
        credits=[entry("Accounts Payable", "40.00", isLiability=True)],
        date=datetime(2024, 3, 6, 9, 0),
    )


@pytest.fixture
def reconciled_purchase():
    return make_transaction(
        "p-done",
        kind="purchase",
        verification="verified",
        reconciliation="reconciled",
        payment_breakdown=[{"type": "bank_transfer"}],
        debits=[entry("Office Supplies", "25.00")],
        credits=[entry("Bank", "25.00", isAsset=True)],
        date=datetime(2024, 3, 7, 9, 0),
    )


@pytest.fixture
def bank_credit_entry():
    """Verified bank statement deposit."""
    return make_transaction(
        "b-deposit",
        name="Customer Payment",
        source="bank_statement_upload",
        kind="statement_entry",
        verification="verified",
        reconciliation="reconciled",
        is_credit=True,
        debits=[entry("Bank", "250.00", isAsset=True)],
        credits=[entry("Sales", "250.00", isIncome=True)],
        date=datetime(2024, 3, 8, 9, 0),
    )


@pytest.fixture
def status_fixture_set(
    unverified_purchase, payable_purchase, reconciled_purchase, bank_credit_entry
):
    """Transactions covering every reconciliation status."""
    extra = [
        make_transaction(f"status-{status}", verification="verified", reconciliation=status)
        for status in (
            "unreconciled",
            "pending_bank_match",
            "matched",
            "reconciled",
            "exception",
            "not_required",
        )
    ]
    return [unverified_purchase, payable_purchase, reconciled_purchase, bank_credit_entry, *extra]


@pytest.fixture(autouse=True)
def reset_package_logging():
    """CLI commands attach handlers to the package logger; drop them between tests."""
    yield
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers = []
    package_logger.setLevel(logging.NOTSET)
