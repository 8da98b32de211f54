"""Tests for the transaction wire models."""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from txn_pipeline.models.transaction import Transaction
from txn_pipeline.models.views import DateRange

from helpers import epoch_millis, transaction_record


class TestTransactionModel:
    """Tests for parsing backend records."""

    def test_camel_case_fields_are_read(self):
        """Wire names map onto snake_case fields."""
        tx = Transaction.model_validate(
            transaction_record(
                "tx-9",
                name="Corner Cafe",
                amount="-12.50",
                source="bank_statement_upload",
                is_credit=False,
                debits=[{"chartName": "Bank", "amount": "12.50", "isAsset": True}],
            )
        )
        assert tx.id == "tx-9"
        assert tx.summary.third_party_name == "Corner Cafe"
        assert tx.summary.total_amount == Decimal("-12.50")
        assert tx.metadata.capture.source == "bank_statement_upload"
        assert tx.metadata.statement_context.is_credit is False
        assert tx.accounting.debits[0].chart_name == "Bank"
        assert tx.accounting.debits[0].is_asset is True

    def test_empty_record_is_valid(self):
        """Every section is optional."""
        tx = Transaction.model_validate({"id": "bare"})
        assert tx.kind is None
        assert tx.accounting.debits == []
        assert tx.details == {}

    def test_null_sections_become_empty(self):
        """Explicit nulls do not break nested access."""
        tx = Transaction.model_validate(
            {
                "id": "nulls",
                "metadata": {"capture": None, "reconciliation": None},
                "accounting": None,
                "details": None,
            }
        )
        assert tx.metadata.capture.source is None
        assert tx.metadata.reconciliation.status is None
        assert tx.accounting.credits == []

    def test_id_falls_back_to_metadata(self):
        """Older records keep their id in metadata."""
        tx = Transaction.model_validate({"metadata": {"id": "legacy-1"}})
        assert tx.id == "legacy-1"

    def test_negative_entry_amount_rejected(self):
        """Accounting lines carry unsigned amounts."""
        with pytest.raises(ValidationError):
            Transaction.model_validate(
                {"id": "neg", "accounting": {"debits": [{"chartName": "Bank", "amount": "-1"}]}}
            )

    def test_unknown_fields_are_kept(self):
        record = transaction_record("extra")
        record["metadata"]["createdBy"] = "user-1"
        tx = Transaction.model_validate(record)
        assert tx.metadata.model_extra["createdBy"] == "user-1"

    def test_transaction_datetime_is_local(self):
        moment = datetime(2024, 3, 1, 15, 30)
        tx = Transaction.model_validate(transaction_record("dt", date=moment))
        assert tx.transaction_datetime == moment

    def test_null_scalars_use_defaults(self):
        tx = Transaction.model_validate(
            {
                "id": None,
                "summary": {"totalAmount": None, "currency": None, "transactionDate": None},
                "accounting": {"debits": [{"chartName": "Bank", "amount": None}]},
            }
        )
        assert tx.id == ""
        assert tx.summary.total_amount == Decimal("0")
        assert tx.summary.currency == "GBP"
        assert tx.summary.transaction_date == 0
        assert tx.accounting.debits[0].amount == Decimal("0")

    def test_numeric_id_kept_as_string(self):
        assert Transaction.model_validate({"id": 17}).id == "17"

    def test_unrepresentable_date_rejected(self):
        """A date that cannot become a datetime fails at load, not later."""
        with pytest.raises(ValidationError):
            Transaction.model_validate({"id": "far", "summary": {"transactionDate": 10**17}})

    def test_snake_case_construction(self):
        """Models can also be built from Python field names."""
        tx = Transaction.model_validate(
            {"id": "py", "summary": {"third_party_name": "Py Ltd", "transaction_date": 0}}
        )
        assert tx.summary.third_party_name == "Py Ltd"


class TestDateRange:
    """Tests for inclusive reporting periods."""

    def test_bounds_cover_whole_days(self):
        period = DateRange(start=datetime(2024, 3, 1).date(), end=datetime(2024, 3, 31).date())
        assert period.contains(datetime(2024, 3, 1, 0, 0))
        assert period.contains(datetime(2024, 3, 31, 23, 59, 59, 999000))
        assert not period.contains(datetime(2024, 2, 29, 23, 59, 59))
        assert not period.contains(datetime(2024, 4, 1, 0, 0))

    def test_open_ended(self):
        period = DateRange(start=datetime(2024, 3, 1).date())
        assert period.contains(datetime(2030, 1, 1))
        assert period.end_bound is None

    def test_datetime_bounds_are_truncated_to_days(self):
        period = DateRange(start=datetime(2024, 3, 1, 18, 0), end=datetime(2024, 3, 1, 6, 0))
        assert period.contains(datetime(2024, 3, 1, 12, 0))

    def test_epoch_helper_round_trips(self):
        moment = datetime(2024, 6, 1, 8, 0)
        tx = Transaction.model_validate(
            {"id": "e", "summary": {"transactionDate": epoch_millis(moment)}}
        )
        assert tx.transaction_datetime == moment
