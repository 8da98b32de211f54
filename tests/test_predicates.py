"""Tests for classification predicates."""

import pytest

from txn_pipeline.classification.predicates import (
    has_accounting_entries,
    has_accounts_payable_payment,
    has_accounts_receivable_payment,
    is_bank_transaction,
    is_cash_only_transaction,
    is_credit_card_transaction,
    is_credit_to_account,
    is_pos_sale_transaction,
    is_receipt_transaction,
    is_sale_transaction,
    resolve_transaction_kind,
    sale_kind_from_capture_source,
)
from txn_pipeline.models.transaction import Transaction, TransactionKind

from helpers import entry, make_transaction


class TestSourcePredicates:
    """Tests for capture-source based predicates."""

    @pytest.mark.parametrize("source", ["bank_statement_upload", "bank_statement_ocr"])
    def test_bank_sources_including_legacy_alias(self, source):
        assert is_bank_transaction(make_transaction(source=source))

    @pytest.mark.parametrize(
        "source",
        [None, "credit_card_statement_upload", "bank_statement", "BANK_STATEMENT_UPLOAD", "manual_entry"],
    )
    def test_other_sources_are_not_bank(self, source):
        assert not is_bank_transaction(make_transaction(source=source))

    def test_credit_card_source(self):
        assert is_credit_card_transaction(make_transaction(source="credit_card_statement_upload"))
        assert not is_credit_card_transaction(make_transaction(source="bank_statement_upload"))

    def test_pos_sale_requires_source_and_kind(self):
        """A one-off POS item must also be classified as a sale."""
        assert is_pos_sale_transaction(make_transaction(source="pos_one_off_item", kind="sale"))
        assert not is_pos_sale_transaction(
            make_transaction(source="pos_one_off_item", kind="purchase")
        )
        assert not is_pos_sale_transaction(make_transaction(source="pos_one_off_item"))
        assert not is_pos_sale_transaction(make_transaction(source="manual_entry", kind="sale"))

    @pytest.mark.parametrize(
        "source,mechanism,expected",
        [
            ("purchase_invoice_ocr", None, True),
            ("manual_entry", None, True),
            (None, "ocr", True),
            ("something_else", "manual", True),
            ("supplier_purchase_upload", None, True),
            ("bank_statement_upload", None, False),
            (None, None, False),
        ],
    )
    def test_receipt_transaction(self, source, mechanism, expected):
        tx = make_transaction(source=source, mechanism=mechanism)
        assert is_receipt_transaction(tx) is expected


class TestSaleResolution:
    """Tests for the sale/purchase precedence tiers."""

    def test_explicit_sale(self):
        tx = make_transaction(kind="sale")
        assert resolve_transaction_kind(tx) is TransactionKind.SALE
        assert is_sale_transaction(tx)

    def test_income_credit_marks_a_sale(self):
        tx = make_transaction(credits=[entry("Sales", "10", isIncome=True)])
        assert is_sale_transaction(tx)

    def test_income_flag_must_be_true(self):
        tx = make_transaction(credits=[entry("Sales", "10", isIncome=False)])
        assert not is_sale_transaction(tx)

    @pytest.mark.parametrize("source", ["sales_invoice", "POS_SALE", "Invoice_Upload", "manual"])
    def test_capture_source_heuristic(self, source):
        assert is_sale_transaction(make_transaction(source=source))

    def test_manual_entry_is_not_the_manual_heuristic(self):
        """Only the exact source "manual" triggers the heuristic."""
        assert sale_kind_from_capture_source(make_transaction(source="manual_entry")) is None

    def test_explicit_purchase_wins_over_weaker_signals(self):
        tx = make_transaction(
            kind="purchase",
            source="sales_invoice",
            credits=[entry("Sales", "10", isIncome=True)],
        )
        assert resolve_transaction_kind(tx) is TransactionKind.PURCHASE
        assert not is_sale_transaction(tx)

    def test_unknown_without_signals(self):
        assert resolve_transaction_kind(make_transaction()) is TransactionKind.UNKNOWN


class TestPaymentPredicates:
    """Tests for payment-method derived predicates."""

    @pytest.mark.parametrize(
        "name", ["accounts_receivable", "AccountsReceivable", "Accounts Receivable"]
    )
    def test_accounts_receivable_variants(self, name):
        tx = make_transaction(payment_breakdown=[{"type": name}])
        assert has_accounts_receivable_payment(tx)

    @pytest.mark.parametrize("name", ["accounts_payable", "ACCOUNTSPAYABLE", "Accounts Payable"])
    def test_accounts_payable_variants(self, name):
        tx = make_transaction(details={"paymentType": [{"paymentType": name}]})
        assert has_accounts_payable_payment(tx)

    def test_payable_is_not_receivable(self):
        tx = make_transaction(payment_breakdown=[{"type": "accounts_payable"}])
        assert not has_accounts_receivable_payment(tx)

    def test_malformed_payload_is_false(self):
        tx = make_transaction(details={"paymentBreakdown": "accounts_payable"})
        assert not has_accounts_payable_payment(tx)

    def test_cash_only(self):
        tx = make_transaction(payment_breakdown=[{"type": "cash"}, {"type": "Cash"}])
        assert is_cash_only_transaction(tx)

    def test_mixed_payment_is_not_cash_only(self):
        tx = make_transaction(payment_breakdown=[{"type": "cash"}, {"type": "card"}])
        assert not is_cash_only_transaction(tx)

    def test_no_payment_methods_is_not_cash_only(self):
        """Empty is not vacuously cash-only."""
        assert not is_cash_only_transaction(make_transaction())

    def test_has_accounting_entries(self):
        assert has_accounting_entries(make_transaction(debits=[entry("Bank", "1")]))
        assert has_accounting_entries(make_transaction(credits=[entry("Bank", "1")]))
        assert not has_accounting_entries(make_transaction())


class TestCreditToAccount:
    """Tests for the money-in decision order."""

    def test_bank_explicit_credit(self):
        tx = make_transaction(source="bank_statement_upload", is_credit=True)
        assert is_credit_to_account(tx)

    def test_bank_asset_debit_without_flag(self):
        tx = make_transaction(
            source="bank_statement_ocr",
            debits=[entry("Bank", "50", isAsset=True)],
        )
        assert is_credit_to_account(tx)

    def test_bank_explicit_flag_wins_over_entries(self):
        """Conflicting signals: the ingestion flag is returned."""
        tx = make_transaction(
            source="bank_statement_upload",
            is_credit=False,
            debits=[entry("Bank", "50", isAsset=True)],
        )
        assert is_credit_to_account(tx) is False

    def test_bank_debit_requires_asset_flag(self):
        tx = make_transaction(source="bank_statement_upload", debits=[entry("Bank", "50")])
        assert not is_credit_to_account(tx)

    def test_bank_money_out(self):
        tx = make_transaction(
            source="bank_statement_upload",
            debits=[entry("Rent", "500")],
            credits=[entry("Bank", "500", isAsset=True)],
        )
        assert not is_credit_to_account(tx)

    def test_card_repayment_from_liability_debit(self):
        tx = make_transaction(
            source="credit_card_statement_upload",
            debits=[entry("Card", "200", isLiability=True)],
        )
        assert is_credit_to_account(tx)

    def test_card_explicit_flag_wins(self):
        tx = make_transaction(
            source="credit_card_statement_upload",
            is_credit=False,
            debits=[entry("Card", "200", isLiability=True)],
        )
        assert is_credit_to_account(tx) is False

    def test_card_chart_name_must_match(self):
        tx = make_transaction(
            source="credit_card_statement_upload",
            debits=[entry("Bank", "200", isLiability=True)],
        )
        assert not is_credit_to_account(tx)

    def test_statement_flag_ignored_for_other_sources(self):
        tx = make_transaction(source="manual_entry", kind="purchase", is_credit=True)
        assert not is_credit_to_account(tx)

    def test_sale_kind(self):
        assert is_credit_to_account(make_transaction(kind="sale"))

    def test_income_credit(self):
        tx = make_transaction(credits=[entry("Sales", "10", isIncome=True)])
        assert is_credit_to_account(tx)

    def test_purchase_is_money_out(self):
        assert not is_credit_to_account(make_transaction(kind="purchase"))


class TestTotality:
    """Predicates never raise on sparse records."""

    @pytest.mark.parametrize(
        "predicate",
        [
            is_bank_transaction,
            is_credit_card_transaction,
            is_pos_sale_transaction,
            is_receipt_transaction,
            is_sale_transaction,
            has_accounts_receivable_payment,
            has_accounts_payable_payment,
            is_cash_only_transaction,
            has_accounting_entries,
            is_credit_to_account,
        ],
    )
    def test_bare_transaction(self, predicate):
        assert predicate(Transaction(id="bare")) is False
