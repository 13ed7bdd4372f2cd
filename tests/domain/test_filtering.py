"""Tests for the filter/search layer."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from itertools import permutations

from cari_consolidation.domain.models import (
    BalanceFilter,
    BalanceSign,
    BankTransaction,
    DateRange,
    ErpStatus,
    MergedBalance,
    TransactionFilter,
    TransactionType,
)
from cari_consolidation.domain.services import (
    filter_balances,
    filter_transactions,
    quick_date_range,
)
from cari_consolidation.domain.services.filtering import balance_predicates


def _balance(code, total, companies, erp_name=None, customer_name=None,
             overdue="0"):
    return MergedBalance(
        account_code=code,
        erp_name=erp_name,
        customer_name=customer_name,
        company_balances={k: Decimal(v) for k, v in companies.items()},
        total_balance=Decimal(total),
        overdue_balance=Decimal(overdue),
    )


BALANCES = [
    _balance("A001", "150", {"VERI": "150"}, erp_name="Acme Ltd", overdue="20"),
    _balance("B002", "-75", {"VERI": "-80", "CLOUD": "5"}, customer_name="Beta"),
    _balance("C003", "40", {"CLOUD": "40", "VERI": "0"}, erp_name="Gamma acme"),
]


def test_no_filter_returns_everything_in_order():
    assert filter_balances(BALANCES) == BALANCES
    assert filter_balances(BALANCES, BalanceFilter()) == BALANCES


def test_search_is_case_insensitive_over_code_and_names():
    found = filter_balances(BALANCES, BalanceFilter(search_text="  ACME "))
    assert [b.account_code for b in found] == ["A001", "C003"]

    found = filter_balances(BALANCES, BalanceFilter(search_text="beta"))
    assert [b.account_code for b in found] == ["B002"]

    found = filter_balances(BALANCES, BalanceFilter(search_text="c00"))
    assert [b.account_code for b in found] == ["C003"]


def test_company_filter_treats_zero_contribution_as_absent():
    found = filter_balances(BALANCES, BalanceFilter(company_id="VERI"))
    assert [b.account_code for b in found] == ["A001", "B002"]


def test_sign_filters():
    def codes(sign):
        return [
            b.account_code
            for b in filter_balances(BALANCES, BalanceFilter(balance_sign=sign))
        ]

    assert codes(BalanceSign.POSITIVE) == ["A001", "C003"]
    assert codes(BalanceSign.NEGATIVE) == ["B002"]
    assert codes(BalanceSign.OVERDUE) == ["A001"]
    assert codes(BalanceSign.ALL) == ["A001", "B002", "C003"]


def test_predicates_commute():
    """Applying the selectors in any order gives the same subset."""
    predicates = balance_predicates(
        BalanceFilter(
            search_text="a",
            company_id="VERI",
            balance_sign=BalanceSign.POSITIVE,
        )
    )
    assert len(predicates) == 3
    expected = filter_balances(
        BALANCES,
        BalanceFilter(
            search_text="a",
            company_id="VERI",
            balance_sign=BalanceSign.POSITIVE,
        ),
    )

    for order in permutations(predicates):
        items = list(BALANCES)
        for check in order:
            items = [item for item in items if check(item)]
        assert items == expected
    assert [b.account_code for b in expected] == ["A001"]


def _tx(tx_id, amount, day, status=ErpStatus.WAITING, bank="B1",
        name="", description="", bank_acc_name=None):
    moment = datetime(2024, 5, day, 12, 0)
    return BankTransaction(
        transaction_id=tx_id,
        bank_acc_id=bank,
        amount=Decimal(amount),
        balance=Decimal("0"),
        counterparty_name=name,
        description=description,
        business_date=moment,
        create_date=moment,
        status=status,
        bank_acc_name=bank_acc_name,
    )


TRANSACTIONS = [
    _tx("1", "100", 1, name="ACME LTD", description="invoice 12"),
    _tx("2", "-40", 2, status=ErpStatus.ERROR, bank="B2", description="fee"),
    _tx("3", "60", 3, status=ErpStatus.SUCCESS, bank_acc_name="Main Acme"),
    _tx("4", "-10", 4, name="Delta"),
]


def test_transaction_search_covers_name_description_and_bank_name():
    found = filter_transactions(
        TRANSACTIONS,
        TransactionFilter(search_text="acme"),
    )
    assert [tx.transaction_id for tx in found] == ["1", "3"]

    found = filter_transactions(TRANSACTIONS, TransactionFilter(search_text="FEE"))
    assert [tx.transaction_id for tx in found] == ["2"]


def test_transaction_selectors():
    def ids(transaction_filter):
        return [
            tx.transaction_id
            for tx in filter_transactions(TRANSACTIONS, transaction_filter)
        ]

    assert ids(TransactionFilter(status=ErpStatus.ERROR)) == ["2"]
    assert ids(TransactionFilter(bank_acc_id="B1")) == ["1", "3", "4"]
    assert ids(
        TransactionFilter(transaction_type=TransactionType.INFLOW)
    ) == ["1", "3"]
    assert ids(
        TransactionFilter(transaction_type=TransactionType.OUTFLOW)
    ) == ["2", "4"]
    assert ids(
        TransactionFilter(
            bank_acc_id="B1",
            transaction_type=TransactionType.OUTFLOW,
        )
    ) == ["4"]


def test_one_sided_date_range_leaves_other_side_open():
    after = TransactionFilter(
        date_range=DateRange(start=datetime(2024, 5, 3))
    )
    before = TransactionFilter(
        date_range=DateRange(end=datetime(2024, 5, 2, 12, 0))
    )

    assert [t.transaction_id for t in filter_transactions(TRANSACTIONS, after)] == [
        "3",
        "4",
    ]
    assert [
        t.transaction_id for t in filter_transactions(TRANSACTIONS, before)
    ] == ["1", "2"]


def test_quick_range_matches_feed_rows_stored_with_utc_offset():
    row = {
        "id": "tz1",
        "bank_acc_id": "B1",
        "amount": "25",
        "balance": "0",
        "business_date": "2024-05-01T10:00:00Z",
        "create_date": "2024-05-01T10:00:00Z",
        "erp_status": "waiting",
    }
    transaction = BankTransaction.from_row(row)
    local = (
        datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        .astimezone()
        .replace(tzinfo=None)
    )

    found = filter_transactions(
        [transaction],
        TransactionFilter(date_range=quick_date_range("today", local)),
    )

    assert transaction.business_date == local
    assert found == [transaction]


def test_date_range_accepts_aware_moments_and_bounds():
    aware = datetime(2024, 5, 3, 12, 0, tzinfo=timezone(timedelta(hours=3)))
    local = aware.astimezone().replace(tzinfo=None)
    naive_range = DateRange(
        start=local - timedelta(minutes=1),
        end=local + timedelta(minutes=1),
    )
    aware_range = DateRange(
        start=aware - timedelta(minutes=1),
        end=aware + timedelta(minutes=1),
    )

    assert naive_range.contains(aware)
    assert aware_range.contains(local)
    assert not aware_range.contains(local + timedelta(hours=1))
