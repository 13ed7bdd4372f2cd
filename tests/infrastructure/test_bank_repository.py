"""Tests for the SQLAlchemy bank transaction source against SQLite."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text

from cari_consolidation.domain.models import (
    DateRange,
    ErpStatus,
    TransactionFilter,
    TransactionType,
)
from cari_consolidation.infrastructure.bank_repository import (
    SqlAlchemyBankTransactionSource,
    build_transaction_where,
)


class _DbPort:
    def __init__(self, engine):
        self._engine = engine

    def get_erp_engine(self):
        raise AssertionError("bank source must not touch the ERP engine")

    def get_bank_engine(self):
        return self._engine


_ROWS = [
    ("t1", "B1", "Main", "Garanti", "ACME LTD", None, "invoice 12",
     500, 500, "2024-05-01 09:00:00.000000", "2024-05-01 09:05:00.000000",
     "waiting"),
    ("t2", "B1", "Main", "Garanti", "Utility Co", None, "electricity",
     -200, 300, "2024-05-02 10:00:00.000000", "2024-05-02 10:05:00.000000",
     "error"),
    ("t3", "B2", "Savings", "Akbank", "Beta", "TR00", "transfer",
     300, 300, "2024-05-03 11:00:00.000000", "2024-05-03 11:05:00.000000",
     "success"),
]


@pytest.fixture
def db_port(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'bank.db'}")
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                CREATE TABLE bank_transactions (
                    id TEXT PRIMARY KEY,
                    bank_acc_id TEXT,
                    bank_acc_name TEXT,
                    bank_name TEXT,
                    name TEXT,
                    opponent_iban TEXT,
                    description TEXT,
                    amount NUMERIC,
                    balance NUMERIC,
                    business_date TEXT,
                    create_date TEXT,
                    erp_status TEXT,
                    erp_message TEXT,
                    erp_account_code TEXT,
                    erp_gl_account_code TEXT
                )
                """
            )
        )
        conn.execute(
            text(
                """
                CREATE TABLE bank_accounts (
                    bank_acc_id TEXT,
                    bank_acc_name TEXT,
                    erp_company_id TEXT,
                    erp_muh_code TEXT
                )
                """
            )
        )
        conn.execute(
            text(
                """
                INSERT INTO bank_transactions (
                    id, bank_acc_id, bank_acc_name, bank_name, name,
                    opponent_iban, description, amount, balance,
                    business_date, create_date, erp_status
                ) VALUES (
                    :id, :bank_acc_id, :bank_acc_name, :bank_name, :name,
                    :iban, :description, :amount, :balance,
                    :business_date, :create_date, :status
                )
                """
            ),
            [
                dict(
                    zip(
                        (
                            "id", "bank_acc_id", "bank_acc_name", "bank_name",
                            "name", "iban", "description", "amount",
                            "balance", "business_date", "create_date",
                            "status",
                        ),
                        row,
                    )
                )
                for row in _ROWS
            ],
        )
        conn.execute(
            text(
                """
                INSERT INTO bank_accounts VALUES
                ('B2', 'Savings', 'VERI', '102.01'),
                ('B1', 'Main', 'CLOUD', '102.02')
                """
            )
        )
    yield _DbPort(engine)
    engine.dispose()


def _ids(transactions):
    return [tx.transaction_id for tx in transactions]


def test_fetch_transactions_orders_by_create_date_desc(db_port):
    source = SqlAlchemyBankTransactionSource(db_port, logger=MagicMock())

    transactions = source.fetch_transactions()

    assert _ids(transactions) == ["t3", "t2", "t1"]
    latest = transactions[0]
    assert latest.amount == Decimal("300")
    assert latest.status is ErpStatus.SUCCESS
    assert latest.counterparty_iban == "TR00"
    assert latest.business_date == datetime(2024, 5, 3, 11, 0)


def test_fetch_transactions_applies_filter_server_side(db_port):
    source = SqlAlchemyBankTransactionSource(db_port, logger=MagicMock())

    assert _ids(source.fetch_transactions(TransactionFilter(search_text="acme"))) == [
        "t1"
    ]
    assert _ids(
        source.fetch_transactions(TransactionFilter(search_text="AKBANK"))
    ) == ["t3"]
    assert _ids(
        source.fetch_transactions(TransactionFilter(status=ErpStatus.ERROR))
    ) == ["t2"]
    assert _ids(
        source.fetch_transactions(
            TransactionFilter(
                bank_acc_id="B1",
                transaction_type=TransactionType.INFLOW,
            )
        )
    ) == ["t1"]


def test_fetch_transactions_with_date_range(db_port):
    source = SqlAlchemyBankTransactionSource(db_port, logger=MagicMock())
    transaction_filter = TransactionFilter(
        date_range=DateRange(
            start=datetime(2024, 5, 2),
            end=datetime(2024, 5, 2, 23, 59, 59, 999999),
        )
    )

    assert _ids(source.fetch_transactions(transaction_filter)) == ["t2"]
    assert _ids(
        source.fetch_transactions(
            TransactionFilter(date_range=DateRange(start=datetime(2024, 5, 2)))
        )
    ) == ["t3", "t2"]


def test_fetch_bank_accounts_sorted_by_name(db_port):
    source = SqlAlchemyBankTransactionSource(db_port, logger=MagicMock())

    accounts = source.fetch_bank_accounts()

    assert [(a.bank_acc_id, a.bank_acc_name) for a in accounts] == [
        ("B1", "Main"),
        ("B2", "Savings"),
    ]
    assert accounts[0].erp_company_id == "CLOUD"
    assert accounts[0].erp_ledger_code == "102.02"


def test_update_transaction_status_persists(db_port):
    source = SqlAlchemyBankTransactionSource(db_port, logger=MagicMock())

    source.update_transaction_status("t1", ErpStatus.MANUAL)

    updated = {tx.transaction_id: tx for tx in source.fetch_transactions()}
    assert updated["t1"].status is ErpStatus.MANUAL
    assert updated["t2"].status is ErpStatus.ERROR


def test_update_unknown_transaction_raises(db_port):
    source = SqlAlchemyBankTransactionSource(db_port, logger=MagicMock())

    with pytest.raises(RuntimeError, match="not found"):
        source.update_transaction_status("missing", ErpStatus.MANUAL)


def test_build_transaction_where_without_filter():
    assert build_transaction_where(None) == ("", {}, [])
    assert build_transaction_where(TransactionFilter()) == ("", {}, [])


def test_build_transaction_where_combines_selectors():
    where, params, typed = build_transaction_where(
        TransactionFilter(
            search_text=" Acme ",
            status=ErpStatus.WAITING,
            transaction_type=TransactionType.OUTFLOW,
            date_range=DateRange(end=datetime(2024, 5, 31)),
        )
    )

    assert where.startswith("WHERE (LOWER(name) LIKE :search")
    assert "erp_status = :status" in where
    assert "amount < 0" in where
    assert "business_date <= :end_date" in where
    assert "start_date" not in where
    assert params["search"] == "%acme%"
    assert params["status"] == "waiting"
    assert len(typed) == 1


def test_rows_with_unknown_status_are_skipped_with_warning(db_port):
    with db_port.get_bank_engine().begin() as conn:
        conn.execute(
            text(
                """
                INSERT INTO bank_transactions (
                    id, bank_acc_id, amount, balance, business_date,
                    create_date, erp_status
                ) VALUES
                ('t4', 'B1', 10, 10, '2024-05-04T08:00:00Z',
                 '2024-05-04T08:00:00Z', 'posted'),
                ('t5', 'B1', 20, 30, '2024-05-05T08:00:00Z',
                 '2024-05-05T08:00:00Z', 'SUCCESS')
                """
            )
        )
    logger = MagicMock()
    source = SqlAlchemyBankTransactionSource(db_port, logger=logger)

    transactions = source.fetch_transactions()

    assert _ids(transactions) == ["t5", "t3", "t2", "t1"]
    assert transactions[0].status is ErpStatus.SUCCESS
    assert transactions[0].business_date.tzinfo is None
    logger.warning.assert_called_once()
    assert "t4" in logger.warning.call_args.args[0]
