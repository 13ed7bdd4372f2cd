"""SQLAlchemy-backed repository for the bank transaction feed."""

from typing import Any

from sqlalchemy import DateTime, bindparam, text

from cari_consolidation.application.ports.bank_source import (
    BankTransactionSourcePort,
)
from cari_consolidation.application.ports.database import DatabaseEnginePort
from cari_consolidation.domain.models import (
    BankAccount,
    BankTransaction,
    ErpStatus,
    TransactionFilter,
    TransactionType,
)
from cari_consolidation.infrastructure.logging.logger import get_app_logger

_TRANSACTION_COLUMNS = """
    id, bank_acc_id, bank_acc_name, bank_name, name, opponent_iban,
    description, amount, balance, business_date, create_date, erp_status,
    erp_message, erp_account_code, erp_gl_account_code
"""

_SEARCH_COLUMNS = ("name", "description", "bank_acc_name", "bank_name")


def build_transaction_where(
    transaction_filter: TransactionFilter | None,
) -> tuple[str, dict[str, Any], list]:
    """Translate a TransactionFilter into a WHERE clause.

    Args:
        transaction_filter: Filter state forwarded by the caller.

    Returns:
        tuple: SQL fragment (empty when unfiltered), bound values and the
        typed bind parameters the fragment needs.
    """
    if transaction_filter is None:
        return "", {}, []
    clauses: list[str] = []
    params: dict[str, Any] = {}
    typed: list = []

    query = (transaction_filter.search_text or "").strip().lower()
    if query:
        params["search"] = f"%{query}%"
        clauses.append(
            "("
            + " OR ".join(
                f"LOWER({column}) LIKE :search" for column in _SEARCH_COLUMNS
            )
            + ")"
        )
    if transaction_filter.status is not None:
        clauses.append("erp_status = :status")
        params["status"] = ErpStatus(transaction_filter.status).value
    if transaction_filter.bank_acc_id:
        clauses.append("bank_acc_id = :bank_acc_id")
        params["bank_acc_id"] = transaction_filter.bank_acc_id

    direction = TransactionType(transaction_filter.transaction_type)
    if direction is TransactionType.INFLOW:
        clauses.append("amount > 0")
    elif direction is TransactionType.OUTFLOW:
        clauses.append("amount < 0")

    date_range = transaction_filter.date_range
    if date_range is not None and date_range.start is not None:
        clauses.append("business_date >= :start_date")
        params["start_date"] = date_range.start
        typed.append(bindparam("start_date", type_=DateTime()))
    if date_range is not None and date_range.end is not None:
        clauses.append("business_date <= :end_date")
        params["end_date"] = date_range.end
        typed.append(bindparam("end_date", type_=DateTime()))

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params, typed


class SqlAlchemyBankTransactionSource(BankTransactionSourcePort):
    """Repository backed by the ``bank_transactions`` table."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the bank engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def fetch_transactions(
        self,
        transaction_filter: TransactionFilter | None = None,
    ) -> list[BankTransaction]:
        where, params, typed = build_transaction_where(transaction_filter)
        query = text(
            f"""
            SELECT {_TRANSACTION_COLUMNS}
            FROM bank_transactions
            {where}
            ORDER BY create_date DESC
            """
        )
        if typed:
            query = query.bindparams(*typed)
        engine = self._db_port.get_bank_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).mappings().all()
        transactions: list[BankTransaction] = []
        for row in rows:
            try:
                transactions.append(BankTransaction.from_row(row))
            except ValueError as exc:
                self._logger.warning(
                    f"Skipping bank transaction {row.get('id')}: {exc}"
                )
        return transactions

    def fetch_bank_accounts(self) -> list[BankAccount]:
        query = text(
            """
            SELECT bank_acc_id, bank_acc_name, erp_company_id, erp_muh_code
            FROM bank_accounts
            ORDER BY bank_acc_name
            """
        )
        engine = self._db_port.get_bank_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            BankAccount(
                bank_acc_id=str(row.bank_acc_id),
                bank_acc_name=row.bank_acc_name,
                erp_company_id=row.erp_company_id,
                erp_ledger_code=row.erp_muh_code,
            )
            for row in rows
        ]

    def update_transaction_status(
        self,
        transaction_id: str,
        status: ErpStatus,
    ) -> None:
        query = text(
            """
            UPDATE bank_transactions
            SET erp_status = :status
            WHERE id = :id
            """
        )
        engine = self._db_port.get_bank_engine()
        with engine.begin() as conn:
            result = conn.execute(
                query,
                {"status": ErpStatus(status).value, "id": transaction_id},
            )
            updated = result.rowcount
        if updated == 0:
            raise RuntimeError(f"Bank transaction not found: {transaction_id}")


__all__ = ["SqlAlchemyBankTransactionSource", "build_transaction_where"]
