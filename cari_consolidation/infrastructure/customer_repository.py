"""SQLAlchemy-backed repository for the customer directory."""

from sqlalchemy import text

from cari_consolidation.application.ports.customer_directory import (
    CustomerDirectoryPort,
)
from cari_consolidation.application.ports.database import DatabaseEnginePort
from cari_consolidation.domain.models import Customer


class SqlAlchemyCustomerDirectory(CustomerDirectoryPort):
    """Customers stored next to the bank feed in the operational database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def fetch_customers(self) -> list[Customer]:
        query = text(
            """
            SELECT id, name, erp_id
            FROM customers
            ORDER BY name
            """
        )
        engine = self._db_port.get_bank_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            Customer(
                customer_id=str(row.id),
                name=row.name,
                erp_id=row.erp_id.strip() if row.erp_id else None,
            )
            for row in rows
        ]


__all__ = ["SqlAlchemyCustomerDirectory"]
