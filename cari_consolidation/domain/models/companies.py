"""Domain models for the ERP company registry."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Company:
    """Legally separate company with its own ERP ledger database.

    Attributes:
        company_id: Registry identifier, also the ERP database name prefix.
        name: Display name.
        cloud_db: ERP cloud database number; companies without one have no
            ledger to query.
        consolidated: Whether the company takes part in consolidated
            reporting.
        database: ERP database name prefix when it differs from
            ``company_id``; the fiscal year is appended to it.
    """

    company_id: str
    name: str
    cloud_db: str | None = None
    consolidated: bool = True
    database: str | None = None

    @property
    def erp_database(self) -> str:
        """Return the prefix of the company's yearly ERP databases."""
        return self.database or self.company_id

    @property
    def participates(self) -> bool:
        """Return True when the company is queried for consolidation."""
        return self.consolidated and bool(self.cloud_db)


__all__ = ["Company"]
