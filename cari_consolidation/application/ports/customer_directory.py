"""Port for the external customer system."""

from typing import Protocol

from cari_consolidation.domain.models import Customer


class CustomerDirectoryPort(Protocol):
    """Port exposing customers and their ERP account codes."""

    def fetch_customers(self) -> list[Customer]:
        """Return every known customer."""


__all__ = ["CustomerDirectoryPort"]
