"""Name resolution for cari account codes."""

from collections.abc import Iterable, Mapping, Sequence

from cari_consolidation.domain.models import Customer, ErpAccount


def build_erp_name_map(
    accounts_by_company: Mapping[str, Sequence[ErpAccount]],
) -> dict[str, str]:
    """Map cari account codes to ERP account names.

    Companies are visited in mapping order and the first company reporting
    a non-empty name for a code wins. Conflicting spellings across
    companies are not reconciled.

    Args:
        accounts_by_company: Account lists keyed by company identifier.

    Returns:
        dict[str, str]: Account code to display name.
    """
    names: dict[str, str] = {}
    for accounts in accounts_by_company.values():
        for account in accounts:
            if not account.code or not account.name:
                continue
            names.setdefault(account.code, account.name)
    return names


def build_customer_name_map(customers: Iterable[Customer]) -> dict[str, str]:
    """Map ERP account codes to customer names from the customer system."""
    names: dict[str, str] = {}
    for customer in customers:
        if customer.erp_id:
            names[customer.erp_id] = customer.name
    return names


__all__ = ["build_erp_name_map", "build_customer_name_map"]
