"""Tests for ERP and customer name maps."""

from cari_consolidation.domain.models import Customer, ErpAccount
from cari_consolidation.domain.services import (
    build_customer_name_map,
    build_erp_name_map,
)


def test_first_company_with_a_name_wins():
    accounts = {
        "VERI": [ErpAccount("A001", ""), ErpAccount("B002", "Veri B")],
        "CLOUD": [ErpAccount("A001", "Cloud A"), ErpAccount("B002", "Cloud B")],
    }

    names = build_erp_name_map(accounts)

    assert names == {"A001": "Cloud A", "B002": "Veri B"}


def test_customer_map_skips_customers_without_erp_id():
    customers = [
        Customer("1", "Linked", erp_id="A001"),
        Customer("2", "Unlinked"),
    ]

    assert build_customer_name_map(customers) == {"A001": "Linked"}
