"""Domain services package."""

from .balance_merger import compute_company_totals, merge_company_balances
from .bank_summary import exclude_bank_accounts, summarize_bank_transactions
from .date_ranges import default_date_range, quick_date_range
from .filtering import filter_balances, filter_transactions
from .names import build_customer_name_map, build_erp_name_map
from .reconciliation import (
    ALLOWED_TRANSITIONS,
    can_transition,
    ensure_transition,
)

__all__ = [
    "compute_company_totals",
    "merge_company_balances",
    "exclude_bank_accounts",
    "summarize_bank_transactions",
    "default_date_range",
    "quick_date_range",
    "filter_balances",
    "filter_transactions",
    "build_customer_name_map",
    "build_erp_name_map",
    "ALLOWED_TRANSITIONS",
    "can_transition",
    "ensure_transition",
]
