"""Domain package for consolidation rules and core models."""

from .constants import DEFAULT_COMPANIES, QUICK_RANGE_PRESETS
from .errors import (
    IllegalStatusTransitionError,
    StatusMutationError,
    UnknownTransactionError,
)
from .models import (
    AgingRecord,
    BalanceFilter,
    BalanceSign,
    BankAccount,
    BankSummary,
    BankSummaryReport,
    BankTransaction,
    Company,
    CompanyTotals,
    Customer,
    DateRange,
    ErpAccount,
    ErpStatus,
    MergedBalance,
    OverdueDetails,
    TransactionFilter,
    TransactionType,
)
from .services import (
    build_customer_name_map,
    build_erp_name_map,
    can_transition,
    compute_company_totals,
    default_date_range,
    ensure_transition,
    exclude_bank_accounts,
    filter_balances,
    filter_transactions,
    merge_company_balances,
    quick_date_range,
    summarize_bank_transactions,
)

__all__ = [
    "DEFAULT_COMPANIES",
    "QUICK_RANGE_PRESETS",
    "IllegalStatusTransitionError",
    "StatusMutationError",
    "UnknownTransactionError",
    "AgingRecord",
    "BalanceFilter",
    "BalanceSign",
    "BankAccount",
    "BankSummary",
    "BankSummaryReport",
    "BankTransaction",
    "Company",
    "CompanyTotals",
    "Customer",
    "DateRange",
    "ErpAccount",
    "ErpStatus",
    "MergedBalance",
    "OverdueDetails",
    "TransactionFilter",
    "TransactionType",
    "build_customer_name_map",
    "build_erp_name_map",
    "can_transition",
    "compute_company_totals",
    "default_date_range",
    "ensure_transition",
    "exclude_bank_accounts",
    "filter_balances",
    "filter_transactions",
    "merge_company_balances",
    "quick_date_range",
    "summarize_bank_transactions",
]
