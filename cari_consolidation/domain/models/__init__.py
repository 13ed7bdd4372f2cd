"""Domain models package."""

from .aging import (
    AgingRecord,
    CompanyTotals,
    Customer,
    ErpAccount,
    MergedBalance,
    OverdueDetails,
)
from .bank import (
    BankAccount,
    BankSummary,
    BankSummaryReport,
    BankTransaction,
    ErpStatus,
)
from .companies import Company
from .filters import (
    BalanceFilter,
    BalanceSign,
    DateRange,
    TransactionFilter,
    TransactionType,
)

__all__ = [
    "AgingRecord",
    "CompanyTotals",
    "Customer",
    "ErpAccount",
    "MergedBalance",
    "OverdueDetails",
    "BankAccount",
    "BankSummary",
    "BankSummaryReport",
    "BankTransaction",
    "ErpStatus",
    "Company",
    "BalanceFilter",
    "BalanceSign",
    "DateRange",
    "TransactionFilter",
    "TransactionType",
]
