"""Filter state passed by value into the filter/search layer."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from cari_consolidation.domain.models.bank import ErpStatus
from cari_consolidation.utils.date_utils import to_naive_local


class BalanceSign(str, Enum):
    """Balance-sign selector for merged balances."""

    ALL = "all"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    OVERDUE = "overdue"


class TransactionType(str, Enum):
    """Direction selector for bank transactions."""

    ALL = "all"
    INFLOW = "inflow"
    OUTFLOW = "outflow"


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range; a missing bound leaves that side open."""

    start: datetime | None = None
    end: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, moment: datetime) -> bool:
        moment = to_naive_local(moment)
        if self.start is not None and moment < to_naive_local(self.start):
            return False
        if self.end is not None and moment > to_naive_local(self.end):
            return False
        return True


@dataclass(frozen=True)
class BalanceFilter:
    """Filters applied to merged cari balances."""

    search_text: str = ""
    company_id: str | None = None
    balance_sign: BalanceSign = BalanceSign.ALL


@dataclass(frozen=True)
class TransactionFilter:
    """Filters applied to bank transactions, client and server side."""

    search_text: str = ""
    status: ErpStatus | None = None
    bank_acc_id: str | None = None
    transaction_type: TransactionType = TransactionType.ALL
    date_range: DateRange = DateRange()


__all__ = [
    "BalanceSign",
    "TransactionType",
    "DateRange",
    "BalanceFilter",
    "TransactionFilter",
]
