"""Application ports package."""

from .bank_source import BankTransactionSourcePort
from .customer_directory import CustomerDirectoryPort
from .database import DatabaseEnginePort
from .erp_source import ErpRecordSourcePort

__all__ = [
    "BankTransactionSourcePort",
    "CustomerDirectoryPort",
    "DatabaseEnginePort",
    "ErpRecordSourcePort",
]
