"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
from datetime import datetime
import os

import dotenv

from cari_consolidation.infrastructure.logging.logger import get_app_logger


def _env_int(name: str, default: int, logger) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}; using {default}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class ConsolidationSettings:
    """Runtime configuration for sources, caching and fan-out.

    Attributes:
        fiscal_year: Fiscal year whose company databases are queried.
        erp_linked_server: Linked-server prefix of the company databases.
        aging_stale_seconds: Cache lifetime of aging reports.
        erp_accounts_stale_seconds: Cache lifetime of ERP account lists.
        bank_accounts_stale_seconds: Cache lifetime of bank accounts.
        bank_transactions_stale_seconds: Cache lifetime of transaction lists.
        fetch_max_workers: Thread pool size for concurrent fetches.
        excluded_bank_acc_ids: Bank accounts hidden from the bank view.
        cache_enabled: Whether sources are wrapped in TTL caches.
    """

    fiscal_year: int = field(default_factory=lambda: datetime.now().year)
    erp_linked_server: str = "NETSISSVR"
    aging_stale_seconds: int = 600
    erp_accounts_stale_seconds: int = 900
    bank_accounts_stale_seconds: int = 900
    bank_transactions_stale_seconds: int = 120
    fetch_max_workers: int = 8
    excluded_bank_acc_ids: tuple[str, ...] = ()
    cache_enabled: bool = True

    @classmethod
    def from_env(cls) -> "ConsolidationSettings":
        """Build settings from environment variables (and ``.env``)."""
        dotenv.load_dotenv()
        logger = get_app_logger()
        defaults = cls()
        return cls(
            fiscal_year=_env_int("FISCAL_YEAR", defaults.fiscal_year, logger),
            erp_linked_server=os.getenv(
                "ERP_LINKED_SERVER",
                defaults.erp_linked_server,
            ).strip(),
            aging_stale_seconds=_env_int(
                "AGING_STALE_SECONDS",
                defaults.aging_stale_seconds,
                logger,
            ),
            erp_accounts_stale_seconds=_env_int(
                "ERP_ACCOUNTS_STALE_SECONDS",
                defaults.erp_accounts_stale_seconds,
                logger,
            ),
            bank_accounts_stale_seconds=_env_int(
                "BANK_ACCOUNTS_STALE_SECONDS",
                defaults.bank_accounts_stale_seconds,
                logger,
            ),
            bank_transactions_stale_seconds=_env_int(
                "BANK_TRANSACTIONS_STALE_SECONDS",
                defaults.bank_transactions_stale_seconds,
                logger,
            ),
            fetch_max_workers=max(
                1,
                _env_int("FETCH_MAX_WORKERS", defaults.fetch_max_workers, logger),
            ),
            excluded_bank_acc_ids=_env_list("EXCLUDED_BANK_ACCOUNT_IDS"),
            cache_enabled=_env_bool("CACHE_ENABLED", defaults.cache_enabled),
        )


__all__ = ["ConsolidationSettings"]
