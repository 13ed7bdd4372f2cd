"""CLI adapter printing consolidated cari balances across companies.

Filters are read from the environment: ``BALANCE_SEARCH`` (free text),
``BALANCE_COMPANY`` (company id), ``BALANCE_SIGN`` (all, positive,
negative, overdue) and ``BALANCE_LIMIT`` (rows printed, default 20).
"""

import os

from cari_consolidation.domain.models import BalanceFilter, BalanceSign
from cari_consolidation.infrastructure.container import (
    build_consolidated_balances_use_case,
)
from cari_consolidation.infrastructure.logging.logger import get_app_logger


def _parse_sign(value: str | None, logger) -> BalanceSign:
    if not value:
        return BalanceSign.ALL
    try:
        return BalanceSign(value.strip().lower())
    except ValueError:
        logger.warning(
            f"Invalid balance sign '{value}'. "
            f"Expected one of {[sign.value for sign in BalanceSign]}."
        )
        return BalanceSign.ALL


def _parse_limit(value: str | None, logger) -> int:
    if not value:
        return 20
    try:
        return max(0, int(value))
    except ValueError:
        logger.warning(f"Invalid limit '{value}'. Using 20.")
        return 20


def main() -> None:
    """Fetch all companies, merge and print totals and top balances."""
    logger = get_app_logger()
    balance_filter = BalanceFilter(
        search_text=os.getenv("BALANCE_SEARCH", ""),
        company_id=os.getenv("BALANCE_COMPANY") or None,
        balance_sign=_parse_sign(os.getenv("BALANCE_SIGN"), logger),
    )
    limit = _parse_limit(os.getenv("BALANCE_LIMIT"), logger)

    use_case = build_consolidated_balances_use_case()
    view = use_case.execute(balance_filter)

    for source in view.sources:
        if source.error:
            where = source.company_id or "customer system"
            print(f"! {source.kind} failed for {where}: {source.error}")

    print("Company totals")
    for company_id, total in view.company_totals.by_company.items():
        print(f"  {company_id}: {total}")
    print(f"  Grand total: {view.company_totals.grand_total}")

    print(
        f"Balances ({len(view.filtered)} of {len(view.balances)} "
        f"after filters, showing {min(limit, len(view.filtered))})"
    )
    for balance in view.filtered[:limit]:
        per_company = ", ".join(
            f"{company_id}={amount}"
            for company_id, amount in balance.nonzero_company_balances().items()
        )
        print(
            f"  {balance.account_code} {balance.display_name}: "
            f"total={balance.total_balance} "
            f"overdue={balance.overdue_balance} [{per_company}]"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
