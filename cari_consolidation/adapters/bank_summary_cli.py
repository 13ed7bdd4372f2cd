"""CLI adapter printing per-bank inflow, outflow and balance totals."""

import os

from cari_consolidation.domain.constants import QUICK_RANGE_PRESETS
from cari_consolidation.domain.models import TransactionFilter
from cari_consolidation.domain.services import quick_date_range
from cari_consolidation.infrastructure.container import build_bank_use_cases
from cari_consolidation.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Summarize bank transactions of the ``BANK_RANGE`` quick range."""
    logger = get_app_logger()
    preset = os.getenv("BANK_RANGE", "today").strip() or "today"
    if preset not in QUICK_RANGE_PRESETS:
        logger.warning(
            f"Unknown range '{preset}'. Expected one of "
            f"{list(QUICK_RANGE_PRESETS)}; using 'today'."
        )
        preset = "today"

    listing, _ = build_bank_use_cases()
    view = listing.execute(
        TransactionFilter(date_range=quick_date_range(preset))
    )
    if view.has_error:
        print(f"! Bank transactions could not be loaded: {view.error}")

    report = view.report
    print(f"Bank summary ({preset}, {report.transaction_count} transactions)")
    if not report.has_data:
        print("  No transactions in range.")
        return
    for bank in report.banks:
        print(
            f"  {bank.bank_acc_name}: in={bank.inflow} "
            f"out={bank.outflow} balance={bank.balance}"
        )
    total = report.total
    print(
        f"  {total.bank_acc_name}: in={total.inflow} "
        f"out={total.outflow} balance={total.balance}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
