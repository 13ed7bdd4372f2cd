"""CLI adapter to change the reconciliation status of one transaction."""

import argparse
import sys

from cari_consolidation.domain.errors import (
    IllegalStatusTransitionError,
    StatusMutationError,
    UnknownTransactionError,
)
from cari_consolidation.domain.models import ErpStatus
from cari_consolidation.infrastructure.container import build_bank_use_cases
from cari_consolidation.infrastructure.logging.logger import get_app_logger


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Change the ERP reconciliation status of a transaction.",
    )
    parser.add_argument("transaction_id")
    parser.add_argument(
        "status",
        choices=[status.value for status in ErpStatus],
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Load current transactions and apply one status change.

    Returns:
        int: 0 on success, 1 when the change was rejected or failed.
    """
    args = _parse_args(argv)
    logger = get_app_logger()
    listing, updater = build_bank_use_cases()
    listing.execute()

    try:
        updated = updater.execute(args.transaction_id, args.status)
    except (
        IllegalStatusTransitionError,
        UnknownTransactionError,
        StatusMutationError,
    ) as exc:
        logger.error(str(exc))
        print(f"Status not changed: {exc}")
        return 1
    finally:
        updater.shutdown()

    print(f"Transaction {updated.transaction_id} is now {updated.status.value}.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
