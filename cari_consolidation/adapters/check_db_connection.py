"""Simple CLI to validate database connections.

Instantiates the concrete database adapter and runs ``SELECT 1`` against
both the ERP server and the bank-transaction database.
"""

from cari_consolidation.infrastructure.container import build_database_adapter
from cari_consolidation.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run basic connectivity checks against configured databases."""
    adapter = build_database_adapter()
    logger = get_app_logger()

    erp_engine = adapter.get_erp_engine()
    bank_engine = adapter.get_bank_engine()

    logger.info(f"ERP DB: {erp_engine.url}")
    logger.info(f"Bank DB: {bank_engine.url}")

    with erp_engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")
    with bank_engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")

    logger.info("Both connections are working.")


if __name__ == "__main__":  # pragma: no cover
    main()
