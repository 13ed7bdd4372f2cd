"""Tests for the UpdateTransactionStatusUseCase."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from cari_consolidation.application.use_cases.transaction_store import (
    TransactionStore,
)
from cari_consolidation.application.use_cases.update_transaction_status import (
    UpdateTransactionStatusUseCase,
)
from cari_consolidation.domain.errors import (
    IllegalStatusTransitionError,
    StatusMutationError,
    UnknownTransactionError,
)
from cari_consolidation.domain.models import BankTransaction, ErpStatus


def _tx(tx_id, status):
    moment = datetime(2024, 5, 1)
    return BankTransaction(
        transaction_id=tx_id,
        bank_acc_id="B1",
        amount=Decimal("250"),
        balance=Decimal("0"),
        counterparty_name="Acme",
        description="",
        business_date=moment,
        create_date=moment,
        status=status,
    )


def _use_case(source, store):
    return UpdateTransactionStatusUseCase(
        source,
        store,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )


def test_waiting_to_manual_is_persisted_and_applied():
    source = MagicMock()
    store = TransactionStore([_tx("1", ErpStatus.WAITING)])
    use_case = _use_case(source, store)

    updated = use_case.execute("1", "manual")

    assert updated.status is ErpStatus.MANUAL
    assert store.get("1").status is ErpStatus.MANUAL
    source.update_transaction_status.assert_called_once_with(
        "1",
        ErpStatus.MANUAL,
    )


def test_success_to_manual_is_rejected_without_backend_call():
    source = MagicMock()
    store = TransactionStore([_tx("1", ErpStatus.SUCCESS)])
    use_case = _use_case(source, store)

    with pytest.raises(IllegalStatusTransitionError):
        use_case.execute("1", ErpStatus.MANUAL)

    source.update_transaction_status.assert_not_called()
    assert store.get("1").status is ErpStatus.SUCCESS


def test_backend_failure_rolls_back_to_previous_status():
    source = MagicMock()
    source.update_transaction_status.side_effect = RuntimeError("db down")
    store = TransactionStore([_tx("1", ErpStatus.ERROR)])
    use_case = _use_case(source, store)

    with pytest.raises(StatusMutationError) as excinfo:
        use_case.execute("1", ErpStatus.WAITING)

    assert "db down" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert store.get("1").status is ErpStatus.ERROR


def test_unknown_transaction_is_rejected():
    source = MagicMock()
    use_case = _use_case(source, TransactionStore())

    with pytest.raises(UnknownTransactionError):
        use_case.execute("missing", ErpStatus.MANUAL)
    source.update_transaction_status.assert_not_called()


def test_invalid_status_value_is_rejected():
    use_case = _use_case(MagicMock(), TransactionStore([_tx("1", "waiting")]))

    with pytest.raises(ValueError):
        use_case.execute("1", "posted")


def test_submit_runs_in_background_and_returns_future():
    source = MagicMock()
    store = TransactionStore(
        [_tx("1", ErpStatus.WAITING), _tx("2", ErpStatus.MANUAL)]
    )
    use_case = _use_case(source, store)

    first = use_case.submit("1", ErpStatus.SUCCESS)
    second = use_case.submit("2", ErpStatus.WAITING)

    assert first.result(timeout=5).status is ErpStatus.SUCCESS
    assert second.result(timeout=5).status is ErpStatus.WAITING
    use_case.shutdown()
    assert source.update_transaction_status.call_count == 2
