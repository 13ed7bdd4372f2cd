"""Use case to consolidate cari balances across ERP companies.

Every participating company is queried independently: one aging report
and one account list per company, plus one customer-system read. The
fetches run concurrently and the merge is recomputed from scratch over
whatever has resolved, so a failing or slow company never blocks the
others.
"""

from collections.abc import Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime

from cari_consolidation.application.ports.customer_directory import (
    CustomerDirectoryPort,
)
from cari_consolidation.application.ports.erp_source import (
    ErpRecordSourcePort,
)
from cari_consolidation.domain.constants import DEFAULT_COMPANIES
from cari_consolidation.domain.models import (
    AgingRecord,
    BalanceFilter,
    Company,
    CompanyTotals,
    Customer,
    ErpAccount,
    MergedBalance,
)
from cari_consolidation.domain.services import (
    build_customer_name_map,
    build_erp_name_map,
    compute_company_totals,
    filter_balances,
    merge_company_balances,
)
from cari_consolidation.infrastructure.logging.logger import get_app_logger

AGING = "aging"
ACCOUNTS = "accounts"
CUSTOMERS = "customers"


@dataclass(frozen=True)
class SourceFetchResult:
    """Outcome of one upstream fetch.

    Attributes:
        kind: ``aging``, ``accounts`` or ``customers``.
        company_id: Company the fetch belongs to, None for customers.
        loaded: True once the fetch returned data.
        error: Error message when the fetch failed.
    """

    kind: str
    company_id: str | None
    loaded: bool = False
    error: str | None = None

    @property
    def is_loading(self) -> bool:
        return not self.loaded and self.error is None


@dataclass(frozen=True)
class ConsolidatedBalancesView:
    """Merged balances and per-source fetch state for presentation."""

    balances: list[MergedBalance]
    filtered: list[MergedBalance]
    company_totals: CompanyTotals
    sources: list[SourceFetchResult]

    @property
    def has_error(self) -> bool:
        return any(source.error for source in self.sources)

    @property
    def is_loading(self) -> bool:
        return any(source.is_loading for source in self.sources)


class _FetchState:
    """Results collected so far during one fan-out."""

    def __init__(self, companies: Sequence[Company], with_customers: bool):
        self.companies = list(companies)
        self.aging: dict[str, list[AgingRecord]] = {}
        self.accounts: dict[str, list[ErpAccount]] = {}
        self.customers: list[Customer] = []
        self.sources: dict[tuple[str, str | None], SourceFetchResult] = {}
        for company in self.companies:
            for kind in (AGING, ACCOUNTS):
                key = (kind, company.company_id)
                self.sources[key] = SourceFetchResult(*key)
        if with_customers:
            self.sources[(CUSTOMERS, None)] = SourceFetchResult(CUSTOMERS, None)

    def store(self, kind: str, company_id: str | None, data) -> None:
        if kind == AGING:
            self.aging[company_id] = list(data)
        elif kind == ACCOUNTS:
            self.accounts[company_id] = list(data)
        else:
            self.customers = list(data)
        self.sources[(kind, company_id)] = SourceFetchResult(
            kind,
            company_id,
            loaded=True,
        )

    def fail(self, kind: str, company_id: str | None, error: str) -> None:
        self.sources[(kind, company_id)] = SourceFetchResult(
            kind,
            company_id,
            error=error,
        )

    def in_registry_order(self, results: dict[str, list]) -> dict[str, list]:
        return {
            company.company_id: results[company.company_id]
            for company in self.companies
            if company.company_id in results
        }


class GetConsolidatedBalancesUseCase:
    """Fetch, merge and filter cari balances of all participating companies."""

    def __init__(
        self,
        erp_source: ErpRecordSourcePort,
        customer_directory: CustomerDirectoryPort | None = None,
        companies: Sequence[Company] = DEFAULT_COMPANIES,
        fiscal_year: int | None = None,
        max_workers: int = 8,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            erp_source: Port providing per-company aging and account data.
            customer_directory: Optional port for customer-system names.
            companies: Company registry; only participating companies are
                queried.
            fiscal_year: Fiscal year to query, defaults to the current year.
            max_workers: Thread pool size for the concurrent fetches.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._erp_source = erp_source
        self._customer_directory = customer_directory
        self._companies = [
            company for company in companies if company.participates
        ]
        self._fiscal_year = fiscal_year or datetime.now().year
        self._max_workers = max_workers
        self._logger = logger or get_app_logger()

    @property
    def companies(self) -> list[Company]:
        return list(self._companies)

    def execute(
        self,
        balance_filter: BalanceFilter | None = None,
    ) -> ConsolidatedBalancesView:
        """Run every fetch, wait for all of them and merge once.

        Args:
            balance_filter: Optional filter applied to the merged result.

        Returns:
            ConsolidatedBalancesView: Merged balances, filtered subset,
            company totals and per-source fetch state.
        """
        state = self._new_state()
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = self._submit_all(executor)
            for future in as_completed(futures):
                self._collect(state, future, *futures[future])
        return self._build_view(state, balance_filter)

    def iter_partial_views(
        self,
        balance_filter: BalanceFilter | None = None,
    ) -> Iterator[ConsolidatedBalancesView]:
        """Yield a freshly merged view each time another fetch resolves.

        The last view yielded is complete; earlier ones contain only the
        companies that have answered so far.
        """
        state = self._new_state()
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = self._submit_all(executor)
            for future in as_completed(futures):
                self._collect(state, future, *futures[future])
                yield self._build_view(state, balance_filter)

    def refresh(
        self,
        balance_filter: BalanceFilter | None = None,
    ) -> ConsolidatedBalancesView:
        """Drop cached source data and re-run every fetch."""
        for source in (self._erp_source, self._customer_directory):
            invalidate = getattr(source, "invalidate", None)
            if callable(invalidate):
                invalidate()
        self._logger.info("Refreshing consolidated balances from all sources")
        return self.execute(balance_filter)

    def _new_state(self) -> _FetchState:
        return _FetchState(
            self._companies,
            with_customers=self._customer_directory is not None,
        )

    def _submit_all(
        self,
        executor: ThreadPoolExecutor,
    ) -> dict[Future, tuple[str, str | None]]:
        futures: dict[Future, tuple[str, str | None]] = {}
        for company in self._companies:
            company_id = company.company_id
            aging = executor.submit(
                self._erp_source.fetch_aging_records,
                self._fiscal_year,
                company_id,
            )
            futures[aging] = (AGING, company_id)
            accounts = executor.submit(
                self._erp_source.fetch_accounts,
                self._fiscal_year,
                company_id,
            )
            futures[accounts] = (ACCOUNTS, company_id)
        if self._customer_directory is not None:
            customers = executor.submit(
                self._customer_directory.fetch_customers
            )
            futures[customers] = (CUSTOMERS, None)
        return futures

    def _collect(
        self,
        state: _FetchState,
        future: Future,
        kind: str,
        company_id: str | None,
    ) -> None:
        label = f"{kind}:{company_id}" if company_id else kind
        try:
            rows = list(future.result())
        except Exception as exc:
            # one failing source must not abort the others
            self._logger.warning(f"Fetch failed for {label}: {exc}")
            state.fail(kind, company_id, str(exc))
            return
        state.store(kind, company_id, rows)
        self._logger.info(f"Fetched {len(rows)} rows for {label}")

    def _build_view(
        self,
        state: _FetchState,
        balance_filter: BalanceFilter | None,
    ) -> ConsolidatedBalancesView:
        aging = state.in_registry_order(state.aging)
        erp_names = build_erp_name_map(state.in_registry_order(state.accounts))
        customer_names = build_customer_name_map(state.customers)

        dropped = sum(
            1 for records in aging.values() for record in records
            if not record.account_code
        )
        if dropped:
            self._logger.debug(f"Skipped {dropped} aging rows without cari code")

        balances = merge_company_balances(aging, erp_names, customer_names)
        filtered = filter_balances(balances, balance_filter)
        totals = compute_company_totals(aging)
        self._logger.info(
            f"Merged {len(balances)} cari balances from {len(aging)} "
            f"companies, {len(filtered)} after filters, "
            f"grand total={totals.grand_total}"
        )
        return ConsolidatedBalancesView(
            balances=balances,
            filtered=filtered,
            company_totals=totals,
            sources=list(state.sources.values()),
        )


__all__ = [
    "GetConsolidatedBalancesUseCase",
    "ConsolidatedBalancesView",
    "SourceFetchResult",
]
