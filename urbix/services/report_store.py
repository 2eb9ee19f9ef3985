from __future__ import annotations

from collections.abc import Callable
from threading import RLock
from typing import Optional

from loguru import logger

from urbix.core.errors import PersistenceCorruption, ReportNotFound
from urbix.db.repository import ReportRepository
from urbix.models.report import Report
from urbix.services.seed import demo_reports

ReportMutation = Callable[[Report], Optional[Report]]


class ReportStore:
    """Sole owner of the report collection, most recent report first.

    Every mutation is written through to the repository. Callers receive
    copies, so changes only land through ``insert`` and ``update``.
    """

    def __init__(self, repository: ReportRepository) -> None:
        self._repository = repository
        self._lock = RLock()
        self._reports: list[Report] = self._load()

    def _load(self) -> list[Report]:
        try:
            reports = self._repository.load_reports()
        except PersistenceCorruption as exc:
            logger.warning('report_store.corrupt', error=str(exc))
            reports = None
        if reports is None:
            reports = demo_reports()
            self._repository.save_reports(reports)
            logger.info('report_store.seeded', count=len(reports))
        return reports

    def _commit(self, reports: list[Report]) -> None:
        # Memory only moves forward once the repository accepted the snapshot.
        self._repository.save_reports(reports)
        self._reports = reports

    def _index_of(self, report_id: str) -> int:
        for idx, report in enumerate(self._reports):
            if report.id == report_id:
                return idx
        raise ReportNotFound(report_id)

    def list(self) -> list[Report]:
        with self._lock:
            return [report.model_copy(deep=True) for report in self._reports]

    def get(self, report_id: str) -> Optional[Report]:
        with self._lock:
            for report in self._reports:
                if report.id == report_id:
                    return report.model_copy(deep=True)
        return None

    def insert(self, report: Report) -> Report:
        with self._lock:
            self._commit([report.model_copy(deep=True), *self._reports])
        return report.model_copy(deep=True)

    def update(self, report_id: str, mutate: ReportMutation) -> Report:
        """Apply ``mutate`` to a copy of the latest stored report and save it.

        ``mutate`` may raise to abort, or return ``None`` to leave the report
        untouched. Raises ``ReportNotFound`` for unknown ids. If the save
        fails the in-memory collection keeps its previous state.
        """
        with self._lock:
            idx = self._index_of(report_id)
            current = self._reports[idx]
            updated = mutate(current.model_copy(deep=True))
            if updated is None:
                return current.model_copy(deep=True)
            reports = list(self._reports)
            reports[idx] = updated
            self._commit(reports)
            return updated.model_copy(deep=True)
