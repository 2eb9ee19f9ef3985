"""Report lifecycle: creation, status transitions and AI enrichment.

Both creation and transitions are two-phase. The synchronous phase commits the
new state to the store and returns it. The second phase (``enrich`` /
``reanalyze``) runs later, calls the analyst model, and patches the report
identified by id; it is dropped when that report is gone or has moved on.

Statuses have no enforced order except one lock: once a report is resolved or
dismissed it can never return to pending or reviewing. The two terminal
statuses may still switch between each other, and same-status transitions are
recorded like any other.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

import anyio.to_thread
from loguru import logger

from urbix.core.errors import ReportNotFound, TerminalStateViolation
from urbix.models.analysis import ReportAnalysis
from urbix.models.base import utc_now
from urbix.models.enums import ACTIVE_STATUSES, ReportStatus
from urbix.models.report import DEFAULT_LOCALITY, HistoryEntry, Location, Report
from urbix.schemas.report import ReportCreate
from urbix.services.ai_analysis import ReportAnalyzer
from urbix.services.report_store import ReportStore

Scheduler = Callable[..., Any]

_TERMINAL_REASONS = {
    ReportStatus.RESOLVED: 'already resolved',
    ReportStatus.DISMISSED: 'already closed',
}


def check_transition(report: Report, new_status: ReportStatus) -> None:
    reason = _TERMINAL_REASONS.get(report.status)
    if reason and new_status in ACTIVE_STATUSES:
        raise TerminalStateViolation(report.id, report.status.value, new_status.value, reason)


def append_history(report: Report, status: ReportStatus, actor: str) -> Report:
    timestamp = utc_now()
    if report.history and report.history[-1].timestamp > timestamp:
        timestamp = report.history[-1].timestamp
    report.history.append(HistoryEntry(timestamp=timestamp, status=status, actor=actor))
    report.status = status
    return report


def status_insight(status: ReportStatus, summary: str) -> str:
    return f'[Status: {status.value}] {summary}'


class ReportLifecycle:
    def __init__(self, store: ReportStore, analyzer: ReportAnalyzer) -> None:
        self.store = store
        self.analyzer = analyzer

    def create(self, payload: ReportCreate, reporter: str, schedule: Optional[Scheduler] = None) -> Report:
        now = utc_now()
        report = Report(
            reporter=reporter,
            title=payload.title,
            description=payload.description,
            category=payload.category,
            department=payload.department,
            sentiment=payload.sentiment,
            status=ReportStatus.PENDING,
            location=Location(
                locality=payload.locality or DEFAULT_LOCALITY,
                address=payload.address,
                lat=payload.lat,
                lng=payload.lng,
            ),
            image=payload.image,
            created_at=now,
            ai_insights=payload.ai_insights,
            history=[HistoryEntry(timestamp=now, status=ReportStatus.PENDING, actor=reporter)],
        )
        record = self.store.insert(report)
        logger.info('report.created', report_id=record.id, reporter=reporter)
        if schedule is not None and payload.ai_insights is None:
            schedule(self.enrich, record.id)
        return record

    def transition(
        self,
        report_id: str,
        new_status: ReportStatus,
        actor: str,
        schedule: Optional[Scheduler] = None,
    ) -> Report:
        def _apply(report: Report) -> Report:
            check_transition(report, new_status)
            return append_history(report, new_status, actor)

        try:
            record = self.store.update(report_id, _apply)
        except TerminalStateViolation as exc:
            logger.info('report.transition.rejected', report_id=report_id, reason=exc.reason)
            raise
        logger.info('report.transition', report_id=report_id, status=new_status.value, actor=actor)
        if schedule is not None:
            schedule(self.reanalyze, report_id, new_status)
        return record

    async def enrich(self, report_id: str) -> Optional[Report]:
        """Fill AI-derived fields on a freshly created report."""
        report = await anyio.to_thread.run_sync(self.store.get, report_id)
        if report is None or not _awaiting_enrichment(report):
            logger.info('report.enrich.skipped', report_id=report_id, reason='stale')
            return None
        analysis = await self.analyzer.analyze(report.description, report.image)

        def _patch(current: Report) -> Optional[Report]:
            if not _awaiting_enrichment(current):
                return None
            return _merge_creation_analysis(current, analysis)

        return await self._apply_patch(report_id, _patch, 'report.enriched')

    async def reanalyze(self, report_id: str, status: ReportStatus) -> Optional[Report]:
        """Refresh classification after a status change; failures change nothing."""
        report = await anyio.to_thread.run_sync(self.store.get, report_id)
        if report is None or report.status != status:
            logger.info('report.reanalysis.skipped', report_id=report_id, reason='stale')
            return None
        analysis = await self.analyzer.try_analyze(report.description, report.image)
        if analysis is None:
            logger.warning('report.reanalysis.failed', report_id=report_id, status=status.value)
            return None

        def _patch(current: Report) -> Optional[Report]:
            if current.status != status:
                return None
            current.category = analysis.category
            current.sentiment = analysis.sentiment
            current.ai_insights = status_insight(status, analysis.summary)
            return current

        return await self._apply_patch(report_id, _patch, 'report.reanalyzed')

    async def _apply_patch(self, report_id: str, patch, event: str) -> Optional[Report]:
        applied = False

        def _tracked(current: Report) -> Optional[Report]:
            nonlocal applied
            result = patch(current)
            applied = result is not None
            return result

        try:
            record = await anyio.to_thread.run_sync(self.store.update, report_id, _tracked)
        except ReportNotFound:
            logger.info('report.patch.skipped', report_id=report_id, reason='missing')
            return None
        if not applied:
            logger.info('report.patch.skipped', report_id=report_id, reason='stale')
            return None
        logger.info(event, report_id=report_id)
        return record


def _awaiting_enrichment(report: Report) -> bool:
    # Any transition since creation means a newer analysis owns the AI fields.
    return report.status == ReportStatus.PENDING and len(report.history) <= 1


def _merge_creation_analysis(report: Report, analysis: ReportAnalysis) -> Report:
    report.category = analysis.category
    report.department = analysis.department or report.department
    report.sentiment = analysis.sentiment
    report.ai_insights = analysis.summary
    return report
