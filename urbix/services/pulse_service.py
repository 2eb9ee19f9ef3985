from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from loguru import logger

from urbix.models.base import utc_now
from urbix.models.report import Report
from urbix.services.ai_analysis import ReportAnalyzer


class PulseTracker:
    """Holds the latest one-sentence pulse summary across refresh cycles.

    A failed refresh means "no new summary this cycle"; the previous value is
    kept rather than cleared.
    """

    def __init__(self, analyzer: ReportAnalyzer) -> None:
        self._analyzer = analyzer
        self.summary: Optional[str] = None
        self.updated_at: Optional[datetime] = None

    async def refresh(self, reports: Sequence[Report]) -> Optional[str]:
        if not reports:
            return self.summary
        summary = await self._analyzer.summarize_pulse(reports)
        if summary is None:
            logger.info('pulse.refresh.kept_previous', has_previous=self.summary is not None)
            return self.summary
        self.summary = summary
        self.updated_at = utc_now()
        return summary
