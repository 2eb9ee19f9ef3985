from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from urbix.models.base import ensure_utc
from urbix.models.enums import Category, ReportStatus, Sentiment
from urbix.models.report import Report
from urbix.schemas.dashboard import DashboardStats, NamedCount, TrendPoint

ALL_FILTER = 'All'

# Fixed abbreviations keep trend labels independent of the process locale.
_MONTH_ABBR = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def day_label(day: date) -> str:
    return f'{_MONTH_ABBR[day.month - 1]} {day.day}'


def _sentiment_of(report: Report) -> Sentiment:
    return report.sentiment if isinstance(report.sentiment, Sentiment) else Sentiment.NEUTRAL


def _category_of(report: Report) -> str:
    return report.category.value if report.category else Category.OTHER.value


def _distinct_localities(reports: Iterable[Report]) -> list[str]:
    seen: dict[str, None] = {}
    for report in reports:
        locality = report.locality
        if locality and locality.strip():
            seen.setdefault(locality, None)
    return [ALL_FILTER, *seen]


def compute_dashboard_stats(reports: Sequence[Report]) -> DashboardStats:
    """Derive the admin dashboard view from the current collection.

    Pure and deterministic: list outputs follow input order (categories,
    localities), a fixed order (sentiment), or calendar order (trends).
    """
    sentiment_counts = {item: 0 for item in Sentiment}
    category_counts: dict[str, int] = {}
    day_counts: dict[date, int] = {}
    pending = resolved = 0

    for report in reports:
        sentiment_counts[_sentiment_of(report)] += 1
        category = _category_of(report)
        category_counts[category] = category_counts.get(category, 0) + 1
        day = ensure_utc(report.created_at).date()
        day_counts[day] = day_counts.get(day, 0) + 1
        if report.status == ReportStatus.PENDING:
            pending += 1
        elif report.status == ReportStatus.RESOLVED:
            resolved += 1

    total = len(reports)
    rate = resolved / total if total else 0.0
    return DashboardStats(
        sentiment=[NamedCount(name=item.value, value=count) for item, count in sentiment_counts.items()],
        categories=[NamedCount(name=name, value=count) for name, count in category_counts.items()],
        trends=[
            TrendPoint(date=day_label(day), day=day, count=day_counts[day]) for day in sorted(day_counts)
        ],
        pending=pending,
        resolved=resolved,
        total=total,
        critical=sentiment_counts[Sentiment.NEGATIVE],
        resolution_rate=rate,
        resolution_rate_percent=round(rate * 100),
        localities=_distinct_localities(reports),
    )


def _matches(value: Optional[str], wanted: Optional[str]) -> bool:
    return wanted is None or wanted == ALL_FILTER or value == wanted


def filter_reports(
    reports: Iterable[Report],
    *,
    locality: Optional[str] = None,
    sentiment: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
    reporter: Optional[str] = None,
) -> list[Report]:
    return [
        report
        for report in reports
        if _matches(report.locality, locality)
        and _matches(report.sentiment.value, sentiment)
        and _matches(report.category.value, category)
        and _matches(report.status.value, status)
        and _matches(report.reporter, reporter)
    ]
