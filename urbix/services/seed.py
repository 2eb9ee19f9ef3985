from __future__ import annotations

from datetime import datetime, timedelta

from urbix.models.base import utc_now
from urbix.models.enums import Category, ReportStatus, Sentiment
from urbix.models.report import Location, Report

_DEMO_REPORTS = [
    {
        'id': 'rep-1',
        'reporter': 'city_watcher',
        'title': 'Large Pothole on Main St',
        'description': (
            'There is a massive pothole near the intersection of 5th and Main. '
            'It is dangerous for cyclists.'
        ),
        'category': Category.ROADS,
        'sentiment': Sentiment.NEGATIVE,
        'status': ReportStatus.PENDING,
        'locality': 'Downtown',
        'age_days': 2,
        'ai_insights': 'High priority due to safety risk for non-motorized transport.',
    },
    {
        'id': 'rep-2',
        'reporter': 'green_citizen',
        'title': 'Beautiful New Park Equipment',
        'description': 'The new swings at Sunnydale Park are fantastic! Kids love them.',
        'category': Category.PUBLIC_PARKS,
        'sentiment': Sentiment.POSITIVE,
        'status': ReportStatus.RESOLVED,
        'locality': 'Sunnydale',
        'age_days': 5,
        'ai_insights': 'Community satisfaction is high in the Sunnydale locality.',
    },
]


def demo_reports(now: datetime | None = None) -> list[Report]:
    """Dataset used when no report collection has been persisted yet.

    History is left empty so the model synthesizes the single system entry
    that matches each stored status.
    """
    now = now or utc_now()
    reports = []
    for item in _DEMO_REPORTS:
        reports.append(
            Report(
                id=item['id'],
                reporter=item['reporter'],
                title=item['title'],
                description=item['description'],
                category=item['category'],
                sentiment=item['sentiment'],
                status=item['status'],
                location=Location(locality=item['locality']),
                created_at=now - timedelta(days=item['age_days']),
                ai_insights=item['ai_insights'],
            )
        )
    return reports
