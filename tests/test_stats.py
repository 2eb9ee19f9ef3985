from datetime import datetime, timezone

from urbix.models.enums import Category, ReportStatus, Sentiment
from urbix.models.report import Location, Report
from urbix.services.seed import demo_reports
from urbix.services.stats_service import compute_dashboard_stats, day_label, filter_reports


def _report(created_at, **fields) -> Report:
    values = {'reporter': 'citizen_jo', 'title': 'Issue', 'created_at': created_at}
    values.update(fields)
    return Report(**values)


def test_empty_collection_has_zero_resolution_rate():
    stats = compute_dashboard_stats([])

    assert stats.total == 0
    assert stats.resolution_rate == 0.0
    assert stats.resolution_rate_percent == 0
    assert stats.trends == []
    assert stats.localities == ['All']
    assert [(item.name, item.value) for item in stats.sentiment] == [
        ('positive', 0),
        ('neutral', 0),
        ('negative', 0),
    ]


def test_counts_and_rates():
    day = datetime(2025, 3, 1, 12, tzinfo=timezone.utc)
    reports = [
        _report(day, status=ReportStatus.RESOLVED, sentiment=Sentiment.POSITIVE, category=Category.PUBLIC_PARKS),
        _report(day, status=ReportStatus.PENDING, sentiment=Sentiment.NEGATIVE, category=Category.ROADS),
        _report(day, status=ReportStatus.PENDING, sentiment=Sentiment.NEGATIVE, category=Category.ROADS),
        _report(day, status=ReportStatus.DISMISSED),
    ]

    stats = compute_dashboard_stats(reports)

    assert (stats.total, stats.pending, stats.resolved, stats.critical) == (4, 2, 1, 2)
    assert stats.resolution_rate == 0.25
    assert stats.resolution_rate_percent == 25
    assert {item.name: item.value for item in stats.sentiment} == {'positive': 1, 'neutral': 1, 'negative': 2}
    assert [(item.name, item.value) for item in stats.categories] == [
        ('Public Parks', 1),
        ('Roads & Infrastructure', 2),
        ('Other', 1),
    ]


def test_unknown_sentiment_counts_as_neutral():
    report = Report.model_validate(
        {'reporter': 'x', 'title': 'y', 'sentiment': 'furious', 'category': None}
    )

    stats = compute_dashboard_stats([report])

    assert {item.name: item.value for item in stats.sentiment}['neutral'] == 1
    assert stats.categories[0].name == 'Other'


def test_trends_sort_by_date_not_label():
    reports = [
        _report(datetime(2025, 2, 3, 9, tzinfo=timezone.utc)),
        _report(datetime(2025, 1, 20, 9, tzinfo=timezone.utc)),
        _report(datetime(2025, 2, 3, 18, tzinfo=timezone.utc)),
        _report(datetime(2024, 12, 31, 23, tzinfo=timezone.utc)),
    ]

    stats = compute_dashboard_stats(reports)

    assert [(point.date, point.count) for point in stats.trends] == [
        ('Dec 31', 1),
        ('Jan 20', 1),
        ('Feb 3', 2),
    ]


def test_day_label_is_locale_independent():
    assert day_label(datetime(2025, 9, 7).date()) == 'Sep 7'


def test_localities_are_deduplicated_with_all_sentinel():
    now = datetime(2025, 5, 5, tzinfo=timezone.utc)
    reports = [
        _report(now, location=Location(locality='Downtown')),
        _report(now, location=Location(locality='')),
        _report(now, location=Location(locality=None)),
        _report(now, location=Location(locality='Sunnydale')),
        _report(now, location=Location(locality='Downtown')),
    ]

    assert compute_dashboard_stats(reports).localities == ['All', 'Downtown', 'Sunnydale']


def test_stats_are_deterministic():
    reports = demo_reports(datetime(2025, 6, 10, tzinfo=timezone.utc))

    first = compute_dashboard_stats(reports)
    second = compute_dashboard_stats(reports)

    assert first == second
    assert first.model_dump_json() == second.model_dump_json()
    assert first.resolution_rate_percent == 50


def test_filter_reports_treats_all_as_wildcard():
    reports = demo_reports()

    assert filter_reports(reports, locality='All', sentiment='All') == reports
    assert [r.id for r in filter_reports(reports, locality='Downtown')] == ['rep-1']
    assert [r.id for r in filter_reports(reports, sentiment='positive')] == ['rep-2']
    assert [r.id for r in filter_reports(reports, category='Roads & Infrastructure', status='pending')] == ['rep-1']
    assert filter_reports(reports, reporter='nobody') == []
