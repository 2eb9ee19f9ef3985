from urbix.models.analysis import ReportAnalysis
from urbix.models.collection import StoredCollection
from urbix.models.enums import Category, Priority, ReportStatus, Sentiment, UserRole
from urbix.models.report import HistoryEntry, Location, Report
from urbix.models.user import User

__all__ = [
    'Category',
    'HistoryEntry',
    'Location',
    'Priority',
    'Report',
    'ReportAnalysis',
    'ReportStatus',
    'Sentiment',
    'StoredCollection',
    'User',
    'UserRole',
]
