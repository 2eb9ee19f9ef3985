from functools import lru_cache

from fastapi import Depends

from urbix.db.repository import SqlCollectionRepository
from urbix.db.session import engine
from urbix.services.ai_analysis import ReportAnalyzer
from urbix.services.lifecycle_service import ReportLifecycle
from urbix.services.pulse_service import PulseTracker
from urbix.services.report_store import ReportStore
from urbix.services.user_directory import UserDirectory


@lru_cache
def get_repository() -> SqlCollectionRepository:
    return SqlCollectionRepository(engine)


@lru_cache
def get_report_store() -> ReportStore:
    return ReportStore(get_repository())


@lru_cache
def get_user_directory() -> UserDirectory:
    return UserDirectory(get_repository())


@lru_cache
def get_analyzer() -> ReportAnalyzer:
    return ReportAnalyzer()


@lru_cache
def get_pulse_tracker() -> PulseTracker:
    return PulseTracker(get_analyzer())


def get_lifecycle(
    store: ReportStore = Depends(get_report_store),
    analyzer: ReportAnalyzer = Depends(get_analyzer),
) -> ReportLifecycle:
    return ReportLifecycle(store, analyzer)


def reset_dependencies() -> None:
    for factory in (get_repository, get_report_store, get_user_directory, get_analyzer, get_pulse_tracker):
        factory.cache_clear()
