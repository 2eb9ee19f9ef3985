from enum import Enum
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status

from urbix.api.deps import get_lifecycle, get_report_store
from urbix.core.errors import ReportNotFound, TerminalStateViolation
from urbix.models.enums import Category, ReportStatus, Sentiment, UserRole
from urbix.models.report import Report
from urbix.models.user import User
from urbix.schemas.report import ReportCreate, ReportOut, ReportStatusUpdate, to_report_out
from urbix.services.auth_service import get_current_user, require_admin
from urbix.services.lifecycle_service import ReportLifecycle
from urbix.services.report_store import ReportStore
from urbix.services.stats_service import ALL_FILTER, filter_reports

router = APIRouter(prefix='/reports', tags=['reports'])


def _filter_value(name: str, value: Optional[str], allowed: type[Enum]) -> Optional[str]:
    if value is None or value == ALL_FILTER:
        return value
    if value not in {item.value for item in allowed}:
        raise HTTPException(status_code=422, detail=f'Unknown {name}: {value}')
    return value


def _ensure_visible(record: Report, user: User) -> None:
    if user.role != UserRole.ADMIN and record.reporter.lower() != user.username.lower():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Not allowed')


@router.post('', response_model=ReportOut, status_code=status.HTTP_201_CREATED)
def create_report_endpoint(
    payload: ReportCreate,
    background_tasks: BackgroundTasks,
    lifecycle: ReportLifecycle = Depends(get_lifecycle),
    user: User = Depends(get_current_user),
) -> ReportOut:
    record = lifecycle.create(payload, user.username, schedule=background_tasks.add_task)
    return to_report_out(record)


@router.get('', response_model=list[ReportOut])
def list_reports_endpoint(
    locality: Optional[str] = None,
    sentiment: Optional[str] = None,
    category: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias='status'),
    store: ReportStore = Depends(get_report_store),
    user: User = Depends(get_current_user),
) -> list[ReportOut]:
    reports = store.list()
    if user.role != UserRole.ADMIN:
        reports = [report for report in reports if report.reporter.lower() == user.username.lower()]
    reports = filter_reports(
        reports,
        locality=locality,
        sentiment=_filter_value('sentiment', sentiment, Sentiment),
        category=_filter_value('category', category, Category),
        status=_filter_value('status', status_filter, ReportStatus),
    )
    return [to_report_out(record) for record in reports]


@router.get('/{report_id}', response_model=ReportOut)
def get_report_endpoint(
    report_id: str,
    store: ReportStore = Depends(get_report_store),
    user: User = Depends(get_current_user),
) -> ReportOut:
    record = store.get(report_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Report not found')
    _ensure_visible(record, user)
    return to_report_out(record)


@router.patch('/{report_id}/status', response_model=ReportOut)
def update_report_status_endpoint(
    report_id: str,
    payload: ReportStatusUpdate,
    background_tasks: BackgroundTasks,
    lifecycle: ReportLifecycle = Depends(get_lifecycle),
    user: User = Depends(require_admin),
) -> ReportOut:
    try:
        record = lifecycle.transition(report_id, payload.status, user.username, schedule=background_tasks.add_task)
    except ReportNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Report not found') from exc
    except TerminalStateViolation as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return to_report_out(record)
