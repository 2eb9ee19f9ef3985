from fastapi import APIRouter, Depends

from urbix.api.deps import get_pulse_tracker, get_report_store
from urbix.models.user import User
from urbix.schemas.dashboard import DashboardStats, PulseOut
from urbix.services.auth_service import require_admin
from urbix.services.pulse_service import PulseTracker
from urbix.services.report_store import ReportStore
from urbix.services.stats_service import compute_dashboard_stats

router = APIRouter(prefix='/dashboard', tags=['dashboard'])


@router.get('/stats', response_model=DashboardStats)
def stats_endpoint(
    store: ReportStore = Depends(get_report_store),
    _: User = Depends(require_admin),
) -> DashboardStats:
    return compute_dashboard_stats(store.list())


@router.get('/pulse', response_model=PulseOut)
async def pulse_endpoint(
    store: ReportStore = Depends(get_report_store),
    tracker: PulseTracker = Depends(get_pulse_tracker),
    _: User = Depends(require_admin),
) -> PulseOut:
    summary = await tracker.refresh(store.list())
    return PulseOut(summary=summary, updated_at=tracker.updated_at)
