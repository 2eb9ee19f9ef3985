from fastapi import APIRouter, Depends

from urbix.api.deps import get_analyzer
from urbix.models.analysis import ReportAnalysis
from urbix.models.user import User
from urbix.schemas.ai import AnalyzeRequest
from urbix.services.ai_analysis import ReportAnalyzer
from urbix.services.auth_service import get_current_user

router = APIRouter(prefix='/ai', tags=['ai'])


@router.post('/analyze', response_model=ReportAnalysis)
async def analyze_endpoint(
    payload: AnalyzeRequest,
    analyzer: ReportAnalyzer = Depends(get_analyzer),
    _: User = Depends(get_current_user),
) -> ReportAnalysis:
    """Draft title, description and classification for the submission form."""
    return await analyzer.analyze(payload.description or '', payload.image)
