from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from urbix.models.enums import Category, ReportStatus, Sentiment, display_label
from urbix.models.report import DEFAULT_DEPARTMENT, DEFAULT_LOCALITY, HistoryEntry, Location, Report


class ReportCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    image: Optional[str] = None
    locality: Optional[str] = DEFAULT_LOCALITY
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    # Prefilled from an /ai/analyze draft; when ai_insights is set no enrichment runs.
    category: Category = Category.OTHER
    department: str = DEFAULT_DEPARTMENT
    sentiment: Sentiment = Sentiment.NEUTRAL
    ai_insights: Optional[str] = None


class ReportStatusUpdate(BaseModel):
    status: ReportStatus


class ReportOut(BaseModel):
    id: str
    reporter: str
    title: str
    description: str
    category: Category
    department: str
    sentiment: Sentiment
    status: ReportStatus
    status_label: str
    location: Location
    image: Optional[str] = None
    created_at: datetime
    ai_insights: Optional[str] = None
    history: list[HistoryEntry]


def to_report_out(report: Report) -> ReportOut:
    return ReportOut(
        id=report.id,
        reporter=report.reporter,
        title=report.title,
        description=report.description,
        category=report.category,
        department=report.department,
        sentiment=report.sentiment,
        status=report.status,
        status_label=display_label(report.status),
        location=report.location,
        image=report.image,
        created_at=report.created_at,
        ai_insights=report.ai_insights,
        history=report.history,
    )
