from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from urbix.models.base import ensure_utc, new_report_id, utc_now
from urbix.models.enums import Category, ReportStatus, Sentiment, coerce_enum

DEFAULT_DEPARTMENT = 'City Office'
DEFAULT_LOCALITY = 'Main Area'
SYSTEM_ACTOR = 'system'


class Location(BaseModel):
    locality: Optional[str] = DEFAULT_LOCALITY
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class HistoryEntry(BaseModel):
    timestamp: datetime
    status: ReportStatus
    actor: str

    @field_validator('timestamp')
    @classmethod
    def _utc_timestamp(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class Report(BaseModel):
    id: str = Field(default_factory=new_report_id)
    reporter: str
    title: str
    description: str = ''
    category: Category = Category.OTHER
    department: str = DEFAULT_DEPARTMENT
    sentiment: Sentiment = Sentiment.NEUTRAL
    status: ReportStatus = ReportStatus.PENDING
    location: Location = Field(default_factory=Location)
    image: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    ai_insights: Optional[str] = None
    history: list[HistoryEntry] = Field(default_factory=list)

    @field_validator('category', mode='before')
    @classmethod
    def _known_category(cls, value):
        return coerce_enum(Category, value, Category.OTHER)

    @field_validator('sentiment', mode='before')
    @classmethod
    def _known_sentiment(cls, value):
        return coerce_enum(Sentiment, value, Sentiment.NEUTRAL)

    @field_validator('department', mode='before')
    @classmethod
    def _department_default(cls, value):
        return value or DEFAULT_DEPARTMENT

    @field_validator('location', mode='before')
    @classmethod
    def _location_default(cls, value):
        return value if value is not None else Location()

    @field_validator('created_at')
    @classmethod
    def _utc_created_at(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode='after')
    def _synthesize_history(self) -> 'Report':
        # Stored reports written before history tracking carry none.
        if not self.history:
            self.history = [HistoryEntry(timestamp=self.created_at, status=self.status, actor=SYSTEM_ACTOR)]
        return self

    @property
    def locality(self) -> Optional[str]:
        return self.location.locality if self.location else None
