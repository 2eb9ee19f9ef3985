import datetime as dt
from typing import Optional

from pydantic import BaseModel


class NamedCount(BaseModel):
    name: str
    value: int


class TrendPoint(BaseModel):
    date: str
    day: dt.date
    count: int


class DashboardStats(BaseModel):
    sentiment: list[NamedCount]
    categories: list[NamedCount]
    trends: list[TrendPoint]
    pending: int
    resolved: int
    total: int
    critical: int
    resolution_rate: float
    resolution_rate_percent: int
    localities: list[str]


class PulseOut(BaseModel):
    summary: Optional[str] = None
    updated_at: Optional[dt.datetime] = None
