from enum import Enum
from typing import TypeVar


class UserRole(str, Enum):
    CITIZEN = 'citizen'
    ADMIN = 'admin'


class ReportStatus(str, Enum):
    PENDING = 'pending'
    REVIEWING = 'reviewing'
    RESOLVED = 'resolved'
    DISMISSED = 'dismissed'


class Sentiment(str, Enum):
    POSITIVE = 'positive'
    NEUTRAL = 'neutral'
    NEGATIVE = 'negative'


class Priority(str, Enum):
    LOW = 'Low'
    MEDIUM = 'Medium'
    HIGH = 'High'


class Category(str, Enum):
    ROADS = 'Roads & Infrastructure'
    WATER = 'Water Supply'
    SANITATION = 'Sanitation & Waste'
    ELECTRICITY = 'Electricity'
    PUBLIC_SAFETY = 'Public Safety'
    ENVIRONMENT = 'Environment'
    TRANSPORTATION = 'Transportation'
    PUBLIC_PARKS = 'Public Parks'
    HEALTHCARE = 'Healthcare'
    OTHER = 'Other'


TERMINAL_STATUSES = frozenset({ReportStatus.RESOLVED, ReportStatus.DISMISSED})
ACTIVE_STATUSES = frozenset({ReportStatus.PENDING, ReportStatus.REVIEWING})

# Presentation text; canonical values above never change when labels do.
DISPLAY_LABELS: dict[Enum, str] = {
    ReportStatus.PENDING: 'Pending',
    ReportStatus.REVIEWING: 'Under Review',
    ReportStatus.RESOLVED: 'Resolved',
    ReportStatus.DISMISSED: 'Closed',
    Sentiment.POSITIVE: 'Positive',
    Sentiment.NEUTRAL: 'Neutral',
    Sentiment.NEGATIVE: 'Negative',
    UserRole.CITIZEN: 'Citizen',
    UserRole.ADMIN: 'Administrator',
}


def display_label(value: Enum) -> str:
    return DISPLAY_LABELS.get(value, str(value.value))


E = TypeVar('E', bound=Enum)


def coerce_enum(enum_cls: type[E], value, default: E) -> E:
    """Case-insensitive lookup by value or member name, ``default`` when unknown."""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return default
    needle = value.strip().lower()
    if not needle:
        return default
    for member in enum_cls:
        if member.value.lower() == needle or member.name.lower() == needle:
            return member
    return default
