from pydantic import BaseModel, ConfigDict, field_validator

from urbix.models.enums import Category, Priority, Sentiment, coerce_enum


class ReportAnalysis(BaseModel):
    """Structured output of the report analyst model. Never stored on its own."""

    model_config = ConfigDict(extra='ignore')

    title: str
    description: str
    category: Category
    department: str
    sentiment: Sentiment
    summary: str
    priority: Priority

    @field_validator('category', mode='before')
    @classmethod
    def _known_category(cls, value):
        return coerce_enum(Category, value, Category.OTHER)

    @field_validator('sentiment', mode='before')
    @classmethod
    def _known_sentiment(cls, value):
        return coerce_enum(Sentiment, value, Sentiment.NEUTRAL)

    @field_validator('priority', mode='before')
    @classmethod
    def _known_priority(cls, value):
        return coerce_enum(Priority, value, Priority.MEDIUM)


FALLBACK_ANALYSIS = ReportAnalysis(
    title='Identified Urban Issue',
    description='An issue has been flagged and requires manual verification.',
    category=Category.OTHER,
    department='General City Services',
    sentiment=Sentiment.NEUTRAL,
    summary='AI analysis encountered an error. Human review required.',
    priority=Priority.MEDIUM,
)
