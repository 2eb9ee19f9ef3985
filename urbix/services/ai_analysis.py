"""Client for the external report analyst model.

``analyze`` classifies a single report and never raises: any provider,
timeout, parse or schema problem yields ``FALLBACK_ANALYSIS`` so submissions
keep working when the model is unreachable. ``try_analyze`` performs the same
request but reports failure as ``None`` for callers that must leave existing
fields alone. ``summarize_pulse`` condenses the recent collection into one
sentence, also returning ``None`` on failure.

When a photo is supplied the model is told to treat it as the primary
evidence and to trust it over the text when the two disagree.
"""

from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Sequence
from typing import Optional, Union

import anyio
from loguru import logger
from pydantic_ai import Agent, BinaryContent

from urbix.core.config import settings
from urbix.core.errors import AnalysisFailure
from urbix.models.analysis import FALLBACK_ANALYSIS, ReportAnalysis
from urbix.models.enums import Category
from urbix.models.report import Report
from urbix.services.ai_provider import build_openai_chat_model

ImagePayload = Union[str, bytes]

DEFAULT_IMAGE_MIME = 'image/jpeg'
_DATA_URI_PATTERN = re.compile(r'^data:(image/[a-zA-Z+]+);base64,')

_CATEGORY_CHOICES = ', '.join(item.value for item in Category)

_ANALYST_SYSTEM_PROMPT = (
    'You are an expert urban intelligence analyst. '
    'You classify citizen reports about problems in a city for a municipal governance dashboard. '
    'Always answer with every requested field.'
)

_PULSE_SYSTEM_PROMPT = (
    'You summarize streams of civic reports for city administrators. '
    'Reply with exactly one plain sentence and no preamble.'
)

_analysis_agent: Agent[None, ReportAnalysis] | None = None
_pulse_agent: Agent[None, str] | None = None


def _get_analysis_agent() -> Agent[None, ReportAnalysis]:
    global _analysis_agent
    if _analysis_agent is not None:
        return _analysis_agent
    _analysis_agent = Agent(
        model=None,
        output_type=ReportAnalysis,
        system_prompt=_ANALYST_SYSTEM_PROMPT,
        retries=0,
        defer_model_check=True,
    )
    return _analysis_agent


def _get_pulse_agent() -> Agent[None, str]:
    global _pulse_agent
    if _pulse_agent is not None:
        return _pulse_agent
    _pulse_agent = Agent(
        model=None,
        output_type=str,
        system_prompt=_PULSE_SYSTEM_PROMPT,
        retries=0,
        defer_model_check=True,
    )
    return _pulse_agent


def build_analysis_prompt(description: str, *, has_image: bool) -> str:
    text = description.strip() if description else ''
    if has_image:
        evidence = (
            'PRIORITY: A photo is provided. Carefully inspect the photo. Use the visual evidence as the '
            'primary source for the Title, Description, and Category. If the text and photo disagree, '
            'trust the photo.'
        )
    else:
        evidence = 'Use the text provided for analysis.'
    return '\n'.join(
        [
            'Analyze this civic report.',
            f'User Input: "{text or "No text provided."}"',
            '',
            evidence,
            '',
            'Tasks:',
            '1. Title: Create a professional, concise title (3-5 words) based primarily on visual evidence if available.',
            '2. Description: Provide a detailed, clear description of the urban issue observed. '
            'Use simple English but be specific.',
            f'3. Category: Select the most appropriate category: {_CATEGORY_CHOICES}.',
            '4. Department: Suggest the relevant municipal department.',
            '5. Sentiment: Determine the public sentiment (positive, neutral, negative).',
            '6. Summary: A 1-sentence analytical summary for a governance dashboard.',
            '7. Priority: Low, Medium, or High (based on safety risk).',
        ]
    )


def decode_image_payload(image: ImagePayload) -> BinaryContent:
    """Turn a raw or ``data:`` URI base64 image into binary model input."""
    if isinstance(image, bytes):
        return BinaryContent(data=image, media_type=DEFAULT_IMAGE_MIME)
    media_type = DEFAULT_IMAGE_MIME
    match = _DATA_URI_PATTERN.match(image)
    if match:
        media_type = match.group(1)
    encoded = image.split(',', 1)[1] if ',' in image else image
    try:
        data = base64.b64decode(encoded.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AnalysisFailure('image payload is not valid base64') from exc
    if not data:
        raise AnalysisFailure('image payload is empty')
    return BinaryContent(data=data, media_type=media_type)


def build_pulse_digest(reports: Sequence[Report], limit: int) -> str:
    recent = list(reports)[:limit]
    return ', '.join(
        f'{report.category.value} ({report.status.value}): {report.sentiment.value}' for report in recent
    )


class ReportAnalyzer:
    def __init__(
        self,
        *,
        analysis_model: Optional[str] = None,
        pulse_model: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        pulse_limit: Optional[int] = None,
    ) -> None:
        self.analysis_model = analysis_model or settings.ANALYSIS_MODEL
        self.pulse_model = pulse_model or settings.PULSE_MODEL
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.AI_TIMEOUT_SECONDS
        self.pulse_limit = pulse_limit if pulse_limit is not None else settings.PULSE_REPORT_LIMIT

    async def _request_analysis(self, description: str, image: Optional[ImagePayload]) -> ReportAnalysis:
        prompt: list = [build_analysis_prompt(description, has_image=bool(image))]
        if image:
            prompt.append(decode_image_payload(image))
        model = build_openai_chat_model(self.analysis_model)
        agent = _get_analysis_agent()
        with anyio.fail_after(self.timeout_seconds):
            result = await agent.run(prompt, model=model)
        output = result.output
        if not isinstance(output, ReportAnalysis):
            raise AnalysisFailure(f'unexpected analysis output: {type(output).__name__}')
        return output

    async def try_analyze(self, description: str, image: Optional[ImagePayload] = None) -> Optional[ReportAnalysis]:
        try:
            analysis = await self._request_analysis(description, image)
        except Exception as exc:  # noqa: BLE001
            logger.warning('ai.analysis.failed', model=self.analysis_model, error=str(exc) or type(exc).__name__)
            return None
        logger.info('ai.analysis.completed', category=analysis.category.value, priority=analysis.priority.value)
        return analysis

    async def analyze(self, description: str, image: Optional[ImagePayload] = None) -> ReportAnalysis:
        analysis = await self.try_analyze(description, image)
        if analysis is None:
            return FALLBACK_ANALYSIS.model_copy()
        return analysis

    async def summarize_pulse(self, reports: Sequence[Report]) -> Optional[str]:
        digest = build_pulse_digest(reports, self.pulse_limit)
        if not digest:
            return None
        prompt = f'Urban Data Stream: {digest}. Synthesize a high-level, 1-sentence urban health summary.'
        try:
            model = build_openai_chat_model(self.pulse_model)
            with anyio.fail_after(self.timeout_seconds):
                result = await _get_pulse_agent().run(prompt, model=model)
        except Exception as exc:  # noqa: BLE001
            logger.warning('ai.pulse.failed', model=self.pulse_model, error=str(exc) or type(exc).__name__)
            return None
        summary = str(result.output or '').strip()
        return summary or None
