"""Narrative generation: turns category scores into a final verdict."""

from __future__ import annotations

import json
import logging
from string import Template
from typing import Any, Dict, List, Optional, Tuple

from .config import AppSettings
from .maf_client import ChatClient, ChatMessage, MAFChatClient, MAFIntegrationError
from .models import AssessmentResult, Verdict
from .scoring import NarrativeGenerator, NarrativeRequest, summarize_scores

logger = logging.getLogger(__name__)

OUTPUT_POLICY = (
    "Respond ONLY with a JSON object using this schema and no commentary:\n"
    "{\n"
    '  "assessment": "approve" | "reject" | "neutral",\n'
    '  "confidence": number between 0 and 100,\n'
    '  "reasoning": string,\n'
    '  "concerns": [string],\n'
    '  "recommendations": [string]\n'
    "}"
)

PROMPT_TEMPLATE = Template(
    """
Proposal: $proposal

$title context:
$context_lines

Analysis results:
$score_lines

Weigh the scores and their rationale. Return the assessment, your confidence,
a short reasoning paragraph, the main $concern_label concerns, and specific
recommendations.""".strip()
)


class NarrativeGenerationError(RuntimeError):
    """Raised when a verdict cannot be produced from the model output."""


def build_messages(request: NarrativeRequest) -> List[ChatMessage]:
    """Render the system and user messages for ``request``."""

    score_lines = "\n".join(
        f"- {line}" for line in summarize_scores(request.scores)
    )
    prompt = PROMPT_TEMPLATE.substitute(
        proposal=request.proposal.strip() or "(no proposal text supplied)",
        title=request.domain.title,
        context_lines="\n".join(request.context.describe()),
        score_lines=score_lines,
        concern_label=request.domain.concern_label,
    )
    return [
        ChatMessage(
            role="system",
            content=f"{request.domain.role_prompt}\n\n{OUTPUT_POLICY}",
        ),
        ChatMessage(role="user", content=prompt),
    ]


def _extract_json_object(raw: str) -> Optional[Dict[str, Any]]:
    text = raw.strip()
    if not text:
        return None
    candidate = text
    if not candidate.startswith("{"):
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            return None
        candidate = text[start : end + 1]
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _string_list(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return ()
    return tuple(str(item).strip() for item in value if str(item).strip())


def _find_list(data: Dict[str, Any], suffix: str) -> Any:
    if suffix in data:
        return data[suffix]
    for key, value in data.items():
        if key.lower().endswith(suffix):
            return value
    return None


def parse_assessment(raw: str) -> AssessmentResult:
    """Validate model output into an :class:`AssessmentResult`."""

    data = _extract_json_object(raw)
    if data is None:
        raise NarrativeGenerationError("Narrative response was not a JSON object")
    verdict_raw = str(data.get("assessment", data.get("verdict", ""))).strip().lower()
    try:
        verdict = Verdict(verdict_raw)
    except ValueError as exc:
        raise NarrativeGenerationError(
            f"Unsupported verdict in narrative response: {verdict_raw!r}"
        ) from exc
    confidence_raw = data.get("confidence")
    if isinstance(confidence_raw, bool):
        confidence_raw = None
    try:
        confidence = float(confidence_raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise NarrativeGenerationError(
            f"Confidence must be numeric, got {confidence_raw!r}"
        ) from exc
    if confidence != confidence:
        raise NarrativeGenerationError("Confidence must not be NaN")
    return AssessmentResult(
        verdict=verdict,
        confidence=max(0.0, min(100.0, confidence)),
        reasoning=str(data.get("reasoning", "")).strip(),
        concerns=_string_list(_find_list(data, "concerns")),
        recommendations=_string_list(_find_list(data, "recommendations")),
    )


class ModelNarrativeGenerator:
    """Asks a chat model for a verdict on the scored proposal."""

    def __init__(self, chat_client: ChatClient) -> None:
        self._chat_client = chat_client

    async def evaluate(self, request: NarrativeRequest) -> AssessmentResult:
        response = await self._chat_client.complete(build_messages(request))
        result = parse_assessment(response.content)
        logger.debug(
            "Narrative verdict for %s: %s (%.0f)",
            request.domain.name,
            result.verdict.value,
            result.confidence,
        )
        return result


class UnavailableNarrativeGenerator:
    """Stand-in used when no model is configured; every call fails."""

    def __init__(self, reason: str = "No language model configured") -> None:
        self._reason = reason

    async def evaluate(self, request: NarrativeRequest) -> AssessmentResult:
        raise NarrativeGenerationError(self._reason)


def build_narrative_generator(settings: AppSettings) -> NarrativeGenerator:
    """Create the narrative generator described by ``settings``."""

    if settings.model is None:
        logger.info("BRS_MODEL not set; assessments will use the fallback verdict.")
        return UnavailableNarrativeGenerator()
    try:
        client = MAFChatClient(settings.model)
    except MAFIntegrationError as exc:
        logger.warning("Narrative generator unavailable: %s", exc)
        return UnavailableNarrativeGenerator(str(exc))
    return ModelNarrativeGenerator(client)
