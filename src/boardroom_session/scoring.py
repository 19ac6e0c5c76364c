"""Weighted, explainable scoring of proposals against domain criteria.

A domain is a fixed set of :class:`CategoryAnalysis` objects. Each analysis
starts from a base score and walks an ordered list of adjustments; every
adjustment that fires contributes a delta and, usually, one rationale line.
The final category score is clamped to ``[0, 100]``.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Union,
)

from .models import (
    AssessmentOutcome,
    AssessmentResult,
    CategoryScore,
    fallback_assessment,
)

logger = logging.getLogger(__name__)

SCORE_FLOOR = 0
SCORE_CEILING = 100

Predicate = Callable[[Any], bool]
Rationale = Union[str, Callable[[Any, "AssessmentContext"], str], None]


@dataclass(frozen=True, slots=True)
class ContextField:
    """Describes one named, optional input of a domain context."""

    name: str
    label: str
    default: Any
    kind: str = "number"  # number | choice | flag | series | list | text | mapping
    choices: Tuple[str, ...] = ()
    unit: str = ""


class AssessmentContext:
    """Flat record of domain inputs that falls back to documented defaults."""

    def __init__(
        self,
        fields: Sequence[ContextField],
        values: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._fields: Dict[str, ContextField] = {f.name: f for f in fields}
        self._provided: Dict[str, Any] = {}
        for name, raw in (values or {}).items():
            declared = self._fields.get(name)
            if declared is None:
                logger.warning("Ignoring unknown context field '%s'", name)
                continue
            if raw is None:
                continue
            coerced = _coerce_field(declared, raw)
            if coerced is not None:
                self._provided[name] = coerced

    def __getitem__(self, name: str) -> Any:
        if name in self._provided:
            return self._provided[name]
        return self._fields[name].default

    def is_provided(self, name: str) -> bool:
        return name in self._provided

    @property
    def fields(self) -> List[ContextField]:
        return list(self._fields.values())

    def provided(self) -> Dict[str, Any]:
        return dict(self._provided)

    def resolved(self) -> Dict[str, Any]:
        return {name: self[name] for name in self._fields}

    def describe(self) -> List[str]:
        """Render one ``label: value`` line per field for prompts."""

        lines: List[str] = []
        for declared in self._fields.values():
            if declared.name not in self._provided:
                lines.append(f"- {declared.label}: Not specified")
                continue
            value = self._provided[declared.name]
            if declared.kind == "series":
                rendered = ", ".join(_format_number(item) for item in value)
            elif declared.kind == "list":
                rendered = ", ".join(value)
            elif declared.kind == "mapping":
                rendered = ", ".join(
                    f"{key}: {_format_number(level)}" for key, level in value.items()
                )
            elif declared.kind == "number":
                rendered = _format_number(value)
            else:
                rendered = str(value)
            unit = f" {declared.unit}" if declared.unit else ""
            lines.append(f"- {declared.label}: {rendered}{unit}")
        return lines


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _as_number(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _coerce_field(declared: ContextField, raw: Any) -> Any:
    """Normalize a raw value; ``None`` means fall back to the default."""

    if declared.kind == "number":
        number = _as_number(raw)
        if number is None:
            logger.warning(
                "Context field '%s' expects a finite number, got %r; using default",
                declared.name,
                raw,
            )
            return None
        return int(number) if number.is_integer() else number
    if declared.kind == "flag":
        if isinstance(raw, str):
            return raw.strip().lower() in {"1", "true", "yes", "on"}
        return bool(raw)
    if declared.kind == "series":
        if isinstance(raw, str):
            raw = [item for item in raw.split(",") if item.strip()]
        if not isinstance(raw, (list, tuple)):
            logger.warning(
                "Context field '%s' expects a list of numbers; using default",
                declared.name,
            )
            return None
        numbers = [_as_number(item) for item in raw]
        if any(number is None for number in numbers):
            logger.warning(
                "Context field '%s' contains non-numeric entries; using default",
                declared.name,
            )
            return None
        return [float(number) for number in numbers if number is not None]
    if declared.kind == "list":
        if isinstance(raw, str):
            raw = raw.split(",")
        if not isinstance(raw, (list, tuple)):
            logger.warning(
                "Context field '%s' expects a list of strings; using default",
                declared.name,
            )
            return None
        return [str(item).strip() for item in raw if str(item).strip()]
    if declared.kind == "mapping":
        if not isinstance(raw, Mapping):
            logger.warning(
                "Context field '%s' expects an object; using default", declared.name
            )
            return None
        levels: Dict[str, float] = {}
        for key, level in raw.items():
            number = _as_number(level)
            if number is None:
                logger.warning(
                    "Context field '%s' has a non-numeric entry for %r; skipping it",
                    declared.name,
                    key,
                )
                continue
            levels[str(key)] = number
        return levels
    if declared.kind == "text":
        text = str(raw).strip()
        return text or None
    normalized = str(raw).strip().lower().replace("_", "-")
    if not normalized:
        return None
    if declared.choices and normalized not in declared.choices:
        logger.warning(
            "Context field '%s' has unrecognised value %r", declared.name, raw
        )
    return normalized


def _render(rationale: Rationale, value: Any, context: AssessmentContext) -> Optional[str]:
    if rationale is None:
        return None
    if callable(rationale):
        return rationale(value, context)
    number = _as_number(value)
    extras: Dict[str, Any] = {}
    if number is not None:
        extras = {
            "thousands": number / 1_000,
            "millions": number / 1_000_000,
            "percent": number * 100,
        }
    return rationale.format(value=value, **extras)


def above(threshold: float) -> Predicate:
    return lambda value: value > threshold


def at_least(threshold: float) -> Predicate:
    return lambda value: value >= threshold


def at_most(threshold: float) -> Predicate:
    return lambda value: value <= threshold


def below(threshold: float) -> Predicate:
    return lambda value: value < threshold


def always(_: Any) -> bool:
    return True


def matching(items: Iterable[str], keywords: Iterable[str]) -> List[str]:
    """Return the items that mention any of ``keywords``, ignoring case."""

    needles = [keyword.lower() for keyword in keywords]
    return [item for item in items if any(needle in item.lower() for needle in needles)]


def listing(template: str) -> Callable[[Sequence[str], "AssessmentContext"], str]:
    """Rationale that renders a list value as ``{items}`` and ``{count}``."""

    return lambda items, _: template.format(items=", ".join(items), count=len(items))


@dataclass(frozen=True, slots=True)
class Tier:
    """One breakpoint: when ``test`` matches, apply ``delta``."""

    test: Predicate
    delta: Union[float, Callable[[Any], float]]
    rationale: Rationale = None


class Adjustment(Protocol):
    def apply(
        self, context: AssessmentContext
    ) -> Optional[Tuple[float, Optional[str]]]:
        """Return ``(delta, rationale)`` or ``None`` when nothing fires."""
        ...


@dataclass(frozen=True, slots=True)
class TieredAdjustment:
    """Applies the first tier whose test matches the extracted value."""

    value: Callable[[AssessmentContext], Any]
    tiers: Tuple[Tier, ...]
    when: Optional[Callable[[AssessmentContext], bool]] = None

    def apply(
        self, context: AssessmentContext
    ) -> Optional[Tuple[float, Optional[str]]]:
        if self.when is not None and not self.when(context):
            return None
        value = self.value(context)
        for tier in self.tiers:
            if tier.test(value):
                delta = tier.delta(value) if callable(tier.delta) else tier.delta
                return delta, _render(tier.rationale, value, context)
        return None


@dataclass(frozen=True, slots=True)
class CategoricalAdjustment:
    """Looks up a delta by the enumerated value of one context field."""

    source: str
    deltas: Mapping[str, float]
    rationales: Mapping[str, Rationale] = field(default_factory=dict)
    otherwise: Rationale = None
    fallback: float = 0

    def apply(
        self, context: AssessmentContext
    ) -> Optional[Tuple[float, Optional[str]]]:
        value = context[self.source]
        delta = self.deltas.get(value, self.fallback)
        rationale = self.rationales.get(value, self.otherwise)
        return delta, _render(rationale, value, context)


def field_value(name: str) -> Callable[[AssessmentContext], Any]:
    return lambda context: context[name]


@dataclass(frozen=True, slots=True)
class CategoryAnalysis:
    """Base score plus ordered adjustments for one category."""

    name: str
    title: str
    base: Union[float, Callable[[AssessmentContext], float]]
    adjustments: Tuple[Adjustment, ...]

    def evaluate(self, context: AssessmentContext) -> CategoryScore:
        score = self.base(context) if callable(self.base) else self.base
        rationale: List[str] = []
        for adjustment in self.adjustments:
            outcome = adjustment.apply(context)
            if outcome is None:
                continue
            delta, line = outcome
            score += delta
            if line:
                rationale.append(line)
        return CategoryScore(
            score=max(SCORE_FLOOR, min(SCORE_CEILING, score)),
            rationale=tuple(rationale),
        )


@dataclass(frozen=True, slots=True)
class DomainDefinition:
    """Everything needed to score and narrate one assessment domain."""

    name: str
    title: str
    role_prompt: str
    concern_label: str
    fields: Tuple[ContextField, ...]
    analyses: Tuple[CategoryAnalysis, ...]

    def build_context(
        self, values: Optional[Mapping[str, Any]] = None
    ) -> AssessmentContext:
        return AssessmentContext(self.fields, values)


@dataclass(frozen=True, slots=True)
class NarrativeRequest:
    """Input handed to a narrative generator."""

    domain: DomainDefinition
    proposal: str
    context: AssessmentContext
    scores: Mapping[str, CategoryScore]


class NarrativeGenerator(Protocol):
    async def evaluate(self, request: NarrativeRequest) -> AssessmentResult:
        """Produce a verdict for the scored proposal."""
        ...


class AssessmentEngine:
    """Scores proposals for one domain and delegates the verdict."""

    _sequence = itertools.count(1)

    def __init__(
        self,
        domain: DomainDefinition,
        narrative: NarrativeGenerator,
        *,
        narrative_timeout: Optional[float] = None,
    ) -> None:
        self._domain = domain
        self._narrative = narrative
        self._narrative_timeout = narrative_timeout

    @property
    def domain(self) -> DomainDefinition:
        return self._domain

    def score(
        self, context: AssessmentContext | Mapping[str, Any] | None = None
    ) -> Dict[str, CategoryScore]:
        """Run every sub-analysis and return scores keyed by category."""

        resolved = self._ensure_context(context)
        return {
            analysis.name: analysis.evaluate(resolved)
            for analysis in self._domain.analyses
        }

    async def evaluate(
        self,
        proposal: str,
        context: AssessmentContext | Mapping[str, Any] | None = None,
    ) -> AssessmentOutcome:
        """Score ``proposal`` and ask the narrative generator for a verdict."""

        sequence = next(self._sequence)
        resolved = self._ensure_context(context)
        scores = self.score(resolved)
        request = NarrativeRequest(
            domain=self._domain,
            proposal=proposal,
            context=resolved,
            scores=scores,
        )
        used_fallback = False
        try:
            call = self._narrative.evaluate(request)
            if self._narrative_timeout is not None:
                result = await asyncio.wait_for(call, self._narrative_timeout)
            else:
                result = await call
            if not isinstance(result, AssessmentResult):
                raise TypeError(
                    f"Narrative generator returned {type(result).__name__}"
                )
        except Exception as exc:
            logger.warning(
                "Narrative generation failed for %s assessment #%s: %s",
                self._domain.name,
                sequence,
                exc,
            )
            result = fallback_assessment()
            used_fallback = True
        return AssessmentOutcome(
            domain=self._domain.name,
            scores=scores,
            result=result,
            used_fallback=used_fallback,
            sequence=sequence,
        )

    def _ensure_context(
        self, context: AssessmentContext | Mapping[str, Any] | None
    ) -> AssessmentContext:
        if isinstance(context, AssessmentContext):
            return context
        return self._domain.build_context(context)


def summarize_scores(scores: Mapping[str, CategoryScore]) -> Iterable[str]:
    for name, category in scores.items():
        details = "; ".join(category.rationale) or "no adjustments"
        yield f"{name}: {_format_number(category.score)}/100 - {details}"
