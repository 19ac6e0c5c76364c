"""Lookup tables that resolve string identifiers to domain definitions."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Tuple

from . import (
    ai_strategy,
    culture,
    data_strategy,
    engineering,
    financial,
    growth,
    legal,
    marketing,
    operations,
    people,
    product,
    revenue,
    security,
    strategy,
    technology,
)
from .config import AssessmentDomain
from .scoring import DomainDefinition

DomainFactory = Callable[[], DomainDefinition]


class DomainRegistry:
    """Maps domain identifiers (and aliases) to domain factories."""

    def __init__(self) -> None:
        self._factories: Dict[str, DomainFactory] = {}
        self._aliases: Dict[str, str] = {}
        self._resolved: Dict[str, DomainDefinition] = {}

    @staticmethod
    def _normalize(name: str) -> str:
        return name.strip().lower().replace("-", "_").replace(" ", "_")

    def register(
        self,
        name: str,
        factory: DomainFactory,
        *,
        aliases: Iterable[str] = (),
    ) -> None:
        key = self._normalize(name)
        self._factories[key] = factory
        self._resolved.pop(key, None)
        for alias in aliases:
            self._aliases[self._normalize(alias)] = key

    def names(self) -> List[str]:
        return list(self._factories)

    def resolve(self, name: str) -> DomainDefinition:
        """Return the domain for ``name``, building it on first use."""

        key = self._normalize(name)
        key = self._aliases.get(key, key)
        if key not in self._factories:
            raise KeyError(f"Unknown assessment domain: {name}")
        if key not in self._resolved:
            self._resolved[key] = self._factories[key]()
        return self._resolved[key]

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        key = self._normalize(name)
        return self._aliases.get(key, key) in self._factories


_BUILTIN_DOMAINS: Tuple[Tuple[AssessmentDomain, DomainFactory, Tuple[str, ...]], ...] = (
    (AssessmentDomain.FINANCIAL, financial.build_domain, ("cfo", "finance")),
    (AssessmentDomain.DATA_STRATEGY, data_strategy.build_domain, ("cdo", "data")),
    (AssessmentDomain.TECHNOLOGY, technology.build_domain, ("cto", "tech")),
    (AssessmentDomain.MARKETING, marketing.build_domain, ("cmo",)),
    (AssessmentDomain.OPERATIONS, operations.build_domain, ("coo", "ops")),
    (AssessmentDomain.PRODUCT, product.build_domain, ("cpo",)),
    (AssessmentDomain.PEOPLE, people.build_domain, ("chro", "hr")),
    (AssessmentDomain.SECURITY, security.build_domain, ("ciso", "cybersecurity")),
    (AssessmentDomain.LEGAL, legal.build_domain, ("clo",)),
    (AssessmentDomain.REVENUE, revenue.build_domain, ("cro", "sales")),
    (AssessmentDomain.STRATEGY, strategy.build_domain, ("cso",)),
    (AssessmentDomain.AI_STRATEGY, ai_strategy.build_domain, ("caio", "ai")),
    (AssessmentDomain.GROWTH, growth.build_domain, ("cgro",)),
    (AssessmentDomain.CULTURE, culture.build_domain, ("chco",)),
    (AssessmentDomain.ENGINEERING, engineering.build_domain, ("cvco",)),
)


def default_registry() -> DomainRegistry:
    registry = DomainRegistry()
    for domain, factory, aliases in _BUILTIN_DOMAINS:
        registry.register(domain.value, factory, aliases=aliases)
    return registry
