"""Tests for boardroom_session/registry.py."""

import pytest

from boardroom_session import financial
from boardroom_session.config import AssessmentDomain
from boardroom_session.registry import DomainRegistry, default_registry


class TestDomainRegistry:
    """Domain lookup by identifier and alias."""

    def test_default_domains(self):
        """Every built-in domain is registered under its enum value."""
        registry = default_registry()
        assert registry.names() == [domain.value for domain in AssessmentDomain]

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("financial", "financial"),
            ("CFO", "financial"),
            ("finance", "financial"),
            ("data-strategy", "data_strategy"),
            ("cdo", "data_strategy"),
            ("Data Strategy", "data_strategy"),
            ("CTO", "technology"),
            ("cmo", "marketing"),
            ("ops", "operations"),
            ("cpo", "product"),
            ("HR", "people"),
            ("chro", "people"),
            ("ciso", "security"),
            ("clo", "legal"),
            ("sales", "revenue"),
            ("cso", "strategy"),
            ("caio", "ai_strategy"),
            ("AI Strategy", "ai_strategy"),
            ("cgro", "growth"),
            ("chco", "culture"),
            ("cvco", "engineering"),
        ],
    )
    def test_resolve_aliases(self, name, expected):
        """Identifiers are normalized and aliases resolved."""
        assert default_registry().resolve(name).name == expected

    def test_resolved_once(self):
        """The factory runs once per registry."""
        calls = []

        def factory():
            calls.append(1)
            return financial.build_domain()

        registry = DomainRegistry()
        registry.register("money", factory)
        first = registry.resolve("money")
        second = registry.resolve("MONEY")
        assert first is second
        assert calls == [1]

    def test_unknown_domain(self):
        """Unknown identifiers raise KeyError."""
        registry = default_registry()
        with pytest.raises(KeyError):
            registry.resolve("astrology")
        assert "astrology" not in registry
        assert "cfo" in registry
        assert 42 not in registry
