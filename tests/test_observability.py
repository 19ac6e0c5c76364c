"""Tests for boardroom_session/observability.py."""

from __future__ import annotations

from dataclasses import replace

from boardroom_session import observability


class TestInitializeTracing:
    """Tracing setup through the agent framework."""

    def test_configures_once(self, settings, monkeypatch):
        """The exporter is configured on the first call only."""
        calls = []
        monkeypatch.setattr(observability, "_initialized", False)
        monkeypatch.setattr(
            observability, "setup_observability", lambda **kwargs: calls.append(kwargs)
        )
        traced = replace(settings, otlp_endpoint="http://collector:4317")

        assert observability.initialize_tracing(traced)
        assert not observability.initialize_tracing(traced)
        assert calls == [
            {"otlp_endpoint": "http://collector:4317", "enable_sensitive_data": False}
        ]

    def test_default_endpoint(self, settings, monkeypatch):
        calls = []
        monkeypatch.setattr(observability, "_initialized", False)
        monkeypatch.setattr(
            observability, "setup_observability", lambda **kwargs: calls.append(kwargs)
        )
        assert observability.initialize_tracing(settings)
        assert calls[0]["otlp_endpoint"] == observability.DEFAULT_OTLP_ENDPOINT

    def test_setup_failure_leaves_tracing_off(self, settings, monkeypatch):
        """A failing exporter is logged and a later call may retry."""

        def broken(**_):
            raise RuntimeError("collector unreachable")

        monkeypatch.setattr(observability, "_initialized", False)
        monkeypatch.setattr(observability, "setup_observability", broken)
        assert not observability.initialize_tracing(settings)
        assert observability._initialized is False
