"""OpenTelemetry tracing for narrative model calls."""

from __future__ import annotations

import logging

from agent_framework.observability import setup_observability

from .config import AppSettings

logger = logging.getLogger(__name__)

DEFAULT_OTLP_ENDPOINT = "http://localhost:4317"

_initialized = False


def initialize_tracing(settings: AppSettings) -> bool:
    """Export agent framework spans to the configured OTLP collector.

    Returns True only on the call that actually configured tracing.
    """

    global _initialized
    if _initialized:
        return False

    endpoint = settings.otlp_endpoint or DEFAULT_OTLP_ENDPOINT
    try:
        setup_observability(
            otlp_endpoint=endpoint,
            enable_sensitive_data=settings.trace_sensitive_data,
        )
    except Exception as exc:
        logger.warning("Tracing initialization failed: %s", exc)
        return False

    _initialized = True
    logger.info("Tracing initialized with OTLP endpoint %s", endpoint)
    return True
