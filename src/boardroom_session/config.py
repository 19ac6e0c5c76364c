"""Configuration helpers for the boardroom session engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from importlib import import_module
from pathlib import Path
from typing import Optional

DEFAULT_HUMAN_SENDER_ID = "user"


class AssessmentDomain(str, Enum):
    """Built-in proposal assessment domains."""

    FINANCIAL = "financial"
    DATA_STRATEGY = "data_strategy"
    TECHNOLOGY = "technology"
    MARKETING = "marketing"
    OPERATIONS = "operations"
    PRODUCT = "product"
    PEOPLE = "people"
    SECURITY = "security"
    LEGAL = "legal"
    REVENUE = "revenue"
    STRATEGY = "strategy"
    AI_STRATEGY = "ai_strategy"
    GROWTH = "growth"
    CULTURE = "culture"
    ENGINEERING = "engineering"

    @classmethod
    def from_string(
        cls,
        domain: str | None,
        default: Optional["AssessmentDomain"] = None,
    ) -> "AssessmentDomain":
        """Normalize arbitrary user input into a valid domain."""
        if not domain:
            if default is None:
                raise ValueError("Assessment domain is required.")
            return default
        normalized = domain.strip().lower().replace(" ", "_").replace("-", "_")
        for candidate in cls:
            if candidate.value == normalized:
                return candidate
        if default is not None:
            return default
        raise ValueError(f"Unsupported assessment domain: {domain}")


@dataclass(slots=True)
class ModelSettings:
    """Holds model-related configuration for the narrative generator."""

    provider: str
    model: str
    endpoint: Optional[str]
    api_key: str
    api_version: Optional[str]


@dataclass(slots=True)
class AppSettings:
    """Top-level application settings loaded from environment variables."""

    model: Optional[ModelSettings]
    output_dir: Path
    archive_log: Path
    redis_url: Optional[str]
    human_sender_id: str = DEFAULT_HUMAN_SENDER_ID
    narrative_timeout: Optional[float] = None
    otlp_endpoint: Optional[str] = None
    trace_sensitive_data: bool = False

    @classmethod
    def load(cls) -> "AppSettings":
        """Load settings from the environment or .env file."""
        _ensure_dotenv()
        model_settings: Optional[ModelSettings] = None
        model = os.getenv("BRS_MODEL")
        if model and model.strip():
            api_key = os.getenv("BRS_MODEL_API_KEY")
            if not api_key:
                raise RuntimeError(
                    "BRS_MODEL_API_KEY environment variable is required "
                    "when BRS_MODEL is set."
                )
            model_settings = ModelSettings(
                provider=os.getenv("BRS_MODEL_PROVIDER", "azure-openai"),
                model=model.strip(),
                endpoint=os.getenv("BRS_MODEL_ENDPOINT"),
                api_key=api_key,
                api_version=os.getenv("BRS_MODEL_API_VERSION"),
            )
        output_dir = Path(os.getenv("BRS_OUTPUT_DIR", "outputs"))
        output_dir.mkdir(parents=True, exist_ok=True)
        archive_log = Path(
            os.getenv("BRS_ARCHIVE_JSONL", str(output_dir / "topics.jsonl"))
        )
        archive_log.parent.mkdir(parents=True, exist_ok=True)
        redis_url = os.getenv("BRS_REDIS_URL")
        if redis_url is not None and not redis_url.strip():
            redis_url = None
        human_sender_id = (
            os.getenv("BRS_HUMAN_SENDER_ID", DEFAULT_HUMAN_SENDER_ID).strip()
            or DEFAULT_HUMAN_SENDER_ID
        )
        timeout_raw = os.getenv("BRS_NARRATIVE_TIMEOUT")
        narrative_timeout: Optional[float] = None
        if timeout_raw is not None and timeout_raw.strip():
            try:
                narrative_timeout = float(timeout_raw)
            except ValueError as exc:
                raise RuntimeError(
                    "BRS_NARRATIVE_TIMEOUT must be a number of seconds"
                ) from exc
            if narrative_timeout <= 0:
                raise RuntimeError("BRS_NARRATIVE_TIMEOUT must be positive")
        otlp_endpoint = os.getenv("BRS_OTLP_ENDPOINT", "").strip() or None
        trace_sensitive_data = os.getenv(
            "BRS_TRACING_CAPTURE_SENSITIVE", "false"
        ).strip().lower() in {"1", "true", "yes", "on"}
        return cls(
            model=model_settings,
            output_dir=output_dir,
            archive_log=archive_log,
            redis_url=redis_url,
            human_sender_id=human_sender_id,
            narrative_timeout=narrative_timeout,
            otlp_endpoint=otlp_endpoint,
            trace_sensitive_data=trace_sensitive_data,
        )


def _ensure_dotenv() -> None:
    """Load dotenv variables and provide a helpful error if missing."""

    try:
        dotenv_module = import_module("dotenv")
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dep
        raise RuntimeError(
            "python-dotenv is required. Install with `pip install "
            "python-dotenv`."
        ) from exc

    load_dotenv = getattr(dotenv_module, "load_dotenv")
    load_dotenv()
