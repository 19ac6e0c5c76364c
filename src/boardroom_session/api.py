"""FastAPI surface over a single boardroom session."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .models import TopicStatus
from .sessions import BoardroomSession
from .topic_progress import UnknownTopicError

logger = logging.getLogger(__name__)


class MessageRequest(BaseModel):
    sender_id: str = Field(min_length=1)
    text: str = Field(min_length=1)
    reply_to: Optional[str] = None


class AssessmentRequest(BaseModel):
    proposal: str = ""
    context: Dict[str, Any] = Field(default_factory=dict)
    topic_id: Optional[str] = None


def _not_found(exc: LookupError) -> HTTPException:
    detail = exc.args[0] if exc.args else str(exc)
    return HTTPException(status_code=404, detail=detail)


def _invalid(detail: str) -> HTTPException:
    return HTTPException(status_code=422, detail=detail)


def create_app(
    session: BoardroomSession,
    *,
    allow_origins: Sequence[str] | None = None,
) -> FastAPI:
    """Create a FastAPI app that drives ``session``."""

    app = FastAPI(title="Boardroom Session Engine")

    origins = list(allow_origins) if allow_origins else ["*"]
    allow_credentials = origins != ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _describe(topic_id: str) -> Dict[str, Any]:
        try:
            return session.describe_topic(topic_id)
        except UnknownTopicError as exc:
            raise _not_found(exc) from exc

    def _status(topic_id: str) -> TopicStatus:
        state = session.engine.get_topic_state(topic_id)
        if state is None:
            raise _not_found(UnknownTopicError(f"Topic {topic_id} not found"))
        return state.status

    @app.get("/topics")
    async def list_topics() -> List[Dict[str, Any]]:
        return [session.describe_topic(topic_id) for topic_id in session.topics]

    @app.get("/topics/{topic_id}")
    async def get_topic(topic_id: str) -> Dict[str, Any]:
        return _describe(topic_id)

    @app.post("/topics/{topic_id}/start")
    async def start_topic(topic_id: str) -> Dict[str, Any]:
        if _status(topic_id) is TopicStatus.COMPLETED:
            raise _invalid(f"Topic {topic_id} is completed; reset it first")
        session.start_topic(topic_id)
        return _describe(topic_id)

    @app.post("/topics/{topic_id}/messages")
    async def post_message(topic_id: str, payload: MessageRequest) -> Dict[str, Any]:
        _status(topic_id)
        message = session.post_message(
            topic_id,
            payload.sender_id,
            payload.text,
            reply_to=payload.reply_to,
        )
        if message is None:
            raise _invalid(f"Message rejected for topic {topic_id}")
        return {"message": message.to_dict(), "topic": _describe(topic_id)}

    @app.post("/topics/{topic_id}/complete")
    async def complete_topic(topic_id: str) -> Dict[str, Any]:
        if _status(topic_id) is TopicStatus.PENDING:
            raise _invalid(f"Topic {topic_id} has not been started")
        changed = session.complete_topic(topic_id)
        return {"changed": changed, "topic": _describe(topic_id)}

    @app.post("/topics/{topic_id}/reset")
    async def reset_topic(topic_id: str) -> Dict[str, Any]:
        _status(topic_id)
        session.reset_topic(topic_id)
        return _describe(topic_id)

    @app.get("/topics/{topic_id}/summary")
    async def topic_summary(topic_id: str) -> Dict[str, Any]:
        summary = session.engine.get_topic_summary(topic_id)
        if summary is None:
            raise _not_found(UnknownTopicError(f"Topic {topic_id} not found"))
        return asdict(summary)

    @app.get("/progress")
    async def progress() -> Dict[str, Any]:
        report = asdict(session.engine.get_progress_report())
        report["current_topic"] = session.current_topic_id
        report["session_completed"] = session.completed
        return report

    @app.post("/assessments/{domain}")
    async def assess(domain: str, payload: AssessmentRequest) -> Dict[str, Any]:
        if domain not in session.registry:
            raise _not_found(KeyError(f"Unknown assessment domain: {domain}"))
        try:
            outcome = await session.assess(
                domain,
                payload.proposal,
                payload.context,
                topic_id=payload.topic_id,
            )
        except UnknownTopicError as exc:
            raise _not_found(exc) from exc
        return outcome.to_dict()

    @app.get("/health")
    async def health() -> dict[str, str]:  # pragma: no cover - simple health check
        return {"status": "ok"}

    return app


def run_api_server(
    session: BoardroomSession,
    *,
    host: str = "127.0.0.1",
    port: int = 8081,
    allow_origins: Sequence[str] | None = None,
    log_level: str = "info",
) -> None:
    """Start the FastAPI server for ``session``."""

    app = create_app(session, allow_origins=allow_origins)
    logger.info("Serving session %s on %s:%s", session.session_id, host, port)
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=log_level,
    )
