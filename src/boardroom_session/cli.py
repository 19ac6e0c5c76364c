"""Command line entry-point for the boardroom session engine."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import random
import re
import sys
from dataclasses import replace
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import AppSettings
from .conversation import DEFAULT_TURN_BUDGET, ConversationDriver, Participant, SimulatedClock
from .models import Topic, TopicPriority
from .narrative import build_narrative_generator
from .registry import default_registry
from .scoring import AssessmentEngine, summarize_scores
from .sessions import BoardroomSession

DEFAULT_AGENDA = (
    "Quarterly results review:10:high",
    "Data platform investment:15:medium",
    "Market expansion options:20:low",
)

DEFAULT_PARTICIPANTS = ("ceo:ceo", "cfo:cfo", "cdo:cdo", "cto:cto")


def _slugify(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.strip().lower()).strip("-")
    return slug or "topic"


def parse_topic(raw: str) -> Topic:
    """Parse ``Title:minutes[:priority]`` into a :class:`Topic`."""

    parts = [part.strip() for part in raw.split(":")]
    if len(parts) not in {2, 3} or not parts[0]:
        raise argparse.ArgumentTypeError(
            f"Topic must look like 'Title:minutes[:priority]', got '{raw}'"
        )
    try:
        duration = int(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Topic duration must be an integer number of minutes, got '{parts[1]}'"
        ) from exc
    if duration <= 0:
        raise argparse.ArgumentTypeError("Topic duration must be positive")
    priority = TopicPriority.MEDIUM
    if len(parts) == 3:
        try:
            priority = TopicPriority(parts[2].lower())
        except ValueError as exc:
            raise argparse.ArgumentTypeError(
                f"Unknown topic priority '{parts[2]}'"
            ) from exc
    return Topic(
        id=_slugify(parts[0]),
        title=parts[0],
        estimated_duration=duration,
        priority=priority,
    )


def parse_participant(raw: str) -> Participant:
    """Parse ``id:role`` (or just ``role``) into a :class:`Participant`."""

    participant_id, _, role = raw.partition(":")
    participant_id = participant_id.strip()
    role = role.strip() or participant_id
    if not participant_id:
        raise argparse.ArgumentTypeError("Participant id must not be empty")
    return Participant(id=participant_id, role=role, name=participant_id.upper())


def _parse_assignment(raw: str) -> tuple[str, Any]:
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"Expected key=value, got '{raw}'")
    try:
        parsed: Any = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    return key.strip(), parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boardroom-session",
        description="Simulate boardroom discussions and assess proposals",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO).",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    simulate = commands.add_parser(
        "simulate", help="Run a seeded, simulated discussion over an agenda."
    )
    simulate.add_argument(
        "--topic",
        action="append",
        type=parse_topic,
        help="Agenda item as 'Title:minutes[:priority]'. May be repeated.",
    )
    simulate.add_argument(
        "--participant",
        action="append",
        type=parse_participant,
        help="Participant as 'id:role' (roles: ceo, cfo, cdo, cto). May be repeated.",
    )
    simulate.add_argument("--seed", type=int, help="Random seed for turn-taking.")
    simulate.add_argument(
        "--seconds-per-turn",
        type=float,
        default=30.0,
        help="Simulated time that passes per message (default: 30).",
    )
    simulate.add_argument(
        "--max-turns",
        type=int,
        default=DEFAULT_TURN_BUDGET,
        help=f"Turn budget per topic (default: {DEFAULT_TURN_BUDGET}).",
    )

    assess = commands.add_parser(
        "assess", help="Score a proposal in one assessment domain."
    )
    assess.add_argument(
        "--domain",
        required=True,
        help="Assessment domain (financial, technology, marketing, ... or a role alias such as cfo).",
    )
    assess.add_argument("--proposal", default="", help="Proposal text.")
    assess.add_argument(
        "--context",
        type=Path,
        help="Path to a JSON object with domain context fields.",
    )
    assess.add_argument(
        "--set",
        action="append",
        type=_parse_assignment,
        default=[],
        dest="assignments",
        help="Override one context field as key=value. May be repeated.",
    )
    assess.add_argument(
        "--scores-only",
        action="store_true",
        help="Print the category scores without calling the model.",
    )

    serve = commands.add_parser("serve", help="Expose a session over HTTP.")
    serve.add_argument(
        "--topic",
        action="append",
        type=parse_topic,
        help="Agenda item as 'Title:minutes[:priority]'. May be repeated.",
    )
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8081)
    serve.add_argument(
        "--allow-origin",
        action="append",
        dest="allow_origin",
        help="Optional CORS origin(s) to allow. Defaults to '*'.",
    )
    serve.add_argument(
        "--tracing",
        action="store_true",
        help="Enable OpenTelemetry tracing for model calls.",
    )
    return parser


def _agenda(topics: Optional[List[Topic]]) -> List[Topic]:
    """Return the agenda, suffixing repeated slugs so every id is unique."""

    agenda: List[Topic] = []
    used: set[str] = set()
    for topic in topics or [parse_topic(item) for item in DEFAULT_AGENDA]:
        candidate, suffix = topic.id, 1
        while candidate in used:
            suffix += 1
            candidate = f"{topic.id}-{suffix}"
        used.add(candidate)
        agenda.append(replace(topic, id=candidate) if candidate != topic.id else topic)
    return agenda


def _load_context(args: argparse.Namespace) -> Dict[str, Any]:
    context: Dict[str, Any] = {}
    if args.context is not None:
        try:
            data = json.loads(args.context.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SystemExit(f"Could not read --context {args.context}: {exc}") from exc
        if not isinstance(data, dict):
            raise SystemExit("--context must contain a JSON object")
        context.update(data)
    context.update(dict(args.assignments))
    return context


def run_simulation(settings: AppSettings, args: argparse.Namespace) -> BoardroomSession:
    """Simulate the agenda and print the transcript with a progress summary."""

    rng = random.Random(args.seed)
    clock = SimulatedClock(step=timedelta(seconds=args.seconds_per_turn))
    session = BoardroomSession.create(settings, _agenda(args.topic), clock=clock)
    participants = args.participant or [
        parse_participant(item) for item in DEFAULT_PARTICIPANTS
    ]
    driver = ConversationDriver(
        session.engine, participants, rng=rng, clock=clock
    )
    transcript = session.run_agenda(driver, max_turns=args.max_turns)

    current_topic = None
    for message in transcript:
        if message.topic_id != current_topic:
            current_topic = message.topic_id
            print()  # noqa: T201 - CLI UX newline
            print(f"## {session.topics[current_topic].title}")  # noqa: T201
        print(f"[{message.timestamp:%H:%M:%S}] {message.sender_id}: {message.text}")  # noqa: T201
    print()  # noqa: T201 - CLI UX newline
    for topic_id in session.topics:
        summary = session.engine.get_topic_summary(topic_id)
        if summary is None:
            continue
        print(  # noqa: T201 - CLI output
            f"{topic_id}: {summary.message_count} messages, "
            f"{summary.duration} min, relevance {summary.relevance_score}"
        )
    report = session.engine.get_progress_report()
    print(f"Overall progress: {report.overall_progress}%")  # noqa: T201
    if session.archived_records:
        print(f"Archived to {settings.archive_log}")  # noqa: T201
    return session


def run_assessment(settings: AppSettings, args: argparse.Namespace) -> Dict[str, Any]:
    """Score (and optionally narrate) a proposal, printing JSON."""

    registry = default_registry()
    try:
        domain = registry.resolve(args.domain)
    except KeyError as exc:
        raise SystemExit(str(exc.args[0])) from exc
    engine = AssessmentEngine(
        domain,
        build_narrative_generator(settings),
        narrative_timeout=settings.narrative_timeout,
    )
    context = _load_context(args)
    if args.scores_only:
        scores = engine.score(context)
        for line in summarize_scores(scores):
            print(line)  # noqa: T201 - CLI output
        return {name: score.to_dict() for name, score in scores.items()}
    outcome = asyncio.run(engine.evaluate(args.proposal, context))
    payload = outcome.to_dict()
    print(json.dumps(payload, indent=2))  # noqa: T201 - CLI output
    return payload


def run_server(settings: AppSettings, args: argparse.Namespace) -> None:
    if args.tracing:
        from .observability import initialize_tracing

        initialize_tracing(settings)
    from .api import run_api_server

    session = BoardroomSession.create(settings, _agenda(args.topic))
    session.start()
    run_api_server(
        session,
        host=args.host,
        port=args.port,
        allow_origins=args.allow_origin,
        log_level=args.log_level.lower(),
    )


def run_cli(argv: Optional[Sequence[str]] = None) -> None:
    """Entry-point invoked from ``python -m boardroom_session``."""

    arg_list = list(argv) if argv is not None else sys.argv[1:]
    args = _build_parser().parse_args(arg_list)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = AppSettings.load()
    except RuntimeError as exc:
        logging.error("Failed to load AppSettings: %s", exc)
        raise SystemExit(1) from exc

    if args.command == "simulate":
        run_simulation(settings, args)
    elif args.command == "assess":
        run_assessment(settings, args)
    elif args.command == "serve":
        run_server(settings, args)


if __name__ == "__main__":  # pragma: no cover - manual execution hook
    run_cli()
