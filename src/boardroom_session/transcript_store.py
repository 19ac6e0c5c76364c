"""Archival of completed topics to JSONL with an optional Redis mirror."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import redis
from redis import Redis
from redis.exceptions import RedisError

from .models import Message, Topic, TopicState

try:  # pragma: no cover - optional dependency path
    from redis.commands.json.path import Path as RedisJsonPath
except ImportError:  # pragma: no cover - fallback when RedisJSON missing
    RedisJsonPath = None

logger = logging.getLogger(__name__)


def _timestamp(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class SessionArchive:
    """Appends completed topics to a JSONL log and mirrors them into Redis."""

    def __init__(self, archive_path: Path, redis_url: Optional[str]) -> None:
        self._archive_path = archive_path
        self._archive_path.parent.mkdir(parents=True, exist_ok=True)
        self._redis_url = redis_url
        self._redis: Optional[Redis] = None

    @property
    def archive_path(self) -> Path:
        return self._archive_path

    def _get_redis(self) -> Optional[Redis]:
        if not self._redis_url:
            return None
        if self._redis is None:
            try:
                self._redis = redis.from_url(  # type: ignore[call-overload]
                    self._redis_url,
                    decode_responses=True,
                )
            except RedisError as exc:  # pragma: no cover - network guarded
                logger.warning("Redis connection failed: %s", exc)
                self._redis = None
        return self._redis

    def save_topic(
        self,
        *,
        session_id: str,
        topic: Topic,
        state: TopicState,
        messages: Sequence[Message],
    ) -> str:
        """Persist one completed topic and return its record id."""

        record_id = f"{session_id}:{topic.id}"
        archived_at = datetime.now(timezone.utc)
        with self._archive_path.open("a", encoding="utf-8") as handle:
            for entry in self._format_jsonl(
                record_id, session_id, topic, state, messages, archived_at
            ):
                handle.write(entry + "\n")

        client = self._get_redis()
        if client:
            key = f"topic:{record_id}"
            record: Dict[str, Any] = {
                "id": record_id,
                "session_id": session_id,
                "topic": {
                    "id": topic.id,
                    "title": topic.title,
                    "priority": topic.priority.value,
                    "estimated_duration": topic.estimated_duration,
                },
                "state": state.to_dict(),
                "messages": [message.to_dict() for message in messages],
                "archived_at": _timestamp(archived_at),
            }
            try:
                if RedisJsonPath and hasattr(client, "json"):
                    client.json().set(key, RedisJsonPath.root_path(), record)
                else:
                    client.set(key, json.dumps(record, ensure_ascii=False))
                client.zadd(
                    f"session:{session_id}:topics",
                    {record_id: archived_at.timestamp()},
                )
            except RedisError as exc:  # pragma: no cover - best effort
                logger.warning("Redis persistence failed for %s: %s", key, exc)
        return record_id

    def _format_jsonl(
        self,
        record_id: str,
        session_id: str,
        topic: Topic,
        state: TopicState,
        messages: Sequence[Message],
        archived_at: datetime,
    ) -> List[str]:
        meta: Dict[str, Dict[str, Any]] = {
            "_meta": {
                "record_id": record_id,
                "session_id": session_id,
                "topic_id": topic.id,
                "title": topic.title,
                "ts": _timestamp(archived_at),
                "n_records": len(messages) + 1,
            }
        }
        lines = [json.dumps(meta, ensure_ascii=False)]
        for index, message in enumerate(messages, start=1):
            entry = message.to_dict()
            entry["index"] = index
            lines.append(json.dumps(entry, ensure_ascii=False))
        lines.append(
            json.dumps({"summary": state.to_dict()}, ensure_ascii=False)
        )
        return lines
