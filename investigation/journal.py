from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Tuple


class SessionJournal:
    """Append-only in-memory event log for a single exploration session."""

    def __init__(self) -> None:
        self._events: List[Dict[str, Any]] = []

    def emit(self, event_type: str, payload: Dict[str, Any], source: str = "session") -> Dict[str, Any]:
        event = {
            "event_id": f"EVT-{uuid.uuid4().hex[:10]}",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "type": event_type,
            "source": source,
            "payload": payload,
        }
        self._events.append(event)
        return event

    def iter_events_from(self, start: int = 0) -> Iterator[Tuple[int, Dict[str, Any]]]:
        start = max(0, int(start))
        for idx in range(start, len(self._events)):
            yield idx, self._events[idx]

    def read(self, limit: int = 100, event_type: Optional[str] = None) -> List[Dict[str, Any]]:
        """Latest ``limit`` events, oldest first. ``limit <= 0`` means all of them."""
        matching = [event for event in self._events if not event_type or event["type"] == event_type]
        if limit > 0:
            return matching[-limit:]
        return matching

    def __len__(self) -> int:
        return len(self._events)
