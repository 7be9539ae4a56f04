"""
Module D2 - Transition History
Bounded per-controller log of demo controller calls.

Every public controller call is recorded, accepted or not, with the leaf
count before and after and the time the call took. The history belongs to
one controller instance; there is no process-wide log.
"""
from __future__ import annotations

import json
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Optional


@dataclass(frozen=True)
class TransitionRecord:
    """One controller call."""
    timestamp: datetime
    action: str
    accepted: bool
    leaf_count_before: int
    leaf_count_after: int
    duration_ms: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


class TransitionHistory:
    """
    Fixed-capacity history; the oldest records are dropped first.

    Example:
        >>> history = TransitionHistory(max_entries=2)
        >>> _ = history.record("add_leaf", True, 1, 2)
        >>> len(history)
        1
    """

    def __init__(self, max_entries: int = 200) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._entries: deque[TransitionRecord] = deque(maxlen=max_entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def max_entries(self) -> int:
        return self._entries.maxlen or 0

    def record(
        self,
        action: str,
        accepted: bool,
        leaf_count_before: int,
        leaf_count_after: int,
        duration_ms: Optional[float] = None,
    ) -> TransitionRecord:
        entry = TransitionRecord(
            timestamp=datetime.now(timezone.utc),
            action=action,
            accepted=accepted,
            leaf_count_before=leaf_count_before,
            leaf_count_after=leaf_count_after,
            duration_ms=duration_ms,
        )
        self._entries.append(entry)
        return entry

    def entries(self) -> list[TransitionRecord]:
        """Snapshot of the history, oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def export_json(self) -> str:
        """Export the history as an indented JSON document."""
        entries = self.entries()
        return json.dumps(
            {
                "exported": datetime.now(timezone.utc).isoformat(),
                "total_entries": len(entries),
                "entries": [e.to_dict() for e in entries],
            },
            indent=2,
        )


__all__ = ["TransitionRecord", "TransitionHistory"]
