from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..db import SESSION_HISTORY
from .exercise import LoggedExercise


@dataclass(frozen=True)
class WorkoutSession:
    """Archived workout: a snapshot of one sub-module's log at finish time."""

    id: str
    date: str
    time: str
    exercises: Tuple[LoggedExercise, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "time": self.time,
            "exercises": [e.to_dict() for e in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkoutSession":
        return cls(
            id=data["id"],
            date=data.get("date") or "",
            time=data.get("time") or "",
            exercises=tuple(LoggedExercise.from_dict(e) for e in data.get("exercises", [])),
        )


class SessionHistoryRepository:
    """Archived sessions: account email -> sub-module -> sessions, newest first."""

    def __init__(self, store) -> None:
        self.store = store
        self.reload()

    def reload(self) -> None:
        raw = self.store.load(SESSION_HISTORY, {})
        self._history: Dict[str, Dict[str, List[WorkoutSession]]] = {
            email: {style: [WorkoutSession.from_dict(s) for s in sessions] for style, sessions in styles.items()}
            for email, styles in raw.items()
        }

    def sessions(self, email: str, style: str) -> List[WorkoutSession]:
        return list(self._history.get(email, {}).get(style, []))

    def find(self, email: str, style: str, session_id: str) -> Optional[WorkoutSession]:
        return next((s for s in self.sessions(email, style) if s.id == session_id), None)

    def prepend(self, email: str, style: str, session: WorkoutSession) -> None:
        self._history.setdefault(email, {}).setdefault(style, []).insert(0, session)
        self._flush()

    def remove(self, email: str, style: str, session_id: str) -> bool:
        sessions = self._history.get(email, {}).get(style, [])
        kept = [s for s in sessions if s.id != session_id]
        if len(kept) == len(sessions):
            return False
        self._history[email][style] = kept
        self._flush()
        return True

    def clear(self, email: str, style: str) -> int:
        removed = len(self._history.get(email, {}).get(style, []))
        self._history.setdefault(email, {})[style] = []
        self._flush()
        return removed

    def _flush(self) -> None:
        self.store.save(
            SESSION_HISTORY,
            {
                email: {style: [s.to_dict() for s in sessions] for style, sessions in styles.items()}
                for email, styles in self._history.items()
            },
        )
