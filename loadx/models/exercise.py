from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from ..db import EXERCISE_LOGS


@dataclass(frozen=True)
class LoggedExercise:
    id: str
    muscle_group: str
    name: str
    max_weight: str
    date: str
    time: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "muscleGroup": self.muscle_group,
            "name": self.name,
            "maxWeight": self.max_weight,
            "date": self.date,
            "time": self.time,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggedExercise":
        return cls(
            id=data["id"],
            muscle_group=data.get("muscleGroup") or "",
            name=data.get("name") or "",
            max_weight=data.get("maxWeight") or "",
            date=data.get("date") or "",
            time=data.get("time") or "",
        )


class ExerciseLogRepository:
    """
    Live exercise logs: account email -> sub-module -> entries.
    Entries keep insertion order.
    """

    def __init__(self, store) -> None:
        self.store = store
        self.reload()

    def reload(self) -> None:
        """Drops in-memory changes and re-reads the stored document."""
        raw = self.store.load(EXERCISE_LOGS, {})
        self._logs: Dict[str, Dict[str, List[LoggedExercise]]] = {
            email: {style: [LoggedExercise.from_dict(e) for e in entries] for style, entries in styles.items()}
            for email, styles in raw.items()
        }

    def entries(self, email: str, style: str) -> List[LoggedExercise]:
        return list(self._logs.get(email, {}).get(style, []))

    def find(self, email: str, style: str, entry_id: str) -> Optional[LoggedExercise]:
        return next((e for e in self.entries(email, style) if e.id == entry_id), None)

    def append(self, email: str, style: str, entry: LoggedExercise) -> None:
        self._logs.setdefault(email, {}).setdefault(style, []).append(entry)
        self._flush()

    def update(self, email: str, style: str, entry_id: str, **changes: Any) -> Optional[LoggedExercise]:
        entries = self._logs.get(email, {}).get(style, [])
        for idx, entry in enumerate(entries):
            if entry.id == entry_id:
                entries[idx] = replace(entry, **changes)
                self._flush()
                return entries[idx]
        return None

    def remove(self, email: str, style: str, entry_id: str) -> bool:
        entries = self._logs.get(email, {}).get(style, [])
        kept = [e for e in entries if e.id != entry_id]
        if len(kept) == len(entries):
            return False
        self._logs[email][style] = kept
        self._flush()
        return True

    def clear(self, email: str, style: str) -> None:
        self._logs.setdefault(email, {})[style] = []
        self._flush()

    def _flush(self) -> None:
        self.store.save(
            EXERCISE_LOGS,
            {
                email: {style: [e.to_dict() for e in entries] for style, entries in styles.items()}
                for email, styles in self._logs.items()
            },
        )
