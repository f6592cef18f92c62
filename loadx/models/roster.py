from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from ..db import COACH_ROSTERS


@dataclass(frozen=True)
class RosterEntry:
    """A coach's link to one athlete, referenced by serial number."""

    display_name: str
    serial_number: str

    def to_dict(self) -> Dict[str, Any]:
        return {"displayName": self.display_name, "serialNumber": self.serial_number}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RosterEntry":
        return cls(display_name=data.get("displayName") or "", serial_number=data["serialNumber"])


class RosterRepository:
    """Coach email -> append-only list of roster entries."""

    def __init__(self, store) -> None:
        self._store = store
        raw = store.load(COACH_ROSTERS, {})
        self._rosters: Dict[str, List[RosterEntry]] = {
            email: [RosterEntry.from_dict(r) for r in entries] for email, entries in raw.items()
        }

    def entries(self, coach_email: str) -> List[RosterEntry]:
        return list(self._rosters.get(coach_email, []))

    def contains(self, coach_email: str, serial_number: str) -> bool:
        return any(e.serial_number == serial_number for e in self._rosters.get(coach_email, []))

    def append(self, coach_email: str, entry: RosterEntry) -> None:
        self._rosters.setdefault(coach_email, []).append(entry)
        self._flush()

    def _flush(self) -> None:
        self._store.save(
            COACH_ROSTERS,
            {email: [e.to_dict() for e in entries] for email, entries in self._rosters.items()},
        )
