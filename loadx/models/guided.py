from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from ..db import COACH_DRAFTS, GUIDED_EXERCISES
from .progression import ProgressionStep


@dataclass(frozen=True)
class GuidedExercise:
    """
    Coach-authored prescription for one athlete.

    ``progression`` is fixed when the coach adds the exercise to a draft;
    only ``max_weight`` may be changed afterwards, by the athlete.
    """

    id: str
    muscle_group: str
    name: str
    style: str
    sub_module: str
    progression: Tuple[ProgressionStep, ...]
    coach_email: str
    max_weight: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "muscleGroup": self.muscle_group,
            "name": self.name,
            "style": self.style,
            "subModule": self.sub_module,
            "progression": [s.to_dict() for s in self.progression],
            "coachEmail": self.coach_email,
            "maxWeight": self.max_weight,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GuidedExercise":
        return cls(
            id=data["id"],
            muscle_group=data.get("muscleGroup") or "",
            name=data.get("name") or "",
            style=data.get("style") or "",
            sub_module=data.get("subModule") or "",
            progression=tuple(ProgressionStep.from_dict(s) for s in data.get("progression", [])),
            coach_email=data.get("coachEmail") or "",
            max_weight=data.get("maxWeight"),
        )


class GuidedExerciseRepository:
    """Athlete email -> assigned guided exercises. Replaced wholesale on every submission."""

    def __init__(self, store) -> None:
        self._store = store
        raw = store.load(GUIDED_EXERCISES, {})
        self._assigned: Dict[str, List[GuidedExercise]] = {
            email: [GuidedExercise.from_dict(e) for e in items] for email, items in raw.items()
        }

    def exercises(self, athlete_email: str) -> List[GuidedExercise]:
        return list(self._assigned.get(athlete_email, []))

    def replace_all(self, athlete_email: str, exercises: List[GuidedExercise]) -> None:
        self._assigned[athlete_email] = list(exercises)
        self._flush()

    def set_max_weight(self, athlete_email: str, exercise_id: str, max_weight: str) -> Optional[GuidedExercise]:
        items = self._assigned.get(athlete_email, [])
        for idx, item in enumerate(items):
            if item.id == exercise_id:
                items[idx] = replace(item, max_weight=max_weight)
                self._flush()
                return items[idx]
        return None

    def _flush(self) -> None:
        self._store.save(
            GUIDED_EXERCISES,
            {email: [e.to_dict() for e in items] for email, items in self._assigned.items()},
        )


@dataclass
class GuidedDraft:
    """
    A coach's provisional workout, built step by step before submission.
    ``added`` counts every exercise ever added, so removals never make a
    later exercise "first" again.
    """

    athlete_email: str = ""
    exercises: List[GuidedExercise] = field(default_factory=list)
    added: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "athleteEmail": self.athlete_email,
            "exercises": [e.to_dict() for e in self.exercises],
            "added": self.added,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GuidedDraft":
        return cls(
            athlete_email=data.get("athleteEmail") or "",
            exercises=[GuidedExercise.from_dict(e) for e in data.get("exercises", [])],
            added=int(data.get("added", 0)),
        )


class DraftRepository:
    """Coach email -> open draft, so the wizard survives between requests."""

    def __init__(self, store) -> None:
        self._store = store
        raw = store.load(COACH_DRAFTS, {})
        self._drafts: Dict[str, GuidedDraft] = {email: GuidedDraft.from_dict(d) for email, d in raw.items()}

    def get(self, coach_email: str) -> GuidedDraft:
        return self._drafts.get(coach_email) or GuidedDraft()

    def save(self, coach_email: str, draft: GuidedDraft) -> None:
        self._drafts[coach_email] = draft
        self._flush()

    def discard(self, coach_email: str) -> None:
        if self._drafts.pop(coach_email, None) is not None:
            self._flush()

    def _flush(self) -> None:
        self._store.save(COACH_DRAFTS, {email: d.to_dict() for email, d in self._drafts.items()})
