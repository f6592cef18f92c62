"""
Guided workouts: a coach composes a draft for one linked athlete and
submits it, replacing whatever that athlete had assigned before.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..catalog import MODO_FREE, STYLE_TITLES, style_of
from ..errors import Forbidden, MissingDataOrEmptyList, MissingField, UnknownSubModule
from ..models import new_id
from ..models.account import Account
from ..models.guided import GuidedDraft, GuidedExercise, GuidedExerciseRepository
from .progression import progression_for

logger = logging.getLogger(__name__)

FREE_MODE_SUB_MODULE = "Tradicional"


def add_to_draft(
    draft: GuidedDraft,
    coach: Account,
    style: str,
    sub_module: str,
    muscle_group: str,
    name: str,
) -> GuidedExercise:
    """
    Appends one exercise to ``draft``. Its progression is computed here,
    once; only the very first exercise added to the draft opens the cycle.
    """
    if not coach.is_coach:
        raise Forbidden()
    if style not in STYLE_TITLES:
        raise UnknownSubModule("Estilo de treino desconhecido.")
    if style == MODO_FREE:
        sub_module = FREE_MODE_SUB_MODULE
    if style_of(sub_module) != style:
        raise UnknownSubModule()
    name = (name or "").strip()
    if not name or not muscle_group:
        raise MissingField()

    exercise = GuidedExercise(
        id=new_id(),
        muscle_group=muscle_group,
        name=name,
        style=style,
        sub_module=sub_module,
        progression=tuple(progression_for(sub_module, draft.added == 0)),
        coach_email=coach.email,
    )
    draft.exercises.append(exercise)
    draft.added += 1
    return exercise


def remove_from_draft(draft: GuidedDraft, exercise_id: str) -> bool:
    before = len(draft.exercises)
    draft.exercises = [e for e in draft.exercises if e.id != exercise_id]
    return len(draft.exercises) != before


def submit(guided: GuidedExerciseRepository, athlete_email: str, draft: List[GuidedExercise]) -> List[GuidedExercise]:
    """Replaces the athlete's whole guided collection with ``draft``."""
    if not (athlete_email or "").strip() or not draft:
        raise MissingDataOrEmptyList()
    guided.replace_all(athlete_email, draft)
    logger.info("assigned %d guided exercise(s) to %s", len(draft), athlete_email)
    return guided.exercises(athlete_email)


def athlete_edit_max_weight(
    guided: GuidedExerciseRepository,
    athlete: Account,
    exercise_id: str,
    new_max_weight: str,
) -> Optional[GuidedExercise]:
    """The athlete's only edit on a guided exercise; None if it is not assigned to them."""
    return guided.set_max_weight(athlete.email, exercise_id, str(new_max_weight or "").strip())


def group_by_muscle(exercises: List[GuidedExercise]) -> Dict[str, List[GuidedExercise]]:
    """Partitions exercises by muscle group, groups in first-seen order."""
    groups: Dict[str, List[GuidedExercise]] = {}
    for exercise in exercises:
        groups.setdefault(exercise.muscle_group, []).append(exercise)
    return groups
