"""Free-form exercise log of an athlete, one list per sub-module."""

from __future__ import annotations

from typing import List, Mapping, Optional

from ..catalog import require_sub_module
from ..errors import MissingField
from ..models import new_id
from ..models.account import Account
from ..models.exercise import ExerciseLogRepository, LoggedExercise
from ..models.progression import ProgressionStep
from .confirmations import PendingActions
from .progression import progression_for
from .timestamps import LocaleFormatter

# Arming window of the tap-to-confirm delete, in seconds.
DELETE_CONFIRM_WINDOW = 3.0

# camelCase field -> LoggedExercise attribute
EDITABLE_FIELDS = {"name": "name", "maxWeight": "max_weight", "muscleGroup": "muscle_group"}


def add_entry(
    logs: ExerciseLogRepository,
    account: Account,
    style: str,
    muscle_group: str,
    name: str,
    max_weight: str,
    formatter: LocaleFormatter,
) -> LoggedExercise:
    require_sub_module(style)
    name = (name or "").strip()
    if not name:
        raise MissingField("Informe o nome do exercício.")

    day, clock = formatter.stamp()
    entry = LoggedExercise(
        id=new_id(),
        muscle_group=muscle_group or "",
        name=name,
        max_weight=str(max_weight or ""),
        date=day,
        time=clock,
    )
    logs.append(account.email, style, entry)
    return entry


def update_entry(
    logs: ExerciseLogRepository,
    account: Account,
    entry_id: str,
    style: str,
    changes: Mapping[str, object],
) -> Optional[LoggedExercise]:
    """
    Applies the editable fields in ``changes`` to one entry. Unknown keys are
    ignored; a missing entry is a no-op and returns None.
    """
    updates = {EDITABLE_FIELDS[key]: str(value or "") for key, value in changes.items() if key in EDITABLE_FIELDS}
    if "name" in updates:
        updates["name"] = updates["name"].strip()
        if not updates["name"]:
            raise MissingField("Informe o nome do exercício.")
    if not updates:
        return logs.find(account.email, style, entry_id)
    return logs.update(account.email, style, entry_id, **updates)


def delete_entry(logs: ExerciseLogRepository, account: Account, entry_id: str, style: str) -> bool:
    return logs.remove(account.email, style, entry_id)


def _delete_action(style: str) -> str:
    return f"delete-entry:{style}"


def request_delete(pending: PendingActions, entry_id: str, style: str) -> None:
    pending.request(_delete_action(style), entry_id)


def confirm_delete(
    pending: PendingActions,
    logs: ExerciseLogRepository,
    account: Account,
    entry_id: str,
    style: str,
    max_age: Optional[float] = DELETE_CONFIRM_WINDOW,
) -> bool:
    pending.confirm(_delete_action(style), entry_id, max_age=max_age)
    return delete_entry(logs, account, entry_id, style)


def cancel_delete(pending: PendingActions, style: str) -> bool:
    return pending.cancel(_delete_action(style))


def unique_muscle_groups(logs: ExerciseLogRepository, account: Account, style: str) -> List[str]:
    """Distinct muscle groups of the style's log, in first-seen order."""
    return list(dict.fromkeys(e.muscle_group for e in logs.entries(account.email, style)))


def entries_by_muscle_group(logs: ExerciseLogRepository, account: Account, style: str, muscle_group: str) -> List[LoggedExercise]:
    return [e for e in logs.entries(account.email, style) if e.muscle_group == muscle_group]


def next_entry_progression(logs: ExerciseLogRepository, account: Account, style: str) -> List[ProgressionStep]:
    """Scheme the next logged exercise would get; the first one of an empty log opens the cycle."""
    return progression_for(style, not logs.entries(account.email, style))
