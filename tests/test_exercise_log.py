import pytest

from loadx.errors import MissingField, NoPendingAction, UnknownSubModule
from loadx.models.exercise import ExerciseLogRepository
from loadx.services import exercise_log
from loadx.services.confirmations import PendingActions


@pytest.fixture
def logs(store):
    return ExerciseLogRepository(store)


def _add(logs, account, formatter, name, muscle="Peito", weight="100", style="PPL"):
    return exercise_log.add_entry(logs, account, style, muscle, name, weight, formatter)


def test_add_entry_stamps_locale_date_and_time(logs, athlete, formatter):
    entry = _add(logs, athlete, formatter, "Supino Reto")
    assert (entry.date, entry.time) == ("03/05/2024", "14:07")
    assert len(entry.id) == 9
    assert logs.entries(athlete.email, "PPL") == [entry]


def test_entries_keep_insertion_order_per_style(store, logs, athlete, formatter):
    first = _add(logs, athlete, formatter, "Supino Reto")
    second = _add(logs, athlete, formatter, "Remada", muscle="Costas")
    other = _add(logs, athlete, formatter, "Agachamento", style="Full Body")

    reloaded = ExerciseLogRepository(store)
    assert reloaded.entries(athlete.email, "PPL") == [first, second]
    assert reloaded.entries(athlete.email, "Full Body") == [other]


def test_add_entry_requires_name_and_known_sub_module(logs, athlete, formatter):
    with pytest.raises(MissingField):
        _add(logs, athlete, formatter, "   ")
    with pytest.raises(UnknownSubModule):
        _add(logs, athlete, formatter, "Supino", style="Crossfit")
    assert logs.entries(athlete.email, "PPL") == []


def test_update_entry_changes_only_given_fields(logs, athlete, formatter):
    entry = _add(logs, athlete, formatter, "Supino Reto")
    updated = exercise_log.update_entry(logs, athlete, entry.id, "PPL", {"maxWeight": "110", "date": "ignored"})
    assert updated.max_weight == "110"
    assert updated.name == entry.name
    assert updated.date == entry.date


def test_update_missing_entry_is_noop(logs, athlete, formatter):
    entry = _add(logs, athlete, formatter, "Supino Reto")
    assert exercise_log.update_entry(logs, athlete, "nope", "PPL", {"name": "X"}) is None
    assert logs.entries(athlete.email, "PPL") == [entry]


def test_update_with_blank_name_changes_nothing(logs, athlete, formatter):
    entry = _add(logs, athlete, formatter, "Supino Reto")
    with pytest.raises(MissingField):
        exercise_log.update_entry(logs, athlete, entry.id, "PPL", {"name": "", "maxWeight": "120"})
    assert logs.entries(athlete.email, "PPL") == [entry]


def test_delete_entry(logs, athlete, formatter):
    keep = _add(logs, athlete, formatter, "Supino Reto")
    drop = _add(logs, athlete, formatter, "Crucifixo")
    assert exercise_log.delete_entry(logs, athlete, drop.id, "PPL") is True
    assert exercise_log.delete_entry(logs, athlete, drop.id, "PPL") is False
    assert logs.entries(athlete.email, "PPL") == [keep]


def test_delete_needs_confirmation_within_window(logs, athlete, formatter):
    entry = _add(logs, athlete, formatter, "Supino Reto")
    now = [1000.0]
    pending = PendingActions({}, clock=lambda: now[0])

    with pytest.raises(NoPendingAction):
        exercise_log.confirm_delete(pending, logs, athlete, entry.id, "PPL")

    exercise_log.request_delete(pending, entry.id, "PPL")
    now[0] += exercise_log.DELETE_CONFIRM_WINDOW + 1
    with pytest.raises(NoPendingAction):
        exercise_log.confirm_delete(pending, logs, athlete, entry.id, "PPL")
    assert logs.entries(athlete.email, "PPL") == [entry]

    exercise_log.request_delete(pending, entry.id, "PPL")
    now[0] += 1
    assert exercise_log.confirm_delete(pending, logs, athlete, entry.id, "PPL") is True
    assert logs.entries(athlete.email, "PPL") == []


def test_cancel_delete(logs, athlete, formatter):
    entry = _add(logs, athlete, formatter, "Supino Reto")
    pending = PendingActions({})
    exercise_log.request_delete(pending, entry.id, "PPL")
    assert exercise_log.cancel_delete(pending, "PPL") is True
    with pytest.raises(NoPendingAction):
        exercise_log.confirm_delete(pending, logs, athlete, entry.id, "PPL")


def test_unique_muscle_groups_first_seen_order(logs, athlete, formatter):
    for name, muscle in [("A", "Costas"), ("B", "Peito"), ("C", "Costas"), ("D", "Bíceps")]:
        _add(logs, athlete, formatter, name, muscle=muscle)
    assert exercise_log.unique_muscle_groups(logs, athlete, "PPL") == ["Costas", "Peito", "Bíceps"]
    assert [e.name for e in exercise_log.entries_by_muscle_group(logs, athlete, "PPL", "Costas")] == ["A", "C"]


def test_next_entry_progression_opens_cycle_on_empty_log(logs, athlete, formatter):
    assert len(exercise_log.next_entry_progression(logs, athlete, "PPL")) == 4
    assert exercise_log.next_entry_progression(logs, athlete, "PPL")[1].kind.value == "recognition"
    _add(logs, athlete, formatter, "Supino Reto")
    assert all(s.kind.value != "recognition" for s in exercise_log.next_entry_progression(logs, athlete, "PPL"))
