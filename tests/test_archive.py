from datetime import date, datetime

import pytest

from loadx.db import EXERCISE_LOGS
from loadx.errors import NoPendingAction
from loadx.models.exercise import ExerciseLogRepository
from loadx.models.session import SessionHistoryRepository
from loadx.services import archive, exercise_log
from loadx.services.confirmations import PendingActions
from loadx.services.timestamps import LocaleFormatter


@pytest.fixture
def logs(store):
    return ExerciseLogRepository(store)


@pytest.fixture
def history(store):
    return SessionHistoryRepository(store)


def _log(logs, account, formatter, *names, style="PPL"):
    return [exercise_log.add_entry(logs, account, style, "Peito", n, "80", formatter) for n in names]


def test_finish_moves_log_into_history(store, logs, history, athlete, formatter):
    entries = _log(logs, athlete, formatter, "Supino", "Crucifixo", "Paralelas")

    session = archive.finish_workout(logs, history, athlete, "PPL", formatter)

    assert list(session.exercises) == entries
    assert (session.date, session.time) == ("03/05/2024", "14:07")
    assert logs.entries(athlete.email, "PPL") == []
    assert history.sessions(athlete.email, "PPL") == [session]
    # persisted, not only in memory
    assert ExerciseLogRepository(store).entries(athlete.email, "PPL") == []
    assert SessionHistoryRepository(store).sessions(athlete.email, "PPL") == [session]


def test_failed_finish_writes_neither_document(store, logs, history, athlete, formatter, monkeypatch):
    _log(logs, athlete, formatter, "Supino")
    real_save = store.save

    def save(key, value):
        if key == EXERCISE_LOGS:
            raise RuntimeError("disk full")
        real_save(key, value)

    monkeypatch.setattr(store, "save", save)
    with pytest.raises(RuntimeError):
        archive.finish_workout(logs, history, athlete, "PPL", formatter)

    assert [e.name for e in ExerciseLogRepository(store).entries(athlete.email, "PPL")] == ["Supino"]
    assert SessionHistoryRepository(store).sessions(athlete.email, "PPL") == []
    assert [e.name for e in logs.entries(athlete.email, "PPL")] == ["Supino"]
    assert history.sessions(athlete.email, "PPL") == []


def test_finish_on_empty_log_is_noop(logs, history, athlete, formatter):
    assert archive.finish_workout(logs, history, athlete, "PPL", formatter) is None
    assert history.sessions(athlete.email, "PPL") == []


def test_history_is_newest_first_and_per_style(logs, history, athlete, formatter):
    _log(logs, athlete, formatter, "Supino")
    older = archive.finish_workout(logs, history, athlete, "PPL", formatter)
    _log(logs, athlete, formatter, "Agachamento")
    newer = archive.finish_workout(logs, history, athlete, "PPL", formatter)
    _log(logs, athlete, formatter, "Terra", style="Full Body")

    assert [s.id for s in history.sessions(athlete.email, "PPL")] == [newer.id, older.id]
    assert history.sessions(athlete.email, "Full Body") == []
    assert [e.name for e in logs.entries(athlete.email, "Full Body")] == ["Terra"]


def test_archived_session_is_detached_from_live_log(logs, history, athlete, formatter):
    (entry,) = _log(logs, athlete, formatter, "Supino")
    session = archive.finish_workout(logs, history, athlete, "PPL", formatter)
    _log(logs, athlete, formatter, "Supino Inclinado")
    assert history.find(athlete.email, "PPL", session.id).exercises == (entry,)


def test_filter_by_date(logs, history, athlete):
    may = LocaleFormatter(clock=lambda: datetime(2024, 5, 3, 9, 0))
    june = LocaleFormatter(clock=lambda: datetime(2024, 6, 1, 9, 0))
    _log(logs, athlete, may, "Supino")
    first = archive.finish_workout(logs, history, athlete, "PPL", may)
    _log(logs, athlete, june, "Supino")
    archive.finish_workout(logs, history, athlete, "PPL", june)

    sessions = history.sessions(athlete.email, "PPL")
    assert archive.filter_by_date(sessions, date(2024, 5, 3), may) == [first]
    assert archive.filter_by_date(sessions, date(2024, 5, 4), may) == []


def test_clear_history_needs_confirmation(logs, history, athlete, formatter):
    _log(logs, athlete, formatter, "Supino")
    archive.finish_workout(logs, history, athlete, "PPL", formatter)
    pending = PendingActions({})

    with pytest.raises(NoPendingAction):
        archive.confirm_clear_history(pending, history, athlete, "PPL")
    assert len(history.sessions(athlete.email, "PPL")) == 1

    archive.request_clear_history(pending, "PPL")
    assert archive.confirm_clear_history(pending, history, athlete, "PPL") == 1
    assert history.sessions(athlete.email, "PPL") == []


def test_cancelled_clear_keeps_history(logs, history, athlete, formatter):
    _log(logs, athlete, formatter, "Supino")
    archive.finish_workout(logs, history, athlete, "PPL", formatter)
    pending = PendingActions({})
    archive.request_clear_history(pending, "PPL")
    assert archive.cancel_clear_history(pending, "PPL") is True
    with pytest.raises(NoPendingAction):
        archive.confirm_clear_history(pending, history, athlete, "PPL")
    assert len(history.sessions(athlete.email, "PPL")) == 1


def test_delete_single_session(logs, history, athlete, formatter):
    _log(logs, athlete, formatter, "Supino")
    keep = archive.finish_workout(logs, history, athlete, "PPL", formatter)
    _log(logs, athlete, formatter, "Supino")
    drop = archive.finish_workout(logs, history, athlete, "PPL", formatter)
    pending = PendingActions({})

    archive.request_delete_session(pending, "PPL", drop.id)
    with pytest.raises(NoPendingAction):
        archive.confirm_delete_session(pending, history, athlete, "PPL", keep.id)

    archive.request_delete_session(pending, "PPL", drop.id)
    assert archive.confirm_delete_session(pending, history, athlete, "PPL", drop.id) is True
    assert history.sessions(athlete.email, "PPL") == [keep]
