"""
Session archive: finishing a workout moves the live log of a sub-module
into its history as one immutable session.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from ..catalog import require_sub_module
from ..models import new_id
from ..models.account import Account
from ..models.exercise import ExerciseLogRepository
from ..models.session import SessionHistoryRepository, WorkoutSession
from .confirmations import PendingActions
from .timestamps import LocaleFormatter

logger = logging.getLogger(__name__)


def finish_workout(
    logs: ExerciseLogRepository,
    history: SessionHistoryRepository,
    account: Account,
    style: str,
    formatter: LocaleFormatter,
) -> Optional[WorkoutSession]:
    """
    Archives the current log of ``style`` and empties it.

    Returns the new session, or None when there was nothing to archive.
    The session lands at the front of the history (newest first); entries
    keep their logging order.
    Both documents are written in one commit, so an entry is never stored
    in the log and the history at the same time.
    """
    require_sub_module(style)
    entries = logs.entries(account.email, style)
    if not entries:
        return None

    day, clock = formatter.stamp()
    session = WorkoutSession(id=new_id(), date=day, time=clock, exercises=tuple(entries))
    try:
        with logs.store.transaction():
            history.prepend(account.email, style, session)
            logs.clear(account.email, style)
    except Exception:
        history.reload()
        logs.reload()
        raise
    logger.info("archived %d exercise(s) of %s for %s", len(entries), style, account.email)
    return session


def filter_by_date(sessions: Iterable[WorkoutSession], calendar_date: date, formatter: LocaleFormatter) -> List[WorkoutSession]:
    """Sessions stamped with ``calendar_date`` (compared as formatted strings)."""
    target = formatter.format_date(calendar_date)
    return [s for s in sessions if s.date == target]


def clear_all_history(history: SessionHistoryRepository, account: Account, style: str) -> int:
    removed = history.clear(account.email, style)
    logger.info("cleared %d session(s) of %s for %s", removed, style, account.email)
    return removed


def delete_session(history: SessionHistoryRepository, account: Account, style: str, session_id: str) -> bool:
    return history.remove(account.email, style, session_id)


# ------------------------------------------------------------
# Confirmation steps
# ------------------------------------------------------------

def _clear_action(style: str) -> str:
    return f"clear-history:{style}"


def _delete_action(style: str) -> str:
    return f"delete-session:{style}"


def request_clear_history(pending: PendingActions, style: str) -> None:
    pending.request(_clear_action(style), style)


def confirm_clear_history(pending: PendingActions, history: SessionHistoryRepository, account: Account, style: str) -> int:
    pending.confirm(_clear_action(style), style)
    return clear_all_history(history, account, style)


def cancel_clear_history(pending: PendingActions, style: str) -> bool:
    return pending.cancel(_clear_action(style))


def request_delete_session(pending: PendingActions, style: str, session_id: str) -> None:
    pending.request(_delete_action(style), session_id)


def confirm_delete_session(
    pending: PendingActions,
    history: SessionHistoryRepository,
    account: Account,
    style: str,
    session_id: str,
) -> bool:
    pending.confirm(_delete_action(style), session_id)
    return delete_session(history, account, style, session_id)


def cancel_delete_session(pending: PendingActions, style: str) -> bool:
    return pending.cancel(_delete_action(style))
