# loadx/db.py
"""
Key-value document store on top of Flask-SQLAlchemy.

Each top-level collection is one JSON document in the ``documents`` table and
is always rewritten in full. Repositories are cached on ``g`` so that one
application context sees one consistent copy of every collection.
"""
from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

import click
from flask import Flask, g
from flask.cli import with_appcontext
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Document keys
ACCOUNTS = "accounts"
EXERCISE_LOGS = "exercise-logs"
SESSION_HISTORY = "session-history"
COACH_ROSTERS = "coach-rosters"
GUIDED_EXERCISES = "guided-exercises"
COACH_DRAFTS = "coach-drafts"

DOCUMENT_KEYS = (ACCOUNTS, EXERCISE_LOGS, SESSION_HISTORY, COACH_ROSTERS, GUIDED_EXERCISES, COACH_DRAFTS)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Document(db.Model):
    __tablename__ = "documents"

    key = db.Column(db.String(64), primary_key=True)
    body = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False, default=_utcnow)

    def __repr__(self):
        return f"<Document {self.key}>"


class DocumentStore:
    """Reads and writes whole JSON documents by key."""

    def __init__(self, session) -> None:
        self.session = session
        self._depth = 0

    def load(self, key: str, default: Any) -> Any:
        doc = self.session.get(Document, key)
        if doc is None:
            return default
        return json.loads(doc.body)

    def save(self, key: str, value: Any) -> None:
        body = json.dumps(value, ensure_ascii=False)
        doc = self.session.get(Document, key)
        if doc is None:
            doc = Document(key=key, body=body)
            self.session.add(doc)
        else:
            doc.body = body
            doc.updated_at = _utcnow()
        if not self._depth:
            self.session.commit()

    @contextmanager
    def transaction(self) -> Iterator["DocumentStore"]:
        """
        Groups the saves made inside the block into one commit. If the block
        raises, none of them is written.
        """
        self._depth += 1
        try:
            yield self
            if self._depth == 1:
                self.session.commit()
        except Exception:
            if self._depth == 1:
                self.session.rollback()
            raise
        finally:
            self._depth -= 1

    def delete(self, key: str) -> bool:
        doc = self.session.get(Document, key)
        if doc is None:
            return False
        self.session.delete(doc)
        self.session.commit()
        return True


# ------------------------------------------------------------
# Per-context accessors (cached on g)
# ------------------------------------------------------------

def get_store() -> DocumentStore:
    if "store" not in g:
        g.store = DocumentStore(db.session)
    return g.store


def get_accounts():
    if "accounts" not in g:
        from .models.account import AccountRepository
        g.accounts = AccountRepository(get_store())
    return g.accounts


def get_exercise_logs():
    if "exercise_logs" not in g:
        from .models.exercise import ExerciseLogRepository
        g.exercise_logs = ExerciseLogRepository(get_store())
    return g.exercise_logs


def get_history():
    if "history" not in g:
        from .models.session import SessionHistoryRepository
        g.history = SessionHistoryRepository(get_store())
    return g.history


def get_rosters():
    if "rosters" not in g:
        from .models.roster import RosterRepository
        g.rosters = RosterRepository(get_store())
    return g.rosters


def get_guided():
    if "guided" not in g:
        from .models.guided import GuidedExerciseRepository
        g.guided = GuidedExerciseRepository(get_store())
    return g.guided


def get_drafts():
    if "drafts" not in g:
        from .models.guided import DraftRepository
        g.drafts = DraftRepository(get_store())
    return g.drafts


# ------------------------------------------------------------
# CLI
# ------------------------------------------------------------

@click.command("init-db")
@with_appcontext
def init_db_command() -> None:
    """Creates the documents table if it does not exist."""
    db.create_all()
    click.echo("[LoadX] Database initialised.")


@click.command("reset-data")
@click.confirmation_option(prompt="Delete all accounts, logs and history?")
@with_appcontext
def reset_data_command() -> None:
    """Drops every stored document."""
    store = DocumentStore(db.session)
    removed = [key for key in DOCUMENT_KEYS if store.delete(key)]
    click.echo(f"[LoadX] {len(removed)} document(s) removed.")


def init_app(app: Flask) -> None:
    db.init_app(app)
    app.cli.add_command(init_db_command)
    app.cli.add_command(reset_data_command)
    with app.app_context():
        db.create_all()
