from datetime import date

from flask import Blueprint, g, request

from ..catalog import require_sub_module
from ..db import get_history
from ..errors import MissingField
from ..services import archive
from ..services.progression import progression_for
from ..web import current_account, formatter, pending_actions, with_loads

bp = Blueprint("history", __name__, url_prefix="/history/<style>")


@bp.url_value_preprocessor
def pull_style(endpoint, values):
    g.style = require_sub_module(values.pop("style"))


@bp.get("/")
def list_sessions():
    """Archived sessions, newest first. ``?date=YYYY-MM-DD`` keeps only that day."""
    account = current_account()
    sessions = get_history().sessions(account.email, g.style)

    raw_date = request.args.get("date")
    if raw_date:
        try:
            day = date.fromisoformat(raw_date)
        except ValueError:
            raise MissingField("Data inválida.") from None
        sessions = archive.filter_by_date(sessions, day, formatter())

    return {"style": g.style, "sessions": [s.to_dict() for s in sessions]}


@bp.get("/<session_id>")
def session_detail(session_id: str):
    account = current_account()
    session = get_history().find(account.email, g.style, session_id)
    if session is None:
        return {"error": "NotFound", "message": "Treino não encontrado."}, 404

    data = session.to_dict()
    data["exercises"] = [
        with_loads(entry.to_dict(), entry.max_weight, progression_for(g.style, idx == 0))
        for idx, entry in enumerate(session.exercises)
    ]
    return {"session": data}


@bp.post("/clear")
def request_clear():
    current_account()
    archive.request_clear_history(pending_actions(), g.style)
    return {"pending": True}


@bp.post("/clear/confirm")
def confirm_clear():
    account = current_account()
    removed = archive.confirm_clear_history(pending_actions(), get_history(), account, g.style)
    return {"removed": removed}


@bp.post("/clear/cancel")
def cancel_clear():
    current_account()
    return {"cancelled": archive.cancel_clear_history(pending_actions(), g.style)}


@bp.post("/<session_id>/delete")
def request_delete(session_id: str):
    current_account()
    archive.request_delete_session(pending_actions(), g.style, session_id)
    return {"pending": True}


@bp.post("/<session_id>/delete/confirm")
def confirm_delete(session_id: str):
    account = current_account()
    deleted = archive.confirm_delete_session(pending_actions(), get_history(), account, g.style, session_id)
    return {"deleted": deleted}


@bp.post("/<session_id>/delete/cancel")
def cancel_delete(session_id: str):
    current_account()
    return {"cancelled": archive.cancel_delete_session(pending_actions(), g.style)}
