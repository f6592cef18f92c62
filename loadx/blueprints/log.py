from flask import Blueprint, g, request

from ..catalog import require_sub_module
from ..db import get_exercise_logs, get_history
from ..services import archive, exercise_log
from ..services.progression import progression_for
from ..web import current_account, form_data, formatter, pending_actions, with_loads

bp = Blueprint("log", __name__, url_prefix="/log/<style>")


@bp.url_value_preprocessor
def pull_style(endpoint, values):
    g.style = require_sub_module(values.pop("style"))


def _entries_payload(account, muscle_group=None):
    """Entries of the style with their prescribed loads; the first logged entry opens the cycle."""
    logs = get_exercise_logs()
    entries = logs.entries(account.email, g.style)
    first_id = entries[0].id if entries else None
    if muscle_group:
        entries = exercise_log.entries_by_muscle_group(logs, account, g.style, muscle_group)
    return {
        "style": g.style,
        "entries": [
            with_loads(entry.to_dict(), entry.max_weight, progression_for(g.style, entry.id == first_id))
            for entry in entries
        ],
        "muscleGroups": exercise_log.unique_muscle_groups(logs, account, g.style),
    }


@bp.get("/")
def list_entries():
    account = current_account()
    return _entries_payload(account, request.args.get("muscleGroup"))


@bp.post("/")
def add_entry():
    account = current_account()
    data = form_data()
    entry = exercise_log.add_entry(
        get_exercise_logs(),
        account,
        g.style,
        str(data.get("muscleGroup") or ""),
        str(data.get("name") or ""),
        str(data.get("maxWeight") or ""),
        formatter(),
    )
    return {"entry": entry.to_dict()}, 201


@bp.patch("/<entry_id>")
def update_entry(entry_id: str):
    account = current_account()
    entry = exercise_log.update_entry(get_exercise_logs(), account, entry_id, g.style, form_data())
    if entry is None:
        return {"error": "NotFound", "message": "Exercício não encontrado."}, 404
    return {"entry": entry.to_dict()}


@bp.post("/<entry_id>/delete")
def request_delete(entry_id: str):
    """First tap: arms the delete for a short window."""
    current_account()
    exercise_log.request_delete(pending_actions(), entry_id, g.style)
    return {"pending": True, "expiresIn": exercise_log.DELETE_CONFIRM_WINDOW}


@bp.post("/<entry_id>/delete/confirm")
def confirm_delete(entry_id: str):
    account = current_account()
    removed = exercise_log.confirm_delete(pending_actions(), get_exercise_logs(), account, entry_id, g.style)
    return {"deleted": removed}


@bp.post("/<entry_id>/delete/cancel")
def cancel_delete(entry_id: str):
    current_account()
    return {"cancelled": exercise_log.cancel_delete(pending_actions(), g.style)}


@bp.get("/preview")
def preview():
    """Loads the next exercise would be prescribed for a given max weight."""
    account = current_account()
    steps = exercise_log.next_entry_progression(get_exercise_logs(), account, g.style)
    return with_loads({"style": g.style}, request.args.get("maxWeight", ""), steps)


@bp.post("/finish")
def finish():
    """Treino finalizado: archives the log into the history."""
    account = current_account()
    session = archive.finish_workout(get_exercise_logs(), get_history(), account, g.style, formatter())
    if session is None:
        return {"archived": False}
    return {"archived": True, "session": session.to_dict(), "message": "Treino finalizado e salvo no histórico!"}, 201
