"""
Coach area: roster of linked athletes and the guided-workout wizard
(pick athlete -> style -> sub-module -> muscle group -> exercise, repeat, send).
"""

from flask import Blueprint, g

from ..db import get_accounts, get_drafts, get_guided, get_rosters
from ..services import guided, identity
from ..web import current_coach, form_data

bp = Blueprint("coach", __name__, url_prefix="/coach")


@bp.before_request
def load_coach():
    g.coach = current_coach()


def _draft_payload(draft):
    return {"draft": draft.to_dict()}


# ------------------------------
# Roster
# ------------------------------
@bp.get("/students")
def list_students():
    rows = identity.roster_accounts(get_accounts(), get_rosters(), g.coach)
    return {
        "students": [
            {**entry.to_dict(), "account": account.public_dict() if account else None}
            for entry, account in rows
        ]
    }


@bp.post("/students")
def add_student():
    data = form_data()
    roster = identity.add_roster_entry(
        get_accounts(),
        get_rosters(),
        g.coach,
        str(data.get("displayName") or data.get("name") or ""),
        str(data.get("serialNumber") or ""),
    )
    return {"students": [e.to_dict() for e in roster]}, 201


@bp.get("/students/<serial_number>")
def student_profile(serial_number: str):
    athlete = identity.linked_athlete(get_accounts(), get_rosters(), g.coach, serial_number)
    return {"account": athlete.public_dict()}


# ------------------------------
# Guided-workout draft
# ------------------------------
@bp.get("/draft")
def show_draft():
    return _draft_payload(get_drafts().get(g.coach.email))


@bp.post("/draft/target")
def select_target():
    """Selects which linked athlete the draft is for."""
    data = form_data()
    athlete = identity.linked_athlete(get_accounts(), get_rosters(), g.coach, str(data.get("serialNumber") or ""))
    drafts = get_drafts()
    draft = drafts.get(g.coach.email)
    draft.athlete_email = athlete.email
    drafts.save(g.coach.email, draft)
    return _draft_payload(draft)


@bp.post("/draft/exercises")
def add_draft_exercise():
    data = form_data()
    drafts = get_drafts()
    draft = drafts.get(g.coach.email)
    exercise = guided.add_to_draft(
        draft,
        g.coach,
        str(data.get("style") or ""),
        str(data.get("subModule") or ""),
        str(data.get("muscleGroup") or ""),
        str(data.get("name") or ""),
    )
    drafts.save(g.coach.email, draft)
    return {"exercise": exercise.to_dict(), **_draft_payload(draft)}, 201


@bp.delete("/draft/exercises/<exercise_id>")
def remove_draft_exercise(exercise_id: str):
    drafts = get_drafts()
    draft = drafts.get(g.coach.email)
    if guided.remove_from_draft(draft, exercise_id):
        drafts.save(g.coach.email, draft)
    return _draft_payload(draft)


@bp.post("/draft/submit")
def submit_draft():
    """Enviar treino: replaces the athlete's guided workout with the draft."""
    drafts = get_drafts()
    draft = drafts.get(g.coach.email)
    assigned = guided.submit(get_guided(), draft.athlete_email, draft.exercises)
    drafts.discard(g.coach.email)
    return {"athleteEmail": draft.athlete_email, "exercises": [e.to_dict() for e in assigned]}


@bp.post("/draft/reset")
def reset_draft():
    get_drafts().discard(g.coach.email)
    return {"status": "ok"}
