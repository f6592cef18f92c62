from flask import Blueprint

from ..db import get_guided
from ..services import guided
from ..web import current_account, form_data, with_loads

bp = Blueprint("guided", __name__, url_prefix="/guided")


def _exercise_payload(exercise):
    return with_loads(exercise.to_dict(), exercise.max_weight, list(exercise.progression))


@bp.get("/")
def overview():
    """Treino guiado: assigned exercises grouped by muscle group."""
    account = current_account()
    groups = guided.group_by_muscle(get_guided().exercises(account.email))
    return {
        "groups": [
            {"muscleGroup": muscle, "exercises": [_exercise_payload(e) for e in items]}
            for muscle, items in groups.items()
        ]
    }


@bp.get("/<muscle_group>")
def muscle_group_detail(muscle_group: str):
    account = current_account()
    groups = guided.group_by_muscle(get_guided().exercises(account.email))
    if muscle_group not in groups:
        return {"error": "NotFound", "message": "Nenhum treino guiado disponível."}, 404
    return {"muscleGroup": muscle_group, "exercises": [_exercise_payload(e) for e in groups[muscle_group]]}


@bp.patch("/exercises/<exercise_id>")
def edit_max_weight(exercise_id: str):
    """Athletes may only change the max weight of a guided exercise."""
    account = current_account()
    data = form_data()
    exercise = guided.athlete_edit_max_weight(get_guided(), account, exercise_id, str(data.get("maxWeight") or ""))
    if exercise is None:
        return {"error": "NotFound", "message": "Exercício não encontrado."}, 404
    return {"exercise": _exercise_payload(exercise)}
