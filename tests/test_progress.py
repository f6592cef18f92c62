from loadx.models.exercise import LoggedExercise
from loadx.models.session import WorkoutSession
from loadx.blueprints.progress import exercise_history
from loadx.services.timestamps import LocaleFormatter

from .conftest import STRONG_PASSWORD


def _session(day, *entries):
    return WorkoutSession(
        id=day,
        date=day,
        time="10:00",
        exercises=tuple(LoggedExercise(id=n + w, muscle_group="Peito", name=n, max_weight=w, date=day, time="10:00") for n, w in entries),
    )


def test_exercise_history_is_oldest_first():
    sessions = [
        _session("10/05/2024", ("Supino", "105")),
        _session("03/05/2024", ("Supino", "100"), ("Remada", "80")),
        _session("01/05/2024", ("Supino", "")),
    ]
    points = exercise_history(sessions, "Supino", LocaleFormatter())
    assert [(d.isoformat(), w) for d, w in points] == [("2024-05-03", 100.0), ("2024-05-10", 105.0)]


def test_exercise_history_skips_non_finite_weights():
    sessions = [
        _session("10/05/2024", ("Supino", "nan")),
        _session("03/05/2024", ("Supino", "inf"), ("Supino", "92,5")),
    ]
    points = exercise_history(sessions, "Supino", LocaleFormatter())
    assert [w for _, w in points] == [92.5]


def test_png_endpoint(client):
    client.post("/auth/register", json={"role": "ATHLETE", "name": "Ana", "email": "a@example.com", "password": STRONG_PASSWORD})
    client.post("/log/PPL/", json={"muscleGroup": "Peito", "name": "Supino", "maxWeight": "100"})
    client.post("/log/PPL/finish")

    resp = client.get("/progress/PPL/exercise.png?name=Supino&download=1")
    assert resp.status_code == 200
    assert resp.mimetype == "image/png"
    assert resp.data.startswith(b"\x89PNG")
    assert "attachment" in resp.headers["Content-Disposition"]


def test_png_needs_exercise_name(client):
    client.post("/auth/register", json={"role": "ATHLETE", "name": "Ana", "email": "a@example.com", "password": STRONG_PASSWORD})
    assert client.get("/progress/PPL/exercise.png").status_code == 400
