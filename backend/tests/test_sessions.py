from workshop import config
from workshop.models import WorkshopSession

URL = "/api/v1/sessions"

NEW_SESSION = {
    "name": "Morning cohort",
    "stage1_goal": "Get a polite complaint response",
    "stage2_goal": "Get a launch plan",
}


def test_create_session_uses_default_criteria(client):
    response = client.post(URL, json=NEW_SESSION)

    assert response.status_code == 200
    session = response.json()["session"]
    assert session["is_open"] is True
    assert session["name"] == "Morning cohort"
    assert [c["name"] for c in session["stage1_criteria"]] == [
        "Professionalism", "Empathy", "Actionability", "Completeness",
    ]
    assert [c["name"] for c in session["stage2_criteria"]] == [
        "Strategic Thinking", "Audience Targeting", "Channel Strategy", "Measurability",
    ]


def test_create_session_with_custom_criteria(client):
    body = dict(NEW_SESSION, stage1_criteria=[{"name": " Tone ", "description": "Warm"}])

    session = client.post(URL, json=body).json()["session"]

    assert session["stage1_criteria"] == [{"name": "Tone", "description": "Warm"}]


def test_create_session_rejects_duplicate_criteria(client):
    body = dict(NEW_SESSION, stage1_criteria=[{"name": "Tone"}, {"name": "Tone"}])

    response = client.post(URL, json=body)

    assert response.status_code == 400
    assert "duplicate" in response.json()["error"]


def test_create_session_requires_name(client):
    response = client.post(URL, json=dict(NEW_SESSION, name="  "))
    assert response.status_code == 400


def test_list_sessions_newest_first(client):
    first = client.post(URL, json=dict(NEW_SESSION, name="First")).json()["session"]
    second = client.post(URL, json=dict(NEW_SESSION, name="Second")).json()["session"]

    sessions = client.get(URL).json()["sessions"]

    assert [s["id"] for s in sessions] == [second["id"], first["id"]]


def test_active_session_is_most_recent_open_one(client):
    first = client.post(URL, json=dict(NEW_SESSION, name="First")).json()["session"]
    second = client.post(URL, json=dict(NEW_SESSION, name="Second")).json()["session"]
    assert client.get(f"{URL}/active").json()["session"]["id"] == second["id"]

    client.post(f"{URL}/{second['id']}/toggle")

    assert client.get(f"{URL}/active").json()["session"]["id"] == first["id"]


def test_active_session_is_null_when_all_closed(client):
    session = client.post(URL, json=NEW_SESSION).json()["session"]
    client.patch(URL, json={"id": session["id"], "is_open": False})

    data = client.get(f"{URL}/active").json()

    assert data["session"] is None
    assert data["message"] == "No active session"


def test_toggle_twice_restores_state(client):
    session = client.post(URL, json=NEW_SESSION).json()["session"]

    closed = client.post(f"{URL}/{session['id']}/toggle").json()["session"]
    reopened = client.post(f"{URL}/{session['id']}/toggle").json()["session"]

    assert closed["is_open"] is False
    assert reopened["is_open"] is True


def test_toggle_unknown_session(client):
    response = client.post(f"{URL}/999/toggle")
    assert response.status_code == 404
    assert response.json() == {"error": "Session not found"}


def test_patch_updates_only_given_fields(client):
    session = client.post(URL, json=NEW_SESSION).json()["session"]

    response = client.patch(URL, json={
        "id": session["id"],
        "stage2_goal": "Get a pricing page",
        "stage2_criteria": [{"name": "Persuasion", "description": "Convinces the reader"}],
    })

    updated = response.json()["session"]
    assert updated["name"] == NEW_SESSION["name"]
    assert updated["stage1_goal"] == NEW_SESSION["stage1_goal"]
    assert updated["stage2_goal"] == "Get a pricing page"
    assert updated["stage2_criteria"] == [{"name": "Persuasion", "description": "Convinces the reader"}]
    assert updated["is_open"] is True


def test_patch_unknown_session(client):
    response = client.patch(URL, json={"id": 42, "name": "x"})
    assert response.status_code == 404


def test_sessions_stay_open_side_by_side_by_default(client, db):
    client.post(URL, json=dict(NEW_SESSION, name="First"))
    client.post(URL, json=dict(NEW_SESSION, name="Second"))

    assert db.query(WorkshopSession).filter(WorkshopSession.is_open.is_(True)).count() == 2


def test_single_open_session_when_enforced(client, db, monkeypatch):
    monkeypatch.setattr(config, "ENFORCE_SINGLE_OPEN_SESSION", True)
    first = client.post(URL, json=dict(NEW_SESSION, name="First")).json()["session"]
    second = client.post(URL, json=dict(NEW_SESSION, name="Second")).json()["session"]

    sessions = {s["id"]: s["is_open"] for s in client.get(URL).json()["sessions"]}
    assert sessions == {first["id"]: False, second["id"]: True}

    client.post(f"{URL}/{first['id']}/toggle")

    sessions = {s["id"]: s["is_open"] for s in client.get(URL).json()["sessions"]}
    assert sessions == {first["id"]: True, second["id"]: False}
