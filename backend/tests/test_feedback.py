import pytest

from workshop.models import SessionFeedback

URL = "/api/v1/feedback"


def test_rating_with_blank_message_stores_null(client, db):
    response = client.post(URL, json={"userId": "u-1", "rating": 5, "message": "   "})

    assert response.status_code == 200
    assert response.json()["message"] is None
    stored = db.query(SessionFeedback).one()
    assert stored.rating == 5
    assert stored.message is None


def test_message_is_kept(client):
    data = client.post(URL, json={"userId": "u-1", "rating": 4, "message": "Loved stage 2"}).json()
    assert data["message"] == "Loved stage 2"
    assert data["user_id"] == "u-1"


def test_missing_user_is_anonymous(client):
    data = client.post(URL, json={"rating": 3}).json()
    assert data["user_id"] == "anonymous"


@pytest.mark.parametrize("rating", [0, 6, None, "5", 4.5, True])
def test_invalid_rating_is_rejected(client, db, rating):
    response = client.post(URL, json={"userId": "u-1", "rating": rating})

    assert response.status_code == 400
    assert response.json() == {"error": "Rating must be between 1 and 5"}
    assert db.query(SessionFeedback).count() == 0


def test_list_newest_first(client):
    first = client.post(URL, json={"rating": 2}).json()
    second = client.post(URL, json={"rating": 4}).json()

    entries = client.get(URL).json()["feedback"]

    assert [e["id"] for e in entries] == [second["id"], first["id"]]
