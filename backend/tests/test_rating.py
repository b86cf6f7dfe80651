from conftest import add_submission, minutes
from workshop.models import Submission

URL = "/api/v1/rate-evaluation"


def test_rate_by_submission_id(client, db, open_session):
    submission = add_submission(db, open_session.id, "u-1", 1, 50, prompt="Write a haiku")

    response = client.post(URL, json={"submissionId": submission.id, "rating": 5})

    assert response.json() == {"success": True, "submissionId": submission.id}
    db.expire_all()
    assert db.get(Submission, submission.id).user_rating == 5


def test_rate_by_prompt_picks_most_recent_exact_match(client, db, open_session):
    older = add_submission(db, open_session.id, "u-1", 1, 50, prompt="Write a haiku", created_at=minutes(1))
    newer = add_submission(db, open_session.id, "u-2", 1, 60, prompt="Write a haiku", created_at=minutes(9))
    add_submission(db, open_session.id, "u-3", 1, 70, prompt="Write a haiku!", created_at=minutes(20))

    response = client.post(URL, json={"prompt": "Write a haiku", "rating": 3})

    assert response.json()["submissionId"] == newer.id
    db.expire_all()
    assert db.get(Submission, older.id).user_rating is None


def test_rate_by_prompt_with_no_match(client, open_session):
    response = client.post(URL, json={"prompt": "never submitted", "rating": 3})
    assert response.status_code == 404
    assert response.json() == {"error": "No submission found for this prompt"}


def test_rate_requires_prompt_or_id(client):
    response = client.post(URL, json={"rating": 3})
    assert response.status_code == 400
    assert response.json() == {"error": "Valid prompt and rating (1-5) are required"}


def test_rating_out_of_range(client, db, open_session):
    submission = add_submission(db, open_session.id, "u-1", 1, 50)
    response = client.post(URL, json={"submissionId": submission.id, "rating": 9})
    assert response.status_code == 400


def test_rating_is_write_once(client, db, open_session):
    submission = add_submission(db, open_session.id, "u-1", 1, 50)
    client.post(URL, json={"submissionId": submission.id, "rating": 2})

    response = client.post(URL, json={"submissionId": submission.id, "rating": 5})

    assert response.status_code == 409
    assert response.json() == {"error": "This evaluation has already been rated"}


def test_rate_unknown_submission(client):
    response = client.post(URL, json={"submissionId": 777, "rating": 4})
    assert response.status_code == 404
