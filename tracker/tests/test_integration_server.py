"""
Runs against a live `manage.py runserver` seeded through POST /api/init-data.
Deselected by default; run with `pytest -m integration`.
"""
import pytest
import requests
import logging
from datetime import datetime, timedelta, timezone

BASE_URL = "http://127.0.0.1:8000/api"
USERNAME = "testuser1"
logger = logging.getLogger(__name__)


def call(method, path, **kwargs):
    headers = {"X-User-NAME": USERNAME}
    r = requests.request(method, f"{BASE_URL}/{path}", headers=headers, timeout=10, **kwargs)
    logger.info("%s /%s → status=%s", method, path, r.status_code)
    return r


@pytest.fixture(scope="module", autouse=True)
def seeded():
    r = requests.post(f"{BASE_URL}/init-data", json={}, timeout=30)
    assert r.status_code == 200


def first_subject_id():
    return call("GET", "subjects").json()[0]["id"]


def post_session(minutes=30):
    end = datetime.now(timezone.utc)
    start = end - timedelta(minutes=minutes)
    return call("POST", "sessions", json={
        "subject_id": first_subject_id(),
        "start_time": start.isoformat(),
        "end_time": end.isoformat(),
    })


def complete(review_id, difficulty):
    return call("POST", f"reviews/{review_id}/complete", json={"difficulty": difficulty})


@pytest.mark.integration
def test_session_schedules_first_review_live():
    r = post_session()
    d = r.json()

    assert r.status_code == 201
    assert d["first_review"]["review_interval"] == "1d"
    assert d["profile"]["points"] >= 10
    logger.info("✓ Passed: session created with first review at 1d")


@pytest.mark.integration
def test_ladder_walk_live():
    """easy climbs, hard steps back, the last rung ends the cycle"""
    review_id = post_session().json()["first_review"]["id"]
    seen = []
    for difficulty in ["easy", "hard", "easy", "easy", "easy"]:
        d = complete(review_id, difficulty).json()
        nxt = d["next_review"]
        seen.append(nxt["review_interval"] if nxt else None)
        if nxt:
            review_id = nxt["id"]

    assert seen == ["7d", "1d", "7d", "30d", "90d"]

    d = complete(review_id, "easy").json()
    assert d["next_review"] is None
    logger.info("✓ Passed: ladder walk %s then end of cycle", seen)


@pytest.mark.integration
def test_completed_review_conflicts_live():
    review_id = post_session().json()["first_review"]["id"]

    assert complete(review_id, "medium").status_code == 200
    assert complete(review_id, "medium").status_code == 409
    logger.info("✓ Passed: second completion rejected with 409")


@pytest.mark.integration
def test_pending_reviews_until_live():
    post_session()

    soon = call("GET", "reviews", params={"until": datetime.now(timezone.utc).isoformat()})
    later = call("GET", "reviews", params={
        "until": (datetime.now(timezone.utc) + timedelta(days=2)).isoformat()
    })

    assert len(later.json()["reviews"]) > len(soon.json()["reviews"])
    logger.info("✓ Passed: pending reviews filtered by date")


@pytest.mark.integration
def test_unknown_header_user_live():
    r = requests.get(f"{BASE_URL}/profile", headers={"X-User-NAME": "nobody-here"}, timeout=10)

    assert r.status_code == 401
    logger.info("✓ Passed: unknown header user rejected")
