from datetime import datetime, timedelta, timezone

from app.models import Challenge, UserChallenge


def join(client, challenge_id, user_id="u1"):
    response = client.post(f"/challenges/join/{challenge_id}", json={"userId": user_id})
    assert response.status_code == 200
    return response.json()["data"]["_id"]


def test_my_activities(client, session, challenge):
    other = Challenge(title="Meatless Monday", category="Food", duration=4, image_url="https://img.example/veg.png")
    session.add(other)
    session.commit()
    session.refresh(other)

    join(client, challenge.id)
    join(client, other.id)
    join(client, other.id, user_id="someone-else")

    response = client.get("/my-activities/u1")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 2

    activity = next(a for a in body["data"] if a["challengeId"] == challenge.id)
    assert activity["userId"] == "u1"
    assert activity["status"] == "Not Started"
    assert activity["progress"] == 0
    assert activity["joinDate"] is not None
    assert activity["title"] == "Plastic-Free Week"
    assert activity["category"] == "Waste Reduction"
    assert activity["imageUrl"] == "https://img.example/plastic.png"
    assert activity["description"] == "Avoid single-use plastic for seven days"
    assert "duration" not in activity


def test_my_activities_newest_first(client, session, challenge):
    other = Challenge(title="Meatless Monday", duration=4)
    session.add(other)
    session.commit()
    now = datetime.now(timezone.utc)
    session.add(UserChallenge(user_id="u1", challenge_id=challenge.id, join_date=now - timedelta(days=2)))
    session.add(UserChallenge(user_id="u1", challenge_id=other.id, join_date=now))
    session.commit()

    data = client.get("/my-activities/u1").json()["data"]
    assert [a["title"] for a in data] == ["Meatless Monday", "Plastic-Free Week"]


def test_my_activities_empty(client):
    response = client.get("/my-activities/nobody")
    assert response.status_code == 200
    assert response.json() == {"success": True, "count": 0, "data": []}


def test_user_challenge_detail(client, challenge):
    link_id = join(client, challenge.id)

    response = client.get(f"/user-challenges/u1/{link_id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["_id"] == link_id
    assert data["status"] == "Not Started"
    assert data["challenge"]["_id"] == challenge.id
    assert data["challenge"]["title"] == "Plastic-Free Week"
    assert data["challenge"]["participants"] == 1
    assert data["challenge"]["impactMetric"] == "kg plastic saved"


def test_user_challenge_wrong_user(client, challenge):
    link_id = join(client, challenge.id)

    response = client.get(f"/user-challenges/u2/{link_id}")
    assert response.status_code == 404
    assert response.json()["message"] == "User challenge not found"


def test_user_challenge_after_challenge_deleted(client, challenge):
    link_id = join(client, challenge.id)
    client.delete(f"/delete/challenge/{challenge.id}")

    response = client.get(f"/user-challenges/u1/{link_id}")
    assert response.status_code == 200
    assert response.json()["data"]["challenge"] is None


def test_user_challenge_malformed_id(client):
    response = client.get("/user-challenges/u1/not-an-id")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid user challenge id"


def test_joined_challenge_detail(client, challenge):
    link_id = join(client, challenge.id)

    response = client.get(f"/joined/challenges/{link_id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["_id"] == link_id
    assert data["userId"] == "u1"
    assert data["title"] == "Plastic-Free Week"
    assert data["duration"] == 7
    assert data["target"] == "Zero plastic bags"
    assert data["impactMetric"] == "kg plastic saved"
    assert data["updatedOn"] is None
    assert "challenge" not in data
    assert "participants" not in data


def test_joined_challenge_not_found(client):
    response = client.get("/joined/challenges/77")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_update_progress(client, challenge):
    link_id = join(client, challenge.id)

    response = client.patch(
        f"/user-challenges/u1/{link_id}",
        json={"status": "In Progress", "progress": 40}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "In Progress"
    assert data["progress"] == 40
    assert data["updateDate"] is not None

    # status is a free-text label
    response = client.patch(
        f"/user-challenges/u1/{link_id}",
        json={"status": "halfway-ish", "progress": 55.5}
    )
    assert response.status_code == 200

    data = client.get(f"/joined/challenges/{link_id}").json()["data"]
    assert data["status"] == "halfway-ish"
    assert data["progress"] == 55.5


def test_update_progress_not_found(client):
    response = client.patch("/user-challenges/u1/5", json={"status": "Completed", "progress": 100})
    assert response.status_code == 404


def test_update_progress_rejects_bad_body(client, challenge):
    link_id = join(client, challenge.id)

    response = client.patch(f"/user-challenges/u1/{link_id}", json={"status": "Completed", "progress": "lots"})
    assert response.status_code == 400
    assert "progress" in response.json()["error"]


def test_update_progress_rejects_infinite_progress(client, challenge):
    link_id = join(client, challenge.id)

    response = client.patch(
        f"/user-challenges/u1/{link_id}",
        content='{"status": "In Progress", "progress": 1e999}',
        headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "progress" in body["error"]

    response = client.get("/my-activities/u1")
    assert response.status_code == 200
    assert response.json()["data"][0]["progress"] == 0
