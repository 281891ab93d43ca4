def test_grant_points(client, student_id):
    response = client.post(f"/api/students/{student_id}/rewards", json={"points": 30, "reason": "Perfect exam"})

    assert response.status_code == 201
    assert response.json()["points"] == 30
    assert response.json()["entry"]["reason"] == "Perfect exam"

    client.post(f"/api/students/{student_id}/rewards", json={"points": 5, "reason": "Homework"})
    assert client.get(f"/api/students/{student_id}").json()["points"] == 35
    assert len(client.get(f"/api/students/{student_id}/rewards").json()) == 2


def test_grant_requires_positive_points(client, student_id):
    response = client.post(f"/api/students/{student_id}/rewards", json={"points": 0, "reason": "none"})
    assert response.status_code == 400


def test_redeem_reward(client, student_id):
    client.post(f"/api/students/{student_id}/rewards", json={"points": 100, "reason": "Streak"})

    response = client.post(f"/api/students/{student_id}/redeem", json={
        "rewardId": 1, "rewardName": "Free lesson", "cost": 80,
    })

    assert response.status_code == 201
    assert response.json()["points"] == 20
    redeemed = client.get(f"/api/students/{student_id}/redeemed-rewards").json()
    assert [r["rewardName"] for r in redeemed] == ["Free lesson"]


def test_redeem_without_enough_points(client, student_id):
    client.post(f"/api/students/{student_id}/rewards", json={"points": 10, "reason": "Streak"})

    response = client.post(f"/api/students/{student_id}/redeem", json={
        "rewardId": 2, "rewardName": "Book discount", "cost": 50,
    })

    assert response.status_code == 400
    assert client.get(f"/api/students/{student_id}").json()["points"] == 10
    assert client.get(f"/api/students/{student_id}/redeemed-rewards").json() == []


def test_rewards_for_unknown_student(client):
    missing = "5" * 24
    assert client.post(f"/api/students/{missing}/rewards", json={"points": 1, "reason": "x"}).status_code == 404
    assert client.get(f"/api/students/{missing}/redeemed-rewards").status_code == 404
