import pytest
from bson import ObjectId

from tests.conftest import run
from tutorhub.database import STUDENT_NOTIFICATIONS, SUPPORT_ACTIVITY_LOGS, USERS


@pytest.fixture
def method_id(client):
    response = client.post("/api/payment-methods", json={"name": "InstaPay", "number": "x@instapay", "password": "pw"})
    return response.json()["method"]["_id"]


@pytest.fixture
def transfer(client, student_id, method_id):
    response = client.post("/api/transfer-requests", json={
        "studentId": student_id,
        "amount": 200,
        "paymentMethodId": method_id,
        "transactionNumber": "TX-1001",
        "transferTime": "2024-03-01T10:00:00Z",
    })
    assert response.status_code == 201, response.text
    return response.json()["transferRequest"]


def balance(db, student_id):
    return run(db[USERS].find_one({"_id": ObjectId(student_id)}))["balance"]


def test_new_transfer_is_pending(transfer, student_id):
    assert transfer["status"] == "pending"
    assert transfer["studentId"] == student_id
    assert transfer["studentName"] == "Student 1"
    assert transfer["confirmedBy"] is None


def test_transfer_for_unknown_method(client, student_id):
    response = client.post("/api/transfer-requests", json={
        "studentId": student_id,
        "amount": 10,
        "paymentMethodId": "d" * 24,
        "transactionNumber": "TX-2",
        "transferTime": "2024-03-01T10:00:00Z",
    })
    assert response.status_code == 404


def test_transfer_amount_must_be_positive(client, student_id, method_id):
    response = client.post("/api/transfer-requests", json={
        "studentId": student_id,
        "amount": 0,
        "paymentMethodId": method_id,
        "transactionNumber": "TX-3",
        "transferTime": "2024-03-01T10:00:00Z",
    })
    assert response.status_code == 400


def test_confirm_credits_balance_once(client, db, transfer, student_id, support_user):
    url = f"/api/transfer-requests/{transfer['_id']}/confirm"

    response = client.put(url, json={"supportId": support_user["id"]})

    assert response.status_code == 200
    confirmed = response.json()["transferRequest"]
    assert confirmed["status"] == "confirmed"
    assert confirmed["confirmedBy"] == support_user["id"]
    assert balance(db, student_id) == 200

    again = client.put(url, json={"supportId": support_user["id"]})
    assert again.status_code == 409
    assert balance(db, student_id) == 200


def test_confirm_notifies_and_logs(client, db, transfer, student_id, support_user):
    client.put(f"/api/transfer-requests/{transfer['_id']}/confirm", json={"supportId": support_user["id"]})

    notification = run(db[STUDENT_NOTIFICATIONS].find_one({"studentId": student_id}))
    assert notification["type"] == "payment"
    assert notification["relatedId"] == transfer["_id"]

    log = run(db[SUPPORT_ACTIVITY_LOGS].find_one({}))
    assert log["action"] == "confirmed_payment"
    assert log["supportId"] == support_user["id"]


def test_reject_does_not_credit(client, db, transfer, student_id, support_user):
    response = client.put(f"/api/transfer-requests/{transfer['_id']}/reject", json={"supportId": support_user["id"]})

    assert response.status_code == 200
    assert response.json()["transferRequest"]["status"] == "rejected"
    assert balance(db, student_id) == 0

    confirm = client.put(f"/api/transfer-requests/{transfer['_id']}/confirm", json={"supportId": support_user["id"]})
    assert confirm.status_code == 409
    assert balance(db, student_id) == 0


def test_decision_requires_support_user(client, transfer, teacher_id):
    response = client.put(f"/api/transfer-requests/{transfer['_id']}/confirm", json={"supportId": teacher_id})
    assert response.status_code == 404


def test_decision_on_unknown_transfer(client, support_user):
    response = client.put("/api/transfer-requests/" + "e" * 24 + "/confirm", json={"supportId": support_user["id"]})
    assert response.status_code == 404


def test_list_transfers(client, transfer, student_id):
    assert [t["_id"] for t in client.get("/api/transfer-requests").json()] == [transfer["_id"]]
    assert [t["_id"] for t in client.get(f"/api/students/{student_id}/transfer-requests").json()] == [transfer["_id"]]
