def test_list_students_hides_passwords(client, register_student):
    register_student()
    register_student()

    students = client.get("/api/students").json()

    assert len(students) == 2
    assert all("password" not in s for s in students)


def test_list_students_excludes_staff(client, student_id, teacher_id, support_user):
    assert [s["_id"] for s in client.get("/api/students").json()] == [student_id]


def test_get_student(client, student_id):
    response = client.get(f"/api/students/{student_id}")

    assert response.status_code == 200
    student = response.json()
    assert student["fullName"] == "Student 1"
    assert student["balance"] == 0
    assert "password" not in student


def test_get_teacher_id_as_student(client, teacher_id):
    assert client.get(f"/api/students/{teacher_id}").status_code == 404


def test_get_student_malformed_id(client):
    assert client.get("/api/students/123").status_code == 404


def test_ban_by_support_is_logged(client, student_id, support_user):
    response = client.post(f"/api/students/{student_id}/ban", json={
        "reason": "Sharing account", "bannedBy": support_user["id"], "bannedByType": "SupportStaff",
    })

    assert response.status_code == 200
    student = response.json()["student"]
    assert student["isBanned"] is True
    assert student["banReason"] == "Sharing account"
    assert student["bannedByType"] == "SupportStaff"
    assert "password" not in student

    logs = client.get("/api/support-activity").json()
    assert len(logs) == 1
    assert logs[0]["action"] == "banned_student"
    assert logs[0]["details"]["studentId"] == student_id


def test_banned_student_cannot_log_in(client, register_student, teacher_id):
    student_id = register_student(studentNumber="01077777777", password="pw")
    client.post(f"/api/students/{student_id}/ban", json={
        "reason": "Cheating", "bannedBy": teacher_id, "bannedByType": "Teacher",
    })

    response = client.post("/api/auth/student-login", json={"studentNumber": "01077777777", "password": "pw"})

    assert response.status_code == 403


def test_ban_with_mismatched_staff_type(client, student_id, teacher_id):
    response = client.post(f"/api/students/{student_id}/ban", json={
        "reason": "x", "bannedBy": teacher_id, "bannedByType": "SupportStaff",
    })

    assert response.status_code == 404
    assert client.get(f"/api/students/{student_id}").json()["isBanned"] is False


def test_ban_with_unknown_staff_type(client, student_id, teacher_id):
    response = client.post(f"/api/students/{student_id}/ban", json={
        "reason": "x", "bannedBy": teacher_id, "bannedByType": "Parent",
    })
    assert response.status_code == 400


def test_unban(client, student_id, teacher_id):
    client.post(f"/api/students/{student_id}/ban", json={
        "reason": "x", "bannedBy": teacher_id, "bannedByType": "Teacher",
    })

    response = client.post(f"/api/students/{student_id}/unban")

    assert response.status_code == 200
    student = response.json()["student"]
    assert student["isBanned"] is False
    assert student["banReason"] is None
    assert client.get("/api/support-activity").json() == []
