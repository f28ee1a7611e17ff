# /tests/test_routers.py

import asyncio

from fastapi.testclient import TestClient

from gradetracker.main import create_app
from gradetracker.services.database_helpers.store_base import StorageKey
from gradetracker.services.seed_data import get_sample_data
from gradetracker.services.sync_helpers.backends import StoreMirrorBackend


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["version"] == "1.0.0"

def test_startup_seeds_empty_store(client, store):
    assert len(client.get("/api/students").json()) == 3
    assert len(store.load(StorageKey.STUDENTS)) == 3
    assert client.get("/api/sync/status").json()["source"] == "seed"

def test_restart_keeps_local_data(client, store):
    client.post("/api/students", json={"name": "Doe, Jane", "program": "BSIT", "year": 2024})

    # Second process on the same store, with no reachable mirror.
    with TestClient(create_app(store=store, backends=[])) as restarted:
        assert len(restarted.get("/api/students").json()) == 4
        assert restarted.get("/api/sync/status").json()["source"] == "local"


# --- Students ---

def test_create_student_pushes_to_mirror(client, mirror_store):
    response = client.post("/api/students", json={"name": "Doe, Jane", "program": "BSIT", "year": 2024})

    assert response.status_code == 201
    assert response.json()["studentIdNum"] == "2024-0004"
    # The background push ran once the response was sent.
    assert len(mirror_store.load("cloud_students")) == 4

def test_create_student_validation(client):
    response = client.post("/api/students", json={"name": "Doe, Jane", "program": "BSN"})
    assert response.status_code == 422

def test_get_update_delete_student(client):
    assert client.get("/api/students/999").status_code == 404

    response = client.put("/api/students/1", json={"pinCode": "1111"})
    assert response.status_code == 200
    assert response.json()["pinCode"] == "1111"
    assert client.put("/api/students/1", json={"pinCode": "11"}).status_code == 422

    assert client.delete("/api/students/1").status_code == 204
    assert client.get("/api/students/1").status_code == 404
    assert client.get("/api/enrollments", params={"studentId": 1}).json() == []
    # Deleting again removes nothing and is still accepted.
    assert client.delete("/api/students/1").status_code == 204


# --- Courses, enrollments, assessments ---

def test_course_crud(client):
    response = client.post("/api/courses", json={"code": "PHYS101", "title": "Physics", "room": "Room 12", "type": "Lab"})
    assert response.status_code == 201
    course_id = response.json()["id"]
    assert course_id == 103

    assert client.put(f"/api/courses/{course_id}", json={"room": "Room 14"}).json()["room"] == "Room 14"
    assert client.delete(f"/api/courses/{course_id}").status_code == 204
    assert client.get(f"/api/courses/{course_id}").status_code == 404

def test_course_students(client):
    students = client.get("/api/courses/101/students").json()
    assert [s["id"] for s in students] == [1, 2, 3]

def test_enrollment_errors(client):
    duplicate = client.post("/api/enrollments", json={"studentId": 1, "courseId": 101})
    assert duplicate.status_code == 409

    unknown = client.post("/api/enrollments", json={"studentId": 999, "courseId": 101})
    assert unknown.status_code == 404

def test_enroll_and_unenroll(client):
    response = client.post("/api/enrollments", json={"studentId": 3, "courseId": 102})
    assert response.status_code == 201

    grades = client.get("/api/grades", params={"studentId": 3}).json()
    assert sorted(g["assessmentId"] for g in grades) == [504, 505]
    assert {g["score"] for g in grades} == {""}

    assert client.delete(f"/api/enrollments/{response.json()['id']}").status_code == 204
    assert client.get("/api/grades", params={"studentId": 3}).json() == []

def test_assessment_endpoints(client):
    payload = {"courseId": 101, "category": "Project", "title": "Portfolio", "month": "March", "hps": 30}
    response = client.post("/api/assessments", json=payload)
    assert response.status_code == 201
    assert response.json()["id"] == 506

    march = client.get("/api/assessments", params={"courseId": 101, "month": "March"}).json()
    assert [a["title"] for a in march] == ["Portfolio"]

    assert client.post("/api/assessments", json={**payload, "courseId": 999}).status_code == 404
    assert client.post("/api/assessments", json={**payload, "title": "  "}).status_code == 422
    assert client.put("/api/assessments/506", json={"hps": 40}).json()["hps"] == 40
    assert client.delete("/api/assessments/506").status_code == 204


# --- Grades and cloud save ---

def test_grade_edit_is_local_until_save(client, store, mirror_store):
    response = client.put("/api/grades", json={"studentId": 1, "assessmentId": 502, "score": ""})
    assert response.status_code == 200
    assert response.json()["score"] == ""

    stored = {g["id"]: g["score"] for g in store.load(StorageKey.GRADES)}
    assert stored["g3"] == ""
    assert not mirror_store.contains("cloud_grades")

    report = client.post("/api/sync/save").json()
    assert [r["ok"] for r in report["results"]] == [True]
    mirrored = {g["id"]: g["score"] for g in mirror_store.load("cloud_grades")}
    assert mirrored["g3"] == ""
    assert client.get("/api/sync/status").json()["lastSync"] is not None

def test_grade_edit_errors(client):
    assert client.put("/api/grades", json={"studentId": 1, "assessmentId": 999, "score": 5}).status_code == 404
    assert client.put("/api/grades", json={"studentId": 1, "assessmentId": 501, "score": -5}).status_code == 422
    assert client.put("/api/grades", json={"studentId": 1, "assessmentId": 501, "score": "abc"}).status_code == 422
    # Numeric strings and booleans are not coerced into scores.
    assert client.put("/api/grades", json={"studentId": 1, "assessmentId": 501, "score": "95"}).status_code == 422
    assert client.put("/api/grades", json={"studentId": 1, "assessmentId": 501, "score": True}).status_code == 422
    stored = client.get("/api/grades", params={"studentId": 1, "assessmentId": 501}).json()
    assert [g["score"] for g in stored] == [95]

def test_disabled_sync_skips_mirrors(client, mirror_store):
    status = client.put("/api/sync/enabled", json={"enabled": False}).json()
    assert status["enabled"] is False

    assert client.post("/api/sync/save").json()["results"] == []
    client.post("/api/students", json={"name": "Doe, Jane", "program": "BSIT"})
    assert not mirror_store.contains("cloud_students")


# --- Login, reports, dashboard ---

def test_student_login(client):
    by_id = client.post("/api/auth/student-login", json={"login": "2024-0001"})
    assert by_id.status_code == 200
    session = by_id.json()
    assert session["student"]["name"] == "Garcia, Maria S."
    assert session["timeoutMinutes"] == 30
    assert session["expiresAt"] > session["startedAt"]

    by_pin = client.post("/api/auth/student-login", json={"login": "9012"})
    assert by_pin.json()["student"]["studentIdNum"] == "2024-0003"

    wrong_pin = client.post("/api/auth/student-login", json={"login": "2024-0001", "pin": "0000"})
    assert wrong_pin.status_code == 401
    assert wrong_pin.json()["detail"]["reason"] == "pin_mismatch"

    assert client.post("/api/auth/student-login", json={"login": " "}).status_code == 422

def test_student_report(client):
    report = client.get("/api/reports/students/1").json()
    assert report["overallAverage"] == 93
    assert report["letterGrade"] == "A"
    assert report["courses"][1]["average"] is None

    assert client.get("/api/reports/students/999").status_code == 404

def test_gradebook_and_csv_export(client):
    sheet = client.get("/api/courses/101/gradebook", params={"month": "February"}).json()
    assert [r["average"] for r in sheet["rows"]] == [93, 88, None]

    response = client.get("/api/courses/101/export")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "gradebook_math101.csv" in response.headers["content-disposition"]
    assert response.text.splitlines()[0].startswith("Student ID,Student Name,Program,Prelim Exam (100)")

    assert client.get("/api/courses/999/export").status_code == 404

def test_dashboard_summary(client):
    summary = client.get("/api/dashboard/summary").json()
    assert summary == {
        "studentCount": 3,
        "courseCount": 2,
        "enrollmentCount": 4,
        "assessmentCount": 5,
        "gradedCount": 5,
        "pendingCount": 0,
    }


# --- Backup and mirror endpoints ---

def test_backup_export_and_import(client):
    backup = client.get("/api/sync/export").json()
    backup["students"] = backup["students"][:1]

    status = client.post("/api/sync/import", json=backup)
    assert status.status_code == 200
    assert len(client.get("/api/students").json()) == 1

def test_mirror_endpoint_serves_its_own_key_space(client, store):
    backup = client.get("/api/sync/export").json()
    assert client.get("/api/mirror").json()["students"] == []

    assert client.put("/api/mirror", json=backup).status_code == 204
    assert client.get("/api/mirror").json() == backup
    # Live collections are not touched by the mirror contract.
    assert len(store.load(StorageKey.STUDENTS)) == 3

def test_mirror_endpoint_is_compatible_with_store_backend(store, mirror_store):
    """A deployment started against a populated mirror loads that mirror's data."""
    data = get_sample_data()
    data.students = data.students[:2]
    asyncio.run(StoreMirrorBackend("tier-b", mirror_store, "cloud_").upload_all(data))

    with TestClient(create_app(store=store, backends=[StoreMirrorBackend("tier-b", mirror_store, "cloud_")])) as c:
        assert c.get("/api/sync/status").json()["source"] == "tier-b"
        assert len(c.get("/api/students").json()) == 2

def test_foreign_mirror_upload_never_replaces_local_data(store, monkeypatch):
    """With the default tiers, data PUT by another deployment stays out of tier B."""
    monkeypatch.setattr("gradetracker.services.sync_service.SYNC_PRIMARY_URL", "")
    monkeypatch.setattr("gradetracker.services.sync_service.SYNC_SECONDARY_URL", "")
    foreign = get_sample_data().model_dump(mode="json")
    foreign["students"] = [dict(foreign["students"][0], name="Foreign Deployment")]

    with TestClient(create_app(store=store)) as c:
        assert c.put("/api/mirror", json=foreign).status_code == 204
        assert len(c.get("/api/students").json()) == 3

    with TestClient(create_app(store=store)) as c:
        assert c.get("/api/sync/status").json()["source"] == "local"
        names = [s["name"] for s in c.get("/api/students").json()]
        assert len(names) == 3
        assert "Foreign Deployment" not in names
