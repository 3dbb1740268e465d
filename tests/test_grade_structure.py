VALID = {
    "class_participation": {"total": 60, "components": [
        {"id": "q", "name": "Quizzes", "percentage": 30},
        {"id": "r", "name": "Recitation", "percentage": 30},
    ]},
    "exam": {"total": 40, "components": [
        {"id": "m", "name": "Midterm Exam", "percentage": 20},
        {"id": "f", "name": "Final Exam", "percentage": 20},
    ]},
}


def test_get_grade_structure_defaults(client):
    resp = client.get("/api/grade-structure")
    assert resp.status_code == 200
    data = resp.json()
    assert data["class_participation"]["total"] == 70
    assert [c["name"] for c in data["class_participation"]["components"]] == ["Quizzes", "Activities", "Attendance"]
    assert data["exam"]["total"] == 30


def test_get_default_grade_structure(client):
    client.put("/api/grade-structure", json=VALID)
    resp = client.get("/api/grade-structure/default")
    assert resp.json()["class_participation"]["total"] == 70


def test_put_then_get(client):
    resp = client.put("/api/grade-structure", json=VALID)
    assert resp.status_code == 200

    data = client.get("/api/grade-structure").json()
    assert data["class_participation"]["total"] == 60
    assert data["class_participation"]["components"][1]["name"] == "Recitation"


def test_put_rejects_component_mismatch_and_keeps_saved(client):
    client.put("/api/grade-structure", json=VALID)

    broken = {**VALID, "exam": {"total": 40, "components": [
        {"id": "m", "name": "Midterm Exam", "percentage": 20.5},
        {"id": "f", "name": "Final Exam", "percentage": 20},
    ]}}
    resp = client.put("/api/grade-structure", json=broken)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Exam components must sum to 40%"

    saved = client.get("/api/grade-structure").json()
    assert saved["exam"]["components"][0]["percentage"] == 20


def test_put_rejects_duplicate_component_ids(client):
    broken = {**VALID, "class_participation": {"total": 60, "components": [
        {"id": "q", "name": "Quizzes", "percentage": 30},
        {"id": "q", "name": "Recitation", "percentage": 30},
    ]}}
    resp = client.put("/api/grade-structure", json=broken)
    assert resp.status_code == 400
    assert "unique" in resp.json()["detail"]

    assert client.get("/api/grade-structure").json()["class_participation"]["total"] == 70


def test_put_rejects_totals_not_100(client):
    broken = {
        "class_participation": {"total": 50, "components": [{"id": "q", "name": "Quizzes", "percentage": 50}]},
        "exam": {"total": 40, "components": [{"id": "m", "name": "Midterm", "percentage": 40}]},
    }
    resp = client.put("/api/grade-structure", json=broken)
    assert resp.status_code == 400
    assert "100%" in resp.json()["detail"]

    assert client.get("/api/grade-structure").json()["class_participation"]["total"] == 70
