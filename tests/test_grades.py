import json

import pytest


@pytest.fixture()
def student_with_math(client):
    student_id = client.post("/api/students", json={"name": "Ana"}).json()["id"]
    client.post(f"/api/students/{student_id}/subjects", json={"name": "Math"})
    for grade in [8.5, 7.0]:
        client.post(f"/api/students/{student_id}/subjects/Math/grades", json={"grade": grade})
    return student_id


def _grades(client, student_id, subject):
    student = client.get(f"/api/students/{student_id}").json()
    return next(s["grades"] for s in student["subjects"] if s["name"] == subject)


def test_add_grade_appends(client):
    resp = client.post("/api/students/2/subjects/Português/grades", json={"grade": 7.5})
    assert resp.status_code == 200
    assert resp.json()["subjects"][0]["grades"] == [6.0, 7.5, 7.5]
    assert _grades(client, 2, "Português") == [6.0, 7.5, 7.5]


def test_add_integer_grade(client):
    resp = client.post("/api/students/2/subjects/Português/grades", json={"grade": 10})
    assert resp.status_code == 200
    assert resp.json()["subjects"][0]["grades"][-1] == 10


@pytest.mark.parametrize("grade", [11, -1, 10.01, "7", True, None])
def test_add_invalid_grade_rejected(client, grade):
    resp = client.post("/api/students/2/subjects/Português/grades", json={"grade": grade})
    assert resp.status_code == 400
    assert _grades(client, 2, "Português") == [6.0, 7.5]


def test_add_grade_missing_body_field(client):
    resp = client.post("/api/students/2/subjects/Português/grades", json={"nota": 5})
    assert resp.status_code == 400


def test_add_grade_unknown_student_or_subject(client):
    assert client.post("/api/students/99/subjects/Math/grades", json={"grade": 5}).status_code == 404
    assert client.post("/api/students/1/subjects/History/grades", json={"grade": 5}).status_code == 404


def test_add_grade_persists(client, db_file):
    client.post("/api/students/1/subjects/Matemática/grades", json={"grade": 4.0})
    on_disk = json.loads(db_file.read_text(encoding="utf-8"))
    assert on_disk["students"][0]["subjects"][0]["grades"] == [8.5, 7.0, 9.5, 4.0]


def test_percent_encoded_subject_name_resolves(client):
    resp = client.post("/api/students/1/subjects/Matem%C3%A1tica/grades", json={"grade": 6.0})
    assert resp.status_code == 200
    assert _grades(client, 1, "Matemática") == [8.5, 7.0, 9.5, 6.0]


def test_subject_with_space_and_accent_round_trips(client):
    client.post("/api/students/1/subjects", json={"name": "Língua Portuguesa"})

    resp = client.post("/api/students/1/subjects/L%C3%ADngua%20Portuguesa/grades", json={"grade": 9.0})
    assert resp.status_code == 200
    resp = client.put("/api/students/1/subjects/L%C3%ADngua%20Portuguesa/grades/0", json={"newGrade": 8.0})
    assert resp.status_code == 200
    assert _grades(client, 1, "Língua Portuguesa") == [8.0]


def test_subject_lookup_is_case_sensitive(client):
    resp = client.post("/api/students/1/subjects/matem%C3%A1tica/grades", json={"grade": 6.0})
    assert resp.status_code == 404
    resp = client.put("/api/students/1/subjects/MATEM%C3%81TICA/grades/0", json={"newGrade": 6.0})
    assert resp.status_code == 404


def test_replace_grade(client, student_with_math):
    resp = client.put(f"/api/students/{student_with_math}/subjects/Math/grades/0", json={"newGrade": 9.0})
    assert resp.status_code == 200
    assert resp.json()["subjects"][0]["grades"] == [9.0, 7.0]
    assert _grades(client, student_with_math, "Math") == [9.0, 7.0]


def test_replace_grade_index_out_of_range(client, student_with_math):
    resp = client.put(f"/api/students/{student_with_math}/subjects/Math/grades/5", json={"newGrade": 9.0})
    assert resp.status_code == 404
    assert _grades(client, student_with_math, "Math") == [8.5, 7.0]


def test_replace_grade_bad_index(client, student_with_math):
    url = f"/api/students/{student_with_math}/subjects/Math/grades"
    assert client.put(f"{url}/-1", json={"newGrade": 9.0}).status_code == 400
    assert client.put(f"{url}/first", json={"newGrade": 9.0}).status_code == 400


@pytest.mark.parametrize("grade", [11, -1, "9"])
def test_replace_invalid_grade_rejected(client, student_with_math, grade):
    resp = client.put(f"/api/students/{student_with_math}/subjects/Math/grades/1", json={"newGrade": grade})
    assert resp.status_code == 400
    assert _grades(client, student_with_math, "Math") == [8.5, 7.0]


def test_replace_grade_requires_new_grade_field(client, student_with_math):
    resp = client.put(f"/api/students/{student_with_math}/subjects/Math/grades/0", json={"grade": 9.0})
    assert resp.status_code == 400


def test_replace_grade_unknown_student_or_subject(client):
    assert client.put("/api/students/99/subjects/Math/grades/0", json={"newGrade": 5}).status_code == 404
    assert client.put("/api/students/1/subjects/History/grades/0", json={"newGrade": 5}).status_code == 404


def test_replace_grade_rejects_snake_case_key(client, student_with_math):
    resp = client.put(f"/api/students/{student_with_math}/subjects/Math/grades/0", json={"new_grade": 1.0})
    assert resp.status_code == 400
    assert _grades(client, student_with_math, "Math") == [8.5, 7.0]
