# tests/test_grades_api.py
ADMIN = {"X-User-Role": "ADMIN"}
TEACHER = {"X-User-Role": "TEACHER"}
PARENT = {"X-User-Role": "PARENT"}


def _body(seed, **scores):
    return {
        "student_id": seed.ana_id,
        "class_id": seed.class_id,
        "subject_id": seed.math_id,
        "term": 1,
        **scores,
    }


def _lookup(client, seed, term=1):
    return client.get(
        "/v1/grades/lookup",
        params={"student_id": seed.ana_id, "class_id": seed.class_id, "subject_id": seed.math_id, "term": term},
        headers=TEACHER,
    )


def test_submit_then_resubmit_updates_in_place(client, seed):
    r1 = client.put("/v1/grades/", json=_body(seed, test_score=8, work_score=6, participation_score=10), headers=TEACHER)
    assert r1.status_code == 200
    first = r1.json()["data"]
    assert first["value"] == 8.0

    r2 = client.put("/v1/grades/", json=_body(seed, test_score=5, work_score=5, participation_score=5), headers=TEACHER)
    assert r2.status_code == 200
    second = r2.json()["data"]
    assert second["id"] == first["id"]
    assert second["value"] == 5.0

    looked_up = _lookup(client, seed)
    assert looked_up.status_code == 200
    assert looked_up.json()["data"]["value"] == 5.0


def test_out_of_range_score_returns_field_error_and_writes_nothing(client, seed):
    r = client.put("/v1/grades/", json=_body(seed, test_score=11), headers=ADMIN)
    assert r.status_code == 422
    error = r.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "test_score" in error["fields"]

    missing = _lookup(client, seed)
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"


def test_unknown_student_returns_not_found(client, seed):
    r = client.put("/v1/grades/", json={**_body(seed, value=7), "student_id": 4242}, headers=ADMIN)
    assert r.status_code == 404
    assert r.json()["success"] is False


def test_term_is_limited_by_school_periodicity(client, seed):
    settings_body = {
        "school_name": "Escola Modelo Luma",
        "current_year": "2025",
        "passing_grade": 7.0,
        "periodicity": "SEMESTRAL",
    }
    assert client.put("/v1/settings/", json=settings_body, headers=ADMIN).status_code == 200

    ok = client.put("/v1/grades/", json={**_body(seed, value=7), "term": 2}, headers=TEACHER)
    assert ok.status_code == 200

    rejected = client.put("/v1/grades/", json={**_body(seed, value=7), "term": 3}, headers=TEACHER)
    assert rejected.status_code == 422
    assert "term" in rejected.json()["error"]["fields"]


def test_grade_submission_requires_staff_role(client, seed):
    assert client.put("/v1/grades/", json=_body(seed, value=7)).status_code == 401
    assert client.put("/v1/grades/", json=_body(seed, value=7), headers=PARENT).status_code == 403
    assert client.put("/v1/grades/", json=_body(seed, value=7), headers={"X-User-Role": "janitor"}).status_code == 401


def test_grade_sheet_lists_roster_with_grades(client, seed):
    client.put("/v1/grades/", json=_body(seed, test_score=9, work_score=8, participation_score=10), headers=TEACHER)

    r = client.get(
        "/v1/grades/sheet",
        params={"class_id": seed.class_id, "subject_id": seed.math_id, "term": 1},
        headers=TEACHER,
    )
    assert r.status_code == 200
    rows = r.json()["data"]["rows"]
    assert [row["student_name"] for row in rows] == ["Ana Souza", "Bruno Lima"]
    assert rows[0]["grade"]["value"] == 9.0
    assert rows[1]["grade"] is None


def test_grade_sheet_for_unknown_class_is_not_found(client, seed):
    r = client.get("/v1/grades/sheet", params={"class_id": 999, "subject_id": seed.math_id}, headers=ADMIN)
    assert r.status_code == 404
