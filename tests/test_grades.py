def test_get_grades_empty(client, class_id):
    resp = client.get(f"/me/classes/{class_id}/grades")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "grades": []}


def test_post_grade_then_get(client, class_id):
    resp = client.post(f"/me/classes/{class_id}/grades", json={
        "title": " Quiz 1 ",
        "points_earned": 7,
        "points_possible": 8,
        "category": "Quizzes",
    })
    assert resp.status_code == 200
    grade = resp.json()["grade"]
    assert grade["title"] == "Quiz 1"
    assert grade["class_id"] == class_id

    grades = client.get(f"/me/classes/{class_id}/grades").json()["grades"]
    assert len(grades) == 1
    assert grades[0]["points_earned"] == 7.0
    assert grades[0]["category"] == "Quizzes"


def test_post_grade_requires_title(client, class_id):
    resp = client.post(f"/me/classes/{class_id}/grades", json={"title": "", "points_earned": 1, "points_possible": 2})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Title is required."


def test_post_grade_requires_points(client, class_id):
    resp = client.post(f"/me/classes/{class_id}/grades", json={"title": "HW", "points_earned": 1})
    assert resp.status_code == 400
    assert "required" in resp.json()["detail"]


def test_post_grade_unknown_class(client):
    resp = client.post("/me/classes/missing/grades", json={"title": "HW", "points_earned": 1, "points_possible": 2})
    assert resp.status_code == 404


def test_grades_ordered_by_due_date(client, class_id):
    url = f"/me/classes/{class_id}/grades"
    client.post(url, json={"title": "undated", "points_earned": 1, "points_possible": 1})
    client.post(url, json={"title": "late", "points_earned": 1, "points_possible": 1, "due_date": "2025-10-01"})
    client.post(url, json={"title": "early", "points_earned": 1, "points_possible": 1, "due_date": "2025-09-01"})

    titles = [g["title"] for g in client.get(url).json()["grades"]]
    assert titles == ["early", "late", "undated"]


def test_update_grade(client, class_id):
    grade = client.post(f"/me/classes/{class_id}/grades", json={
        "title": "HW 1", "points_earned": 3, "points_possible": 10, "category": "Homework",
    }).json()["grade"]

    resp = client.put(f"/me/grades/{grade['id']}", json={"points_earned": 9, "category": None})
    assert resp.status_code == 200
    updated = resp.json()["grade"]
    assert updated["points_earned"] == 9.0
    assert updated["category"] is None
    assert updated["title"] == "HW 1"


def test_update_grade_rejects_blank_title(client, class_id):
    grade = client.post(f"/me/classes/{class_id}/grades", json={
        "title": "HW 1", "points_earned": 3, "points_possible": 10,
    }).json()["grade"]
    resp = client.put(f"/me/grades/{grade['id']}", json={"title": "  "})
    assert resp.status_code == 400


def test_update_and_delete_unknown_grade(client):
    assert client.put("/me/grades/nope", json={"title": "x"}).status_code == 404
    assert client.delete("/me/grades/nope").status_code == 404


def test_delete_grade(client, class_id):
    url = f"/me/classes/{class_id}/grades"
    keep = client.post(url, json={"title": "keep", "points_earned": 1, "points_possible": 1}).json()["grade"]
    drop = client.post(url, json={"title": "drop", "points_earned": 1, "points_possible": 1}).json()["grade"]

    assert client.delete(f"/me/grades/{drop['id']}").status_code == 200

    remaining = client.get(url).json()["grades"]
    assert [g["id"] for g in remaining] == [keep["id"]]


def test_post_grade_rejects_non_finite_points(client, class_id):
    url = f"/me/classes/{class_id}/grades"
    for earned, possible in (("nan", 10), (5, "inf"), ("-inf", 10)):
        resp = client.post(url, json={"title": "HW", "points_earned": earned, "points_possible": possible})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Points must be finite numbers."

    resp = client.get(url)
    assert resp.status_code == 200
    assert resp.json()["grades"] == []


def test_update_grade_rejects_non_finite_points(client, class_id):
    url = f"/me/classes/{class_id}/grades"
    grade = client.post(url, json={"title": "HW", "points_earned": 5, "points_possible": 10}).json()["grade"]

    resp = client.put(f"/me/grades/{grade['id']}", json={"points_possible": "nan"})
    assert resp.status_code == 400

    grades = client.get(url).json()["grades"]
    assert grades[0]["points_possible"] == 10.0
    assert client.get(f"/me/classes/{class_id}/summary").json()["overallPercent"] == 50.0


def test_blank_due_date_sorts_with_undated(client, class_id):
    url = f"/me/classes/{class_id}/grades"
    blank = client.post(url, json={"title": "blank", "points_earned": 1, "points_possible": 1, "due_date": "  "})
    assert blank.json()["grade"]["due_date"] is None
    client.post(url, json={"title": "dated", "points_earned": 1, "points_possible": 1, "due_date": "2025-09-01"})

    titles = [g["title"] for g in client.get(url).json()["grades"]]
    assert titles == ["dated", "blank"]


def test_update_grade_clears_blank_due_date(client, class_id):
    grade = client.post(f"/me/classes/{class_id}/grades", json={
        "title": "HW", "points_earned": 1, "points_possible": 1, "due_date": "2025-09-01",
    }).json()["grade"]
    resp = client.put(f"/me/grades/{grade['id']}", json={"due_date": ""})
    assert resp.json()["grade"]["due_date"] is None
