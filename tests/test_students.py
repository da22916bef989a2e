from unittest.mock import MagicMock

import pytest

from registry_service.config import settings
from registry_service.domain.entities import Variant
from registry_service.infrastructure.models import StudentORM
from registry_service.infrastructure.security import PasswordHasher
from registry_service.infrastructure.rate_limit import limiter
from registry_service.interfaces.http.deps import get_hasher, get_student_repository
from registry_service.main import app


def register(client, name="Ann", email="ann@x.com", password="abcdefgh", age=20):
    return client.post(
        "/api/student/register-student",
        json={"name": name, "email": email, "password": password, "age": age},
    )

def seed(client, count):
    ids = []
    for i in range(count):
        response = register(client, name=f"student{i:02d}", email=f"s{i:02d}@x.com", age=18 + i % 50)
        assert response.status_code == 201
        ids.append(response.json()["id"])
    return ids

def test_register_student_normalizes(client, session_factory):
    """Регистрация хранит нормализованные имя и email"""
    response = register(client, name=" Ann ", email="ANN@X.COM", password="abcdefgh", age=20)
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "ann"
    assert data["email"] == "ann@x.com"
    assert data["age"] == 20
    assert data["id"]
    assert "password" not in data
    assert "password_hash" not in data

    with session_factory() as db:
        row = db.get(StudentORM, data["id"])
        assert row.name == "ann"
        assert row.email == "ann@x.com"
        assert row.password_hash != "abcdefgh"
        assert PasswordHasher().verify("abcdefgh", row.password_hash)

def test_register_duplicate_ignores_case_and_whitespace(client):
    """Email отличается только регистром и пробелами - второй раз конфликт"""
    first = register(client, email="A@B.com")
    second = register(client, name="Other", email=" a@b.com ")
    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["detail"] == "User already exists"

@pytest.mark.parametrize("age", [17, 100, 0, -5])
def test_register_age_out_of_range(client, age):
    response = register(client, age=age)
    assert response.status_code == 400
    assert "age" in [e["field"] for e in response.json()["errors"]]

@pytest.mark.parametrize("age", [18, 99])
def test_register_age_bounds(client, age):
    assert register(client, email=f"a{age}@x.com", age=age).status_code == 201

def test_register_reports_every_invalid_field(client):
    response = register(client, name="ab", email="not-an-email", password="short", age=5)
    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation failed"
    assert {e["field"] for e in body["errors"]} == {"name", "email", "password", "age"}

def test_register_name_too_long(client):
    response = register(client, name="x" * 21)
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["name"]

def test_register_rejects_display_name_email(client):
    """Email с отображаемым именем не принимается"""
    response = register(client, email="Evil Name <ANN@X.COM>")
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["email"]

def test_register_rate_limited(client):
    """Сверх лимита регистраций в минуту - 429"""
    hasher = MagicMock()
    hasher.hash.return_value = "hashed"
    app.dependency_overrides[get_hasher] = lambda: hasher
    limiter.reset()
    limiter.enabled = True
    try:
        codes = [
            register(client, name=f"user{i:03d}", email=f"u{i}@x.com").status_code
            for i in range(settings.RATE_LIMIT_PER_MINUTE + 1)
        ]
    finally:
        limiter.enabled = False
        limiter.reset()
        del app.dependency_overrides[get_hasher]
    assert codes[:-1] == [201] * settings.RATE_LIMIT_PER_MINUTE
    assert codes[-1] == 429

def test_register_internal_error_is_opaque(client):
    """Сбой хранилища -> 500 без деталей"""
    repo = MagicMock()
    repo.variant = Variant.STUDENT
    repo.find_by_email.side_effect = RuntimeError("connection refused to db-host:5432")
    app.dependency_overrides[get_student_repository] = lambda: repo
    try:
        response = register(client)
    finally:
        del app.dependency_overrides[get_student_repository]
    assert response.status_code == 500
    assert response.json() == {"detail": "An error occurred while processing your request."}

def test_list_students_empty(client):
    response = client.get("/api/student/get-students")
    assert response.status_code == 404
    assert response.json()["detail"] == "No students found"

def test_list_students_second_page(client):
    """pageSize=10, pageNumber=2 -> записи 11-20"""
    seed(client, 25)
    response = client.get("/api/student/get-students?pageNumber=2&pageSize=10")
    assert response.status_code == 200
    names = [s["name"] for s in response.json()]
    assert names == [f"student{i:02d}" for i in range(10, 20)]

def test_list_students_defaults(client):
    seed(client, 12)
    response = client.get("/api/student/get-students")
    assert response.status_code == 200
    assert len(response.json()) == 10
    assert response.json()[0]["name"] == "student00"

def test_list_students_page_out_of_range(client):
    seed(client, 5)
    response = client.get("/api/student/get-students?pageNumber=2&pageSize=10")
    assert response.status_code == 404
    assert response.json()["detail"] == "Page 2 is out of range"

def test_list_students_sort_by_age(client):
    register(client, name="old", email="old@x.com", age=60)
    register(client, name="young", email="young@x.com", age=18)
    register(client, name="mid", email="mid@x.com", age=30)
    response = client.get("/api/student/get-students?sortField=Age")
    assert response.status_code == 200
    assert [s["age"] for s in response.json()] == [18, 30, 60]

def test_list_students_rejects_unknown_sort_field(client):
    seed(client, 1)
    response = client.get("/api/student/get-students?sortField=password_hash")
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["sortField"]

def test_list_students_invalid_pagination(client):
    response = client.get("/api/student/get-students?pageNumber=0&pageSize=101")
    assert response.status_code == 400
    assert {e["field"] for e in response.json()["errors"]} == {"pageNumber", "pageSize"}

    response = client.get("/api/student/get-students?pageNumber=abc")
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["pageNumber"]

def test_list_students_page_number_too_large(client):
    """Огромный pageNumber - ошибка валидации, а не сбой хранилища"""
    seed(client, 1)
    response = client.get("/api/student/get-students?pageNumber=100000000000000000000&pageSize=10")
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["pageNumber"]

def test_get_student(client):
    student_id = register(client).json()["id"]
    response = client.get(f"/api/student/get-student/{student_id}")
    assert response.status_code == 200
    assert response.json()["email"] == "ann@x.com"

def test_get_student_not_found(client):
    response = client.get("/api/student/get-student/doesnotexist")
    assert response.status_code == 404
    assert response.json()["detail"] == "Student not found"

def test_update_student_replaces_all_fields(client):
    student_id = register(client).json()["id"]
    response = client.put(
        f"/api/student/update-student/{student_id}",
        json={"name": " ANNA ", "email": "Anna@Y.com", "password": "otherpass1", "age": 33},
    )
    assert response.status_code == 204
    assert response.content == b""

    data = client.get(f"/api/student/get-student/{student_id}").json()
    assert data == {"id": student_id, "name": "anna", "email": "anna@y.com", "age": 33}

def test_update_student_idempotent(client, session_factory):
    """Повтор того же payload не меняет сохранённое состояние"""
    student_id = register(client).json()["id"]
    payload = {"name": "Bea", "email": "BEA@x.com", "password": "newsecret", "age": 25}

    assert client.put(f"/api/student/update-student/{student_id}", json=payload).status_code == 204
    with session_factory() as db:
        row = db.get(StudentORM, student_id)
        first = (row.name, row.email, row.age, row.password_hash)

    assert client.put(f"/api/student/update-student/{student_id}", json=payload).status_code == 204
    with session_factory() as db:
        row = db.get(StudentORM, student_id)
        second = (row.name, row.email, row.age, row.password_hash)

    assert first == second
    assert first[:3] == ("bea", "bea@x.com", 25)

def test_update_student_not_found(client):
    response = client.put(
        "/api/student/update-student/doesnotexist",
        json={"name": "Ann", "email": "ann@x.com", "password": "abcdefgh", "age": 20},
    )
    assert response.status_code == 404

def test_update_student_validates_payload(client):
    student_id = register(client).json()["id"]
    response = client.put(
        f"/api/student/update-student/{student_id}",
        json={"name": "Ann", "email": "ann@x.com", "password": "abcdefgh", "age": 120},
    )
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["age"]

def test_update_student_email_taken(client):
    register(client, email="first@x.com")
    second_id = register(client, email="second@x.com").json()["id"]
    response = client.put(
        f"/api/student/update-student/{second_id}",
        json={"name": "Ann", "email": "FIRST@x.com", "password": "abcdefgh", "age": 20},
    )
    assert response.status_code == 409

def test_delete_student(client):
    student_id = register(client).json()["id"]
    response = client.delete(f"/api/student/delete-student/{student_id}")
    assert response.status_code == 200
    assert response.json() == {"acknowledged": True, "deleted_count": 1}
    assert client.get(f"/api/student/get-student/{student_id}").status_code == 404

def test_delete_student_not_found(client):
    """Удаление несуществующего id - не ошибка"""
    response = client.delete("/api/student/delete-student/doesnotexist")
    assert response.status_code == 200
    assert response.json() == {"acknowledged": True, "deleted_count": 0}

def test_student_health(client):
    response = client.get("/api/student/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
