from fastapi.testclient import TestClient

from app.schemas.token import AuthResponse
from app.schemas.user import User
from tests.helpers.asserts import api_call, assert_error, data_of
from tests.helpers.contract import validate_response_schema
from tests.conftest import TEST_PASSWORD


def test_register_returns_user_and_token(client: TestClient):
    response = api_call(client, "POST", "/auth/register", json={
        "name": "  New Learner ",
        "email": "new.learner@test.com",
        "password": "supersecret1",
    })

    assert response.status_code == 201
    data = data_of(response)
    validate_response_schema(data, AuthResponse)
    assert data["user"]["name"] == "New Learner"
    assert data["user"]["role"] == "STUDENT"
    assert data["token"]["token_type"] == "bearer"
    assert "hashed_password" not in data["user"]


def test_register_rejects_admin_role(client: TestClient):
    response = client.post("/auth/register", json={
        "name": "Sneaky", "email": "sneaky@test.com", "password": "supersecret1", "role": "ADMIN"
    })

    body = assert_error(response, 422, code="VALIDATION_ERROR")
    assert "validation_errors" in body["error"]["details"]


def test_register_duplicate_email(client: TestClient, student):
    response = client.post("/auth/register", json={
        "name": "Copy Cat", "email": student.email, "password": "supersecret1"
    })

    assert_error(response, 409, code="CONFLICT")


def test_login_and_profile(client: TestClient, instructor):
    response = api_call(client, "POST", "/auth/login", json={"email": instructor.email, "password": TEST_PASSWORD})
    token = data_of(response)["token"]["access_token"]

    profile = api_call(client, "GET", "/auth/profile", headers={"Authorization": f"Bearer {token}"})
    data = data_of(profile)
    validate_response_schema(data, User)
    assert data["id"] == instructor.id
    assert data["role"] == "INSTRUCTOR"


def test_login_with_wrong_password(client: TestClient, student):
    response = client.post("/auth/login", json={"email": student.email, "password": "not-the-password"})

    assert_error(response, 401, code="UNAUTHORIZED", message="Invalid email or password")


def test_login_deactivated_account(client: TestClient, user_factory):
    inactive = user_factory(is_active=False)

    response = client.post("/auth/login", json={"email": inactive.email, "password": TEST_PASSWORD})

    assert_error(response, 401, message="Account is deactivated")


def test_profile_requires_token(client: TestClient):
    response = client.get("/auth/profile")

    assert response.status_code in (401, 403)
    assert response.json()["success"] is False


def test_invalid_token_is_rejected(client: TestClient):
    response = client.get("/auth/profile", headers={"Authorization": "Bearer not-a-jwt"})

    assert_error(response, 401, message="Could not validate credentials")


def test_update_profile(client: TestClient, student, auth_headers):
    response = api_call(client, "PUT", "/auth/profile", headers=auth_headers(student), json={
        "name": "Ada Renamed", "bio": "Learning every day"
    })

    data = data_of(response)
    assert data["name"] == "Ada Renamed"
    assert data["bio"] == "Learning every day"


def test_change_password(client: TestClient, student, auth_headers):
    headers = auth_headers(student)

    wrong = client.put("/auth/change-password", headers=headers, json={
        "current_password": "incorrect-pass", "new_password": "brandnewpass1"
    })
    assert_error(wrong, 400, message="Current password is incorrect")

    api_call(client, "PUT", "/auth/change-password", headers=headers, json={
        "current_password": TEST_PASSWORD, "new_password": "brandnewpass1"
    })
    login = client.post("/auth/login", json={"email": student.email, "password": "brandnewpass1"})
    assert login.status_code == 200
