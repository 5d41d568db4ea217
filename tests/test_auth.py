import pytest

from api.routes import auth
from core.exceptions import UserAlreadyExistsError, ValidationError
from utils.user_manager import UserManager


def _signup_payload(**overrides):
    payload = {
        "email": "Ana.Reyes@Example.edu",
        "studentId": "2022-00100",
        "firstName": "Ana",
        "lastName": "Reyes",
        "password": "s3cret-pass",
    }
    payload.update(overrides)
    return payload


def test_signup_creates_student(client):
    response = client.post("/api/signup", json=_signup_payload())

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    user = data["user"]
    assert user["email"] == "ana.reyes@example.edu"
    assert user["studentId"] == "2022-00100"
    assert user["role"] == "student"
    assert "createdAt" in user
    assert "passwordHash" not in user
    assert "password_hash" not in user


def test_signup_duplicate_email(client):
    client.post("/api/signup", json=_signup_payload())

    response = client.post(
        "/api/signup",
        json=_signup_payload(email="ana.reyes@example.edu", studentId="2022-00999"),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Email already registered"}


def test_signup_duplicate_student_id(client):
    client.post("/api/signup", json=_signup_payload())

    response = client.post("/api/signup", json=_signup_payload(email="other@example.edu"))

    assert response.status_code == 400
    assert response.json()["error"] == "Student ID already registered"


def test_signup_missing_field(client):
    payload = _signup_payload()
    del payload["lastName"]

    response = client.post("/api/signup", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "All fields are required"


def test_login_and_me(client):
    client.post("/api/signup", json=_signup_payload())

    response = client.post(
        "/api/login", json={"email": "ANA.REYES@example.edu", "password": "s3cret-pass"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"]["firstName"] == "Ana"
    token = data["accessToken"]

    me = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "ana.reyes@example.edu"


def test_login_wrong_password(client):
    client.post("/api/signup", json=_signup_payload())

    response = client.post(
        "/api/login", json={"email": "ana.reyes@example.edu", "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Incorrect email or password"}


def test_login_unknown_email(client):
    response = client.post("/api/login", json={"email": "ghost@example.edu", "password": "x"})

    assert response.status_code == 401


def test_login_missing_fields(client):
    response = client.post("/api/login", json={"email": "ana.reyes@example.edu"})

    assert response.status_code == 400


def test_me_requires_token(client):
    response = client.get("/api/me")

    assert response.status_code == 401
    assert "error" in response.json()


def test_me_rejects_garbage_token(client):
    response = client.get("/api/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid authentication credentials"


def test_token_for_deleted_user_is_rejected(client, headers_for):
    from schemas.user import User

    ghost = User(email="ghost@example.edu", first_name="G", last_name="H", role="admin")

    response = client.get("/api/me", headers=headers_for(ghost))

    assert response.status_code == 401
    assert response.json()["error"] == "User not found"


def test_logout(client):
    response = client.post("/api/logout")

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_seed_admin_not_configured(client):
    response = client.post(
        "/api/seed-admin",
        json={"adminToken": "x", "email": "boss@example.edu", "password": "pw123456"},
    )

    assert response.status_code == 400


def test_seed_admin(client, monkeypatch):
    monkeypatch.setattr(auth, "ADMIN_TOKEN", "let-me-in")

    wrong = client.post(
        "/api/seed-admin",
        json={"adminToken": "guess", "email": "boss@example.edu", "password": "pw123456"},
    )
    assert wrong.status_code == 401

    response = client.post(
        "/api/seed-admin",
        json={
            "adminToken": "let-me-in",
            "email": "boss@example.edu",
            "password": "pw123456",
            "firstName": "Head",
            "lastName": "Registrar",
        },
    )
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "admin"
    assert response.json()["user"]["studentId"] is None


def test_ensure_admin_is_idempotent(user_manager):
    first = user_manager.ensure_admin("admin@example.com", "123456")
    second = user_manager.ensure_admin("admin@example.com", "other")

    assert first.id == second.id
    assert first.role == "admin"
    assert user_manager.authenticate("admin@example.com", "123456") is not None


def test_ensure_admin_refuses_student_email(user_manager, student):
    with pytest.raises(UserAlreadyExistsError):
        user_manager.ensure_admin(student.email, "adminpass123")

    assert user_manager.get_user_by_email(student.email).role == "student"


def test_password_is_hashed(user_manager, student):
    assert student.password_hash != "studentpass123"
    assert user_manager.verify_password("studentpass123", student.password_hash)
    assert not user_manager.verify_password("wrong", student.password_hash)


def test_signup_validation_in_manager(user_manager, student):
    with pytest.raises(ValidationError):
        user_manager.signup_student("a@b.c", None, "A", "B", "pw")
    with pytest.raises(UserAlreadyExistsError):
        user_manager.signup_student("JUAN@example.edu", "2099-1", "J", "D", "pw")


def test_create_user_rejects_unknown_role(user_manager):
    with pytest.raises(ValidationError):
        user_manager.create_user("staff@example.edu", "pw123456", "Staff", "Member", "staff")


def test_default_admin_bootstrap(monkeypatch, session_factory, db_session):
    import app as app_module

    monkeypatch.setattr(app_module, "SessionLocal", session_factory)
    monkeypatch.setattr(app_module, "DEFAULT_ADMIN_EMAIL", "boot@example.edu")
    monkeypatch.setattr(app_module, "DEFAULT_ADMIN_PASSWORD", "bootpass123")

    app_module.initialize_default_admin()
    app_module.initialize_default_admin()

    admin = UserManager(db_session).get_user_by_email("boot@example.edu")
    assert admin is not None
    assert admin.role == "admin"
    assert admin.full_name == "Admin User"


def test_default_admin_skipped_without_password(monkeypatch, session_factory, db_session):
    import app as app_module

    monkeypatch.setattr(app_module, "SessionLocal", session_factory)
    monkeypatch.setattr(app_module, "DEFAULT_ADMIN_PASSWORD", None)

    app_module.initialize_default_admin()

    assert UserManager(db_session).get_user_by_email(app_module.DEFAULT_ADMIN_EMAIL) is None
