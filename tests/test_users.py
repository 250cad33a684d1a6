"""Tests for user signup, login and listing."""
from sqlalchemy.exc import OperationalError

from billing.models.user import User
from billing.services.user_service import UserService


def signup(client, **overrides):
    body = {
        "username": "asha",
        "email": "asha@example.com",
        "password": "S3cret!",
        "phone": "9876543210",
    }
    body.update(overrides)
    return client.post("/api/signup", json=body)


def test_signup(client):
    """Test registering a new user."""
    response = signup(client)

    assert response.status_code == 201
    assert response.json() == {"message": "Signup successful"}


def test_signup_duplicate_username(client):
    """Test signing up twice with the same username is rejected."""
    signup(client)

    response = signup(client, email="other@example.com")

    assert response.status_code == 400
    assert response.json()["message"] == "User already exists"
    assert len(client.get("/api/users").json()) == 1


def test_signup_duplicate_email(client):
    """Test signing up twice with the same email is rejected."""
    signup(client)

    response = signup(client, username="someone-else")

    assert response.status_code == 400
    assert len(client.get("/api/users").json()) == 1


def test_signup_missing_field(client):
    """Test signup without a phone number fails validation."""
    response = client.post(
        "/api/signup",
        json={"username": "asha", "email": "asha@example.com", "password": "x"}
    )

    assert response.status_code == 422


def test_password_stored_hashed(client, db_session):
    """Test the stored password is never the plaintext."""
    signup(client)

    user = db_session.query(User).filter(User.username == "asha").first()
    assert user.password_hash != "S3cret!"


def test_login(client):
    """Test login with correct credentials."""
    signup(client)

    response = client.post("/api/login", json={"username": "asha", "password": "S3cret!"})

    assert response.status_code == 200
    assert response.json() == {"message": "Login successful"}


def test_login_unknown_user(client):
    """Test login for a username that was never registered."""
    response = client.post("/api/login", json={"username": "nobody", "password": "x"})

    assert response.status_code == 400
    assert response.json()["message"] == "User not found"


def test_login_wrong_password(client):
    """Test login is case-sensitive on the password."""
    signup(client)

    response = client.post("/api/login", json={"username": "asha", "password": "s3cret!"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_list_users_excludes_password(client):
    """Test no listed user carries a password field."""
    signup(client)
    signup(client, username="ravi", email="ravi@example.com", password="hunter2")

    response = client.get("/api/users")

    assert response.status_code == 200
    users = response.json()
    assert {u["username"] for u in users} == {"asha", "ravi"}
    for user in users:
        assert "password" not in user
        assert "password_hash" not in user
        assert "id" in user


def test_signup_database_failure(client, monkeypatch):
    """Test a persistence failure on signup returns a generic server error."""
    def broken(self, user_data):
        raise OperationalError("INSERT", {}, Exception("database is down"))

    monkeypatch.setattr(UserService, "signup", broken)

    response = signup(client)

    assert response.status_code == 500
    assert response.json() == {"error": "Signup failed"}
