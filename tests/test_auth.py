import jwt

from models import db
from models.users import User


def register(client, **overrides):
    body = {"name": "Nia", "email": "nia@example.com", "password": "pa55word", "role": "student"}
    body.update(overrides)
    return client.post("/api/auth/register", json=body)


def test_register_returns_token_and_user(client):
    resp = register(client)
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["user"]["email"] == "nia@example.com"
    assert data["user"]["role"] == "student"
    assert "password_hash" not in data["user"]
    assert data["token"]


def test_register_rejects_duplicates_and_bad_roles(client):
    assert register(client).status_code == 201
    assert register(client).status_code == 400
    assert register(client, email="x@example.com", role="superuser").status_code == 400
    assert register(client, email="y@example.com", password="").status_code == 400


def test_password_is_stored_hashed(client):
    register(client)
    user = User.query.filter_by(email="nia@example.com").one()
    assert user.password_hash != "pa55word"
    assert user.check_password("pa55word")


def test_login_and_me(client):
    register(client, role="admin")
    resp = client.post("/api/auth/login", json={"email": "nia@example.com", "password": "pa55word"})
    assert resp.status_code == 200
    token = resp.get_json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json()["role"] == "admin"


def test_login_with_wrong_password(client):
    register(client)
    resp = client.post("/api/auth/login", json={"email": "nia@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid credentials"}


def test_missing_or_invalid_token_is_unauthorized(client, app):
    assert client.get("/api/quiz").status_code == 401
    assert client.get("/api/quiz", headers={"Authorization": "Bearer garbage"}).status_code == 401

    forged = jwt.encode({"user_id": 1, "role": "admin"}, "some-other-secret", algorithm="HS256")
    assert client.get("/api/quiz", headers={"Authorization": f"Bearer {forged}"}).status_code == 401


def test_cookie_token_is_accepted(client):
    resp = register(client)
    token = resp.get_json()["token"]
    client.set_cookie("access_token", token)
    assert client.get("/api/auth/me").status_code == 200


def test_create_admin_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-admin", "root@example.com", "s3cret", "--name", "Root"])
    assert "Admin created" in result.output

    db.session.expire_all()
    user = User.query.filter_by(email="root@example.com").one()
    assert user.role == "admin"
    assert user.check_password("s3cret")

    result = runner.invoke(args=["create-admin", "root@example.com", "changed"])
    assert "Password updated" in result.output
    db.session.expire_all()
    assert User.query.filter_by(email="root@example.com").one().check_password("changed")


def test_init_db_command(app):
    result = app.test_cli_runner().invoke(args=["init-db"])
    assert "Database tables created." in result.output
