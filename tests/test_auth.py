from careerconnect.core.auth import create_access_token, decode_token


def test_register_and_login(client, make_student):
    make_student("alice")

    response = client.post("/login", json={"username": "alice", "password": "secret123"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["username"] == "alice"
    assert body["user"]["department"] == "CSE"
    assert "password" not in body["user"]
    assert body["token_type"] == "bearer"

    payload = decode_token(body["access_token"])
    assert payload["sub"] == "alice"
    assert payload["role"] == "student"


def test_register_duplicate_username(client, make_student):
    make_student("alice")
    response = client.post("/register", json={
        "name": "Other", "email": "other@example.com", "phone": "1",
        "username": "alice", "password": "x"
    })
    assert response.status_code == 400
    assert response.json() == {"message": "Username already exists"}


def test_register_validation_error_uses_message_shape(client):
    response = client.post("/register", json={"name": "No Email", "username": "bob"})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid request data"
    fields = {e["field"] for e in body["errors"]}
    assert "body.email" in fields


def test_login_wrong_password(client, make_student):
    make_student("alice")
    response = client.post("/login", json={"username": "alice", "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid username or password"}


def test_login_unknown_user(client):
    response = client.post("/login", json={"username": "ghost", "password": "x"})
    assert response.status_code == 401


def test_me_returns_principal(client, make_student):
    make_student("alice")
    token = client.post("/login", json={"username": "alice", "password": "secret123"}).json()["access_token"]

    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json() == {"username": "alice", "role": "student"}


def test_me_rejects_bad_token(client):
    response = client.get("/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid or expired token"}


def test_me_rejects_unknown_role(client):
    token = create_access_token({"sub": "mallory", "role": "root"})
    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
