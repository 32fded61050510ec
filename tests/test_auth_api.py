def test_register_login_verify(client):
    response = client.post(
        "/auth/register", json={"email": "alice@example.com", "password": "secret"}
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Registration successful"}

    response = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "secret"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == "alice@example.com"

    response = client.get(
        "/auth/verify", headers={"Authorization": f"Bearer {body['token']}"}
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "user": body["user"]}


def test_duplicate_registration_is_a_bad_request(client, make_user):
    make_user("alice@example.com")

    response = client.post(
        "/auth/register", json={"email": "Alice@Example.com", "password": "another"}
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_malformed_registration(client):
    assert client.post("/auth/register", json={"email": "nope", "password": "x"}).status_code == 400
    assert client.post("/auth/register", json={"email": "a@b.io"}).status_code == 400


def test_password_longer_than_bcrypt_accepts(client, make_user):
    response = client.post(
        "/auth/register", json={"email": "long@example.com", "password": "x" * 80}
    )
    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "Password must be at most 72 bytes",
    }

    # Multi-byte characters count by their encoded size
    response = client.post(
        "/auth/register", json={"email": "wide@example.com", "password": "é" * 40}
    )
    assert response.status_code == 400

    make_user("short@example.com", password="x" * 72)
    response = client.post(
        "/auth/login", json={"email": "short@example.com", "password": "x" * 80}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid credentials"


def test_bad_credentials(client, make_user):
    make_user("alice@example.com", password="right")

    response = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "wrong"}
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid credentials"}


def test_verify_requires_a_valid_token(client):
    assert client.get("/auth/verify").status_code == 401
    response = client.get("/auth/verify", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_logout_revokes_only_that_session(client, make_user):
    alice = make_user("alice@example.com", password="pw")
    response = client.post("/auth/login", json={"email": "alice@example.com", "password": "pw"})
    second_device = {"Authorization": f"Bearer {response.json()['token']}"}

    response = client.post("/auth/logout", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["success"] is True

    assert client.get("/auth/verify", headers=alice["headers"]).status_code == 401
    assert client.get("/auth/verify", headers=second_device).status_code == 200


def test_health_and_correlation_id(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert response.headers["X-Correlation-ID"] == "abc-123"


def test_metrics_endpoint(client):
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "chat_live_connections" in response.text
