"""Tests for user account and profile endpoints."""


class TestRegisterAndLogin:
    """Registration and login issue bearer tokens."""

    def test_register_returns_token(self, client):
        response = client.post(
            "/users/register",
            json={"name": "Alice", "username": "alice", "email": "alice@gmail.com", "password": "secret123"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "alice"
        assert data["email"] == "alice@gmail.com"
        assert data["token"]
        assert "password" not in data
        assert "passwordHash" not in data

    def test_duplicate_email(self, client, alice):
        response = client.post(
            "/users/register",
            json={"name": "Other", "username": "other", "email": "alice@gmail.com", "password": "secret123"},
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Email already exists"

    def test_duplicate_username(self, client, alice):
        response = client.post(
            "/users/register",
            json={"name": "Other", "username": "alice", "email": "other@gmail.com", "password": "secret123"},
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Username already taken"

    def test_username_rules(self, client):
        for username in ("ab", "has space", "bad!chars"):
            response = client.post(
                "/users/register",
                json={"name": "X", "username": username, "email": "x@gmail.com", "password": "secret123"},
            )
            assert response.status_code == 400, username

    def test_missing_fields(self, client):
        response = client.post("/users/register", json={"username": "carol"})

        assert response.status_code == 400
        assert "message" in response.json()

    def test_login(self, client, alice):
        response = client.post("/users/login", json={"email": "alice@gmail.com", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["id"] == alice["id"]
        assert response.json()["token"]

    def test_login_wrong_password(self, client, alice):
        response = client.post("/users/login", json={"email": "alice@gmail.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_token_works(self, client, alice):
        token = client.post(
            "/users/login", json={"email": "alice@gmail.com", "password": "secret123"}
        ).json()["token"]

        response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["username"] == "alice"


class TestMe:
    """GET /users/me."""

    def test_requires_auth(self, client):
        assert client.get("/users/me").status_code == 401

    def test_profile_defaults(self, client, alice):
        data = client.get("/users/me", headers=alice["headers"]).json()

        assert data["id"] == alice["id"]
        assert data["role"] == "Freelancer"
        assert data["avatar"] == "https://www.gravatar.com/avatar/?d=mp"
        assert data["skills"] == []
        assert "passwordHash" not in data


class TestProfileUpdates:
    """Partial updates of the caller's own user record."""

    def test_update_profile_keeps_unset_values(self, client, alice):
        response = client.put("/users/profile", json={"bio": "Hello"}, headers=alice["headers"])

        assert response.status_code == 200
        assert response.json()["bio"] == "Hello"
        assert response.json()["name"] == "Alice"

    def test_bio_length_limit(self, client, alice):
        response = client.put("/users/profile", json={"bio": "x" * 501}, headers=alice["headers"])

        assert response.status_code == 400

    def test_update_avatar(self, client, alice):
        response = client.put(
            "/users/avatar", json={"avatarUrl": "https://img.example.com/a.png"}, headers=alice["headers"]
        )

        assert response.json()["avatar"] == "https://img.example.com/a.png"

    def test_social_links_merge(self, client, alice):
        client.put("/users/social-links", json={"socialLinks": {"github": "https://github.com/alice"}}, headers=alice["headers"])
        response = client.put(
            "/users/social-links",
            json={"socialLinks": {"twitter": "https://twitter.com/alice"}},
            headers=alice["headers"],
        )

        links = response.json()["socialLinks"]
        assert links["github"] == "https://github.com/alice"
        assert links["twitter"] == "https://twitter.com/alice"

    def test_skills_replace(self, client, alice):
        client.put("/users/skills", json={"skills": [{"name": "Go", "proficiency": 2}]}, headers=alice["headers"])
        response = client.put(
            "/users/skills", json={"skills": [{"name": "Python", "proficiency": 5}]}, headers=alice["headers"]
        )

        assert response.json()["skills"] == [{"name": "Python", "proficiency": 5}]

    def test_skill_proficiency_range(self, client, alice):
        response = client.put(
            "/users/skills", json={"skills": [{"name": "Python", "proficiency": 6}]}, headers=alice["headers"]
        )

        assert response.status_code == 400

    def test_resume(self, client, alice):
        response = client.post(
            "/users/resume", json={"resumeUrl": "https://files.example.com/cv.pdf"}, headers=alice["headers"]
        )

        assert response.json()["resumeUrl"] == "https://files.example.com/cv.pdf"


class TestResetPassword:
    """POST /users/reset-password (public)."""

    def test_reset_then_login(self, client, alice):
        response = client.post(
            "/users/reset-password", json={"email": "alice@gmail.com", "newPassword": "newsecret"}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Password reset successful", "userId": alice["id"]}
        login = client.post("/users/login", json={"email": "alice@gmail.com", "password": "newsecret"})
        assert login.status_code == 200

    def test_missing_fields(self, client):
        response = client.post("/users/reset-password", json={"email": "alice@gmail.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide both email and new password"

    def test_wrong_domain(self, client, alice):
        response = client.post(
            "/users/reset-password", json={"email": "alice@yahoo.com", "newPassword": "newsecret"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Please use valid email address"

    def test_short_password(self, client, alice):
        response = client.post("/users/reset-password", json={"email": "alice@gmail.com", "newPassword": "abc"})

        assert response.status_code == 400
        assert response.json()["message"] == "Password must be at least 6 characters long"

    def test_unknown_email(self, client):
        response = client.post(
            "/users/reset-password", json={"email": "ghost@gmail.com", "newPassword": "newsecret"}
        )

        assert response.status_code == 404

    def test_email_case_is_ignored(self, client, make_user):
        user = make_user("carol", email="Carol@Gmail.com")

        response = client.post(
            "/users/reset-password", json={"email": "CAROL@GMAIL.COM", "newPassword": "newsecret"}
        )

        assert response.status_code == 200
        assert response.json()["userId"] == user["id"]
