"""
Authentication flow tests.

Verifies that:
- Sign-up issues a token pair and rejects duplicate emails
- Sign-in checks the stored bcrypt hash
- Refresh tokens are single-use
- Logout revokes both the access and refresh token
- Protected routes reject missing, malformed and wrong-type tokens
"""

from taskforge.core.security import create_refresh_token

SIGNUP_URL = "/api/v1/auth/signup"
SIGNIN_URL = "/api/v1/auth/signin"
REFRESH_URL = "/api/v1/auth/refresh"
LOGOUT_URL = "/api/v1/auth/logout"
ME_URL = "/api/v1/users/me"


async def sign_up(client, email: str = "carol@example.com", password: str = "password123") -> dict:
    resp = await client.post(SIGNUP_URL, json={"email": email, "name": "Carol", "password": password})
    assert resp.status_code == 201, f"Sign-up failed: {resp.text}"
    return resp.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Sign up
# ---------------------------------------------------------------------------

async def test_sign_up_returns_token_pair(client):
    body = await sign_up(client)

    assert body["tokenType"] == "bearer"
    assert body["accessToken"]
    assert body["refreshToken"]
    assert body["expiresIn"] == 480 * 60


async def test_sign_up_lowercases_email_and_rejects_duplicates(client):
    await sign_up(client, email="Carol@Example.com")

    resp = await client.post(
        SIGNUP_URL, json={"email": "carol@example.com", "password": "password123"}
    )

    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "EMAIL_TAKEN"


async def test_sign_up_validates_password_length(client):
    resp = await client.post(SIGNUP_URL, json={"email": "short@example.com", "password": "short"})
    assert resp.status_code == 422


async def test_sign_up_validates_email(client):
    resp = await client.post(SIGNUP_URL, json={"email": "not-an-email", "password": "password123"})
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Sign in
# ---------------------------------------------------------------------------

async def test_sign_in_with_correct_password(client, user):
    resp = await client.post(SIGNIN_URL, json={"email": "alice@example.com", "password": "password123"})

    assert resp.status_code == 200
    me = await client.get(ME_URL, headers=bearer(resp.json()["accessToken"]))
    assert me.status_code == 200
    assert me.json()["email"] == "alice@example.com"


async def test_sign_in_accepts_form_encoding(client, user):
    resp = await client.post(SIGNIN_URL, data={"email": "alice@example.com", "password": "password123"})
    assert resp.status_code == 200


async def test_sign_in_is_case_insensitive_on_email(client, user):
    resp = await client.post(SIGNIN_URL, json={"email": "ALICE@example.com", "password": "password123"})
    assert resp.status_code == 200


async def test_sign_in_wrong_password(client, user):
    resp = await client.post(SIGNIN_URL, json={"email": "alice@example.com", "password": "wrong-password"})

    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "INVALID_CREDENTIALS"


async def test_sign_in_unknown_email(client):
    resp = await client.post(SIGNIN_URL, json={"email": "nobody@example.com", "password": "password123"})

    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "INVALID_CREDENTIALS"


async def test_sign_in_archived_user(client, user, user_headers):
    resp = await client.delete(ME_URL, headers=user_headers)
    assert resp.status_code == 200

    resp = await client.post(SIGNIN_URL, json={"email": "alice@example.com", "password": "password123"})
    assert resp.status_code == 401


# ---------------------------------------------------------------------------
# Refresh
# ---------------------------------------------------------------------------

async def test_refresh_rotates_tokens(client):
    tokens = await sign_up(client)

    resp = await client.post(REFRESH_URL, json={"refreshToken": tokens["refreshToken"]})
    assert resp.status_code == 200
    rotated = resp.json()
    assert rotated["refreshToken"] != tokens["refreshToken"]

    # The old refresh token is single-use
    resp = await client.post(REFRESH_URL, json={"refreshToken": tokens["refreshToken"]})
    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "TOKEN_REVOKED"

    resp = await client.post(REFRESH_URL, json={"refreshToken": rotated["refreshToken"]})
    assert resp.status_code == 200


async def test_refresh_rejects_unknown_token(client, user):
    token, _ = create_refresh_token(str(user.id))

    resp = await client.post(REFRESH_URL, json={"refreshToken": token})

    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "TOKEN_REVOKED"


async def test_refresh_rejects_access_token(client):
    tokens = await sign_up(client)

    resp = await client.post(REFRESH_URL, json={"refreshToken": tokens["accessToken"]})

    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "INVALID_TOKEN"


# ---------------------------------------------------------------------------
# Logout
# ---------------------------------------------------------------------------

async def test_logout_revokes_access_and_refresh_tokens(client):
    tokens = await sign_up(client)
    headers = bearer(tokens["accessToken"])

    resp = await client.post(LOGOUT_URL, json={"refreshToken": tokens["refreshToken"]}, headers=headers)
    assert resp.status_code == 204

    resp = await client.get(ME_URL, headers=headers)
    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "TOKEN_REVOKED"

    resp = await client.post(REFRESH_URL, json={"refreshToken": tokens["refreshToken"]})
    assert resp.status_code == 401


async def test_logout_requires_token(client):
    resp = await client.post(LOGOUT_URL, json={"refreshToken": "whatever"})
    assert resp.status_code == 401


# ---------------------------------------------------------------------------
# Bearer token checks
# ---------------------------------------------------------------------------

async def test_missing_token(client):
    resp = await client.get(ME_URL)

    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "MISSING_TOKEN"


async def test_malformed_token(client):
    resp = await client.get(ME_URL, headers=bearer("not-a-jwt"))

    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "INVALID_TOKEN"


async def test_refresh_token_cannot_be_used_as_access_token(client):
    tokens = await sign_up(client)

    resp = await client.get(ME_URL, headers=bearer(tokens["refreshToken"]))

    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "INVALID_TOKEN"
