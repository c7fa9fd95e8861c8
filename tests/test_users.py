"""
User profile endpoint tests.
"""

import uuid

USERS_URL = "/api/v1/users"
ME_URL = f"{USERS_URL}/me"


async def test_get_me(client, user, user_headers):
    resp = await client.get(ME_URL, headers=user_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == str(user.id)
    assert body["email"] == "alice@example.com"
    assert body["name"] == "Alice"
    assert body["isAdmin"] is False
    assert body["deletedAt"] is None
    assert "passwordHash" not in body


async def test_update_me(client, user_headers):
    resp = await client.put(
        ME_URL, json={"name": "Alice Liddell", "email": "Alice.L@Example.com"}, headers=user_headers
    )

    assert resp.status_code == 200
    assert resp.json()["name"] == "Alice Liddell"
    assert resp.json()["email"] == "alice.l@example.com"


async def test_update_me_with_taken_email(client, user_headers, other_user):
    resp = await client.put(ME_URL, json={"email": "bob@example.com"}, headers=user_headers)

    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "EMAIL_TAKEN"


async def test_update_me_keeps_own_email(client, user_headers):
    resp = await client.put(ME_URL, json={"email": "alice@example.com"}, headers=user_headers)
    assert resp.status_code == 200


async def test_user_cannot_promote_self(client, user_headers):
    resp = await client.put(ME_URL, json={"isAdmin": True, "bogus": 1}, headers=user_headers)
    assert resp.status_code == 422
    assert {tuple(error["loc"]) for error in resp.json()["detail"]} == {
        ("body", "isAdmin"),
        ("body", "bogus"),
    }

    resp = await client.get(ME_URL, headers=user_headers)
    assert resp.json()["isAdmin"] is False


async def test_delete_me_archives_account(client, user_headers):
    resp = await client.delete(ME_URL, headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["deletedAt"] is not None

    resp = await client.get(ME_URL, headers=user_headers)
    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "USER_NOT_FOUND"


async def test_get_user_by_id(client, user_headers, other_user):
    resp = await client.get(f"{USERS_URL}/{other_user.id}", headers=user_headers)

    assert resp.status_code == 200
    assert resp.json()["email"] == "bob@example.com"


async def test_get_missing_user(client, user_headers):
    resp = await client.get(f"{USERS_URL}/{uuid.uuid4()}", headers=user_headers)

    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "USER_NOT_FOUND"


async def test_admin_updates_user(client, admin_headers, other_user, other_headers):
    resp = await client.put(
        f"{USERS_URL}/{other_user.id}", json={"isAdmin": True, "name": "Robert"}, headers=admin_headers
    )

    assert resp.status_code == 200
    assert resp.json()["isAdmin"] is True
    assert resp.json()["name"] == "Robert"

    # The flag is read from the database, so the existing token gains admin rights
    resp = await client.post("/api/v1/statuses", json={"name": "Review"}, headers=other_headers)
    assert resp.status_code == 201


async def test_admin_update_requires_admin(client, user_headers, other_user):
    resp = await client.put(
        f"{USERS_URL}/{other_user.id}", json={"isAdmin": True}, headers=user_headers
    )

    assert resp.status_code == 403
    assert resp.json()["detail"]["code"] == "ADMIN_REQUIRED"


async def test_admin_update_missing_user(client, admin_headers):
    resp = await client.put(f"{USERS_URL}/{uuid.uuid4()}", json={"name": "Ghost"}, headers=admin_headers)
    assert resp.status_code == 404
