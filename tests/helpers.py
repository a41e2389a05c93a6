from __future__ import annotations

from httpx import AsyncClient


async def register_and_login(client: AsyncClient, email: str, username: str, password: str = "StrongPass123") -> dict:
    created = await client.post("/api/users", json={"email": email, "username": username, "password": password})
    assert created.status_code == 201, created.text
    login = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert login.status_code == 200, login.text
    data = login.json()["data"]
    return {
        "user_id": data["user"]["id"],
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
    }
