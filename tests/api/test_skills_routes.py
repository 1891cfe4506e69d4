"""Tests for the /v1/skills routes."""

from httpx import ASGITransport, AsyncClient

from mentor_app_api.app.services.skill_service import SkillService


class TestCreateSkill:
    async def test_create_then_get(self, client):
        """POST a skill, then fetch it by the returned id."""
        response = await client.post(
            "/v1/skills", json={"name": "Rust", "added": "2024-01-01", "authorized": 0}
        )

        assert response.status_code == 201
        skill_id = response.json()["id"]
        assert response.headers["location"] == f"/v1/skills/{skill_id}"

        response = await client.get(f"/v1/skills/{skill_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Rust"
        assert data["authorized"] is False
        assert data["added"] == "2024-01-01T00:00:00"

    async def test_missing_name_is_400(self, client):
        response = await client.post("/v1/skills", json={"authorized": 1})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_input"

    async def test_unencodable_name_is_400(self, client):
        response = await client.post(
            "/v1/skills",
            content=b'{"name": "Rust\\ud800"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_input"

    async def test_blank_name_is_400(self, client):
        response = await client.post("/v1/skills", json={"name": "   "})

        assert response.status_code == 400

    async def test_duplicate_name_is_400(self, client):
        await client.post("/v1/skills", json={"name": "Rust"})

        response = await client.post("/v1/skills", json={"name": "Rust"})

        assert response.status_code == 400
        assert "already exists" in response.json()["error"]["message"]

    async def test_name_is_sanitized(self, client):
        response = await client.post("/v1/skills", json={"name": "<em>Go</em>"})
        skill_id = response.json()["id"]

        data = (await client.get(f"/v1/skills/{skill_id}")).json()

        assert data["name"] == "Go"


class TestGetSkill:
    async def test_malformed_id_is_404(self, client):
        response = await client.get("/v1/skills/not-an-id")

        assert response.status_code == 404
        assert response.json() == {"error": {"code": "not_found", "message": "Skill not found"}}

    async def test_unknown_id_is_404(self, client):
        assert (await client.get("/v1/skills/0000000000")).status_code == 404

    async def test_unexpected_failure_keeps_envelope(self, app, monkeypatch):
        async def broken(self, skill_id):
            raise RuntimeError("boom")

        monkeypatch.setattr(SkillService, "retrieve", broken)
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/v1/skills/0123456789")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "data_access_failure"


class TestSearchSkills:
    async def test_search(self, client, make_skill):
        await make_skill("Python")
        await make_skill("Cython")
        await make_skill("Go")

        response = await client.get("/v1/skills", params={"term": "ython"})

        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Cython", "Python"]

    async def test_empty_term_is_400(self, client):
        assert (await client.get("/v1/skills", params={"term": ""})).status_code == 400

    async def test_missing_term_is_400(self, client):
        assert (await client.get("/v1/skills")).status_code == 400


class TestUpdateSkill:
    async def test_authorize_existing(self, client, make_skill):
        skill = await make_skill("Python")

        response = await client.put(f"/v1/skills/{skill.id}", json={"name": "Python", "authorized": True})

        assert response.status_code == 200
        data = (await client.get(f"/v1/skills/{skill.id}")).json()
        assert data["authorized"] is True

    async def test_malformed_id_is_400(self, client):
        response = await client.put("/v1/skills/BAD", json={"name": "Python"})

        assert response.status_code == 400

    async def test_missing_name_is_400(self, client, make_skill):
        skill = await make_skill("Python")

        assert (await client.put(f"/v1/skills/{skill.id}", json={})).status_code == 400


class TestDeleteSkill:
    async def test_delete(self, client, make_skill):
        skill = await make_skill("Python")

        response = await client.delete(f"/v1/skills/{skill.id}")

        assert response.status_code == 200
        assert response.json() == {"id": skill.id}
        assert (await client.get(f"/v1/skills/{skill.id}")).status_code == 404
        assert (await client.delete(f"/v1/skills/{skill.id}")).status_code == 404

    async def test_malformed_id_is_404(self, client):
        assert (await client.delete("/v1/skills/xyz")).status_code == 404
