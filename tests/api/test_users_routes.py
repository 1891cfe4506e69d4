"""Tests for the /v1/users routes."""

import pytest


@pytest.fixture
def user_payload():
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "github_handle": "ada",
        "twitter_handle": None,
        "irc_nick": "ada_l",
        "mentor_available": 1,
        "apprentice_available": False,
        "timezone": "Europe/London",
        "teaching_skills": [],
        "learning_skills": [],
    }


class TestCreateUser:
    async def test_create_returns_id_and_location(self, client, user_payload, make_skill):
        python = await make_skill("Python")
        user_payload["teaching_skills"] = [python.id]

        response = await client.post("/v1/users", json=user_payload)

        assert response.status_code == 201
        user_id = response.json()["id"]
        assert response.headers["location"] == f"/v1/users/{user_id}"

        data = (await client.get(f"/v1/users/{user_id}")).json()
        assert data["first_name"] == "Ada"
        assert data["mentor_available"] is True
        assert [s["name"] for s in data["teaching_skills"]] == ["Python"]
        assert data["learning_skills"] == []

    async def test_unknown_skill_is_400(self, client, user_payload):
        user_payload["learning_skills"] = ["0000000000"]

        response = await client.post("/v1/users", json=user_payload)

        assert response.status_code == 400
        assert "0000000000" in response.json()["error"]["message"]

    async def test_malformed_skill_is_400(self, client, user_payload):
        user_payload["learning_skills"] = ["python"]

        assert (await client.post("/v1/users", json=user_payload)).status_code == 400

    @pytest.mark.parametrize("field", ["first_name", "last_name", "email"])
    async def test_required_fields(self, client, user_payload, field):
        del user_payload[field]

        assert (await client.post("/v1/users", json=user_payload)).status_code == 400


class TestGetUser:
    async def test_includes_partnerships(self, client, make_user, partnership_manager):
        grace = await make_user("Grace", "Hopper")
        ada = await make_user("Ada", "Lovelace")
        alan = await make_user("Alan", "Turing")
        await partnership_manager.create(grace, ada)
        await partnership_manager.create(alan, grace)

        data = (await client.get(f"/v1/users/{grace.id}")).json()

        mentoring = data["partnerships"]["mentoring"]
        apprenticing = data["partnerships"]["apprenticing"]
        assert [(p["mentor"], p["apprentice"]) for p in mentoring] == [(grace.id, ada.id)]
        assert [(p["mentor"], p["apprentice"]) for p in apprenticing] == [(alan.id, grace.id)]

    async def test_malformed_id_is_404(self, client):
        assert (await client.get("/v1/users/abc")).status_code == 404

    async def test_unknown_id_is_404(self, client):
        assert (await client.get("/v1/users/0000000000")).status_code == 404


class TestListUsers:
    async def test_empty(self, client):
        response = await client.get("/v1/users")

        assert response.status_code == 200
        assert response.json() == []

    async def test_lists_with_expanded_skills(self, client, make_user, make_skill):
        go = await make_skill("Go")
        await make_user("Grace", "Hopper", learning_skills={go.id})
        await make_user("Ada", "Lovelace")

        data = (await client.get("/v1/users")).json()

        assert [u["last_name"] for u in data] == ["Hopper", "Lovelace"]
        assert data[0]["learning_skills"][0]["name"] == "Go"
        assert "partnerships" not in data[0]


class TestUpdateUser:
    async def test_update(self, client, make_user, user_payload):
        user = await make_user("Ada", "Lovelace")
        user_payload["email"] = "countess@example.com"

        response = await client.put(f"/v1/users/{user.id}", json=user_payload)

        assert response.status_code == 200
        data = (await client.get(f"/v1/users/{user.id}")).json()
        assert data["email"] == "countess@example.com"

    async def test_unknown_user_is_400(self, client, user_payload):
        assert (await client.put("/v1/users/0000000000", json=user_payload)).status_code == 400

    async def test_malformed_id_is_400(self, client, user_payload):
        assert (await client.put("/v1/users/nope", json=user_payload)).status_code == 400


class TestDeleteUser:
    async def test_delete(self, client, make_user):
        user = await make_user()

        assert (await client.delete(f"/v1/users/{user.id}")).status_code == 200
        assert (await client.get(f"/v1/users/{user.id}")).status_code == 404
        assert (await client.delete(f"/v1/users/{user.id}")).status_code == 404

    async def test_malformed_id_is_404(self, client):
        assert (await client.delete("/v1/users/!!")).status_code == 404
