"""
Integration tests for the entity CRUD endpoints.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import re
import uuid

import pytest

TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")


async def _create_group(client, name):
    response = await client.post("/api/user_groups", json={"group_name": name})
    assert response.status_code == 201
    return response.json()["data"]


class TestSessionGuard:
    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "path",
        [
            "/api/users",
            "/api/user_groups",
            "/api/permissions",
            "/api/group_permissions",
            "/api/user_permissions",
            "/api/contents",
        ],
    )
    async def test_collections_require_session(self, anon_client, path):
        response = await anon_client.get(path)

        assert response.status_code == 401
        assert response.json()["code"] == 401


class TestUserGroupsAPI:
    @pytest.mark.anyio
    async def test_create_then_list(self, client):
        """
        Test the envelope of a list response.

        Arrange: Create group "Admins"
        Act: GET /api/user_groups
        Assert: data holds the group, pagination page 1 / size 10 / total 1
        """
        # Arrange
        created = await _create_group(client, "Admins")

        # Act
        response = await client.get("/api/user_groups")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["data"] == [created]
        assert created["group_name"] == "Admins"
        assert TIMESTAMP_RE.match(created["created_at"])
        assert body["pagination"] == {
            "page": 1,
            "size": 10,
            "total": 1,
            "prev_page": None,
            "next_page": None,
        }

    @pytest.mark.anyio
    async def test_pagination_links_use_base_url(self, client):
        for name in ("a", "b", "c"):
            await _create_group(client, name)

        response = await client.get("/api/user_groups", params={"page": 2, "size": 1})

        pagination = response.json()["pagination"]
        assert pagination["prev_page"] == "http://test/api/user_groups?page=1&size=1"
        assert pagination["next_page"] == "http://test/api/user_groups?page=3&size=1"

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "params",
        [{"size": 0}, {"page": 0}, {"page": "x"}, {"page": 10**19}, {"size": 1001}],
    )
    async def test_bad_paging_rejected(self, client, params):
        response = await client.get("/api/user_groups", params=params)

        assert response.status_code == 422

    @pytest.mark.anyio
    async def test_unknown_sort_rejected(self, client):
        response = await client.get("/api/user_groups", params={"sort": "nope"})

        assert response.status_code == 422
        assert response.json()["code"] == 422

    @pytest.mark.anyio
    async def test_bad_order_rejected(self, client):
        response = await client.get(
            "/api/user_groups", params={"sort": "group_name", "order": "up"}
        )

        assert response.status_code == 422

    @pytest.mark.anyio
    async def test_get_missing_is_404(self, client):
        response = await client.get(f"/api/user_groups/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["code"] == 404

    @pytest.mark.anyio
    async def test_duplicate_name_is_data_error(self, client):
        await _create_group(client, "Admins")

        response = await client.post("/api/user_groups", json={"group_name": "Admins"})

        assert response.status_code == 400
        assert response.json()["code"] == 400

    @pytest.mark.anyio
    async def test_put_upserts(self, client):
        group_id = str(uuid.uuid4())

        created = await client.put(f"/api/user_groups/{group_id}", json={"group_name": "A"})
        renamed = await client.put(f"/api/user_groups/{group_id}", json={"group_name": "B"})
        listing = await client.get("/api/user_groups")

        assert created.status_code == 200
        assert renamed.json()["data"]["id"] == group_id
        assert renamed.json()["data"]["group_name"] == "B"
        assert listing.json()["pagination"]["total"] == 1

    @pytest.mark.anyio
    async def test_bulk_delete(self, client):
        a = await _create_group(client, "a")
        b = await _create_group(client, "b")

        response = await client.request(
            "DELETE", "/api/user_groups", json=[a["id"], str(uuid.uuid4())]
        )

        assert response.status_code == 200
        body = response.json()
        assert [g["id"] for g in body["data"]] == [a["id"]]
        assert body["pagination"] is None
        remaining = await client.get("/api/user_groups")
        assert [g["id"] for g in remaining.json()["data"]] == [b["id"]]

    @pytest.mark.anyio
    async def test_delete_single(self, client):
        group = await _create_group(client, "a")

        deleted = await client.delete(f"/api/user_groups/{group['id']}")
        again = await client.delete(f"/api/user_groups/{group['id']}")

        assert deleted.status_code == 200
        assert deleted.json()["data"]["id"] == group["id"]
        assert again.status_code == 404


class TestUsersAPI:
    @pytest.mark.anyio
    async def test_password_hash_never_returned(self, client):
        response = await client.post(
            "/api/users", json={"username": "alice", "password": "wonderland"}
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert set(data) == {"id", "username", "created_at", "user_group_id"}
        assert data["user_group_id"] is None

    @pytest.mark.anyio
    async def test_group_filter(self, client):
        group = await _create_group(client, "Admins")
        await client.post(
            "/api/users",
            json={"username": "alice", "password": "pw", "user_group_id": group["id"]},
        )
        await client.post("/api/users", json={"username": "bob", "password": "pw"})

        everyone = await client.get("/api/users", params={"sort": "username"})
        admins = await client.get("/api/users", params={"user_group_id": group["id"]})

        assert [u["username"] for u in everyone.json()["data"]] == ["alice", "bob"]
        assert [u["username"] for u in admins.json()["data"]] == ["alice"]

    @pytest.mark.anyio
    async def test_put_new_user_without_password_rejected(self, client):
        response = await client.put(f"/api/users/{uuid.uuid4()}", json={"username": "carol"})

        assert response.status_code == 400


class TestGrantsAPI:
    @pytest.mark.anyio
    async def test_grant_list_and_revoke(self, client):
        """
        Test the group permission grant lifecycle.

        Arrange: A group and a permission
        Act: Grant, list scoped to the group, fetch, revoke
        Assert: Each step reflects the grant; revoking twice is 404
        """
        # Arrange
        group = await _create_group(client, "Admins")
        permission = (
            await client.post("/api/permissions", json={"name": "users.read"})
        ).json()["data"]
        key = f"{group['id']}/{permission['id']}"

        # Act & Assert
        granted = await client.post(
            "/api/group_permissions",
            json={"group_id": group["id"], "permission_id": permission["id"]},
        )
        assert granted.status_code == 201

        scoped = await client.get(f"/api/group_permissions/group/{group['id']}")
        assert scoped.json()["pagination"]["total"] == 1
        assert scoped.json()["data"][0]["permission_id"] == permission["id"]

        fetched = await client.get(f"/api/group_permissions/{key}")
        assert fetched.status_code == 200

        revoked = await client.delete(f"/api/group_permissions/{key}")
        assert revoked.status_code == 200
        assert (await client.delete(f"/api/group_permissions/{key}")).status_code == 404

    @pytest.mark.anyio
    async def test_revoke_all_for_permission(self, client):
        permission = (
            await client.post("/api/permissions", json={"name": "content.read"})
        ).json()["data"]
        user = (
            await client.post("/api/users", json={"username": "alice", "password": "pw"})
        ).json()["data"]
        await client.post(
            "/api/user_permissions",
            json={"user_id": user["id"], "permission_id": permission["id"]},
        )

        response = await client.delete(f"/api/user_permissions/permission/{permission['id']}")

        assert response.status_code == 200
        assert [g["user_id"] for g in response.json()["data"]] == [user["id"]]


class TestContentsAPI:
    @pytest.mark.anyio
    async def test_create_update_and_get(self, client):
        created = await client.post("/api/contents", json={"body": "draft"})
        content_id = created.json()["data"]["id"]

        updated = await client.put(f"/api/contents/{content_id}", json={"body": "final"})
        fetched = await client.get(f"/api/contents/{content_id}")

        assert created.status_code == 201
        assert isinstance(content_id, int)
        assert updated.json()["data"]["body"] == "final"
        assert fetched.json()["data"]["body"] == "final"
        assert TIMESTAMP_RE.match(fetched.json()["data"]["updated_at"])

    @pytest.mark.anyio
    async def test_update_unknown_is_404(self, client):
        response = await client.put("/api/contents/4242", json={"body": "x"})

        assert response.status_code == 404

    @pytest.mark.anyio
    async def test_out_of_range_ids_rejected(self, client):
        """
        Test integer ids beyond the store's 64-bit range never reach it.

        Arrange: An id of 10**20
        Act: GET it, and bulk delete it
        Assert: Both answer 422
        """
        # Arrange
        huge = 10**20

        # Act
        fetched = await client.get(f"/api/contents/{huge}")
        deleted = await client.request("DELETE", "/api/contents", json=[1, huge])

        # Assert
        assert fetched.status_code == 422
        assert deleted.status_code == 422
