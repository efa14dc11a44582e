"""
Ideas API：CRUD、列表查询参数、错误响应
"""

import pytest

from src.db.errors import StorageError


@pytest.fixture
def create_idea(client, auth_headers):
    def _create(**fields):
        res = client.post("/api/ideas", json=fields, headers=auth_headers)
        assert res.status_code == 201, res.text
        return res.json()["data"]

    return _create


class TestCreate:
    def test_requires_token(self, client):
        res = client.post("/api/ideas", json={"title": "Test Idea"})
        assert res.status_code == 401

    def test_create_success(self, client, auth_headers, registered_user):
        res = client.post(
            "/api/ideas",
            json={"title": "Test Idea", "description": "Test description"},
            headers=auth_headers,
        )
        assert res.status_code == 201
        body = res.json()
        assert body["success"] is True
        assert body["message"] == "Idea created successfully"
        assert body["data"]["title"] == "Test Idea"
        assert body["data"]["description"] == "Test description"
        assert body["data"]["status"] == "Concept"
        assert body["data"]["userId"] == registered_user["id"]

    @pytest.mark.parametrize("payload", [{}, {"title": ""}, {"description": "no title"}])
    def test_title_required(self, client, auth_headers, payload):
        res = client.post("/api/ideas", json=payload, headers=auth_headers)
        assert res.status_code == 400
        assert res.json() == {"success": False, "message": "Title is required"}

    def test_validation_errors(self, client, auth_headers):
        res = client.post(
            "/api/ideas",
            json={"title": "x" * 201, "description": "y" * 1001, "status": "Done"},
            headers=auth_headers,
        )
        assert res.status_code == 400
        body = res.json()
        assert body["errors"] == [
            "Title must be less than 200 characters",
            "Description must be less than 1000 characters",
            "Status must be one of: Concept, In Progress, Completed, On Hold",
        ]
        assert body["message"] == "; ".join(body["errors"])

    def test_whitespace_title(self, client, auth_headers):
        res = client.post("/api/ideas", json={"title": "   "}, headers=auth_headers)
        assert res.status_code == 400
        assert res.json()["errors"] == ["Title cannot be empty"]

    def test_create_then_fetch(self, client, create_idea):
        created = create_idea(title="Round trip", description="desc", status="In Progress")
        res = client.get(f"/api/ideas/{created['id']}")
        assert res.status_code == 200
        assert res.json()["data"] == created


class TestRead:
    def test_list_empty(self, client):
        res = client.get("/api/ideas")
        assert res.status_code == 200
        assert res.json() == {
            "success": True,
            "message": "Ideas retrieved successfully",
            "data": [],
            "count": 0,
        }

    def test_list_all(self, client, create_idea):
        for title in ("first", "second", "third"):
            create_idea(title=title)
        body = client.get("/api/ideas").json()
        assert body["count"] == 3
        assert [i["title"] for i in body["data"]] == ["first", "second", "third"]

    def test_list_query_params(self, client, create_idea):
        for title in ("b", "c", "a"):
            create_idea(title=title)

        body = client.get("/api/ideas", params={"_sort": "title", "_order": "desc"}).json()
        assert [i["title"] for i in body["data"]] == ["c", "b", "a"]

        body = client.get("/api/ideas", params={"_limit": 2, "_page": 2}).json()
        assert [i["title"] for i in body["data"]] == ["a"]
        assert body["count"] == 1

    def test_list_bad_query_params_are_sanitised(self, client, create_idea):
        create_idea(title="only")
        res = client.get("/api/ideas", params={"_limit": "abc", "_page": "-3", "_sort": "password"})
        assert res.status_code == 200
        assert res.json()["count"] == 1

    @pytest.mark.parametrize("idea_id", ["999", "abc", "99999999999999999999"])
    def test_get_not_found(self, client, idea_id):
        res = client.get(f"/api/ideas/{idea_id}")
        assert res.status_code == 404
        assert res.json() == {"success": False, "message": "Idea not found"}

    def test_storage_failure_on_read(self, client, app, monkeypatch):
        def broken(**kwargs):
            raise StorageError("no such table: ideas")

        monkeypatch.setattr(app.state.idea_store, "get_all", broken)
        res = client.get("/api/ideas")
        assert res.status_code == 500
        assert res.json() == {"success": False, "message": "no such table: ideas"}


class TestUpdate:
    def test_update_success(self, client, create_idea):
        idea = create_idea(title="Original", description="old")
        res = client.put(
            f"/api/ideas/{idea['id']}",
            json={"title": "Updated", "description": "new", "status": "Completed"},
        )
        assert res.status_code == 200
        body = res.json()
        assert body["message"] == "Idea updated successfully"
        assert body["data"]["title"] == "Updated"
        assert body["data"]["description"] == "new"
        assert body["data"]["status"] == "Completed"
        assert body["data"]["userId"] == idea["userId"]

    def test_partial_update_keeps_other_fields(self, client, create_idea):
        idea = create_idea(title="Original", description="keep me", status="On Hold")
        res = client.put(f"/api/ideas/{idea['id']}", json={"title": "Renamed"})
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["title"] == "Renamed"
        assert data["description"] == "keep me"
        assert data["status"] == "On Hold"

    def test_update_does_not_require_token(self, client, create_idea):
        idea = create_idea(title="Open")
        assert client.put(f"/api/ideas/{idea['id']}", json={"title": "Still open"}).status_code == 200

    def test_update_not_found(self, client):
        res = client.put("/api/ideas/999", json={"title": "Updated Title"})
        assert res.status_code == 404
        assert res.json()["message"] == "Idea not found"

    def test_update_id_beyond_integer_range(self, client):
        res = client.put("/api/ideas/99999999999999999999", json={"title": "Updated Title"})
        assert res.status_code == 404
        assert res.json()["message"] == "Idea not found"

    def test_status_only_change_keeps_description(self, client, create_idea):
        idea = create_idea(title="Original", description="keep me", status="Concept")
        res = client.put(f"/api/ideas/{idea['id']}", json={"title": "Original", "status": "Completed"})
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["status"] == "Completed"
        assert data["title"] == "Original"
        assert data["description"] == "keep me"

    def test_update_title_required(self, client, create_idea):
        idea = create_idea(title="Original")
        res = client.put(f"/api/ideas/{idea['id']}", json={"description": "only"})
        assert res.status_code == 400
        assert res.json()["message"] == "Title is required"

    def test_update_invalid_status(self, client, create_idea):
        idea = create_idea(title="Original")
        res = client.put(f"/api/ideas/{idea['id']}", json={"title": "Original", "status": "Shipped"})
        assert res.status_code == 400
        assert res.json()["errors"] == ["Status must be one of: Concept, In Progress, Completed, On Hold"]


class TestDelete:
    def test_delete_twice(self, client, create_idea):
        idea = create_idea(title="Short lived")

        res = client.delete(f"/api/ideas/{idea['id']}")
        assert res.status_code == 200
        assert res.json() == {"success": True, "message": "Idea deleted successfully"}

        res = client.delete(f"/api/ideas/{idea['id']}")
        assert res.status_code == 404
        assert res.json()["message"] == "Idea not found"

        assert client.get(f"/api/ideas/{idea['id']}").status_code == 404

    @pytest.mark.parametrize("idea_id", ["abc", "99999999999999999999"])
    def test_delete_unknown_id(self, client, idea_id):
        res = client.delete(f"/api/ideas/{idea_id}")
        assert res.status_code == 404
        assert res.json()["message"] == "Idea not found"
