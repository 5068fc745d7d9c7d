"""Call-to-action button CRUD."""
from fastapi.testclient import TestClient


class TestListButtons:
    def test_ordered_by_sort_order_then_id(self, admin_client: TestClient):
        rows = [("C", 2), ("A", 0), ("B", 1), ("A2", 0), ("C2", 2)]
        for label, order in rows:
            admin_client.post("/api/buttons", json={"label": label, "sortOrder": order})
        buttons = admin_client.get("/api/buttons").json()
        assert [b["label"] for b in buttons] == ["A", "A2", "B", "C", "C2"]
        keys = [(b["sortOrder"], b["id"]) for b in buttons]
        assert keys == sorted(keys)

    def test_reorder(self, admin_client: TestClient):
        first = admin_client.post("/api/buttons", json={"label": "Login", "sortOrder": 0}).json()
        admin_client.post("/api/buttons", json={"label": "Register", "sortOrder": 1})
        admin_client.put(f"/api/buttons/{first['id']}", json={"sortOrder": 5})
        labels = [b["label"] for b in admin_client.get("/api/buttons").json()]
        assert labels == ["Register", "Login"]


class TestCreateButton:
    def test_defaults(self, admin_client: TestClient):
        resp = admin_client.post("/api/buttons", json={})
        assert resp.status_code == 201
        button = resp.json()
        assert button["label"] == "Button"
        assert button["url"] == "#"
        assert button["color"] == "#3b82f6"
        assert button["outlineColor"] == "#60a5fa"
        assert button["width"] == 300
        assert button["height"] == 48
        assert button["sortOrder"] == 0
        assert button["isVisible"] is True

    def test_invalid_width(self, admin_client: TestClient):
        resp = admin_client.post("/api/buttons", json={"label": "Play", "width": "wide"})
        assert resp.status_code == 400
        assert resp.json()["field"] == "width"

    def test_requires_admin(self, client: TestClient):
        resp = client.post("/api/buttons", json={"label": "Play"})
        assert resp.status_code == 401
        assert resp.content == b""


class TestUpdateButton:
    def test_partial_update(self, admin_client: TestClient):
        button = admin_client.post("/api/buttons", json={"label": "Daftar", "url": "/register"}).json()
        resp = admin_client.put(f"/api/buttons/{button['id']}", json={"isVisible": False})
        assert resp.status_code == 200
        updated = resp.json()
        assert updated["isVisible"] is False
        assert updated["label"] == "Daftar"
        assert updated["url"] == "/register"

    def test_invalid_patch(self, admin_client: TestClient):
        button = admin_client.post("/api/buttons", json={}).json()
        resp = admin_client.put(f"/api/buttons/{button['id']}", json={"height": "tall"})
        assert resp.status_code == 400
        assert resp.json()["field"] == "height"

    def test_not_found(self, admin_client: TestClient):
        resp = admin_client.put("/api/buttons/999", json={"label": "Ghost"})
        assert resp.status_code == 404
        assert resp.json() == {"message": "Button not found"}


class TestDeleteButton:
    def test_delete(self, admin_client: TestClient):
        button = admin_client.post("/api/buttons", json={}).json()
        assert admin_client.delete(f"/api/buttons/{button['id']}").status_code == 204
        assert admin_client.get("/api/buttons").json() == []

    def test_delete_missing(self, admin_client: TestClient):
        resp = admin_client.delete("/api/buttons/999")
        assert resp.status_code == 404

    def test_requires_admin(self, client: TestClient):
        assert client.delete("/api/buttons/1").status_code == 401
