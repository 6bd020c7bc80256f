from models.coupon import Coupon
from services.coupon_store import CODE_ALPHABET
from tests.conftest import make_coupon


class TestCouponAdminEndpoints:
    def test_requires_admin(self, client):
        assert client.get("/coupons").status_code == 401
        assert client.post("/coupons", json={"name": "A", "email": "a@x.com", "slotDurationHours": 2}).status_code == 401
        assert client.put("/coupons", json={"id": 1, "isActive": False}).status_code == 401
        assert client.delete("/coupons?id=1").status_code == 401

    def test_create_returns_code(self, admin_client):
        resp = admin_client.post("/coupons", json={"name": "Jane", "email": "jane@x.com", "slotDurationHours": 3})
        assert resp.status_code == 201
        body = resp.get_json()
        assert len(body["code"]) == 8
        assert set(body["code"]) <= set(CODE_ALPHABET)
        assert body["slotDurationHours"] == 3
        assert body["isActive"] is True
        assert body["usedAt"] is None
        assert body["createdAt"].endswith("Z")

    def test_create_missing_fields(self, admin_client):
        resp = admin_client.post("/coupons", json={"name": "Jane"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Name, email and slot duration are required"

    def test_create_rejects_unknown_fields(self, admin_client):
        resp = admin_client.post(
            "/coupons",
            json={"name": "Jane", "email": "jane@x.com", "slotDurationHours": 2, "code": "MINE"},
        )
        assert resp.status_code == 400

    def test_list_newest_first(self, admin_client):
        first = admin_client.post("/coupons", json={"name": "A", "email": "a@x.com", "slotDurationHours": 1}).get_json()
        second = admin_client.post("/coupons", json={"name": "B", "email": "b@x.com", "slotDurationHours": 1}).get_json()

        ids = [c["id"] for c in admin_client.get("/coupons").get_json()]
        assert ids == [second["id"], first["id"]]

    def test_update_and_delete(self, admin_client, app):
        created = admin_client.post("/coupons", json={"name": "A", "email": "a@x.com", "slotDurationHours": 1}).get_json()

        resp = admin_client.put("/coupons", json={"id": created["id"], "isActive": False, "slotDurationHours": 4})
        assert resp.status_code == 200
        assert resp.get_json()["isActive"] is False
        assert resp.get_json()["slotDurationHours"] == 4

        resp = admin_client.delete(f"/coupons?id={created['id']}")
        assert resp.status_code == 200
        with app.app_context():
            assert Coupon.query.count() == 0

    def test_update_unknown_id(self, admin_client):
        resp = admin_client.put("/coupons", json={"id": 999, "name": "X"})
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Coupon not found"

    def test_delete_without_id(self, admin_client):
        resp = admin_client.delete("/coupons")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "ID is required"


class TestCouponValidateEndpoint:
    def test_valid_code_any_case(self, app, client):
        with app.app_context():
            make_coupon(code="PHOTO2025", name="Jane", email="jane@x.com", hours=2)

        resp = client.post("/coupons/validate", json={"code": "photo2025"})
        assert resp.status_code == 200
        assert resp.get_json() == {
            "valid": True,
            "message": "Coupon is valid",
            "slotDurationHours": 2,
            "coupon": {"name": "Jane", "email": "jane@x.com"},
        }

    def test_inactive_code_is_invalid(self, app, client):
        with app.app_context():
            make_coupon(code="OLD12345", active=False)

        resp = client.post("/coupons/validate", json={"code": "OLD12345"})
        assert resp.status_code == 404
        body = resp.get_json()
        assert body["valid"] is False
        assert body["error"].startswith("Invalid coupon code")

    def test_missing_code(self, client):
        resp = client.post("/coupons/validate", json={})
        assert resp.status_code == 400
        assert resp.get_json()["valid"] is False


class TestCouponRequestBodyShape:
    def test_validate_with_array_body(self, client):
        resp = client.post("/coupons/validate", json=["PHOTO2025"])
        assert resp.status_code == 400
        assert resp.get_json()["valid"] is False
        assert resp.get_json()["error"] == "Request body must be a JSON object"

    def test_admin_writes_with_array_body(self, admin_client):
        assert admin_client.post("/coupons", json=["name"]).status_code == 400
        assert admin_client.put("/coupons", json=[1]).status_code == 400
