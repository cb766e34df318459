"""Tests for admin settings and role-based access."""

from fastapi.testclient import TestClient

from admin.access import allowed_sections, can_access
from admin.schemas import AdminRole, MANAGER_SECTIONS

MANAGER = {"X-Admin-Role": "manager"}
DEVELOPER = {"X-Admin-Role": "developer"}


class TestAllowedSections:
    def test_owner_sees_everything(self):
        assert allowed_sections(AdminRole.OWNER, []) == MANAGER_SECTIONS + ["developer"]

    def test_developer_sees_only_developer(self):
        assert allowed_sections(AdminRole.DEVELOPER, MANAGER_SECTIONS) == ["developer"]

    def test_manager_is_limited_to_grants(self):
        assert allowed_sections(AdminRole.MANAGER, ["sales", "returns"]) == ["sales", "returns"]
        assert not can_access(AdminRole.MANAGER, "inventory", ["sales"])


class TestAccessApi:
    def test_default_role_is_owner(self, api_client):
        data = api_client.get("/admin/access").json()
        assert data["role"] == "owner"
        assert "developer" in data["sections"]

    def test_only_owner_edits_permissions(self, api_client):
        response = api_client.put("/admin/manager-permissions", json={"sections": ["sales"]}, headers=MANAGER)
        assert response.status_code == 403
        assert response.json()["error_type"] == "AccessDeniedError"

    def test_only_owner_reads_permissions(self, api_client):
        assert api_client.get("/admin/manager-permissions").json()["granted"] == MANAGER_SECTIONS
        for headers in (MANAGER, DEVELOPER):
            response = api_client.get("/admin/manager-permissions", headers=headers)
            assert response.status_code == 403

    def test_revoked_section_is_blocked(self, api_client):
        response = api_client.put("/admin/manager-permissions", json={"sections": ["sales", "bogus"]})
        assert response.json()["granted"] == ["sales"]

        assert api_client.get("/sales", headers=MANAGER).status_code == 200
        assert api_client.get("/inventory", headers=MANAGER).status_code == 403
        assert api_client.get("/returns/stats", headers=MANAGER).status_code == 403

    def test_developer_has_no_store_sections(self, api_client):
        assert api_client.get("/sales", headers=DEVELOPER).status_code == 403

    def test_unknown_role(self, api_client):
        assert api_client.get("/admin/access", headers={"X-Admin-Role": "intern"}).status_code == 422


class TestSettingsApi:
    def test_store_details_partial_update(self, api_client):
        response = api_client.put("/admin/store-details", json={"store_name": "Corner Shop"})
        data = response.json()
        assert data["store_name"] == "Corner Shop"
        assert data["gstin"] == "27ABCDE1234F1Z5"

    def test_api_keys_are_masked(self, api_client):
        response = api_client.put(
            "/admin/api-keys",
            json={"razorpay_key_id": "rzp_live_1", "razorpay_key_secret": "supersecret1234"},
        )
        data = response.json()
        assert data["razorpay_key_id"] == "rzp_live_1"
        assert data["razorpay_key_secret"].endswith("1234")
        assert "supersecret" not in data["razorpay_key_secret"]
        assert api_client.get("/admin/api-keys").json()["razorpay_key_secret"] == data["razorpay_key_secret"]

    def test_column_mapping_drives_import(self, api_client):
        api_client.put(
            "/admin/column-mapping",
            json={"id_column": "SKU", "name_column": "Title", "price_column": "MRP",
                  "optional_column1": "", "optional_column2": ""},
        )
        response = api_client.post(
            "/inventory/catalog",
            files={"file": ("c.csv", b"SKU,Title,MRP\nA1,Cap,150\n", "text/csv")},
        )
        assert response.json()["products"][0]["tag"] == "A1"

    def test_settings_survive_restart(self, api_client):
        api_client.put("/admin/store-details", json={"store_name": "Corner Shop"})
        api_client.put("/admin/manager-permissions", json={"sections": ["returns"]})

        from main import app

        with TestClient(app) as restarted:
            assert restarted.get("/admin/store-details").json()["store_name"] == "Corner Shop"
            assert restarted.get("/admin/access", headers=MANAGER).json()["sections"] == ["returns"]

    def test_messaging_test_without_key(self, api_client):
        response = api_client.post(
            "/admin/messaging/test", json={"channel": "sms", "recipient": "9876543210"}
        )
        assert response.status_code == 200
        assert response.json()["success"] is False
        assert "not configured" in response.json()["message"]
