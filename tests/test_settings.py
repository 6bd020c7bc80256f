from tests.conftest import ADMIN_PASSWORD


class TestSettingsEndpoints:
    def test_defaults(self, client):
        body = client.get("/settings").get_json()
        assert body["isConfigured"] is False
        assert body["siteTitle"] == "Portfolio"
        assert body["theme"] == {"preset": "minimalist", "fontFamily": "EB Garamond"}

    def test_update_merges_and_marks_configured(self, client, admin_client):
        resp = admin_client.put("/settings", json={"photographerName": "Jane Doe", "location": "Lisbon"})
        assert resp.status_code == 200
        assert resp.get_json()["success"] is True

        body = client.get("/settings").get_json()
        assert body["photographerName"] == "Jane Doe"
        assert body["location"] == "Lisbon"
        assert body["siteTitle"] == "Portfolio"
        assert body["isConfigured"] is True

    def test_requires_admin(self, client):
        assert client.put("/settings", json={"bio": "x"}).status_code == 401

    def test_unknown_field(self, admin_client):
        resp = admin_client.put("/settings", json={"favouriteColour": "red"})
        assert resp.status_code == 400
        assert "favouriteColour" in resp.get_json()["error"]

    def test_text_fields_must_be_strings(self, admin_client):
        assert admin_client.put("/settings", json={"bio": 42}).status_code == 400

    def test_theme_is_validated(self, admin_client):
        resp = admin_client.put("/settings", json={"theme": {"preset": "dark", "fontFamily": "Comic Sans"}})
        assert resp.status_code == 400
        assert "Unknown font: Comic Sans" in resp.get_json()["error"]

    def test_non_object_payload(self, admin_client):
        assert admin_client.put("/settings", json=["bio"]).status_code == 400


class TestThemeCss:
    def test_default_css(self, client):
        resp = client.get("/theme.css")
        assert resp.status_code == 200
        assert resp.mimetype == "text/css"
        css = resp.get_data(as_text=True)
        assert "family=EB+Garamond" in css
        assert "--color-primary: #000000;" in css

    def test_css_follows_saved_theme(self, client, admin_client):
        admin_client.put("/settings", json={"theme": {"preset": "dark", "fontFamily": "Inter"}})
        css = client.get("/theme.css").get_data(as_text=True)
        assert "--color-background: #0a0a0a;" in css
        assert "--font-family: 'Inter'," in css
        assert "sans-serif" in css
