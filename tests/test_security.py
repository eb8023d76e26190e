"""Security and API-surface tests.

Tests:
- Security headers are present on responses
- CORS origin reflection
- Unknown /api paths and bad methods return JSON errors
- Ping / audit-log endpoints
- Rate limiting configuration
"""

from tarhal.services.audit_service import log_audit_action


class TestSecurityHeaders:

    def test_x_content_type_options(self, client):
        response = client.get("/api/ping")
        assert response.headers.get("X-Content-Type-Options") == "nosniff"

    def test_x_frame_options(self, client):
        response = client.get("/api/ping")
        assert response.headers.get("X-Frame-Options") == "DENY"

    def test_referrer_policy(self, client):
        response = client.get("/api/ping")
        assert response.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"

    def test_api_responses_are_json(self, client):
        response = client.get("/api/ping")
        assert response.mimetype == "application/json"


class TestCors:

    def test_origin_reflected_when_unrestricted(self, client):
        response = client.get("/api/ping", headers={"Origin": "https://app.example.com"})
        assert response.headers.get("Access-Control-Allow-Origin") == "https://app.example.com"

    def test_disallowed_origin(self, app, client):
        app.config["CORS_ORIGINS"] = ["https://admin.example.com"]
        try:
            response = client.get("/api/ping", headers={"Origin": "https://evil.example.com"})
        finally:
            app.config["CORS_ORIGINS"] = []
        assert "Access-Control-Allow-Origin" not in response.headers


class TestJsonErrors:

    def test_unknown_api_path(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        body = response.get_json()
        assert body["success"] is False

    def test_method_not_allowed(self, client):
        response = client.patch("/api/ping")
        assert response.status_code == 405
        assert response.get_json()["success"] is False


class TestSystemEndpoints:

    def test_ping(self, client):
        response = client.get("/api/ping")
        assert response.get_json()["message"] == "pong"

    def test_audit_logs_admin_only(self, client, supervisor_headers):
        assert client.get("/api/audit-logs").status_code == 401
        assert client.get("/api/audit-logs", headers=supervisor_headers).status_code == 403

    def test_audit_logs_filtered(self, client, admin, admin_headers):
        log_audit_action(admin.id, "update", "countries", "country_1")
        log_audit_action(admin.id, "update", "cities", "city_1")

        response = client.get("/api/audit-logs?table_name=cities", headers=admin_headers)
        data = response.get_json()["data"]
        assert [e["record_id"] for e in data] == ["city_1"]


class TestRateLimiting:

    def test_limiter_disabled_in_testing(self, app):
        assert app.config["RATELIMIT_ENABLED"] is False

    def test_login_limit_configured(self, app):
        assert app.config["LOGIN_RATE_LIMIT"]

