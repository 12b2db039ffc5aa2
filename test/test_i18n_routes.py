"""
Application-level tests: i18n routes, health, pages and error responses
through the fully assembled app from ``main.create_app``.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from legalhub.config import Settings
from legalhub.dependencies import get_request_locale
from legalhub.exceptions import LocaleConfigurationError
from legalhub.i18n.locale import Locale


class TestLanguagesEndpoint:
    def test_is_public_and_bypasses_locale_routing(self, client):
        response = client.get("/api/i18n/languages")
        assert response.status_code == 200

    def test_lists_locales_in_registry_order(self, client):
        data = client.get("/api/i18n/languages").json()
        assert [lang["code"] for lang in data] == ["ka", "en", "ru"]

    def test_response_fields(self, client):
        first = client.get("/api/i18n/languages").json()[0]
        assert first == {"code": "ka", "name": "ქართული", "label": "KA", "is_default": True}


class TestSwitchEndpoint:
    def test_sets_cookie_and_redirects_to_translated_page(self, client):
        response = client.get("/api/i18n/switch", params={"locale": "en", "next": "/ka/companies?city=batumi"})
        assert response.status_code == 303
        assert response.headers["location"] == "/en/companies?city=batumi"
        cookie = response.headers["set-cookie"]
        assert "NEXT_LOCALE=en" in cookie
        assert "Max-Age=31536000" in cookie
        assert "Path=/" in cookie

    def test_default_next_is_home(self, client):
        response = client.get("/api/i18n/switch", params={"locale": "ru"})
        assert response.headers["location"] == "/ru"

    @pytest.mark.parametrize("next_path", ["https://evil.example/ka", "//evil.example", "/\\evil.example"])
    def test_external_next_is_ignored(self, client, next_path):
        response = client.get("/api/i18n/switch", params={"locale": "en", "next": next_path})
        assert response.headers["location"] == "/en"

    def test_unsupported_locale_rejected(self, client):
        response = client.get("/api/i18n/switch", params={"locale": "de", "next": "/ka"})
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["error_code"] == "LOCALE_UNSUPPORTED"
        assert error["details"]["supported_locales"] == ["ka", "en", "ru"]
        assert error["path"] == "/api/i18n/switch"
        assert "set-cookie" not in response.headers

    def test_missing_locale_is_validation_error(self, client):
        response = client.get("/api/i18n/switch")
        assert response.status_code == 422
        assert response.json()["error"]["error_code"] == "VALIDATION_FAILED"

    def test_switched_cookie_drives_next_redirect(self, app):
        client = TestClient(app, follow_redirects=False)
        client.get("/api/i18n/switch", params={"locale": "ru", "next": "/ka"})
        response = client.get("/specialists")
        assert response.headers["location"] == "http://testserver/ru/specialists"

    def test_configured_cookie_name_is_written_and_read(self):
        from main import create_app

        client = TestClient(create_app(Settings(locale_cookie_name="lang")), follow_redirects=False)
        switched = client.get("/api/i18n/switch", params={"locale": "ru", "next": "/ka"})
        assert "lang=ru" in switched.headers["set-cookie"]
        assert "NEXT_LOCALE" not in switched.headers["set-cookie"]

        response = client.get("/specialists")
        assert response.headers["location"] == "http://testserver/ru/specialists"

    def test_configured_cookie_max_age(self):
        from main import create_app

        client = TestClient(create_app(Settings(locale_cookie_max_age=600)), follow_redirects=False)
        response = client.get("/api/i18n/switch", params={"locale": "en"})
        assert "Max-Age=600" in response.headers["set-cookie"]


class TestAssembledApp:
    def test_health_is_bypassed(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_root_redirects_to_default_locale(self, client):
        response = client.get("/")
        assert response.status_code == 307
        assert response.headers["location"] == "http://testserver/ka"

    def test_request_id_header_on_redirect(self, client):
        response = client.get("/news")
        assert "X-Request-ID" in response.headers

    def test_locale_home_page(self, client):
        response = client.get("/en")
        assert response.status_code == 200
        assert response.json() == {"locale": "en", "page": "/"}

    def test_locale_nested_page(self, client):
        response = client.get("/ru/news/category/tax")
        assert response.json() == {"locale": "ru", "page": "/news/category/tax"}

    def test_end_to_end_follow(self, app):
        client = TestClient(app, cookies={"NEXT_LOCALE": "en"})
        response = client.get("/companies?city=tbilisi")
        assert response.status_code == 200
        assert response.json() == {"locale": "en", "page": "/companies"}
        assert str(response.url) == "http://testserver/en/companies?city=tbilisi"

    def test_custom_settings(self):
        from main import create_app

        app = create_app(Settings(supported_locales=["en", "ka"], default_locale="en", redirect_status_code=302))
        client = TestClient(app, follow_redirects=False)
        response = client.get("/")
        assert response.status_code == 302
        assert response.headers["location"] == "http://testserver/en"
        # "ru" is not served here, so it is just another unprefixed page
        assert client.get("/ru/news").headers["location"] == "http://testserver/en/ru/news"

    def test_bad_locale_configuration_fails_at_startup(self):
        from main import create_app

        with pytest.raises(LocaleConfigurationError):
            create_app(Settings(supported_locales=["en", "ru"], default_locale="ka"))

    def test_session_refresher_injected(self):
        from main import create_app

        async def refresher(request, call_next):
            response = await call_next(request)
            response.headers["X-Session"] = "checked"
            return response

        client = TestClient(create_app(session_refresher=refresher), follow_redirects=False)
        assert client.get("/ka/companies").headers["X-Session"] == "checked"
        assert "X-Session" not in client.get("/api/health").headers


class TestRequestLocaleDependency:
    @staticmethod
    def _request(app, path: str):
        from starlette.requests import Request

        return Request(
            {
                "type": "http",
                "method": "GET",
                "scheme": "http",
                "path": path,
                "query_string": b"",
                "headers": [],
                "server": ("testserver", 80),
                "app": app,
            }
        )

    def test_prefixed_path(self, app):
        assert get_request_locale(self._request(app, "/ru/news")) is Locale.RU

    def test_unprefixed_path_uses_default(self, app):
        assert get_request_locale(self._request(app, "/api/health")) is Locale.KA


class TestPageLocale:
    def test_unprefixed_page_segment_is_not_found(self, client):
        # Bypassed by the middleware, so it reaches the page routes without a locale
        response = client.get("/api/unknown")
        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_NOT_FOUND"

    def test_page_locale_comes_from_dependency(self, app):
        app.dependency_overrides[get_request_locale] = lambda: Locale.EN
        client = TestClient(app, follow_redirects=False)
        assert client.get("/en/companies").json() == {"locale": "en", "page": "/companies"}
        assert client.get("/ka/companies").status_code == 404


class TestConfiguredApiPrefix:
    @pytest.fixture
    def backend_app(self):
        from main import create_app

        return create_app(Settings(api_path_prefix="backend", app_name="LegalHub Staging"))

    def test_health_served_under_prefix(self, backend_app):
        client = TestClient(backend_app, follow_redirects=False)
        response = client.get("/backend/health")
        assert response.status_code == 200
        assert response.json()["app"] == "LegalHub Staging"
        assert client.get("/backend/i18n/languages").status_code == 200

    def test_old_prefix_is_a_page_path(self, backend_app):
        client = TestClient(backend_app, follow_redirects=False)
        response = client.get("/api/health")
        assert response.status_code == 307
        assert response.headers["location"] == "http://testserver/ka/api/health"

    def test_health_under_prefix_not_access_logged(self, backend_app, caplog):
        client = TestClient(backend_app, follow_redirects=False)

        with caplog.at_level(logging.INFO, logger="legalhub.access"):
            client.get("/backend/health")
            client.get("/api/health")

        paths = [r.path for r in caplog.records if r.name == "legalhub.access"]
        assert paths == ["/api/health"]
