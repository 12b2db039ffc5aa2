"""
Pytest configuration and fixtures for LegalHub tests
"""

import os
import sys

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from legalhub.i18n.locale import Locale, LocaleRegistry  # noqa: E402
from legalhub.i18n.routing import BypassRules  # noqa: E402
from legalhub.middleware.language import LocaleRoutingMiddleware  # noqa: E402


@pytest.fixture
def registry() -> LocaleRegistry:
    """The site's locales: Georgian default, English, Russian."""
    return LocaleRegistry(locales=(Locale.KA, Locale.EN, Locale.RU), default=Locale.KA)


@pytest.fixture
def rules() -> BypassRules:
    return BypassRules()


def build_routing_app(registry: LocaleRegistry, **middleware_kwargs) -> FastAPI:
    """Minimal app whose catch-all route echoes what reached it."""
    app = FastAPI()

    @app.get("/{full_path:path}")
    async def echo(full_path: str, request: Request):
        return {"path": request.scope["path"], "query": request.scope["query_string"].decode()}

    app.add_middleware(LocaleRoutingMiddleware, registry=registry, **middleware_kwargs)
    return app


@pytest.fixture
def routing_client(registry) -> TestClient:
    return TestClient(build_routing_app(registry), follow_redirects=False)


@pytest.fixture
def app():
    from main import create_app

    return create_app()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, follow_redirects=False)
