import logging

import uvicorn
from fastapi import FastAPI

from legalhub.config import Settings, settings
from legalhub.exception_handlers import register_exception_handlers
from legalhub.i18n.locale import build_locale_registry
from legalhub.i18n.routing import build_bypass_rules
from legalhub.middleware.language import LocaleRoutingMiddleware
from legalhub.middleware.logging import AccessLogMiddleware, configure_logging
from legalhub.middleware.session import SessionRefresher, forward_request
from legalhub.routes import health
from legalhub.routes.i18n import i18n_router
from legalhub.routes.pages import pages_router

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Settings = settings,
    session_refresher: SessionRefresher = forward_request,
) -> FastAPI:
    """Create the FastAPI application."""
    configure_logging(log_level=app_settings.log_level, json_format=app_settings.json_logs)

    # Fails fast on an inconsistent locale configuration
    registry = build_locale_registry(app_settings)
    rules = build_bypass_rules(app_settings)

    app = FastAPI(
        title=app_settings.app_name,
        description="Multilingual legal services directory",
        debug=app_settings.debug,
        version=app_settings.app_version,
    )
    app.state.settings = app_settings
    app.state.locale_registry = registry
    api_prefix = f"/{app_settings.api_path_prefix}"

    # Starlette middleware is LIFO: logging wraps locale routing so redirects are logged too
    app.add_middleware(
        LocaleRoutingMiddleware,
        registry=registry,
        rules=rules,
        cookie_name=app_settings.locale_cookie_name,
        session_refresher=session_refresher,
        redirect_status=app_settings.redirect_status_code,
    )
    app.add_middleware(
        AccessLogMiddleware,
        registry=registry,
        rules=rules,
        cookie_name=app_settings.locale_cookie_name,
        quiet_paths={f"{api_prefix}/health"},
    )

    register_exception_handlers(app)

    app.include_router(health.router, prefix=api_prefix)
    app.include_router(i18n_router, prefix=f"{api_prefix}/i18n")
    # Registered last so the wildcard page routes never shadow the API
    app.include_router(pages_router)

    logger.info(
        f"Serving locales {', '.join(registry.codes)} (default: {registry.default.value}) in {app_settings.environment} mode"
    )
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
