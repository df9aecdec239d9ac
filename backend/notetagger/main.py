from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.v1.router import api_router
from .config import Settings, settings
from .utils.logging import setup_logging


def create_app(app_settings: Settings = settings) -> FastAPI:
    setup_logging(app_settings.log_level)

    app = FastAPI(
        title="Notes Tagger API",
        debug=app_settings.debug,
        version="0.1.0",
        root_path=app_settings.root_path,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_origin_regex=app_settings.cors_origin_regex,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=600,
    )

    if app_settings.forwarded_allow_ips:
        app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=app_settings.forwarded_allow_ips)

    app.add_middleware(TrustedHostMiddleware, allowed_hosts=app_settings.trusted_hosts)
    # Note bodies can be large
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.include_router(api_router, prefix=app_settings.api_prefix)
    return app


app = create_app()
