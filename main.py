"""
Main API module for the URL shortener.

Responsibilities:
    - Expose REST endpoints to save a URL under an alias, redirect by alias,
      and delete an alias
    - Map storage errors to HTTP status codes and the JSON envelope
    - Log every request with a request id

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - Settings, logger, storage, generator and manager are built per app and
      passed explicitly; there is no module-level app or global state.
    - Manager owns validation and the alias retry policy; routes stay thin.

Run:
    python main.py                                # uvicorn on URLSHORT_HTTP_ADDRESS
    uvicorn main:create_app --factory --reload    # development

LLM Prompt Example:
    "Explain how to structure a FastAPI service with an application factory,
    injected dependencies, and a clean separation between API and business logic."
"""

from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from auth import basic_auth
from url_shortener.api import schemas
from url_shortener.api.middleware import RequestLoggingMiddleware
from url_shortener.config import Settings, get_settings
from url_shortener.exceptions import AliasExists, NotFound, StorageUnavailable
from url_shortener.logging_setup import setup_logging, with_context
from url_shortener.manager.alias_generator import BaseAliasGenerator, RandomAliasGenerator
from url_shortener.manager.url_manager import UrlManager
from url_shortener.storage.base import BaseStorage
from url_shortener.storage.storage_factory import get_storage


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[BaseStorage] = None,
    generator: Optional[BaseAliasGenerator] = None,
) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        settings (Optional[Settings]): Configuration; read from the environment when omitted.
        storage (Optional[BaseStorage]): Backend; selected from settings when omitted.
        generator (Optional[BaseAliasGenerator]): Alias source; Base62 of settings.alias_length.

    Returns:
        FastAPI: A fully configured application instance.

    Raises:
        StorageUnavailable: Schema could not be created. The app is not built;
            there is no degraded mode without storage.
    """
    settings = settings or get_settings()
    log = setup_logging(settings.env)
    log.info("starting url-shortener env=%s backend=%s", settings.env, settings.storage_backend)
    log.debug("debug messages are enabled")

    if storage is None:
        storage = get_storage(settings)
    try:
        storage.init_schema()
    except StorageUnavailable:
        log.exception("failed to init storage")
        raise

    manager = UrlManager(
        storage=storage,
        generator=generator or RandomAliasGenerator(settings.alias_length),
        max_attempts=settings.alias_max_attempts,
        logger=log.getChild("manager"),
    )
    require_user = basic_auth(settings.http_users)

    app = FastAPI(
        title="URL Shortener",
        description="Short aliases for long URLs",
        docs_url="/docs",
    )
    app.add_middleware(RequestLoggingMiddleware, logger=log.getChild("http"))
    # Exposed for tests and admin scripts.
    app.state.settings = settings
    app.state.storage = storage
    app.state.manager = manager

    def _request_log(request: Request, operation: str):
        return with_context(
            log,
            operation=operation,
            request_id=getattr(request.state, "request_id", "-"),
        )

    def _error(status_code: int, msg: str) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=schemas.error(msg))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        _request_log(request, "handlers.validation").info("invalid request: %s", exc.errors())
        return JSONResponse(status_code=422, content=schemas.validation_error(exc.errors()))

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/health")
    def health() -> Dict[str, Any]:
        return schemas.ok()

    @app.post("/url", dependencies=[Depends(require_user)])
    def save_url(req: schemas.SaveRequest, request: Request):
        """
        Save a URL under the supplied alias, or under a generated one.

        Returns:
            dict: {"status": "OK", "alias": "<alias>"}
        """
        rlog = _request_log(request, "handlers.url.save")
        rlog.info("request body decoded: url=%s alias=%s", req.url, req.alias)
        try:
            saved = manager.save_url(req.url, req.alias or None)
        except ValueError as ve:
            rlog.info("invalid request: %s", ve)
            detail = str(ve)
            if detail == "Invalid URL format":
                detail = "field url is not a valid URL"
            return _error(400, detail)
        except AliasExists as exc:
            rlog.info("alias already exists: %s", exc.alias)
            return _error(409, "alias already exists")
        except StorageUnavailable:
            rlog.exception("failed to add url")
            return _error(500, "failed to add url")

        rlog.info("url added: id=%d alias=%s", saved.id, saved.alias)
        return schemas.ok(alias=saved.alias)

    @app.delete("/url/{alias}", dependencies=[Depends(require_user)])
    def delete_url(alias: str, request: Request):
        rlog = _request_log(request, "handlers.url.delete")
        rlog.info("received request to delete url: alias=%s", alias)
        try:
            manager.delete_url(alias)
        except NotFound:
            rlog.info("url not found: alias=%s", alias)
            return _error(404, "not found")
        except StorageUnavailable:
            rlog.exception("failed to delete url")
            return _error(500, "failed to delete url")

        rlog.info("url deleted: alias=%s", alias)
        return schemas.ok()

    @app.get("/{alias}", name="redirect_url")
    def redirect_url(alias: str, request: Request):
        """Redirect (302) to the URL stored under `alias`."""
        rlog = _request_log(request, "handlers.redirect")
        try:
            target = manager.get_url(alias)
        except NotFound:
            rlog.info("url not found: alias=%s", alias)
            return _error(404, "not found")
        except StorageUnavailable:
            rlog.exception("failed to get url")
            return _error(500, "internal error")

        rlog.info("got url: alias=%s url=%s", alias, target)
        return RedirectResponse(url=target, status_code=302)

    return app


def serve(settings: Optional[Settings] = None) -> None:
    """Run the app with uvicorn using the HTTP settings."""
    import uvicorn

    settings = settings or get_settings()
    host, port = settings.http_host_port
    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        timeout_keep_alive=settings.http_idle_timeout,
        timeout_graceful_shutdown=settings.http_timeout,
        log_config=None,
    )


if __name__ == "__main__":
    serve()
