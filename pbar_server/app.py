from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError

from . import __version__
from .fields import derive_context
from .log import configure_logging
from .models import QueryArgs
from .rendering import (
    TemplateLookupError,
    TemplateRenderError,
    TemplateStore,
)
from .settings import Settings

logger = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml; charset=utf-8"
UNKNOWN_PEER = "<UNKNOWN>"

router = APIRouter()


def get_template_store(request: Request) -> TemplateStore:
    return request.app.state.template_store


def _log_header(request: Request) -> str:
    peer = request.client.host if request.client else UNKNOWN_PEER
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    return f"request from {peer} with query {target}"


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "query"
        problems.append(f"{field}: {error['msg']}")
    return "Invalid query parameters: " + "; ".join(problems)


def _duplicated_fields(request: Request) -> list[str]:
    keys = [key for key, _ in request.query_params.multi_items()]
    return sorted(
        {key for key in keys if key in QueryArgs.model_fields and keys.count(key) > 1}
    )


def _text(status_code: int, body: str) -> PlainTextResponse:
    return PlainTextResponse(body, status_code=status_code)


@router.get("/")
async def serve_progress_svg_image(
    request: Request,
    store: TemplateStore = Depends(get_template_store),
) -> Response:
    log_header = _log_header(request)

    duplicated = _duplicated_fields(request)
    if duplicated:
        message = "Invalid query parameters: " + "; ".join(
            f"{key}: Parameter given more than once" for key in duplicated
        )
        logger.warning(f"{log_header} - Rejected. {message}")
        return _text(status.HTTP_400_BAD_REQUEST, message)

    try:
        query = QueryArgs.model_validate(dict(request.query_params))
    except ValidationError as exc:
        message = _describe_validation_error(exc)
        logger.warning(f"{log_header} - Rejected. {message}")
        return _text(status.HTTP_400_BAD_REQUEST, message)

    try:
        template = store.lookup()
    except TemplateLookupError as exc:
        message = (
            "Failed to find template. It probably a bug. "
            f"Please report it to the Developer. {exc}"
        )
        logger.error(f"{log_header} -> {message}")
        return _text(status.HTTP_500_INTERNAL_SERVER_ERROR, message)

    context = derive_context(query)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"{log_header} - Parsed query arguments: {json.dumps(context)}")

    try:
        svg = store.render(template, context)
    except TemplateRenderError as exc:
        logger.warning(f"{log_header} - Failed. Probably bad query parameters: {exc}")
        return _text(
            status.HTTP_400_BAD_REQUEST,
            f"Failed to construct progress bar with parameters: {json.dumps(context)}",
        )

    logger.info(f"{log_header} - OK")
    return Response(svg, status_code=status.HTTP_200_OK, media_type=SVG_MEDIA_TYPE)


def create_app(store: TemplateStore) -> FastAPI:
    """Build the ASGI app around an already loaded template store."""
    app = FastAPI(
        title="Progress Bar SVG Server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.template_store = store
    app.include_router(router)
    return app


def create_app_from_settings() -> FastAPI:
    """App factory for uvicorn workers; reads ``PBAR_*`` settings."""
    settings = Settings()
    configure_logging(settings.log_level)
    store = TemplateStore.load(settings.template_file)
    return create_app(store)


__all__ = ["create_app", "create_app_from_settings", "get_template_store", "router"]
