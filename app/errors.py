# app/errors.py
# Role: Global error view and 404 page.
#       Unhandled exceptions are logged and answered with the error page
#       (with a reload link back to the failing URL); unknown routes get the
#       static not-found page, or a JSON 404 under /api.

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.deps import templates

logger = logging.getLogger(__name__)


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api/")


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code != 404:
        return await http_exception_handler(request, exc)

    if _wants_json(request):
        return JSONResponse({"error": "API route not found"}, status_code=404)

    return templates.TemplateResponse(request, "not_found.html", {}, status_code=404)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error while serving %s %s", request.method, request.url.path, exc_info=exc)

    if _wants_json(request):
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    # "Reload" re-requests the page that failed
    reload_url = request.url.path
    if request.url.query:
        reload_url = f"{reload_url}?{request.url.query}"

    return templates.TemplateResponse(
        request,
        "error.html",
        {"reload_url": reload_url},
        status_code=500,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
