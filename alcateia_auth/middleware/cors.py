"""
Cross-origin headers for every response, including errors.

The allow-list is re-read from settings on each request. Unknown or missing
origins get the configured frontend domain instead of being rejected, and
pre-flight requests are answered here before routing.
"""
import logging
from typing import Dict, Optional

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response

from alcateia_auth.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization"


def build_cors_headers(origin: Optional[str], settings: Settings) -> Dict[str, str]:
    allow_origin = origin if origin and origin in settings.allowed_origins else settings.frontend_domain
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Allow-Credentials": "true",
    }


async def cors_middleware(request: Request, call_next):
    cors_headers = build_cors_headers(request.headers.get("origin"), get_settings())

    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers)

    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        response = PlainTextResponse("Internal Server Error", status_code=500)

    response.headers.update(cors_headers)
    return response
