"""CORS permissif appliqué à toutes les requêtes."""

import logging
from typing import Callable

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS, PATCH, HEAD",
    "Access-Control-Max-Age": "3600",
    "Access-Control-Allow-Headers": (
        "Content-Type, Authorization, X-Requested-With, Accept, Origin, "
        "Access-Control-Request-Method, Access-Control-Request-Headers"
    ),
    "Access-Control-Expose-Headers": "Location, Content-Disposition",
}


class SimpleCORSMiddleware(BaseHTTPMiddleware):
    """
    Ajoute les en-têtes CORS à chaque réponse.

    Toute requête OPTIONS (preflight) reçoit 200 sans corps, sans passer par
    le routage, quel que soit le chemin.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method.upper() == "OPTIONS":
            logger.debug(f"Preflight OPTIONS {request.url.path}")
            return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
