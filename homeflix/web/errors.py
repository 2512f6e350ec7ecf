"""
Conversion des exceptions metier en reponses HTTP.

Chaque erreur devient un statut HTTP et un corps JSON structure :
{"error": <libelle court>, "message": <detail>}.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    AccessDenied,
    CatalogLoadError,
    CatalogUnavailable,
    HomeflixError,
    InvalidRequest,
    MediaNotFound,
    RangeNotSatisfiable,
)

# Type d'exception -> (statut HTTP, libelle)
_ERROR_STATUS: tuple[tuple[type[HomeflixError], int, str], ...] = (
    (InvalidRequest, 400, "Bad request"),
    (AccessDenied, 403, "Forbidden"),
    (MediaNotFound, 404, "Not found"),
    (RangeNotSatisfiable, 416, "Range not satisfiable"),
    (CatalogUnavailable, 500, "Config error"),
    (CatalogLoadError, 500, "Config error"),
)


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    """Construit une reponse d'erreur JSON."""
    return JSONResponse({"error": error, "message": message}, status_code=status_code)


async def homeflix_error_handler(request: Request, exc: HomeflixError) -> JSONResponse:
    """Gestionnaire FastAPI pour toutes les HomeflixError."""
    for exc_type, status_code, label in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            break
    else:
        status_code, label = 500, "Internal error"

    response = error_response(status_code, label, str(exc))
    if isinstance(exc, RangeNotSatisfiable):
        response.headers["Content-Range"] = f"bytes */{exc.size}"
        response.headers["Accept-Ranges"] = "bytes"
    return response
