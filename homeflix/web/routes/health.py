"""
Route de sante.

GET /api/health : 200 si le catalogue est charge et la racine media presente,
503 sinon.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/api/health")
async def health(request: Request):
    """Etat du catalogue et de la racine media."""
    container = request.app.state.container
    settings = container.config()
    state = container.catalog_store().state

    media_root_exists = container.file_system().is_dir(settings.media_root)
    config_loaded = state.catalog is not None
    healthy = config_loaded and media_root_exists

    payload = {
        "status": "ok" if healthy else "error",
        "configLoaded": config_loaded,
        "mediaRoot": str(settings.media_root),
        "mediaRootExists": media_root_exists,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if state.error:
        payload["error"] = state.error
    elif not config_loaded:
        payload["error"] = "Config not loaded"
    elif not media_root_exists:
        payload["error"] = f"Media root not found: {settings.media_root}"

    return JSONResponse(payload, status_code=200 if healthy else 503)
