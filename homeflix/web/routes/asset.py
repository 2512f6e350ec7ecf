"""
Route des images (affiches, vignettes, fonds).

GET /api/asset?path=<chemin relatif a la racine media>
"""

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from ...services.streaming import iter_file

router = APIRouter()


@router.get("/api/asset")
async def get_asset(request: Request, path: Optional[str] = None):
    """Sert une image complete avec une directive de cache longue."""
    container = request.app.state.container
    settings = container.config()
    asset = container.asset_locator().locate(path)

    return StreamingResponse(
        iter_file(asset.path, 0, asset.size - 1, settings.stream_chunk_size),
        headers={
            "Content-Length": str(asset.size),
            "Cache-Control": f"public, max-age={settings.asset_cache_max_age}",
        },
        media_type=asset.content_type,
    )
