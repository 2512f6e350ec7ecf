"""
Route de diffusion video.

GET /api/stream?collectionId=...&season=...&ep=...  (episode de serie)
GET /api/stream?collectionId=...                     (film)

Reponse 200 (fichier complet) ou 206 (plage demandee par l'en-tete Range).
Aucun verrou n'est tenu pendant le transfert : l'instantane du catalogue
n'est consulte que pour localiser le fichier.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Header, Query, Request
from fastapi.responses import StreamingResponse

from ...services.streaming import MediaRequest

router = APIRouter()


@router.get("/api/stream")
async def stream_media(
    request: Request,
    collection_id: Annotated[Optional[str], Query(alias="collectionId")] = None,
    season: Optional[str] = None,
    ep: Optional[str] = None,
    range_header: Annotated[Optional[str], Header(alias="range")] = None,
):
    """Diffuse un episode ou un film, avec prise en charge des plages d'octets."""
    container = request.app.state.container
    media_request = MediaRequest.from_query(collection_id, season, ep)

    catalog = container.catalog_store().require_catalog()
    streamer = container.media_streamer()
    prepared = streamer.prepare(catalog, media_request, range_header)

    return StreamingResponse(
        prepared.body(streamer.chunk_size),
        status_code=prepared.status_code,
        headers=prepared.headers,
        media_type=prepared.content_type,
    )
