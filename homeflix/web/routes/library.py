"""
Routes de lecture du catalogue (JSON).

Expose l'instantane courant dans la forme du fichier de bibliotheque :
- GET /api/library : catalogue complet
- GET /api/collections : resume des collections
- GET /api/collections/{id} : une collection
- GET /api/collections/{id}/seasons/{season} : une saison
- GET /api/collections/{id}/seasons/{season}/episodes/{ep} : un episode et sa navigation
"""

from dataclasses import asdict
from typing import Any, Optional

from fastapi import APIRouter, Request

from ...core.entities import Catalog, Collection, Episode, MovieCollection, Season, SeriesCollection
from ...core.exceptions import InvalidRequest, MediaNotFound

router = APIRouter(prefix="/api")


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """Retire les champs optionnels absents."""
    return {key: value for key, value in data.items() if value is not None}


def episode_payload(episode: Episode) -> dict[str, Any]:
    return _compact(asdict(episode))


def season_payload(season: Season) -> dict[str, Any]:
    return _compact(
        {
            "number": season.number,
            "episodes": [episode_payload(episode) for episode in season.episodes],
            "poster": season.poster,
        }
    )


def collection_payload(collection: Collection) -> dict[str, Any]:
    """Serialise une collection dans la forme du fichier YAML (champ `type` inclus)."""
    payload: dict[str, Any] = {
        "id": collection.id,
        "title": collection.title,
        "type": collection.kind.value,
        "path": collection.path,
        "poster": collection.poster,
        "backdrop": collection.backdrop,
        "description": collection.description,
    }
    match collection:
        case SeriesCollection():
            payload["seasons"] = [season_payload(season) for season in collection.seasons]
        case MovieCollection():
            payload["filename"] = collection.filename
    return _compact(payload)


def collection_summary(collection: Collection) -> dict[str, Any]:
    return _compact(
        {
            "id": collection.id,
            "title": collection.title,
            "type": collection.kind.value,
            "poster": collection.poster,
            "backdrop": collection.backdrop,
        }
    )


def _catalog(request: Request) -> Catalog:
    return request.app.state.container.catalog_store().require_catalog()


def _collection(catalog: Catalog, collection_id: str) -> Collection:
    collection = catalog.find_collection(collection_id)
    if collection is None:
        raise MediaNotFound("Collection", f'Collection "{collection_id}" not found')
    return collection


def _season(collection: Collection, season_number: int) -> Season:
    season: Optional[Season] = None
    match collection:
        case SeriesCollection():
            season = collection.find_season(season_number)
        case MovieCollection():
            raise MediaNotFound("Season", f'"{collection.id}" is a movie')
    if season is None:
        raise MediaNotFound(
            "Season", f'Season {season_number} not found in "{collection.id}"'
        )
    return season


def _parse_int(value: str, message: str) -> int:
    value = value.strip()
    if not value.isdecimal():
        raise InvalidRequest(message)
    try:
        return int(value)
    except ValueError:
        raise InvalidRequest(message) from None


@router.get("/library")
async def library(request: Request):
    """Catalogue complet."""
    catalog = _catalog(request)
    return {"collections": [collection_payload(c) for c in catalog.collections]}


@router.get("/collections")
async def collections(request: Request):
    """Resume des collections (id, titre, type, images)."""
    catalog = _catalog(request)
    return [collection_summary(c) for c in catalog.collections]


@router.get("/collections/{collection_id}")
async def collection_detail(request: Request, collection_id: str):
    """Detail d'une collection."""
    catalog = _catalog(request)
    return collection_payload(_collection(catalog, collection_id))


@router.get("/collections/{collection_id}/seasons/{season}")
async def season_detail(request: Request, collection_id: str, season: str):
    """Detail d'une saison."""
    season_number = _parse_int(season, "Season must be a number")
    catalog = _catalog(request)
    collection = _collection(catalog, collection_id)
    return season_payload(_season(collection, season_number))


@router.get("/collections/{collection_id}/seasons/{season}/episodes/{ep}")
async def episode_detail(request: Request, collection_id: str, season: str, ep: str):
    """
    Detail d'un episode avec les episodes precedent et suivant.

    La navigation suit l'ordre de configuration de la saison.
    """
    season_number = _parse_int(season, "Invalid season or episode number")
    episode_number = _parse_int(ep, "Invalid season or episode number")
    catalog = _catalog(request)
    collection = _collection(catalog, collection_id)
    season_data = _season(collection, season_number)

    episode = season_data.find_episode(episode_number)
    if episode is None:
        raise MediaNotFound("Episode", f"Episode {episode_number} not found")

    previous, following = season_data.adjacent_episodes(episode_number)
    return {
        "collection": {"id": collection.id, "title": collection.title},
        "season": season_data.number,
        "episode": episode_payload(episode),
        "previous": _position(previous),
        "next": _position(following),
    }


def _position(episode: Optional[Episode]) -> Optional[dict[str, int]]:
    if episode is None:
        return None
    return {"season": episode.season, "episode": episode.episode}
