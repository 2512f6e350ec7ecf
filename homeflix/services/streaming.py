"""
Diffusion des fichiers video avec prise en charge des plages d'octets.

Chaine de traitement d'une demande de lecture :
1. recherche de la collection, puis saison et episode par numero (jamais par position)
2. chemin relatif : `path/Season NN/filename` (serie) ou `path/filename` (film)
3. resolution confinee a la racine media (Forbidden sinon)
4. verification d'existence du fichier (Not Found sinon)
5. interpretation de l'en-tete Range (200 complet ou 206 partiel)

Le corps est lu par blocs bornes avec aiofiles : un fichier n'est jamais
charge entierement en memoire, et la lecture suit le rythme du client.
"""

import asyncio
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles
from loguru import logger

from homeflix.core.entities import Catalog, Collection, MovieCollection, SeriesCollection
from homeflix.core.exceptions import (
    AccessDenied,
    InvalidRequest,
    MediaNotFound,
    RangeNotSatisfiable,
)
from homeflix.core.ports.file_system import IFileSystem
from homeflix.services.path_resolver import resolve_path
from homeflix.utils.constants import SEASON_FOLDER_FORMAT, STREAM_CHUNK_SIZE, VIDEO_CONTENT_TYPE

# Positions bornees a 18 chiffres ; au-dela la plage est ignoree (fichier complet)
_RANGE_PATTERN = re.compile(r"^bytes=(\d{0,18})-(\d{0,18})$", re.IGNORECASE)


def season_folder(season_number: int) -> str:
    """Nom du dossier de saison : 'Season 01', 'Season 12', ..."""
    return SEASON_FOLDER_FORMAT.format(season_number)


@dataclass(frozen=True)
class ByteRange:
    """
    Plage d'octets inclusive [start, end].

    Attributes:
        start: Premier octet servi
        end: Dernier octet servi (inclus)
    """

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, size: int) -> str:
        return f"bytes {self.start}-{self.end}/{size}"


def parse_range(header: Optional[str], size: int) -> Optional[ByteRange]:
    """
    Interprete un en-tete Range a plage unique.

    Formes acceptees : `bytes=start-end`, `bytes=start-` et `bytes=-suffixe`.
    Une fin au-dela du fichier est ramenee a size-1.

    Returns:
        La plage a servir, ou None pour servir le fichier complet (en-tete
        absent, syntaxe invalide, start > end, multi-plages)

    Raises:
        RangeNotSatisfiable: Plage valide mais ne recouvrant aucun octet
    """
    if header is None:
        return None

    match = _RANGE_PATTERN.match(header.strip().replace(" ", ""))
    if match is None:
        return None

    start_text, end_text = match.groups()
    if not start_text and not end_text:
        return None

    if not start_text:
        # Suffixe : les N derniers octets
        suffix = int(end_text)
        if suffix == 0 or size == 0:
            raise RangeNotSatisfiable(size)
        return ByteRange(start=max(size - suffix, 0), end=size - 1)

    start = int(start_text)
    end = int(end_text) if end_text else size - 1
    if end_text and end < start:
        return None
    if start >= size:
        raise RangeNotSatisfiable(size)
    return ByteRange(start=start, end=min(end, size - 1))


async def iter_file(
    path: Path, start: int, end: int, chunk_size: int = STREAM_CHUNK_SIZE
) -> AsyncIterator[bytes]:
    """
    Lit les octets [start, end] d'un fichier par blocs d'au plus chunk_size.

    Le descripteur est ferme des que le generateur se termine, y compris
    quand le client se deconnecte en cours de transfert (annulation).
    Une erreur d'E/S interrompt le transfert sans nouvelle tentative.
    """
    remaining = end - start + 1
    sent = 0
    try:
        async with aiofiles.open(path, "rb") as f:
            await f.seek(start)
            while remaining > 0:
                data = await f.read(min(chunk_size, remaining))
                if not data:
                    break
                remaining -= len(data)
                sent += len(data)
                yield data
    except (asyncio.CancelledError, GeneratorExit):
        logger.debug(f"Transfert interrompu par le client: {path} ({sent} octets envoyes)")
        raise
    except OSError as e:
        logger.warning(f"Erreur de lecture pendant le transfert de {path}: {e}")
        raise


@dataclass(frozen=True)
class MediaRequest:
    """
    Adresse d'un media dans le catalogue.

    Sans saison ni episode, la demande vise un film.
    """

    collection_id: str
    season: Optional[int] = None
    episode: Optional[int] = None

    @property
    def is_movie(self) -> bool:
        return self.season is None and self.episode is None

    @classmethod
    def from_query(
        cls,
        collection_id: Optional[str],
        season: Optional[str] = None,
        episode: Optional[str] = None,
    ) -> "MediaRequest":
        """
        Construit une demande depuis les parametres de requete bruts.

        Raises:
            InvalidRequest: Parametre manquant ou numero non entier
        """
        if not collection_id:
            raise InvalidRequest("Missing required parameters")
        if season is None and episode is None:
            return cls(collection_id=collection_id)
        if season is None or episode is None:
            raise InvalidRequest("Missing required parameters")
        return cls(
            collection_id=collection_id,
            season=_parse_number(season),
            episode=_parse_number(episode),
        )


def _parse_number(value: str) -> int:
    value = value.strip()
    if not value.isdecimal():
        raise InvalidRequest("Invalid season or episode number")
    try:
        return int(value)
    except ValueError:
        # Depasse la limite de conversion des entiers
        raise InvalidRequest("Invalid season or episode number") from None


@dataclass(frozen=True)
class PreparedStream:
    """
    Flux pret a etre envoye : fichier resolu, taille et plage eventuelle.

    Le chemin est fige au moment de la preparation : un rechargement du
    catalogue pendant le transfert n'affecte pas ce flux.
    """

    path: Path
    size: int
    byte_range: Optional[ByteRange] = None
    content_type: str = VIDEO_CONTENT_TYPE

    @property
    def status_code(self) -> int:
        return 206 if self.byte_range is not None else 200

    @property
    def headers(self) -> dict[str, str]:
        if self.byte_range is None:
            return {
                "Accept-Ranges": "bytes",
                "Content-Length": str(self.size),
                "Content-Type": self.content_type,
            }
        return {
            "Accept-Ranges": "bytes",
            "Content-Range": self.byte_range.content_range(self.size),
            "Content-Length": str(self.byte_range.length),
            "Content-Type": self.content_type,
        }

    def body(self, chunk_size: int = STREAM_CHUNK_SIZE) -> AsyncIterator[bytes]:
        if self.byte_range is None:
            return iter_file(self.path, 0, self.size - 1, chunk_size)
        return iter_file(self.path, self.byte_range.start, self.byte_range.end, chunk_size)


class MediaStreamer:
    """
    Localise les fichiers video du catalogue et prepare leur diffusion.

    Example:
        streamer = MediaStreamer(FileSystemAdapter(), media_root=Path("/media"))
        prepared = streamer.prepare(catalog, MediaRequest("bb", 1, 1), "bytes=0-")
    """

    def __init__(
        self,
        file_system: IFileSystem,
        media_root: Path,
        chunk_size: int = STREAM_CHUNK_SIZE,
    ) -> None:
        self._file_system = file_system
        self._media_root = Path(media_root)
        self.chunk_size = chunk_size

    def relative_path(self, catalog: Catalog, request: MediaRequest) -> str:
        """
        Calcule le chemin du fichier, relatif a la racine media.

        Une demande d'episode sur un film (ou l'inverse) est traitee comme
        une ressource inexistante a cette adresse.

        Raises:
            MediaNotFound: Collection, saison ou episode introuvable
        """
        collection: Optional[Collection] = catalog.find_collection(request.collection_id)
        if collection is None:
            raise MediaNotFound("Collection")

        match collection:
            case SeriesCollection():
                if request.is_movie:
                    raise MediaNotFound("Movie", f'"{collection.id}" is a series, not a movie')
                season = collection.find_season(request.season)
                if season is None:
                    raise MediaNotFound("Season")
                episode = season.find_episode(request.episode)
                if episode is None:
                    raise MediaNotFound("Episode")
                return os.path.join(
                    collection.path, season_folder(season.number), episode.filename
                )
            case MovieCollection():
                if not request.is_movie:
                    raise MediaNotFound("Episode", f'"{collection.id}" is a movie, not a series')
                return os.path.join(collection.path, collection.filename)

    def locate(self, catalog: Catalog, request: MediaRequest) -> Path:
        """
        Resout le fichier video d'une demande.

        Raises:
            MediaNotFound: Element du catalogue ou fichier introuvable
            AccessDenied: Chemin hors de la racine media
        """
        relative = self.relative_path(catalog, request)
        resolved = resolve_path(self._media_root, relative, decode=False)
        if resolved is None:
            logger.warning(f"Chemin refuse (hors racine media): {relative!r}")
            raise AccessDenied()
        if not self._file_system.is_file(resolved):
            raise MediaNotFound("File")
        return resolved

    def prepare(
        self, catalog: Catalog, request: MediaRequest, range_header: Optional[str] = None
    ) -> PreparedStream:
        """
        Prepare la reponse (statut, en-tetes, plage) pour une demande.

        Raises:
            MediaNotFound, AccessDenied, RangeNotSatisfiable
        """
        path = self.locate(catalog, request)
        size = self._file_system.get_size(path)
        byte_range = parse_range(range_header, size)
        if byte_range is not None:
            logger.debug(f"Plage {byte_range.content_range(size)} de {path}")
        return PreparedStream(path=path, size=size, byte_range=byte_range)
