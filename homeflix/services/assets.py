"""
Localisation des images (affiches, vignettes, fonds) sous la racine media.

Meme resolveur que le streaming, sans gestion de plage : le fichier est
servi en entier avec une directive de cache longue. Seules les extensions
de IMAGE_MIME_TYPES sont acceptees.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from homeflix.core.exceptions import AccessDenied, InvalidRequest, MediaNotFound
from homeflix.core.ports.file_system import IFileSystem
from homeflix.services.path_resolver import resolve_path
from homeflix.utils.constants import IMAGE_MIME_TYPES


@dataclass(frozen=True)
class Asset:
    """Image resolue, prete a etre servie."""

    path: Path
    size: int
    content_type: str


class AssetLocator:
    """Resout et valide les chemins d'images demandes par les clients."""

    def __init__(self, file_system: IFileSystem, media_root: Path) -> None:
        self._file_system = file_system
        self._media_root = Path(media_root)

    def locate(self, raw_path: Optional[str]) -> Asset:
        """
        Resout une image depuis le parametre `path` brut (encode ou non).

        Raises:
            InvalidRequest: Parametre manquant ou extension non autorisee
            AccessDenied: Chemin hors de la racine media
            MediaNotFound: Fichier absent
        """
        if not raw_path:
            raise InvalidRequest("Missing path parameter")

        resolved = resolve_path(self._media_root, raw_path)
        if resolved is None:
            logger.warning(f"Chemin d'image refuse (hors racine media): {raw_path!r}")
            raise AccessDenied()

        if not self._file_system.is_file(resolved):
            raise MediaNotFound("File")

        content_type = IMAGE_MIME_TYPES.get(resolved.suffix.lower())
        if content_type is None:
            raise InvalidRequest("Invalid file type")

        return Asset(
            path=resolved,
            size=self._file_system.get_size(resolved),
            content_type=content_type,
        )
