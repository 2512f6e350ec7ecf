"""
Store du catalogue en memoire.

Detient au plus un instantane (Catalog) immutable et la derniere erreur de
chargement. L'etat complet est un unique objet CatalogState remplace en une
seule affectation : un lecteur observe toujours un etat coherent, jamais un
catalogue a moitie mis a jour.

Cycle de vie :
- UNLOADED au demarrage
- LOADED apres un chargement reussi
- ERROR apres un echec ; l'instantane precedent est abandonne, rien n'est servable
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

from loguru import logger

from homeflix.core.entities import (
    Catalog,
    Collection,
    Episode,
    MovieCollection,
    Season,
    SeriesCollection,
)
from homeflix.core.exceptions import CatalogLoadError, CatalogUnavailable


class CatalogLoader(Protocol):
    """Contrat minimal d'un loader de catalogue (voir YamlCatalogLoader)."""

    def load(self, config_path: Path) -> Catalog: ...


class CatalogStatus(Enum):
    """Etat du store."""

    UNLOADED = "unloaded"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(frozen=True)
class CatalogState:
    """
    Etat visible du store a un instant donne.

    Attributes:
        catalog: Instantane servable, None si jamais charge ou en erreur
        error: Message de la derniere erreur de chargement
        loaded_at: Date (UTC) du dernier chargement reussi
    """

    catalog: Optional[Catalog] = None
    error: Optional[str] = None
    loaded_at: Optional[datetime] = None
    status: CatalogStatus = field(default=CatalogStatus.UNLOADED)


class CatalogStore:
    """
    Store du catalogue avec rechargement atomique.

    Les lecteurs ne prennent aucun verrou. Le verrou interne serialise
    uniquement les rechargements concurrents entre eux.

    Example:
        store = CatalogStore(loader, config_path=Path("/data/library.yml"))
        store.reload()
        catalog = store.get_catalog()
    """

    def __init__(self, loader: CatalogLoader, config_path: Path) -> None:
        """
        Initialise le store (etat UNLOADED).

        Args:
            loader: Loader utilise par load() et reload()
            config_path: Fichier de bibliotheque a charger
        """
        self._loader = loader
        self._config_path = Path(config_path)
        self._state = CatalogState()
        self._reload_lock = threading.Lock()

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def state(self) -> CatalogState:
        """Etat courant (lecture d'une seule reference)."""
        return self._state

    def load(self, config_path: Optional[Path] = None) -> Catalog:
        """
        Charge un catalogue sans modifier l'etat visible.

        Raises:
            CatalogLoadError: Fichier absent, YAML invalide ou schema invalide
        """
        return self._loader.load(config_path or self._config_path)

    def reload(self) -> bool:
        """
        Recharge la configuration et remplace l'etat visible.

        En cas d'echec, l'instantane precedent est abandonne et l'erreur
        est enregistree : un catalogue perime n'est jamais servi.

        Returns:
            True si le chargement a reussi, False sinon
        """
        with self._reload_lock:
            try:
                catalog = self.load()
            except CatalogLoadError as e:
                self._state = CatalogState(error=str(e), status=CatalogStatus.ERROR)
                logger.error(f"Erreur de chargement du catalogue: {e}")
                return False
            except Exception as e:
                self._state = CatalogState(
                    error=f"Unexpected error loading {self._config_path}: {type(e).__name__}: {e}",
                    status=CatalogStatus.ERROR,
                )
                logger.exception(f"Erreur inattendue au chargement du catalogue: {e}")
                return False

            self._state = CatalogState(
                catalog=catalog,
                loaded_at=datetime.now(timezone.utc),
                status=CatalogStatus.LOADED,
            )
        logger.info(f"{len(catalog)} collection(s) chargee(s) depuis {self._config_path}")
        return True

    def get_catalog(self) -> Optional[Catalog]:
        """Retourne l'instantane courant, ou None si rien n'est servable."""
        return self._state.catalog

    def get_last_error(self) -> Optional[str]:
        """Retourne le message de la derniere erreur de chargement."""
        return self._state.error

    def is_loaded(self) -> bool:
        return self._state.catalog is not None

    def require_catalog(self) -> Catalog:
        """
        Retourne l'instantane courant.

        Raises:
            CatalogUnavailable: Aucun catalogue servable
        """
        state = self._state
        if state.catalog is None:
            raise CatalogUnavailable(state.error or "Config not loaded")
        return state.catalog

    def find_collection(self, collection_id: str) -> Optional[Collection]:
        """Recherche une collection dans l'instantane courant."""
        catalog = self._state.catalog
        if catalog is None:
            return None
        return catalog.find_collection(collection_id)

    @staticmethod
    def find_season(collection: Collection, season_number: int) -> Optional[Season]:
        """Recherche une saison par numero ; un film n'a pas de saison."""
        match collection:
            case SeriesCollection():
                return collection.find_season(season_number)
            case MovieCollection():
                return None

    @staticmethod
    def find_episode(season: Season, episode_number: int) -> Optional[Episode]:
        """Recherche un episode par numero (jamais par position)."""
        return season.find_episode(episode_number)
