"""
Exceptions metier du sous-systeme de diffusion.

Taxonomie :
- CatalogLoadError : configuration absente, illisible ou invalide (recuperable)
- CatalogUnavailable : aucun catalogue servable (chargement jamais reussi ou en erreur)
- AccessDenied : chemin rejete par le resolveur (tentative de traversee)
- MediaNotFound : collection, saison, episode ou fichier inexistant
- InvalidRequest : parametres client malformes
- RangeNotSatisfiable : plage d'octets hors du fichier

Aucune de ces erreurs n'est fatale au processus : la couche web les convertit
en statut HTTP accompagne d'un message structure.
"""


class HomeflixError(Exception):
    """Classe de base des erreurs HomeFlix."""


class CatalogLoadError(HomeflixError):
    """
    Exception levee quand la configuration du catalogue ne peut pas etre chargee.

    Le message est celui expose par CatalogStore.get_last_error().
    """


class CatalogUnavailable(HomeflixError):
    """Exception levee quand aucun catalogue n'est actuellement servable."""


class AccessDenied(HomeflixError):
    """Exception levee quand un chemin sort de la racine media."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class MediaNotFound(HomeflixError):
    """
    Exception levee quand une ressource demandee n'existe pas.

    Attributes:
        what: Nature de la ressource manquante (ex: "Collection", "Season", "File")
    """

    def __init__(self, what: str, message: str | None = None) -> None:
        self.what = what
        super().__init__(message or f"{what} not found")


class InvalidRequest(HomeflixError):
    """Exception levee pour des parametres client manquants ou malformes."""


class RangeNotSatisfiable(HomeflixError):
    """
    Exception levee quand la plage demandee ne recouvre aucun octet du fichier.

    Attributes:
        size: Taille du fichier en octets (pour l'en-tete Content-Range: bytes */size)
    """

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Requested range not satisfiable (file size {size})")
