"""
Interfaces ports pour le système de fichiers.

Interface abstraite (port) définissant les opérations fichiers dont le
sous-système de diffusion a besoin. Toutes les opérations sont en lecture
seule : HomeFlix ne modifie jamais la racine média.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class IFileSystem(ABC):
    """
    Interface pour les opérations de base sur les fichiers.

    Définit les opérations pour interroger le système de fichiers :
    vérification d'existence et lecture de la taille.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Vérifie si un chemin existe."""
        ...

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Vérifie si un chemin désigne un fichier régulier."""
        ...

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Vérifie si un chemin désigne un répertoire."""
        ...

    @abstractmethod
    def get_size(self, path: Path) -> int:
        """
        Récupère la taille du fichier en octets.

        Args :
            path : Chemin vers le fichier

        Retourne :
            Taille du fichier en octets, ou 0 si le fichier n'existe pas
        """
        ...
