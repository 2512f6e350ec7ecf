"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem pour les operations fichiers reelles.
"""

from pathlib import Path

from homeflix.core.ports.file_system import IFileSystem


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.

    Les erreurs d'acces (permissions, chemin invalide) sont traitees comme
    une absence du fichier.
    """

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        try:
            return path.exists()
        except (OSError, ValueError):
            return False

    def is_file(self, path: Path) -> bool:
        """Verifie si un chemin designe un fichier regulier."""
        try:
            return path.is_file()
        except (OSError, ValueError):
            return False

    def is_dir(self, path: Path) -> bool:
        """Verifie si un chemin designe un repertoire."""
        try:
            return path.is_dir()
        except (OSError, ValueError):
            return False

    def get_size(self, path: Path) -> int:
        """
        Recupere la taille du fichier en octets.

        Retourne 0 si le fichier n'existe pas.
        """
        try:
            return path.stat().st_size
        except OSError:
            return 0
