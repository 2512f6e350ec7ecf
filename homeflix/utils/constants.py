"""
Constantes globales pour HomeFlix.

Ce module contient les constantes utilisees par le sous-systeme de diffusion:
- Types MIME des images servies par l'endpoint asset
- Type MIME des flux video
- Convention de nommage des dossiers de saison
- Taille des blocs de lecture
"""

# Images autorisees par l'endpoint asset (extension -> type MIME)
IMAGE_MIME_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}

# Type MIME annonce pour tous les flux video
VIDEO_CONTENT_TYPE = "video/mp4"

# Dossier de saison : "Season 01", "Season 02", ... (deux chiffres obligatoires)
SEASON_FOLDER_FORMAT = "Season {:02d}"

# Taille des blocs lus depuis le disque pendant le streaming (1 MiB)
STREAM_CHUNK_SIZE: int = 1024 * 1024
