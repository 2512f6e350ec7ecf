"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe HOMEFLIX_,
et peut optionnellement être fournie via un fichier .env.

Le catalogue lui-même n'est pas ici : il est décrit par le fichier YAML `library_config`,
surveillé et rechargé à chaud.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.constants import STREAM_CHUNK_SIZE

# Trouver le fichier .env à la racine du projet (parent de homeflix/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe HOMEFLIX_.
    Exemple : HOMEFLIX_MEDIA_ROOT=/mnt/nas/media

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="HOMEFLIX_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Chemins (avec expansion ~)
    media_root: Path = Field(default=Path("/media"))
    data_dir: Path = Field(default=Path("/data"))
    library_config: Path = Field(default=Path("/data/library.yml"))

    # Restriction réseau : clients du réseau local uniquement
    lan_only: bool = Field(default=True)

    # Catalogue (vérification consultative des fichiers, surveillance)
    validate_files: bool = Field(default=True)
    config_poll_interval: float = Field(default=1.0, gt=0)
    config_debounce: float = Field(default=1.0, ge=0)

    # Diffusion
    stream_chunk_size: int = Field(default=STREAM_CHUNK_SIZE, ge=1)
    asset_cache_max_age: int = Field(default=86400, ge=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/homeflix.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("media_root", "data_dir", "library_config", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()
