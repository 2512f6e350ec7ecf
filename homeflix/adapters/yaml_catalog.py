"""
Chargement du fichier de bibliotheque YAML.

Le document est lu avec PyYAML (chargeur sur, sans conversion implicite des
booleens ni des dates : `title: Yes` reste un texte), valide par des modeles pydantic
discrimines par le champ `type` (series/movie), puis converti en entites
immutables du domaine.

Structure attendue :

    collections:
      - id: breaking-bad
        type: series
        title: Breaking Bad
        path: Series/Breaking Bad
        seasons:
          - number: 1
            episodes:
              - id: bb-s01e01
                title: Pilot
                episode: 1
                filename: Breaking.Bad.S01E01.mp4
      - id: inception
        type: movie
        title: Inception
        path: Films/Inception
        filename: Inception.mp4

La verification d'existence des fichiers references est consultative : les
fichiers manquants sont journalises en avertissement mais n'empechent pas le
chargement (le 404 a la lecture reste le vrai garde-fou).
"""

import os
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

import yaml
from loguru import logger
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    PositiveInt,
    ValidationError,
    field_validator,
    model_validator,
)

from homeflix.core.entities import (
    Catalog,
    Collection,
    Episode,
    MovieCollection,
    Season,
    SeriesCollection,
)
from homeflix.core.exceptions import CatalogLoadError
from homeflix.core.ports.file_system import IFileSystem
from homeflix.services.path_resolver import is_confined
from homeflix.utils.constants import SEASON_FOLDER_FORMAT


def _check_relative(value: Optional[str]) -> Optional[str]:
    """Refuse les chemins absolus ou qui remontent au-dessus de la racine."""
    if value is not None and not is_confined(value):
        raise ValueError(f"path must be relative to the media root: {value!r}")
    return value


class _LibraryLoader(yaml.SafeLoader):
    """SafeLoader sans resolution implicite de yes/no/on/off ni des dates."""


_TEXT_TAGS = {"tag:yaml.org,2002:bool", "tag:yaml.org,2002:timestamp"}
_LibraryLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class _Schema(BaseModel):
    """Base commune : les identifiants numeriques du YAML sont acceptes comme texte."""

    model_config = ConfigDict(coerce_numbers_to_str=True, frozen=True)


class EpisodeSchema(_Schema):
    id: str
    title: str
    season: Optional[PositiveInt] = None
    episode: PositiveInt
    filename: str = Field(min_length=1)
    thumbnail: Optional[str] = None
    duration: Optional[Union[NonNegativeInt, NonNegativeFloat]] = None

    @field_validator("thumbnail")
    @classmethod
    def check_relative_paths(cls, value: Optional[str]) -> Optional[str]:
        return _check_relative(value)


class SeasonSchema(_Schema):
    number: PositiveInt
    episodes: list[EpisodeSchema] = Field(default_factory=list)
    poster: Optional[str] = None

    @field_validator("poster")
    @classmethod
    def check_relative_paths(cls, value: Optional[str]) -> Optional[str]:
        return _check_relative(value)

    @model_validator(mode="after")
    def check_episodes(self) -> "SeasonSchema":
        seen: set[int] = set()
        for episode in self.episodes:
            if episode.season is not None and episode.season != self.number:
                raise ValueError(
                    f"episode {episode.id!r} declares season {episode.season}"
                    f" inside season {self.number}"
                )
            if episode.episode in seen:
                raise ValueError(
                    f"duplicate episode number {episode.episode} in season {self.number}"
                )
            seen.add(episode.episode)
        return self

    def to_entity(self) -> Season:
        return Season(
            number=self.number,
            poster=self.poster,
            episodes=tuple(
                Episode(
                    id=episode.id,
                    title=episode.title,
                    season=self.number,
                    episode=episode.episode,
                    filename=episode.filename,
                    thumbnail=episode.thumbnail,
                    duration=episode.duration,
                )
                for episode in self.episodes
            ),
        )


class _CollectionSchema(_Schema):
    id: str = Field(min_length=1)
    title: str
    path: str
    poster: Optional[str] = None
    backdrop: Optional[str] = None
    description: Optional[str] = None

    @field_validator("path", "poster", "backdrop")
    @classmethod
    def check_relative_paths(cls, value: Optional[str]) -> Optional[str]:
        return _check_relative(value)


class SeriesSchema(_CollectionSchema):
    type: Literal["series"]
    seasons: list[SeasonSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_seasons(self) -> "SeriesSchema":
        numbers = [season.number for season in self.seasons]
        duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate season number(s) {duplicates} in {self.id!r}")
        # Un nom de fichier peut remonter tant que le chemin compose reste sous la racine
        for season in self.seasons:
            folder = SEASON_FOLDER_FORMAT.format(season.number)
            for episode in season.episodes:
                _check_relative(os.path.join(self.path, folder, episode.filename))
        return self

    def to_entity(self) -> SeriesCollection:
        return SeriesCollection(
            id=self.id,
            title=self.title,
            path=self.path,
            seasons=tuple(season.to_entity() for season in self.seasons),
            poster=self.poster,
            backdrop=self.backdrop,
            description=self.description,
        )


class MovieSchema(_CollectionSchema):
    type: Literal["movie"]
    filename: str = Field(min_length=1)

    @model_validator(mode="after")
    def check_relative_filename(self) -> "MovieSchema":
        _check_relative(os.path.join(self.path, self.filename))
        return self

    def to_entity(self) -> MovieCollection:
        return MovieCollection(
            id=self.id,
            title=self.title,
            path=self.path,
            filename=self.filename,
            poster=self.poster,
            backdrop=self.backdrop,
            description=self.description,
        )


CollectionSchema = Annotated[Union[SeriesSchema, MovieSchema], Field(discriminator="type")]


class LibraryDocument(_Schema):
    """Racine du fichier de bibliotheque."""

    collections: list[CollectionSchema]

    @model_validator(mode="after")
    def check_unique_ids(self) -> "LibraryDocument":
        ids = [collection.id for collection in self.collections]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"duplicate collection id(s): {', '.join(duplicates)}")
        return self

    def to_catalog(self) -> Catalog:
        return Catalog(collections=tuple(c.to_entity() for c in self.collections))


def _format_validation_error(error: ValidationError, source: str) -> str:
    """Resume une ValidationError pydantic en une ligne lisible."""
    details = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        details.append(f"{location}: {item['msg']}" if location else item["msg"])
    return f"Invalid library config {source}: " + "; ".join(details)


class YamlCatalogLoader:
    """
    Charge un Catalog depuis un fichier YAML.

    Example:
        loader = YamlCatalogLoader(FileSystemAdapter(), media_root=Path("/media"))
        catalog = loader.load(Path("/data/library.yml"))
    """

    def __init__(
        self,
        file_system: IFileSystem,
        media_root: Path,
        validate_files: bool = True,
    ) -> None:
        """
        Initialise le loader.

        Args:
            file_system: Adaptateur systeme de fichiers
            media_root: Racine media pour la verification des fichiers references
            validate_files: Active la verification consultative des fichiers
        """
        self._file_system = file_system
        self._media_root = Path(media_root)
        self._validate_files = validate_files

    def load(self, config_path: Path) -> Catalog:
        """
        Lit, parse et valide le fichier de bibliotheque.

        Raises:
            CatalogLoadError: Fichier absent, illisible, YAML invalide ou schema invalide
        """
        config_path = Path(config_path)
        if not self._file_system.is_file(config_path):
            raise CatalogLoadError(f"Config file not found: {config_path}")

        try:
            content = config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogLoadError(f"Cannot read config file {config_path}: {e}") from e

        catalog = self.parse(content, source=str(config_path))
        if self._validate_files:
            self.report_missing_files(catalog)
        return catalog

    def parse(self, content: str, source: str = "<string>") -> Catalog:
        """
        Parse et valide un document YAML deja lu.

        Raises:
            CatalogLoadError: YAML invalide ou schema invalide
        """
        try:
            data = yaml.load(content, Loader=_LibraryLoader)
        except yaml.YAMLError as e:
            raise CatalogLoadError(f"Invalid YAML in {source}: {e}") from e
        except (RecursionError, ValueError, TypeError) as e:
            # Imbrication excessive ou scalaire inconvertible
            raise CatalogLoadError(f"Invalid YAML in {source}: {type(e).__name__}: {e}") from e

        try:
            document = LibraryDocument.model_validate(data)
            return document.to_catalog()
        except ValidationError as e:
            raise CatalogLoadError(_format_validation_error(e, source)) from e
        except (RecursionError, ValueError, TypeError) as e:
            raise CatalogLoadError(
                f"Invalid library config {source}: {type(e).__name__}: {e}"
            ) from e

    def find_missing_files(self, catalog: Catalog) -> list[str]:
        """
        Liste les fichiers references par le catalogue mais absents du disque.

        Returns:
            Chemins relatifs a la racine media, dans l'ordre du catalogue
        """
        missing: list[str] = []
        for relative in _referenced_files(catalog):
            if not self._file_system.exists(self._media_root / relative):
                missing.append(relative)
        return missing

    def report_missing_files(self, catalog: Catalog) -> list[str]:
        """Journalise les fichiers manquants (avertissement, jamais bloquant)."""
        logger.debug(f"Verification des fichiers sous {self._media_root}")
        missing = self.find_missing_files(catalog)
        if not missing:
            logger.info(
                f"Tous les fichiers references existent ({count_referenced_files(catalog)})"
            )
            return missing

        logger.warning(f"{len(missing)} fichier(s) reference(s) manquant(s)")
        for relative in missing:
            logger.warning(f"  - {relative}")
        return missing


def _referenced_files(catalog: Catalog) -> list[str]:
    """Enumere les chemins (relatifs a la racine media) references par le catalogue."""
    files: list[str] = []
    for collection in catalog.collections:
        files.extend(_collection_images(collection))
        match collection:
            case SeriesCollection():
                for season in collection.seasons:
                    if season.poster:
                        files.append(season.poster)
                    folder = SEASON_FOLDER_FORMAT.format(season.number)
                    for episode in season.episodes:
                        files.append(os.path.join(collection.path, folder, episode.filename))
                        if episode.thumbnail:
                            files.append(episode.thumbnail)
            case MovieCollection():
                files.append(os.path.join(collection.path, collection.filename))
    return files


def _collection_images(collection: Collection) -> list[str]:
    return [image for image in (collection.poster, collection.backdrop) if image]


def count_referenced_files(catalog: Catalog) -> int:
    """Nombre total de fichiers references (videos et images)."""
    return len(_referenced_files(catalog))
