"""
Catalog entities.

Immutable entities describing the media library as declared in the
library configuration file: collections (series or movies), seasons
and episodes.

A Catalog is a snapshot: it is built once by the loader and replaced
wholesale on reload, never mutated in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union


class CollectionKind(Enum):
    """Discriminant des collections.

    Valeurs:
        SERIES: Serie decoupee en saisons et episodes
        MOVIE: Film (un seul fichier)
    """

    SERIES = "series"
    MOVIE = "movie"


@dataclass(frozen=True)
class Episode:
    """
    Individual episode of a series.

    Attributes:
        id: Episode identifier from the configuration
        title: Display title
        season: Season number (1-indexed)
        episode: Episode number within the season (1-indexed)
        filename: File name, relative to the season folder
        thumbnail: Thumbnail image, relative to the media root
        duration: Runtime as declared in the configuration
    """

    id: str
    title: str
    season: int
    episode: int
    filename: str
    thumbnail: Optional[str] = None
    duration: Optional[float] = None


@dataclass(frozen=True)
class Season:
    """
    Season of a series.

    Episodes keep configuration order, which drives previous/next
    navigation. Lookups go through the episode number, never the index.

    Attributes:
        number: Season number, unique within its collection
        episodes: Episodes in configuration order
        poster: Season poster, relative to the media root
    """

    number: int
    episodes: tuple[Episode, ...] = ()
    poster: Optional[str] = None

    def find_episode(self, episode_number: int) -> Optional[Episode]:
        """Retourne l'episode portant ce numero, ou None."""
        for episode in self.episodes:
            if episode.episode == episode_number:
                return episode
        return None

    def adjacent_episodes(
        self, episode_number: int
    ) -> tuple[Optional[Episode], Optional[Episode]]:
        """
        Retourne les episodes precedent et suivant dans l'ordre de configuration.

        Retourne (None, None) si l'episode n'existe pas dans la saison.
        """
        for index, episode in enumerate(self.episodes):
            if episode.episode != episode_number:
                continue
            previous = self.episodes[index - 1] if index > 0 else None
            following = (
                self.episodes[index + 1] if index < len(self.episodes) - 1 else None
            )
            return previous, following
        return None, None


@dataclass(frozen=True)
class SeriesCollection:
    """
    Series variant of a collection.

    Attributes:
        id: Unique identifier across the catalog (external identifier)
        title: Display title
        path: Directory holding the collection, relative to the media root
        seasons: Seasons in configuration order
        poster: Poster image, relative to the media root
        backdrop: Backdrop image, relative to the media root
        description: Free text description
    """

    kind: ClassVar[CollectionKind] = CollectionKind.SERIES

    id: str
    title: str
    path: str
    seasons: tuple[Season, ...] = ()
    poster: Optional[str] = None
    backdrop: Optional[str] = None
    description: Optional[str] = None

    def find_season(self, season_number: int) -> Optional[Season]:
        """Retourne la saison portant ce numero, ou None."""
        for season in self.seasons:
            if season.number == season_number:
                return season
        return None


@dataclass(frozen=True)
class MovieCollection:
    """
    Movie variant of a collection.

    Attributes:
        id: Unique identifier across the catalog (external identifier)
        title: Display title
        path: Directory holding the movie, relative to the media root
        filename: Movie file name, relative to ``path``
        poster: Poster image, relative to the media root
        backdrop: Backdrop image, relative to the media root
        description: Free text description
    """

    kind: ClassVar[CollectionKind] = CollectionKind.MOVIE

    id: str
    title: str
    path: str
    filename: str
    poster: Optional[str] = None
    backdrop: Optional[str] = None
    description: Optional[str] = None


Collection = Union[SeriesCollection, MovieCollection]


@dataclass(frozen=True)
class Catalog:
    """
    One fully loaded snapshot of the library.

    Collection ids are unique; the loader rejects configurations that
    break this rule before a Catalog is ever built.

    Attributes:
        collections: Collections in configuration order
    """

    collections: tuple[Collection, ...] = ()
    _by_id: dict[str, Collection] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_by_id", {collection.id: collection for collection in self.collections}
        )

    def __len__(self) -> int:
        return len(self.collections)

    def find_collection(self, collection_id: str) -> Optional[Collection]:
        """Retourne la collection portant cet identifiant, ou None."""
        return self._by_id.get(collection_id)
