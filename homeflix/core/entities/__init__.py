"""
Entités du catalogue multimédia.

Toutes les entités sont immutables : un catalogue chargé n'est jamais modifié
sur place, il est remplacé en entier lors d'un rechargement.

Exports:
- Episode: Épisode d'une saison
- Season: Saison d'une série
- SeriesCollection / MovieCollection: Variantes d'une collection
- Collection: Union des deux variantes
- CollectionKind: Discriminant series/movie
- Catalog: Instantané complet du catalogue
"""

from homeflix.core.entities.catalog import (
    Catalog,
    Collection,
    CollectionKind,
    Episode,
    MovieCollection,
    Season,
    SeriesCollection,
)

__all__ = [
    "Catalog",
    "Collection",
    "CollectionKind",
    "Episode",
    "MovieCollection",
    "Season",
    "SeriesCollection",
]
