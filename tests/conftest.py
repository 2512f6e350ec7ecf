"""
Fixtures pytest partagees pour les tests HomeFlix.

Ce module contient les fixtures communes utilisees dans les tests:
- Racine media temporaire avec episodes, film et images
- Fichier de bibliotheque YAML de reference
- Settings de test avec chemins temporaires
- Container DI et client HTTP de test
"""

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from homeflix.config import Settings
from homeflix.container import Container
from homeflix.web.app import create_app

SAMPLE_LIBRARY = """\
collections:
  - id: breaking-bad
    type: series
    title: Breaking Bad
    path: Series/Breaking Bad
    poster: posters/breaking-bad.jpg
    description: Un professeur de chimie bascule.
    seasons:
      - number: 1
        poster: posters/bb-s01.png
        episodes:
          - id: bb-s01e02
            title: Cat's in the Bag
            season: 1
            episode: 2
            filename: Breaking.Bad.S01E02.mp4
          - id: bb-s01e01
            title: Pilot
            season: 1
            episode: 1
            filename: Breaking.Bad.S01E01.mp4
            thumbnail: thumbs/bb-s01e01.jpg
            duration: 58
  - id: inception
    type: movie
    title: Inception
    path: Films/Inception
    filename: Inception.mp4
    backdrop: backdrops/inception.webp
"""


def make_payload(size: int, offset: int = 0) -> bytes:
    """Contenu deterministe : chaque octet depend de sa position."""
    return bytes((i + offset) % 256 for i in range(size))


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    """
    Racine media de test.

    Structure :
        Series/Breaking Bad/Season 01/Breaking.Bad.S01E01.mp4 (1000 octets)
        Series/Breaking Bad/Season 01/Breaking.Bad.S01E02.mp4 (300 octets)
        Films/Inception/Inception.mp4 (500 octets)
        posters/, thumbs/, backdrops/ (images)
        notes.txt (extension non autorisee)
    """
    root = tmp_path / "media"
    season_dir = root / "Series" / "Breaking Bad" / "Season 01"
    season_dir.mkdir(parents=True)
    (season_dir / "Breaking.Bad.S01E01.mp4").write_bytes(make_payload(1000))
    (season_dir / "Breaking.Bad.S01E02.mp4").write_bytes(make_payload(300, offset=7))

    movie_dir = root / "Films" / "Inception"
    movie_dir.mkdir(parents=True)
    (movie_dir / "Inception.mp4").write_bytes(make_payload(500, offset=3))

    for image in (
        "posters/breaking-bad.jpg",
        "posters/bb-s01.png",
        "thumbs/bb-s01e01.jpg",
        "backdrops/inception.webp",
    ):
        path = root / image
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"IMG:" + image.encode())

    (root / "notes.txt").write_text("pas une image", encoding="utf-8")
    return root


@pytest.fixture
def library_file(tmp_path: Path) -> Path:
    """Fichier de bibliotheque YAML de reference."""
    path = tmp_path / "data" / "library.yml"
    path.parent.mkdir(parents=True)
    path.write_text(SAMPLE_LIBRARY, encoding="utf-8")
    return path


@pytest.fixture
def test_settings(tmp_path: Path, media_root: Path, library_file: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Restriction reseau desactivee (le client de test n'a pas d'adresse IP),
    surveillance rapide et petits blocs de lecture.
    """
    return Settings(
        media_root=media_root,
        data_dir=library_file.parent,
        library_config=library_file,
        lan_only=False,
        config_poll_interval=0.05,
        config_debounce=0.05,
        stream_chunk_size=64,
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def container(test_settings: Settings) -> Iterator[Container]:
    """Container DI dont la configuration est remplacee par test_settings."""
    container = Container()
    container.config.override(test_settings)
    yield container
    container.config.reset_override()


@pytest.fixture
def client(container: Container) -> Iterator[TestClient]:
    """Client HTTP de test (lifespan execute : catalogue charge, watcher demarre)."""
    with TestClient(create_app(container)) as test_client:
        yield test_client
