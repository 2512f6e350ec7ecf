"""
Tests pour ConfigWatcher - detection de changement et anti-rebond.

Les tests de poll() utilisent une horloge manuelle ; les tests asynchrones
verifient le rechargement effectif par la tache de fond.
"""

import asyncio
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from homeflix.adapters.file_system import FileSystemAdapter
from homeflix.adapters.yaml_catalog import YamlCatalogLoader
from homeflix.services.catalog_store import CatalogStore
from homeflix.services.config_watcher import ConfigWatcher


class FakeClock:
    """Horloge manuelle pour les tests d'anti-rebond."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _touch(path: Path, content: str) -> None:
    """Ecrit le fichier et force une mtime differente."""
    path.write_text(content, encoding="utf-8")
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))


@pytest.fixture
def mock_store(library_file: Path) -> MagicMock:
    store = MagicMock(spec=CatalogStore)
    store.config_path = library_file
    return store


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class TestPoll:
    """Tests de la scrutation avec anti-rebond."""

    def test_pas_de_changement(self, mock_store, clock):
        watcher = ConfigWatcher(mock_store, debounce=1.0, clock=clock)
        clock.advance(5)
        assert watcher.poll() is False

    def test_rechargement_apres_la_fenetre(self, mock_store, clock, library_file):
        watcher = ConfigWatcher(mock_store, debounce=1.0, clock=clock)
        _touch(library_file, "collections: []\n")

        assert watcher.poll() is False  # changement detecte, fenetre armee
        clock.advance(0.5)
        assert watcher.poll() is False
        clock.advance(0.5)
        assert watcher.poll() is True
        clock.advance(5)
        assert watcher.poll() is False  # un seul rechargement

    def test_ecritures_rapides_regroupees(self, mock_store, clock, library_file):
        """Chaque nouvelle ecriture rearme la fenetre : un seul rechargement."""
        watcher = ConfigWatcher(mock_store, debounce=1.0, clock=clock)
        reloads = 0
        for i in range(5):
            _touch(library_file, "collections: []\n#" + "#" * i + "\n")
            clock.advance(0.4)
            reloads += watcher.poll()
        assert reloads == 0

        clock.advance(1.0)
        reloads += watcher.poll()
        assert reloads == 1

    def test_suppression_du_fichier_detectee(self, mock_store, clock, library_file):
        watcher = ConfigWatcher(mock_store, debounce=1.0, clock=clock)
        library_file.unlink()

        watcher.poll()
        clock.advance(1.0)

        assert watcher.poll() is True

    def test_apparition_du_fichier_detectee(self, tmp_path, clock):
        store = MagicMock(spec=CatalogStore)
        store.config_path = tmp_path / "later.yml"
        watcher = ConfigWatcher(store, debounce=0.0, clock=clock)

        store.config_path.write_text("collections: []\n", encoding="utf-8")

        assert watcher.poll() is False
        assert watcher.poll() is True


class TestBackgroundTask:
    """Tests de la tache de fond."""

    @pytest.mark.asyncio
    async def test_recharge_le_store_apres_modification(self, media_root, library_file):
        loader = YamlCatalogLoader(FileSystemAdapter(), media_root=media_root)
        store = CatalogStore(loader, config_path=library_file)
        store.reload()
        watcher = ConfigWatcher(store, poll_interval=0.01, debounce=0.05)
        watcher.start()
        try:
            _touch(
                library_file,
                "collections:\n"
                "  - {id: heat, type: movie, title: Heat, path: Films, filename: h.mp4}\n",
            )
            for _ in range(200):
                await asyncio.sleep(0.01)
                catalog = store.get_catalog()
                if catalog is not None and catalog.find_collection("heat"):
                    break
        finally:
            await watcher.stop()

        assert [c.id for c in store.get_catalog().collections] == ["heat"]

    @pytest.mark.asyncio
    async def test_start_stop(self, mock_store):
        watcher = ConfigWatcher(mock_store, poll_interval=0.01, debounce=0.0)

        watcher.start()
        assert watcher.running is True
        watcher.start()  # idempotent
        await watcher.stop()

        assert watcher.running is False
        mock_store.reload.assert_not_called()

    @pytest.mark.asyncio
    async def test_stop_sans_start(self, mock_store):
        watcher = ConfigWatcher(mock_store)
        await watcher.stop()
        assert watcher.running is False


class TestResilience:
    """Tests de la continuite de la surveillance."""

    @pytest.mark.asyncio
    async def test_echec_du_rechargement_ne_stoppe_pas_la_surveillance(
        self, mock_store, library_file
    ):
        mock_store.reload.side_effect = RecursionError("maximum recursion depth exceeded")
        watcher = ConfigWatcher(mock_store, poll_interval=0.01, debounce=0.0)
        watcher.start()
        try:
            for i in range(2):
                _touch(library_file, "collections: []\n" + "#" * (i + 1) + "\n")
                for _ in range(200):
                    await asyncio.sleep(0.01)
                    if mock_store.reload.call_count > i:
                        break
            assert watcher.running is True
        finally:
            await watcher.stop()

        assert mock_store.reload.call_count == 2

    @pytest.mark.asyncio
    async def test_modification_entre_chargement_et_demarrage(self, mock_store, library_file):
        """Une ecriture entre capture() et start() declenche un rechargement."""
        watcher = ConfigWatcher(mock_store, poll_interval=0.01, debounce=0.0)
        watcher.capture()
        _touch(library_file, "collections: []\n")

        watcher.start()
        try:
            for _ in range(200):
                await asyncio.sleep(0.01)
                if mock_store.reload.called:
                    break
        finally:
            await watcher.stop()

        mock_store.reload.assert_called_once()
