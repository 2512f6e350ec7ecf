"""
Surveillance du fichier de bibliotheque.

Tache asyncio de fond qui interroge periodiquement la signature du fichier
(mtime, taille, inode) et declenche CatalogStore.reload() apres une fenetre
d'anti-rebond : les ecritures rapides successives (editeurs, outils de
synchronisation) sont regroupees en un seul rechargement.

Le rechargement s'execute dans un thread (asyncio.to_thread) pour ne jamais
bloquer la boucle qui sert les requetes. Le watcher ne possede aucune donnee
du catalogue : il appelle uniquement reload().
"""

import asyncio
import time
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from homeflix.services.catalog_store import CatalogStore

# (mtime_ns, taille, inode) ; None quand le fichier est absent
FileSignature = Optional[tuple[int, int, int]]


class ConfigWatcher:
    """
    Watcher par scrutation avec anti-rebond.

    Attributes:
        poll_interval: Periode de scrutation en secondes
        debounce: Duree sans nouveau changement avant rechargement

    Example:
        watcher = ConfigWatcher(store, poll_interval=1.0, debounce=1.0)
        watcher.capture()
        store.reload()
        watcher.start()   # depuis une boucle asyncio en cours
        ...
        await watcher.stop()
    """

    def __init__(
        self,
        store: CatalogStore,
        poll_interval: float = 1.0,
        debounce: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._path = Path(store.config_path)
        self.poll_interval = poll_interval
        self.debounce = debounce
        self._clock = clock
        self._last_signature: FileSignature = self._signature()
        self._pending_since: Optional[float] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _signature(self) -> FileSignature:
        try:
            stat = self._path.stat()
        except OSError:
            return None
        return stat.st_mtime_ns, stat.st_size, stat.st_ino

    def poll(self) -> bool:
        """
        Effectue une scrutation.

        Un changement de signature (re)arme la fenetre d'anti-rebond.

        Returns:
            True quand un rechargement doit avoir lieu (fenetre ecoulee
            sans nouveau changement), False sinon
        """
        signature = self._signature()
        now = self._clock()
        if signature != self._last_signature:
            self._last_signature = signature
            self._pending_since = now
            return False

        if self._pending_since is not None and now - self._pending_since >= self.debounce:
            self._pending_since = None
            return True
        return False

    async def run(self) -> None:
        """Boucle de scrutation (jusqu'a annulation)."""
        logger.info(f"Surveillance de {self._path} (toutes les {self.poll_interval}s)")
        while True:
            await asyncio.sleep(self.poll_interval)
            if self.poll():
                logger.info("Fichier de bibliotheque modifie, rechargement...")
                try:
                    await asyncio.to_thread(self._store.reload)
                except Exception as e:
                    logger.exception(f"Echec du rechargement, surveillance maintenue: {e}")

    def capture(self) -> None:
        """
        Releve la signature de reference du fichier.

        A appeler avant le chargement initial : une modification survenue
        entre ce chargement et start() est alors detectee par la scrutation.
        """
        self._last_signature = self._signature()
        self._pending_since = None

    def start(self) -> None:
        """Demarre la tache de fond, a partir de la derniere signature relevee."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self.run())

    async def stop(self) -> None:
        """Arrete la tache de fond et attend sa fin."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info(f"Surveillance de {self._path} arretee")
