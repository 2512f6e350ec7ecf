"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
Le store du catalogue est un singleton : l'application web le recupere via
app.state.container, jamais via une variable globale.
"""

from dependency_injector import containers, providers

from .adapters.file_system import FileSystemAdapter
from .adapters.yaml_catalog import YamlCatalogLoader
from .config import Settings
from .services.assets import AssetLocator
from .services.catalog_store import CatalogStore
from .services.config_watcher import ConfigWatcher
from .services.streaming import MediaStreamer


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        store = container.catalog_store()
        store.reload()
        streamer = container.media_streamer()

    En test, surcharger la configuration :
        container.config.override(Settings(media_root=tmp_path, ...))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)

    catalog_loader = providers.Singleton(
        YamlCatalogLoader,
        file_system=file_system,
        media_root=config.provided.media_root,
        validate_files=config.provided.validate_files,
    )

    # Store du catalogue - un seul instantane partage par toutes les requetes
    catalog_store = providers.Singleton(
        CatalogStore,
        loader=catalog_loader,
        config_path=config.provided.library_config,
    )

    config_watcher = providers.Singleton(
        ConfigWatcher,
        store=catalog_store,
        poll_interval=config.provided.config_poll_interval,
        debounce=config.provided.config_debounce,
    )

    # Services de diffusion (sans etat - Singletons)
    media_streamer = providers.Singleton(
        MediaStreamer,
        file_system=file_system,
        media_root=config.provided.media_root,
        chunk_size=config.provided.stream_chunk_size,
    )
    asset_locator = providers.Singleton(
        AssetLocator,
        file_system=file_system,
        media_root=config.provided.media_root,
    )
