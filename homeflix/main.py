"""
Point d'entrée CLI de HomeFlix.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import Settings
from .container import Container
from .core.entities import MovieCollection, SeriesCollection
from .core.exceptions import CatalogLoadError
from .logging_config import configure_logging

app = typer.Typer(
    name="homeflix",
    help="Serveur multimédia personnel",
)
container = Container()
console = Console()


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration HomeFlix")
    typer.echo(f"Racine média : {config.media_root}")
    typer.echo(f"Données : {config.data_dir}")
    typer.echo(f"Bibliothèque : {config.library_config}")
    typer.echo(f"Réseau local uniquement : {'oui' if config.lan_only else 'non'}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"HomeFlix v{__version__}")


@app.command()
def check() -> None:
    """Charge le fichier de bibliothèque et signale les fichiers manquants."""
    config = get_config()
    loader = container.catalog_loader()

    try:
        catalog = loader.load(config.library_config)
    except CatalogLoadError as e:
        console.print(f"[red]Erreur :[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=f"Bibliothèque ({len(catalog)} collection(s))")
    table.add_column("Id", style="cyan")
    table.add_column("Type")
    table.add_column("Titre")
    table.add_column("Contenu", justify="right")
    for collection in catalog.collections:
        match collection:
            case SeriesCollection():
                episodes = sum(len(season.episodes) for season in collection.seasons)
                content = f"{len(collection.seasons)} saison(s), {episodes} épisode(s)"
            case MovieCollection():
                content = collection.filename
        table.add_row(collection.id, collection.kind.value, collection.title, content)
    console.print(table)

    missing = loader.find_missing_files(catalog)
    if missing:
        console.print(f"\n[yellow]{len(missing)} fichier(s) manquant(s) :[/yellow]")
        for relative in missing:
            console.print(f"  - {relative}")
    else:
        console.print("\n[green]Tous les fichiers référencés existent.[/green]")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique du code")] = False,
) -> None:
    """Lance le serveur web HomeFlix."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("homeflix.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    configure_logging(container.config())

    logger.info("Démarrage de HomeFlix", version=__version__)

    app()


if __name__ == "__main__":
    main()
