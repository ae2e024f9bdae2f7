"""
Point d'entree CLI de CineStore.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

import asyncio
from typing import Annotated

import typer
from loguru import logger

from cinestore import __version__

from .config import Settings
from .container import Container
from .core.entities.permission import KNOWN_PERMISSIONS
from .core.errors import RecordNotFoundError
from .infrastructure.persistence.database import dispose_engine
from .logging_config import configure_logging

app = typer.Typer(
    name="cinestore",
    help="API JSON de catalogue de films",
)
container = Container()


def get_config() -> Settings:
    """Recupere les parametres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Environnement : {config.env}")
    typer.echo(f"Port : {config.port}")
    typer.echo(f"Base de donnees : {config.database_url}")
    typer.echo(f"Pool : {config.db_max_open_conns} connexions (+{config.db_max_overflow})")
    typer.echo(f"SMTP : {'active' if config.smtp_enabled else 'desactive'}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CineStore v{__version__}")


@app.command(name="init-db")
def init_db() -> None:
    """Cree les tables et les permissions connues."""

    async def run() -> None:
        await container.database.init()
        await dispose_engine(container.engine())

    asyncio.run(run())
    typer.echo("Base de donnees initialisee")


@app.command()
def grant(
    email: Annotated[str, typer.Argument(help="Email de l'utilisateur")],
    codes: Annotated[list[str], typer.Argument(help="Codes de permission (ex: movies:write)")],
) -> None:
    """Attribue des permissions a un utilisateur existant."""
    unknown = [code for code in codes if code not in KNOWN_PERMISSIONS]
    if unknown:
        typer.echo(f"Permissions inconnues : {', '.join(unknown)}", err=True)
        raise typer.Exit(code=1)

    async def run() -> None:
        try:
            await container.database.init()
            user = await container.user_repository().get_by_email(email)
            await container.permission_repository().add_for_user(user.id, *codes)
        finally:
            await dispose_engine(container.engine())

    try:
        asyncio.run(run())
    except RecordNotFoundError:
        typer.echo(f"Aucun utilisateur avec l'email {email}", err=True)
        raise typer.Exit(code=1) from None

    logger.info("Permissions attribuees", email=email, codes=codes)
    typer.echo(f"Permissions attribuees a {email} : {', '.join(codes)}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'ecoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'ecoute (defaut : CINESTORE_PORT)")] = 0,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur HTTP CineStore."""
    import uvicorn

    port = port or get_config().port
    typer.echo(f"Demarrage du serveur sur {host}:{port}")
    uvicorn.run(
        "cinestore.web.app:app", host=host, port=port, reload=reload, log_config=None
    )


def main() -> None:
    """Point d'entree de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
        json_console=settings.env == "production",
    )
    logger.debug("Demarrage de CineStore", version=__version__, env=settings.env)

    app()


if __name__ == "__main__":
    main()
