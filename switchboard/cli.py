import click

SERVICES = {
    "agent-state": "agent_state",
    "interaction": "interaction",
}

service_option = click.option(
    "--service",
    type=click.Choice(sorted(SERVICES)),
    required=True,
    help="Which service's database to operate on.",
)


@click.group()
def main() -> None:
    """Switchboard - call-center agent state coordination services."""


@main.command("agent-state")
@click.option("--host", default=None, help="Bind host (default: from SWITCHBOARD_STATE_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from SWITCHBOARD_STATE_PORT or 8001).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def agent_state(host: str | None, port: int | None, reload: bool) -> None:
    """Start the Agent State API (the registry)."""
    import uvicorn

    from switchboard.agent_state.settings import AgentStateSettings

    settings = AgentStateSettings()

    uvicorn.run(
        "switchboard.agent_state.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


@main.command()
@click.option("--host", default=None, help="Bind host (default: from SWITCHBOARD_INTERACTION_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from SWITCHBOARD_INTERACTION_PORT or 8002).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def interaction(host: str | None, port: int | None, reload: bool) -> None:
    """Start the Interaction API (the orchestrator)."""
    import uvicorn

    from switchboard.interaction.settings import InteractionSettings

    settings = InteractionSettings()

    uvicorn.run(
        "switchboard.interaction.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",
    )


# ---------------------------------------------------------------------------
# Database management
# ---------------------------------------------------------------------------


def _alembic_config(service: str):
    """Build an Alembic Config from the service's alembic.ini.

    Both alembic.ini and the alembic/ directory live inside each service
    package, so this works whether running from source or from an installed
    package.
    """
    from pathlib import Path

    from alembic.config import Config

    ini_path = Path(__file__).parent / SERVICES[service] / "alembic.ini"
    cfg = Config(str(ini_path))
    return cfg


@main.group()
def db() -> None:
    """Database migration and management commands."""


@db.command()
@service_option
@click.option("--revision", default="head", help="Target revision (default: head).")
def upgrade(service: str, revision: str) -> None:
    """Run database migrations forward."""
    from alembic import command

    command.upgrade(_alembic_config(service), revision)
    click.echo(f"{service} database upgraded to {revision}.")


@db.command()
@service_option
@click.option("--revision", default="-1", help="Target revision (default: -1, one step back).")
def downgrade(service: str, revision: str) -> None:
    """Roll back database migrations."""
    from alembic import command

    command.downgrade(_alembic_config(service), revision)
    click.echo(f"{service} database downgraded to {revision}.")


@db.command()
@service_option
@click.argument("message")
def migrate(service: str, message: str) -> None:
    """Autogenerate a new migration from model changes."""
    from alembic import command

    command.revision(_alembic_config(service), message=message, autogenerate=True)
    click.echo(f"Migration generated for {service}: {message}")


@db.command()
@service_option
def current(service: str) -> None:
    """Show current database revision."""
    from alembic import command

    command.current(_alembic_config(service), verbose=True)


@db.command()
@service_option
def history(service: str) -> None:
    """Show migration history."""
    from alembic import command

    command.history(_alembic_config(service), verbose=True)


if __name__ == "__main__":
    main()
