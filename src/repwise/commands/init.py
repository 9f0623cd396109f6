"""Initialize project command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the repwise data directory and database.

    This creates the data directory and the SQLite database that holds
    progress and notification preferences.
    """
    settings = get_settings()
    data_dir = settings.data_dir

    echo_info(f"Initializing repwise in {data_dir}")

    db_path = get_db_path(data_dir)
    await init_db(db_path)
    echo_success(f"Database initialized ({db_path.name})")

    click.echo()
    click.echo("repwise is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Log a workout:")
    click.echo("     repwise feedback log WORKOUT_ID --difficulty perfect")
    click.echo()
    click.echo("  2. Check your streak and goals:")
    click.echo("     repwise streak status")
    click.echo("     repwise progress weekly")
