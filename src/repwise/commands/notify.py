"""Notification preference commands."""

from dataclasses import fields

import click

from ..db import NotificationPreferencesRepository
from ..models.notifications import NotificationPreferences
from .base import async_command, echo_error, echo_success, ensure_initialized, get_user

PREFERENCE_NAMES = [f.name for f in fields(NotificationPreferences)]


@click.group()
def notify():
    """Manage which notifications are shown."""
    pass


@notify.command("prefs")
@click.option(
    "--enable", multiple=True, type=click.Choice(PREFERENCE_NAMES),
    help="Turn a notification category on (repeatable)",
)
@click.option(
    "--disable", multiple=True, type=click.Choice(PREFERENCE_NAMES),
    help="Turn a notification category off (repeatable)",
)
@click.pass_context
@async_command
async def prefs(ctx: click.Context, enable: tuple[str, ...], disable: tuple[str, ...]):
    """Show or update notification preferences."""
    ensure_initialized(ctx)

    overlap = set(enable) & set(disable)
    if overlap:
        echo_error(f"Cannot both enable and disable: {', '.join(sorted(overlap))}")
        ctx.exit(1)

    user_id = get_user(ctx)
    repo = NotificationPreferencesRepository()
    preferences = await repo.get(user_id)

    if enable or disable:
        changes = {name: True for name in enable}
        changes.update({name: False for name in disable})
        preferences.update(**changes)
        await repo.upsert(user_id, preferences)
        echo_success("Preferences updated.")

    for name, enabled in preferences.to_dict().items():
        marker = click.style("on ", fg="green") if enabled else click.style("off", fg="red")
        click.echo(f"  {marker}  {name}")
