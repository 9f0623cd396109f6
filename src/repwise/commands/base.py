"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..config import get_settings
from ..db import (
    NotificationPreferencesRepository,
    NotificationStateRepository,
    ProgressStateRepository,
    get_db_path,
)
from ..exceptions import RepwiseError
from ..services.engine import ProgressEngine
from ..services.notifications import NotificationDispatcher


def async_command(f):
    """Decorator to run async Click commands.

    RepwiseError is reported as an error line and exit code 1.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return asyncio.run(f(*args, **kwargs))
        except RepwiseError as e:
            echo_error(e.message)
            raise SystemExit(1) from e

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'repwise init' first."
        )
        ctx.exit(1)


def get_user(ctx: click.Context) -> str:
    """Get the user selected with the top-level --user option."""
    obj = ctx.find_root().obj or {}
    return obj.get("user") or get_settings().default_user


def echo_notification(notification) -> None:
    """Render a notification on the terminal."""
    click.echo(
        click.style(f"{notification.icon} {notification.title}: ", fg="magenta", bold=True)
        + notification.message
    )


async def load_dispatcher(ctx: click.Context) -> NotificationDispatcher:
    """Create a terminal dispatcher with the user's preferences and seen announcements."""
    user_id = get_user(ctx)
    return NotificationDispatcher(
        preferences=await NotificationPreferencesRepository().get(user_id),
        sink=echo_notification,
        state=await NotificationStateRepository().get(user_id),
    )


async def save_dispatcher_state(ctx: click.Context, dispatcher: NotificationDispatcher) -> None:
    """Remember what the dispatcher announced for the next invocation."""
    await NotificationStateRepository().upsert(get_user(ctx), dispatcher.state)


def build_engine(ctx: click.Context, dispatcher: NotificationDispatcher | None = None) -> ProgressEngine:
    """Create a progress engine for the selected user."""
    settings = get_settings()
    return ProgressEngine(
        store=ProgressStateRepository(
            history_cap=settings.history_cap,
            weekly_target=settings.weekly_target,
            monthly_target=settings.monthly_target,
        ),
        user_id=get_user(ctx),
        first_weekday=settings.first_weekday,
        dispatcher=dispatcher,
    )


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = [
        "".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)),
        "".join("-" * w + " " * padding for w in widths),
    ]
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )

    return "\n".join(lines)
