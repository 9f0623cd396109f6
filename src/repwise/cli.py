"""CLI entry point for repwise."""

import click

from .commands import feedback, init, notify, progress, serve, streak
from .config import get_settings
from .logging_config import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="repwise")
@click.option("--user", "-u", default=None, help="User whose progress to use")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, user: str | None, verbose: bool):
    """repwise: adaptive training progress tracker.

    Log how each workout felt and repwise keeps your streak, tracks weekly
    and monthly goals, adjusts reps and weight per exercise, and tells you
    when you hit a milestone.

    Example usage:

        # Initialize the project
        repwise init

        # Log a workout
        repwise feedback log push-day-1 --difficulty perfect \\
            --exercise bench-press --target-reps 8 --target-weight 60

        # Check progress
        repwise streak status
        repwise progress weekly
        repwise progress adaptation bench-press
    """
    configure_logging("DEBUG" if verbose else get_settings().log_level)
    ctx.ensure_object(dict)
    ctx.obj["user"] = user


# Register commands
main.add_command(init)
main.add_command(feedback)
main.add_command(streak)
main.add_command(progress)
main.add_command(notify)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
