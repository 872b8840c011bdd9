"""Flask CLI commands for HabitFlow."""

from __future__ import annotations

from datetime import datetime

import click
from flask import current_app


def _context():
    return current_app.extensions["habitflow"]


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitflow-rollover")
    @click.option(
        "--date",
        "day",
        type=click.DateTime(formats=["%Y-%m-%d"]),
        default=None,
        help="Reference day (defaults to today)",
    )
    @click.option("--user", "user_id", default=None, help="Limit the rollover to one user")
    def habitflow_rollover(day: datetime | None, user_id: str | None) -> None:
        """Return habits completed before the reference day to Todo."""

        count = _context().habit_service.rollover(day, user_id=user_id)
        click.echo(f"Reset {count} habit(s) to Todo.")

    @app.cli.command("habitflow-today")
    @click.option("--user", "user_id", required=True, help="Owner id from the identity provider")
    @click.option(
        "--date",
        "day",
        type=click.DateTime(formats=["%Y-%m-%d"]),
        default=None,
        help="Reference day (defaults to today)",
    )
    def habitflow_today(user_id: str, day: datetime | None) -> None:
        """Print the habits due on a day, grouped by time of day."""

        board = _context().habit_service.today_board(user_id, day)
        if not board.groups:
            click.echo("No habits due.")
        for group in board.to_dict()["groups"]:
            click.echo(f"{group['time_of_day']}:")
            for item in group["habits"]:
                mark = "x" if item["status"] == "Done" else " "
                click.echo(f"  [{mark}] #{item['id']} {item['title']} ({item['streak']} day streak)")
        if board.hidden_weekly:
            click.echo(f"{board.hidden_weekly} weekly habit(s) hidden for today")
