from __future__ import annotations

import logging

import typer

from fixture_insights.cli.types import app as types_app
from fixture_insights.cli.views import app as views_app
from fixture_insights.core.config import settings

app = typer.Typer(no_args_is_help=True)
app.add_typer(types_app, name="types")
app.add_typer(views_app, name="views")


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING...)."
    ),
) -> None:
    """Derived football views over SportMonks payloads."""

    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
