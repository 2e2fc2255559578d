from __future__ import annotations

import typer

from fixture_insights.cli.common import echo_json, session_scope
from fixture_insights.ingestion.provider_types import load_taxonomy, sync_provider_types
from fixture_insights.ingestion.providers.sportmonks.client import SportMonksClient

app = typer.Typer(help="Provider type catalog.")


@app.command("sync")
def sync_types_cmd() -> None:
    """Fetch the SportMonks type catalog and upsert it into the local DB."""

    with SportMonksClient.from_settings() as client, session_scope() as session:
        result = sync_provider_types(session, client)

    typer.echo(
        " ".join(
            [
                "Synced provider types:",
                f"from_api={result.total_from_api}",
                f"inserted={result.inserted}",
                f"updated={result.updated}",
                f"duration_s={result.duration_s}",
            ]
        )
    )


@app.command("taxonomy")
def taxonomy_cmd() -> None:
    """Print the effective type-code taxonomy (stored catalog over built-in codes)."""

    with session_scope() as session:
        taxonomy = load_taxonomy(session)

    echo_json(taxonomy)
