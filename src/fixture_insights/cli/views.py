from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
from typing import Any

import typer

from fixture_insights.cli.common import echo_json, load_payload, session_scope
from fixture_insights.core.config import settings
from fixture_insights.derived import (
    DEFAULT_TAXONOMY,
    CornerAverages,
    TypeTaxonomy,
    aggregate_odds,
    bookmakers_with_valid_baseline,
    calculate_form,
    choose_default_bookmakers,
    combined_expected_corners,
    games_played_by_venue,
    head_to_head_rows,
    project_corner_averages,
    project_standings,
    project_venue_performance,
    scoring_distribution,
    summarize_form,
)
from fixture_insights.derived.types import StandingsView, StatDetail, Venue
from fixture_insights.ingestion.provider_types import load_taxonomy
from fixture_insights.ingestion.providers.sportmonks.client import SportMonksClient
from fixture_insights.ingestion.providers.sportmonks.parser import (
    parse_fixtures,
    parse_odds_quotes,
    parse_standing_rows,
    select_team_statistics,
)

app = typer.Typer(help="Render derived views as JSON.", no_args_is_help=True)

FILE_HELP = "Saved SportMonks response (JSON). Skips the API when given."
CATALOG_HELP = "Use type codes from the synced catalog instead of the built-in ones."


def _taxonomy(use_catalog: bool) -> TypeTaxonomy:
    if not use_catalog:
        return DEFAULT_TAXONOMY
    with session_scope() as session:
        return load_taxonomy(session)


def _require(value: Any, option: str) -> Any:
    if value is None:
        raise typer.BadParameter(f"{option} is required unless --file is given.")
    return value


def _team_details(
    file: Path | None, team_id: int | None, season_id: int | None
) -> tuple[StatDetail, ...]:
    if file is not None:
        team = load_payload(file)
    else:
        ids = (_require(team_id, "--team-id"), _require(season_id, "--season-id"))
        with SportMonksClient.from_settings() as client:
            team = client.get_team_statistics(*ids)
    return select_team_statistics(team, season_id=season_id)


@app.command("standings")
def standings_cmd(
    season_id: int | None = typer.Option(None, "--season-id", help="SportMonks season id."),
    file: Path | None = typer.Option(None, "--file", exists=True, help=FILE_HELP),
    view: StandingsView = typer.Option(StandingsView.OVERALL, "--view", help="Table view."),
    catalog: bool = typer.Option(False, "--catalog", help=CATALOG_HELP),
) -> None:
    """League table for one view (overall / home / away)."""

    if file is not None:
        payload = load_payload(file)
    else:
        season = _require(season_id, "--season-id")
        with SportMonksClient.from_settings() as client:
            payload = client.get_standings(season)

    rows = parse_standing_rows(payload)
    echo_json(project_standings(rows, view, taxonomy=_taxonomy(catalog)))


@app.command("odds")
def odds_cmd(
    fixture_id: int | None = typer.Option(None, "--fixture-id", help="SportMonks fixture id."),
    file: Path | None = typer.Option(None, "--file", exists=True, help=FILE_HELP),
    bookmaker: list[int] | None = typer.Option(
        None, "--bookmaker", help="Bookmaker id to show (repeatable)."
    ),
    all_bookmakers: bool = typer.Option(
        False, "--all-bookmakers", help="Show every bookmaker instead of the default pair."
    ),
) -> None:
    """Pre-match odds grouped by market and bookmaker."""

    if file is not None:
        payload = load_payload(file)
    else:
        fixture = _require(fixture_id, "--fixture-id")
        with SportMonksClient.from_settings() as client:
            payload = client.get_fixture(fixture)

    # A fixture object carries its odds under `odds`; a bare list is the odds itself.
    if isinstance(payload, dict):
        payload = payload.get("odds") or []
    quotes = parse_odds_quotes(payload)

    if bookmaker:
        selected: list[int] | None = list(bookmaker)
    elif all_bookmakers:
        selected = None
    else:
        selected = choose_default_bookmakers(
            quotes,
            primary_ids=settings.primary_bookmaker_ids,
            baseline_market_id=settings.baseline_market_id,
        )

    echo_json(
        {
            "available_bookmakers": bookmakers_with_valid_baseline(
                quotes, baseline_market_id=settings.baseline_market_id
            ),
            "selected_bookmakers": selected,
            "markets": aggregate_odds(quotes, filter_bookmaker_ids=selected),
        }
    )


@app.command("form")
def form_cmd(
    team_id: int = typer.Option(..., "--team-id", help="SportMonks team id."),
    file: Path | None = typer.Option(None, "--file", exists=True, help=FILE_HELP),
    days: int = typer.Option(120, "--days", help="Look-back window when fetching fixtures."),
    limit: int | None = typer.Option(None, "--limit", help="Matches to include (FORM_LIMIT)."),
    exclude_fixture_id: int | None = typer.Option(
        None, "--exclude-fixture-id", help="Leave this fixture out (e.g. the one being previewed)."
    ),
) -> None:
    """Recent finished results for a team, newest first."""

    if file is not None:
        payload = load_payload(file)
    else:
        end = date.today()
        with SportMonksClient.from_settings() as client:
            payload = client.get_team_fixtures_between(end - timedelta(days=days), end, team_id)

    matches = calculate_form(
        parse_fixtures(payload),
        team_id,
        limit if limit is not None else settings.form_limit,
        exclude_fixture_id=exclude_fixture_id,
    )
    echo_json({"matches": matches, "summary": summarize_form(matches)})


@app.command("scoring")
def scoring_cmd(
    team_id: int | None = typer.Option(None, "--team-id", help="SportMonks team id."),
    season_id: int | None = typer.Option(None, "--season-id", help="SportMonks season id."),
    file: Path | None = typer.Option(None, "--file", exists=True, help=FILE_HELP),
    catalog: bool = typer.Option(False, "--catalog", help=CATALOG_HELP),
) -> None:
    """Goals scored and conceded per 15-minute bucket."""

    details = _team_details(file, team_id, season_id)
    echo_json(scoring_distribution(details, taxonomy=_taxonomy(catalog)))


@app.command("corners")
def corners_cmd(
    team_id: int | None = typer.Option(None, "--team-id", help="SportMonks team id."),
    season_id: int | None = typer.Option(None, "--season-id", help="SportMonks season id."),
    file: Path | None = typer.Option(None, "--file", exists=True, help=FILE_HELP),
    opponent_id: int | None = typer.Option(
        None, "--opponent-id", help="Away opponent team id, for the combined expectation."
    ),
    opponent_file: Path | None = typer.Option(
        None, "--opponent-file", exists=True, help="Saved statistics of the away opponent."
    ),
    catalog: bool = typer.Option(False, "--catalog", help=CATALOG_HELP),
) -> None:
    """Corner totals and per-venue averages; treats the team as the home side."""

    taxonomy = _taxonomy(catalog)

    def averages(details: tuple[StatDetail, ...]) -> CornerAverages:
        games = games_played_by_venue(details, taxonomy=taxonomy)
        return project_corner_averages(
            details,
            games[Venue.HOME] or 0,
            games[Venue.AWAY] or 0,
            taxonomy=taxonomy,
        )

    team = averages(_team_details(file, team_id, season_id))
    result: dict[str, Any] = {"team": team}

    if opponent_file is not None or opponent_id is not None:
        opponent = averages(_team_details(opponent_file, opponent_id, season_id))
        result["opponent"] = opponent
        result["combined_expected"] = combined_expected_corners(team, opponent)

    echo_json(result)


@app.command("performance")
def performance_cmd(
    team_id: int | None = typer.Option(None, "--team-id", help="SportMonks team id."),
    season_id: int | None = typer.Option(None, "--season-id", help="SportMonks season id."),
    file: Path | None = typer.Option(None, "--file", exists=True, help=FILE_HELP),
    catalog: bool = typer.Option(False, "--catalog", help=CATALOG_HELP),
) -> None:
    """Season record split by venue."""

    details = _team_details(file, team_id, season_id)
    echo_json(project_venue_performance(details, taxonomy=_taxonomy(catalog)))


@app.command("h2h")
def h2h_cmd(
    team1_id: int | None = typer.Option(None, "--team1-id", help="First team id."),
    team2_id: int | None = typer.Option(None, "--team2-id", help="Second team id."),
    file: Path | None = typer.Option(None, "--file", exists=True, help=FILE_HELP),
    limit: int | None = typer.Option(None, "--limit", help="Most recent meetings to show."),
) -> None:
    """Previous meetings between two teams, most recent first."""

    if file is not None:
        payload = load_payload(file)
    else:
        teams = (_require(team1_id, "--team1-id"), _require(team2_id, "--team2-id"))
        with SportMonksClient.from_settings() as client:
            payload = client.get_head_to_head(*teams)

    echo_json(head_to_head_rows(parse_fixtures(payload), limit=limit))
