import sys
import asyncio
from datetime import timedelta
from zoneinfo import ZoneInfo

# --- Settings/Logging ---
from league_fairness.logging.setup import setup_logging
from league_fairness.config.settings import settings

setup_logging()

from loguru import logger

from league_fairness.calculation.boost import scheduling_weight
from league_fairness.calculation.fairness_aggregator import SeasonalFairnessAggregator
from league_fairness.calculation.reporting import (
    fairness_rating,
    order_for_report,
    score_trend,
)
from league_fairness.models.fairness import SeasonalFairnessReport
from league_fairness.storage.supabase_client import (
    initialize_supabase,
    load_season_inputs,
)

from rich import print
from rich.panel import Panel
from rich.table import Table

RATING_STYLES = {"EXCELLENT": "green", "MODERATE": "yellow", "POOR": "red"}
TREND_MARKERS = {"ABOVE": "[green]▲[/green]", "LEVEL": "–", "BELOW": "[red]▼[/red]"}


def render_report(report: SeasonalFairnessReport) -> None:
    """Prints the league summary and the per-team breakdown."""
    metrics = report.metrics
    rating = fairness_rating(metrics.fairness_score)
    style = RATING_STYLES[rating.value]

    summary = (
        f"Fairness score: [bold {style}]{metrics.fairness_score:.0f}/100[/bold {style}] ({rating.value.lower()})\n"
        f"League average: {metrics.overall_average:.2f}   "
        f"Std dev: {metrics.standard_deviation:.2f}   "
        f"Range: {metrics.min_score:.2f} - {metrics.max_score:.2f}\n\n"
        + "\n".join(f"• {rec}" for rec in metrics.recommendations)
    )
    print(
        Panel(
            summary,
            title="Seasonal Fairness",
            subtitle=f"policy {report.policy_version}",
            border_style=style,
        )
    )

    table = Table(title="Teams")
    table.add_column("Team")
    table.add_column("Matches", justify="right")
    table.add_column("Average", justify="right")
    table.add_column("Deficit", justify="right")
    table.add_column("Trend", justify="center")
    table.add_column("Weight", justify="right")

    for team in order_for_report(report.per_team):
        trend = score_trend(team.average_score, metrics.overall_average)
        table.add_row(
            team.team_name or str(team.team_id),
            str(team.total_matches),
            f"{team.average_score:.2f}",
            f"{team.fairness_deficit:.2f}",
            TREND_MARKERS[trend.value] if team.total_matches else "",
            f"{scheduling_weight(team.team_id, report.per_team):.2f}",
        )
    print(table)


async def main() -> int:
    """Loads the season from Supabase and reports seasonal fairness."""
    logger.info("Starting seasonal fairness report")

    supabase_client = await initialize_supabase()
    if not supabase_client:
        logger.critical("Failed to initialize Supabase client. Exiting.")
        return 1

    inputs = await load_season_inputs(supabase_client)
    if inputs is None:
        logger.error("Season data could not be loaded. Exiting.")
        return 1
    teams, matches, venues = inputs

    aggregator = SeasonalFairnessAggregator(
        league_timezone=ZoneInfo(settings.league_timezone),
        match_duration=timedelta(minutes=settings.nominal_match_duration_minutes),
    )
    report = aggregator.compute_fairness(teams, matches, venues)
    render_report(report)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
