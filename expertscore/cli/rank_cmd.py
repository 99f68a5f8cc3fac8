"""CLI command: expertscore rank — Rank experts against a question."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

import click

logger = logging.getLogger(__name__)


def _parse_now(value: str | None) -> datetime:
    from expertscore.engine.recency import to_datetime

    if value is None:
        return datetime.now(timezone.utc)
    try:
        return to_datetime(value)
    except (TypeError, ValueError) as e:
        raise click.BadParameter(f"not an ISO-8601 date: {value}", param_hint="--now") from e


@click.command("rank")
@click.argument("experts_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--entities", "-e", "entities_file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="YAML/JSON file with companies, locations, topics, industries",
)
@click.option("--top3", is_flag=True, help="Question is a top-3 priority question")
@click.option("--now", "now_str", default=None, help="Reference time (ISO-8601); default: current time")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Maximum experts to list")
@click.option("--min-score", type=int, default=None, help="Drop experts scoring below this")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Score candidates on N threads")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), default=None, help="Write the ranking table to CSV")
@click.option("--json", "as_json", is_flag=True, help="Print full results as JSON")
@click.pass_context
def rank_cmd(
    ctx: click.Context,
    experts_file: str,
    entities_file: str,
    top3: bool,
    now_str: str | None,
    limit: int | None,
    min_score: int | None,
    workers: int | None,
    csv_path: str | None,
    as_json: bool,
) -> None:
    """Score every expert in EXPERTS_FILE and print them best-first."""
    from expertscore.config.loader import load_config
    from expertscore.data.repository import FileExpertRepository, load_entities
    from expertscore.engine.models import Question
    from expertscore.engine.ranking import rank_from_repository
    from expertscore.errors import ExpertScoreError
    from expertscore.output.table import results_to_frame

    now = _parse_now(now_str)

    try:
        config = load_config(ctx.obj.get("config_path"))
        entities = load_entities(entities_file)
        ranking = rank_from_repository(
            FileExpertRepository(experts_file),
            Question(is_top3=top3),
            entities,
            now,
            config,
            limit=limit if limit is not None else config.ranking.limit,
            min_score=min_score if min_score is not None else config.ranking.min_score,
            max_workers=workers if workers is not None else config.ranking.max_workers,
        )
    except (ExpertScoreError, ValueError) as e:
        click.echo(f"Ranking failed: {e}", err=True)
        raise SystemExit(1) from None

    frame = results_to_frame(ranking.results)
    if csv_path:
        frame.to_csv(csv_path, index=False)
        logger.info("Wrote %d rows to %s", len(frame), csv_path)

    if as_json:
        click.echo(json.dumps(
            {"results": ranking.results, "run": ranking.tracker.to_dict()},
            indent=2,
            default=str,
        ))
        return

    click.echo("Expert Ranking")
    click.echo("=" * 40)
    click.echo(f"Companies: {', '.join(entities.companies) or '-'}")
    if not ranking.results:
        click.echo("\nNo experts matched.")
    else:
        click.echo("")
        for row in frame.itertuples(index=False):
            click.echo(
                f"  {row.rank:3d}. {row.expertId:12s} {row.totalScore:5d}  "
                f"{row.recommendationLevel:20s} conf={row.confidence:.2f}"
            )

    tracker = ranking.tracker
    if tracker.errors:
        click.echo(f"\nSkipped ({len(tracker.errors)}):")
        for err in tracker.errors[:5]:
            click.echo(f"  {err}")

    click.echo(f"\nRanking complete: {tracker.experts_scored} scored, "
               f"{len(ranking.results)} listed, "
               f"{tracker.experts_skipped} skipped")
