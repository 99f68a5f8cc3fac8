"""Config CLI commands: show, validate."""

from __future__ import annotations

import json

import click
from pydantic import ValidationError

from expertscore.errors import ConfigError


@click.group("config")
def config_group() -> None:
    """Manage configuration."""
    pass


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the resolved configuration."""
    from expertscore.config.loader import load_config

    try:
        config = load_config(ctx.obj.get("config_path"))
    except (ConfigError, ValidationError) as e:
        click.echo(f"Cannot load config: {e}", err=True)
        raise SystemExit(1) from None
    click.echo(json.dumps(config.model_dump(), indent=2, default=str))


@config_group.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate expertscore.yaml against the schema."""
    from expertscore.config.loader import load_config

    try:
        config = load_config(ctx.obj.get("config_path"))
    except (ConfigError, ValidationError) as e:
        click.echo(f"Config validation failed: {e}", err=True)
        raise SystemExit(1) from None

    t = config.scoring.thresholds
    click.echo("Config is valid.")
    click.echo(f"  Version: {config.version}")
    click.echo(f"  Relationship types: {len(config.scoring.relationship_weights)}")
    click.echo(f"  Pattern types: {len(config.scoring.pattern_weights)}")
    click.echo(
        f"  Thresholds: {t.highly_recommended:g}/{t.recommended:g}/"
        f"{t.suitable:g}/{t.possible:g}"
    )
    click.echo(f"  Ranking: limit={config.ranking.limit}, min_score={config.ranking.min_score}")
