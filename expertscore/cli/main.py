"""Top-level CLI entry point for expertscore."""

from __future__ import annotations

import logging
import sys

import click

from expertscore import __version__


@click.group()
@click.version_option(version=__version__, prog_name="expertscore")
@click.option(
    "--config",
    type=click.Path(),
    default=None,
    envvar="EXPERTSCORE_CONFIG",
    help="Path to expertscore.yaml",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """ExpertScore -- rank experts against a research question.

    \b
    rank     Score an expert export against question entities
    config   Show or validate the weight configuration
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config

    # stdout carries the ranking (possibly JSON); logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger(__name__).debug(
        "expertscore %s, config=%s", __version__, config or "(search path)",
    )


# Register sub-commands
from expertscore.cli.config_cmd import config_group  # noqa: E402
from expertscore.cli.rank_cmd import rank_cmd  # noqa: E402

cli.add_command(config_group, "config")
cli.add_command(rank_cmd, "rank")
