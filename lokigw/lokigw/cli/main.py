"""Main CLI entry point for lokigw."""

import click

from lokigw.cli.commands import init, render
from lokigw.core.settings import settings
from lokigw.utils.output import configure_logging


@click.group()
@click.version_option()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (defaults to $LOKIGW_LOG_LEVEL or WARNING)",
)
def cli(log_level: str | None):
    """lokigw - LokiStack gateway manifest compiler.

    Finish gateway Deployment, Service and ServiceMonitor manifests for a
    tenancy mode and keep tenant credentials stable between runs.
    """
    configure_logging(log_level or settings.log_level)


# Register commands
cli.add_command(init.init_cmd, name="init")
cli.add_command(render.render_cmd, name="render")
