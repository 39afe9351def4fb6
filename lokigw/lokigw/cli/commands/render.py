"""Render command for lokigw."""

import logging
from pathlib import Path

import click

from lokigw.cli.display import show_authentication, show_next_steps
from lokigw.core.config import load_stack_config, save_stack_config
from lokigw.core.errors import GatewayConfigError
from lokigw.generators.manifests import compile_gateway
from lokigw.utils.output import console
from lokigw.utils.yaml import dump_yaml_with_header, index_by_kind, load_documents

log = logging.getLogger(__name__)

# Baseline kinds the gateway is made of, in output order
_GATEWAY_KINDS = ("Deployment", "Service", "ServiceMonitor")


def _baseline(path: str) -> dict[str, dict]:
    manifests = index_by_kind(load_documents(path))
    missing = [kind for kind in _GATEWAY_KINDS if not manifests.get(kind)]
    if missing:
        raise click.UsageError(
            f"{path} is missing gateway manifests of kind: {', '.join(missing)}"
        )
    for kind in _GATEWAY_KINDS:
        if len(manifests[kind]) > 1:
            log.warning(
                "%s holds %d %s manifests, using the first",
                path,
                len(manifests[kind]),
                kind,
            )
    return {kind: manifests[kind][0] for kind in _GATEWAY_KINDS}


@click.command("render")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default="stack.yaml",
    help="Stack config file",
)
@click.option(
    "--manifests",
    "-m",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Baseline gateway Deployment, Service and ServiceMonitor (multi-doc YAML)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False),
    default="output",
    help="Output directory for rendered manifests",
)
@click.option(
    "--persist/--no-persist",
    default=True,
    help="Write generated tenant credentials back to the stack config",
)
def render_cmd(config_file: str, manifests: str, output: str, persist: bool):
    """Render the gateway manifests of a LokiStack for its tenancy mode.

    Examples:

        lokigw render -c stack.yaml -m baseline.yaml -o ./rendered
    """
    try:
        options = load_stack_config(config_file)
        baseline = _baseline(manifests)
        compiled = compile_gateway(
            options,
            baseline["Deployment"],
            baseline["Service"],
            baseline["ServiceMonitor"],
        )
    except GatewayConfigError as exc:
        raise click.ClickException(f"{exc.code}: {exc}") from exc

    output_path = Path(output)
    output_path.mkdir(parents=True, exist_ok=True)
    manifests_file = output_path / f"gateway-{options.stack.name}.yaml"
    manifests_file.write_text(
        dump_yaml_with_header(
            [compiled.deployment, compiled.service, compiled.service_monitor],
            "Gateway manifests",
            options.stack.name,
        )
    )

    if persist and compiled.tenants != options.tenants:
        options.tenants = compiled.tenants
        save_stack_config(config_file, options)
        console.print(
            f"[yellow]Saved generated tenant credentials to {config_file}[/yellow]"
        )

    console.print()
    console.print("[bold green]Manifests rendered successfully![/bold green]")
    console.print(f"  [cyan]{manifests_file}[/cyan]")
    console.print()
    show_authentication(compiled.authentication)
    show_next_steps(Path(config_file), manifests_file)
