"""Init command for lokigw."""

from pathlib import Path

import click
from rich.panel import Panel
from rich.prompt import Confirm

from lokigw.cli.display import show_authentication, show_config_summary, show_next_steps
from lokigw.cli.prompts import collect_interactive_config
from lokigw.core.config import save_stack_config
from lokigw.core.errors import GatewayConfigError
from lokigw.core.models import (
    FeatureGates,
    GatewayOptions,
    StackIdentity,
    TenancyMode,
    TenantConfig,
    TenantOpenShiftSpec,
)
from lokigw.generators.credentials import apply_gateway_defaults, persist_credentials
from lokigw.utils.output import console


@click.command("init")
@click.option("--name", "-n", help="LokiStack name")
@click.option("--namespace", "-N", help="Namespace of the LokiStack")
@click.option("--base-domain", "-d", help="Cluster base domain (e.g., example.com)")
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in TenancyMode], case_sensitive=False),
    help="Tenancy mode",
)
@click.option("--http-encryption/--no-http-encryption", default=False)
@click.option("--tls-endpoints/--no-tls-endpoints", default=False)
@click.option("--serving-certs/--no-serving-certs", default=False)
@click.option(
    "--tenant", "-t", "tenants", multiple=True, help="Tenant name (repeatable)"
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default="stack.yaml",
    help="Stack config file to write",
)
@click.option("--force", is_flag=True, help="Overwrite an existing stack config")
@click.option(
    "--interactive/--no-interactive",
    "-i/-I",
    default=True,
    help="Run in interactive mode",
)
def init_cmd(
    name: str | None,
    namespace: str | None,
    base_domain: str | None,
    mode: str | None,
    http_encryption: bool,
    tls_endpoints: bool,
    serving_certs: bool,
    tenants: tuple[str, ...],
    output: str,
    force: bool,
    interactive: bool,
):
    """Create a stack config with freshly generated tenant credentials.

    Examples:

        # Interactive mode (default)
        lokigw init

        # Non-interactive mode
        lokigw init -I --name lokistack --namespace openshift-logging \\
            --mode openshift-logging --base-domain example.com --http-encryption
    """
    console.print(
        Panel.fit(
            "[bold blue]LokiStack Gateway Configuration[/bold blue]\n"
            "Generate a stack config for lokigw render",
            border_style="blue",
        )
    )

    output_path = Path(output)
    if output_path.exists() and not force:
        raise click.UsageError(
            f"{output_path} already exists; use --force to overwrite it "
            "(existing tenant credentials will be replaced)"
        )

    if interactive:
        options = collect_interactive_config(name, namespace, base_domain, mode)
    else:
        if not all([name, namespace, mode]):
            raise click.UsageError(
                "Options --name, --namespace and --mode are required "
                "in non-interactive mode"
            )
        options = GatewayOptions(
            stack=StackIdentity(
                name=name, namespace=namespace, base_domain=base_domain or ""
            ),
            mode=TenancyMode(mode.lower()),
            gates=FeatureGates(
                http_encryption=http_encryption,
                service_monitor_tls_endpoints=tls_endpoints,
                serving_certs_service=serving_certs,
            ),
            tenants={t: TenantConfig(openshift=TenantOpenShiftSpec()) for t in tenants},
        )

    show_config_summary(options)

    if interactive and not Confirm.ask(
        "\n[bold]Write stack config with this configuration?[/bold]"
    ):
        console.print("[yellow]Aborted.[/yellow]")
        return

    try:
        authentication, _ = apply_gateway_defaults(
            options.tenants, options.stack, options.mode
        )
    except GatewayConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    options.tenants = persist_credentials(options.tenants, authentication)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    save_stack_config(str(output_path), options)

    console.print()
    console.print("[bold green]Stack config written![/bold green]")
    console.print(f"  [cyan]{output_path}[/cyan]")
    console.print()
    show_authentication(authentication)
    show_next_steps(output_path)
