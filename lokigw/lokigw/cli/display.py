"""Display utilities for CLI output."""

from pathlib import Path

from rich.table import Table

from lokigw.core.models import AuthenticationSpec, GatewayOptions
from lokigw.utils.output import console


def _mask(secret: str) -> str:
    return secret[:4] + "*" * max(len(secret) - 4, 0)


def show_config_summary(options: GatewayOptions) -> None:
    """Display a summary of the stack configuration."""
    console.print()

    table = Table(title="Configuration Summary", border_style="blue")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("LokiStack", options.stack.name)
    table.add_row("Namespace", options.stack.namespace)
    table.add_row("Tenancy Mode", options.mode.value)

    if options.integrated:
        table.add_row("Base Domain", options.stack.base_domain)
        table.add_row("HTTP Encryption", str(options.gates.http_encryption))
        table.add_row(
            "TLS Metrics Endpoints", str(options.gates.service_monitor_tls_endpoints)
        )
        table.add_row("Serving Certs Service", str(options.gates.serving_certs_service))
        table.add_row("Tenants", ", ".join(sorted(options.tenants)) or "(defaults)")

    console.print(table)


def show_authentication(authentication: list[AuthenticationSpec]) -> None:
    """Display tenant credentials with secrets masked."""
    if not authentication:
        return

    table = Table(title="Tenant Authentication", border_style="blue")
    table.add_column("Tenant", style="cyan")
    table.add_column("Tenant ID")
    table.add_column("Cookie Secret")
    table.add_column("Redirect URL", style="green")

    for auth in authentication:
        table.add_row(
            auth.tenant_name,
            auth.tenant_id,
            _mask(auth.cookie_secret),
            auth.redirect_url,
        )

    console.print(table)


def show_next_steps(config_file: Path, manifests_file: Path | None = None) -> None:
    """Display next steps after file generation."""
    step = 1

    console.print("[bold]Next steps:[/bold]")
    console.print()
    console.print(
        f"  {step}. Keep [cyan]{config_file}[/cyan] under version control; "
        "it holds the tenant cookie secrets"
    )
    console.print()
    step += 1

    if manifests_file is None:
        console.print(f"  {step}. Render the gateway manifests:")
        console.print()
        console.print(
            f"[dim]     lokigw render -c {config_file} -m baseline.yaml -o output[/dim]"
        )
        console.print()
        return

    console.print(f"  {step}. Apply the gateway manifests:")
    console.print()
    console.print(f"[dim]     oc apply -f {manifests_file}[/dim]")
    console.print()
