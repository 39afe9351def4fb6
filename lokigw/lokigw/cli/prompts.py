"""Interactive prompts for lokigw CLI."""

from rich.prompt import Confirm, Prompt

from lokigw.core.constants import DEFAULT_TENANTS
from lokigw.core.models import (
    FeatureGates,
    GatewayOptions,
    StackIdentity,
    TenancyMode,
    TenantConfig,
    TenantOpenShiftSpec,
)
from lokigw.utils.output import console


def collect_interactive_config(
    name: str | None,
    namespace: str | None,
    base_domain: str | None,
    mode: str | None,
) -> GatewayOptions:
    """Collect a stack configuration interactively."""
    console.print()

    # Stack identity
    name_value = name or Prompt.ask("[bold]LokiStack name[/bold]", default="lokistack")
    namespace_value = namespace or Prompt.ask(
        "[bold]Namespace[/bold]",
        default="openshift-logging",
    )

    # Tenancy mode
    if mode:
        mode_value = TenancyMode(mode.lower())
    else:
        mode_choice = Prompt.ask(
            "[bold]Tenancy mode[/bold]",
            choices=[m.value for m in TenancyMode],
            default=TenancyMode.OPENSHIFT_LOGGING.value,
        )
        mode_value = TenancyMode(mode_choice)

    options = GatewayOptions(
        stack=StackIdentity(name=name_value, namespace=namespace_value),
        mode=mode_value,
    )

    if mode_value != TenancyMode.OPENSHIFT_LOGGING:
        return options

    # OpenShift specifics
    console.print()
    console.print("[bold]OpenShift configuration:[/bold]")
    domain_value = base_domain or Prompt.ask(
        "  Cluster base domain",
        default="example.com",
    )
    options.stack = StackIdentity(
        name=name_value, namespace=namespace_value, base_domain=domain_value
    )

    http_encryption = Confirm.ask("\n  Enable HTTP encryption?", default=True)
    tls_endpoints = False
    serving_certs = False
    if http_encryption:
        tls_endpoints = Confirm.ask("  Scrape metrics over TLS?", default=True)
        serving_certs = Confirm.ask(
            "  Use the OpenShift serving certs service?", default=True
        )
    options.gates = FeatureGates(
        http_encryption=http_encryption,
        service_monitor_tls_endpoints=tls_endpoints,
        serving_certs_service=serving_certs,
    )

    tenants = Prompt.ask(
        "  Tenants (comma-separated)",
        default=",".join(DEFAULT_TENANTS),
    )
    options.tenants = {
        t.strip(): TenantConfig(openshift=TenantOpenShiftSpec())
        for t in tenants.split(",")
        if t.strip()
    }

    return options
