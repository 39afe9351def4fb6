"""Compile all gateway manifests of a stack in one pass."""

import logging

from lokigw.core.models import CompiledGateway, GatewayOptions
from lokigw.generators.credentials import apply_gateway_defaults, persist_credentials
from lokigw.generators.network import mutate_network
from lokigw.generators.scrape import mutate_scrape_target
from lokigw.generators.workload import mutate_workload

log = logging.getLogger(__name__)


def compile_gateway(
    options: GatewayOptions,
    deployment: dict,
    service: dict,
    service_monitor: dict,
    opa_image: str | None = None,
) -> CompiledGateway:
    """Default tenant credentials, then finish Deployment, Service and ServiceMonitor.

    Inputs are left untouched; the result is only returned when every step
    succeeded, so callers never see a partially mutated manifest set.
    """
    authentication, authorization = apply_gateway_defaults(
        options.tenants, options.stack, options.mode
    )
    tenants = persist_credentials(options.tenants, authentication)

    compiled = CompiledGateway(
        authentication=authentication,
        authorization=authorization,
        tenants=tenants,
        deployment=mutate_workload(
            deployment,
            options.mode,
            options.gates,
            options.stack.name,
            options.stack.namespace,
            tenants=[a.tenant_name for a in authentication],
            opa_image=opa_image,
        ),
        service=mutate_network(service, options.mode),
        service_monitor=mutate_scrape_target(
            service_monitor, options.mode, options.gates
        ),
    )
    log.debug(
        "compiled gateway for %s/%s (mode=%s, tenants=%d)",
        options.stack.namespace,
        options.stack.name,
        options.mode.value,
        len(authentication),
    )
    return compiled
