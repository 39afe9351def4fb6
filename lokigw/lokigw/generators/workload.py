"""Workload mutator: gateway Deployment for the selected tenancy mode."""

from typing import Iterable

from lokigw.core.constants import DEFAULT_TENANTS
from lokigw.core.models import FeatureGates, TenancyMode
from lokigw.core.settings import settings
from lokigw.generators.rules import (
    Rule,
    RuleContext,
    always,
    apply_rules,
    http_encryption,
    serving_certs,
)
from lokigw.generators.sections.gateway import (
    https_healthchecks,
    https_upstream_endpoints,
    require_gateway_container,
    serving_certs_ca_bundle,
    server_tls,
)
from lokigw.generators.sections.opa import inject_opa_sidecar

WORKLOAD_RULES = (
    Rule("require-gateway-container", require_gateway_container, always),
    Rule("https-upstream-endpoints", https_upstream_endpoints, serving_certs),
    Rule("https-healthchecks", https_healthchecks, http_encryption),
    Rule("serving-certs-ca-bundle", serving_certs_ca_bundle, serving_certs),
    Rule("server-tls", server_tls, http_encryption),
    Rule("opa-sidecar", inject_opa_sidecar, always),
)


def mutate_workload(
    deployment: dict,
    mode: TenancyMode,
    gates: FeatureGates,
    stack_name: str,
    stack_namespace: str,
    tenants: Iterable[str] | None = None,
    opa_image: str | None = None,
) -> dict:
    """Return a copy of the gateway Deployment configured for ``mode``.

    ``tenants`` feeds the OPA tenant mappings and defaults to the built-in
    openshift-logging tenants. Raises ContainerNotFound when the Deployment
    has no gateway container and the mode needs one.
    """
    ctx = RuleContext(
        mode=mode,
        gates=gates,
        stack_name=stack_name,
        stack_namespace=stack_namespace,
        tenants=tuple(sorted(tenants or DEFAULT_TENANTS)),
        opa_image=opa_image or settings.opa_image,
    )
    return apply_rules(WORKLOAD_RULES, deployment, ctx)
