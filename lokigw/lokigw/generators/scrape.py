"""Scrape mutator: gateway ServiceMonitor endpoints."""

import copy

from lokigw.core.constants import BEARER_TOKEN_FILE, OPA_INTERNAL_PORT_NAME
from lokigw.core.errors import MissingTLSConfig
from lokigw.core.models import FeatureGates, TenancyMode
from lokigw.generators.rules import Rule, RuleContext, always, apply_rules
from lokigw.utils.upsert import upsert


def _inherited_tls_config(endpoints: list[dict]) -> dict:
    """TLS settings of the first endpoint that is not ours."""
    for endpoint in endpoints:
        if endpoint.get("port") == OPA_INTERNAL_PORT_NAME:
            continue
        if endpoint.get("tlsConfig"):
            return copy.deepcopy(endpoint["tlsConfig"])
    raise MissingTLSConfig(OPA_INTERNAL_PORT_NAME)


def scrape_opa_metrics(service_monitor: dict, ctx: RuleContext) -> None:
    endpoints = service_monitor.setdefault("spec", {}).setdefault("endpoints", [])

    endpoint = {
        "port": OPA_INTERNAL_PORT_NAME,
        "path": "/metrics",
        "scheme": "http",
    }
    if ctx.gates.tls_endpoints:
        endpoint["scheme"] = "https"
        endpoint["bearerTokenFile"] = BEARER_TOKEN_FILE
        endpoint["tlsConfig"] = _inherited_tls_config(endpoints)

    upsert(endpoints, endpoint, key="port")


SCRAPE_RULES = (Rule("opa-metrics-endpoint", scrape_opa_metrics, always),)


def mutate_scrape_target(
    service_monitor: dict, mode: TenancyMode, gates: FeatureGates
) -> dict:
    """Return a copy of the gateway ServiceMonitor scraping the OPA sidecar.

    With TLS endpoints enabled the new endpoint reuses the tlsConfig of an
    existing endpoint; MissingTLSConfig is raised when there is none.
    """
    ctx = RuleContext(mode=mode, gates=gates)
    return apply_rules(SCRAPE_RULES, service_monitor, ctx)
