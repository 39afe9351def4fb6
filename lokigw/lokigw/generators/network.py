"""Network mutator: gateway Service ports."""

from lokigw.core.constants import OPA_INTERNAL_PORT, OPA_INTERNAL_PORT_NAME
from lokigw.core.models import TenancyMode
from lokigw.generators.rules import Rule, RuleContext, always, apply_rules
from lokigw.utils.upsert import upsert


def expose_opa_metrics(service: dict, ctx: RuleContext) -> None:
    ports = service.setdefault("spec", {}).setdefault("ports", [])
    upsert(ports, {"name": OPA_INTERNAL_PORT_NAME, "port": OPA_INTERNAL_PORT})


NETWORK_RULES = (Rule("opa-metrics-port", expose_opa_metrics, always),)


def mutate_network(service: dict, mode: TenancyMode) -> dict:
    """Return a copy of the gateway Service with the ports ``mode`` needs."""
    return apply_rules(NETWORK_RULES, service, RuleContext(mode=mode))
