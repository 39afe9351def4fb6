"""Mode and feature-gate driven mutation rules.

Each mutator is an ordered table of rules. A rule fires when the tenancy
mode is one of its modes and its gate predicate holds; rules run in table
order against a private copy of the descriptor.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Callable

from lokigw.core.models import INTEGRATED_MODES, FeatureGates, TenancyMode

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleContext:
    """Inputs shared by all rules of a single mutator call."""

    mode: TenancyMode
    gates: FeatureGates = field(default_factory=FeatureGates)
    stack_name: str = ""
    stack_namespace: str = ""
    tenants: tuple[str, ...] = ()
    opa_image: str = ""


def always(gates: FeatureGates) -> bool:
    return True


def http_encryption(gates: FeatureGates) -> bool:
    return gates.http_encryption


def serving_certs(gates: FeatureGates) -> bool:
    return gates.serving_certs


@dataclass(frozen=True)
class Rule:
    name: str
    apply: Callable[[dict, RuleContext], None]
    when: Callable[[FeatureGates], bool] = always
    modes: frozenset[TenancyMode] = INTEGRATED_MODES

    def matches(self, ctx: RuleContext) -> bool:
        return ctx.mode in self.modes and self.when(ctx.gates)


def apply_rules(rules: tuple[Rule, ...], descriptor: dict, ctx: RuleContext) -> dict:
    """Run matching rules in order on a deep copy of ``descriptor``.

    The input is never modified, so a failing rule leaves the caller's
    descriptor intact.
    """
    out = copy.deepcopy(descriptor)
    for rule in rules:
        if not rule.matches(ctx):
            log.debug("rule %s skipped (mode=%s)", rule.name, ctx.mode.value)
            continue
        log.debug("rule %s applied", rule.name)
        rule.apply(out, ctx)
    return out
