"""Stack configuration file: loading, validation and saving."""

import os
from typing import Any

import yaml

from lokigw.core.errors import StackConfigError
from lokigw.core.models import (
    FeatureGates,
    GatewayOptions,
    StackIdentity,
    TenancyMode,
    TenantConfig,
    TenantOpenShiftSpec,
)

# featureGates keys in the file -> FeatureGates fields
_GATE_KEYS = {
    "httpEncryption": "http_encryption",
    "serviceMonitorTLSEndpoints": "service_monitor_tls_endpoints",
    "servingCertsService": "serving_certs_service",
}


def parse_stack_config(raw: dict[str, Any]) -> GatewayOptions:
    """Build GatewayOptions from the mapping stored in a stack config file."""
    missing = [k for k in ("name", "namespace", "mode") if not raw.get(k)]
    if missing:
        raise StackConfigError(f"missing required keys: {', '.join(missing)}")

    try:
        mode = TenancyMode(str(raw["mode"]).lower())
    except ValueError:
        choices = ", ".join(m.value for m in TenancyMode)
        raise StackConfigError(
            f"unknown mode {raw['mode']!r}, expected one of: {choices}"
        ) from None

    gates_raw = raw.get("featureGates") or {}
    if not isinstance(gates_raw, dict):
        raise StackConfigError("featureGates must be a mapping")
    unknown = sorted(set(gates_raw) - set(_GATE_KEYS))
    if unknown:
        raise StackConfigError(f"unknown feature gates: {', '.join(unknown)}")
    gates = FeatureGates(
        **{field: bool(gates_raw.get(key, False)) for key, field in _GATE_KEYS.items()}
    )

    tenants: dict[str, TenantConfig] = {}
    tenants_raw = raw.get("tenants") or {}
    if not isinstance(tenants_raw, dict):
        raise StackConfigError("tenants must be a mapping of tenant name to config")
    for name, tenant in tenants_raw.items():
        tenant = tenant or {}
        if not isinstance(tenant, dict):
            raise StackConfigError(f"tenants.{name} must be a mapping")
        openshift = tenant.get("openshift")
        if openshift is not None and not isinstance(openshift, dict):
            raise StackConfigError(f"tenants.{name}.openshift must be a mapping")
        tenants[name] = TenantConfig(
            openshift=TenantOpenShiftSpec(
                cookie_secret=openshift.get("cookieSecret") or "",
                tenant_id=openshift.get("tenantId") or "",
            )
            if openshift is not None
            else None
        )

    return GatewayOptions(
        stack=StackIdentity(
            name=raw["name"],
            namespace=raw["namespace"],
            base_domain=raw.get("baseDomain") or "",
        ),
        mode=mode,
        gates=gates,
        tenants=tenants,
    )


def stack_config_to_dict(options: GatewayOptions) -> dict[str, Any]:
    """Inverse of parse_stack_config, tenants sorted by name."""
    tenants: dict[str, Any] = {}
    for name in sorted(options.tenants):
        spec = options.tenants[name].openshift
        if spec is None:
            tenants[name] = {}
            continue
        tenants[name] = {
            "openshift": {
                "cookieSecret": spec.cookie_secret,
                "tenantId": spec.tenant_id,
            }
        }

    return {
        "name": options.stack.name,
        "namespace": options.stack.namespace,
        "baseDomain": options.stack.base_domain,
        "mode": options.mode.value,
        "featureGates": {
            key: getattr(options.gates, field) for key, field in _GATE_KEYS.items()
        },
        "tenants": tenants,
    }


def load_stack_config(path: str) -> GatewayOptions:
    if not os.path.exists(path):
        raise StackConfigError(f"stack config {path!r} not found")
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise StackConfigError(f"stack config {path!r} must be a mapping")
    return parse_stack_config(raw)


def save_stack_config(path: str, options: GatewayOptions) -> None:
    """Write the stack config, including any generated tenant credentials."""
    header = (
        "# LokiStack gateway configuration for lokigw\n"
        "# Tenant credentials below are generated once; keep them to avoid\n"
        "# invalidating user sessions.\n\n"
    )
    with open(path, "w", encoding="utf-8") as f:
        f.write(header)
        yaml.safe_dump(
            stack_config_to_dict(options), f, default_flow_style=False, sort_keys=False
        )
