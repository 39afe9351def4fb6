"""OPA sidecar container for openshift-logging mode."""

from typing import Any

from lokigw.core.constants import (
    FLAG_INTERNAL_SERVER_CERT,
    FLAG_INTERNAL_SERVER_KEY,
    FLAG_OPENSHIFT_MAPPINGS,
    HTTP_TLS_DIR,
    OPA_API_GROUP,
    OPA_CONTAINER_NAME,
    OPA_DEFAULT_PACKAGE,
    OPA_HTTP_PORT,
    OPA_HTTP_PORT_NAME,
    OPA_INTERNAL_PORT,
    OPA_INTERNAL_PORT_NAME,
    OPA_LOG_LEVEL,
    OPA_MATCHER,
    TLS_CERT_FILE,
    TLS_KEY_FILE,
    TLS_SECRET_VOLUME,
)
from lokigw.generators.rules import RuleContext
from lokigw.generators.sections.gateway import pod_spec, tls_volume_name
from lokigw.utils.upsert import upsert

# Fields owned by the operator. Everything else on an existing sidecar
# (resources, securityContext, ...) survives a pass untouched.
MANAGED_FIELDS = (
    "name",
    "image",
    "args",
    "ports",
    "livenessProbe",
    "readinessProbe",
    "volumeMounts",
)


def _probe(path: str, scheme: str, timeout: int, period: int, failures: int) -> dict:
    return {
        "httpGet": {
            "path": path,
            "port": OPA_INTERNAL_PORT,
            "scheme": scheme,
        },
        "timeoutSeconds": timeout,
        "periodSeconds": period,
        "failureThreshold": failures,
    }


def opa_args(tenants: tuple[str, ...], with_tls: bool) -> list[str]:
    args = [
        f"--log.level={OPA_LOG_LEVEL}",
        f"--opa.package={OPA_DEFAULT_PACKAGE}",
        f"--opa.matcher={OPA_MATCHER}",
        f"--web.listen=:{OPA_HTTP_PORT}",
        f"--web.internal.listen=:{OPA_INTERNAL_PORT}",
        f"--web.healthchecks.url=http://localhost:{OPA_HTTP_PORT}",
    ]
    if with_tls:
        args.extend(
            [
                f"{FLAG_INTERNAL_SERVER_CERT}={TLS_CERT_FILE}",
                f"{FLAG_INTERNAL_SERVER_KEY}={TLS_KEY_FILE}",
            ]
        )
    args.extend(
        f"{FLAG_OPENSHIFT_MAPPINGS}={tenant}={OPA_API_GROUP}"
        for tenant in sorted(tenants)
    )
    return args


def build_opa_container(
    ctx: RuleContext, tls_volume: str = TLS_SECRET_VOLUME
) -> dict[str, Any]:
    """Build the managed part of the OPA sidecar.

    With TLS endpoints the sidecar mounts ``tls_volume``, which must be the
    volume the gateway serves its certificate from.
    """
    with_tls = ctx.gates.tls_endpoints
    scheme = "HTTPS" if with_tls else "HTTP"

    container: dict[str, Any] = {
        "name": OPA_CONTAINER_NAME,
        "image": ctx.opa_image,
        "args": opa_args(ctx.tenants, with_tls),
        "ports": [
            {
                "name": OPA_HTTP_PORT_NAME,
                "containerPort": OPA_HTTP_PORT,
                "protocol": "TCP",
            },
            {
                "name": OPA_INTERNAL_PORT_NAME,
                "containerPort": OPA_INTERNAL_PORT,
                "protocol": "TCP",
            },
        ],
        "livenessProbe": _probe("/live", scheme, timeout=2, period=30, failures=10),
        "readinessProbe": _probe("/ready", scheme, timeout=1, period=5, failures=12),
    }

    if with_tls:
        container["volumeMounts"] = [
            {"name": tls_volume, "readOnly": True, "mountPath": HTTP_TLS_DIR},
        ]

    return container


def _merge_sidecar(existing: dict, managed: dict) -> dict:
    merged = {k: v for k, v in existing.items() if k not in MANAGED_FIELDS}
    merged.update(managed)
    return merged


def inject_opa_sidecar(deployment: dict, ctx: RuleContext) -> None:
    containers = pod_spec(deployment).setdefault("containers", [])
    sidecar = build_opa_container(ctx, tls_volume_name(deployment))
    upsert(containers, sidecar, merge=_merge_sidecar)
