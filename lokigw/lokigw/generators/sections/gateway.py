"""Gateway container rules for the workload mutator."""

from lokigw.core.constants import (
    CA_BUNDLE_DIR,
    CA_BUNDLE_MODE,
    CA_FILE,
    FLAG_HEALTHCHECKS_CA,
    FLAG_HEALTHCHECKS_SERVER_NAME,
    FLAG_HEALTHCHECKS_URL,
    FLAG_LOGS_CA_FILE,
    FLAG_LOGS_ENDPOINTS,
    FLAG_SERVER_CERT,
    FLAG_SERVER_KEY,
    GATEWAY_CONTAINER_NAME,
    GATEWAY_HTTP_PORT,
    HTTP_TLS_DIR,
    TLS_CERT_FILE,
    TLS_KEY_FILE,
    TLS_SECRET_VOLUME,
)
from lokigw.core.errors import ContainerNotFound
from lokigw.core.naming import (
    ca_bundle_name,
    gateway_service_fqdn,
    service_account_name,
    tls_secret_name,
)
from lokigw.generators.rules import RuleContext
from lokigw.utils.upsert import find, flag_value, rewrite_flag, upsert, upsert_flag


def pod_spec(deployment: dict) -> dict:
    template = deployment.setdefault("spec", {}).setdefault("template", {})
    return template.setdefault("spec", {})


def gateway_container(deployment: dict) -> dict:
    """Return the gateway container of a Deployment, or raise ContainerNotFound."""
    template = (deployment.get("spec") or {}).get("template") or {}
    containers = (template.get("spec") or {}).get("containers")
    container = find(containers, GATEWAY_CONTAINER_NAME)
    if container is None:
        workload = (deployment.get("metadata") or {}).get("name", "")
        raise ContainerNotFound(GATEWAY_CONTAINER_NAME, workload)
    return container


def tls_volume_name(deployment: dict) -> str:
    """Name of the volume the gateway serves its certificate from."""
    mounts = gateway_container(deployment).get("volumeMounts")
    mount = find(mounts, HTTP_TLS_DIR, key="mountPath")
    return mount["name"] if mount else TLS_SECRET_VOLUME


def _to_https(url: str) -> str:
    if url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url


def require_gateway_container(deployment: dict, ctx: RuleContext) -> None:
    gateway_container(deployment)


def https_upstream_endpoints(deployment: dict, ctx: RuleContext) -> None:
    """Talk to the read, tail and write paths of the stack over TLS."""
    args = gateway_container(deployment).setdefault("args", [])
    for flag in FLAG_LOGS_ENDPOINTS:
        rewrite_flag(args, flag, _to_https)


def https_healthchecks(deployment: dict, ctx: RuleContext) -> None:
    container = gateway_container(deployment)
    args = container.setdefault("args", [])
    if flag_value(args, FLAG_HEALTHCHECKS_URL) is None:
        upsert_flag(
            args, FLAG_HEALTHCHECKS_URL, f"https://localhost:{GATEWAY_HTTP_PORT}"
        )
    else:
        rewrite_flag(args, FLAG_HEALTHCHECKS_URL, _to_https)

    for probe_key in ("livenessProbe", "readinessProbe"):
        http_get = (container.get(probe_key) or {}).get("httpGet")
        if http_get is not None:
            http_get["scheme"] = "HTTPS"


def serving_certs_ca_bundle(deployment: dict, ctx: RuleContext) -> None:
    """Trust the serving certs CA for upstream traffic."""
    spec = pod_spec(deployment)
    container = gateway_container(deployment)
    upsert_flag(container.setdefault("args", []), FLAG_LOGS_CA_FILE, CA_FILE)

    name = ca_bundle_name(ctx.stack_name)
    upsert(
        container.setdefault("volumeMounts", []),
        {"name": name, "readOnly": True, "mountPath": CA_BUNDLE_DIR},
    )
    upsert(
        spec.setdefault("volumes", []),
        {
            "name": name,
            "configMap": {"name": name, "defaultMode": CA_BUNDLE_MODE},
        },
    )
    spec["serviceAccountName"] = service_account_name(ctx.stack_name)


def server_tls(deployment: dict, ctx: RuleContext) -> None:
    """Serve HTTPS from the gateway certificate and verify our own healthchecks."""
    spec = pod_spec(deployment)
    container = gateway_container(deployment)
    args = container.setdefault("args", [])
    upsert_flag(args, FLAG_SERVER_CERT, TLS_CERT_FILE)
    upsert_flag(args, FLAG_SERVER_KEY, TLS_KEY_FILE)
    upsert_flag(args, FLAG_HEALTHCHECKS_CA, CA_FILE)
    upsert_flag(
        args,
        FLAG_HEALTHCHECKS_SERVER_NAME,
        gateway_service_fqdn(ctx.stack_name, ctx.stack_namespace),
    )

    mounts = container.setdefault("volumeMounts", [])
    if find(mounts, HTTP_TLS_DIR, key="mountPath") is not None:
        return

    upsert(
        mounts,
        {"name": TLS_SECRET_VOLUME, "readOnly": True, "mountPath": HTTP_TLS_DIR},
    )
    upsert(
        spec.setdefault("volumes", []),
        {
            "name": TLS_SECRET_VOLUME,
            "secret": {"secretName": tls_secret_name(ctx.stack_name)},
        },
    )
