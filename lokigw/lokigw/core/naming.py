"""Canonical resource names derived from a LokiStack identity."""

from lokigw.core.models import StackIdentity


def gateway_name(stack: str) -> str:
    return f"{stack}-gateway"


def gateway_service_name(stack: str) -> str:
    return f"{stack}-gateway-http"


def gateway_service_fqdn(stack: str, namespace: str) -> str:
    """In-cluster DNS name the gateway's own healthchecks connect to."""
    return f"{gateway_service_name(stack)}.{namespace}.svc.cluster.local"


def service_account_name(stack: str) -> str:
    return gateway_name(stack)


def tls_secret_name(stack: str) -> str:
    return f"{gateway_name(stack)}-http-tls"


def ca_bundle_name(stack: str) -> str:
    return f"{stack}-ca-bundle"


def redirect_url(identity: StackIdentity, tenant: str) -> str:
    """OAuth callback URL of a tenant, served through the stack's route."""
    return (
        f"https://{identity.name}-{identity.namespace}.apps.{identity.base_domain}"
        f"/openshift/{tenant}/callback"
    )


def opa_url(port: int, package: str) -> str:
    return f"http://localhost:{port}/v1/data/{package}/allow"
