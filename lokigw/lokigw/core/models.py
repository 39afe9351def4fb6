"""Configuration models for lokigw."""

from dataclasses import dataclass, field
from enum import Enum


class TenancyMode(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"
    OPENSHIFT_LOGGING = "openshift-logging"


# Modes in which the gateway runs with the OPA sidecar and OpenShift auth
INTEGRATED_MODES = frozenset({TenancyMode.OPENSHIFT_LOGGING})


@dataclass(frozen=True)
class StackIdentity:
    """Name, namespace and base domain of a LokiStack instance."""

    name: str
    namespace: str
    base_domain: str = ""


@dataclass(frozen=True)
class FeatureGates:
    """Operator feature gates that influence the gateway manifests."""

    http_encryption: bool = False
    service_monitor_tls_endpoints: bool = False
    serving_certs_service: bool = False

    @property
    def tls_endpoints(self) -> bool:
        """Metrics endpoints are scraped over TLS."""
        return self.http_encryption and self.service_monitor_tls_endpoints

    @property
    def serving_certs(self) -> bool:
        """Upstream traffic uses certificates from the serving certs service."""
        return self.http_encryption and self.serving_certs_service


@dataclass
class TenantOpenShiftSpec:
    """Persisted OpenShift auth state of a single tenant."""

    cookie_secret: str = ""
    tenant_id: str = ""


@dataclass
class TenantConfig:
    openshift: TenantOpenShiftSpec | None = None


@dataclass
class AuthenticationSpec:
    """OpenShift OAuth settings of a single gateway tenant."""

    tenant_name: str
    tenant_id: str
    cookie_secret: str
    service_account: str
    redirect_url: str


@dataclass
class AuthorizationSpec:
    opa_url: str


@dataclass
class GatewayOptions:
    """Everything a single compile pass reads."""

    stack: StackIdentity
    mode: TenancyMode
    gates: FeatureGates = field(default_factory=FeatureGates)
    tenants: dict[str, TenantConfig] = field(default_factory=dict)

    @property
    def integrated(self) -> bool:
        return self.mode in INTEGRATED_MODES


@dataclass
class CompiledGateway:
    """Result of compiling the gateway manifests for one stack."""

    authentication: list[AuthenticationSpec]
    authorization: AuthorizationSpec | None
    tenants: dict[str, TenantConfig]
    deployment: dict
    service: dict
    service_monitor: dict
