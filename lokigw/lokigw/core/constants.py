"""Fixed names, ports and paths shared by the gateway and its OPA sidecar.

Flag names are part of the contract with the gateway and opa-openshift
binaries and must not change.
"""

# Gateway
GATEWAY_CONTAINER_NAME = "gateway"
GATEWAY_HTTP_PORT = 8080

# OPA sidecar
OPA_CONTAINER_NAME = "opa"
OPA_HTTP_PORT = 8082
OPA_HTTP_PORT_NAME = "public"
OPA_INTERNAL_PORT = 8083
OPA_INTERNAL_PORT_NAME = "opa-metrics"
OPA_DEFAULT_PACKAGE = "lokistack"
OPA_MATCHER = "kubernetes_namespace_name"
OPA_LOG_LEVEL = "warn"
OPA_API_GROUP = "loki.grafana.com"

# Tenants served in openshift-logging mode when none are configured
DEFAULT_TENANTS = ("application", "audit", "infrastructure")

COOKIE_SECRET_LENGTH = 32

# Volumes and in-pod paths
TLS_SECRET_VOLUME = "tls-secret"
HTTP_TLS_DIR = "/var/run/tls/http"
TLS_CERT_FILE = f"{HTTP_TLS_DIR}/tls.crt"
TLS_KEY_FILE = f"{HTTP_TLS_DIR}/tls.key"
CA_BUNDLE_DIR = "/var/run/ca"
CA_FILE = f"{CA_BUNDLE_DIR}/service-ca.crt"
CA_BUNDLE_MODE = 0o644

BEARER_TOKEN_FILE = "/var/run/secrets/kubernetes.io/serviceaccount/token"

# Gateway flags
FLAG_HEALTHCHECKS_URL = "--web.healthchecks.url"
FLAG_LOGS_ENDPOINTS = (
    "--logs.read.endpoint",
    "--logs.tail.endpoint",
    "--logs.write.endpoint",
)
FLAG_LOGS_CA_FILE = "--logs.tls.ca-file"
FLAG_SERVER_CERT = "--tls.server.cert-file"
FLAG_SERVER_KEY = "--tls.server.key-file"
FLAG_HEALTHCHECKS_CA = "--tls.healthchecks.server-ca-file"
FLAG_HEALTHCHECKS_SERVER_NAME = "--tls.healthchecks.server-name"

# OPA flags
FLAG_INTERNAL_SERVER_CERT = "--tls.internal.server.cert-file"
FLAG_INTERNAL_SERVER_KEY = "--tls.internal.server.key-file"
FLAG_OPENSHIFT_MAPPINGS = "--openshift.mappings"
