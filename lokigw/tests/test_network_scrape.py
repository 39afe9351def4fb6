import unittest

import yaml

from lokigw.core.errors import MissingTLSConfig
from lokigw.core.models import FeatureGates, TenancyMode
from lokigw.generators.network import mutate_network
from lokigw.generators.scrape import mutate_scrape_target

SERVICE = """
apiVersion: v1
kind: Service
metadata:
  name: test-gateway-http
spec:
  ports:
    - name: public
      port: 8080
    - name: metrics
      port: 8081
"""

SERVICE_MONITOR = """
apiVersion: monitoring.coreos.com/v1
kind: ServiceMonitor
metadata:
  name: test-gateway
spec:
  endpoints:
    - port: metrics
      path: /metrics
      scheme: https
      tlsConfig:
        caFile: /path/to/ca/file
        certFile: /path/to/cert/file
        keyFile: /path/to/key/file
"""

TLS_GATES = FeatureGates(http_encryption=True, service_monitor_tls_endpoints=True)


class NetworkMutatorTests(unittest.TestCase):
    def test_static_and_dynamic_modes_are_identity(self) -> None:
        service = yaml.safe_load(SERVICE)
        for mode in (TenancyMode.STATIC, TenancyMode.DYNAMIC):
            with self.subTest(mode=mode):
                self.assertEqual(mutate_network(service, mode), service)
                self.assertEqual(mutate_network({}, mode), {})

    def test_empty_service_gets_opa_port(self) -> None:
        out = mutate_network({}, TenancyMode.OPENSHIFT_LOGGING)
        self.assertEqual(out, {"spec": {"ports": [{"name": "opa-metrics", "port": 8083}]}})

    def test_opa_port_is_appended(self) -> None:
        service = yaml.safe_load(SERVICE)
        out = mutate_network(service, TenancyMode.OPENSHIFT_LOGGING)

        self.assertEqual(
            out["spec"]["ports"],
            service["spec"]["ports"] + [{"name": "opa-metrics", "port": 8083}],
        )
        self.assertEqual(len(service["spec"]["ports"]), 2)

    def test_stale_opa_port_is_replaced(self) -> None:
        service = {"spec": {"ports": [{"name": "opa-metrics", "port": 9999}]}}
        out = mutate_network(service, TenancyMode.OPENSHIFT_LOGGING)
        self.assertEqual(out["spec"]["ports"], [{"name": "opa-metrics", "port": 8083}])

    def test_mutation_is_idempotent(self) -> None:
        once = mutate_network(yaml.safe_load(SERVICE), TenancyMode.OPENSHIFT_LOGGING)
        self.assertEqual(mutate_network(once, TenancyMode.OPENSHIFT_LOGGING), once)


class ScrapeMutatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service_monitor = yaml.safe_load(SERVICE_MONITOR)

    def test_static_and_dynamic_modes_are_identity(self) -> None:
        for mode in (TenancyMode.STATIC, TenancyMode.DYNAMIC):
            with self.subTest(mode=mode):
                out = mutate_scrape_target(self.service_monitor, mode, TLS_GATES)
                self.assertEqual(out, self.service_monitor)

    def test_plain_http_endpoint(self) -> None:
        out = mutate_scrape_target({}, TenancyMode.OPENSHIFT_LOGGING, FeatureGates())
        self.assertEqual(
            out,
            {
                "spec": {
                    "endpoints": [
                        {"port": "opa-metrics", "path": "/metrics", "scheme": "http"}
                    ]
                }
            },
        )

    def test_gates_off_never_copy_tls(self) -> None:
        out = mutate_scrape_target(
            self.service_monitor, TenancyMode.OPENSHIFT_LOGGING, FeatureGates()
        )
        self.assertEqual(
            out["spec"]["endpoints"][1],
            {"port": "opa-metrics", "path": "/metrics", "scheme": "http"},
        )

    def test_http_encryption_alone_stays_http(self) -> None:
        out = mutate_scrape_target(
            {}, TenancyMode.OPENSHIFT_LOGGING, FeatureGates(http_encryption=True)
        )
        self.assertEqual(out["spec"]["endpoints"][0]["scheme"], "http")

    def test_tls_endpoint_inherits_tls_config(self) -> None:
        out = mutate_scrape_target(
            self.service_monitor, TenancyMode.OPENSHIFT_LOGGING, TLS_GATES
        )

        existing, opa = out["spec"]["endpoints"]
        self.assertEqual(existing, self.service_monitor["spec"]["endpoints"][0])
        self.assertEqual(
            opa,
            {
                "port": "opa-metrics",
                "path": "/metrics",
                "scheme": "https",
                "bearerTokenFile": "/var/run/secrets/kubernetes.io/serviceaccount/token",
                "tlsConfig": {
                    "caFile": "/path/to/ca/file",
                    "certFile": "/path/to/cert/file",
                    "keyFile": "/path/to/key/file",
                },
            },
        )
        self.assertIsNot(opa["tlsConfig"], existing["tlsConfig"])

    def test_tls_without_existing_tls_config_raises(self) -> None:
        for monitor in ({}, {"spec": {"endpoints": [{"port": "metrics"}]}}):
            with self.subTest(monitor=monitor):
                with self.assertRaises(MissingTLSConfig) as ctx:
                    mutate_scrape_target(monitor, TenancyMode.OPENSHIFT_LOGGING, TLS_GATES)
                self.assertEqual(ctx.exception.code, "MissingTLSConfig")

    def test_mutation_is_idempotent(self) -> None:
        for gates in (FeatureGates(), TLS_GATES):
            with self.subTest(gates=gates):
                once = mutate_scrape_target(
                    self.service_monitor, TenancyMode.OPENSHIFT_LOGGING, gates
                )
                twice = mutate_scrape_target(once, TenancyMode.OPENSHIFT_LOGGING, gates)
                self.assertEqual(twice, once)
                self.assertEqual(len(twice["spec"]["endpoints"]), 2)


if __name__ == "__main__":
    unittest.main()
