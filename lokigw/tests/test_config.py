import os
import tempfile
import unittest
from unittest import mock

import yaml

from lokigw.core.config import (
    load_stack_config,
    parse_stack_config,
    save_stack_config,
)
from lokigw.core.errors import StackConfigError
from lokigw.core.models import FeatureGates, TenancyMode
from lokigw.core.naming import (
    ca_bundle_name,
    gateway_name,
    gateway_service_fqdn,
    gateway_service_name,
    service_account_name,
    tls_secret_name,
)
from lokigw.core.settings import DEFAULT_OPA_IMAGE, Settings

STACK_CONFIG = """
name: lokistack
namespace: openshift-logging
baseDomain: example.com
mode: openshift-logging
featureGates:
  httpEncryption: true
  serviceMonitorTLSEndpoints: true
tenants:
  audit:
    openshift:
      cookieSecret: 6UssDXle7OHElqSW4M0DNRZ6JbaTjDM3
      tenantId: 0d7b5a6e-audit
  application:
    openshift: {}
"""


class StackConfigTests(unittest.TestCase):
    def test_parse(self) -> None:
        options = parse_stack_config(yaml.safe_load(STACK_CONFIG))

        self.assertEqual(options.stack.name, "lokistack")
        self.assertEqual(options.stack.base_domain, "example.com")
        self.assertEqual(options.mode, TenancyMode.OPENSHIFT_LOGGING)
        self.assertTrue(options.integrated)
        self.assertEqual(
            options.gates,
            FeatureGates(http_encryption=True, service_monitor_tls_endpoints=True),
        )
        self.assertEqual(
            options.tenants["audit"].openshift.cookie_secret,
            "6UssDXle7OHElqSW4M0DNRZ6JbaTjDM3",
        )
        self.assertEqual(options.tenants["application"].openshift.cookie_secret, "")

    def test_tenant_without_openshift_section(self) -> None:
        raw = yaml.safe_load(STACK_CONFIG)
        raw["tenants"]["infrastructure"] = {}
        options = parse_stack_config(raw)
        self.assertIsNone(options.tenants["infrastructure"].openshift)

    def test_invalid_configs(self) -> None:
        cases = {
            "missing keys": {"name": "lokistack"},
            "unknown mode": {"name": "a", "namespace": "b", "mode": "openshift-network"},
            "unknown gate": {
                "name": "a",
                "namespace": "b",
                "mode": "static",
                "featureGates": {"grpcEncryption": True},
            },
            "gates not a mapping": {
                "name": "a",
                "namespace": "b",
                "mode": "static",
                "featureGates": ["httpEncryption"],
            },
            "tenants as a list": {
                "name": "a",
                "namespace": "b",
                "mode": "openshift-logging",
                "tenants": ["audit"],
            },
            "scalar tenant": {
                "name": "a",
                "namespace": "b",
                "mode": "openshift-logging",
                "tenants": {"audit": "oops"},
            },
            "scalar openshift section": {
                "name": "a",
                "namespace": "b",
                "mode": "openshift-logging",
                "tenants": {"audit": {"openshift": "oops"}},
            },
        }
        for desc, raw in cases.items():
            with self.subTest(desc):
                with self.assertRaises(StackConfigError):
                    parse_stack_config(raw)

    def test_save_and_load_round_trip(self) -> None:
        options = parse_stack_config(yaml.safe_load(STACK_CONFIG))
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "stack.yaml")
            save_stack_config(path, options)
            self.assertEqual(load_stack_config(path), options)

            with open(path) as f:
                saved = yaml.safe_load(f)
            self.assertEqual(list(saved["tenants"]), ["application", "audit"])

    def test_load_missing_file(self) -> None:
        with self.assertRaises(StackConfigError):
            load_stack_config("/nonexistent/stack.yaml")


class NamingTests(unittest.TestCase):
    def test_names(self) -> None:
        self.assertEqual(gateway_name("test"), "test-gateway")
        self.assertEqual(gateway_service_name("test"), "test-gateway-http")
        self.assertEqual(
            gateway_service_fqdn("test", "test-ns"),
            "test-gateway-http.test-ns.svc.cluster.local",
        )
        self.assertEqual(service_account_name("test"), "test-gateway")
        self.assertEqual(tls_secret_name("test"), "test-gateway-http-tls")
        self.assertEqual(ca_bundle_name("test"), "test-ca-bundle")


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings()
        self.assertEqual(settings.opa_image, DEFAULT_OPA_IMAGE)
        self.assertEqual(settings.log_level, "WARNING")

    def test_env_overrides(self) -> None:
        env = {"RELATED_IMAGE_OPA": "mirror.local/opa:v1", "LOKIGW_LOG_LEVEL": "debug"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings()
        self.assertEqual(settings.opa_image, "mirror.local/opa:v1")
        self.assertEqual(settings.log_level, "DEBUG")

    def test_empty_image_falls_back_to_default(self) -> None:
        with mock.patch.dict(os.environ, {"RELATED_IMAGE_OPA": ""}, clear=True):
            settings = Settings()
        self.assertEqual(settings.opa_image, DEFAULT_OPA_IMAGE)


if __name__ == "__main__":
    unittest.main()
