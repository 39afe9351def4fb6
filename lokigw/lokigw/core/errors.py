"""Errors raised while compiling gateway manifests."""

from dataclasses import dataclass


@dataclass(eq=False)
class GatewayConfigError(Exception):
    """Base class for all lokigw errors.

    Every error is fatal for the current pass. Nothing is retried here,
    the reconcile loop decides about retries and status reporting.
    """

    message: str
    code: str = "GatewayConfigError"

    def __str__(self) -> str:
        return self.message


class ContainerNotFound(GatewayConfigError):
    def __init__(self, container: str, workload: str = ""):
        where = f" in {workload}" if workload else ""
        super().__init__(
            f"container {container!r} not found{where}", "ContainerNotFound"
        )
        self.container = container


class InvalidTenantConfig(GatewayConfigError):
    def __init__(self, tenant: str, reason: str):
        super().__init__(f"tenant {tenant!r}: {reason}", "InvalidTenantConfig")
        self.tenant = tenant


class SecretGenerationError(GatewayConfigError):
    def __init__(self, reason: str):
        super().__init__(
            f"failed to generate secret: {reason}", "SecretGenerationError"
        )


class MissingTLSConfig(GatewayConfigError):
    def __init__(self, port: str):
        super().__init__(
            f"endpoint {port!r} requires TLS but no existing endpoint "
            "has a tlsConfig to inherit",
            "MissingTLSConfig",
        )


class StackConfigError(GatewayConfigError):
    def __init__(self, message: str):
        super().__init__(message, "StackConfigError")
