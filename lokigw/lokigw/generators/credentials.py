"""OpenShift tenant credentials and gateway auth defaults."""

import logging
import secrets
import string
import uuid

from lokigw.core.constants import (
    COOKIE_SECRET_LENGTH,
    DEFAULT_TENANTS,
    OPA_DEFAULT_PACKAGE,
    OPA_HTTP_PORT,
)
from lokigw.core.errors import InvalidTenantConfig, SecretGenerationError
from lokigw.core.models import (
    INTEGRATED_MODES,
    AuthenticationSpec,
    AuthorizationSpec,
    StackIdentity,
    TenancyMode,
    TenantConfig,
    TenantOpenShiftSpec,
)
from lokigw.core.naming import opa_url, redirect_url, service_account_name

log = logging.getLogger(__name__)

_COOKIE_ALPHABET = string.ascii_letters + string.digits


def _generate_cookie_secret(length: int = COOKIE_SECRET_LENGTH) -> str:
    """Generate a cryptographically secure alphanumeric cookie secret."""
    try:
        return "".join(secrets.choice(_COOKIE_ALPHABET) for _ in range(length))
    except (OSError, NotImplementedError) as exc:
        raise SecretGenerationError(str(exc)) from exc


def _generate_tenant_id() -> str:
    try:
        return str(uuid.uuid4())
    except (OSError, NotImplementedError) as exc:
        raise SecretGenerationError(str(exc)) from exc


def _tenant_specs(tenants: dict[str, TenantConfig]) -> dict[str, TenantOpenShiftSpec]:
    if not tenants:
        return {name: TenantOpenShiftSpec() for name in DEFAULT_TENANTS}

    specs = {}
    for name in sorted(tenants):
        spec = tenants[name].openshift
        if spec is None:
            raise InvalidTenantConfig(name, "missing openshift configuration")
        specs[name] = spec
    return specs


def apply_gateway_defaults(
    tenants: dict[str, TenantConfig],
    identity: StackIdentity,
    mode: TenancyMode,
) -> tuple[list[AuthenticationSpec], AuthorizationSpec | None]:
    """Derive the authentication and authorization settings of the gateway.

    Cookie secrets and tenant IDs already present on ``tenants`` are kept
    as they are; only missing ones are generated. Callers must persist the
    returned values (see persist_credentials) or they will be regenerated on
    the next pass, which logs every user out.

    Returns ``([], None)`` for modes without OpenShift authentication.
    """
    if mode not in INTEGRATED_MODES:
        return [], None

    specs = _tenant_specs(tenants)
    taken = {s.cookie_secret for s in specs.values() if s.cookie_secret}
    service_account = service_account_name(identity.name)

    authentication = []
    for name, spec in specs.items():
        cookie_secret = spec.cookie_secret
        if not cookie_secret:
            cookie_secret = _generate_cookie_secret()
            while cookie_secret in taken:
                cookie_secret = _generate_cookie_secret()
            taken.add(cookie_secret)
            log.debug("generated cookie secret for tenant %s", name)

        tenant_id = spec.tenant_id
        if not tenant_id:
            tenant_id = _generate_tenant_id()
            log.debug("generated tenant id for tenant %s", name)

        authentication.append(
            AuthenticationSpec(
                tenant_name=name,
                tenant_id=tenant_id,
                cookie_secret=cookie_secret,
                service_account=service_account,
                redirect_url=redirect_url(identity, name),
            )
        )

    authorization = AuthorizationSpec(
        opa_url=opa_url(OPA_HTTP_PORT, OPA_DEFAULT_PACKAGE)
    )
    return authentication, authorization


def persist_credentials(
    tenants: dict[str, TenantConfig],
    authentication: list[AuthenticationSpec],
) -> dict[str, TenantConfig]:
    """Return a copy of ``tenants`` carrying the credentials in ``authentication``.

    Feeding the result back into apply_gateway_defaults yields the same
    credentials again.
    """
    updated = {
        name: TenantConfig(
            openshift=TenantOpenShiftSpec(
                cookie_secret=cfg.openshift.cookie_secret,
                tenant_id=cfg.openshift.tenant_id,
            )
            if cfg.openshift is not None
            else None
        )
        for name, cfg in tenants.items()
    }
    for auth in authentication:
        updated[auth.tenant_name] = TenantConfig(
            openshift=TenantOpenShiftSpec(
                cookie_secret=auth.cookie_secret,
                tenant_id=auth.tenant_id,
            )
        )
    return updated
