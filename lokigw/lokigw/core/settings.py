"""Runtime settings read from the environment."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OPA_IMAGE = "quay.io/observatorium/opa-openshift:latest"


class Settings(BaseSettings):
    """Process-wide settings.

    The OPA image follows the operator's RELATED_IMAGE_* convention so
    disconnected installs can pin a mirrored image.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOKIGW_", extra="ignore", populate_by_name=True
    )

    opa_image: str = Field(DEFAULT_OPA_IMAGE, validation_alias="RELATED_IMAGE_OPA")
    log_level: str = "WARNING"

    @field_validator("opa_image")
    @classmethod
    def _default_when_empty(cls, value: str) -> str:
        return value or DEFAULT_OPA_IMAGE

    @field_validator("log_level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return (value or "WARNING").upper()


settings = Settings()
