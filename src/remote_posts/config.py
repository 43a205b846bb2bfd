"""Application configuration via environment variables."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings

DEFAULT_CLIENT_KEY = "post-api"


class UnknownClientError(KeyError):
    """No endpoint is registered under the requested config key."""


class ClientEndpoint(BaseModel):
    """Connection settings for one remote REST client."""

    model_config = ConfigDict(strict=True)

    url: str = Field(description="Base URL all request paths are resolved against")
    timeout: float | None = Field(
        default=None, description="Per-request timeout in seconds; None disables it"
    )
    max_connections: int = Field(
        default=10, gt=0, description="Connection pool size for this client instance"
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )


class ClientRegistry(BaseModel):
    """Endpoints keyed by client identity (config key)."""

    model_config = ConfigDict(strict=True)

    mappings: dict[str, ClientEndpoint] = Field(
        default_factory=dict, description="Map of config key → endpoint settings"
    )

    def get(self, config_key: str) -> ClientEndpoint | None:
        """Look up the endpoint for a config key."""
        return self.mappings.get(config_key)

    def require(self, config_key: str) -> ClientEndpoint:
        """Look up the endpoint for a config key, raising if it is not configured."""
        endpoint = self.get(config_key)
        if endpoint is None:
            raise UnknownClientError(
                f"No REST client configured for '{config_key}'. "
                f"Configured: {sorted(self.mappings)}"
            )
        return endpoint

    def __contains__(self, key: str) -> bool:
        return key in self.mappings


class Settings(BaseSettings):
    """Service configuration loaded from environment variables."""

    model_config = {"env_prefix": ""}

    # REST clients
    rest_clients: str | None = Field(
        default=None,
        description='JSON: {"mappings": {"post-api": {"url": "...", "timeout": 5.0}}}',
    )
    post_api_url: str | None = Field(
        default=None, description="Base URL for the default 'post-api' client"
    )
    post_api_timeout: float | None = Field(
        default=None, description="Timeout in seconds for the default 'post-api' client"
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8000, description="Server bind port")
    log_level: str = Field(default="info", description="Log level")

    @property
    def client_registry(self) -> ClientRegistry:
        """Registry built from REST_CLIENTS, with POST_API_URL filling the default key."""
        registry = (
            ClientRegistry.model_validate_json(self.rest_clients)
            if self.rest_clients
            else ClientRegistry()
        )
        if self.post_api_url and DEFAULT_CLIENT_KEY not in registry:
            registry.mappings[DEFAULT_CLIENT_KEY] = ClientEndpoint(
                url=self.post_api_url, timeout=self.post_api_timeout
            )
        return registry

    @field_validator("rest_clients")
    @classmethod
    def _validate_rest_clients(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        try:
            ClientRegistry.model_validate_json(v)
        except ValidationError as exc:
            raise ValueError(f"REST_CLIENTS is not a valid client registry: {exc}") from exc
        return v

    @model_validator(mode="after")
    def _check_clients(self) -> Settings:
        if not self.rest_clients and not self.post_api_url:
            raise ValueError("Either POST_API_URL or REST_CLIENTS must be set")
        return self
