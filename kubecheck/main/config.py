"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kubecheck.domain.entities.lifecycle import LifecycleEvent, Webhook
from kubecheck.shared import EnumEnvironment, EnumLogLevel
from kubecheck.shared.env import load_secret_file_variables


class ServerSettings(BaseSettings):
    """Reporting server configuration settings."""

    title: str = Field(default="Kubecheck", description="Service title")
    description: str = Field(
        default="Healthchecks for Kubernetes clusters and the services they run",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    debug: bool = Field(
        default=False,
        description="Report input/output of passed healthchecks too",
    )
    host: str = Field(default="0.0.0.0", description="Address to bind the server")
    port: int = Field(default=8113, description="Port to bind the server")

    model_config = SettingsConfigDict(
        env_prefix="KUBECHECK_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(
        default=EnumLogLevel.INFO,
        description="Logging level",
        validation_alias=AliasChoices("KUBECHECK_LOG_LEVEL", "LOG_LEVEL"),
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


class KubernetesSettings(BaseSettings):
    """Kubernetes API access settings."""

    enabled: bool = Field(
        default=False,
        description="Register the Kubernetes healthchecks (needs in-cluster credentials or a kubeconfig)",
    )
    in_cluster_config: bool = Field(
        default=False,
        description="Use the service account credentials mounted into the pod",
        validation_alias=AliasChoices(
            "KUBECHECK_K8S_IN_CLUSTER_CONFIG", "KUBECHECK_K8S_INCLUSTERCONFIG"
        ),
    )
    kubeconfig_path: Optional[str] = Field(
        default=None, description="Kubeconfig file (if None, the default one)"
    )
    request_timeout_seconds: float = Field(
        default=8.0,
        gt=0,
        description="Per API call timeout, kept below the checks' own timeout",
    )

    model_config = SettingsConfigDict(
        env_prefix="KUBECHECK_K8S_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


class HttpSettings(BaseSettings):
    """Outbound HTTP client settings."""

    timeout_seconds: float = Field(default=5.0, description="Per request timeout")
    verify_tls: bool = Field(
        default=False,
        description="Verify server certificates; expiry is checked by expectations",
    )

    model_config = SettingsConfigDict(
        env_prefix="KUBECHECK_HTTP_", case_sensitive=False, extra="ignore"
    )


class RunnerSettings(BaseSettings):
    """Healthcheck runner settings."""

    max_parallel: int = Field(
        default=10, ge=1, description="Healthchecks executing at the same time"
    )
    overall_timeout_seconds: Optional[float] = Field(
        default=None,
        description="Leave out healthchecks still running after this many seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="KUBECHECK_RUNNER_", case_sensitive=False, extra="ignore"
    )


class ChecksSettings(BaseSettings):
    """Parameters of the built-in healthcheck catalog."""

    random_fail_rate: int = Field(
        default=10, ge=0, description="Fail once every N runs (0 never, 1 always)"
    )
    http_url: str = Field(
        default="https://www.google.com/", description="URL probed with HTTP GET"
    )
    http_body_contains: str = Field(
        default="Google", description="Text the response body must contain"
    )
    http_content_type: str = Field(
        default="text/html; charset=ISO-8859-1",
        description="Expected Content-Type header",
    )
    http_certificate_days: int = Field(
        default=7, description="Minimum days before certificates may expire"
    )
    dns_host: str = Field(default="google.com", description="Host name to resolve")
    node_count_min: int = Field(default=2, description="Minimum node count")
    node_count_max: int = Field(default=6, description="Maximum node count")
    node_grace_period_minutes: int = Field(
        default=10, description="Age before a node's status is checked"
    )
    pod_namespace: Optional[str] = Field(
        default=None, description="Namespace of checked pods (if None, all)"
    )
    pod_grace_period_minutes: int = Field(
        default=10, description="Age before a pod's status is checked"
    )
    pod_max_restarts: int = Field(
        default=5, description="Maximum restarts per container (-1 disables)"
    )
    pod_exclude: List[str] = Field(
        default_factory=list, description="Pod name prefixes to skip"
    )
    ingress_namespace: str = Field(default="kube-system")
    ingress_daemon_set: str = Field(default="traefik-ingress")
    ingress_service: str = Field(default="traefik")
    ingress_service_port: str = Field(default="web")
    node_spread_min: int = Field(
        default=2, description="Minimum nodes each replicated deployment spans"
    )
    anti_affinity_exclude_namespaces: List[str] = Field(
        default_factory=lambda: ["kube-system"]
    )
    anti_affinity_exclude_deployments: List[str] = Field(default_factory=list)

    model_config = SettingsConfigDict(
        env_prefix="KUBECHECK_CHECK_", case_sensitive=False, extra="ignore"
    )


class WebhookSettings(BaseModel):
    """A webhook called on lifecycle events."""

    name: str
    url: str
    data: str = ""
    events: List[LifecycleEvent] = Field(
        default_factory=lambda: [LifecycleEvent.ON_HEALTHCHECK_COMPLETED]
    )

    def to_domain(self) -> Webhook:
        return Webhook(
            name=self.name,
            url=self.url,
            data=self.data,
            events=tuple(self.events),
        )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    kubernetes: KubernetesSettings = Field(default_factory=KubernetesSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    runner: RunnerSettings = Field(default_factory=RunnerSettings)
    checks: ChecksSettings = Field(default_factory=ChecksSettings)
    webhooks: List[WebhookSettings] = Field(
        default_factory=list,
        description="Lifecycle webhooks, as a JSON list",
        validation_alias=AliasChoices("KUBECHECK_WEBHOOKS", "WEBHOOKS"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Resolves ``*_FILE`` secrets first. Used to be mocked in tests,
    allowing different settings based on environment.
    """
    load_secret_file_variables()
    return AppSettings()
