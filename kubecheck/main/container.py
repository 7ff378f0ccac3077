"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

import random
from contextlib import asynccontextmanager
from typing import List, Sequence

from dependency_injector import containers, providers

from kubecheck.application.services.healthcheck_runner import HealthcheckRunner
from kubecheck.application.use_cases.healthcheck_use_cases import (
    ListHealthchecksUseCase,
    RunHealthchecksUseCase,
)
from kubecheck.domain.entities.lifecycle import Webhook
from kubecheck.infrastructure.dns.resolver import SystemResolver
from kubecheck.infrastructure.hooks.webhook_notifier import WebhookNotifier
from kubecheck.infrastructure.http.http_client import HttpxHttpClient
from kubecheck.infrastructure.kubernetes.cluster_gateway import KubernetesClusterGateway
from kubecheck.shared import get_logger

from .config import AppSettings, WebhookSettings
from .healthchecks import configure_healthchecks

logger = get_logger(__name__)


def _to_webhooks(webhooks: Sequence[WebhookSettings]) -> List[Webhook]:
    return [webhook.to_domain() for webhook in webhooks]


def _cluster_factory(enabled: bool, cluster_gateway: providers.Provider):
    return cluster_gateway if enabled else None


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()
    settings = providers.Dependency(instance_of=AppSettings)

    # Infrastructure
    http_client = providers.Singleton(
        HttpxHttpClient,
        timeout=config.http.timeout_seconds,
        verify_tls=config.http.verify_tls,
    )

    resolver = providers.Singleton(SystemResolver)

    random_source = providers.Singleton(random.Random)

    cluster_gateway = providers.Singleton(
        KubernetesClusterGateway,
        in_cluster_config=config.kubernetes.in_cluster_config,
        kubeconfig_path=config.kubernetes.kubeconfig_path,
        request_timeout=config.kubernetes.request_timeout_seconds,
    )

    webhook_notifier = providers.Singleton(
        WebhookNotifier,
        http_client=http_client,
        webhooks=providers.Callable(_to_webhooks, settings.provided.webhooks),
    )

    # Healthcheck catalog
    healthchecks = providers.Singleton(
        configure_healthchecks,
        settings=settings.provided.checks,
        http_client=http_client,
        resolver=resolver,
        random_source=random_source,
        cluster_factory=providers.Callable(
            _cluster_factory,
            config.kubernetes.enabled,
            cluster_gateway.provider,
        ),
    )

    # Application
    healthcheck_runner = providers.Singleton(
        HealthcheckRunner,
        notifier=webhook_notifier,
        max_parallel=config.runner.max_parallel,
        overall_timeout=config.runner.overall_timeout_seconds,
    )

    list_healthchecks_use_case = providers.Factory(
        ListHealthchecksUseCase,
        healthchecks=healthchecks,
    )

    run_healthchecks_use_case = providers.Factory(
        RunHealthchecksUseCase,
        runner=healthcheck_runner,
        healthchecks=healthchecks,
        debug=config.server.debug,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer(settings=providers.Object(settings))
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Builds the healthcheck catalog on startup, so configuration errors
    surface before the first request, and releases the shared HTTP client
    and pending notifications on shutdown.
    """
    container = get_container()

    healthchecks = container.healthchecks()
    runner = container.healthcheck_runner()
    http_client = container.http_client()

    try:
        logger.info("container.resources.initialized", healthchecks=len(healthchecks))
        yield container

    finally:
        await runner.drain_notifications()

        logger.info("container.http_client.close")
        await http_client.aclose()

        logger.info("container.resources.shutdown")
