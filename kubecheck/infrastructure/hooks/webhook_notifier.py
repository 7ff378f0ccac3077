"""Lifecycle notifier calling configured webhooks."""

from __future__ import annotations

import asyncio
from typing import Sequence

from kubecheck.domain.entities.errors import ObservationError
from kubecheck.domain.entities.lifecycle import LifecycleEvent, Webhook
from kubecheck.domain.ports.http_client import IHttpClient
from kubecheck.domain.ports.lifecycle_notifier import ILifecycleNotifier
from kubecheck.shared import get_logger
from kubecheck.shared.urls import clean_url

logger = get_logger(__name__)


class WebhookNotifier(ILifecycleNotifier):
    """POSTs each webhook's payload when an event it subscribes to fires."""

    def __init__(self, http_client: IHttpClient, webhooks: Sequence[Webhook]) -> None:
        self._http_client = http_client
        self._webhooks = tuple(webhooks)

    @property
    def webhooks(self) -> Sequence[Webhook]:
        return self._webhooks

    async def notify(self, event: LifecycleEvent) -> None:
        subscribed = [hook for hook in self._webhooks if hook.subscribes_to(event)]
        if not subscribed:
            return
        await asyncio.gather(*(self._invoke(hook, event) for hook in subscribed))

    async def _invoke(self, webhook: Webhook, event: LifecycleEvent) -> None:
        url = clean_url(webhook.url)
        logger.info("webhook.invoke", webhook=webhook.name, event=event.value, url=url)

        try:
            response = await self._http_client.post(webhook.url, webhook.data)
        except ObservationError as exc:
            logger.error(
                "webhook.invoke.failed",
                webhook=webhook.name,
                event=event.value,
                url=url,
                error=exc.message,
            )
            return

        if response.status_code >= 400:
            logger.warning(
                "webhook.invoke.rejected",
                webhook=webhook.name,
                event=event.value,
                url=url,
                status_code=response.status_code,
            )
