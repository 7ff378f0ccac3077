"""Lifecycle hook adapters."""

from .webhook_notifier import WebhookNotifier

__all__ = ["WebhookNotifier"]
