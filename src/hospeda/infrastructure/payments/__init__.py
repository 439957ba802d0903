"""Payment provider integration."""

from hospeda.infrastructure.payments.webhook_handler import (
    WebhookError,
    WebhookHandler,
    WebhookProcessingResult,
    compute_signature,
    webhook_actor,
)

__all__ = [
    "WebhookError",
    "WebhookHandler",
    "WebhookProcessingResult",
    "compute_signature",
    "webhook_actor",
]
