"""Payment provider webhook processing.

Notifications are dispatched on their ``type``: payment notifications update
the stored payment through ``PaymentService``; subscription and plan
notifications are acknowledged. Processing never raises: every failure is
reported as an unsuccessful ``WebhookProcessingResult``.

When a shared secret is configured, the ``signature`` must be the hex
HMAC-SHA256 of the request body under that secret.
"""

import hashlib
import hmac
import json
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from hospeda.core.logging import get_logger
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role
from hospeda.infrastructure.api.schemas.payment_schemas import WebhookPayload


class WebhookError(Exception):
    """Raised while processing a webhook notification."""

    pass


@dataclass
class WebhookProcessingResult:
    """Outcome of processing one notification."""

    success: bool
    payment_id: str | None = None
    subscription_id: str | None = None
    actions: list[str] = field(default_factory=list)
    error_message: str | None = None


WEBHOOK_ACTOR_ID = "system:payment-webhooks"


def webhook_actor() -> Actor:
    """Actor that provider notifications are processed as."""
    return Actor(
        id=WEBHOOK_ACTOR_ID,
        role=Role.USER,
        permissions=frozenset({Permission.CLIENT_UPDATE}),
    )


def compute_signature(body: bytes, secret: str) -> str:
    """Hex HMAC-SHA256 of ``body`` under ``secret``."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def canonical_body(payload: dict[str, Any]) -> bytes:
    """Serialize a payload the way signatures are computed when no raw body is kept."""
    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")


class WebhookHandler:
    """Process payment provider notifications.

    Args:
        payment_service: Service used to apply payment status changes.
        actor: Actor the status changes are attributed to.
        logger: Optional structlog logger.
        secret: Shared signing secret. Signatures are not checked when unset.
    """

    def __init__(
        self,
        payment_service: Any,
        actor: Actor,
        logger: Any | None = None,
        secret: str | None = None,
    ) -> None:
        self.payment_service = payment_service
        self.actor = actor
        self.logger = logger or get_logger(__name__)
        self.secret = secret

    def verify_signature(self, body: bytes, signature: str | None) -> bool:
        """Check a signature against the configured secret."""
        if not self.secret:
            return True
        if not signature:
            return False
        expected = compute_signature(body, self.secret)
        return hmac.compare_digest(expected, signature.strip().lower())

    async def process(
        self,
        payload: dict[str, Any] | WebhookPayload,
        signature: str | None = None,
        raw_body: bytes | None = None,
    ) -> WebhookProcessingResult:
        """Process one notification.

        Args:
            payload: Notification body.
            signature: Signature header value, if any.
            raw_body: Exact request body the signature was computed over.
                Defaults to the canonical JSON encoding of ``payload``.

        Returns:
            WebhookProcessingResult describing what was done.
        """
        raw = payload.model_dump() if isinstance(payload, WebhookPayload) else payload
        try:
            body = raw_body if raw_body is not None else canonical_body(raw)
            if not self.verify_signature(body, signature):
                raise WebhookError("Invalid webhook signature")

            notification = WebhookPayload.model_validate(raw)
            resource_id = notification.data.get("id")
            self.logger.info(
                "Processing webhook notification",
                type=notification.type,
                action=notification.action,
                resource_id=resource_id,
            )

            result = WebhookProcessingResult(success=True)
            if notification.type == "payment":
                payment_id, status = await self._handle_payment(notification)
                result.payment_id = payment_id
                result.actions.append(f"Payment {notification.action}: {status}")
            elif notification.type in ("subscription", "preapproval"):
                result.subscription_id = str(resource_id) if resource_id is not None else None
                result.actions.append(f"Subscription {notification.action}")
            elif notification.type == "plan":
                result.actions.append(f"Plan {notification.action} - no action required")
            else:
                self.logger.warning("Unknown webhook type", type=notification.type)
                result.actions.append(f"Unknown type {notification.type} - ignored")

            self.logger.info(
                "Webhook processed successfully",
                type=notification.type,
                actions=result.actions,
                payment_id=result.payment_id,
                subscription_id=result.subscription_id,
            )
            return result
        except (WebhookError, ValidationError) as e:
            message = str(e) if isinstance(e, WebhookError) else "Invalid webhook payload"
            self.logger.error("Failed to process webhook", error=message)
            return WebhookProcessingResult(
                success=False,
                actions=["Error processing webhook"],
                error_message=message,
            )
        except Exception as e:
            self.logger.error("Failed to process webhook", error=str(e), exc_info=e)
            return WebhookProcessingResult(
                success=False,
                actions=["Error processing webhook"],
                error_message="Unknown error",
            )

    async def _handle_payment(self, notification: WebhookPayload) -> tuple[str, str]:
        provider_payment_id = notification.data.get("id")
        status = notification.data.get("status")
        if not provider_payment_id:
            raise WebhookError("Payment notification carries no payment ID")
        if not status:
            raise WebhookError("Payment notification carries no status")

        result = await self.payment_service.handle_webhook(
            self.actor,
            str(provider_payment_id),
            status,
            notification.data,
        )
        if not result.is_ok:
            raise WebhookError(result.error.message)
        return result.data.id, status
