"""
GitHub webhook handling for automatic label suggestions.

Receiving the HTTP request is left to the hosting web framework; this module
verifies the ``X-Hub-Signature-256`` header and decides which labels an
opened issue or pull request should get.
"""

import hashlib
import hmac
from typing import Any, NamedTuple

from devsuite.classifier import RuleSet, classify

SIGNATURE_PREFIX = "sha256="
LABELED_EVENTS = ("issues", "pull_request")
LABELED_ACTIONS = ("opened",)


class WebhookError(ValueError):
    """Raised when a webhook payload cannot be processed."""


class WebhookOutcome(NamedTuple):
    """What the webhook handler decided for an event."""

    event: str
    action: str
    labels: tuple[str, ...] = ()
    confidence: int | None = None
    item_url: str = ""
    message: str = ""

    @property
    def labeled(self) -> bool:
        return bool(self.labels)

    def to_dict(self) -> dict[str, Any]:
        if self.labeled:
            return {
                "success": True,
                "labels_applied": list(self.labels),
                "confidence": self.confidence,
                "item_url": self.item_url,
            }
        return {"success": True, "message": self.message}


def compute_signature(secret: str, body: bytes) -> str:
    """Return the ``sha256=<hex>`` signature GitHub sends for ``body``."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(secret: str | None, body: bytes, signature: str | None) -> bool:
    """
    Check a webhook signature in constant time.

    Returns False when either the secret or the signature is missing.
    """
    if not secret or not signature:
        return False
    expected = compute_signature(secret, body)
    return hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))


def handle_event(
    event_type: str, payload: dict[str, Any], rules: RuleSet | None = None
) -> WebhookOutcome:
    """
    Classify newly opened issues and pull requests.

    Other events and actions are acknowledged without labels.

    Raises:
        WebhookError: If the payload is not a JSON object, or a labeled event
            carries no issue or pull request.
    """
    if not isinstance(payload, dict):
        raise WebhookError("Webhook payload must be a JSON object")
    action = payload.get("action", "")

    if event_type not in LABELED_EVENTS or action not in LABELED_ACTIONS:
        return WebhookOutcome(
            event=event_type,
            action=action,
            message=f"Event {event_type}:{action} processed but no action taken",
        )

    item = payload.get("issue") or payload.get("pull_request")
    if not isinstance(item, dict):
        raise WebhookError(f"{event_type} event payload has no issue or pull request")

    result = classify(item.get("title") or "", item.get("body") or "", rules)
    return WebhookOutcome(
        event=event_type,
        action=action,
        labels=result.labels,
        confidence=result.confidence,
        item_url=item.get("html_url", ""),
    )
