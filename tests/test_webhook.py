"""
Tests for webhook signature checks and auto-labeling.
"""

import hashlib
import hmac
import json

import pytest

from devsuite.classifier import DEFAULT_LABEL_RULES
from devsuite.webhook import (
    WebhookError,
    compute_signature,
    handle_event,
    verify_signature,
)

SECRET = "It's a Secret to Everybody"
BODY = b"Hello, World!"


class TestVerifySignature:
    """Test X-Hub-Signature-256 verification."""

    def test_known_signature(self):
        """Test against the example published in GitHub's webhook docs."""
        expected = (
            "sha256=757107ea0eb2509fc211221cce984b8a37570b6d7586c22c46f4379c8b043e17"
        )
        assert compute_signature(SECRET, BODY) == expected
        assert verify_signature(SECRET, BODY, expected)

    def test_matches_hmac(self):
        digest = hmac.new(b"secret", b"{}", hashlib.sha256).hexdigest()
        assert verify_signature("secret", b"{}", f"sha256={digest}")

    def test_tampered_body(self):
        signature = compute_signature(SECRET, BODY)
        assert not verify_signature(SECRET, BODY + b" ", signature)

    def test_wrong_secret(self):
        signature = compute_signature("other", BODY)
        assert not verify_signature(SECRET, BODY, signature)

    @pytest.mark.parametrize("secret, signature", [(None, "sha256=x"), (SECRET, None)])
    def test_missing_secret_or_signature(self, secret, signature):
        assert not verify_signature(secret, BODY, signature)

    def test_signature_without_prefix(self):
        digest = hmac.new(SECRET.encode(), BODY, hashlib.sha256).hexdigest()
        assert not verify_signature(SECRET, BODY, digest)


class TestHandleEvent:
    """Test how webhook events are turned into label decisions."""

    def test_opened_issue_is_labeled(self):
        payload = {
            "action": "opened",
            "issue": {
                "title": "App crashes on login",
                "body": None,
                "html_url": "https://github.com/octo/repo/issues/1",
            },
        }

        outcome = handle_event("issues", payload)

        assert outcome.labeled
        assert outcome.labels == ("bug",)
        assert outcome.confidence == 60
        assert outcome.to_dict() == {
            "success": True,
            "labels_applied": ["bug"],
            "confidence": 60,
            "item_url": "https://github.com/octo/repo/issues/1",
        }

    def test_opened_pull_request_is_labeled(self):
        payload = {
            "action": "opened",
            "pull_request": {
                "title": "Add dark mode support",
                "body": "",
                "html_url": "https://github.com/octo/repo/pull/2",
            },
        }

        outcome = handle_event("pull_request", payload)

        assert outcome.labels == ("enhancement",)
        assert outcome.confidence == 95
        assert outcome.item_url == "https://github.com/octo/repo/pull/2"

    def test_unmatched_item_needs_triage(self):
        payload = {"action": "opened", "issue": {"title": "Hello", "body": ""}}
        assert handle_event("issues", payload).labels == ("needs-triage",)

    def test_uses_supplied_rules(self):
        payload = {"action": "opened", "issue": {"title": "App crashes", "body": ""}}
        rules = DEFAULT_LABEL_RULES.toggle("bug")
        assert handle_event("issues", payload, rules).labels == ("needs-triage",)

    @pytest.mark.parametrize(
        "event, action",
        [("issues", "closed"), ("push", ""), ("pull_request", "synchronize")],
    )
    def test_other_events_take_no_action(self, event, action):
        outcome = handle_event(event, {"action": action})
        assert not outcome.labeled
        assert outcome.message == (
            f"Event {event}:{action} processed but no action taken"
        )
        assert outcome.to_dict() == {"success": True, "message": outcome.message}

    def test_opened_event_without_item(self):
        with pytest.raises(WebhookError, match="no issue or pull request"):
            handle_event("issues", {"action": "opened"})

    def test_payload_must_be_object(self):
        with pytest.raises(WebhookError, match="JSON object"):
            handle_event("issues", json.loads("[1, 2]"))
