"""GitHub push-event webhook."""

import hashlib
import hmac
import json
import secrets
from typing import Optional

import httpx

from hookdispatch.channels import RequestContext, assemble_request

GITHUB_REF = "refs/heads/master"


def sign_payload(payload_bytes: bytes, secret: str, digest=hashlib.sha256) -> str:
    """Compute the HMAC hex digest of *payload_bytes* keyed with *secret*."""
    return hmac.new(secret.encode(), payload_bytes, digest).hexdigest()


def build_github(ctx: RequestContext) -> Optional[httpx.Request]:
    """
    Build a request that looks like a GitHub push to master.

    The body is signed with the secret in both X-Hub-Signature (sha1) and
    X-Hub-Signature-256 so receivers like Jenkins or adnanh/webhook can
    verify it.
    """
    payload = {
        "ref": GITHUB_REF,
        "before": secrets.token_hex(20),
        "after": secrets.token_hex(20),
    }
    body = json.dumps(payload).encode()

    headers = {
        "Content-Type": "application/json",
        "X-Github-Event": "push",
        "X-Hub-Signature": "sha1=" + sign_payload(body, ctx.secret, hashlib.sha1),
        "X-Hub-Signature-256": "sha256=" + sign_payload(body, ctx.secret),
    }
    return assemble_request("POST", ctx, headers, body)
