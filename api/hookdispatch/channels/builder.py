"""Pick the request builder for a webhook type."""

import logging
from typing import Optional

import httpx

from hookdispatch.channels import RequestContext
from hookdispatch.channels.custom import build_custom
from hookdispatch.channels.github import build_github
from hookdispatch.channels.gitlab import build_gitlab

logger = logging.getLogger(__name__)

_BUILDERS = {
    "github": build_github,
    "gitlab": build_gitlab,
    "custom": build_custom,
}


def build_request(webhook_type: str, ctx: RequestContext) -> Optional[httpx.Request]:
    """
    Build the outbound request for *webhook_type*.

    Returns None when the type is unknown or the URL is invalid.
    """
    builder = _BUILDERS.get(webhook_type)
    if builder is None:
        logger.warning("WebHook %s has unknown type %r", ctx.webhook_id, webhook_type)
        return None
    return builder(ctx)
