"""Base types for webhook request builders."""

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from hookdispatch.schemas.webhook import Header

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """Resolved webhook values a provider needs to build its request."""
    webhook_id: str
    url: str
    secret: str = ""
    custom_headers: list[Header] = field(default_factory=list)
    method: str = "POST"
    body: str = ""


def assemble_request(
    method: str,
    ctx: RequestContext,
    headers: dict[str, str],
    content: bytes,
) -> Optional[httpx.Request]:
    """
    Build the request with the provider *headers* and then the custom headers,
    which replace provider headers of the same name.

    Returns None if the URL can't be parsed or a header can't be encoded.
    """
    try:
        merged = httpx.Headers(headers, encoding="utf-8")
        for header in ctx.custom_headers:
            merged[header.key] = header.value
        return httpx.Request(method, ctx.url, headers=merged, content=content)
    except httpx.InvalidURL as e:
        logger.debug("WebHook %s has an invalid url %r: %s", ctx.webhook_id, ctx.url, e)
        return None
    except UnicodeEncodeError as e:
        logger.debug("WebHook %s has a header that can't be encoded: %s", ctx.webhook_id, e)
        return None
