"""Deliver webhooks over HTTP and feed the outcome back into scheduling."""

import asyncio
import logging
from typing import Iterable, Optional

import httpx

from hookdispatch.config import settings
from hookdispatch.webhook import WebHook

logger = logging.getLogger(__name__)


async def send_webhook(
    webhook: WebHook,
    add_delay: bool = False,
    client: Optional[httpx.AsyncClient] = None,
) -> bool:
    """
    Send *webhook*, retrying up to its max_tries.

    Args:
        webhook: the WebHook to send
        add_delay: wait for the webhook's delay before the first try
        client: optional client to send with (a new one is made per try
            otherwise, honouring allow_invalid_certs)

    Returns True if a try got the desired status code. A webhook that isn't
    runnable yet is not sent and returns False; dispatch_webhooks filters
    those out beforehand.
    """
    if not webhook.is_runnable():
        logger.info("WebHook %s isn't runnable until %s", webhook.id, webhook.next_runnable)
        return False

    webhook.set_executing(add_delay, sending=True)

    if add_delay:
        delay = webhook.get_delay_duration()
        if delay.total_seconds() > 0:
            logger.info("WebHook %s waiting %s before sending", webhook.id, delay)
            await asyncio.sleep(delay.total_seconds())

    success = False
    tries = max(webhook.get_max_tries(), 1)
    for attempt in range(1, tries + 1):
        request = webhook.build_request()
        if request is None:
            _report_failure(webhook, f"could not build a request for {webhook.get_url()!r}")
            break

        try:
            status_code = await _transmit(webhook, request, client)
        except httpx.HTTPError as e:
            logger.warning(
                "WebHook %s try %d/%d failed: %s", webhook.id, attempt, tries, e
            )
        else:
            if webhook.is_success(status_code):
                success = True
                break
            logger.warning(
                "WebHook %s try %d/%d got status %d, wanted %s",
                webhook.id, attempt, tries, status_code,
                webhook.get_desired_status_code() or "2XX",
            )

        if attempt < tries:
            await asyncio.sleep(settings.retry_interval)
    else:
        _report_failure(webhook, f"failed {tries} times")

    webhook.failed.set(webhook.id, not success)
    webhook.set_executing(add_delay, sending=False)
    if success:
        logger.info("WebHook %s sent", webhook.id)
    return success


async def _transmit(
    webhook: WebHook,
    request: httpx.Request,
    client: Optional[httpx.AsyncClient],
) -> int:
    if client is not None:
        response = await client.send(request)
        return response.status_code

    async with httpx.AsyncClient(
        timeout=settings.request_timeout,
        verify=not webhook.get_allow_invalid_certs(),
    ) as own_client:
        response = await own_client.send(request)
        return response.status_code


def _report_failure(webhook: WebHook, reason: str) -> None:
    if webhook.get_silent_fails():
        logger.debug("WebHook %s %s", webhook.id, reason)
    else:
        logger.error("WebHook %s %s", webhook.id, reason)


async def dispatch_webhooks(
    webhooks: Iterable[WebHook],
    add_delay: bool = False,
    client: Optional[httpx.AsyncClient] = None,
) -> dict[str, bool]:
    """
    Send every runnable webhook concurrently.

    Returns a mapping of webhook ID -> whether it was delivered. Webhooks
    that aren't runnable are skipped and left out of the mapping. A webhook
    whose send raised is reported as not delivered.
    """
    webhooks = [webhook for webhook in webhooks if webhook.is_runnable()]
    if not webhooks:
        return {}

    results = await asyncio.gather(
        *(send_webhook(webhook, add_delay, client) for webhook in webhooks),
        return_exceptions=True,
    )

    outcome: dict[str, bool] = {}
    for webhook, result in zip(webhooks, results):
        if isinstance(result, Exception):
            logger.error("WebHook %s send raised: %s", webhook.id, result, exc_info=result)
            outcome[webhook.id] = False
        else:
            outcome[webhook.id] = result
    return outcome
