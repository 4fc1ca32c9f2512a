"""Backoff arithmetic for deciding when a webhook may run again."""

import random
from datetime import timedelta
from typing import Optional

from hookdispatch.config import settings
from hookdispatch.duration import parse_duration


def compute_backoff(
    failed: Optional[bool],
    sending: bool,
    interval: timedelta,
    delay: timedelta = timedelta(0),
    max_tries: int = 0,
    add_delay: bool = False,
) -> timedelta:
    """
    Time until the webhook is runnable again.

    - sending: the in-flight window, sending_base_delay (1h15s) plus, when
      add_delay is set, the webhook's delay and per_try_allowance (3s) for
      each try.
    - not sending, last attempt failed or never made: failure_backoff (15s).
    - not sending, last attempt succeeded: success_interval_multiplier (2)
      times the service's polling interval.
    """
    if sending:
        backoff = parse_duration(settings.sending_base_delay)
        if add_delay:
            backoff += delay
            if max_tries > 0:
                backoff += max_tries * parse_duration(settings.per_try_allowance)
        return backoff

    if failed is False:
        backoff = settings.success_interval_multiplier * interval
    else:
        backoff = parse_duration(settings.failure_backoff)
    return backoff + _jitter()


def _jitter() -> timedelta:
    spread = parse_duration(settings.jitter)
    if spread <= timedelta(0):
        return timedelta(0)
    return random.uniform(0, 1) * spread
