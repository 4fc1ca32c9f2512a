"""Resolve a webhook field across its override tiers."""

from typing import Any, Iterable, Optional

from hookdispatch.config import settings
from hookdispatch.schemas.webhook import WebHookTier


def is_present(value: Any) -> bool:
    """None and "" count as unset; False, 0 and [] are real values."""
    if value is None:
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


def first_present(*values: Any) -> Any:
    """Return the first present value, or None if none are."""
    for value in values:
        if is_present(value):
            return value
    return None


def resolve_field(tiers: Iterable[Optional[WebHookTier]], field: str) -> Any:
    """
    Resolve *field* across *tiers*.

    Priority follows the order given, which for a webhook is:
      1. Root (the webhook's own values)
      2. Main (the named webhook it refers to)
      3. Defaults (the configured defaults)
      4. HardDefaults (built-in values, see hard_defaults())
    Missing tiers (None) are skipped.
    """
    return first_present(*(getattr(tier, field) for tier in tiers if tier is not None))


def hard_defaults() -> WebHookTier:
    """Build the last-resort tier from settings so every field bottoms out."""
    return WebHookTier(
        type=settings.default_type,
        url="",
        secret="",
        custom_headers=[],
        desired_status_code=settings.default_desired_status_code,
        delay=settings.default_delay,
        max_tries=settings.default_max_tries,
        allow_invalid_certs=settings.default_allow_invalid_certs,
        silent_fails=settings.default_silent_fails,
        method=settings.default_method,
        body="",
    )
