"""Outbound webhook dispatch: override resolution, scheduling and request building."""

from hookdispatch.failures import FailureTracker
from hookdispatch.schemas.webhook import Header, WebHookTier
from hookdispatch.status import ServiceStatus
from hookdispatch.webhook import WebHook

__all__ = [
    "FailureTracker",
    "Header",
    "ServiceStatus",
    "WebHook",
    "WebHookTier",
]
