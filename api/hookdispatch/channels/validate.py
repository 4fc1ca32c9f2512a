"""Config validation for webhooks."""

from typing import Optional

from hookdispatch.duration import is_valid_duration

VALID_WEBHOOK_TYPES = {"github", "gitlab", "custom"}
VALID_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE"}

# Common typos -> correct type
_TYPE_SUGGESTIONS: dict[str, str] = {
    "gihub": "github",
    "githbu": "github",
    "git-hub": "github",
    "gh": "github",
    "gitlba": "gitlab",
    "gtilab": "gitlab",
    "git-lab": "gitlab",
    "gl": "gitlab",
    "url": "custom",
    "http": "custom",
    "generic": "custom",
    "webhook": "custom",
}


def suggest_webhook_type(input_type: str) -> Optional[str]:
    """Return a suggestion if the input looks like a typo of a valid type."""
    if input_type in VALID_WEBHOOK_TYPES:
        return None
    lowered = input_type.lower()
    if lowered in VALID_WEBHOOK_TYPES:
        return lowered
    return _TYPE_SUGGESTIONS.get(lowered)


def validate_webhook(webhook) -> Optional[str]:
    """
    Validate the resolved values of a WebHook.
    Returns None if valid, or an error message string if invalid.
    """
    webhook_type = webhook.get_type()
    if webhook_type not in VALID_WEBHOOK_TYPES:
        message = f"Unknown webhook type: {webhook_type}"
        suggestion = suggest_webhook_type(webhook_type or "")
        if suggestion:
            message += f" (did you mean {suggestion!r}?)"
        return message

    if not webhook.get_url():
        return "Missing required field: url"

    delay = webhook.get_delay()
    if not is_valid_duration(delay):
        return f"delay {delay!r} is not a valid duration (e.g. 30m, 1h15s)"

    if webhook.parent_interval and not is_valid_duration(webhook.parent_interval):
        return f"interval {webhook.parent_interval!r} is not a valid duration"

    code = webhook.get_desired_status_code()
    if code != 0 and not 100 <= code <= 599:
        return "desired_status_code must be 0 (any 2xx) or between 100 and 599"

    if webhook_type == "custom" and webhook.get_method().upper() not in VALID_METHODS:
        return f"Unsupported method for custom webhook: {webhook.get_method()}"

    return None
