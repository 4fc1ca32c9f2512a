"""Version templating for webhook URLs, headers and bodies."""

VERSION_TOKEN = "{{ version }}"


def render_template(text: str, version: str) -> str:
    """
    Replace every ``{{ version }}`` in *text* with *version*.

    An unknown version renders as an empty string. No other tokens are
    recognised.
    """
    if not text or VERSION_TOKEN not in text:
        return text
    return text.replace(VERSION_TOKEN, version or "")
