"""Request building per webhook type."""

import hashlib
import hmac
import json
from urllib.parse import parse_qs

import pytest

from hookdispatch.channels import RequestContext, assemble_request
from hookdispatch.channels.builder import build_request
from hookdispatch.channels.github import GITHUB_REF, sign_payload
from hookdispatch.schemas.webhook import Header

INVALID_URL = "https://release-argus\t/\tArgus"


# ---------------------------------------------------------------------------
# GitHub
# ---------------------------------------------------------------------------


def test_github_request(make_webhook):
    webhook = make_webhook(type="github", url="https://example.com/hooks/argus")

    req = webhook.build_request()

    assert req is not None
    assert req.method == "POST"
    assert str(req.url) == "https://example.com/hooks/argus"
    payload = json.loads(req.content)
    assert payload["ref"] == "refs/heads/master" == GITHUB_REF
    assert len(payload["before"]) == 40
    assert req.headers["Content-Type"] == "application/json"
    assert req.headers["X-Github-Event"] == "push"


def test_github_signatures_verify(make_webhook):
    webhook = make_webhook(type="github", url="https://example.com", secret="shhh")

    req = webhook.build_request()

    want_256 = hmac.new(b"shhh", req.content, hashlib.sha256).hexdigest()
    want_1 = hmac.new(b"shhh", req.content, hashlib.sha1).hexdigest()
    assert req.headers["X-Hub-Signature-256"] == f"sha256={want_256}"
    assert req.headers["X-Hub-Signature"] == f"sha1={want_1}"


def test_sign_payload_different_secrets():
    assert sign_payload(b"{}", "secret-a") != sign_payload(b"{}", "secret-b")


# ---------------------------------------------------------------------------
# GitLab
# ---------------------------------------------------------------------------


def test_gitlab_request(make_webhook):
    webhook = make_webhook(type="gitlab", url="https://release-argus.io", secret="tok")

    req = webhook.build_request()

    assert req is not None
    assert req.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert req.headers["X-Gitlab-Token"] == "tok"
    assert parse_qs(req.content.decode()) == {"token": ["tok"], "ref": ["master"]}


# ---------------------------------------------------------------------------
# Custom
# ---------------------------------------------------------------------------


def test_custom_request_uses_configured_method_and_body(make_webhook):
    webhook = make_webhook(
        type="custom",
        url="https://example.com/deploy/{{ version }}",
        method="put",
        body="deploy {{ version }}",
    )
    webhook.service_status.set_latest_version("1.0.0")

    req = webhook.build_request()

    assert req.method == "PUT"
    assert str(req.url) == "https://example.com/deploy/1.0.0"
    assert req.content == b"deploy 1.0.0"
    assert "X-Github-Event" not in req.headers
    assert "X-Gitlab-Token" not in req.headers


# ---------------------------------------------------------------------------
# Shared behaviour
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("webhook_type", ["github", "gitlab", "custom"])
def test_invalid_url_returns_none(make_webhook, webhook_type):
    webhook = make_webhook(type=webhook_type, url=INVALID_URL)
    assert webhook.build_request() is None


@pytest.mark.parametrize("webhook_type", ["github", "gitlab", "custom"])
def test_custom_headers_are_set(make_webhook, webhook_type):
    headers = [Header(key="X-Foo", value="bar"), Header(key="X-Version", value="{{ version }}")]
    webhook = make_webhook(type=webhook_type, url="https://example.com", custom_headers=headers)
    webhook.service_status.set_latest_version("4.5.6")

    req = webhook.build_request()

    assert req.headers["X-Foo"] == "bar"
    assert req.headers["X-Version"] == "4.5.6"


def test_custom_headers_override_provider_headers(make_webhook):
    webhook = make_webhook(
        type="github",
        url="https://example.com",
        custom_headers=[Header(key="x-github-event", value="release")],
    )

    req = webhook.build_request()

    assert req.headers.get_list("X-Github-Event") == ["release"]


def test_unknown_type_returns_none():
    ctx = RequestContext(webhook_id="x", url="https://example.com")
    assert build_request("url", ctx) is None


@pytest.mark.parametrize("webhook_type", ["github", "gitlab"])
def test_non_ascii_secret(make_webhook, webhook_type):
    webhook = make_webhook(type=webhook_type, url="https://example.com", secret="pässwörd")

    req = webhook.build_request()

    assert req is not None
    if webhook_type == "gitlab":
        assert req.headers["X-Gitlab-Token"] == "pässwörd"
        assert parse_qs(req.content.decode())["token"] == ["pässwörd"]
    else:
        want = hmac.new("pässwörd".encode(), req.content, hashlib.sha256).hexdigest()
        assert req.headers["X-Hub-Signature-256"] == f"sha256={want}"


def test_non_ascii_custom_header_value(make_webhook):
    webhook = make_webhook(
        type="custom",
        url="https://example.com",
        custom_headers=[Header(key="X-Team", value="Équipe")],
    )

    req = webhook.build_request()

    assert req is not None
    assert req.headers["X-Team"] == "Équipe"


def test_unencodable_header_returns_none():
    ctx = RequestContext(
        webhook_id="x",
        url="https://example.com",
        custom_headers=[Header.model_construct(key="X-\ud800", value="bar")],
    )
    assert assemble_request("POST", ctx, {}, b"") is None
