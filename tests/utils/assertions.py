"""Custom assertion helpers."""

import json
import re
from typing import Any
from urllib.parse import parse_qs, urlparse


def assert_whatsapp_link(url: str, number: str, message: str = None) -> None:
    """Assert a wa.me deep link targets ``number`` and, when given, carries ``message``."""
    parsed = urlparse(url)
    assert parsed.netloc == "wa.me"
    assert parsed.path == f"/{number}"
    if message is None:
        assert parsed.query == ""
    else:
        assert parse_qs(parsed.query)["text"] == [message]


def extract_payload(html: str) -> dict[str, Any]:
    """Pull the embedded SHOWCASE JSON blob out of a generated page."""
    match = re.search(r"const SHOWCASE = (\{.*?\});\n", html, re.DOTALL)
    assert match, "page has no embedded SHOWCASE payload"
    return json.loads(match.group(1))


def assert_self_contained(html: str) -> None:
    """Assert the page has inline runtime and data, so it works when opened from disk."""
    assert html.lstrip().lower().startswith("<!doctype html>")
    assert "const SHOWCASE = " in html
    assert "window.openProperty" in html
    assert "{{" not in html and "{%" not in html
