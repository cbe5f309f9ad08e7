"""Hacker News URL and comment text helpers."""

import re

import httpx

from hn_classifier.core.exceptions import InvalidHnUrlError

HN_HOST = "news.ycombinator.com"
HN_ITEM_PATH = "/item"

_TAG_RE = re.compile(r"<[^>]*>")
_ID_RE = re.compile(r"[0-9]+")

# Order matters: &amp; is decoded last so "&amp;lt;" becomes "&lt;", not "<".
_ENTITIES = (
    ("&#x27;", "'"),
    ("&quot;", '"'),
    ("&gt;", ">"),
    ("&lt;", "<"),
    ("&amp;", "&"),
)


def extract_item_id(url: str) -> int:
    """Extract the numeric item id from a URL like
    ``https://news.ycombinator.com/item?id=123456``.

    Raises:
        InvalidHnUrlError: if the host, path or ``id`` parameter is wrong.
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidHnUrlError(f'Failed to extract item ID from URL "{url}": {e}') from e

    if parsed.host != HN_HOST:
        reason = f"Invalid HN hostname: {parsed.host}"
    elif parsed.path != HN_ITEM_PATH:
        reason = f"Invalid HN path: {parsed.path}"
    else:
        raw_id = parsed.params.get("id")
        if not raw_id:
            reason = "Missing id parameter in URL"
        else:
            item_id = int(raw_id) if _ID_RE.fullmatch(raw_id) else 0
            if item_id > 0:
                return item_id
            reason = f"Invalid item ID: {raw_id}"

    raise InvalidHnUrlError(f'Failed to extract item ID from URL "{url}": {reason}')


def clean_html(html: str) -> str:
    """Strip HTML tags from HN comment text."""
    text = html.replace("<p>", "\n")
    text = _TAG_RE.sub("", text)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text.strip()
