"""Tests for HN URL and comment text helpers."""

import pytest

from hn_classifier.core import InvalidHnUrlError, clean_html, extract_item_id


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://news.ycombinator.com/item?id=1", 1),
        ("https://news.ycombinator.com/item?id=45245948", 45245948),
        ("http://news.ycombinator.com/item?id=42&p=2", 42),
    ],
)
def test_extract_item_id(url: str, expected: int) -> None:
    """Test the id embedded in the query string is returned as int."""
    assert extract_item_id(url) == expected


@pytest.mark.parametrize(
    "url, reason",
    [
        ("https://example.com/item?id=1", "Invalid HN hostname"),
        ("https://news.ycombinator.com/news?id=1", "Invalid HN path"),
        ("https://news.ycombinator.com/item", "Missing id parameter"),
        ("https://news.ycombinator.com/item?id=", "Missing id parameter"),
        ("https://news.ycombinator.com/item?id=abc", "Invalid item ID"),
        ("https://news.ycombinator.com/item?id=0", "Invalid item ID"),
        ("https://news.ycombinator.com/item?id=-5", "Invalid item ID"),
        ("https://news.ycombinator.com/item?id=1_000", "Invalid item ID"),
        ("https://news.ycombinator.com/item?id=%D9%A3", "Invalid item ID"),
        ("https://news.ycombinator.com/item?id=%EF%BC%97", "Invalid item ID"),
        ("/item?id=1", "Invalid HN hostname"),
    ],
)
def test_extract_item_id_rejects(url: str, reason: str) -> None:
    """Test malformed URLs raise a validation error naming the problem."""
    with pytest.raises(InvalidHnUrlError, match=reason) as exc_info:
        extract_item_id(url)

    assert url in str(exc_info.value)
    assert isinstance(exc_info.value, ValueError)


def test_clean_html_tags_and_entities() -> None:
    """Test tags are removed and the handled entities are decoded."""
    html = "Don&#x27;t <i>panic</i>.<p>&quot;1 &lt; 2 &amp;&amp; 3 &gt; 2&quot;"

    assert clean_html(html) == "Don't panic.\n\"1 < 2 && 3 > 2\""


def test_clean_html_links() -> None:
    """Test anchor tags keep only their text."""
    html = 'See <a href="https:&#x2F;&#x2F;example.com" rel="nofollow">this</a>'

    assert clean_html(html) == "See this"


def test_clean_html_paragraphs_become_newlines() -> None:
    """Test <p> separators turn into line breaks and outer space is trimmed."""
    assert clean_html("  first<p>second<p>third  ") == "first\nsecond\nthird"


def test_clean_html_amp_decoded_last() -> None:
    """Test an escaped entity is decoded only once."""
    assert clean_html("&amp;lt;") == "&lt;"


@pytest.mark.parametrize("text", ["plain text", "a\nb", "", "x = 1 + 2"])
def test_clean_html_idempotent_on_clean_text(text: str) -> None:
    """Test text without tags or entities passes through unchanged."""
    assert clean_html(text) == text
    assert clean_html(clean_html(text)) == clean_html(text)
