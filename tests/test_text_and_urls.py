import pytest

from ad_filter import is_ad_url
from text_utils import decode_entities, strip_tags
from url_normalizer import normalize_url


def test_decode_entities_named_and_numeric() -> None:
    assert decode_entities("a &amp; b &lt;c&gt; &quot;d&quot;") == 'a & b <c> "d"'
    assert decode_entities("it&#x27;s &#39;ok&#39; &apos;yes&apos;") == "it's 'ok' 'yes'"
    assert decode_entities("&#65;&#x42;") == "AB"


def test_decode_entities_leaves_unknown_and_invalid() -> None:
    assert decode_entities("&nbsp;&copy;") == "&nbsp;&copy;"
    assert decode_entities("&#99999999999;") == "&#99999999999;"
    assert decode_entities("&amp;lt;") == "&lt;"


def test_strip_tags_removes_markup_and_trims() -> None:
    assert strip_tags("  <b>Hello</b> <i>w&amp;rld</i>\n") == "Hello w&rld"
    assert strip_tags("") == ""


def test_normalize_strips_www_and_trailing_slash() -> None:
    assert normalize_url("https://www.example.com/") == normalize_url("https://example.com")


def test_normalize_drops_tracking_params() -> None:
    assert normalize_url("https://example.com/page?utm_source=x&id=1") == normalize_url(
        "https://example.com/page?id=1"
    )
    assert normalize_url("https://example.com/?fbclid=1&gclid=2&utm_foo=3") == "example.com"


def test_normalize_ignores_scheme_and_param_order() -> None:
    assert normalize_url("http://example.com/page") == normalize_url("https://example.com/page")
    assert normalize_url("https://example.com/p?b=2&a=1") == normalize_url("https://example.com/p?a=1&b=2")


@pytest.mark.parametrize(
    "url",
    [
        "https://www.Example.com/Path/?utm_medium=mail&q=Hello+World",
        "http://example.com:8080/a//",
        "https://example.com/search?q=a%2Fb&ref=home",
        "not a url",
        "",
    ],
)
def test_normalize_is_idempotent(url: str) -> None:
    once = normalize_url(url)
    assert normalize_url(once) == once


def test_normalize_falls_back_to_lowercase_for_unparseable() -> None:
    assert normalize_url("Relative/Path") == "relative/path"
    assert normalize_url("http://[::1") == "http://[::1"


@pytest.mark.parametrize(
    "url",
    [
        "https://googleads.example.com/click",
        "https://ad.doubleclick.net/x",
        "https://www.baidu.com/aclick?url=xxx",
        "https://pos.baidu.com/track",
        "https://example.com/ads/banner",
        "https://example.com?ad_provider=bingv7",
        "https://example.com?ad_domain=spam.com",
        "https://www.google.com/aclk?sa=l",
        "https://example.com/pagead/conversion",
    ],
)
def test_is_ad_url_detects_ads(url: str) -> None:
    assert is_ad_url(url)


@pytest.mark.parametrize(
    "url",
    [
        "https://www.example.com/page",
        "https://github.com/deno/deno",
        "https://stackoverflow.com/questions/12345",
        "https://docs.deno.com/deploy",
        "https://en.wikipedia.org/wiki/Python_(programming_language)",
    ],
)
def test_is_ad_url_keeps_normal_links(url: str) -> None:
    assert not is_ad_url(url)
