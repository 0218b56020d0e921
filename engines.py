"""
搜索引擎解析: 每个解析函数只负责 HTML -> List[SearchItem]

The parsers are pattern based: they look for the handful of markers each
engine's static HTML is known to carry and skip whatever they do not recognise.
Field extraction goes through small selector objects so that every fallback chain
is an explicit, ordered tuple.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple
from urllib.parse import quote_plus, unquote, urljoin

from ad_filter import is_ad_url
from models import SearchItem
from text_utils import decode_entities, strip_tags

logger = logging.getLogger(__name__)

# Only the head of each result block is scanned.
BLOCK_SCAN_LIMIT = 5000


# ============================================================================
# Selectors
# ============================================================================
@dataclass(frozen=True)
class Selector:
    """Named text extractor: ``group(1)`` of ``pattern``, tag-stripped.

    The text only counts when it is longer than ``min_length`` characters.
    """

    name: str
    pattern: "re.Pattern[str]"
    min_length: int = 0

    def extract(self, fragment: str) -> str:
        match = self.pattern.search(fragment)
        if not match:
            return ""
        text = strip_tags(match.group(1))
        return text if len(text) > self.min_length else ""


def first_match(selectors: Sequence[Selector], fragment: str) -> str:
    for selector in selectors:
        text = selector.extract(fragment)
        if text:
            return text
    return ""


@dataclass(frozen=True)
class LinkSelector:
    """Extracts ``(href, title)`` from an anchor: ``group(1)`` is the href, ``group(2)`` the body."""

    name: str
    pattern: "re.Pattern[str]"

    def extract(self, fragment: str) -> Optional[Tuple[str, str]]:
        match = self.pattern.search(fragment)
        if not match:
            return None
        return decode_entities(match.group(1)), strip_tags(match.group(2))

    def extract_all(self, document: str) -> List[Tuple[str, str]]:
        return [(m.group(1), strip_tags(m.group(2))) for m in self.pattern.finditer(document)]


def _split_blocks(html: str, marker: str) -> List[str]:
    # 第一个块在任何结果之前，忽略
    return [block[:BLOCK_SCAN_LIMIT] for block in (html or "").split(marker)[1:]]


def _is_http_url(url: str) -> bool:
    return url.startswith(("http://", "https://"))


# ============================================================================
# Brave Search
# ============================================================================
BRAVE_BLOCK_MARKER = 'data-type="web"'

BRAVE_LINK = LinkSelector(
    "outbound-anchor",
    re.compile(
        r'<a[^>]+href="(https?://(?!search\.brave\.com|brave\.com)[^"]+)"[^>]*>([\s\S]*?)</a>'
    ),
)

BRAVE_SUMMARY_SELECTORS = (
    Selector(
        "snippet-description",
        re.compile(r'class="[^"]*snippet-description[^"]*"[^>]*>([\s\S]*?)</(?:p|div|span)>'),
    ),
    Selector(
        "generic-snippet",
        re.compile(r'class="[^"]*generic-snippet[^"]*"[^>]*>([\s\S]*?)</div>'),
    ),
)


def parse_brave(html: str) -> List[SearchItem]:
    """Parse Brave result blocks (``data-type="web"``).

    URL and title come from the first link that leaves Brave's own domain. Blocks
    without such a link, or with a one-character title, are other card types
    (video, images, news clusters) and are dropped.
    """
    results: List[SearchItem] = []
    for block in _split_blocks(html, BRAVE_BLOCK_MARKER):
        link = BRAVE_LINK.extract(block)
        if not link:
            continue
        url, title = link
        if len(title) <= 1 or not url:
            continue
        summary = first_match(BRAVE_SUMMARY_SELECTORS, block)
        results.append(SearchItem(url=url, title=title, summary=summary))
    return results


# ============================================================================
# 搜狗
# ============================================================================
SOGOU_ORIGIN = "https://www.sogou.com"
SOGOU_BLOCK_MARKER = 'class="vrwrap"'

SOGOU_HEADING_RE = re.compile(r"<h3[^>]*>([\s\S]*?)</h3>")
SOGOU_LINK = LinkSelector(
    "heading-anchor",
    re.compile(r'<a[^>]+href="([^"]+)"[^>]*>([\s\S]*?)</a>'),
)

# 摘要优先级: text-layout > summary > str-text
# Near-empty decorative containers fall through to the next selector.
SOGOU_SUMMARY_SELECTORS = (
    Selector(
        "text-layout",
        re.compile(r'class="[^"]*text-layout[^"]*"[^>]*>([\s\S]*?)</div>'),
        min_length=10,
    ),
    Selector(
        "summary",
        re.compile(r'class="[^"]*summary[^"]*"[^>]*>([\s\S]*?)</div>'),
        min_length=10,
    ),
    Selector(
        "str-text",
        re.compile(r'class="[^"]*str[-_]text[^"]*"[^>]*>([\s\S]*?)</(?:p|div)>'),
        min_length=10,
    ),
)


def _absolute_sogou_url(url: str) -> str:
    if url.startswith("/link?"):
        return SOGOU_ORIGIN + url
    if _is_http_url(url):
        return url
    return urljoin(SOGOU_ORIGIN + "/", url)


def parse_sogou(html: str) -> List[SearchItem]:
    results: List[SearchItem] = []
    for block in _split_blocks(html, SOGOU_BLOCK_MARKER):
        # 没有 h3 的是视频/电影等特殊卡片
        heading = SOGOU_HEADING_RE.search(block)
        if not heading:
            continue
        link = SOGOU_LINK.extract(heading.group(1))
        if not link:
            continue
        href, title = link
        if not title or not href:
            continue
        url = _absolute_sogou_url(href)
        if not _is_http_url(url):
            continue
        summary = first_match(SOGOU_SUMMARY_SELECTORS, block)
        results.append(SearchItem(url=url, title=title, summary=summary))
    return results


# ============================================================================
# DuckDuckGo (HTML 版)
# ============================================================================
DUCKDUCKGO_ORIGIN = "https://duckduckgo.com"
DUCKDUCKGO_AD_SCRIPT = "duckduckgo.com/y.js"
DUCKDUCKGO_CHALLENGE_MARKERS = (
    "anomaly-modal",
    "Please complete the following challenge",
)

DUCKDUCKGO_RESULT_LINK = LinkSelector(
    "result__a",
    re.compile(
        r'<a[^>]*class="[^"]*result__a[^"]*"[^>]*href="([^"]*)"[^>]*>([\s\S]*?)</a>',
        re.IGNORECASE,
    ),
)
DUCKDUCKGO_SNIPPET_RE = re.compile(
    r'<a[^>]*class="[^"]*result__snippet[^"]*"[^>]*>([\s\S]*?)</a>',
    re.IGNORECASE,
)


def looks_like_duckduckgo_challenge(html: str) -> bool:
    return any(marker in (html or "") for marker in DUCKDUCKGO_CHALLENGE_MARKERS)


def _decode_ddg_url(href: str) -> str:
    """Unwrap ``//duckduckgo.com/l/?uddg=<encoded>&rut=...`` into the destination URL."""
    href = decode_entities(href or "").strip()
    if "uddg=" in href:
        encoded = href.split("uddg=", 1)[1].split("&", 1)[0]
        # empty uddg -> "" so the caller drops the item
        return unquote(encoded)
    if href.startswith("//"):
        return "https:" + href
    if href.startswith("/"):
        return DUCKDUCKGO_ORIGIN + href
    return href


def parse_duckduckgo(html: str) -> List[SearchItem]:
    """Parse the DuckDuckGo HTML endpoint.

    Links and snippets are collected as two independent sequences and paired by
    position; a link without a snippet gets an empty summary. Bot-challenge pages
    produce an empty list.
    """
    if looks_like_duckduckgo_challenge(html):
        logger.info("[DuckDuckGo] 返回了验证码页面，跳过")
        return []

    links = DUCKDUCKGO_RESULT_LINK.extract_all(html or "")
    snippets = [strip_tags(m.group(1)) for m in DUCKDUCKGO_SNIPPET_RE.finditer(html or "")]

    results: List[SearchItem] = []
    for index, (href, title) in enumerate(links):
        url = _decode_ddg_url(href)
        if DUCKDUCKGO_AD_SCRIPT in url or is_ad_url(url):
            continue
        if not title or not _is_http_url(url):
            continue
        summary = snippets[index] if index < len(snippets) else ""
        results.append(SearchItem(url=url, title=title, summary=summary))
    return results


# ============================================================================
# Engine registry
# ============================================================================
@dataclass(frozen=True)
class Engine:
    name: str
    search_url_template: str
    parse: Callable[[str], List[SearchItem]]

    def search_url(self, query: str) -> str:
        return self.search_url_template.format(query=quote_plus(query))


BRAVE = Engine("Brave", "https://search.brave.com/search?q={query}", parse_brave)
SOGOU = Engine("Sogou", "https://www.sogou.com/web?query={query}", parse_sogou)
DUCKDUCKGO = Engine("DuckDuckGo", "https://html.duckduckgo.com/html/?q={query}", parse_duckduckgo)

# Order matters: the merger interleaves results in this order.
ENGINES: Tuple[Engine, ...] = (BRAVE, SOGOU, DUCKDUCKGO)
