"""
web_fetch 内容简化: strip boilerplate tags -> pick the main region -> Markdown.
"""

import logging
import re
from typing import Tuple

import html2text
from bs4 import BeautifulSoup

from text_utils import collapse_whitespace

logger = logging.getLogger(__name__)

# Void elements never carry a closing tag.
VOID_TAGS = frozenset(("embed", "link", "meta"))

USELESS_TAGS = (
    "script",
    "style",
    "iframe",
    "noscript",
    "svg",
    "object",
    "embed",
    "applet",
    "link",
    "meta",
    "head",
    "nav",
    "footer",
    "aside",
)

# Removed again at conversion time, in case the caller skipped remove_useless_tags().
MARKDOWN_REMOVED_TAGS = ("script", "style", "iframe", "noscript", "svg", "nav", "footer")

_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
_TAG_RE = re.compile(r"<[^>]+>")


def _tag_pattern(tag: str) -> "re.Pattern[str]":
    if tag in VOID_TAGS:
        # open tag (self-closing or not) | stray closing tag
        return re.compile(rf"<{tag}\b[^>]*>|</{tag}\s*>", re.IGNORECASE)
    # self-closing form | open..close | unterminated open tag
    return re.compile(
        rf"<{tag}\b[^>]*/>|<{tag}\b[\s\S]*?</{tag}\s*>|<{tag}\b[^>]*>",
        re.IGNORECASE,
    )


_USELESS_TAG_PATTERNS = tuple(_tag_pattern(tag) for tag in USELESS_TAGS)


def remove_useless_tags(html: str) -> str:
    cleaned = html or ""
    for pattern in _USELESS_TAG_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return _COMMENT_RE.sub("", cleaned)


def extract_main_content(html: str) -> str:
    """Return the inner HTML of the most content-like region.

    优先级: <main> > <article> > <div id="content"> > <body> > 全部
    """
    soup = BeautifulSoup(html or "", "lxml")
    region = (
        soup.find("main")
        or soup.find("article")
        or soup.find("div", id="content")
        or soup.body
    )
    if region is None:
        return html or ""
    return region.decode_contents()


def _build_converter() -> html2text.HTML2Text:
    converter = html2text.HTML2Text()
    converter.body_width = 0
    converter.unicode_snob = True
    converter.ignore_links = False
    converter.ignore_images = False
    converter.ul_item_mark = "-"
    converter.backquote_code_style = True
    return converter


def _degraded_text(html: str) -> str:
    return collapse_whitespace(_TAG_RE.sub(" ", html or ""))


def html_to_markdown(html: str) -> str:
    """Convert an HTML fragment to Markdown (ATX headings, ``-`` bullets, fenced code).

    Never raises: if conversion fails the tags are stripped and whitespace
    collapsed instead.
    """
    try:
        soup = BeautifulSoup(html or "", "lxml")
        for tag in soup(list(MARKDOWN_REMOVED_TAGS)):
            tag.decompose()
        markdown = _build_converter().handle(str(soup))
    except Exception as e:
        logger.warning("HTML 转 Markdown 失败，降级为纯文本: %s", e)
        return _degraded_text(html)

    markdown = re.sub(r"[ \t]+$", "", markdown, flags=re.M)
    markdown = re.sub(r"\n{3,}", "\n\n", markdown)
    return markdown.strip()


def simplify_html(html: str) -> str:
    return html_to_markdown(extract_main_content(remove_useless_tags(html)))


def limit_content_length(content: str, max_chars: int) -> Tuple[str, bool]:
    if max_chars < 0:
        max_chars = 0
    if len(content) > max_chars:
        return content[:max_chars], True
    return content, False
