import re
import time

import page_content
from page_content import (
    extract_main_content,
    html_to_markdown,
    limit_content_length,
    remove_useless_tags,
    simplify_html,
)


PAGE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Demo</title>
  <link rel="stylesheet" href="/a.css"/>
  <style>body { color: red; }</style>
</head>
<body>
  <header><h1>Site header</h1></header>
  <nav><a href="/">Home</a></nav>
  <!-- tracking comment -->
  <main>
    <h2>Install</h2>
    <p>Run the   installer.</p>
    <ul><li>first step</li><li>second step</li></ul>
    <pre><code>pip install demo</code></pre>
    <script>alert("x")</script>
  </main>
  <aside>Related links</aside>
  <footer>Copyright</footer>
</body>
</html>
"""


def test_remove_useless_tags() -> None:
    cleaned = remove_useless_tags(PAGE)

    for needle in ("<script", "<style", "<nav", "<footer", "<aside", "<head>", "<meta", "<link", "tracking comment"):
        assert needle not in cleaned
    assert "<header>" in cleaned
    assert "Run the" in cleaned


def test_remove_useless_tags_handles_self_closing_and_unterminated() -> None:
    html = '<p>a</p><embed src="x.swf"/><iframe src="y"><p>b</p>'
    assert remove_useless_tags(html) == "<p>a</p><p>b</p>"


def test_remove_useless_tags_void_tags_on_large_page() -> None:
    filler = "<p>" + "x" * 2000 + "</p>"
    chunk = '<meta name="k" content="v"><link rel="preload" href="/a.js">' + filler
    html = "<body>" + chunk * 500 + "<embed src=\"z\"></embed></body>"

    started = time.perf_counter()
    cleaned = remove_useless_tags(html)
    elapsed = time.perf_counter() - started

    assert elapsed < 1.0
    for needle in ("<meta", "<link", "<embed", "</embed"):
        assert needle not in cleaned
    assert cleaned.count(filler) == 500


def test_extract_main_content_priority() -> None:
    assert "Install" in extract_main_content(PAGE)
    assert "Site header" not in extract_main_content(PAGE)

    article = "<body><p>outside</p><article><p>story</p></article></body>"
    assert extract_main_content(article).strip() == "<p>story</p>"

    content = '<body><p>outside</p><div id="content"><div>inner</div><p>tail</p></div></body>'
    selected = extract_main_content(content)
    assert "tail" in selected and "outside" not in selected

    body = "<html><body><p>only body</p></body></html>"
    assert extract_main_content(body).strip() == "<p>only body</p>"


def test_html_to_markdown_styles() -> None:
    markdown = html_to_markdown(
        "<h2>Title</h2><p>Text</p><ul><li>one</li><li>two</li></ul>"
        "<pre><code>print('hi')</code></pre><script>evil()</script><footer>bye</footer>"
    )

    assert re.search(r"^## Title$", markdown, flags=re.M)
    assert re.search(r"^\s*- one$", markdown, flags=re.M)
    assert "```" in markdown
    assert "print('hi')" in markdown
    assert "evil()" not in markdown
    assert "bye" not in markdown
    assert "\n\n\n" not in markdown
    assert not re.search(r"[ \t]+$", markdown, flags=re.M)


def test_html_to_markdown_falls_back_to_plain_text(monkeypatch) -> None:
    class BrokenConverter:
        def __init__(self, *args, **kwargs):
            raise RuntimeError("converter exploded")

    monkeypatch.setattr(page_content.html2text, "HTML2Text", BrokenConverter)

    assert html_to_markdown("<p>Hello\n\n   <b>world</b></p>") == "Hello world"


def test_simplify_html_pipeline() -> None:
    markdown = simplify_html(PAGE)

    assert markdown.startswith("## Install")
    assert "Run the installer." in markdown
    assert "pip install demo" in markdown
    assert "Home" not in markdown
    assert "Copyright" not in markdown
    assert "alert" not in markdown


def test_limit_content_length() -> None:
    assert limit_content_length("abcdef", 3) == ("abc", True)
    assert limit_content_length("abc", 3) == ("abc", False)
    assert limit_content_length("abc", -1) == ("", True)
