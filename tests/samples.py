"""Trimmed result pages shaped like the real engine markup."""

BRAVE_HTML = """
<div id="results">
  <div data-type="web" class="result">
    <a href="https://example.com/page1" class="heading">
      <span>Example Page Title</span>
    </a>
    <div class="snippet-description">This is the description of the page.</div>
  </div>
  <div data-type="web" class="result">
    <a href="https://another.com/page2">Another Title</a>
    <div class="generic-snippet">Another description here.</div>
  </div>
  <div data-type="video" class="result">
    <a href="https://video.com/v1">Video Title</a>
  </div>
</div>
"""

SOGOU_HTML = """
<div class="vrwrap">
  <h3 class="vr-title">
    <a href="/link?url=abc123">Deno Deploy 入门教程</a>
  </h3>
  <div class="text-layout ">这是搜狗搜索的摘要内容，来自 text-layout 容器。</div>
</div>
<div class="vrwrap">
  <h3 class="vr-title">
    <a href="https://example.com/page2">第二个结果标题</a>
  </h3>
  <div class="card_normal_result__summary_fd6d">第二条摘要，来自 summary 容器。</div>
</div>
<div class="vrwrap">
  <div class="video-frame">没有 h3 的视频卡片，应被跳过</div>
</div>
"""

DDG_HTML = """
<div class="result results_links results_links_deep web-result">
  <a class="result__a" href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fexample.com%2Fpage&amp;rut=abc">
    Example Page
  </a>
  <a class="result__snippet">This is a snippet for example page.</a>
</div>
<div class="result results_links results_links_deep web-result">
  <a class="result__a" href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fduckduckgo.com%2Fy.js%3Fad_domain%3Dspam.com%26ad_provider%3Dbingv7aa&amp;rut=def">
    Sponsored Result
  </a>
  <a class="result__snippet">This is a sponsored result.</a>
</div>
"""

DDG_CHALLENGE_HTML = """
<div class="anomaly-modal__title">Unfortunately, bots use DuckDuckGo too.</div>
<div class="anomaly-modal__description">Please complete the following challenge to confirm this search was made by a human.</div>
"""
