"""URL based ad detection, shared by the engine parsers and the merger."""

import re

# 广告平台域名
_AD_NETWORK_PATTERNS = [
    r"googleads\.",
    r"doubleclick\.",
    r"googlesyndication\.",
    r"googleadservices\.",
    r"adclick\.",
    r"adsense\.",
    r"adservice\.",
    r"adserver\.",
    r"clickserve\.",
    r"clicktrack\.",
]

# 各搜索引擎自己的广告标记
_ENGINE_AD_PATTERNS = [
    # Baidu
    r"baidu\.com/aclick",
    r"pos\.baidu\.com",
    r"cpro\.baidu\.com",
    r"e\.baidu\.com",
    # Bing
    r"bingads\.",
    r"microsoftadvertising\.",
    # DuckDuckGo sponsored results carry these query parameters
    r"ad_provider=",
    r"ad_domain=",
]

# 通用广告路径
_GENERIC_AD_PATTERNS = [
    r"/ads?/",
    r"/advert",
    r"/sponsor",
    r"/promo/",
    r"/click\?",
    r"/aclk\?",
    r"/pagead/",
]

AD_PATTERNS = tuple(
    re.compile(p, re.IGNORECASE)
    for p in _AD_NETWORK_PATTERNS + _ENGINE_AD_PATTERNS + _GENERIC_AD_PATTERNS
)


def is_ad_url(url: str) -> bool:
    if not url:
        return False
    return any(pattern.search(url) for pattern in AD_PATTERNS)
