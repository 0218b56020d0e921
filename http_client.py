"""
HTTP layer shared by the search engines and web_fetch.

All request settings live in an immutable ``FetchConfig`` that callers pass in
explicitly; nothing here reads process-wide state.
"""

import asyncio
import logging
import os
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

from curl_cffi.requests import AsyncSession, RequestsError

logger = logging.getLogger(__name__)

# 模拟浏览器的 User-Agent，降低被 429 限制的概率
USER_AGENTS: Tuple[str, ...] = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
)

BROWSER_HEADERS: Dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9,zh-CN;q=0.8,zh;q=0.7",
    "Accept-Encoding": "gzip, deflate, br",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Upgrade-Insecure-Requests": "1",
}

REQUEST_TIMEOUT_S = 10
CURL_IMPERSONATE = "chrome110"
HTTP_VERSION = "v1"

PROXY_ENV_KEYS = (
    "PROXY",
    "HTTPS_PROXY",
    "https_proxy",
    "HTTP_PROXY",
    "http_proxy",
    "ALL_PROXY",
    "all_proxy",
)


def proxy_from_env() -> Optional[str]:
    for key in PROXY_ENV_KEYS:
        value = os.getenv(key)
        if value:
            return value
    return None


# ============================================================================
# Errors
# ============================================================================
class FetchError(Exception):
    """A request could not be completed."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class FetchHTTPError(FetchError):
    def __init__(self, url: str, status_code: int, reason: str = ""):
        message = f"HTTP {status_code}: {reason}" if reason else f"HTTP {status_code}"
        super().__init__(url, message)
        self.status_code = status_code
        self.reason = reason


class FetchTimeoutError(FetchError):
    def __init__(self, url: str, timeout_s: float):
        seconds = int(timeout_s) if float(timeout_s).is_integer() else timeout_s
        super().__init__(url, f'Timeout: Failed to fetch "{url}" within {seconds} seconds.')
        self.timeout_s = timeout_s


class FetchNetworkError(FetchError):
    def __init__(self, url: str, cause: Exception):
        super().__init__(url, f'Network error while fetching "{url}": {cause}')
        self.cause = cause


def _is_curl_timeout(error: Exception) -> bool:
    message = str(error)
    return ("curl: (28)" in message) or ("Operation timed out" in message)


# ============================================================================
# Config
# ============================================================================
@dataclass(frozen=True)
class FetchConfig:
    timeout_s: float = REQUEST_TIMEOUT_S
    proxy: Optional[str] = None
    user_agents: Sequence[str] = USER_AGENTS
    header_template: Mapping[str, str] = field(default_factory=lambda: dict(BROWSER_HEADERS))
    pick_user_agent: Callable[[Sequence[str]], str] = random.choice
    impersonate: Optional[str] = CURL_IMPERSONATE
    http_version: Optional[str] = HTTP_VERSION

    def build_headers(self) -> Dict[str, str]:
        headers = dict(self.header_template)
        if self.user_agents:
            headers["User-Agent"] = self.pick_user_agent(self.user_agents)
        return headers

    def proxies(self) -> Optional[Dict[str, str]]:
        if self.proxy:
            return {
                "http": self.proxy,
                "https": self.proxy,
            }
        return None


# ============================================================================
# Requests
# ============================================================================
async def http_get(url: str, config: FetchConfig):
    """GET ``url`` following redirects, bounded by ``config.timeout_s``.

    Returns the curl_cffi response for any 2xx status. Everything else is raised
    as one of the ``FetchError`` subclasses.
    """
    request_kwargs = {
        "headers": config.build_headers(),
        "proxies": config.proxies(),
        "timeout": config.timeout_s,
        "allow_redirects": True,
    }
    if config.impersonate:
        request_kwargs["impersonate"] = config.impersonate
    if config.http_version:
        request_kwargs["http_version"] = config.http_version

    try:
        async with AsyncSession() as session:
            response = await asyncio.wait_for(
                session.get(url, **request_kwargs),
                timeout=config.timeout_s,
            )
    except asyncio.TimeoutError as e:
        raise FetchTimeoutError(url, config.timeout_s) from e
    except RequestsError as e:
        if _is_curl_timeout(e):
            raise FetchTimeoutError(url, config.timeout_s) from e
        raise FetchNetworkError(url, e) from e

    status_code = int(response.status_code)
    if not 200 <= status_code < 300:
        raise FetchHTTPError(url, status_code, response.reason or "")
    return response


async def fetch_text(url: str, config: FetchConfig) -> str:
    response = await http_get(url, config)
    return response.text or ""
