"""
web_search / web_fetch 实现

The MCP layer in MultiSearchMCP.py only validates arguments and forwards here.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from engines import ENGINES, Engine
from http_client import FetchConfig, FetchError, fetch_text, http_get
from merger import merge_and_deduplicate
from models import EngineOutcome, FetchedDocument, SearchItem
from page_content import limit_content_length, simplify_html

logger = logging.getLogger(__name__)

DEFAULT_NUM_RESULTS = 8
DEFAULT_MAX_CHAR_SIZE = 50_000

Fetcher = Callable[[str, FetchConfig], Awaitable[str]]


# ============================================================================
# 多引擎并发搜索
# ============================================================================
async def _query_engine(
    engine: Engine,
    query: str,
    config: FetchConfig,
    fetch: Fetcher,
) -> EngineOutcome:
    url = engine.search_url(query)
    try:
        html = await fetch(url, config)
    except FetchError as e:
        logger.warning("[%s] 搜索请求失败: %s", engine.name, e)
        return EngineOutcome(engine=engine.name, items=[], error=str(e))
    except Exception as e:
        logger.error("[%s] 搜索过程发生错误: %s", engine.name, e)
        return EngineOutcome(engine=engine.name, items=[], error=str(e))

    items = engine.parse(html)
    logger.info("[%s] 解析到 %s 个结果", engine.name, len(items))
    return EngineOutcome(engine=engine.name, items=items)


async def search_engines(
    query: str,
    config: FetchConfig,
    engines: Sequence[Engine] = ENGINES,
    fetch: Fetcher = fetch_text,
) -> List[EngineOutcome]:
    """Query every engine concurrently and wait for all of them to settle.

    A failing engine yields an outcome with an empty item list; it never cancels
    or delays the others beyond the shared wait. Outcomes keep ``engines`` order.
    """
    tasks = [_query_engine(engine, query, config, fetch) for engine in engines]
    settled = await asyncio.gather(*tasks, return_exceptions=True)

    outcomes: List[EngineOutcome] = []
    for engine, result in zip(engines, settled):
        if isinstance(result, BaseException):
            logger.error("[%s] 搜索任务异常: %s", engine.name, result)
            outcomes.append(EngineOutcome(engine=engine.name, items=[], error=str(result)))
        else:
            outcomes.append(result)
    return outcomes


async def web_search(
    query: str,
    num_results: int = DEFAULT_NUM_RESULTS,
    *,
    config: Optional[FetchConfig] = None,
    engines: Sequence[Engine] = ENGINES,
    fetch: Fetcher = fetch_text,
) -> List[SearchItem]:
    if not query or not query.strip():
        raise ValueError("query parameter is required and cannot be empty.")

    logger.info(f"收到搜索请求: query='{query}', num_results={num_results}")
    outcomes = await search_engines(query, config or FetchConfig(), engines, fetch)
    for outcome in outcomes:
        if outcome.ok:
            logger.info(f"[web_search] {outcome.engine}: {len(outcome.items)} results")
        else:
            logger.info(f"[web_search] {outcome.engine}: failed - {outcome.error}")

    merged = merge_and_deduplicate([outcome.items for outcome in outcomes], num_results)
    logger.info(f"搜索完成，合并后共 {len(merged)} 个结果")
    return merged


# ============================================================================
# 网页抓取
# ============================================================================
async def fetch_document(
    url: str,
    config: FetchConfig,
    max_char_size: int = DEFAULT_MAX_CHAR_SIZE,
    simplify: bool = True,
) -> FetchedDocument:
    response = await http_get(url, config)
    content_type = response.headers.get("content-type", "") or ""
    raw_body = response.text or ""

    if "html" not in content_type.lower() or not simplify:
        final_text, _ = limit_content_length(raw_body, max_char_size)
    else:
        # simplification is CPU bound, keep it off the event loop
        loop = asyncio.get_running_loop()
        simplified = await loop.run_in_executor(None, simplify_html, raw_body)
        final_text, _ = limit_content_length(simplified, max_char_size)

    return FetchedDocument(content_type=content_type, raw_body=raw_body, final_text=final_text)


async def web_fetch(
    url: str,
    max_char_size: int = DEFAULT_MAX_CHAR_SIZE,
    simplify: bool = True,
    *,
    config: Optional[FetchConfig] = None,
) -> str:
    if not url or not url.strip():
        raise ValueError("url parameter is required and cannot be empty.")

    url = url.strip()
    logger.info(f"[web_fetch] url='{url}', max_char_size={max_char_size}, simplify={simplify}")
    try:
        document = await fetch_document(url, config or FetchConfig(), max_char_size, simplify)
    except FetchError as e:
        logger.error(f"抓取失败 {url}: {e}")
        raise
    return document.final_text
