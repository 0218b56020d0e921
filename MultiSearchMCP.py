"""
MultiSearch MCP Server - Web Search & Fetch

- web_search: 同时查询 Brave、搜狗、DuckDuckGo，合并去重并过滤广告
- web_fetch: 抓取网页内容，可选简化为 Markdown
- 支持 --proxy 参数（或 HTTPS_PROXY 等环境变量）让所有请求走本地代理
- 支持 stdio 与 streamable-http 两种传输方式
"""

import argparse
import logging
import os
import sys
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv()

from mcp.server.fastmcp import FastMCP

import search_core
from http_client import REQUEST_TIMEOUT_S, FetchConfig, proxy_from_env

# ============================================================================
# Logging
# ============================================================================
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger(__name__)

# ============================================================================
# 全局配置
# ============================================================================
parser = argparse.ArgumentParser(description="MultiSearch MCP Server")
parser.add_argument(
    "--proxy",
    type=str,
    default=None,
    help="HTTP/HTTPS 代理，例如: http://127.0.0.1:7890（未设置时读取 HTTPS_PROXY / HTTP_PROXY / ALL_PROXY）",
)
parser.add_argument(
    "--transport",
    type=str,
    choices=("stdio", "streamable-http"),
    default=os.getenv("MCP_TRANSPORT", "stdio"),
    help="MCP 传输方式，默认: stdio",
)
parser.add_argument(
    "--host",
    type=str,
    default=os.getenv("HOST", "127.0.0.1"),
    help="streamable-http 模式监听地址",
)
parser.add_argument(
    "--port",
    type=int,
    default=int(os.getenv("PORT", "8000")),
    help="streamable-http 模式监听端口",
)

CLI_ARGS, _ = parser.parse_known_args()
PROXY_CONFIG = CLI_ARGS.proxy

# 兼容处理：MCP 客户端可能把 "--arg value" 合并成一个字符串
for arg in sys.argv[1:]:
    if arg.startswith("--proxy ") and PROXY_CONFIG is None:
        PROXY_CONFIG = arg.split(" ", 1)[1].strip()

if not PROXY_CONFIG:
    PROXY_CONFIG = proxy_from_env()

FETCH_CONFIG = FetchConfig(timeout_s=REQUEST_TIMEOUT_S, proxy=PROXY_CONFIG)

mcp = FastMCP("multisearch", host=CLI_ARGS.host, port=CLI_ARGS.port)


# ============================================================================
# MCP 工具
# ============================================================================
@mcp.tool()
async def web_search(query: str, num_results: int = search_core.DEFAULT_NUM_RESULTS) -> List[Dict[str, str]]:
    """Search the web using multiple search engines (Brave, Sogou, DuckDuckGo) simultaneously.
    Results are deduplicated and ads are filtered out.
    Returns an array of search results with url, title, and summary.

    Args:
        query: Search keywords separated by spaces, e.g. 'deno mcp server'
        num_results: Number of results to return (default: 8)
    """
    results = await search_core.web_search(query, num_results, config=FETCH_CONFIG)
    return [item.to_dict() for item in results]


@mcp.tool()
async def web_fetch(
    url: str,
    max_char_size: int = search_core.DEFAULT_MAX_CHAR_SIZE,
    simplify: bool = True,
) -> str:
    """Fetch a web page and return its content.
    When simplify is enabled (default), removes useless HTML tags (script, style, iframe, etc.),
    extracts the main content, and converts it to clean Markdown format.
    Has a 10-second timeout.

    Args:
        url: The URL to fetch
        max_char_size: Maximum character size of the returned content (default: 50000)
        simplify: Whether to simplify the content by removing useless tags and converting to Markdown (default: true)
    """
    return await search_core.web_fetch(url, max_char_size, simplify, config=FETCH_CONFIG)


def main():
    logger.info("MultiSearch MCP Server 启动中...")
    if PROXY_CONFIG:
        logger.info(f"使用代理: {PROXY_CONFIG}")

    if CLI_ARGS.transport == "streamable-http":
        logger.info(f"MCP endpoint: http://{CLI_ARGS.host}:{CLI_ARGS.port}/mcp")
    else:
        logger.info("等待 MCP 客户端连接...")
    mcp.run(transport=CLI_ARGS.transport)


if __name__ == "__main__":
    main()
